"""Integration tests for VerificationProcessor.

Tests the complete 5-stage pipeline with various scenarios:
    - Stage 1: MRZ extraction (TD3, TD1, none)
    - Stage 2: Field enrichment from the MRZ
    - Stage 3-4: Validation and eligibility with applicant and policy
    - Stage 5: Recommendations and summary
"""

from datetime import date

import pytest
import yaml

from docverify.mrz.decoder import decode_mrz
from docverify.mrz.types import MRZLayout
from docverify.validation.types import (
    ApplicantForm,
    CheckStatus,
    EligibilityPolicy,
    ExtractedField,
    FieldName,
)
from docverify.verification.processor import (
    UNKNOWN_DOCUMENT,
    VerificationProcessor,
    calculate_overall_confidence,
    determine_document_type,
    enrich_fields,
)

# ═══════════════════════════════════════════════════════════════════════════
# FIXTURES
# ═══════════════════════════════════════════════════════════════════════════


@pytest.fixture
def processor():
    """Create VerificationProcessor with bundled config."""
    return VerificationProcessor()


@pytest.fixture
def applicant():
    return ApplicantForm(
        name="ANNA MARIA ERIKSSON",
        date_of_birth="1974-08-12",
        passport_number="L898902C3",
        nationality="UTO",
        intended_visa_type="tourist",
    )


@pytest.fixture
def policy():
    return EligibilityPolicy(
        min_age=18,
        max_age=65,
        allowed_nationalities=["UTO", "GBR"],
        blocked_nationalities=["XXX"],
        min_passport_validity=6,
    )


# ═══════════════════════════════════════════════════════════════════════════
# TEST INITIALIZATION
# ═══════════════════════════════════════════════════════════════════════════


class TestProcessorInitialization:
    """Test VerificationProcessor initialization."""

    def test_default_initialization(self, processor):
        assert processor.config.verification.mrz.century_pivot == 50

    def test_initialization_with_config(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text(yaml.safe_dump({"confidence": {"high": 95}}))

        processor = VerificationProcessor(config_path=config_file)

        assert processor.config.verification.confidence.high == 95

    def test_missing_config(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            VerificationProcessor(config_path=tmp_path / "missing.yaml")

    def test_processing_stats(self, processor):
        stats = processor.get_processing_stats()

        assert stats["mrz_line_length"] == {"min": 28, "max": 44}
        assert stats["century_pivot"] == 50
        assert stats["confidence_bands"] == {"high": 80, "moderate": 60}


# ═══════════════════════════════════════════════════════════════════════════
# TEST END-TO-END
# ═══════════════════════════════════════════════════════════════════════════


class TestVerify:
    """Test the full verification pipeline."""

    def test_valid_passport(self, processor, valid_ocr_text, today):
        result = processor.verify(valid_ocr_text, ocr_confidence=87.0, today=today)

        assert result.document_type == "Passport"
        assert result.mrz_record is not None
        assert result.mrz_record.layout == MRZLayout.TD3
        assert result.overall_confidence == 90
        assert len(result.validation_checks) == 6
        assert all(c.status == CheckStatus.PASS for c in result.validation_checks)
        assert result.is_eligible()
        assert result.eligibility.confidence == 100
        assert result.recommended_actions == [
            "APPROVE: All checks passed with high confidence",
            "Proceed with visa processing",
        ]
        assert result.summary == (
            "Document verification complete for Passport #L898902C3 "
            "(ANNA MARIA ERIKSSON, UTO). Status: ELIGIBLE with HIGH confidence (90%). "
            "All validation checks passed."
        )

    def test_with_applicant_and_policy(
        self, processor, valid_ocr_text, applicant, policy, today
    ):
        result = processor.verify(
            valid_ocr_text,
            ocr_confidence=87.0,
            applicant_form=applicant,
            policy=policy,
            today=today,
        )

        assert [c.field for c in result.validation_checks][-2:] == [
            "Passport Number Match",
            "Date of Birth Match",
        ]
        assert result.is_eligible()

    def test_policy_violations(self, processor, valid_ocr_text, today):
        policy = EligibilityPolicy(max_age=40, blocked_nationalities=["UTO"])

        result = processor.verify(
            valid_ocr_text, ocr_confidence=87.0, policy=policy, today=today
        )

        assert not result.is_eligible()
        assert result.eligibility.reasons == [
            "Age Requirement: Applicant is 51 years old, maximum age is 40",
            "Nationality: Nationality UTO is blocked",
        ]
        assert result.recommended_actions == [
            "REJECT APPLICATION: Critical validation failures detected",
            "- Address issue: Age Requirement",
            "- Address issue: Nationality",
        ]
        assert result.summary.endswith("Status: NOT ELIGIBLE with HIGH confidence (90%). Failed checks: 2.")

    def test_expired_specimen_rejected(self, processor, specimen_td3_lines, today):
        result = processor.verify("\n".join(specimen_td3_lines), ocr_confidence=90, today=today)

        assert not result.is_eligible()
        assert "Expiry Date: Document has expired" in result.eligibility.reasons
        assert result.recommended_actions[0] == (
            "REJECT APPLICATION: Critical validation failures detected"
        )

    def test_extracted_fields_take_precedence(self, processor, valid_ocr_text, today):
        fields = {
            FieldName.FULL_NAME: ExtractedField("ANNA ERIKSSON", 70),
            FieldName.DOCUMENT_NUMBER: ExtractedField("L898902C4", 60),
        }

        result = processor.verify(
            valid_ocr_text, ocr_confidence=87.0, extracted_fields=fields, today=today
        )

        assert result.extracted_fields[FieldName.FULL_NAME].value == "ANNA ERIKSSON"
        assert result.extracted_fields[FieldName.NATIONALITY].confidence == 90
        # (70 + 60 + 4 * 90) / 6 = 81.67
        assert result.overall_confidence == 82
        assert result.is_eligible()
        assert result.eligibility.confidence == 83  # 4 pass, 2 warning
        assert result.recommended_actions == [
            "APPROVE: All checks passed with high confidence",
            "Proceed with visa processing",
        ]

    def test_no_mrz_low_confidence(self, processor, today):
        result = processor.verify(
            "DRIVING LICENCE\nName: JOHN SMITH", ocr_confidence=55.4, today=today
        )

        assert result.mrz_record is None
        assert result.document_type == "Driving Licence"
        assert result.overall_confidence == 55
        assert result.validation_checks == []
        assert result.is_eligible()
        assert result.eligibility.confidence == 0
        assert result.recommended_actions == [
            "MANUAL REVIEW REQUIRED: Low confidence in document extraction",
            "Request higher quality document images",
        ]
        assert result.summary == (
            "Document verification complete for Driving Licence #Unknown "
            "(Unknown, Unknown). Status: ELIGIBLE with LOW confidence (55%). "
            "All validation checks passed. Manual review recommended."
        )

    def test_td1_card(self, processor, specimen_td1_lines):
        result = processor.verify(
            "\n".join(specimen_td1_lines), ocr_confidence=80, today=date(2010, 1, 1)
        )

        assert result.document_type == "ID Card"
        assert result.mrz_record.layout == MRZLayout.TD1
        assert result.mrz_record.checksums_verified is False
        assert result.is_eligible()

    def test_td1_corrupt_date_fails(self, processor, specimen_td1_lines):
        line2 = specimen_td1_lines[1]
        tampered = line2[:8] + "12O415" + line2[14:]

        result = processor.verify(
            "\n".join([specimen_td1_lines[0], tampered, specimen_td1_lines[2]]),
            ocr_confidence=80,
            today=date(2010, 1, 1),
        )

        assert result.extracted_fields[FieldName.EXPIRY_DATE].value == "2012-O4-15"
        assert not result.is_eligible()
        assert result.eligibility.reasons[:2] == [
            "Expiry Date: Date format is invalid",
            "Expiry Date: Unable to parse expiry date",
        ]

    def test_configured_thresholds(self, tmp_path, valid_ocr_text, today):
        config_file = tmp_path / "config.yaml"
        config_file.write_text(yaml.safe_dump({"confidence": {"high": 95}}))
        processor = VerificationProcessor(config_path=config_file)

        result = processor.verify(valid_ocr_text, ocr_confidence=87.0, today=today)

        assert result.recommended_actions == [
            "MANUAL REVIEW RECOMMENDED: Moderate confidence level"
        ]
        assert "with MODERATE confidence (90%)" in result.summary

    @pytest.mark.parametrize("confidence", [-0.1, 100.1])
    def test_invalid_ocr_confidence(self, processor, valid_ocr_text, confidence):
        with pytest.raises(ValueError, match="OCR confidence"):
            processor.verify(valid_ocr_text, ocr_confidence=confidence)

    def test_to_dict(self, processor, valid_ocr_text, today):
        data = processor.verify(valid_ocr_text, ocr_confidence=87.0, today=today).to_dict()

        assert set(data) == {
            "overallConfidence",
            "documentType",
            "extractedFields",
            "mrzData",
            "validationChecks",
            "visaEligibility",
            "recommendedActions",
            "summary",
        }
        assert data["mrzData"]["documentNumber"] == "L898902C3"
        assert data["mrzData"]["layout"] == "td3"
        assert data["extractedFields"]["fullName"] == {
            "value": "ANNA MARIA ERIKSSON",
            "confidence": 90,
        }
        assert data["validationChecks"][0] == {
            "field": "Date of Birth",
            "status": "pass",
            "message": "Date format is valid (ISO 8601)",
        }
        assert data["visaEligibility"]["eligible"] is True


# ═══════════════════════════════════════════════════════════════════════════
# TEST STAGE HELPERS
# ═══════════════════════════════════════════════════════════════════════════


class TestEnrichFields:
    """Test MRZ backfill."""

    def test_without_mrz(self):
        fields = {FieldName.SEX: ExtractedField("F", 80)}

        assert enrich_fields(fields, None, 90) == fields

    def test_backfills_missing_fields(self, valid_td3_lines):
        enriched = enrich_fields({}, decode_mrz(valid_td3_lines), 90)

        assert enriched == {
            FieldName.DOCUMENT_NUMBER: ExtractedField("L898902C3", 90),
            FieldName.FULL_NAME: ExtractedField("ANNA MARIA ERIKSSON", 90),
            FieldName.DATE_OF_BIRTH: ExtractedField("1974-08-12", 90),
            FieldName.EXPIRY_DATE: ExtractedField("2034-04-15", 90),
            FieldName.NATIONALITY: ExtractedField("UTO", 90),
            FieldName.SEX: ExtractedField("F", 90),
        }

    def test_does_not_mutate_input(self, valid_td3_lines):
        fields = {FieldName.SEX: ExtractedField("M", 40)}

        enriched = enrich_fields(fields, decode_mrz(valid_td3_lines), 90)

        assert enriched[FieldName.SEX] == ExtractedField("M", 40)
        assert list(fields) == [FieldName.SEX]

    def test_skips_empty_mrz_values(self, specimen_td1_lines):
        truncated = [specimen_td1_lines[0], specimen_td1_lines[1][:10], specimen_td1_lines[2]]

        enriched = enrich_fields({}, decode_mrz(truncated), 90)

        assert FieldName.EXPIRY_DATE not in enriched
        assert FieldName.NATIONALITY not in enriched
        assert enriched[FieldName.DATE_OF_BIRTH].value == "1974-08-12"


class TestDetermineDocumentType:
    """Test document labelling."""

    def test_from_mrz(self, valid_td3_lines, specimen_td1_lines):
        assert determine_document_type("", decode_mrz(valid_td3_lines)) == "Passport"
        assert determine_document_type("", decode_mrz(specimen_td1_lines)) == "ID Card"

    @pytest.mark.parametrize(
        "text,label",
        [
            ("REPUBLIC OF UTOPIA PASSPORT", "Passport"),
            ("Entry Visa", "Visa"),
            ("National ID Card", "National ID"),
            ("Identity card", "National ID"),
            ("Driver's Licence", "Driving Licence"),
            ("Passport and visa", "Passport"),
            ("Library card", UNKNOWN_DOCUMENT),
        ],
    )
    def test_from_text(self, text, label):
        assert determine_document_type(text, None) == label


class TestCalculateOverallConfidence:
    """Test overall confidence aggregation."""

    def test_mean_of_fields(self):
        fields = {
            FieldName.SEX: ExtractedField("F", 70),
            FieldName.NATIONALITY: ExtractedField("UTO", 75),
        }

        assert calculate_overall_confidence(fields, 10) == 73

    def test_falls_back_to_ocr_confidence(self):
        assert calculate_overall_confidence({}, 87.5) == 88
