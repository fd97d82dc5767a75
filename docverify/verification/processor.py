"""Main verification processor with 5-stage pipeline.

This module orchestrates the complete verification workflow:
    1. MRZ EXTRACTION: candidate line selection + TD3/TD1 decoding
    2. FIELD ENRICHMENT: backfill missing free-text fields from the MRZ
    3. CROSS-FIELD VALIDATION: MRZ vs free text vs applicant vs policy
    4. ELIGIBILITY ASSESSMENT: decision + confidence + reasons
    5. RECOMMENDATION: actions + summary

OCR and free-text field extraction happen upstream; the processor only
consumes their output.

Example:
    >>> from docverify.verification import VerificationProcessor
    >>> processor = VerificationProcessor()
    >>> result = processor.verify(ocr_text, ocr_confidence=87.0, policy=policy)
    >>> if result.is_eligible():
    ...     print(result.summary)
"""

import logging
import time
from datetime import date
from pathlib import Path
from typing import Dict, Optional

from docverify.eligibility.assessor import assess_eligibility
from docverify.eligibility.recommender import generate_recommendations, generate_summary
from docverify.mrz.decoder import decode_mrz
from docverify.mrz.selector import extract_mrz_lines
from docverify.mrz.types import MRZRecord
from docverify.utils.evaluation import average_confidence, round_half_up
from docverify.validation.cross_validator import validate_document
from docverify.validation.types import (
    ApplicantForm,
    EligibilityPolicy,
    ExtractedField,
    ExtractedFields,
    FieldName,
)

from .config_loader import Config, get_default_config, load_config
from .types import VerificationResult

logger = logging.getLogger(__name__)

UNKNOWN_DOCUMENT = "Unknown Document"

# MRZ document code prefix -> label
MRZ_DOCUMENT_TYPES = {
    "P": "Passport",
    "I": "ID Card",
    "V": "Visa",
}

# Keywords searched in lowercase OCR text when the MRZ is silent, in order
TEXT_DOCUMENT_TYPES = (
    (("passport",), "Passport"),
    (("visa",), "Visa"),
    (("identity", "national id"), "National ID"),
    (("driving", "driver", "licence"), "Driving Licence"),
)


class VerificationProcessor:
    """Main verification class with 5-stage pipeline.

    The processor holds only its immutable configuration, so one instance
    can serve concurrent requests.

    Args:
        config_path: Optional path to config YAML file. If None, uses default config.

    Attributes:
        config: Full configuration object
    """

    def __init__(self, config_path: Optional[Path] = None):
        """Initialize verification processor with configuration.

        Args:
            config_path: Optional path to config YAML. If None, uses defaults.
        """
        if config_path is None:
            self.config: Config = get_default_config()
        else:
            self.config: Config = load_config(config_path)

        logger.info(
            f"VerificationProcessor initialized: "
            f"century_pivot={self.config.verification.mrz.century_pivot}, "
            f"name_thresholds=({self.config.verification.matching.name_pass_threshold}, "
            f"{self.config.verification.matching.name_warning_threshold})"
        )

    def verify(
        self,
        ocr_text: str,
        ocr_confidence: float,
        extracted_fields: Optional[ExtractedFields] = None,
        applicant_form: Optional[ApplicantForm] = None,
        policy: Optional[EligibilityPolicy] = None,
        today: Optional[date] = None,
    ) -> VerificationResult:
        """Verify a document through the 5-stage pipeline.

        Args:
            ocr_text: Raw OCR text of the document
            ocr_confidence: OCR engine confidence (0-100), used only when no
                field confidences exist
            extracted_fields: Fields from free-text extraction
            applicant_form: Applicant's self-reported data
            policy: Eligibility policy
            today: Evaluation date. Defaults to the current local date.

        Returns:
            VerificationResult

        Raises:
            ValueError: If ocr_confidence is outside [0, 100]
        """
        if not 0 <= ocr_confidence <= 100:
            raise ValueError(
                f"OCR confidence must be within [0, 100], got {ocr_confidence}"
            )

        start_time = time.perf_counter()
        settings = self.config.verification

        # ═══════════════════════════════════════════════════════════════
        # STAGE 1: MRZ EXTRACTION
        # ═══════════════════════════════════════════════════════════════
        mrz_lines = extract_mrz_lines(
            ocr_text,
            min_length=settings.mrz.min_line_length,
            max_length=settings.mrz.max_line_length,
        )
        mrz_record = decode_mrz(mrz_lines, century_pivot=settings.mrz.century_pivot)
        if mrz_record is None:
            logger.info("No MRZ data found")

        # ═══════════════════════════════════════════════════════════════
        # STAGE 2: FIELD ENRICHMENT
        # ═══════════════════════════════════════════════════════════════
        fields = enrich_fields(
            extracted_fields or {}, mrz_record, settings.mrz.field_confidence
        )
        document_type = determine_document_type(ocr_text, mrz_record)
        overall_confidence = calculate_overall_confidence(fields, ocr_confidence)

        # ═══════════════════════════════════════════════════════════════
        # STAGE 3: CROSS-FIELD VALIDATION
        # ═══════════════════════════════════════════════════════════════
        checks = validate_document(
            fields,
            mrz_record,
            applicant_form,
            policy,
            today=today,
            name_pass_threshold=settings.matching.name_pass_threshold,
            name_warning_threshold=settings.matching.name_warning_threshold,
        )

        # ═══════════════════════════════════════════════════════════════
        # STAGE 4: ELIGIBILITY ASSESSMENT
        # ═══════════════════════════════════════════════════════════════
        eligibility = assess_eligibility(checks, applicant_form, policy)

        # ═══════════════════════════════════════════════════════════════
        # STAGE 5: RECOMMENDATION
        # ═══════════════════════════════════════════════════════════════
        recommendations = generate_recommendations(
            checks,
            eligibility,
            overall_confidence,
            high=settings.confidence.high,
            moderate=settings.confidence.moderate,
        )
        summary = generate_summary(
            document_type,
            eligibility,
            overall_confidence,
            fields,
            high=settings.confidence.high,
            moderate=settings.confidence.moderate,
        )

        processing_time_ms = (time.perf_counter() - start_time) * 1000
        logger.info(
            f"Verified {document_type}: eligible={eligibility.eligible}, "
            f"overall_confidence={overall_confidence}%, "
            f"checks={len(checks)}, time={processing_time_ms:.1f}ms"
        )

        return VerificationResult(
            overall_confidence=overall_confidence,
            document_type=document_type,
            extracted_fields=fields,
            mrz_record=mrz_record,
            validation_checks=checks,
            eligibility=eligibility,
            recommended_actions=recommendations,
            summary=summary,
        )

    def get_processing_stats(self) -> dict:
        """Get processor statistics.

        Returns:
            Dictionary with processor configuration
        """
        settings = self.config.verification
        return {
            "mrz_line_length": {
                "min": settings.mrz.min_line_length,
                "max": settings.mrz.max_line_length,
            },
            "century_pivot": settings.mrz.century_pivot,
            "mrz_field_confidence": settings.mrz.field_confidence,
            "name_pass_threshold": settings.matching.name_pass_threshold,
            "name_warning_threshold": settings.matching.name_warning_threshold,
            "confidence_bands": {
                "high": settings.confidence.high,
                "moderate": settings.confidence.moderate,
            },
        }


def enrich_fields(
    fields: ExtractedFields,
    mrz_record: Optional[MRZRecord],
    mrz_confidence: float,
) -> Dict[FieldName, ExtractedField]:
    """Backfill fields missing from free-text extraction with MRZ values.

    Extracted values are never overwritten and empty MRZ values are never
    added.

    Args:
        fields: Free-text extracted fields
        mrz_record: Decoded MRZ, if any
        mrz_confidence: Confidence assigned to backfilled fields

    Returns:
        New field dictionary
    """
    enriched: Dict[FieldName, ExtractedField] = dict(fields)
    if mrz_record is None:
        return enriched

    candidates = (
        (FieldName.DOCUMENT_NUMBER, mrz_record.document_number),
        (FieldName.FULL_NAME, mrz_record.full_name),
        (FieldName.DATE_OF_BIRTH, mrz_record.date_of_birth),
        (FieldName.EXPIRY_DATE, mrz_record.expiry_date),
        (FieldName.NATIONALITY, mrz_record.nationality),
        (FieldName.SEX, mrz_record.sex),
    )
    for name, value in candidates:
        if name not in enriched and value:
            enriched[name] = ExtractedField(value=value, confidence=mrz_confidence)
            logger.debug(f"Backfilled {name.value} from MRZ")

    return enriched


def determine_document_type(text: str, mrz_record: Optional[MRZRecord]) -> str:
    """Label the document from its MRZ document code, else from keywords.

    Example:
        >>> determine_document_type("REPUBLIC OF UTOPIA PASSPORT", None)
        'Passport'
    """
    if mrz_record is not None and mrz_record.document_type:
        label = MRZ_DOCUMENT_TYPES.get(mrz_record.document_type[0])
        if label is not None:
            return label

    lowered = text.lower()
    for keywords, label in TEXT_DOCUMENT_TYPES:
        if any(keyword in lowered for keyword in keywords):
            return label

    return UNKNOWN_DOCUMENT


def calculate_overall_confidence(
    fields: ExtractedFields, ocr_confidence: float
) -> int:
    """Rounded mean of field confidences, or the OCR confidence if no field exists."""
    if fields:
        return round_half_up(average_confidence(f.confidence for f in fields.values()))
    return round_half_up(ocr_confidence)
