"""Type definitions for the verification module."""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from docverify.eligibility.types import EligibilityOutcome
from docverify.mrz.types import MRZRecord
from docverify.validation.types import ExtractedFields, ValidationCheck


@dataclass(frozen=True)
class VerificationResult:
    """Terminal result of one verification request.

    Attributes:
        overall_confidence: Extraction confidence (0-100)
        document_type: Human-readable document label (e.g. "Passport")
        extracted_fields: Free-text fields, backfilled from the MRZ
        mrz_record: Decoded MRZ, None if no MRZ was found
        validation_checks: Checks in rule evaluation order
        eligibility: Eligibility decision
        recommended_actions: Headline action and supporting items
        summary: One-paragraph summary
    """

    overall_confidence: int
    document_type: str
    extracted_fields: ExtractedFields
    mrz_record: Optional[MRZRecord]
    validation_checks: List[ValidationCheck]
    eligibility: EligibilityOutcome
    recommended_actions: List[str]
    summary: str

    def is_eligible(self) -> bool:
        return self.eligibility.eligible

    def to_dict(self) -> Dict[str, Any]:
        """Render the result with camelCase keys for JSON transport."""
        mrz: Optional[Dict[str, Any]] = None
        if self.mrz_record is not None:
            record = self.mrz_record
            mrz = {
                "documentType": record.document_type,
                "issuingCountry": record.issuing_country,
                "documentNumber": record.document_number,
                "dateOfBirth": record.date_of_birth,
                "expiryDate": record.expiry_date,
                "nationality": record.nationality,
                "surname": record.surname,
                "givenNames": record.given_names,
                "sex": record.sex,
                "checksumValid": record.checksum_valid,
                "layout": record.layout.value,
                "checksumsVerified": record.checksums_verified,
            }

        return {
            "overallConfidence": self.overall_confidence,
            "documentType": self.document_type,
            "extractedFields": {
                name.value: {"value": field.value, "confidence": field.confidence}
                for name, field in self.extracted_fields.items()
            },
            "mrzData": mrz,
            "validationChecks": [
                {
                    "field": check.field,
                    "status": check.status.value,
                    "message": check.message,
                }
                for check in self.validation_checks
            ],
            "visaEligibility": {
                "eligible": self.eligibility.eligible,
                "confidence": self.eligibility.confidence,
                "reasons": list(self.eligibility.reasons),
            },
            "recommendedActions": list(self.recommended_actions),
            "summary": self.summary,
        }
