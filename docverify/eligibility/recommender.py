"""Recommended actions and one-paragraph summary.

Maps the eligibility outcome and the overall extraction confidence to an
actionable recommendation:

    - NOT ELIGIBLE                       -> REJECT APPLICATION
    - overall < 60                       -> MANUAL REVIEW REQUIRED
    - overall < 80 or eligibility < 80   -> MANUAL REVIEW RECOMMENDED
    - otherwise                          -> APPROVE
"""

from typing import List, Sequence

from docverify.utils.constants import HIGH_CONFIDENCE, MODERATE_CONFIDENCE
from docverify.validation.types import (
    ExtractedFields,
    FieldName,
    ValidationCheck,
    field_value,
)

from .assessor import WARNING_PREFIX
from .types import ConfidenceBand, EligibilityOutcome

UNKNOWN = "Unknown"


def confidence_band(
    confidence: float,
    high: float = HIGH_CONFIDENCE,
    moderate: float = MODERATE_CONFIDENCE,
) -> ConfidenceBand:
    """Classify a 0-100 confidence into HIGH, MODERATE or LOW."""
    if confidence >= high:
        return ConfidenceBand.HIGH
    if confidence >= moderate:
        return ConfidenceBand.MODERATE
    return ConfidenceBand.LOW


def generate_recommendations(
    checks: Sequence[ValidationCheck],
    eligibility: EligibilityOutcome,
    overall_confidence: float,
    high: float = HIGH_CONFIDENCE,
    moderate: float = MODERATE_CONFIDENCE,
) -> List[str]:
    """Build the recommended action list.

    Args:
        checks: Validation checks
        eligibility: Outcome from assess_eligibility
        overall_confidence: Extraction confidence (0-100)
        high: Threshold for HIGH confidence
        moderate: Threshold for MODERATE confidence

    Returns:
        Headline action followed by supporting bullet items
    """
    recommendations: List[str] = []

    if not eligibility.eligible:
        recommendations.append("REJECT APPLICATION: Critical validation failures detected")
        recommendations.extend(
            f"- Address issue: {check.field}" for check in checks if check.is_fail()
        )
    elif overall_confidence < moderate:
        recommendations.append(
            "MANUAL REVIEW REQUIRED: Low confidence in document extraction"
        )
        recommendations.append("Request higher quality document images")
    elif overall_confidence < high or eligibility.confidence < high:
        recommendations.append("MANUAL REVIEW RECOMMENDED: Moderate confidence level")
        if any(check.is_warning() for check in checks):
            recommendations.append("Verify discrepancies manually")
    else:
        recommendations.append("APPROVE: All checks passed with high confidence")
        recommendations.append("Proceed with visa processing")

    return recommendations


def generate_summary(
    document_type: str,
    eligibility: EligibilityOutcome,
    overall_confidence: int,
    fields: ExtractedFields,
    high: float = HIGH_CONFIDENCE,
    moderate: float = MODERATE_CONFIDENCE,
) -> str:
    """Render the one-paragraph verification summary.

    Example:
        >>> generate_summary("Passport", outcome, 92, fields)
        'Document verification complete for Passport #L898902C3 (ANNA MARIA
        ERIKSSON, UTO). Status: ELIGIBLE with HIGH confidence (92%). All
        validation checks passed.'
    """
    name = field_value(fields, FieldName.FULL_NAME) or UNKNOWN
    document_number = field_value(fields, FieldName.DOCUMENT_NUMBER) or UNKNOWN
    nationality = field_value(fields, FieldName.NATIONALITY) or UNKNOWN

    status = "ELIGIBLE" if eligibility.eligible else "NOT ELIGIBLE"
    band = confidence_band(overall_confidence, high, moderate)

    if eligibility.eligible:
        outcome = "All validation checks passed."
    else:
        failures = [r for r in eligibility.reasons if not r.startswith(WARNING_PREFIX)]
        outcome = f"Failed checks: {len(failures)}."

    summary = (
        f"Document verification complete for {document_type} #{document_number} "
        f"({name}, {nationality}). Status: {status} with {band.value} confidence "
        f"({overall_confidence}%). {outcome}"
    )
    if overall_confidence < high:
        summary += " Manual review recommended."
    return summary
