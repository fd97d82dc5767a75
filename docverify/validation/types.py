"""Type definitions for the cross-field validation module.

This module defines the extracted-field map consumed by the validator, the
validation checks it produces and the externally supplied applicant form
and eligibility policy.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, Field, model_validator
from pydantic.alias_generators import to_camel


class CheckStatus(Enum):
    """Outcome of a single validation rule."""

    PASS = "pass"
    WARNING = "warning"
    FAIL = "fail"


class FieldName(Enum):
    """Closed set of fields a free-text extractor may produce."""

    DOCUMENT_NUMBER = "documentNumber"
    FULL_NAME = "fullName"
    DATE_OF_BIRTH = "dateOfBirth"
    DATE_OF_ISSUE = "dateOfIssue"
    EXPIRY_DATE = "expiryDate"
    NATIONALITY = "nationality"
    ISSUING_COUNTRY = "issuingCountry"
    SEX = "sex"
    PLACE_OF_BIRTH = "placeOfBirth"


@dataclass(frozen=True)
class ExtractedField:
    """A value paired with its extraction confidence.

    Attributes:
        value: Extracted text
        confidence: Extraction confidence (0-100)
    """

    value: str
    confidence: float

    def __post_init__(self) -> None:
        if not 0 <= self.confidence <= 100:
            raise ValueError(
                f"Confidence must be within [0, 100], got {self.confidence}"
            )


ExtractedFields = Mapping[FieldName, ExtractedField]


@dataclass(frozen=True)
class ValidationCheck:
    """Result of one validation rule.

    Attributes:
        field: Human-readable label of the checked field (e.g. "Expiry Date")
        status: PASS, WARNING or FAIL
        message: Human-readable explanation
    """

    field: str
    status: CheckStatus
    message: str

    def is_pass(self) -> bool:
        return self.status == CheckStatus.PASS

    def is_warning(self) -> bool:
        return self.status == CheckStatus.WARNING

    def is_fail(self) -> bool:
        return self.status == CheckStatus.FAIL


def field_value(fields: ExtractedFields, name: FieldName) -> Optional[str]:
    """Return the value of an extracted field, or None if absent or empty."""
    extracted = fields.get(name)
    if extracted is None or not extracted.value:
        return None
    return extracted.value


def coerce_extracted_fields(raw: Mapping[str, Any]) -> Dict[FieldName, ExtractedField]:
    """Build a typed field map from a plain mapping.

    Args:
        raw: Mapping of camelCase field name to {"value": ..., "confidence": ...}
            or to an ExtractedField

    Returns:
        Dictionary keyed by FieldName

    Raises:
        ValueError: If a field name is unknown or an entry is malformed

    Example:
        >>> fields = coerce_extracted_fields(
        ...     {"documentNumber": {"value": "L898902C3", "confidence": 75}}
        ... )
        >>> fields[FieldName.DOCUMENT_NUMBER].value
        'L898902C3'
    """
    if not isinstance(raw, Mapping):
        raise ValueError(
            f"Extracted fields must be a mapping, got {type(raw).__name__}"
        )

    fields: Dict[FieldName, ExtractedField] = {}
    for key, entry in raw.items():
        try:
            name = FieldName(key)
        except ValueError as e:
            raise ValueError(f"Unknown extracted field: {key}") from e

        if isinstance(entry, ExtractedField):
            fields[name] = entry
            continue
        try:
            value = entry["value"]
            confidence = float(entry["confidence"])
        except (KeyError, TypeError) as e:
            raise ValueError(f"Malformed extracted field '{key}': {entry!r}") from e
        if value is None:
            raise ValueError(f"Extracted field '{key}' has no value")
        fields[name] = ExtractedField(value=str(value), confidence=confidence)
    return fields


class ApplicantForm(BaseModel):
    """Identity data self-reported by the applicant.

    Accepts both snake_case and camelCase keys (e.g. "passportNumber").
    """

    name: str
    date_of_birth: str
    passport_number: str
    nationality: str
    intended_visa_type: str

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "frozen": True,
    }


class EligibilityPolicy(BaseModel):
    """Caller-supplied constraints evaluated against extracted data.

    Attributes:
        min_age: Minimum applicant age in whole years
        max_age: Maximum applicant age in whole years
        allowed_nationalities: If set, nationality must be in this list
        blocked_nationalities: If set, nationality must not be in this list
        min_passport_validity: Minimum remaining document validity in months
        visa_type_requirements: Per-visa-type requirements, carried but not
            interpreted
    """

    min_age: Optional[int] = Field(default=None, ge=0)
    max_age: Optional[int] = Field(default=None, ge=0)
    allowed_nationalities: Optional[List[str]] = None
    blocked_nationalities: Optional[List[str]] = None
    min_passport_validity: Optional[int] = Field(default=None, ge=0)
    visa_type_requirements: Optional[Dict[str, Any]] = None

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "frozen": True,
    }

    @model_validator(mode="after")
    def _check_age_bounds(self) -> "EligibilityPolicy":
        if (
            self.min_age is not None
            and self.max_age is not None
            and self.min_age > self.max_age
        ):
            raise ValueError(
                f"min_age ({self.min_age}) must not exceed max_age ({self.max_age})"
            )
        return self
