"""Cross-Field Validation.

This module reconciles MRZ data, free-text extracted fields and applicant
data, and evaluates eligibility policy constraints.

Core Components:
    - types: Data structures (ExtractedField, ValidationCheck, policy, form)
    - similarity: Identifier normalization and edit-distance similarity
    - cross_validator: Rule evaluation producing ValidationChecks
"""

from .cross_validator import (
    calculate_age,
    check_age,
    check_applicant_date_of_birth,
    check_applicant_passport_number,
    check_date_format,
    check_document_number,
    check_expiry,
    check_mrz_checksum,
    check_name,
    check_nationality,
    check_remaining_validity,
    months_between,
    parse_date,
    validate_document,
)
from .similarity import levenshtein_distance, name_similarity, normalize_identifier
from .types import (
    ApplicantForm,
    CheckStatus,
    EligibilityPolicy,
    ExtractedField,
    ExtractedFields,
    FieldName,
    ValidationCheck,
    coerce_extracted_fields,
    field_value,
)

__all__ = [
    # Types
    "ApplicantForm",
    "CheckStatus",
    "EligibilityPolicy",
    "ExtractedField",
    "ExtractedFields",
    "FieldName",
    "ValidationCheck",
    "coerce_extracted_fields",
    "field_value",
    # Similarity
    "levenshtein_distance",
    "name_similarity",
    "normalize_identifier",
    # Rules
    "validate_document",
    "check_date_format",
    "check_expiry",
    "check_mrz_checksum",
    "check_document_number",
    "check_name",
    "check_applicant_passport_number",
    "check_applicant_date_of_birth",
    "check_age",
    "check_nationality",
    "check_remaining_validity",
    "parse_date",
    "calculate_age",
    "months_between",
]
