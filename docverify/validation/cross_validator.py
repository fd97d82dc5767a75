"""Cross-field validation across MRZ, free-text extraction and applicant data.

The validator runs a fixed sequence of rules. Each rule fires only when
its inputs are present and contributes at most one check, except the
policy rules which report each violated constraint separately:

    1. DATE FORMAT: birth and expiry dates are YYYY-MM-DD
    2. EXPIRY: document has not expired
    3. MRZ CHECKSUM: MRZ check digits verified
    4. DOCUMENT NUMBER: MRZ vs free text (mismatch is a warning)
    5. NAME: MRZ vs free text, edit-distance similarity
    6. APPLICANT FORM: passport number and birth date vs application
    7. POLICY AGE: minimum/maximum age
    8. POLICY NATIONALITY: allow/block lists
    9. POLICY VALIDITY: minimum remaining validity in months

Unparseable dates never raise; they are reported as FAIL checks.

Example:
    >>> checks = validate_document(fields, mrz_record, policy=policy)
    >>> [c.field for c in checks if c.is_fail()]
    ['Age Requirement']
"""

import logging
import re
from datetime import date
from typing import List, Optional

from dateutil.parser import isoparse
from dateutil.relativedelta import relativedelta

from docverify.mrz.types import MRZRecord
from docverify.utils.constants import NAME_PASS_THRESHOLD, NAME_WARNING_THRESHOLD

from .similarity import name_similarity, normalize_identifier
from .types import (
    ApplicantForm,
    CheckStatus,
    EligibilityPolicy,
    ExtractedFields,
    FieldName,
    ValidationCheck,
    field_value,
)

logger = logging.getLogger(__name__)

ISO_DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


def validate_document(
    fields: ExtractedFields,
    mrz_record: Optional[MRZRecord] = None,
    applicant_form: Optional[ApplicantForm] = None,
    policy: Optional[EligibilityPolicy] = None,
    today: Optional[date] = None,
    name_pass_threshold: float = NAME_PASS_THRESHOLD,
    name_warning_threshold: float = NAME_WARNING_THRESHOLD,
) -> List[ValidationCheck]:
    """Evaluate all applicable validation rules.

    Args:
        fields: Extracted fields keyed by FieldName
        mrz_record: Decoded MRZ, if any
        applicant_form: Applicant's self-reported data, if any
        policy: Eligibility policy, if any
        today: Evaluation date. Defaults to the current local date.
        name_pass_threshold: Name similarity above which the check passes
        name_warning_threshold: Name similarity above which a non-passing
            name check is a warning rather than a failure

    Returns:
        Checks in rule evaluation order
    """
    today = today or date.today()
    checks: List[ValidationCheck] = []

    date_of_birth = field_value(fields, FieldName.DATE_OF_BIRTH)
    expiry_date = field_value(fields, FieldName.EXPIRY_DATE)
    document_number = field_value(fields, FieldName.DOCUMENT_NUMBER)
    full_name = field_value(fields, FieldName.FULL_NAME)
    nationality = field_value(fields, FieldName.NATIONALITY)

    # Rules 1-2: date format and expiry
    if date_of_birth:
        checks.append(check_date_format(date_of_birth, "Date of Birth"))
    if expiry_date:
        checks.append(check_date_format(expiry_date, "Expiry Date"))
        checks.append(check_expiry(expiry_date, today))

    # Rules 3-5: MRZ consistency
    if mrz_record is not None:
        checks.append(check_mrz_checksum(mrz_record))
        if document_number and mrz_record.document_number:
            checks.append(check_document_number(document_number, mrz_record))
        if full_name:
            checks.append(
                check_name(
                    full_name,
                    mrz_record,
                    name_pass_threshold,
                    name_warning_threshold,
                )
            )

    # Rule 6: applicant form
    if applicant_form is not None:
        if document_number:
            checks.append(check_applicant_passport_number(document_number, applicant_form))
        if date_of_birth:
            checks.append(check_applicant_date_of_birth(date_of_birth, applicant_form))

    # Rules 7-9: policy
    if policy is not None:
        if date_of_birth:
            checks.extend(check_age(date_of_birth, policy, today))
        if nationality:
            checks.extend(check_nationality(nationality, policy))
        if expiry_date:
            checks.extend(check_remaining_validity(expiry_date, policy, today))

    logger.debug(
        f"Validation produced {len(checks)} check(s): "
        f"{sum(c.is_fail() for c in checks)} fail, "
        f"{sum(c.is_warning() for c in checks)} warning"
    )
    return checks


def check_date_format(value: str, label: str) -> ValidationCheck:
    """Rule 1: value must look like YYYY-MM-DD (format only, not calendar)."""
    if ISO_DATE_PATTERN.fullmatch(value):
        return ValidationCheck(label, CheckStatus.PASS, "Date format is valid (ISO 8601)")
    return ValidationCheck(label, CheckStatus.FAIL, "Date format is invalid")


def check_expiry(expiry_date: str, today: date) -> ValidationCheck:
    """Rule 2: document must not have expired before today."""
    parsed = parse_date(expiry_date)
    if parsed is None:
        logger.warning(f"Unable to parse expiry date '{expiry_date}'")
        return ValidationCheck("Expiry Date", CheckStatus.FAIL, "Unable to parse expiry date")
    if parsed < today:
        return ValidationCheck("Expiry Date", CheckStatus.FAIL, "Document has expired")
    return ValidationCheck("Expiry Date", CheckStatus.PASS, "Document is valid")


def check_mrz_checksum(mrz_record: MRZRecord) -> ValidationCheck:
    """Rule 3: MRZ check digits."""
    if mrz_record.checksum_valid:
        return ValidationCheck("MRZ Checksum", CheckStatus.PASS, "MRZ checksums are valid")
    return ValidationCheck("MRZ Checksum", CheckStatus.FAIL, "MRZ checksum validation failed")


def check_document_number(document_number: str, mrz_record: MRZRecord) -> ValidationCheck:
    """Rule 4: free-text document number vs MRZ. Free text is lower-trust,
    so a mismatch is only a warning."""
    if normalize_identifier(document_number) == normalize_identifier(mrz_record.document_number):
        return ValidationCheck("Document Number", CheckStatus.PASS, "Document number matches MRZ")
    return ValidationCheck(
        "Document Number", CheckStatus.WARNING, "Document number differs from MRZ"
    )


def check_name(
    full_name: str,
    mrz_record: MRZRecord,
    pass_threshold: float = NAME_PASS_THRESHOLD,
    warning_threshold: float = NAME_WARNING_THRESHOLD,
) -> ValidationCheck:
    """Rule 5: free-text name vs MRZ "given names + surname"."""
    similarity = name_similarity(
        normalize_identifier(full_name),
        normalize_identifier(f"{mrz_record.given_names} {mrz_record.surname}"),
    )
    if similarity > pass_threshold:
        status = CheckStatus.PASS
    elif similarity > warning_threshold:
        status = CheckStatus.WARNING
    else:
        status = CheckStatus.FAIL

    return ValidationCheck("Name", status, f"Name similarity: {similarity * 100:.0f}%")


def check_applicant_passport_number(
    document_number: str, applicant_form: ApplicantForm
) -> ValidationCheck:
    """Rule 6a: the application is a higher-trust source, mismatch fails."""
    if normalize_identifier(applicant_form.passport_number) == normalize_identifier(
        document_number
    ):
        return ValidationCheck(
            "Passport Number Match",
            CheckStatus.PASS,
            "Passport number matches application",
        )
    return ValidationCheck(
        "Passport Number Match",
        CheckStatus.FAIL,
        "Passport number does not match application",
    )


def check_applicant_date_of_birth(
    date_of_birth: str, applicant_form: ApplicantForm
) -> ValidationCheck:
    """Rule 6b: exact string equality."""
    if applicant_form.date_of_birth == date_of_birth:
        return ValidationCheck(
            "Date of Birth Match",
            CheckStatus.PASS,
            "Date of birth matches application",
        )
    return ValidationCheck(
        "Date of Birth Match",
        CheckStatus.FAIL,
        "Date of birth does not match application",
    )


def check_age(
    date_of_birth: str, policy: EligibilityPolicy, today: date
) -> List[ValidationCheck]:
    """Rule 7: one FAIL per violated age bound, nothing when compliant."""
    if policy.min_age is None and policy.max_age is None:
        return []

    birth_date = parse_date(date_of_birth)
    if birth_date is None:
        logger.warning(f"Unable to parse date of birth '{date_of_birth}'")
        return [
            ValidationCheck(
                "Age Requirement", CheckStatus.FAIL, "Unable to parse date of birth"
            )
        ]

    age = calculate_age(birth_date, today)
    checks: List[ValidationCheck] = []
    if policy.min_age is not None and age < policy.min_age:
        checks.append(
            ValidationCheck(
                "Age Requirement",
                CheckStatus.FAIL,
                f"Applicant is {age} years old, minimum age is {policy.min_age}",
            )
        )
    if policy.max_age is not None and age > policy.max_age:
        checks.append(
            ValidationCheck(
                "Age Requirement",
                CheckStatus.FAIL,
                f"Applicant is {age} years old, maximum age is {policy.max_age}",
            )
        )
    return checks


def check_nationality(nationality: str, policy: EligibilityPolicy) -> List[ValidationCheck]:
    """Rule 8: allow list and block list are evaluated independently."""
    checks: List[ValidationCheck] = []
    if (
        policy.allowed_nationalities is not None
        and nationality not in policy.allowed_nationalities
    ):
        checks.append(
            ValidationCheck(
                "Nationality",
                CheckStatus.FAIL,
                f"Nationality {nationality} is not in allowed list",
            )
        )
    if (
        policy.blocked_nationalities is not None
        and nationality in policy.blocked_nationalities
    ):
        checks.append(
            ValidationCheck(
                "Nationality", CheckStatus.FAIL, f"Nationality {nationality} is blocked"
            )
        )
    return checks


def check_remaining_validity(
    expiry_date: str, policy: EligibilityPolicy, today: date
) -> List[ValidationCheck]:
    """Rule 9: whole months until expiry must reach the policy minimum."""
    if policy.min_passport_validity is None:
        return []

    expiry = parse_date(expiry_date)
    if expiry is None:
        return [
            ValidationCheck(
                "Passport Validity", CheckStatus.FAIL, "Unable to parse expiry date"
            )
        ]

    months_valid = months_between(today, expiry)
    if months_valid < policy.min_passport_validity:
        return [
            ValidationCheck(
                "Passport Validity",
                CheckStatus.FAIL,
                f"Passport valid for {months_valid} months, "
                f"requires {policy.min_passport_validity} months",
            )
        ]
    return []


def parse_date(value: str) -> Optional[date]:
    """Parse an ISO-8601 date, returning None if it cannot be parsed."""
    try:
        return isoparse(value).date()
    except (ValueError, OverflowError):
        return None


def calculate_age(birth_date: date, today: date) -> int:
    """Age in whole years at today.

    A birthday on Feb 29 is reached on Mar 1 in non-leap years.
    """
    before_birthday = (today.month, today.day) < (birth_date.month, birth_date.day)
    return today.year - birth_date.year - int(before_birthday)


def months_between(start: date, end: date) -> int:
    """Whole months from start to end, truncated toward zero."""
    delta = relativedelta(end, start)
    return delta.years * 12 + delta.months
