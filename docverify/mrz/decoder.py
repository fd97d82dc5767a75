"""MRZ decoding for TD3 (passport) and TD1 (ID card) layouts.

Layouts are recognized by line geometry only:

1. **TD3**: exactly 2 lines of 44 characters
   - Line 1: document type, issuing state, name
   - Line 2: document number, nationality, birth date, sex, expiry date,
     each numeric field followed by its check digit

2. **TD1**: exactly 3 lines, the first of 30 characters. Lines 2 and 3
   may be shorter when OCR drops trailing filler; missing positions
   decode as empty.
   - Line 1: document type, issuing state, document number
   - Line 2: birth date, sex, expiry date, nationality
   - Line 3: name

Anything else decodes to None. A missing MRZ is a valid outcome, not an error.

Example:
    >>> record = decode_mrz([
    ...     "P<UTOERIKSSON<<ANNA<MARIA<<<<<<<<<<<<<<<<<<<",
    ...     "L898902C36UTO7408122F1204159ZE184226B<<<<<10",
    ... ])
    >>> record.document_number, record.date_of_birth, record.checksum_valid
    ('L898902C3', '1974-08-12', True)
"""

import logging
from typing import List, Optional, Sequence, Tuple

from docverify.utils.constants import (
    DEFAULT_CENTURY_PIVOT,
    MRZ_FILLER,
    TD1_LINE_COUNT,
    TD1_LINE_LENGTH,
    TD3_LINE_COUNT,
    TD3_LINE_LENGTH,
)

from .types import MRZLayout, MRZRecord
from .validator import calculate_check_digit, normalize_mrz_line, validate_check_digit

logger = logging.getLogger(__name__)


def decode_mrz(
    lines: Sequence[str], century_pivot: int = DEFAULT_CENTURY_PIVOT
) -> Optional[MRZRecord]:
    """Decode candidate MRZ lines into a structured record.

    Args:
        lines: Candidate lines (characters outside [A-Z0-9<] are removed)
        century_pivot: Two-digit years below this value map to 20YY,
            others to 19YY

    Returns:
        MRZRecord if the lines match TD3 or TD1 geometry, else None
    """
    normalized = [normalize_mrz_line(line) for line in lines]
    lengths = [len(line) for line in normalized]

    if lengths == [TD3_LINE_LENGTH] * TD3_LINE_COUNT:
        record = _decode_td3(normalized, century_pivot)
    elif len(normalized) == TD1_LINE_COUNT and lengths[0] == TD1_LINE_LENGTH:
        record = _decode_td1(normalized, century_pivot)
    else:
        logger.debug(f"No MRZ layout matches line lengths {lengths}")
        return None

    if not record.checksum_valid:
        logger.warning(
            f"MRZ check digit verification failed for document "
            f"'{record.document_number}'"
        )
    return record


def parse_mrz_date(value: str, century_pivot: int = DEFAULT_CENTURY_PIVOT) -> str:
    """Convert an MRZ YYMMDD date into an ISO-8601 date string.

    The MRZ carries no century digits, so the century is inferred:
    YY < century_pivot -> 20YY, otherwise 19YY. Month and day are copied
    as-is without calendar validation.

    Six characters that are not all digits (OCR noise, filler) are carried
    through in the same shape, so the malformed date stays visible and
    fails date validation downstream.

    Args:
        value: YYMMDD string
        century_pivot: Pivot year (default 50)

    Returns:
        "YYYY-MM-DD" for six characters, "" for any other length

    Example:
        >>> parse_mrz_date("740812")
        '1974-08-12'
        >>> parse_mrz_date("490101")
        '2049-01-01'
        >>> parse_mrz_date("7408<2")
        '1974-08-<2'
        >>> parse_mrz_date("74081")
        ''
    """
    if len(value) != 6:
        return ""

    year = value[0:2]
    if year.isdigit():
        year = str(2000 + int(year) if int(year) < century_pivot else 1900 + int(year))
    return f"{year}-{value[2:4]}-{value[4:6]}"


def format_mrz_date(iso_date: str) -> str:
    """Convert an ISO-8601 date string back into MRZ YYMMDD form.

    Args:
        iso_date: "YYYY-MM-DD" string, or "" for an unknown date

    Returns:
        Six-character YYMMDD string, all filler if the date is unknown
    """
    if not iso_date:
        return MRZ_FILLER * 6
    year, month, day = iso_date.split("-")
    return f"{year[-2:]}{month}{day}"


def split_name(block: str) -> Tuple[str, str]:
    """Split an MRZ name block into (surname, given_names).

    The block is split on the first "<<". Within each part, filler
    characters become spaces and the result is trimmed.

    Example:
        >>> split_name("ERIKSSON<<ANNA<MARIA<<<<<<")
        ('ERIKSSON', 'ANNA MARIA')
    """
    surname, _, given_names = block.partition(MRZ_FILLER * 2)
    return (
        surname.replace(MRZ_FILLER, " ").strip(),
        given_names.replace(MRZ_FILLER, " ").strip(),
    )


def encode_td3(
    record: MRZRecord, personal_number: str = ""
) -> Tuple[str, str]:
    """Re-derive TD3 lines from a decoded record.

    Fields are padded with filler to their fixed widths and all check
    digits (document number, birth date, expiry date, optional data and
    the composite line 2 digit) are recomputed.

    Args:
        record: Decoded MRZ record
        personal_number: Optional data for line 2 positions 28-41

    Returns:
        Tuple of (line1, line2), each 44 characters

    Raises:
        ValueError: If a field contains characters outside [A-Z0-9<]
    """
    name = _pad(
        _to_filler(record.surname) + MRZ_FILLER * 2 + _to_filler(record.given_names),
        39,
    )
    line1 = (
        _pad(record.document_type, 2) + _pad(record.issuing_country, 3) + name
    )

    document_number = _pad(record.document_number, 9)
    birth_date = format_mrz_date(record.date_of_birth)
    expiry_date = format_mrz_date(record.expiry_date)
    optional_data = _pad(personal_number, 14)

    line2 = (
        document_number
        + str(calculate_check_digit(document_number))
        + _pad(record.nationality, 3)
        + birth_date
        + str(calculate_check_digit(birth_date))
        + _pad(record.sex, 1)
        + expiry_date
        + str(calculate_check_digit(expiry_date))
        + optional_data
        + str(calculate_check_digit(optional_data))
    )
    composite = line2[0:10] + line2[13:20] + line2[21:43]
    line2 += str(calculate_check_digit(composite))

    return line1, line2


def _decode_td3(lines: List[str], century_pivot: int) -> MRZRecord:
    line1, line2 = lines
    surname, given_names = split_name(line1[5:44])

    document_number_ok, _, _ = validate_check_digit(line2[0:9], line2[9:10])
    birth_date_ok, _, _ = validate_check_digit(line2[13:19], line2[19:20])
    expiry_date_ok, _, _ = validate_check_digit(line2[21:27], line2[27:28])
    logger.debug(
        f"TD3 check digits: document_number={document_number_ok}, "
        f"birth_date={birth_date_ok}, expiry_date={expiry_date_ok}"
    )

    return MRZRecord(
        document_type=_strip_filler(line1[0:2]),
        issuing_country=_strip_filler(line1[2:5]),
        document_number=_strip_filler(line2[0:9]),
        date_of_birth=parse_mrz_date(line2[13:19], century_pivot),
        expiry_date=parse_mrz_date(line2[21:27], century_pivot),
        nationality=_strip_filler(line2[10:13]),
        surname=surname,
        given_names=given_names,
        sex=line2[20:21],
        checksum_valid=document_number_ok and birth_date_ok and expiry_date_ok,
        layout=MRZLayout.TD3,
        checksums_verified=True,
    )


def _decode_td1(lines: List[str], century_pivot: int) -> MRZRecord:
    line1, line2, line3 = lines
    surname, given_names = split_name(line3)

    # TD1 check digits are not decoded; see MRZRecord.checksums_verified
    return MRZRecord(
        document_type=_strip_filler(line1[0:2]),
        issuing_country=_strip_filler(line1[2:5]),
        document_number=_strip_filler(line1[5:14]),
        date_of_birth=parse_mrz_date(line2[0:6], century_pivot),
        expiry_date=parse_mrz_date(line2[8:14], century_pivot),
        nationality=_strip_filler(line2[15:18]),
        surname=surname,
        given_names=given_names,
        sex=line2[7:8],
        checksum_valid=True,
        layout=MRZLayout.TD1,
        checksums_verified=False,
    )


def _strip_filler(value: str) -> str:
    """Remove a trailing run of filler characters only."""
    return value.rstrip(MRZ_FILLER)


def _to_filler(value: str) -> str:
    return MRZ_FILLER.join(value.split())


def _pad(value: str, width: int) -> str:
    return value[:width].ljust(width, MRZ_FILLER)
