"""MRZ Decoding & Check Digit Validation.

This module finds machine-readable zone lines in OCR text, decodes them into
structured records and verifies ICAO 9303 check digits.

Core Components:
    - types: Data structures (MRZRecord, MRZLayout)
    - validator: ICAO 9303 check digit calculation and line normalization
    - selector: MRZ candidate line selection from free OCR text
    - decoder: TD3/TD1 decoding and TD3 re-encoding

Example:
    >>> from docverify.mrz import decode_mrz, extract_mrz_lines
    >>> record = decode_mrz(extract_mrz_lines(ocr_text))
    >>> if record is not None and record.checksum_valid:
    ...     print(f"Document: {record.document_number}")
"""

from .decoder import decode_mrz, encode_td3, format_mrz_date, parse_mrz_date, split_name
from .selector import extract_mrz_lines
from .types import MRZLayout, MRZRecord
from .validator import (
    calculate_check_digit,
    character_value,
    is_mrz_text,
    normalize_mrz_line,
    validate_check_digit,
)

__all__ = [
    # Types
    "MRZLayout",
    "MRZRecord",
    # Validation
    "calculate_check_digit",
    "character_value",
    "validate_check_digit",
    "is_mrz_text",
    "normalize_mrz_line",
    # Selection & decoding
    "extract_mrz_lines",
    "decode_mrz",
    "encode_td3",
    "parse_mrz_date",
    "format_mrz_date",
    "split_name",
]
