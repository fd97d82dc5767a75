"""ICAO 9303 check digit validation and MRZ line normalization.

This module implements the check digit algorithm used in machine-readable
zones of passports, ID cards and visas.

References:
    - ICAO Doc 9303 Part 3, Section 4.9 - Check digits in the MRZ
    - https://www.icao.int/publications/pages/publication.aspx?docnum=9303
"""

from typing import Optional

from docverify.utils.constants import CHECK_DIGIT_WEIGHTS, MRZ_ALPHABET, MRZ_FILLER


def character_value(char: str) -> int:
    """Map a single MRZ character to its numeric value.

    - Digits (0-9): their numeric value
    - Letters (A-Z): position in alphabet + 10 (A=10, B=11, ..., Z=35)
    - Filler ('<'): 0

    Args:
        char: Single MRZ character

    Returns:
        Numeric value (0-35)

    Raises:
        ValueError: If char is not a valid MRZ character

    Example:
        >>> character_value("7")
        7
        >>> character_value("L")
        21
        >>> character_value("<")
        0
    """
    if char == MRZ_FILLER:
        return 0
    if "0" <= char <= "9":
        return ord(char) - ord("0")
    if "A" <= char <= "Z":
        return ord(char) - ord("A") + 10
    raise ValueError(f"Invalid character in MRZ field: {char!r}")


def calculate_check_digit(data: str) -> int:
    """Calculate the ICAO 9303 check digit for an MRZ field.

    The check digit is calculated as follows:
    1. Map each character to a numeric value (see character_value)
    2. Multiply each value by the weight cycle 7, 3, 1, 7, 3, 1, ...
       starting at the first character
    3. Sum all products
    4. Check digit = sum mod 10

    Args:
        data: Field content (digits, uppercase letters or filler)

    Returns:
        Check digit (0-9). An empty field yields 0.

    Raises:
        ValueError: If data contains characters outside [A-Z0-9<]

    Example:
        >>> calculate_check_digit("L898902C3")
        6
        >>> calculate_check_digit("740812")
        2
    """
    total = sum(
        character_value(char) * CHECK_DIGIT_WEIGHTS[pos % len(CHECK_DIGIT_WEIGHTS)]
        for pos, char in enumerate(data)
    )
    return total % 10


def validate_check_digit(data: str, check_digit: str) -> tuple[bool, int, Optional[int]]:
    """Validate an MRZ field against its check digit character.

    Args:
        data: Field content the check digit protects
        check_digit: Check digit character read from the MRZ

    Returns:
        Tuple of (is_valid, expected_check_digit, actual_check_digit)
        - is_valid: True if str(expected) equals check_digit
        - expected_check_digit: Calculated check digit (0-9)
        - actual_check_digit: Check digit from input (0-9), None if not a digit

    Raises:
        ValueError: If data contains characters outside [A-Z0-9<]

    Example:
        >>> validate_check_digit("L898902C3", "6")
        (True, 6, 6)
        >>> validate_check_digit("L898902C3", "<")
        (False, 6, None)
    """
    expected = calculate_check_digit(data)
    actual = int(check_digit) if len(check_digit) == 1 and check_digit.isdigit() else None
    is_valid = str(expected) == check_digit

    return (is_valid, expected, actual)


def is_mrz_text(text: str) -> bool:
    """Check whether every character of text belongs to the MRZ alphabet.

    Args:
        text: Text to check

    Returns:
        True if text is non-empty and only contains [A-Z0-9<]

    Example:
        >>> is_mrz_text("P<UTOERIKSSON")
        True
        >>> is_mrz_text("P<UTO ERIKSSON")
        False
    """
    return bool(text) and all(char in MRZ_ALPHABET for char in text)


def normalize_mrz_line(text: str) -> str:
    """Remove every character outside the MRZ alphabet.

    Case is preserved, so lowercase letters are dropped rather than
    uppercased.

    Args:
        text: Raw MRZ line

    Returns:
        Line containing only [A-Z0-9<]

    Example:
        >>> normalize_mrz_line("L898902C3 6UTO-7408122F")
        'L898902C36UTO7408122F'
    """
    return "".join(char for char in text if char in MRZ_ALPHABET)
