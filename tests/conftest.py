"""
Pytest Configuration and Shared Fixtures

This file contains pytest configuration and fixtures that are available
to all test modules.
"""

from datetime import date

import pytest

# ICAO Doc 9303 specimen passport (expired 2012-04-15)
SPECIMEN_TD3_LINES = [
    "P<UTOERIKSSON<<ANNA<MARIA<<<<<<<<<<<<<<<<<<<",
    "L898902C36UTO7408122F1204159ZE184226B<<<<<10",
]

# Same holder with expiry 2034-04-15 and recomputed check digits
VALID_TD3_LINES = [
    "P<UTOERIKSSON<<ANNA<MARIA<<<<<<<<<<<<<<<<<<<",
    "L898902C36UTO7408122F3404159ZE184226B<<<<<16",
]

# ICAO Doc 9303 specimen ID card
SPECIMEN_TD1_LINES = [
    "I<UTOD231458907".ljust(30, "<"),
    "7408122F1204159UTO".ljust(29, "<") + "6",
    "ERIKSSON<<ANNA<MARIA".ljust(30, "<"),
]


@pytest.fixture
def today():
    """Fixed evaluation date so date-dependent rules are deterministic."""
    return date(2026, 1, 15)


@pytest.fixture
def specimen_td3_lines():
    return list(SPECIMEN_TD3_LINES)


@pytest.fixture
def valid_td3_lines():
    return list(VALID_TD3_LINES)


@pytest.fixture
def specimen_td1_lines():
    return list(SPECIMEN_TD1_LINES)


@pytest.fixture
def valid_ocr_text():
    """OCR output of a passport page with a valid, unexpired MRZ."""
    return "\n".join(
        [
            "UTOPIA",
            "PASSPORT / PASSEPORT",
            "Surname: ERIKSSON",
            "Given names: ANNA MARIA",
            "",
            VALID_TD3_LINES[0],
            VALID_TD3_LINES[1],
        ]
    )
