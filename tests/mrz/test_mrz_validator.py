"""Unit tests for ICAO 9303 check digit validator."""

import random

import pytest

from docverify.mrz.validator import (
    calculate_check_digit,
    character_value,
    is_mrz_text,
    normalize_mrz_line,
    validate_check_digit,
)

MRZ_CHARS = "ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789<"


def reference_check_digit(data: str) -> int:
    """Naive re-implementation of ICAO 9303 check digits."""
    table = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"
    weights = [7, 3, 1]
    total = 0
    for i in range(len(data)):
        value = 0 if data[i] == "<" else table.index(data[i])
        total += value * weights[i % 3]
    return total % 10


class TestCharacterValue:
    """Test MRZ character to number mapping."""

    def test_digits(self):
        for digit in "0123456789":
            assert character_value(digit) == int(digit)

    def test_letters(self):
        assert character_value("A") == 10
        assert character_value("L") == 21
        assert character_value("Z") == 35

    def test_filler(self):
        assert character_value("<") == 0

    def test_invalid_characters(self):
        with pytest.raises(ValueError, match="Invalid character"):
            character_value("a")

        with pytest.raises(ValueError, match="Invalid character"):
            character_value(" ")


class TestCalculateCheckDigit:
    """Test ICAO 9303 check digit calculation."""

    def test_icao_specimen_fields(self):
        """Check digits printed on the ICAO 9303 specimen passport."""
        assert calculate_check_digit("L898902C3") == 6  # Document number
        assert calculate_check_digit("740812") == 2  # Date of birth
        assert calculate_check_digit("120415") == 9  # Date of expiry
        assert calculate_check_digit("ZE184226B<<<<<") == 1  # Optional data

    def test_weight_cycle_starts_at_seven(self):
        assert calculate_check_digit("1") == 7
        assert calculate_check_digit("01") == 3
        assert calculate_check_digit("001") == 1
        assert calculate_check_digit("0001") == 7

    def test_filler_counts_as_zero(self):
        assert calculate_check_digit("AB12<<<<<") == calculate_check_digit("AB120000")
        assert calculate_check_digit("<<<<<<") == 0

    def test_empty_field(self):
        assert calculate_check_digit("") == 0

    def test_invalid_characters(self):
        with pytest.raises(ValueError, match="Invalid character"):
            calculate_check_digit("L898902c3")

        with pytest.raises(ValueError, match="Invalid character"):
            calculate_check_digit("L898-902C3")

    @pytest.mark.parametrize("seed", range(50))
    def test_matches_reference_implementation(self, seed):
        """Random [A-Z0-9<] strings agree with the naive reference."""
        rng = random.Random(seed)
        for _ in range(20):
            data = "".join(rng.choice(MRZ_CHARS) for _ in range(rng.randint(0, 44)))
            assert calculate_check_digit(data) == reference_check_digit(data)


class TestValidateCheckDigit:
    """Test field validation against a check digit character."""

    def test_valid(self):
        assert validate_check_digit("L898902C3", "6") == (True, 6, 6)

    def test_invalid(self):
        assert validate_check_digit("L898902C3", "5") == (False, 6, 5)

    def test_non_digit_check_character(self):
        is_valid, expected, actual = validate_check_digit("L898902C3", "<")
        assert is_valid is False
        assert expected == 6
        assert actual is None

    def test_empty_check_character(self):
        assert validate_check_digit("740812", "")[0] is False


class TestLineHelpers:
    """Test MRZ alphabet predicates and normalization."""

    def test_is_mrz_text(self):
        assert is_mrz_text("P<UTOERIKSSON<<ANNA")
        assert not is_mrz_text("P<UTO ERIKSSON")
        assert not is_mrz_text("p<utoeriksson")
        assert not is_mrz_text("")

    def test_normalize_mrz_line(self):
        assert normalize_mrz_line("L898902C3 6UTO-7408122F") == "L898902C36UTO7408122F"

    def test_normalize_drops_lowercase(self):
        assert normalize_mrz_line("P<utoERIKSSON") == "P<ERIKSSON"
