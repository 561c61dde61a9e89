"""Unit tests for ISBN validation and EAN-13 encoding."""

import pytest

from bookcreator.contexts.identifiers.ean13_tables import SYMBOL_MODULES, DigitPatterns, GuardPatterns
from bookcreator.contexts.identifiers.isbn import (
    barcode_pattern,
    calculate_check_digit,
    encode_ean13,
    is_ean13_valid,
    validate,
)

VALID_ISBN = "9782070360284"


class TestValidate:
    @pytest.mark.unit
    def test_twelve_digits_get_check_digit(self):
        result = validate("123456789012")

        assert result.valid
        assert result.normalized_code == "1234567890128"
        assert result.message == "Check digit added: 8"

    @pytest.mark.unit
    def test_wrong_check_digit_names_expected_digit(self):
        result = validate("1234567890121")

        assert not result.valid
        assert result.normalized_code is None
        assert "8" in result.message

    @pytest.mark.unit
    def test_valid_thirteen_digits_with_punctuation(self):
        result = validate("978-2-07-036028-4")

        assert result.valid
        assert result.normalized_code == VALID_ISBN

    @pytest.mark.unit
    def test_placeholder_passes_unchecked(self):
        result = validate("978-2-940426-XX-X")

        assert result.valid
        assert result.normalized_code == "978-2-940426-XX-X"
        assert "not verified" in result.message

    @pytest.mark.unit
    def test_too_short(self):
        result = validate("978-2-07")
        assert not result.valid
        assert "at least 12 digits" in result.message

    @pytest.mark.unit
    def test_too_long(self):
        assert validate("97820703602841").message == "Invalid ISBN format"

    @pytest.mark.unit
    def test_empty_input(self):
        assert not validate("").valid
        assert not validate(None).valid


@pytest.mark.unit
def test_check_digit():
    assert calculate_check_digit("123456789012") == 8
    assert calculate_check_digit("978207036028") == 4
    assert calculate_check_digit("000000000000") == 0


@pytest.mark.unit
def test_is_ean13_valid():
    assert is_ean13_valid(VALID_ISBN)
    assert not is_ean13_valid("9782070360281")
    assert not is_ean13_valid("978207036028")


class TestEncode:
    @pytest.mark.unit
    def test_symbol_shape(self):
        pattern = encode_ean13(VALID_ISBN)

        assert len(pattern) == SYMBOL_MODULES
        assert set(pattern) <= {"0", "1"}
        assert pattern.startswith(GuardPatterns.START)
        assert pattern.endswith(GuardPatterns.END)
        assert pattern[45:50] == GuardPatterns.CENTER

    @pytest.mark.unit
    def test_all_zero_code(self):
        """Test that leading digit 0 uses the odd set for every left digit."""
        expected = "101" + "0001101" * 6 + "01010" + "1110010" * 6 + "101"
        assert encode_ean13("0000000000000") == expected

    @pytest.mark.unit
    def test_parity_follows_leading_digit(self):
        pattern = encode_ean13(VALID_ISBN)
        left = [pattern[3 + i * 7 : 10 + i * 7] for i in range(6)]

        # Leading 9 selects OEEOEO for digits 7, 8, 2, 0, 7, 0
        assert left == [
            DigitPatterns.LEFT_ODD[7],
            DigitPatterns.LEFT_EVEN[8],
            DigitPatterns.LEFT_EVEN[2],
            DigitPatterns.LEFT_ODD[0],
            DigitPatterns.LEFT_EVEN[7],
            DigitPatterns.LEFT_ODD[0],
        ]

    @pytest.mark.unit
    def test_rejects_wrong_length(self):
        with pytest.raises(ValueError, match="13 digits"):
            encode_ean13("978207036028")
        with pytest.raises(ValueError):
            encode_ean13("97820703602a4")


@pytest.mark.unit
def test_barcode_pattern():
    assert barcode_pattern("978-2-07-036028-4") == encode_ean13(VALID_ISBN)
    assert barcode_pattern("978207036028") == encode_ean13(VALID_ISBN)
    assert barcode_pattern("9782070360281") is None
    assert barcode_pattern("978-2-940426-XX-X") is None
