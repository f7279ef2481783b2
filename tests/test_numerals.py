"""Tests for locale numeral formatting."""

from __future__ import annotations

from decimal import Decimal

import pytest

from polyglossia.numerals import (
    HEBREW_NUMERALS,
    format_hebrew_numeral,
    format_number,
    plain_decimal,
    transliterate_digits,
    uses_eastern_arabic_numerals,
    uses_western_arabic_numerals,
)


class TestPlainDecimal:
    """Tests for plain decimal rendering."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (3, "3"),
            (3.0, "3"),
            (2.5, "2.5"),
            (-4, "-4"),
            (Decimal("7"), "7"),
            (Decimal("1.25"), "1.25"),
        ],
    )
    def test_rendering(self, value, expected):
        assert plain_decimal(value) == expected


class TestTransliterateDigits:
    """Tests for digit glyph mapping."""

    def test_arabic_indic(self):
        assert transliterate_digits("0123456789", "arab") == "٠١٢٣٤٥٦٧٨٩"

    def test_separators_untouched(self):
        assert transliterate_digits("1,234", "arab") == "١,٢٣٤"

    def test_latin_unchanged(self):
        assert transliterate_digits("123", "latn") == "123"

    def test_unknown_system_unchanged(self):
        assert transliterate_digits("123", "hebr") == "123"

    def test_thai(self):
        assert transliterate_digits("5", "thai") == "๕"


class TestHebrewNumerals:
    """Tests for Hebrew letter numerals."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (1, "א"),
            (3, "ג"),
            (10, "י"),
            (11, "יא"),
            (15, "טו"),
            (16, "טז"),
            (20, "כ"),
            (99, "צט"),
        ],
    )
    def test_table(self, value, expected):
        assert format_hebrew_numeral(value) == expected

    def test_table_covers_1_to_99(self):
        assert set(HEBREW_NUMERALS) == set(range(1, 100))

    def test_zero(self):
        assert format_hebrew_numeral(0) == "0"

    def test_hundreds(self):
        assert format_hebrew_numeral(100) == "ק"
        assert format_hebrew_numeral(123) == "קכג"
        assert format_hebrew_numeral(400) == "ת"

    def test_hundreds_without_single_letter_fall_back(self):
        assert format_hebrew_numeral(500) == "500"

    def test_large_values_fall_back(self):
        assert format_hebrew_numeral(1000) == "1000"

    def test_fractions_fall_back(self):
        assert format_hebrew_numeral(2.5) == "2.5"

    def test_negative_falls_back(self):
        assert format_hebrew_numeral(-3) == "-3"


class TestFormatNumber:
    """Tests for locale number formatting."""

    def test_arabic_digits(self):
        assert format_number(3, "ar") == "٣"
        assert format_number(11, "ar") == "١١"

    def test_arabic_regional_inherits_digits(self):
        assert format_number(7, "ar-EG") == "٧"

    def test_maghreb_keeps_western_digits(self):
        assert format_number(3, "ar-MA") == "3"

    def test_hebrew_letters(self):
        assert format_number(3, "he") == "ג"
        assert format_number(15, "he-IL") == "טו"

    def test_english_grouping(self):
        assert format_number(1234, "en") == "1,234"

    def test_small_english(self):
        assert format_number(5, "en") == "5"

    def test_unknown_locale_falls_back(self):
        assert format_number(1234, "zz-ZZ") == "1234"

    def test_never_raises(self):
        assert format_number(3, "") == "3"


class TestNumeralFamilies:
    """Tests for Eastern/Western Arabic numeral locale lists."""

    def test_eastern(self):
        assert uses_eastern_arabic_numerals("ar-SA")
        assert uses_eastern_arabic_numerals("fa")
        assert not uses_eastern_arabic_numerals("ar-MA")

    def test_western(self):
        assert uses_western_arabic_numerals("ar-MA")
        assert uses_western_arabic_numerals("ar-TN")
        assert not uses_western_arabic_numerals("ar")
