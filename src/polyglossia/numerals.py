"""Locale-Aware Numeral Formatting.

Renders numbers with the digit glyphs of a locale's numbering system:

- Hebrew locales use letter numerals (gematria) for 1-999
- Other locales go through Babel's decimal formatting with the locale's
  numbering system and grouping, then digits are mapped to the system's
  glyphs

Any failure falls back to the plain decimal string of the number.

Usage:
    from polyglossia.numerals import format_number

    format_number(3, "ar")        # "٣"
    format_number(1234, "en")     # "1,234"
    format_number(15, "he")       # "טו"
    format_number(3, "ar-MA")     # "3"
"""

from __future__ import annotations

import logging
import math
from decimal import Decimal

from babel import Locale, UnknownLocaleError
from babel.numbers import UnsupportedNumberingSystemError, format_decimal

from polyglossia.plural import get_plural_config
from polyglossia.protocols import LocaleInfo, Number, NumberingSystem, base_language


logger = logging.getLogger(__name__)


# ==============================================================================
# Locale Data: Arabic numeral families
# ==============================================================================

EASTERN_ARABIC_LOCALES = frozenset([
    "ar", "ar-SA", "ar-EG", "ar-AE", "ar-QA", "ar-KW", "ar-BH", "ar-OM",
    "ar-YE", "ar-IQ", "ar-SY", "ar-LB", "ar-JO", "ar-PS", "ar-IL",
    "fa", "fa-IR", "fa-AF", "ur", "ur-PK", "ur-IN", "ps", "ps-AF", "ps-PK",
])

WESTERN_ARABIC_LOCALES = frozenset([
    "ar-MA", "ar-DZ", "ar-TN", "ar-LY", "ar-MR",
])


def uses_eastern_arabic_numerals(locale: str) -> bool:
    """Check if a locale renders Eastern Arabic (Indic) digits."""
    return locale in EASTERN_ARABIC_LOCALES


def uses_western_arabic_numerals(locale: str) -> bool:
    """Check if a locale renders Western Arabic (European) digits."""
    return locale in WESTERN_ARABIC_LOCALES


# ==============================================================================
# Digit glyphs
# ==============================================================================

_ZERO_CODEPOINTS: dict[str, int] = {
    NumberingSystem.ARAB.value: 0x0660,
    NumberingSystem.THAI.value: 0x0E50,
    NumberingSystem.BENG.value: 0x09E6,
    NumberingSystem.DEVA.value: 0x0966,
}

_DIGIT_TABLES: dict[str, dict[int, str]] = {
    system: {ord(str(d)): chr(zero + d) for d in range(10)}
    for system, zero in _ZERO_CODEPOINTS.items()
}


def transliterate_digits(text: str, numbering_system: str | NumberingSystem) -> str:
    """Replace ASCII digits with the glyphs of a numbering system.

    Systems without a positional digit table (latn, hebr) are returned as-is.
    """
    system = numbering_system.value if isinstance(numbering_system, NumberingSystem) else numbering_system
    table = _DIGIT_TABLES.get(system)
    if table is None:
        return text
    return text.translate(table)


# ==============================================================================
# Plain decimal rendering
# ==============================================================================

def plain_decimal(value: Number) -> str:
    """Render a number as a plain decimal string.

    Integral floats drop their fractional part ("3.0" -> "3").
    """
    if isinstance(value, bool):
        return str(int(value))
    if isinstance(value, float):
        if math.isfinite(value) and value.is_integer():
            return str(int(value))
        return repr(value)
    if isinstance(value, Decimal):
        if value.is_finite() and value == value.to_integral_value():
            return str(int(value))
        return str(value)
    return str(value)


# ==============================================================================
# Hebrew letter numerals
# ==============================================================================

_HEBREW_ONES = ["", "א", "ב", "ג", "ד", "ה", "ו", "ז", "ח", "ט"]
_HEBREW_TENS = ["", "י", "כ", "ל", "מ", "נ", "ס", "ע", "פ", "צ"]

# 1-99; 15 and 16 are spelled tet-vav / tet-zayin instead of yud-he / yud-vav
HEBREW_NUMERALS: dict[int, str] = {
    tens * 10 + ones: _HEBREW_TENS[tens] + _HEBREW_ONES[ones]
    for tens in range(10)
    for ones in range(10)
    if tens or ones
}
HEBREW_NUMERALS[15] = "טו"
HEBREW_NUMERALS[16] = "טז"

HEBREW_HUNDREDS: dict[int, str] = {
    100: "ק",
    200: "ר",
    300: "ש",
    400: "ת",
}


def format_hebrew_numeral(value: Number) -> str:
    """Format a number as Hebrew letter numerals.

    0 renders as "0"; 1-99 come from the table; 100-999 combine the
    hundreds letter with the 1-99 remainder. Anything else (larger values,
    negatives, fractions, hundreds without a single letter) falls back to
    the plain decimal string.
    """
    if isinstance(value, bool) or not _is_integral(value):
        return plain_decimal(value)

    num = int(value)
    if num == 0:
        return "0"
    if num <= 99:
        return HEBREW_NUMERALS.get(num, plain_decimal(value))

    if num <= 999:
        hundreds, remainder = divmod(num, 100)
        result = HEBREW_HUNDREDS.get(hundreds * 100, "")
        if remainder:
            result += HEBREW_NUMERALS.get(remainder, "")
        return result or plain_decimal(value)

    return plain_decimal(value)


def _is_integral(value: Number) -> bool:
    if isinstance(value, int):
        return True
    if isinstance(value, float):
        return math.isfinite(value) and value.is_integer()
    if isinstance(value, Decimal):
        return value.is_finite() and value == value.to_integral_value()
    return False


# ==============================================================================
# Public API
# ==============================================================================

def format_number(value: Number, locale: str) -> str:
    """Format a number with the locale's numbering system.

    Args:
        value: Integer or decimal number
        locale: Target locale tag

    Returns:
        Locale-rendered numeral, or the plain decimal string on failure
    """
    if base_language(locale or "") == "he":
        return format_hebrew_numeral(value)

    numbering_system = get_plural_config(locale).numbering_system.value

    try:
        babel_locale = Locale.parse(LocaleInfo.parse(locale).babel_identifier)
        formatted = format_decimal(
            value,
            locale=babel_locale,
            group_separator=True,
            numbering_system=numbering_system,
        )
    except (UnknownLocaleError, UnsupportedNumberingSystemError, ValueError, TypeError) as e:
        logger.debug(f"Number formatting failed for locale '{locale}': {e}")
        return plain_decimal(value)

    return transliterate_digits(formatted, numbering_system)
