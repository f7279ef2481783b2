"""Bidirectional (BiDi) Text Support.

This module provides RTL locale detection and BiDi helpers for rendering
translated text in Arabic, Hebrew, Persian, Urdu and other RTL scripts.

Features:
- RTL locale table with language names and scripts
- RTL script detection and mixed-direction classification
- Directional marks, numeral embedding and marker stripping
- Injectable, thread-safe memoization of locale lookups

Usage:
    from polyglossia.bidi import (
        classify_direction,
        is_rtl_locale,
        strip_markers,
        wrap_with_marker,
    )

    is_rtl_locale("ar-EG")                 # True
    classify_direction("مرحبا")            # TextDirection.RTL
    classify_direction("Hello مرحبا")      # TextDirection.AUTO
    wrap_with_marker("مرحبا", "rtl")       # "\u200fمرحبا"
"""

from __future__ import annotations

import re
import threading
from typing import Mapping, NamedTuple

from polyglossia.protocols import RTLInfo, TextDirection


# Unicode BiDi control characters
class BiDiControl:
    """Unicode Bidirectional control characters."""

    # Explicit directional embeddings
    LRE = "\u202A"  # Left-to-Right Embedding
    RLE = "\u202B"  # Right-to-Left Embedding
    PDF = "\u202C"  # Pop Directional Formatting

    # Explicit directional overrides
    LRO = "\u202D"  # Left-to-Right Override
    RLO = "\u202E"  # Right-to-Left Override

    # Explicit directional isolates (Unicode 6.3+)
    LRI = "\u2066"  # Left-to-Right Isolate
    RLI = "\u2067"  # Right-to-Left Isolate
    FSI = "\u2068"  # First Strong Isolate
    PDI = "\u2069"  # Pop Directional Isolate

    # Explicit marks
    LRM = "\u200E"  # Left-to-Right Mark
    RLM = "\u200F"  # Right-to-Left Mark


class RTLLocaleData(NamedTuple):
    name: str
    script: str


# RTL locales by tag
RTL_LOCALES: Mapping[str, RTLLocaleData] = {
    # Arabic
    "ar": RTLLocaleData("Arabic", "Arab"),
    "ar-SA": RTLLocaleData("Arabic (Saudi Arabia)", "Arab"),
    "ar-EG": RTLLocaleData("Arabic (Egypt)", "Arab"),
    "ar-AE": RTLLocaleData("Arabic (UAE)", "Arab"),
    "ar-LB": RTLLocaleData("Arabic (Lebanon)", "Arab"),
    "ar-JO": RTLLocaleData("Arabic (Jordan)", "Arab"),
    "ar-SY": RTLLocaleData("Arabic (Syria)", "Arab"),
    "ar-IQ": RTLLocaleData("Arabic (Iraq)", "Arab"),
    "ar-KW": RTLLocaleData("Arabic (Kuwait)", "Arab"),
    "ar-BH": RTLLocaleData("Arabic (Bahrain)", "Arab"),
    "ar-QA": RTLLocaleData("Arabic (Qatar)", "Arab"),
    "ar-OM": RTLLocaleData("Arabic (Oman)", "Arab"),
    "ar-YE": RTLLocaleData("Arabic (Yemen)", "Arab"),
    "ar-LY": RTLLocaleData("Arabic (Libya)", "Arab"),
    "ar-DZ": RTLLocaleData("Arabic (Algeria)", "Arab"),
    "ar-MA": RTLLocaleData("Arabic (Morocco)", "Arab"),
    "ar-TN": RTLLocaleData("Arabic (Tunisia)", "Arab"),
    "ar-MR": RTLLocaleData("Arabic (Mauritania)", "Arab"),
    "ar-SD": RTLLocaleData("Arabic (Sudan)", "Arab"),
    "ar-TD": RTLLocaleData("Arabic (Chad)", "Arab"),
    "ar-KM": RTLLocaleData("Arabic (Comoros)", "Arab"),
    "ar-DJ": RTLLocaleData("Arabic (Djibouti)", "Arab"),
    "ar-SO": RTLLocaleData("Arabic (Somalia)", "Arab"),
    "ar-ER": RTLLocaleData("Arabic (Eritrea)", "Arab"),
    "ar-IL": RTLLocaleData("Arabic (Israel)", "Arab"),
    "ar-PS": RTLLocaleData("Arabic (Palestine)", "Arab"),
    # Hebrew
    "he": RTLLocaleData("Hebrew", "Hebr"),
    "he-IL": RTLLocaleData("Hebrew (Israel)", "Hebr"),
    # Persian/Farsi
    "fa": RTLLocaleData("Persian", "Arab"),
    "fa-IR": RTLLocaleData("Persian (Iran)", "Arab"),
    "fa-AF": RTLLocaleData("Persian (Afghanistan)", "Arab"),
    # Urdu
    "ur": RTLLocaleData("Urdu", "Arab"),
    "ur-PK": RTLLocaleData("Urdu (Pakistan)", "Arab"),
    "ur-IN": RTLLocaleData("Urdu (India)", "Arab"),
    # Kurdish
    "ku": RTLLocaleData("Kurdish", "Arab"),
    "ku-IQ": RTLLocaleData("Kurdish (Iraq)", "Arab"),
    "ku-IR": RTLLocaleData("Kurdish (Iran)", "Arab"),
    # Pashto
    "ps": RTLLocaleData("Pashto", "Arab"),
    "ps-AF": RTLLocaleData("Pashto (Afghanistan)", "Arab"),
    "ps-PK": RTLLocaleData("Pashto (Pakistan)", "Arab"),
    # Sindhi
    "sd": RTLLocaleData("Sindhi", "Arab"),
    "sd-PK": RTLLocaleData("Sindhi (Pakistan)", "Arab"),
    "sd-IN": RTLLocaleData("Sindhi (India)", "Arab"),
    # Uyghur
    "ug": RTLLocaleData("Uyghur", "Arab"),
    "ug-CN": RTLLocaleData("Uyghur (China)", "Arab"),
    # Yiddish
    "yi": RTLLocaleData("Yiddish", "Hebr"),
    "yi-US": RTLLocaleData("Yiddish (United States)", "Hebr"),
    "yi-IL": RTLLocaleData("Yiddish (Israel)", "Hebr"),
    # Azerbaijani (Arabic script)
    "az-Arab": RTLLocaleData("Azerbaijani (Arabic)", "Arab"),
    "az-Arab-IR": RTLLocaleData("Azerbaijani (Iran, Arabic)", "Arab"),
    # Kashmiri
    "ks": RTLLocaleData("Kashmiri", "Arab"),
    "ks-IN": RTLLocaleData("Kashmiri (India)", "Arab"),
    "ks-PK": RTLLocaleData("Kashmiri (Pakistan)", "Arab"),
    # Balochi
    "bal": RTLLocaleData("Balochi", "Arab"),
    "bal-PK": RTLLocaleData("Balochi (Pakistan)", "Arab"),
    "bal-IR": RTLLocaleData("Balochi (Iran)", "Arab"),
    "bal-AF": RTLLocaleData("Balochi (Afghanistan)", "Arab"),
}

_RTL_LOCALES_LOWER: dict[str, RTLLocaleData] = {
    tag.lower(): data for tag, data in RTL_LOCALES.items()
}

# Hebrew, Arabic, Arabic Supplement, Arabic Extended-A,
# Arabic Presentation Forms-A/B, and the RTL-affecting controls
_RTL_PATTERN = re.compile(
    "[\u0590-\u05FF\u0600-\u06FF\u0750-\u077F\u08A0-\u08FF"
    "\uFB50-\uFDFF\uFE70-\uFEFF"
    "\u200F\u202B\u202E\u2067\u2068\u2069]"
)

_LATIN_PATTERN = re.compile(r"[a-zA-Z]")

_ASCII_DIGITS_PATTERN = re.compile(r"[0-9]+")

_MARKER_PATTERN = re.compile("[\u200E\u200F\u202A-\u202E\u2066-\u2069]")

_LTR_INFO = RTLInfo(is_rtl=False, direction=TextDirection.LTR)


class DirectionCache:
    """Thread-safe memo for locale direction lookups.

    Entries are derived purely from the locale tag, so they never go stale.
    """

    def __init__(self) -> None:
        self._is_rtl: dict[str, bool] = {}
        self._info: dict[str, RTLInfo] = {}
        self._lock = threading.Lock()

    def get_is_rtl(self, locale: str) -> bool | None:
        with self._lock:
            return self._is_rtl.get(locale)

    def set_is_rtl(self, locale: str, value: bool) -> None:
        with self._lock:
            self._is_rtl[locale] = value

    def get_info(self, locale: str) -> RTLInfo | None:
        with self._lock:
            return self._info.get(locale)

    def set_info(self, locale: str, info: RTLInfo) -> None:
        with self._lock:
            self._info[locale] = info

    def clear(self) -> None:
        """Drop all memoized entries."""
        with self._lock:
            self._is_rtl.clear()
            self._info.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._is_rtl) + len(self._info)


_default_cache = DirectionCache()


def get_default_direction_cache() -> DirectionCache:
    """Get the process-wide direction cache used by default."""
    return _default_cache


def _lookup_rtl_locale(normalized: str) -> RTLLocaleData | None:
    data = _RTL_LOCALES_LOWER.get(normalized)
    if data is not None:
        return data
    for tag, data in _RTL_LOCALES_LOWER.items():
        if normalized.startswith(tag):
            return data
    return None


def is_rtl_locale(locale: str, cache: DirectionCache | None = None) -> bool:
    """Check if a locale is right-to-left.

    True when the tag matches an RTL table entry exactly or starts with one
    (case-insensitive).

    Args:
        locale: Locale tag
        cache: Memo to use (default: process-wide cache)

    Returns:
        True if RTL
    """
    if not locale:
        return False

    cache = cache if cache is not None else _default_cache
    normalized = locale.lower()

    cached = cache.get_is_rtl(normalized)
    if cached is not None:
        return cached

    result = _lookup_rtl_locale(normalized) is not None
    cache.set_is_rtl(normalized, result)
    return result


def get_rtl_info(locale: str, cache: DirectionCache | None = None) -> RTLInfo:
    """Get direction information for a locale.

    Args:
        locale: Locale tag
        cache: Memo to use (default: process-wide cache)

    Returns:
        RTLInfo with script and language name for RTL locales
    """
    if not locale:
        return _LTR_INFO

    cache = cache if cache is not None else _default_cache
    normalized = locale.lower()

    cached = cache.get_info(normalized)
    if cached is not None:
        return cached

    data = _lookup_rtl_locale(normalized)
    if data is None:
        info = _LTR_INFO
    else:
        info = RTLInfo(
            is_rtl=True,
            direction=TextDirection.RTL,
            script=data.script,
            name=data.name,
        )
    cache.set_info(normalized, info)
    return info


def get_rtl_locales() -> list[str]:
    """Get all RTL locale tags."""
    return list(RTL_LOCALES.keys())


def contains_rtl_script(text: str) -> bool:
    """Check if text contains RTL script characters or RTL controls."""
    if not text:
        return False
    return _RTL_PATTERN.search(text) is not None


def classify_direction(text: str) -> TextDirection:
    """Classify the direction of a piece of text.

    Returns:
        RTL for RTL script only, LTR when no RTL script is present,
        AUTO for RTL script mixed with Latin letters
    """
    if not text:
        return TextDirection.LTR

    has_rtl = contains_rtl_script(text)
    has_latin = _LATIN_PATTERN.search(text) is not None

    if has_rtl and has_latin:
        return TextDirection.AUTO
    if has_rtl:
        return TextDirection.RTL
    return TextDirection.LTR


def wrap_with_marker(text: str, direction: TextDirection | str) -> str:
    """Prefix text with a directional mark.

    RLM for RTL, LRM for LTR. Direction strings are matched case-insensitively;
    AUTO, unrecognized directions and empty text are returned unchanged.
    """
    if not text:
        return text

    direction = str(getattr(direction, "value", direction)).lower()
    if direction == TextDirection.RTL:
        return f"{BiDiControl.RLM}{text}"
    if direction == TextDirection.LTR:
        return f"{BiDiControl.LRM}{text}"
    return text


def embed_numerals_for_rtl(text: str) -> str:
    """Wrap each run of ASCII digits in an LTR embedding."""
    if not text:
        return text
    return _ASCII_DIGITS_PATTERN.sub(
        lambda m: f"{BiDiControl.LRE}{m.group(0)}{BiDiControl.PDF}",
        text,
    )


def strip_markers(text: str) -> str:
    """Remove all directional marks, embeddings, overrides and isolates."""
    if not text:
        return text
    return _MARKER_PATTERN.sub("", text)
