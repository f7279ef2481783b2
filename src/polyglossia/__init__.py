"""polyglossia - pluralization and locale resolution for key-based translations.

Features:
- CLDR-style plural categories for English-like, Arabic, Hebrew and
  Persian/Urdu rule families, cardinal and ordinal
- Locale numerals (Eastern Arabic digits, Hebrew letter numerals)
- RTL locale detection, text direction classification and BiDi markers
- ``${name}`` / ``{name}`` template interpolation with dotted paths
- Translation service with locale fallback, TTL caching and statistics
- Locale-aware date formatting

Example:
    from polyglossia import TranslationConfig, TranslationService, pluralize

    pluralize({"one": "${count} file", "other": "${count} files"}, 3, "en").text
    # -> "3 files"

    service = TranslationService(TranslationConfig(translations_path="translations"))
    service.translate_plural("files", 3, "ar")
"""

from polyglossia.bidi import (
    BiDiControl,
    classify_direction,
    contains_rtl_script,
    embed_numerals_for_rtl,
    get_rtl_info,
    get_rtl_locales,
    is_rtl_locale,
    strip_markers,
    wrap_with_marker,
)
from polyglossia.config import (
    CacheConfig,
    InterpolationConfig,
    PluralizationConfig,
    RTLConfig,
    StatisticsConfig,
    TranslationConfig,
)
from polyglossia.dates import (
    format_date_for_locale,
    format_date_long_for_locale,
    format_date_range_for_locale,
    format_relative_date,
    get_date_format_info,
)
from polyglossia.engine import PluralizationEngine, pluralize
from polyglossia.exceptions import (
    ConfigurationError,
    InvalidPluralEntryError,
    PolyglossiaError,
    TranslationNotFoundError,
)
from polyglossia.interpolation import Interpolator, interpolate
from polyglossia.numerals import format_number
from polyglossia.plural import (
    get_plural_categories,
    get_plural_config,
    get_supported_rtl_locales,
    has_complex_plural_rules,
    resolve_category,
    resolve_ordinal_category,
    validate_plural_entry,
)
from polyglossia.protocols import (
    FallbackStrategy,
    LocaleInfo,
    NumberFormatInfo,
    NumberingSystem,
    PluralCategory,
    PluralizationOptions,
    PluralizationResult,
    RTLInfo,
    TextDirection,
)
from polyglossia.service import TranslationService, TranslationStats
from polyglossia.store import TranslationStore

__version__ = "0.1.0"

__all__ = [
    # Types
    "PluralCategory",
    "TextDirection",
    "NumberingSystem",
    "FallbackStrategy",
    "LocaleInfo",
    "RTLInfo",
    "NumberFormatInfo",
    "PluralizationResult",
    "PluralizationOptions",
    # Plural rules
    "resolve_category",
    "resolve_ordinal_category",
    "get_plural_config",
    "get_plural_categories",
    "get_supported_rtl_locales",
    "has_complex_plural_rules",
    "validate_plural_entry",
    # Numerals and dates
    "format_number",
    "format_date_for_locale",
    "format_date_long_for_locale",
    "format_date_range_for_locale",
    "format_relative_date",
    "get_date_format_info",
    # BiDi
    "BiDiControl",
    "is_rtl_locale",
    "get_rtl_info",
    "get_rtl_locales",
    "contains_rtl_script",
    "classify_direction",
    "wrap_with_marker",
    "embed_numerals_for_rtl",
    "strip_markers",
    # Interpolation and engine
    "Interpolator",
    "interpolate",
    "PluralizationEngine",
    "pluralize",
    # Service
    "TranslationConfig",
    "InterpolationConfig",
    "CacheConfig",
    "StatisticsConfig",
    "RTLConfig",
    "PluralizationConfig",
    "TranslationStore",
    "TranslationService",
    "TranslationStats",
    # Errors
    "PolyglossiaError",
    "TranslationNotFoundError",
    "InvalidPluralEntryError",
    "ConfigurationError",
]
