"""Translation service.

Facade over the translation store and the pluralization engine:

- key lookup with requested-locale -> default-locale fallback
- parameter interpolation
- plural translations with RTL handling and locale numerals
- TTL result caching
- usage statistics
- missing-key strategies (key / default / throw)

Usage:
    from polyglossia import TranslationConfig, TranslationService

    service = TranslationService(TranslationConfig(translations_path="translations"))
    service.translate("greeting", "fr", {"name": "Dana"})
    service.translate_plural("files", 3, "ar")
"""

from __future__ import annotations

import json
import logging
import threading
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Mapping

from polyglossia import bidi, dates, numerals, plural
from polyglossia.cache import TTLCache
from polyglossia.config import TranslationConfig
from polyglossia.engine import PluralizationEngine, fallback_text
from polyglossia.exceptions import InvalidPluralEntryError, TranslationNotFoundError
from polyglossia.interpolation import Interpolator
from polyglossia.protocols import (
    FallbackStrategy,
    Number,
    PluralizationOptions,
    PluralizationResult,
    RTLInfo,
    TextDirection,
)
from polyglossia.store import TranslationStore


logger = logging.getLogger(__name__)


# ==============================================================================
# Result Types
# ==============================================================================

@dataclass
class TranslationStats:
    """Translation usage counters.

    Attributes:
        total_requests: Translations requested
        successful_translations: Keys found in the requested locale
        failed_translations: Keys served by fallback or missing entirely
        cache_hits: Results served from the cache
        cache_misses: Results rendered fresh
        locale_usage: Requests per locale
        key_usage: Requests per key
    """
    total_requests: int = 0
    successful_translations: int = 0
    failed_translations: int = 0
    cache_hits: int = 0
    cache_misses: int = 0
    locale_usage: dict[str, int] = field(default_factory=dict)
    key_usage: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalRequests": self.total_requests,
            "successfulTranslations": self.successful_translations,
            "failedTranslations": self.failed_translations,
            "cacheHits": self.cache_hits,
            "cacheMisses": self.cache_misses,
            "localeUsage": dict(self.locale_usage),
            "keyUsage": dict(self.key_usage),
        }


@dataclass(frozen=True)
class RTLTranslation:
    """Translated text with direction metadata."""
    text: str
    rtl: RTLInfo


@dataclass(frozen=True)
class TranslationMetadata:
    """Debug information about how a key was translated.

    Attributes:
        key: Translation key
        original_text: Stored entry (JSON for plural maps), or the key
        translated_text: Rendered text
        locale: Requested locale
        fallback_used: Whether the default locale supplied the entry
        timestamp: When the metadata was produced
        rtl: Direction info, when RTL metadata is enabled
    """
    key: str
    original_text: str
    translated_text: str
    locale: str
    fallback_used: bool
    timestamp: datetime
    rtl: RTLInfo | None = None


def require_valid_plural_entry(key: str, entry: Any) -> Mapping[str, Any]:
    """Return a plural entry if it is structurally valid.

    Raises:
        InvalidPluralEntryError: If the entry has no ``other`` form or
            contains unknown category keys
    """
    if not isinstance(entry, Mapping):
        raise InvalidPluralEntryError(key, "not a category map")
    if not entry.get("other"):
        raise InvalidPluralEntryError(key)
    if not plural.validate_plural_entry(entry):
        unknown = sorted(k for k in entry if k not in plural.VALID_ENTRY_KEYS)
        raise InvalidPluralEntryError(key, f"unknown categories: {', '.join(unknown)}")
    return entry


def _params_fingerprint(params: Mapping[str, Any] | None) -> str:
    if not params:
        return ""
    return json.dumps(params, sort_keys=True, default=str, ensure_ascii=False)


# ==============================================================================
# Translation Service
# ==============================================================================

class TranslationService:
    """Key-based translation with pluralization and RTL support.

    Args:
        config: Service configuration (defaults if None)
        store: Translation tables (loaded from ``config.translations_path``
            if None)
        engine: Pluralization engine (built from config if None)
    """

    def __init__(
        self,
        config: TranslationConfig | None = None,
        store: TranslationStore | None = None,
        engine: PluralizationEngine | None = None,
    ) -> None:
        self.config = config or TranslationConfig()
        self.store = store or TranslationStore(
            translations_path=self.config.translations_path,
            default_locale=self.config.default_locale,
            debug=self.config.debug,
        )
        self.engine = engine or PluralizationEngine(
            interpolator=Interpolator(
                prefix=self.config.interpolation.prefix,
                suffix=self.config.interpolation.suffix,
            ),
            custom_rules=self.config.pluralization.custom_rules,
        )
        self._direction_cache = bidi.DirectionCache()
        self._cache = TTLCache(
            max_size=self.config.cache.max_size,
            ttl=self.config.cache.ttl,
        )
        self._stats = TranslationStats()
        self._stats_lock = threading.Lock()

        logger.info(f"TranslationService initialized for service: {self.config.service_name}")

    @property
    def default_locale(self) -> str:
        return self.config.default_locale

    # --------------------------------------------------------------------------
    # Plain translations
    # --------------------------------------------------------------------------

    def translate(
        self,
        key: str,
        locale: str | None = None,
        params: Mapping[str, Any] | None = None,
    ) -> str:
        """Translate a key with parameter interpolation.

        Args:
            key: Translation key
            locale: Target locale (default locale if None)
            params: Interpolation parameters

        Returns:
            Translated text, or the key if it is missing everywhere

        Raises:
            TranslationNotFoundError: If the key is missing and the fallback
                strategy is ``throw``
        """
        return self.translate_with_options(key, locale=locale, params=params)

    def translate_with_options(
        self,
        key: str,
        locale: str | None = None,
        params: Mapping[str, Any] | None = None,
        use_fallback: bool = True,
    ) -> str:
        """Translate a key with full options.

        Args:
            key: Translation key
            locale: Target locale (default locale if None)
            params: Interpolation parameters
            use_fallback: Try the default locale when the key is missing

        Returns:
            Translated text
        """
        locale = locale or self.default_locale
        self._record_request(key, locale)

        cache_key = f"{key}:{locale}:{int(use_fallback)}:{_params_fingerprint(params)}"
        hit, cached = self._cache_get(cache_key)
        if hit:
            return cached

        entry, _ = self._lookup(key, locale, use_fallback)
        if entry is None:
            text = self._handle_missing(key, locale)
        elif isinstance(entry, str):
            text = entry
        else:
            text = json.dumps(entry, ensure_ascii=False)

        if params:
            text = self.engine.interpolator.interpolate(text, params)

        if self.config.rtl.enabled and self.config.rtl.wrap_with_markers:
            text = bidi.wrap_with_marker(text, self._marker_direction(text, locale))

        self._cache_set(cache_key, text)
        return text

    def has_key(self, key: str, locale: str | None = None) -> bool:
        """Check if a key exists in the locale or the default locale."""
        locale = locale or self.default_locale
        if self.store.get_entry(locale, key):
            return True
        return locale != self.default_locale and bool(self.store.get_entry(self.default_locale, key))

    def get_keys(self, locale: str | None = None) -> list[str]:
        """Get all keys defined for a locale."""
        return self.store.keys(locale or self.default_locale)

    def get_available_locales(self) -> list[str]:
        """Get locales with loaded translations."""
        return self.store.locales()

    def get_supported_locales(self) -> list[str]:
        """Get the locales the service is configured to advertise."""
        return list(self.config.supported_locales)

    def is_locale_supported(self, locale: str) -> bool:
        """Check a locale against the configured supported locales."""
        return locale in self.config.supported_locales

    # --------------------------------------------------------------------------
    # Plural translations
    # --------------------------------------------------------------------------

    def translate_plural(
        self,
        key: str,
        count: Number,
        locale: str | None = None,
        params: Mapping[str, Any] | None = None,
    ) -> str:
        """Translate a key with plural selection.

        Args:
            key: Translation key
            count: Count driving the plural category
            locale: Target locale (default locale if None)
            params: Extra interpolation parameters

        Returns:
            Rendered text
        """
        return self.translate_plural_with_options(key, count, locale=locale, params=params)

    def translate_plural_with_options(
        self,
        key: str,
        count: Number,
        locale: str | None = None,
        params: Mapping[str, Any] | None = None,
        format_numbers: bool | None = None,
        use_directional_markers: bool | None = None,
        ordinal: bool | None = None,
    ) -> str:
        """Translate a key with plural selection and per-call switches.

        Switches left as None take their value from the pluralization config.
        """
        if not self.config.pluralization.enabled:
            logger.warning("Pluralization is disabled. Enable it in config to use translate_plural.")
            return fallback_text(key, count)

        locale = locale or self.default_locale
        options = self._plural_options(format_numbers, use_directional_markers, ordinal)
        self._record_request(key, locale)

        cache_key = (
            f"plural:{key}:{numerals.plain_decimal(count)}:{locale}:"
            f"{int(options.format_numbers)}{int(options.use_directional_markers)}"
            f"{int(options.ordinal)}:{_params_fingerprint(params)}"
        )
        hit, cached = self._cache_get(cache_key)
        if hit:
            return cached

        text = self._pluralize(key, count, locale, params, options).text
        self._cache_set(cache_key, text)
        return text

    def translate_plural_with_result(
        self,
        key: str,
        count: Number,
        locale: str | None = None,
        params: Mapping[str, Any] | None = None,
        options: PluralizationOptions | None = None,
    ) -> PluralizationResult:
        """Translate with plural selection and return full metadata.

        Results are not cached.
        """
        locale = locale or self.default_locale
        if not self.config.pluralization.enabled:
            logger.warning("Pluralization is disabled. Enable it in config to use translate_plural.")
            return self.engine.fallback_result(key, count, locale)

        options = options or self._plural_options(None, None, None)
        self._record_request(key, locale)
        return self._pluralize(key, count, locale, params, options)

    def has_plural_rules(self, key: str, locale: str | None = None) -> bool:
        """Check if a key's entry is a category map with an ``other`` form."""
        locale = locale or self.default_locale
        entry, _ = self._find(key, locale, use_fallback=True)
        return isinstance(entry, Mapping) and "other" in entry

    def get_plural_categories(self, locale: str | None = None) -> list[str]:
        """Get the plural categories a locale produces."""
        return plural.get_plural_categories(locale or self.default_locale)

    def get_supported_rtl_locales(self) -> list[str]:
        """Get RTL locales with dedicated plural configuration."""
        return plural.get_supported_rtl_locales()

    def has_complex_plural_rules(self, locale: str) -> bool:
        """Check if a locale uses more than one/other."""
        return plural.has_complex_plural_rules(locale)

    def _plural_options(
        self,
        format_numbers: bool | None,
        use_directional_markers: bool | None,
        ordinal: bool | None,
    ) -> PluralizationOptions:
        defaults = self.config.pluralization
        return PluralizationOptions(
            format_numbers=defaults.format_numbers if format_numbers is None else format_numbers,
            use_directional_markers=(
                defaults.use_directional_markers
                if use_directional_markers is None
                else use_directional_markers
            ),
            ordinal=defaults.ordinal if ordinal is None else ordinal,
        )

    def _pluralize(
        self,
        key: str,
        count: Number,
        locale: str,
        params: Mapping[str, Any] | None,
        options: PluralizationOptions,
    ) -> PluralizationResult:
        entry, _ = self._lookup(key, locale, use_fallback=True)

        if entry is None:
            self._handle_missing_plural(key, locale)
        elif isinstance(entry, Mapping) and self.config.pluralization.validate_plural_rules:
            try:
                require_valid_plural_entry(key, entry)
            except InvalidPluralEntryError as e:
                if self.config.fallback_strategy is FallbackStrategy.THROW:
                    raise
                logger.warning(f"{e.message}, using fallback")
                return self.engine.fallback_result(key, count, locale)

        return self.engine.pluralize(entry, count, locale, params=params, options=options, key=key)

    # --------------------------------------------------------------------------
    # Formatting
    # --------------------------------------------------------------------------

    def format_number_for_locale(self, value: Number, locale: str | None = None) -> str:
        """Format a number with the locale's numbering system."""
        return numerals.format_number(value, locale or self.default_locale)

    def format_date_for_locale(
        self,
        value: dates.DateInput,
        locale: str | None = None,
        style: str | None = None,
    ) -> str:
        """Format a date for a locale."""
        return dates.format_date_for_locale(value, locale or self.default_locale, style=style)

    # --------------------------------------------------------------------------
    # RTL
    # --------------------------------------------------------------------------

    def translate_with_rtl(
        self,
        key: str,
        locale: str | None = None,
        params: Mapping[str, Any] | None = None,
    ) -> RTLTranslation:
        """Translate a key and attach the locale's direction."""
        locale = locale or self.default_locale
        text = self.translate(key, locale, params)
        info = self.get_rtl_info(locale)
        return RTLTranslation(text=text, rtl=RTLInfo(is_rtl=info.is_rtl, direction=info.direction))

    def translate_with_directional_markers(
        self,
        key: str,
        locale: str | None = None,
        params: Mapping[str, Any] | None = None,
    ) -> str:
        """Translate a key and prefix the mark matching its direction.

        The direction comes from the text content, or from the locale when
        ``rtl.auto_detect`` is off.
        """
        text = self.translate(key, locale, params)
        if not self.config.rtl.enabled:
            return text
        return bidi.wrap_with_marker(text, self._marker_direction(text, locale or self.default_locale))

    def is_rtl_locale(self, locale: str) -> bool:
        return bidi.is_rtl_locale(locale, cache=self._direction_cache)

    def get_rtl_info(self, locale: str) -> RTLInfo:
        return bidi.get_rtl_info(locale, cache=self._direction_cache)

    def get_text_direction(self, text: str) -> TextDirection:
        return bidi.classify_direction(text)

    def _marker_direction(self, text: str, locale: str) -> TextDirection:
        """Mark direction from text content, or from the locale without auto-detection."""
        if self.config.rtl.auto_detect:
            return bidi.classify_direction(text)
        return self.get_rtl_info(locale).direction

    # --------------------------------------------------------------------------
    # Diagnostics
    # --------------------------------------------------------------------------

    def get_translation_metadata(self, key: str, locale: str | None = None) -> TranslationMetadata:
        """Describe how a key resolves for a locale."""
        locale = locale or self.default_locale
        entry, fallback_used = self._find(key, locale, use_fallback=True)
        if entry is None:
            original_text = key
        elif isinstance(entry, str):
            original_text = entry
        else:
            original_text = json.dumps(entry, ensure_ascii=False)

        rtl = None
        if self.config.rtl.include_directional_info:
            rtl = self.get_rtl_info(locale)

        return TranslationMetadata(
            key=key,
            original_text=original_text,
            translated_text=self.translate(key, locale),
            locale=locale,
            fallback_used=fallback_used,
            timestamp=datetime.now(),
            rtl=rtl,
        )

    def get_stats(self) -> TranslationStats:
        """Get a snapshot of the usage statistics."""
        with self._stats_lock:
            return replace(
                self._stats,
                locale_usage=dict(self._stats.locale_usage),
                key_usage=dict(self._stats.key_usage),
            )

    def clear_cache(self) -> None:
        """Drop all cached results."""
        self._cache.clear()
        logger.debug("Translation cache cleared")

    def reload_translations(self) -> None:
        """Reload translation files and drop cached results."""
        self.store.reload()
        self.clear_cache()

    # --------------------------------------------------------------------------
    # Internals
    # --------------------------------------------------------------------------

    def _find(self, key: str, locale: str, use_fallback: bool) -> tuple[Any | None, bool]:
        """Find an entry without touching statistics.

        Returns:
            ``(entry, fallback_used)``
        """
        entry = self.store.get_entry(locale, key)
        if entry:
            return entry, False
        if use_fallback and locale != self.default_locale:
            entry = self.store.get_entry(self.default_locale, key)
            if entry:
                return entry, True
        return None, False

    def _lookup(self, key: str, locale: str, use_fallback: bool) -> tuple[Any | None, bool]:
        entry, fallback_used = self._find(key, locale, use_fallback)
        if entry is not None and not fallback_used:
            self._count("successful_translations")
        else:
            self._count("failed_translations")
            if fallback_used:
                logger.debug(
                    f"Translation not found for key '{key}' in locale '{locale}', using fallback"
                )
        return entry, fallback_used

    def _handle_missing(self, key: str, locale: str) -> str:
        strategy = self.config.fallback_strategy
        if strategy is FallbackStrategy.THROW:
            raise TranslationNotFoundError(key, locale)
        if strategy is FallbackStrategy.KEY:
            logger.warning(f"Translation key not found: {key} (locale: {locale})")
        else:
            logger.warning(f"Translation key not found: {key} (locale: {locale}), returning key")
        return key

    def _handle_missing_plural(self, key: str, locale: str) -> None:
        if self.config.fallback_strategy is FallbackStrategy.THROW:
            raise TranslationNotFoundError(key, locale)

    def _record_request(self, key: str, locale: str) -> None:
        settings = self.config.statistics
        if not settings.enabled:
            return
        with self._stats_lock:
            self._stats.total_requests += 1
            if settings.track_locale_usage:
                self._stats.locale_usage[locale] = self._stats.locale_usage.get(locale, 0) + 1
            if settings.track_key_usage:
                self._stats.key_usage[key] = self._stats.key_usage.get(key, 0) + 1

    def _count(self, counter: str) -> None:
        if not self.config.statistics.enabled:
            return
        with self._stats_lock:
            setattr(self._stats, counter, getattr(self._stats, counter) + 1)

    def _cache_get(self, cache_key: str) -> tuple[bool, Any]:
        if not self.config.cache.enabled:
            return False, None
        hit, value = self._cache.get(cache_key)
        self._count("cache_hits" if hit else "cache_misses")
        return hit, value

    def _cache_set(self, cache_key: str, value: str) -> None:
        if self.config.cache.enabled:
            self._cache.set(cache_key, value)
