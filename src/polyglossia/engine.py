"""Pluralization Engine.

Turns a translation entry, a count and a locale into rendered text plus
category, direction and number metadata. The pipeline per call:

1. resolve the plural category (custom rule, per-locale rule or built-in)
2. select the template through the category alias table
3. render the count with the locale's numbering system
4. interpolate parameters
5. for RTL locales, embed ASCII numerals and prefix a directional mark

The engine never raises for malformed input: missing or invalid entries
degrade to ``"<key> (<count>)"``.

Usage:
    from polyglossia.engine import PluralizationEngine

    engine = PluralizationEngine()
    result = engine.pluralize(
        {"one": "${count} file", "other": "${count} files"},
        count=3,
        locale="en",
    )
    result.text       # "3 files"
    result.category   # "other"
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from polyglossia.bidi import (
    DirectionCache,
    classify_direction,
    embed_numerals_for_rtl,
    is_rtl_locale,
    wrap_with_marker,
)
from polyglossia.interpolation import Interpolator
from polyglossia.numerals import format_number, plain_decimal
from polyglossia.plural import (
    get_plural_config,
    resolve_category,
    select_template,
)
from polyglossia.protocols import (
    Number,
    NumberFormatInfo,
    PluralCategory,
    PluralizationOptions,
    PluralizationResult,
    PluralRuleFunc,
    RTLInfo,
    TextDirection,
    base_language,
)


logger = logging.getLogger(__name__)

FALLBACK_TEMPLATE = "{key} ({count})"


def fallback_text(key: str, count: Number) -> str:
    """Text returned when no usable plural entry exists."""
    return FALLBACK_TEMPLATE.format(key=key, count=plain_decimal(count))


class PluralizationEngine:
    """Stateless pluralization pipeline.

    Holds only read-only collaborators; every call works on the entry
    snapshot it is given.

    Args:
        interpolator: Template interpolator (default ``${name}`` delimiters)
        custom_rules: Per-locale category overrides, keyed by locale tag
        direction_cache: Memo for RTL locale lookups
    """

    def __init__(
        self,
        interpolator: Interpolator | None = None,
        custom_rules: Mapping[str, PluralRuleFunc] | None = None,
        direction_cache: DirectionCache | None = None,
    ) -> None:
        self.interpolator = interpolator or Interpolator()
        self._custom_rules = {
            tag.replace("_", "-").lower(): rule
            for tag, rule in (custom_rules or {}).items()
        }
        self._direction_cache = direction_cache

    def custom_rule_for(self, locale: str) -> PluralRuleFunc | None:
        """Get the registered override for a locale (exact tag, then base)."""
        if not self._custom_rules or not locale:
            return None
        normalized = locale.replace("_", "-").lower()
        rule = self._custom_rules.get(normalized)
        if rule is None:
            rule = self._custom_rules.get(base_language(locale))
        return rule

    def pluralize(
        self,
        entry: Any,
        count: Number,
        locale: str,
        params: Mapping[str, Any] | None = None,
        options: PluralizationOptions | None = None,
        key: str = "",
    ) -> PluralizationResult:
        """Render a translation entry for a count.

        Args:
            entry: Template string, category map, or None when missing
            count: Count driving category selection
            locale: Target locale tag
            params: Interpolation parameters
            options: Per-call switches
            key: Translation key, used in fallback text

        Returns:
            PluralizationResult
        """
        options = options or PluralizationOptions()
        params = params or {}

        if entry is None:
            logger.warning(f"Missing plural translation for key: {key}, using fallback")
            return self.fallback_result(key, count, locale)

        if isinstance(entry, str):
            text = self.interpolator.interpolate(entry, {"count": count, **params})
            return PluralizationResult(
                text=text,
                category=PluralCategory.OTHER.value,
                rtl=RTLInfo(
                    is_rtl=is_rtl_locale(locale, cache=self._direction_cache),
                    direction=classify_direction(text),
                ),
            )

        if not isinstance(entry, Mapping) or not entry.get("other"):
            logger.warning(f"Invalid plural rule for key: {key}, using fallback")
            return self.fallback_result(key, count, locale)

        config = get_plural_config(locale)

        if options.ordinal:
            category = config.ordinal_category(count).value
        else:
            custom_rule = options.custom_rule or self.custom_rule_for(locale)
            category = resolve_category(count, locale, custom_rule)

        template = select_template(entry, category)

        if options.format_numbers:
            formatted_count = format_number(count, locale)
        else:
            formatted_count = plain_decimal(count)

        text = self.interpolator.interpolate(template, {**params, "count": formatted_count})

        if config.is_rtl and config.use_directional_markers and options.use_directional_markers:
            text = embed_numerals_for_rtl(text)
            text = wrap_with_marker(text, config.direction)

        return PluralizationResult(
            text=text,
            category=category,
            rtl=RTLInfo(
                is_rtl=config.is_rtl,
                direction=config.direction,
                script=config.numbering_system.value,
            ),
            number_format=NumberFormatInfo(
                original_number=count,
                formatted_number=formatted_count,
                numbering_system=config.numbering_system.value,
            ),
        )

    def fallback_result(self, key: str, count: Number, locale: str) -> PluralizationResult:
        """Result for a missing or unusable entry: ``"<key> (<count>)"``."""
        return PluralizationResult(
            text=fallback_text(key, count),
            category=PluralCategory.OTHER.value,
            rtl=RTLInfo(
                is_rtl=is_rtl_locale(locale, cache=self._direction_cache),
                direction=TextDirection.LTR,
            ),
        )


_default_engine = PluralizationEngine()


def pluralize(
    entry: Any,
    count: Number,
    locale: str,
    params: Mapping[str, Any] | None = None,
    options: PluralizationOptions | None = None,
    key: str = "",
) -> PluralizationResult:
    """Pluralize with the default engine (convenience function)."""
    return _default_engine.pluralize(entry, count, locale, params, options, key)
