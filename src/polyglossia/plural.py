"""Plural Category Resolution.

This module maps a ``(count, locale)`` pair to a plural category using a
static registry of per-locale configurations. Each configuration carries a
rule family (a closed set of rule descriptors), the locale's numbering
system, its text direction and whether BiDi markers apply by default.

Locale lookup is three-tier: exact tag, then base language, then the
English-like default.

Usage:
    from polyglossia.plural import resolve_category, select_template

    resolve_category(3, "ar")      # -> "few"
    resolve_category(11, "he")     # -> "many"
    resolve_category(2, "xx-YY")   # -> "other"

    select_template({"one": "1 file", "other": "${count} files"}, "few")
    # -> "${count} files"
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping

from polyglossia.protocols import (
    NumberingSystem,
    PluralCategory,
    PluralRuleFunc,
    TextDirection,
    base_language,
)


logger = logging.getLogger(__name__)


class PluralRuleFamily(Enum):
    """Built-in plural rule descriptors."""

    ENGLISH_LIKE = "english_like"
    ARABIC = "arabic"
    HEBREW = "hebrew"
    PERSIAN_URDU = "persian_urdu"

    def cardinal(self, count: float | int) -> PluralCategory:
        """Cardinal category for a count.

        Negative counts match none of the numeric ranges and fall to OTHER.
        """
        if self is PluralRuleFamily.ARABIC:
            if count == 0:
                return PluralCategory.ZERO
            if count == 1:
                return PluralCategory.ONE
            if count == 2:
                return PluralCategory.TWO
            if 3 <= count <= 10:
                return PluralCategory.FEW
            if 11 <= count <= 99:
                return PluralCategory.MANY
            return PluralCategory.OTHER

        if self is PluralRuleFamily.HEBREW:
            if count == 1:
                return PluralCategory.ONE
            if count == 2:
                return PluralCategory.TWO
            if 3 <= count <= 10:
                return PluralCategory.FEW
            if count >= 11:
                return PluralCategory.MANY
            return PluralCategory.OTHER

        # English-like and Persian/Urdu share the one-vs-other split
        return PluralCategory.ONE if count == 1 else PluralCategory.OTHER

    def ordinal(self, count: float | int) -> PluralCategory:
        """Ordinal category for a count."""
        if self in (PluralRuleFamily.ARABIC, PluralRuleFamily.HEBREW):
            if count == 1:
                return PluralCategory.ONE
            if count == 2:
                return PluralCategory.TWO
            if 3 <= count <= 10:
                return PluralCategory.FEW
            return PluralCategory.OTHER

        if self is PluralRuleFamily.PERSIAN_URDU:
            return PluralCategory.ONE if count == 1 else PluralCategory.OTHER

        return PluralCategory.OTHER


@dataclass(frozen=True)
class LocalePluralConfig:
    """Immutable plural configuration for a locale (or locale family).

    Attributes:
        numbering_system: Digit-rendering scheme
        direction: Text direction of the locale
        rule: Plural rule family
        use_directional_markers: Whether BiDi wrapping applies by default
        has_ordinal: Whether the family defines ordinal categories
    """
    numbering_system: NumberingSystem
    direction: TextDirection
    rule: PluralRuleFamily
    use_directional_markers: bool
    has_ordinal: bool = True

    @property
    def is_rtl(self) -> bool:
        return self.direction == TextDirection.RTL

    def plural_category(self, count: float | int) -> PluralCategory:
        return self.rule.cardinal(count)

    def ordinal_category(self, count: float | int) -> PluralCategory:
        if not self.has_ordinal:
            return PluralCategory.OTHER
        return self.rule.ordinal(count)


# ==============================================================================
# Registry
# ==============================================================================

RTL_PLURAL_CONFIGS: Mapping[str, LocalePluralConfig] = {
    # Arabic, Eastern Arabic (Indic) numerals
    "ar": LocalePluralConfig(
        numbering_system=NumberingSystem.ARAB,
        direction=TextDirection.RTL,
        rule=PluralRuleFamily.ARABIC,
        use_directional_markers=True,
    ),
    # Arabic, Western Arabic numerals (Maghreb)
    "ar-MA": LocalePluralConfig(
        numbering_system=NumberingSystem.LATN,
        direction=TextDirection.RTL,
        rule=PluralRuleFamily.ARABIC,
        use_directional_markers=True,
    ),
    "he": LocalePluralConfig(
        numbering_system=NumberingSystem.HEBR,
        direction=TextDirection.RTL,
        rule=PluralRuleFamily.HEBREW,
        use_directional_markers=True,
    ),
    "fa": LocalePluralConfig(
        numbering_system=NumberingSystem.ARAB,
        direction=TextDirection.RTL,
        rule=PluralRuleFamily.PERSIAN_URDU,
        use_directional_markers=True,
    ),
    "ur": LocalePluralConfig(
        numbering_system=NumberingSystem.ARAB,
        direction=TextDirection.RTL,
        rule=PluralRuleFamily.PERSIAN_URDU,
        use_directional_markers=True,
    ),
}

DEFAULT_PLURAL_CONFIG = LocalePluralConfig(
    numbering_system=NumberingSystem.LATN,
    direction=TextDirection.LTR,
    rule=PluralRuleFamily.ENGLISH_LIKE,
    use_directional_markers=False,
    has_ordinal=False,
)

_CONFIGS_BY_LOWER_TAG: dict[str, LocalePluralConfig] = {
    tag.lower(): config for tag, config in RTL_PLURAL_CONFIGS.items()
}


def get_plural_config(locale: str) -> LocalePluralConfig:
    """Get the plural configuration for a locale.

    Lookup order: exact tag (case-insensitive), base language, default.

    Args:
        locale: Locale tag

    Returns:
        LocalePluralConfig for the locale
    """
    if not locale:
        return DEFAULT_PLURAL_CONFIG

    config = RTL_PLURAL_CONFIGS.get(locale)
    if config is not None:
        return config

    config = _CONFIGS_BY_LOWER_TAG.get(locale.replace("_", "-").lower())
    if config is not None:
        return config

    config = _CONFIGS_BY_LOWER_TAG.get(base_language(locale))
    if config is not None:
        return config

    return DEFAULT_PLURAL_CONFIG


def get_numbering_system(locale: str) -> str:
    """Get the numbering system identifier for a locale."""
    return get_plural_config(locale).numbering_system.value


def resolve_category(
    count: float | int,
    locale: str,
    custom_rule: PluralRuleFunc | None = None,
) -> str:
    """Resolve the plural category for a count.

    A custom rule takes precedence and its return value is used as-is.
    If the rule raises, the locale's built-in rule is used instead.

    Args:
        count: The number to categorize
        locale: Target locale
        custom_rule: Optional override

    Returns:
        Category string
    """
    config = get_plural_config(locale)
    if custom_rule is not None:
        try:
            return custom_rule(count)
        except Exception as e:
            logger.warning(f"Custom plural rule failed for locale '{locale}': {e}, using built-in rule")
    return config.plural_category(count).value


def resolve_ordinal_category(count: float | int, locale: str) -> str:
    """Resolve the ordinal category for a count ("other" when undefined)."""
    return get_plural_config(locale).ordinal_category(count).value


def get_plural_categories(locale: str) -> list[str]:
    """Get the categories a locale produces for counts 0..100."""
    config = get_plural_config(locale)
    categories: list[str] = []
    for n in range(101):
        category = config.plural_category(n).value
        if category not in categories:
            categories.append(category)
    return categories


def has_complex_plural_rules(locale: str) -> bool:
    """Check if a locale distinguishes more than two categories."""
    return len(get_plural_categories(locale)) > 2


def get_supported_rtl_locales() -> list[str]:
    """Get the locales with a dedicated plural configuration."""
    return list(RTL_PLURAL_CONFIGS.keys())


# ==============================================================================
# Template selection
# ==============================================================================

CATEGORY_KEY_ALIASES: Mapping[PluralCategory, tuple[str, ...]] = {
    PluralCategory.ZERO: ("0", "zero"),
    PluralCategory.ONE: ("1", "one"),
    PluralCategory.TWO: ("2", "two"),
    PluralCategory.FEW: ("few",),
    PluralCategory.MANY: ("many",),
    PluralCategory.OTHER: ("other",),
}

VALID_ENTRY_KEYS = frozenset(
    key for aliases in CATEGORY_KEY_ALIASES.values() for key in aliases
)


def category_aliases(category: PluralCategory | str) -> tuple[str, ...]:
    """Literal entry keys for a category; unknown categories map to 'other'."""
    resolved = PluralCategory.coerce(category)
    if resolved is None:
        return CATEGORY_KEY_ALIASES[PluralCategory.OTHER]
    return CATEGORY_KEY_ALIASES[resolved]


def select_template(entry: Mapping[str, Any], category: PluralCategory | str) -> str:
    """Pick the template for a category from a plural entry.

    Aliases are tried in fixed order and the first non-empty one wins;
    otherwise the entry's ``other`` template is used.

    Args:
        entry: Plural entry (must contain ``other``)
        category: Resolved category

    Returns:
        Template string
    """
    for key in category_aliases(category):
        template = entry.get(key)
        if template:
            return template
    return entry["other"]


def validate_plural_entry(entry: Any) -> bool:
    """Check the structure of a plural entry.

    A valid entry is a mapping with a non-empty ``other`` template whose keys
    are all known category aliases.
    """
    if not isinstance(entry, Mapping):
        return False
    if not entry.get("other"):
        return False
    return all(key in VALID_ENTRY_KEYS for key in entry)
