"""Shared types for the pluralization engine.

This module defines the enums and value objects passed between the
plural resolver, numeral formatter, BiDi utilities and the engine.

Types:
- PluralCategory: CLDR-style plural categories
- TextDirection: LTR / RTL / AUTO
- NumberingSystem: digit-rendering schemes
- LocaleInfo: parsed locale tag
- RTLInfo, NumberFormatInfo, PluralizationResult: engine output
- PluralizationOptions: per-call engine switches
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Callable, Mapping, Union


# ==============================================================================
# Enums and Type Definitions
# ==============================================================================

class PluralCategory(str, Enum):
    """CLDR plural categories.

    Based on Unicode CLDR plural rules:
    https://cldr.unicode.org/index/cldr-spec/plural-rules
    """
    ZERO = "zero"
    ONE = "one"
    TWO = "two"
    FEW = "few"
    MANY = "many"
    OTHER = "other"

    @classmethod
    def coerce(cls, value: "PluralCategory | str") -> "PluralCategory | None":
        """Convert a wire-format category string, or None if unknown."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value))
        except ValueError:
            return None


class TextDirection(str, Enum):
    """Text direction for layout."""
    LTR = "ltr"
    RTL = "rtl"
    AUTO = "auto"


class NumberingSystem(str, Enum):
    """Digit-rendering schemes (CLDR numbering system identifiers)."""
    LATN = "latn"  # 0123456789
    ARAB = "arab"  # ٠١٢٣٤٥٦٧٨٩
    HEBR = "hebr"  # Hebrew letter numerals
    THAI = "thai"
    BENG = "beng"
    DEVA = "deva"


class FallbackStrategy(str, Enum):
    """What the translation service does when a key is missing."""
    KEY = "key"
    DEFAULT = "default"
    THROW = "throw"


# A translation entry is either a template string or a category -> template map
TranslationEntry = Union[str, Mapping[str, str]]

# Custom plural rule: count -> category string (returned verbatim)
PluralRuleFunc = Callable[[Union[int, float]], str]

Number = Union[int, float, Decimal]


# ==============================================================================
# Data Classes
# ==============================================================================

@dataclass(frozen=True)
class LocaleInfo:
    """Parsed locale tag.

    Attributes:
        language: ISO 639 language code (e.g., "ar", "he")
        region: ISO 3166-1 region code (e.g., "MA", "IL")
        script: ISO 15924 script code (e.g., "Arab")
        variant: Locale variant
    """
    language: str
    region: str | None = None
    script: str | None = None
    variant: str | None = None

    @property
    def tag(self) -> str:
        """Get BCP 47 language tag."""
        parts = [self.language]
        if self.script:
            parts.append(self.script)
        if self.region:
            parts.append(self.region)
        if self.variant:
            parts.append(self.variant)
        return "-".join(parts)

    @property
    def babel_identifier(self) -> str:
        """Get the underscore-separated identifier Babel expects."""
        parts = [self.language]
        if self.script:
            parts.append(self.script)
        if self.region:
            parts.append(self.region)
        return "_".join(parts)

    @classmethod
    def parse(cls, tag: str) -> "LocaleInfo":
        """Parse a locale tag.

        Supports formats:
        - Simple: "ar", "he"
        - With region: "ar-MA", "he_IL"
        - With script: "az-Arab"
        - Full: "az-Arab-IR"

        Args:
            tag: Locale tag string

        Returns:
            Parsed LocaleInfo
        """
        parts = tag.replace("_", "-").split("-")

        language = parts[0].lower()
        region = None
        script = None
        variant = None

        for part in parts[1:]:
            if len(part) == 4 and part.isalpha():
                script = part.capitalize()
            elif len(part) == 2 and part.isalpha():
                region = part.upper()
            elif len(part) == 3 and part.isdigit():
                region = part
            elif part:
                variant = part.lower()

        return cls(
            language=language,
            region=region,
            script=script,
            variant=variant,
        )


def base_language(locale: str) -> str:
    """Return the base language of a tag (the part before the first '-')."""
    return locale.replace("_", "-").split("-")[0].lower()


@dataclass(frozen=True)
class RTLInfo:
    """Direction metadata attached to a result.

    Attributes:
        is_rtl: Whether the locale is right-to-left
        direction: Direction of the rendered text
        script: Numbering system / script tag, if known
        name: Human-readable language name, if known
    """
    is_rtl: bool
    direction: TextDirection
    script: str | None = None
    name: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "isRTL": self.is_rtl,
            "direction": self.direction.value,
        }
        if self.script is not None:
            data["script"] = self.script
        return data


@dataclass(frozen=True)
class NumberFormatInfo:
    """Number formatting metadata.

    Attributes:
        original_number: The count passed in
        formatted_number: Locale-rendered numeral
        numbering_system: Numbering system used for rendering
    """
    original_number: Number
    formatted_number: str
    numbering_system: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "originalNumber": self.original_number,
            "formattedNumber": self.formatted_number,
            "numberingSystem": self.numbering_system,
        }


@dataclass(frozen=True)
class PluralizationResult:
    """Result of a pluralization call.

    Created fresh per call; compared by value.

    Attributes:
        text: Final rendered text
        category: Plural category used (wire-format string)
        rtl: Direction metadata
        number_format: Number metadata (absent on degrade paths)
    """
    text: str
    category: str
    rtl: RTLInfo
    number_format: NumberFormatInfo | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the public API shape."""
        data: dict[str, Any] = {
            "text": self.text,
            "category": self.category,
            "rtl": self.rtl.to_dict(),
        }
        if self.number_format is not None:
            data["numberFormat"] = self.number_format.to_dict()
        return data


@dataclass(frozen=True)
class PluralizationOptions:
    """Per-call switches for the pluralization engine.

    Attributes:
        format_numbers: Render the count with the locale's numbering system
        use_directional_markers: Apply BiDi markers for RTL locales
        custom_rule: Category override for this call
        ordinal: Use ordinal instead of cardinal categories
    """
    format_numbers: bool = True
    use_directional_markers: bool = True
    custom_rule: PluralRuleFunc | None = None
    ordinal: bool = False
