"""Configuration for the translation service.

``TranslationConfig`` groups the service settings; nested sections cover
interpolation delimiters, result caching, usage statistics, RTL handling
and pluralization.

Configs can be built directly, from a dictionary, from a YAML file or
from ``POLYGLOSSIA_*`` environment variables.

Example:
    >>> config = TranslationConfig(
    ...     service_name="files",
    ...     default_locale="en",
    ...     translations_path="translations",
    ...     fallback_strategy=FallbackStrategy.KEY,
    ... )
    >>> config = TranslationConfig.from_yaml("polyglossia.yaml")
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable

import yaml

from polyglossia.exceptions import ConfigurationError
from polyglossia.protocols import FallbackStrategy


ENV_PREFIX = "POLYGLOSSIA_"


@dataclass
class InterpolationConfig:
    """Placeholder delimiters for the primary interpolation syntax."""

    prefix: str = "${"
    suffix: str = "}"

    def __post_init__(self) -> None:
        if not self.prefix or not self.suffix:
            raise ConfigurationError("interpolation prefix and suffix must be non-empty")


@dataclass
class CacheConfig:
    """Result cache settings.

    Attributes:
        enabled: Cache rendered translations
        ttl: Entry lifetime in seconds
        max_size: Maximum cached entries
    """

    enabled: bool = True
    ttl: float = 3600.0
    max_size: int = 10000

    def __post_init__(self) -> None:
        if self.ttl <= 0:
            raise ConfigurationError("cache ttl must be positive")
        if self.max_size <= 0:
            raise ConfigurationError("cache max_size must be positive")


@dataclass
class StatisticsConfig:
    """Usage statistics settings."""

    enabled: bool = True
    track_key_usage: bool = True
    track_locale_usage: bool = True


@dataclass
class RTLConfig:
    """Right-to-left handling for plain translations.

    Attributes:
        enabled: Apply directional markers in ``translate_with_directional_markers``
        auto_detect: Detect direction from text content
        wrap_with_markers: Wrap every plain translation with markers
        include_directional_info: Attach RTL info to translation metadata
    """

    enabled: bool = True
    auto_detect: bool = True
    wrap_with_markers: bool = False
    include_directional_info: bool = True


@dataclass
class PluralizationConfig:
    """Pluralization settings.

    Attributes:
        enabled: Allow plural translations
        format_numbers: Render counts with the locale's numbering system
        use_directional_markers: Apply BiDi markers to RTL plural text
        validate_plural_rules: Reject plural entries without an ``other`` form
        ordinal: Use ordinal categories by default
        custom_rules: Per-locale category overrides
    """

    enabled: bool = True
    format_numbers: bool = True
    use_directional_markers: bool = True
    validate_plural_rules: bool = True
    ordinal: bool = False
    custom_rules: dict[str, Callable[[int | float], str]] = field(default_factory=dict)


_SECTIONS: dict[str, type] = {
    "interpolation": InterpolationConfig,
    "cache": CacheConfig,
    "statistics": StatisticsConfig,
    "rtl": RTLConfig,
    "pluralization": PluralizationConfig,
}


@dataclass
class TranslationConfig:
    """Translation service configuration.

    Attributes:
        service_name: Name used in log messages
        default_locale: Locale used when a key is missing in the requested one
        supported_locales: Locales the service advertises
        translations_path: Directory holding ``<locale>.json|yaml`` files
        debug: Log per-file load details
        fallback_strategy: Behavior for keys missing in every locale
    """

    service_name: str = "polyglossia"
    default_locale: str = "en"
    supported_locales: list[str] = field(default_factory=lambda: ["en", "fr", "es", "de", "ar"])
    translations_path: str | None = None
    debug: bool = False
    fallback_strategy: FallbackStrategy = FallbackStrategy.DEFAULT
    interpolation: InterpolationConfig = field(default_factory=InterpolationConfig)
    cache: CacheConfig = field(default_factory=CacheConfig)
    statistics: StatisticsConfig = field(default_factory=StatisticsConfig)
    rtl: RTLConfig = field(default_factory=RTLConfig)
    pluralization: PluralizationConfig = field(default_factory=PluralizationConfig)

    def __post_init__(self) -> None:
        """Validate and normalize configuration."""
        if not self.default_locale:
            raise ConfigurationError("default_locale must be non-empty")
        if isinstance(self.fallback_strategy, str) and not isinstance(
            self.fallback_strategy, FallbackStrategy
        ):
            try:
                self.fallback_strategy = FallbackStrategy(self.fallback_strategy)
            except ValueError:
                raise ConfigurationError(
                    f"Unknown fallback strategy: {self.fallback_strategy}",
                    {"allowed": [s.value for s in FallbackStrategy]},
                ) from None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TranslationConfig":
        """Create config from dictionary.

        Nested sections may be given as dictionaries.
        """
        data = dict(data)
        for name, section_cls in _SECTIONS.items():
            if isinstance(data.get(name), dict):
                try:
                    data[name] = section_cls(**data[name])
                except TypeError as e:
                    raise ConfigurationError(f"Invalid '{name}' section: {e}") from e
        if "fallback_strategy" in data and isinstance(data["fallback_strategy"], str):
            data["fallback_strategy"] = data["fallback_strategy"].lower()

        try:
            return cls(**data)
        except TypeError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e

    @classmethod
    def from_yaml(cls, path: str | Path) -> "TranslationConfig":
        """Load config from a YAML file."""
        path = Path(path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Failed to read config file {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"Config file {path} must contain a mapping")
        return cls.from_dict(data)

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> "TranslationConfig":
        """Create config from environment variables.

        Environment Variables:
            POLYGLOSSIA_SERVICE_NAME: Service name
            POLYGLOSSIA_DEFAULT_LOCALE: Default locale (default: en)
            POLYGLOSSIA_SUPPORTED_LOCALES: Comma-separated locale list
            POLYGLOSSIA_TRANSLATIONS_PATH: Translations directory
            POLYGLOSSIA_DEBUG: Enable load logging
            POLYGLOSSIA_FALLBACK_STRATEGY: key, default or throw
            POLYGLOSSIA_CACHE_ENABLED: Enable result cache (default: true)
            POLYGLOSSIA_CACHE_TTL: Cache TTL in seconds (default: 3600)
            POLYGLOSSIA_RTL_ENABLED: Enable RTL markers (default: true)
            POLYGLOSSIA_PLURALIZATION_ENABLED: Enable plurals (default: true)
        """
        env = os.environ if environ is None else environ

        def get_bool(key: str, default: bool) -> bool:
            value = env.get(ENV_PREFIX + key, "").lower()
            if value in ("true", "1", "yes", "on"):
                return True
            if value in ("false", "0", "no", "off"):
                return False
            return default

        def get_float(key: str, default: float) -> float:
            try:
                return float(env.get(ENV_PREFIX + key, default))
            except ValueError:
                return default

        data: dict[str, Any] = {
            "debug": get_bool("DEBUG", False),
            "cache": {
                "enabled": get_bool("CACHE_ENABLED", True),
                "ttl": get_float("CACHE_TTL", 3600.0),
            },
            "rtl": {"enabled": get_bool("RTL_ENABLED", True)},
            "pluralization": {"enabled": get_bool("PLURALIZATION_ENABLED", True)},
        }
        for key in ("SERVICE_NAME", "DEFAULT_LOCALE", "TRANSLATIONS_PATH", "FALLBACK_STRATEGY"):
            value = env.get(ENV_PREFIX + key)
            if value:
                data[key.lower()] = value
        locales = env.get(ENV_PREFIX + "SUPPORTED_LOCALES")
        if locales:
            data["supported_locales"] = [loc.strip() for loc in locales.split(",") if loc.strip()]

        return cls.from_dict(data)
