"""Tests for service configuration."""

from __future__ import annotations

from pathlib import Path

import pytest

from polyglossia.config import (
    CacheConfig,
    InterpolationConfig,
    PluralizationConfig,
    RTLConfig,
    TranslationConfig,
)
from polyglossia.exceptions import ConfigurationError, PolyglossiaError
from polyglossia.protocols import FallbackStrategy


class TestDefaults:
    """Tests for default configuration values."""

    def test_defaults(self):
        config = TranslationConfig()
        assert config.default_locale == "en"
        assert config.fallback_strategy is FallbackStrategy.DEFAULT
        assert config.interpolation.prefix == "${"
        assert config.cache.enabled is True
        assert config.cache.ttl == 3600.0
        assert config.rtl.wrap_with_markers is False
        assert config.pluralization.use_directional_markers is True
        assert config.pluralization.ordinal is False

    def test_sections_not_shared(self):
        first = TranslationConfig()
        second = TranslationConfig()
        first.cache.enabled = False
        assert second.cache.enabled is True


class TestValidation:
    """Tests for __post_init__ validation."""

    def test_strategy_string_converted(self):
        assert TranslationConfig(fallback_strategy="throw").fallback_strategy is FallbackStrategy.THROW

    def test_unknown_strategy(self):
        with pytest.raises(ConfigurationError) as exc_info:
            TranslationConfig(fallback_strategy="explode")
        assert "explode" in str(exc_info.value)
        assert exc_info.value.details["allowed"] == ["key", "default", "throw"]

    def test_empty_default_locale(self):
        with pytest.raises(ConfigurationError):
            TranslationConfig(default_locale="")

    def test_non_positive_ttl(self):
        with pytest.raises(ConfigurationError):
            CacheConfig(ttl=0)

    def test_empty_delimiters(self):
        with pytest.raises(ConfigurationError):
            InterpolationConfig(prefix="")

    def test_configuration_error_is_polyglossia_error(self):
        assert issubclass(ConfigurationError, PolyglossiaError)


class TestFromDict:
    """Tests for dictionary loading."""

    def test_nested_sections(self):
        config = TranslationConfig.from_dict({
            "service_name": "files",
            "default_locale": "ar",
            "fallback_strategy": "KEY",
            "interpolation": {"prefix": "{{", "suffix": "}}"},
            "cache": {"ttl": 60},
            "rtl": {"wrap_with_markers": True},
            "pluralization": {"format_numbers": False},
        })
        assert config.service_name == "files"
        assert config.default_locale == "ar"
        assert config.fallback_strategy is FallbackStrategy.KEY
        assert config.interpolation == InterpolationConfig("{{", "}}")
        assert config.cache.ttl == 60
        assert config.rtl == RTLConfig(wrap_with_markers=True)
        assert config.pluralization.format_numbers is False

    def test_section_objects_accepted(self):
        section = PluralizationConfig(enabled=False)
        assert TranslationConfig.from_dict({"pluralization": section}).pluralization is section

    def test_unknown_field(self):
        with pytest.raises(ConfigurationError):
            TranslationConfig.from_dict({"colour": "blue"})

    def test_unknown_section_field(self):
        with pytest.raises(ConfigurationError, match="cache"):
            TranslationConfig.from_dict({"cache": {"size": 3}})

    def test_input_not_mutated(self):
        data = {"cache": {"ttl": 5}}
        TranslationConfig.from_dict(data)
        assert data == {"cache": {"ttl": 5}}


class TestFromYaml:
    """Tests for YAML loading."""

    def test_load(self, tmp_path: Path):
        path = tmp_path / "polyglossia.yaml"
        path.write_text(
            "default_locale: he\n"
            "translations_path: translations\n"
            "fallback_strategy: throw\n"
            "statistics:\n"
            "  track_key_usage: false\n",
            encoding="utf-8",
        )
        config = TranslationConfig.from_yaml(path)
        assert config.default_locale == "he"
        assert config.translations_path == "translations"
        assert config.fallback_strategy is FallbackStrategy.THROW
        assert config.statistics.track_key_usage is False

    def test_empty_file(self, tmp_path: Path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        assert TranslationConfig.from_yaml(path).default_locale == "en"

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(ConfigurationError):
            TranslationConfig.from_yaml(tmp_path / "nope.yaml")

    def test_not_a_mapping(self, tmp_path: Path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            TranslationConfig.from_yaml(path)

    def test_invalid_yaml(self, tmp_path: Path):
        path = tmp_path / "bad.yaml"
        path.write_text("a: [unclosed\n", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            TranslationConfig.from_yaml(path)


class TestFromEnv:
    """Tests for environment loading."""

    def test_from_mapping(self):
        config = TranslationConfig.from_env({
            "POLYGLOSSIA_DEFAULT_LOCALE": "fa",
            "POLYGLOSSIA_SUPPORTED_LOCALES": "fa, ar ,en",
            "POLYGLOSSIA_FALLBACK_STRATEGY": "key",
            "POLYGLOSSIA_CACHE_ENABLED": "off",
            "POLYGLOSSIA_CACHE_TTL": "120",
            "POLYGLOSSIA_PLURALIZATION_ENABLED": "false",
            "POLYGLOSSIA_DEBUG": "1",
        })
        assert config.default_locale == "fa"
        assert config.supported_locales == ["fa", "ar", "en"]
        assert config.fallback_strategy is FallbackStrategy.KEY
        assert config.cache.enabled is False
        assert config.cache.ttl == 120.0
        assert config.pluralization.enabled is False
        assert config.debug is True

    def test_bad_values_use_defaults(self):
        config = TranslationConfig.from_env({
            "POLYGLOSSIA_CACHE_TTL": "soon",
            "POLYGLOSSIA_RTL_ENABLED": "maybe",
        })
        assert config.cache.ttl == 3600.0
        assert config.rtl.enabled is True

    def test_process_environment(self, monkeypatch):
        monkeypatch.setenv("POLYGLOSSIA_SERVICE_NAME", "billing")
        assert TranslationConfig.from_env().service_name == "billing"
