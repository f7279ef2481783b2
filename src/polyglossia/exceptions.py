"""Exceptions raised by polyglossia.

The pluralization engine and the text utilities never raise for bad
input; these are raised only by the translation service (in ``throw``
fallback mode) and by configuration validation.
"""

from __future__ import annotations

from typing import Any


class PolyglossiaError(Exception):
    """Base exception for all polyglossia errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)


class TranslationNotFoundError(PolyglossiaError):
    """Raised when a key is missing and the fallback strategy is ``throw``."""

    def __init__(self, key: str, locale: str) -> None:
        self.key = key
        self.locale = locale
        super().__init__(
            f"Translation not found for key: {key} in locale: {locale}",
            {"key": key, "locale": locale},
        )


class InvalidPluralEntryError(PolyglossiaError):
    """Raised when a plural entry has no ``other`` form or unknown keys."""

    def __init__(self, key: str, reason: str = "missing 'other' form") -> None:
        self.key = key
        self.reason = reason
        super().__init__(f"Invalid plural entry for key: {key} ({reason})", {"key": key})


class ConfigurationError(PolyglossiaError):
    """Raised when a configuration value is invalid."""

    pass
