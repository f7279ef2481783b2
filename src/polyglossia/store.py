"""Translation store.

Holds per-locale translation tables loaded from a directory of
``<locale>.json`` / ``<locale>.yaml`` files:

    translations/
        en.json      {"files": {"one": "${count} file", "other": "${count} files"}}
        ar.yaml      files: {zero: ..., one: ..., other: ...}

Reloads build a fresh table set and swap it in atomically, so readers
always see a consistent snapshot.
"""

from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import Any, Mapping

import yaml


logger = logging.getLogger(__name__)

TRANSLATION_EXTENSIONS = (".json", ".yaml", ".yml")

Tables = dict[str, dict[str, Any]]


class TranslationStore:
    """Locale -> key -> entry tables.

    Args:
        translations_path: Directory of translation files (None for an
            in-memory store filled through ``add_translations``)
        default_locale: Locale guaranteed to exist, possibly empty
        debug: Log per-file load details
    """

    def __init__(
        self,
        translations_path: str | Path | None = None,
        default_locale: str = "en",
        debug: bool = False,
    ) -> None:
        self.translations_path = Path(translations_path) if translations_path else None
        self.default_locale = default_locale
        self.debug = debug
        self._tables: Tables = {default_locale: {}}
        self._lock = threading.Lock()
        if self.translations_path is not None:
            self.load()

    def load(self) -> None:
        """Load every translation file in the directory.

        Unreadable files are logged and skipped.
        """
        tables = self._read_directory()
        with self._lock:
            self._tables = tables

    def reload(self) -> None:
        """Re-read translation files."""
        self.load()
        logger.info(f"Translations reloaded ({len(self._tables)} locales)")

    def _read_directory(self) -> Tables:
        empty: Tables = {self.default_locale: {}}
        directory = self.translations_path
        if directory is None:
            return empty

        if not directory.is_dir():
            logger.warning(f"Translations directory not found: {directory}")
            return empty

        tables: Tables = {}
        for path in sorted(directory.iterdir()):
            if path.suffix not in TRANSLATION_EXTENSIONS or not path.is_file():
                continue
            data = self._read_file(path)
            if data is None:
                continue
            tables.setdefault(path.stem, {}).update(data)
            if self.debug:
                logger.debug(f"Loaded {len(data)} translations for locale: {path.stem}")

        if not tables:
            logger.warning("No translations loaded, using empty fallback")
            return empty
        return tables

    def _read_file(self, path: Path) -> dict[str, Any] | None:
        try:
            with open(path, "r", encoding="utf-8") as f:
                if path.suffix == ".json":
                    data = json.load(f)
                else:
                    data = yaml.safe_load(f)
        except (OSError, ValueError, yaml.YAMLError) as e:
            logger.warning(f"Failed to load translations from {path}: {e}")
            return None

        if data is None:
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Translation file {path} must contain a mapping, skipping")
            return None
        return data

    def get_entry(self, locale: str, key: str) -> Any | None:
        """Get the entry for a key in one locale, or None."""
        table = self._tables.get(locale)
        if table is None:
            return None
        return table.get(key)

    def has_locale(self, locale: str) -> bool:
        return locale in self._tables

    def locales(self) -> list[str]:
        """Get loaded locales."""
        return list(self._tables.keys())

    def keys(self, locale: str) -> list[str]:
        """Get the keys defined for a locale."""
        return list(self._tables.get(locale, {}).keys())

    def add_translations(self, locale: str, translations: Mapping[str, Any]) -> None:
        """Merge entries into a locale's table.

        The merged table replaces the old one in a single swap.
        """
        with self._lock:
            tables = dict(self._tables)
            merged = dict(tables.get(locale, {}))
            merged.update(translations)
            tables[locale] = merged
            self._tables = tables
