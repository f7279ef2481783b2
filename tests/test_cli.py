"""Tests for the command-line interface."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from polyglossia.bidi import BiDiControl
from polyglossia.cli import app


runner = CliRunner()


@pytest.fixture
def translations_dir(tmp_path: Path) -> Path:
    (tmp_path / "en.json").write_text(
        json.dumps({
            "greeting": "Hello ${name}",
            "files": {"one": "${count} file", "other": "${count} files"},
        }),
        encoding="utf-8",
    )
    (tmp_path / "ar.json").write_text(
        json.dumps(
            {"files": {"few": "${count} ملفات", "other": "${count} ملف"}},
            ensure_ascii=False,
        ),
        encoding="utf-8",
    )
    return tmp_path


class TestPluralCommand:
    """Tests for `polyglossia plural`."""

    def test_english(self, translations_dir):
        result = runner.invoke(app, ["plural", "files", "2", "-t", str(translations_dir)])
        assert result.exit_code == 0
        assert result.output.strip() == "2 files"

    def test_arabic_with_markers(self, translations_dir):
        result = runner.invoke(
            app, ["plural", "files", "3", "--locale", "ar", "-t", str(translations_dir)]
        )
        assert result.exit_code == 0
        assert result.output.strip() == f"{BiDiControl.RLM}٣ ملفات"

    def test_no_markers(self, translations_dir):
        result = runner.invoke(
            app,
            ["plural", "files", "3", "-l", "ar", "-t", str(translations_dir), "--no-markers"],
        )
        assert result.output.strip() == "٣ ملفات"

    def test_json(self, translations_dir):
        result = runner.invoke(
            app,
            ["plural", "files", "3", "-l", "ar", "-t", str(translations_dir), "--no-markers", "--json"],
        )
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["category"] == "few"
        assert data["rtl"]["isRTL"] is True
        assert data["numberFormat"]["formattedNumber"] == "٣"

    def test_missing_key(self, tmp_path):
        result = runner.invoke(app, ["plural", "nope", "5", "-t", str(tmp_path)])
        assert result.output.strip() == "nope (5)"

    def test_not_a_number(self, translations_dir):
        result = runner.invoke(app, ["plural", "files", "many", "-t", str(translations_dir)])
        assert result.exit_code != 0

    def test_throw_config(self, translations_dir, tmp_path):
        config = tmp_path / "config.yaml"
        config.write_text("fallback_strategy: throw\n", encoding="utf-8")
        result = runner.invoke(
            app,
            ["plural", "nope", "5", "-t", str(translations_dir), "--config", str(config)],
        )
        assert result.exit_code == 1


class TestTranslateCommand:
    """Tests for `polyglossia translate`."""

    def test_params(self, translations_dir):
        result = runner.invoke(
            app,
            ["translate", "greeting", "-t", str(translations_dir), "-p", "name=Dana"],
        )
        assert result.exit_code == 0
        assert result.output.strip() == "Hello Dana"

    def test_bad_param(self, translations_dir):
        result = runner.invoke(
            app,
            ["translate", "greeting", "-t", str(translations_dir), "-p", "oops"],
        )
        assert result.exit_code != 0


class TestUtilityCommands:
    """Tests for number, direction and categories commands."""

    def test_number(self):
        result = runner.invoke(app, ["number", "1234", "--locale", "ar"])
        assert result.exit_code == 0
        assert "١" in result.output

    def test_number_hebrew(self):
        result = runner.invoke(app, ["number", "15", "-l", "he"])
        assert result.output.strip() == "טו"

    def test_direction(self):
        assert runner.invoke(app, ["direction", "مرحبا"]).output.strip() == "rtl"
        assert runner.invoke(app, ["direction", "Hello"]).output.strip() == "ltr"
        assert runner.invoke(app, ["direction", "Hello مرحبا"]).output.strip() == "auto"

    def test_categories(self):
        result = runner.invoke(app, ["categories", "ar"])
        assert result.exit_code == 0
        assert "zero, one, two, few, many, other" in result.output
        assert "rtl" in result.output

    def test_verbose(self):
        result = runner.invoke(app, ["--verbose", "direction", "abc"])
        assert result.exit_code == 0
