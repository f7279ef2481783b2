"""Tests for locale-aware date formatting."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from polyglossia.dates import (
    DATE_FORMAT_CONFIGS,
    format_date_for_locale,
    format_date_long_for_locale,
    format_date_range_for_locale,
    format_relative_date,
    get_date_format_config,
    get_date_format_info,
    get_supported_date_locales,
    is_date_locale_supported,
    to_datetime,
)


SAMPLE = date(2024, 1, 15)


class TestToDatetime:
    """Tests for date input coercion."""

    def test_date(self):
        assert to_datetime(SAMPLE) == datetime(2024, 1, 15)

    def test_datetime_passthrough(self):
        moment = datetime(2024, 1, 15, 10, 30)
        assert to_datetime(moment) is moment

    def test_iso_string(self):
        assert to_datetime("2024-01-15").date() == SAMPLE

    def test_iso_string_with_z(self):
        assert to_datetime("2024-01-15T12:00:00Z").tzinfo is not None

    def test_epoch_millis(self):
        moment = to_datetime(1705276800000)
        assert moment == datetime(2024, 1, 15, tzinfo=timezone.utc)

    def test_invalid(self):
        with pytest.raises(ValueError):
            to_datetime("not a date")
        with pytest.raises(ValueError):
            to_datetime(True)


class TestDateConfig:
    """Tests for date configuration lookup."""

    def test_known_locale(self):
        config = get_date_format_config("ar")
        assert config.numbering_system == "arab"
        assert config.calendar == "gregory"

    def test_unknown_locale_keeps_tag(self):
        config = get_date_format_config("sv-SE")
        assert config.locale == "sv-SE"
        assert config.style == DATE_FORMAT_CONFIGS["en"].style

    def test_overrides(self):
        config = get_date_format_config("en", style="long")
        assert config.style == "long"
        assert DATE_FORMAT_CONFIGS["en"].style == "medium"

    def test_none_overrides_ignored(self):
        assert get_date_format_config("en", style=None) is DATE_FORMAT_CONFIGS["en"]

    def test_supported(self):
        assert is_date_locale_supported("he-IL")
        assert not is_date_locale_supported("sv-SE")
        assert "fa-IR" in get_supported_date_locales()

    def test_info(self):
        info = get_date_format_info("fa")
        assert info == {
            "locale": "fa",
            "format": "medium",
            "numbering_system": "arab",
            "calendar": "persian",
            "supported": True,
        }

    def test_info_defaults(self):
        info = get_date_format_info("en")
        assert info["numbering_system"] == "latn"
        assert info["calendar"] == "gregory"


class TestFormatDate:
    """Tests for date formatting."""

    def test_english(self):
        assert format_date_for_locale(SAMPLE, "en") == "Jan 15, 2024"

    def test_english_short(self):
        assert format_date_for_locale(SAMPLE, "en", style="short") == "1/15/24"

    def test_iso_input(self):
        assert format_date_for_locale("2024-01-15", "en") == "Jan 15, 2024"

    def test_arabic_uses_eastern_digits(self):
        text = format_date_for_locale(SAMPLE, "ar")
        assert "١٥" in text
        assert "15" not in text

    def test_moroccan_keeps_latin_digits(self):
        assert "15" in format_date_for_locale(SAMPLE, "ar-MA")

    def test_numbering_override(self):
        text = format_date_for_locale(SAMPLE, "en", numbering_system="arab")
        assert "١٥" in text

    def test_unknown_locale_falls_back_to_iso(self):
        assert format_date_for_locale(SAMPLE, "zz-ZZ") == "2024-01-15"

    def test_range(self):
        text = format_date_range_for_locale(SAMPLE, date(2024, 1, 20), "en")
        assert text == "Jan 15, 2024 - Jan 20, 2024"

    def test_unparseable_string_returned_as_is(self):
        assert format_date_for_locale("not a date", "en") == "not a date"

    def test_unsupported_type_returned_as_text(self):
        assert format_date_for_locale(True, "en") == "True"


class TestLongDate:
    """Tests for long date-time formatting."""

    MOMENT = datetime(2024, 1, 15, 14, 30)

    def test_english(self):
        text = format_date_long_for_locale(self.MOMENT, "en")
        assert text.startswith("Monday, January 15, 2024")
        assert "2:30" in text

    def test_arabic_uses_eastern_digits(self):
        text = format_date_long_for_locale(self.MOMENT, "ar")
        assert "١٥" in text
        assert "15" not in text

    def test_date_input_renders_midnight(self):
        assert "12:00" in format_date_long_for_locale(SAMPLE, "en")

    def test_unknown_locale_fallback(self):
        assert format_date_long_for_locale(self.MOMENT, "zz-ZZ") == "2024-01-15 14:30"

    def test_unparseable(self):
        assert format_date_long_for_locale("soon", "en") == "soon"


class TestRelativeDate:
    """Tests for relative date formatting."""

    NOW = datetime(2024, 1, 15, 12, 0)

    def test_future(self):
        text = format_relative_date(self.NOW + timedelta(days=3), "en", now=self.NOW)
        assert text == "in 3 days"

    def test_past(self):
        text = format_relative_date(self.NOW - timedelta(days=3), "en", now=self.NOW)
        assert text == "3 days ago"

    def test_arabic_digits(self):
        text = format_relative_date(self.NOW + timedelta(days=3), "ar", now=self.NOW)
        assert "3" not in text

    def test_unknown_locale_fallback(self):
        text = format_relative_date(self.NOW + timedelta(days=3), "zz-ZZ", now=self.NOW)
        assert text == "in 3 days"

    def test_unparseable(self):
        assert format_relative_date("someday", "en", now=self.NOW) == "someday"
