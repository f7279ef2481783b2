"""Locale-Aware Date Formatting.

Dates are formatted with Babel's CLDR date patterns; the locale's
configured numbering system is then applied to the digits. Values may be
``date``/``datetime`` objects, ISO-8601 strings or epoch milliseconds.

Usage:
    from polyglossia.dates import format_date_for_locale

    format_date_for_locale(date(2024, 1, 15), "en")          # "Jan 15, 2024"
    format_date_for_locale(date(2024, 1, 15), "ar")          # Eastern Arabic digits
    format_date_for_locale("2024-01-15", "en", style="short") # "1/15/24"
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import date, datetime, timedelta, timezone
from typing import Any, Union

from babel import Locale, UnknownLocaleError
from babel.dates import format_date, format_time, format_timedelta, get_datetime_format

from polyglossia.numerals import transliterate_digits
from polyglossia.protocols import LocaleInfo


logger = logging.getLogger(__name__)

DateInput = Union[date, datetime, str, int, float]

DATE_STYLES = ("short", "medium", "long", "full")


@dataclass(frozen=True)
class DateFormatConfig:
    """Date formatting configuration for a locale.

    Attributes:
        locale: Locale tag passed to the formatter
        style: CLDR date style (short, medium, long, full)
        numbering_system: Digit scheme applied to the output
        calendar: Calendar identifier (metadata; Gregorian rendering)
    """
    locale: str
    style: str = "medium"
    numbering_system: str | None = None
    calendar: str | None = None


DATE_FORMAT_CONFIGS: dict[str, DateFormatConfig] = {
    "en": DateFormatConfig("en", "medium"),
    "en-US": DateFormatConfig("en-US", "short"),
    "en-GB": DateFormatConfig("en-GB", "short"),
    "ar": DateFormatConfig("ar", "medium", "arab", "gregory"),
    "ar-SA": DateFormatConfig("ar-SA", "medium", "arab", "gregory"),
    "ar-MA": DateFormatConfig("ar-MA", "medium", "latn", "gregory"),
    "he": DateFormatConfig("he", "medium", "hebr", "gregory"),
    "he-IL": DateFormatConfig("he-IL", "medium", "hebr", "gregory"),
    "fa": DateFormatConfig("fa", "medium", "arab", "persian"),
    "fa-IR": DateFormatConfig("fa-IR", "medium", "arab", "persian"),
    "ur": DateFormatConfig("ur", "medium", "arab", "gregory"),
    "fr": DateFormatConfig("fr", "medium"),
    "fr-FR": DateFormatConfig("fr-FR", "short"),
    "es": DateFormatConfig("es", "medium"),
    "es-ES": DateFormatConfig("es-ES", "short"),
    "de": DateFormatConfig("de", "medium"),
    "de-DE": DateFormatConfig("de-DE", "short"),
}


def get_date_format_config(locale: str, **overrides: Any) -> DateFormatConfig:
    """Get the date configuration for a locale.

    Unknown locales use the English style settings but keep the requested
    locale tag.

    Args:
        locale: Locale tag
        **overrides: Field overrides (style, numbering_system, calendar)

    Returns:
        DateFormatConfig
    """
    config = DATE_FORMAT_CONFIGS.get(locale)
    if config is None:
        config = replace(DATE_FORMAT_CONFIGS["en"], locale=locale)
    overrides = {k: v for k, v in overrides.items() if v is not None}
    return replace(config, **overrides) if overrides else config


def get_supported_date_locales() -> list[str]:
    """Get locales with a dedicated date configuration."""
    return list(DATE_FORMAT_CONFIGS.keys())


def is_date_locale_supported(locale: str) -> bool:
    """Check if a locale has a dedicated date configuration."""
    return locale in DATE_FORMAT_CONFIGS


def get_date_format_info(locale: str) -> dict[str, Any]:
    """Get date formatting information for a locale."""
    config = get_date_format_config(locale)
    return {
        "locale": config.locale,
        "format": config.style,
        "numbering_system": config.numbering_system or "latn",
        "calendar": config.calendar or "gregory",
        "supported": is_date_locale_supported(locale),
    }


def to_datetime(value: DateInput) -> datetime:
    """Coerce a supported date input to a datetime.

    Raises:
        ValueError: If the value cannot be interpreted as a date
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, bool):
        raise ValueError(f"Not a date: {value!r}")
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
    if isinstance(value, str):
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    raise ValueError(f"Not a date: {value!r}")


def _babel_locale(tag: str) -> Locale:
    return Locale.parse(LocaleInfo.parse(tag).babel_identifier)


def _format_one(moment: datetime, config: DateFormatConfig) -> str:
    text = format_date(moment.date(), format=config.style, locale=_babel_locale(config.locale))
    if config.numbering_system:
        text = transliterate_digits(text, config.numbering_system)
    return text


def format_date_for_locale(
    value: DateInput,
    locale: str,
    style: str | None = None,
    numbering_system: str | None = None,
) -> str:
    """Format a date for a locale.

    Args:
        value: Date input
        locale: Target locale tag
        style: Override the configured style
        numbering_system: Override the configured numbering system

    Returns:
        Formatted date; ISO date text if the locale cannot be formatted,
        or ``str(value)`` if the value is not a date
    """
    try:
        moment = to_datetime(value)
    except (ValueError, TypeError, OverflowError, OSError) as e:
        logger.debug(f"Unparseable date {value!r}: {e}")
        return str(value)

    config = get_date_format_config(locale, style=style, numbering_system=numbering_system)

    try:
        return _format_one(moment, config)
    except (UnknownLocaleError, ValueError, TypeError, KeyError) as e:
        logger.debug(f"Date formatting failed for locale '{locale}': {e}")
        return moment.date().isoformat()


def format_date_range_for_locale(
    start: DateInput,
    end: DateInput,
    locale: str,
    style: str | None = None,
) -> str:
    """Format a date range as ``"<start> - <end>"``."""
    return (
        f"{format_date_for_locale(start, locale, style)}"
        f" - {format_date_for_locale(end, locale, style)}"
    )


def format_date_long_for_locale(
    value: DateInput,
    locale: str,
    numbering_system: str | None = None,
) -> str:
    """Format a date in long form with weekday, month name and time of day.

    Args:
        value: Date input (dates render at midnight)
        locale: Target locale tag
        numbering_system: Override the configured numbering system

    Returns:
        Long date-time text; ``YYYY-MM-DD HH:MM`` if the locale cannot be
        formatted, or ``str(value)`` if the value is not a date
    """
    try:
        moment = to_datetime(value)
    except (ValueError, TypeError, OverflowError, OSError) as e:
        logger.debug(f"Unparseable date {value!r}: {e}")
        return str(value)

    config = get_date_format_config(locale, numbering_system=numbering_system)

    try:
        babel_locale = _babel_locale(config.locale)
        day = format_date(moment.date(), format="full", locale=babel_locale)
        clock = format_time(moment.time(), format="short", locale=babel_locale)
        pattern = get_datetime_format("long", locale=babel_locale)
    except (UnknownLocaleError, ValueError, TypeError, KeyError) as e:
        logger.debug(f"Long date formatting failed for locale '{locale}': {e}")
        return moment.strftime("%Y-%m-%d %H:%M")

    text = pattern.replace("'", "").replace("{0}", clock).replace("{1}", day)
    if config.numbering_system:
        text = transliterate_digits(text, config.numbering_system)
    return text


def format_relative_date(
    value: DateInput,
    locale: str,
    now: datetime | None = None,
) -> str:
    """Format a date relative to now (e.g. "in 3 days", "2 weeks ago").

    Args:
        value: Date input
        locale: Target locale tag
        now: Reference time (default: current time)

    Returns:
        Relative date text, or ``str(value)`` if the value is not a date
    """
    try:
        moment = to_datetime(value)
    except (ValueError, TypeError, OverflowError, OSError) as e:
        logger.debug(f"Unparseable date {value!r}: {e}")
        return str(value)

    if now is None:
        now = datetime.now(tz=moment.tzinfo)
    elif (now.tzinfo is None) != (moment.tzinfo is None):
        now = now.replace(tzinfo=moment.tzinfo)

    delta: timedelta = moment - now

    try:
        text = format_timedelta(
            delta,
            add_direction=True,
            locale=_babel_locale(locale),
        )
    except (UnknownLocaleError, ValueError, TypeError) as e:
        logger.debug(f"Relative date formatting failed for locale '{locale}': {e}")
        days = delta.days
        if days == 0:
            return "today"
        if days == 1:
            return "tomorrow"
        if days == -1:
            return "yesterday"
        if days > 0:
            return f"in {days} days"
        return f"{-days} days ago"

    config = get_date_format_config(locale)
    if config.numbering_system:
        text = transliterate_digits(text, config.numbering_system)
    return text
