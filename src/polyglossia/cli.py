"""Command-line interface for polyglossia."""

import json
import logging
from pathlib import Path
from typing import Annotated, Optional, Union

import typer

from polyglossia.bidi import classify_direction
from polyglossia.config import TranslationConfig
from polyglossia.exceptions import PolyglossiaError
from polyglossia.numerals import format_number
from polyglossia.plural import get_plural_categories, get_plural_config
from polyglossia.protocols import PluralizationOptions
from polyglossia.service import TranslationService

app = typer.Typer(
    name="polyglossia",
    help="Pluralization, RTL and locale numeral helpers for translation files",
    add_completion=False,
)


def _parse_number(value: str) -> Union[int, float]:
    try:
        return int(value)
    except ValueError:
        pass
    try:
        return float(value)
    except ValueError:
        raise typer.BadParameter(f"Not a number: {value}") from None


def _parse_params(items: Optional[list[str]]) -> dict[str, str]:
    params: dict[str, str] = {}
    for item in items or []:
        name, sep, value = item.partition("=")
        if not sep or not name:
            raise typer.BadParameter(f"Expected name=value, got: {item}")
        params[name] = value
    return params


def _service(translations: Optional[Path], config_file: Optional[Path]) -> TranslationService:
    if config_file is not None:
        config = TranslationConfig.from_yaml(config_file)
    else:
        config = TranslationConfig()
    if translations is not None:
        config.translations_path = str(translations)
    config.cache.enabled = False
    return TranslationService(config)


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
) -> None:
    """Pluralization, RTL and locale numeral helpers."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )


@app.command(name="plural")
def plural_cmd(
    key: Annotated[str, typer.Argument(help="Translation key")],
    count: Annotated[str, typer.Argument(help="Count driving the plural category")],
    locale: Annotated[
        str,
        typer.Option("--locale", "-l", help="Target locale"),
    ] = "en",
    translations: Annotated[
        Optional[Path],
        typer.Option("--translations", "-t", help="Directory of <locale>.json|yaml files"),
    ] = None,
    config_file: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="YAML configuration file"),
    ] = None,
    ordinal: Annotated[
        bool,
        typer.Option("--ordinal", help="Use ordinal categories"),
    ] = False,
    no_markers: Annotated[
        bool,
        typer.Option("--no-markers", help="Don't add directional markers"),
    ] = False,
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Print the full result as JSON"),
    ] = False,
) -> None:
    """Render a plural translation."""
    number = _parse_number(count)
    try:
        service = _service(translations, config_file)
        options = PluralizationOptions(
            format_numbers=service.config.pluralization.format_numbers,
            use_directional_markers=not no_markers,
            ordinal=ordinal,
        )
        result = service.translate_plural_with_result(key, number, locale, options=options)
    except PolyglossiaError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if as_json:
        typer.echo(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
    else:
        typer.echo(result.text)


@app.command(name="translate")
def translate_cmd(
    key: Annotated[str, typer.Argument(help="Translation key")],
    locale: Annotated[
        str,
        typer.Option("--locale", "-l", help="Target locale"),
    ] = "en",
    translations: Annotated[
        Optional[Path],
        typer.Option("--translations", "-t", help="Directory of <locale>.json|yaml files"),
    ] = None,
    config_file: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="YAML configuration file"),
    ] = None,
    param: Annotated[
        Optional[list[str]],
        typer.Option("--param", "-p", help="Interpolation parameter as name=value"),
    ] = None,
) -> None:
    """Translate a key."""
    params = _parse_params(param)
    try:
        service = _service(translations, config_file)
        text = service.translate(key, locale, params or None)
    except PolyglossiaError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    typer.echo(text)


@app.command(name="number")
def number_cmd(
    value: Annotated[str, typer.Argument(help="Number to format")],
    locale: Annotated[
        str,
        typer.Option("--locale", "-l", help="Target locale"),
    ] = "en",
) -> None:
    """Format a number with a locale's numbering system."""
    typer.echo(format_number(_parse_number(value), locale))


@app.command(name="direction")
def direction_cmd(
    text: Annotated[str, typer.Argument(help="Text to classify")],
) -> None:
    """Classify the direction of a text (ltr, rtl, auto)."""
    typer.echo(classify_direction(text).value)


@app.command(name="categories")
def categories_cmd(
    locale: Annotated[str, typer.Argument(help="Locale tag")],
) -> None:
    """List the plural categories a locale produces."""
    config = get_plural_config(locale)
    typer.echo(f"Locale: {locale}")
    typer.echo(f"  Direction: {config.direction.value}")
    typer.echo(f"  Numbering system: {config.numbering_system.value}")
    typer.echo(f"  Categories: {', '.join(get_plural_categories(locale))}")


if __name__ == "__main__":
    app()
