"""Typer CLI for the vacation days calculator."""

from __future__ import annotations

import datetime
import json
import logging
import sys

import typer

from hofshli.calculator import (
    CATEGORY_TITLES,
    VacationCalculator,
    format_calendar,
    format_receipt,
    receipt_to_dict,
)
from hofshli.holidays import LOCALES
from hofshli.resolver import UserCategory
from hofshli.settings import PreferenceStore

app = typer.Typer(
    name="hofshli",
    help="Hofshli — how many vacation days do you need? Counts the leave days "
    "a date range takes in Israel, skipping weekends and holidays.",
    add_completion=False,
)

CATEGORY_CHOICES = [c.value for c in UserCategory]


def _parse_date(value: str) -> datetime.date:
    """Parse a YYYY-MM-DD date string."""
    try:
        return datetime.date.fromisoformat(value)
    except ValueError:
        raise typer.BadParameter(f"Invalid date format {value!r}. Use YYYY-MM-DD.") from None


def _current_year() -> int:
    return datetime.date.today().year


def _resolve_category(value: str | None, store: PreferenceStore) -> UserCategory:
    """Explicit --category value, else the saved preference."""
    if value is None:
        return store.load_category()
    if value not in CATEGORY_CHOICES:
        typer.echo(
            f"Error: Invalid category {value!r}. Choose from: {', '.join(CATEGORY_CHOICES)}",
            err=True,
        )
        raise typer.Exit(code=1)
    return UserCategory(value)


def _check_locale(locale: str) -> None:
    if locale not in LOCALES:
        typer.echo(
            f"Error: Invalid locale {locale!r}. Choose from: {', '.join(sorted(LOCALES))}",
            err=True,
        )
        raise typer.Exit(code=1)


_CATEGORY_HELP = f"User category ({', '.join(CATEGORY_CHOICES)}). Defaults to the saved preference."
_SETTINGS_HELP = "Path to the preferences file."


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@app.callback()
def main_callback(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log debug information to stderr.",
    ),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


@app.command()
def calculate(
    start: str = typer.Argument(..., help="First day of the vacation (YYYY-MM-DD)."),
    end: str | None = typer.Argument(
        None,
        help="Last day of the vacation (YYYY-MM-DD). Defaults to START.",
    ),
    category: str | None = typer.Option(None, "--category", "-c", help=_CATEGORY_HELP),
    locale: str = typer.Option("en", "--locale", "-l", help="Holiday names: en or he."),
    output_json: bool = typer.Option(
        False,
        "--json",
        help="Output results as JSON.",
    ),
    settings: str | None = typer.Option(
        None, "--settings", envvar="HOFSHLI_SETTINGS", help=_SETTINGS_HELP
    ),
) -> None:
    """Count the leave days needed to be away from START to END.

    The two dates may be given in either order.
    """
    start_date = _parse_date(start)
    end_date = _parse_date(end) if end is not None else start_date
    _check_locale(locale)
    user_category = _resolve_category(category, PreferenceStore(settings))

    calculator = VacationCalculator(user_category, locale=locale)
    receipt = calculator.calculate(start_date, end_date)

    if output_json:
        json.dump(receipt_to_dict(receipt), sys.stdout, indent=2, ensure_ascii=False)
        typer.echo()
    else:
        typer.echo(format_receipt(receipt))


@app.command()
def holidays(
    year: int = typer.Option(
        None,
        "--year",
        "-y",
        help="Year to list holidays for. Defaults to the current year.",
    ),
    category: str | None = typer.Option(None, "--category", "-c", help=_CATEGORY_HELP),
    locale: str = typer.Option("en", "--locale", "-l", help="Holiday names: en or he."),
    settings: str | None = typer.Option(
        None, "--settings", envvar="HOFSHLI_SETTINGS", help=_SETTINGS_HELP
    ),
) -> None:
    """List the days off of a year, with their leave cost."""
    resolved_year = year if year is not None else _current_year()
    _check_locale(locale)
    user_category = _resolve_category(category, PreferenceStore(settings))

    calculator = VacationCalculator(user_category, locale=locale)
    typer.echo(format_calendar(calculator.calendar_for(resolved_year), resolved_year))


@app.command("category")
def category_command(
    value: str | None = typer.Argument(
        None,
        help=f"New category ({', '.join(CATEGORY_CHOICES)}). Omit to show the current one.",
    ),
    settings: str | None = typer.Option(
        None, "--settings", envvar="HOFSHLI_SETTINGS", help=_SETTINGS_HELP
    ),
) -> None:
    """Show or change the saved user category."""
    store = PreferenceStore(settings)
    if value is None:
        current = store.load_category()
        typer.echo(f"{current.value} ({CATEGORY_TITLES[current]})")
        return

    new = _resolve_category(value, store)
    store.save_category(new)
    typer.echo(f"Saved category: {new.value} ({CATEGORY_TITLES[new]})")


def main() -> None:
    """Entry point for the CLI."""
    app()
