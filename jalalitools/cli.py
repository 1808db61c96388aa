"""``pyjdate`` command line interface."""

# pylint: disable=line-too-long

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

import click

from jalalitools.config import (
    DEFAULT_ISO_SHIFT_MINUTES,
    DEFAULT_TIME_AGO_SUFFIX,
    ISO_SHIFT_ENV,
    TIME_AGO_SUFFIX_ENV,
)
from jalalitools.errors import InvalidDateError
from jalalitools.formats import (
    JALALI_WEEKDAY_NAMES,
    SUPPORTED_FORMAT_TOKENS,
    format_to_localized_date,
    jalali_weekday_index,
)
from jalalitools.logs import configure_logging
from jalalitools.pyjdate import (
    DateParts,
    TimeParts,
    build_datetime,
    convert_from,
    date_parts_from_tuple,
    format_datetime,
    format_unix_timestamp,
    gregorian_to_jalali,
    is_leap_gregorian,
    is_leap_jalali,
    normalize_calendar,
    parse_epoch,
    parse_full_date,
    parse_month,
    time_parts_from_datetime,
    validate_date,
    validate_time,
)
from jalalitools.relative import get_days_from_now, get_time_ago

CALENDAR_CHOICE = click.Choice(["gregorian", "jalali", "g", "j"], case_sensitive=False)


@dataclass(frozen=True)
class DateInputOptions:
    full_date: Optional[str]
    epoch: Optional[str]
    year: Optional[int]
    month: Optional[str]
    day: Optional[int]
    hour: Optional[int]
    minute: Optional[int]
    second: Optional[int]


def _resolve_conversion_inputs(
    calendar: str,
    options: DateInputOptions,
) -> tuple[DateParts, TimeParts, datetime, bool]:
    if options.full_date:
        date_parts, time_parts, tzinfo, time_provided = parse_full_date(calendar, options.full_date)
    else:
        if options.year is None or options.month is None or options.day is None:
            raise click.UsageError("Year, month, and day are required when --full-date is not used.")
        date_parts = DateParts(options.year, parse_month(options.month, calendar), options.day)
        time_provided = any(value is not None for value in (options.hour, options.minute, options.second))
        time_parts = TimeParts(options.hour or 0, options.minute or 0, options.second or 0, 0)
        tzinfo = None
    validate_date(calendar, date_parts.year, date_parts.month, date_parts.day)
    validate_time(time_parts.hour, time_parts.minute, time_parts.second, time_parts.microsecond)
    return date_parts, time_parts, build_datetime(calendar, date_parts, time_parts, tzinfo), time_provided


def _emit_datetime_block(dt: datetime) -> None:
    g_parts = DateParts(dt.year, dt.month, dt.day)
    j_parts = date_parts_from_tuple(gregorian_to_jalali(g_parts.year, g_parts.month, g_parts.day))
    time_parts = time_parts_from_datetime(dt)
    click.echo(f"Gregorian: {format_datetime('gregorian', g_parts, time_parts, True)}")
    click.echo(f"Jalali:    {format_datetime('jalali', j_parts, time_parts, True)}")
    click.echo(f"Unix:      {format_unix_timestamp(dt)}")


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Log conversions at DEBUG level.")
def jdate_cli(verbose: bool):
    """Jalali/Gregorian calendar conversion and formatting."""
    configure_logging(level=logging.DEBUG if verbose else logging.WARNING)


@click.command()
def current():
    """Print current date in both calendars."""
    now = datetime.now().astimezone().replace(microsecond=0)
    _emit_datetime_block(now)
    click.echo(f"Weekday:   {JALALI_WEEKDAY_NAMES[jalali_weekday_index(now)]}")


@click.command()
@click.option(
    "-c",
    "--calendar",
    type=CALENDAR_CHOICE,
    required=True,
    help="Input calendar (gregorian|jalali, shortcuts: g|j).",
)
@click.option(
    "--full-date",
    type=str,
    required=False,
    help=(
        "Full date/time string. Examples: "
        "'2024-11-06 10:43:45+03:30', '2024/11/06 10:43', "
        "'2024-11-06', 'Nov 06 2024', '1403/08/16 10:44:46', '۱۴۰۳/۰۸/۱۶'."
    ),
)
@click.option(
    "-e",
    "--epoch",
    type=str,
    required=False,
    help="Unix timestamp (seconds, optional fraction). Displayed in local timezone.",
)
@click.option("-y", "--year", type=int, required=False, help="Year number.")
@click.option("-m", "--month", type=str, required=False, help="Month number or name.")
@click.option("-d", "--day", type=int, required=False, help="Day of month.")
@click.option("-H", "--hour", type=int, required=False, default=None, help="Hour (0-23).")
@click.option("--minute", type=int, required=False, default=None, help="Minute (0-59).")
@click.option("--second", type=int, required=False, default=None, help="Second (0-59).")
def convert(**kwargs):
    """Convert a date between Jalali and Gregorian."""
    calendar = kwargs.pop("calendar")
    options = DateInputOptions(**kwargs)
    cal = normalize_calendar(calendar)
    if options.epoch:
        if any(
            value is not None
            for value in (options.full_date, options.year, options.month, options.day, options.hour, options.minute, options.second)
        ):
            raise click.UsageError("Use --epoch alone; it is incompatible with other date inputs.")
        _emit_datetime_block(parse_epoch(options.epoch))
        return
    if options.full_date and any(
        value is not None
        for value in (options.year, options.month, options.day, options.hour, options.minute, options.second)
    ):
        raise click.UsageError("Use --full-date or -y/-m/-d options, not both.")

    date_parts, time_parts, ts, time_provided = _resolve_conversion_inputs(cal, options)
    g_tuple, j_tuple = convert_from(cal, date_parts.year, date_parts.month, date_parts.day)
    g = date_parts_from_tuple(g_tuple)
    j = date_parts_from_tuple(j_tuple)
    show_time = time_provided or time_parts.has_time()
    click.echo(f"Gregorian: {format_datetime('gregorian', g, time_parts, show_time)}")
    click.echo(f"Jalali:    {format_datetime('jalali', j, time_parts, show_time)}")
    click.echo(f"Unix:      {format_unix_timestamp(ts)}")


@click.command()
@click.option(
    "-c",
    "--calendar",
    type=CALENDAR_CHOICE,
    default="jalali",
    show_default=True,
    help="Calendar of the year (gregorian|jalali, shortcuts: g|j).",
)
@click.argument("year", type=int)
def leap(calendar: str, year: int):
    """Tell whether YEAR is a leap year."""
    cal = normalize_calendar(calendar)
    is_leap = is_leap_jalali(year) if cal == "jalali" else is_leap_gregorian(year)
    verdict = "is" if is_leap else "is not"
    click.echo(f"{year} {verdict} a leap year in the {cal.capitalize()} calendar.")


@click.command(name="format")
@click.argument("value", type=str)
@click.option(
    "-f",
    "--format",
    "token",
    type=click.Choice(SUPPORTED_FORMAT_TOKENS),
    default="jYYYY-jMM-jDD",
    show_default=True,
    help="Output format token.",
)
@click.option(
    "--shift-minutes",
    type=int,
    envvar=ISO_SHIFT_ENV,
    default=DEFAULT_ISO_SHIFT_MINUTES,
    show_default=True,
    help="Fixed minutes added before Gregorian time tokens are rendered.",
)
def format_command(value: str, token: str, shift_minutes: int):
    """Format a Gregorian date/time VALUE with a format token."""
    result = format_to_localized_date(value, token, shift_minutes=shift_minutes)
    if result is None:
        raise InvalidDateError(f"Cannot format {value!r} as {token}.")
    click.echo(result)


@click.command()
@click.argument("value", type=str)
@click.option(
    "--suffix",
    type=str,
    envvar=TIME_AGO_SUFFIX_ENV,
    default=DEFAULT_TIME_AGO_SUFFIX,
    show_default=True,
    help="Word appended to the phrase.",
)
@click.option("--persian-digits", is_flag=True, help="Write the number with Persian digits.")
def ago(value: str, suffix: str, persian_digits: bool):
    """Describe how long ago a Gregorian date/time VALUE was, in Persian."""
    result = get_time_ago(value, suffix=suffix, persian_digits=persian_digits)
    if not result:
        raise InvalidDateError(f"Invalid date: {value}")
    click.echo(result)


@click.command(name="days-from-now")
@click.argument("value", type=str)
def days_from_now(value: str):
    """Print whole days between now and a Gregorian date VALUE (rounded up)."""
    click.echo(str(get_days_from_now(value)))


for cmd in (current, convert, leap, format_command, ago, days_from_now):
    jdate_cli.add_command(cmd)


if __name__ == "__main__":
    jdate_cli()
