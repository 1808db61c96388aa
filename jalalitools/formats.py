"""Jalali and Gregorian string formatting built on the conversion core."""

# pylint: disable=line-too-long

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import Callable, Optional, Union

from jalalitools.config import load_settings
from jalalitools.digits import to_ascii_digits
from jalalitools.errors import InvalidDateError
from jalalitools.pyjdate import (
    build_datetime,
    gregorian_to_jalali,
    jalali_to_gregorian,
    parse_date_parts,
    parse_full_date,
    validate_date,
    validate_time,
)

logger = logging.getLogger(__name__)

DateInput = Union[datetime, date, str, int, float]

JALALI_MONTH_NAMES = [
    "فروردین",
    "اردیبهشت",
    "خرداد",
    "تیر",
    "مرداد",
    "شهریور",
    "مهر",
    "آبان",
    "آذر",
    "دی",
    "بهمن",
    "اسفند",
]

# Jalali week order, Saturday first.
JALALI_WEEKDAY_NAMES = [
    "شنبه",
    "یکشنبه",
    "دوشنبه",
    "سه‌شنبه",
    "چهارشنبه",
    "پنج‌شنبه",
    "جمعه",
]

# Indexed by the Sunday = 0 weekday number, not by the Jalali week order.
WEEKDAY_NAMES_SUNDAY_FIRST = [
    "یکشنبه",
    "دوشنبه",
    "سه‌شنبه",
    "چهارشنبه",
    "پنج‌شنبه",
    "جمعه",
    "شنبه",
]

JALALI_FORMAT_TOKENS = (
    "jYYYY-jM-jD",
    "jYYYY-jMM-jDD",
    "jMMMM",
    "jD",
    "jDDD",
    "jDDD-jMM-jYY",
)

GREGORIAN_FORMAT_TOKENS = (
    "YYYY-MM-DD",
    "YYYY/MM/DD",
    "YYYY/MM/DD HH:mm",
    "HH:mm",
    "YYYY/MM/DDTHH:mm:ss",
)

SUPPORTED_FORMAT_TOKENS = JALALI_FORMAT_TOKENS + GREGORIAN_FORMAT_TOKENS


def to_datetime(value: Optional[DateInput]) -> Optional[datetime]:
    """Coerce a date input to a naive datetime in local time.

    Strings go through :func:`parse_full_date`, numbers are epoch
    milliseconds and aware datetimes are moved to the local offset in force
    on their own date. Input that cannot be read returns ``None``.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            return value.astimezone().replace(tzinfo=None)
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value / 1000)
        except (OverflowError, OSError, ValueError):
            logger.debug("Timestamp out of range: %r", value)
            return None
    if not value.strip():
        return None
    try:
        date_parts, time_parts, tzinfo, _time_provided = parse_full_date("gregorian", value)
        validate_date("gregorian", date_parts.year, date_parts.month, date_parts.day)
        validate_time(time_parts.hour, time_parts.minute, time_parts.second, time_parts.microsecond)
        dt = build_datetime("gregorian", date_parts, time_parts, tzinfo)
    except (InvalidDateError, ValueError):
        logger.debug("Unparseable date input: %r", value)
        return None
    if tzinfo is None:
        return dt.replace(tzinfo=None)
    return dt.astimezone().replace(tzinfo=None)


def jalali_parts(value: Optional[DateInput]) -> Optional[tuple[int, int, int]]:
    dt = to_datetime(value)
    if dt is None:
        return None
    return gregorian_to_jalali(dt.year, dt.month, dt.day)


def jalali_weekday_index(value: Optional[DateInput]) -> Optional[int]:
    """Position of the date in the Jalali week, Saturday = 0."""
    dt = to_datetime(value)
    if dt is None:
        return None
    return (dt.weekday() + 2) % 7


def convert_to_jalali_date(value: Optional[DateInput], fmt: Optional[str] = None) -> str:
    """Format a Gregorian date input as a Jalali string.

    Without ``fmt`` the result is the unpadded ``Y-M-D`` form, e.g.
    ``"1403-7-27"`` for 2024-10-18. ``fmt`` picks a layout such as ``"day"``,
    ``"dayMonthYear"`` (``"27 مهر 1403"``) or ``"weekdayDayMonthYear"``
    (``"جمعه 27 مهر 1403"``). An unknown layout falls back to
    ``Y-M-D``, and an invalid date gives ``""``.
    """
    dt = to_datetime(value)
    if dt is None:
        return ""
    year, month, day = gregorian_to_jalali(dt.year, dt.month, dt.day)
    # datetime.weekday() is Monday = 0; the table wants Sunday = 0.
    weekday = WEEKDAY_NAMES_SUNDAY_FIRST[(dt.weekday() + 1) % 7]
    persian_month = JALALI_MONTH_NAMES[month - 1]

    layouts = {
        "day": f"{day}",
        "weekday": weekday,
        "month": persian_month,
        "year": f"{year}",
        "dayMonth": f"{day} {persian_month}",
        "dayMonthYear": f"{day} {persian_month} {year}",
        "weekdayDayMonth": f"{weekday} {day} {persian_month}",
        "weekdayDayMonthYear": f"{weekday} {day} {persian_month} {year}",
    }
    return layouts.get(fmt or "", f"{year}-{month}-{day}")


def format_to_jalali_date_padded(value: Optional[DateInput]) -> str:
    parts = jalali_parts(value)
    if parts is None:
        return ""
    year, month, day = parts
    return f"{year}-{month:02d}-{day:02d}"


def convert_to_gregorian_date(jalali_date: Optional[str]) -> Optional[date]:
    """Turn a ``YYYY/MM/DD`` or ``YYYY-MM-DD`` Jalali string into a ``date``.

    Month and day are not range checked; overflowing values roll into the
    following days.
    """
    if not jalali_date:
        return None
    try:
        parts = parse_date_parts("jalali", jalali_date)
    except InvalidDateError:
        logger.debug("Unparseable jalali date: %r", jalali_date)
        return None
    return date(*jalali_to_gregorian(parts.year, parts.month, parts.day))


def convert_to_gregorian_date_string(jalali_date: Optional[str]) -> str:
    g_date = convert_to_gregorian_date(jalali_date)
    if g_date is None:
        return ""
    return f"{g_date.year}/{g_date.month:02d}/{g_date.day:02d}"


def format_to_gregorian_date(value: Optional[DateInput]) -> str:
    dt = to_datetime(value)
    if dt is None:
        return ""
    return f"{dt.year}-{dt.month}-{dt.day}"


def format_to_gregorian_datetime(value: Optional[DateInput], time: str) -> str:
    formatted = format_to_gregorian_date(value)
    if not formatted:
        return ""
    return f"{formatted}T{time}"


def convert_to_standard_datetime(value: Optional[DateInput]) -> Optional[str]:
    """Local wall-clock time as ``YYYY-MM-DDTHH:MM:SS.mmm`` without an offset."""
    dt = to_datetime(value)
    if dt is None:
        return None
    return dt.isoformat(timespec="milliseconds")


def convert_to_iso_datetime(value: Optional[DateInput], shift_minutes: Optional[int] = None) -> Optional[str]:
    """Like :func:`convert_to_standard_datetime`, moved by a fixed number of minutes.

    The shift defaults to ``JALALITOOLS_ISO_SHIFT_MINUTES`` (60 when unset).
    """
    dt = to_datetime(value)
    if dt is None:
        return None
    if shift_minutes is None:
        shift_minutes = load_settings().iso_shift_minutes
    return (dt + timedelta(minutes=shift_minutes)).isoformat(timespec="milliseconds")


def format_to_localized_date(
    value: Optional[DateInput],
    token: str,
    shift_minutes: Optional[int] = None,
) -> Optional[str]:
    """Format ``value`` with one of :data:`SUPPORTED_FORMAT_TOKENS`.

    Jalali tokens are computed on the local date. Gregorian tokens read the
    output of :func:`convert_to_iso_datetime`, so they carry its shift.
    Unknown tokens and unreadable dates return ``None``.
    """
    if value is None or value == "":
        return None

    jalali_formats: dict[str, Callable[[], str]] = {
        "jYYYY-jMM-jDD": lambda: format_to_jalali_date_padded(value),
        "jYYYY-jM-jD": lambda: convert_to_jalali_date(value),
        "jMMMM": lambda: convert_to_jalali_date(value, "month"),
        "jD": lambda: convert_to_jalali_date(value, "day"),
        "jDDD": lambda: convert_to_jalali_date(value, "dayMonth"),
        "jDDD-jMM-jYY": lambda: convert_to_jalali_date(value, "dayMonthYear"),
    }
    if token in jalali_formats:
        return jalali_formats[token]() or None

    if token not in GREGORIAN_FORMAT_TOKENS:
        logger.debug("Unknown format token: %r", token)
        return None

    iso = convert_to_iso_datetime(value, shift_minutes)
    if iso is None:
        return None
    iso_date, iso_time = iso.split("T")
    hours, minutes, seconds = iso_time.split(":")
    slashed = iso_date.replace("-", "/")

    gregorian_formats = {
        "YYYY-MM-DD": iso_date,
        "YYYY/MM/DD": slashed,
        "YYYY/MM/DD HH:mm": f"{slashed} {hours}:{minutes}",
        "HH:mm": f"{hours}:{minutes}",
        "YYYY/MM/DDTHH:mm:ss": f"{slashed}T{hours}:{minutes}:{seconds.split('.')[0]}",
    }
    return gregorian_formats[token]


def jalali_month_index(name: str) -> Optional[int]:
    """1-based month number for a Persian month name, ``None`` if unknown."""
    try:
        return JALALI_MONTH_NAMES.index(name.strip()) + 1
    except ValueError:
        return None


def split_time(value: Optional[str]) -> str:
    """``HH:mm`` from a ``HH:mm[:ss]`` string; ``""`` when missing."""
    if value is None:
        return ""
    parts = to_ascii_digits(value).split(":")
    if len(parts) < 2:
        return ""
    return f"{parts[0]}:{parts[1]}"


def get_full_time(value: Optional[str]) -> str:
    """``HH:mm`` from the time half of an ISO datetime string; ``""`` when missing."""
    if value is None or "T" not in value:
        return ""
    return value.split("T", 1)[1][:5]
