"""Day differences, relative "time ago" phrases and day arithmetic."""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import Optional

from jalalitools.config import load_settings
from jalalitools.digits import to_persian_digits
from jalalitools.errors import InvalidDateError
from jalalitools.formats import DateInput, convert_to_gregorian_date, to_datetime

logger = logging.getLogger(__name__)

MILLISECONDS_PER_DAY = 24 * 60 * 60 * 1000


def _now(now: Optional[datetime]) -> datetime:
    if now is None:
        return datetime.now()
    if now.tzinfo is not None:
        return now.astimezone().replace(tzinfo=None)
    return now


def _milliseconds(delta: timedelta) -> int:
    return delta // timedelta(milliseconds=1)


def get_today(now: Optional[datetime] = None) -> str:
    """Today's local date as ``YYYY-MM-DD``."""
    return _now(now).date().isoformat()


def get_time_from_date(value: Optional[DateInput] = None, now: Optional[datetime] = None) -> str:
    """``HH:mm:ss`` of ``value`` (the current time when omitted), ``""`` if invalid."""
    dt = _now(now) if value is None else to_datetime(value)
    if dt is None:
        return ""
    return dt.strftime("%H:%M:%S")


def get_days_from_now(value: DateInput, now: Optional[datetime] = None) -> int:
    """Whole days until ``value``, rounded up; negative for past dates.

    Unlike the formatting helpers this raises on input it cannot read.
    """
    target = to_datetime(value)
    if target is None:
        raise InvalidDateError("Invalid date format. Use ISO format or a datetime object.")
    ms_diff = _milliseconds(target - _now(now))
    return -(-ms_diff // MILLISECONDS_PER_DAY)


def get_jalali_timestamp(jalali_date: str) -> Optional[int]:
    """Epoch milliseconds of local midnight on a ``YYYY-MM-DD`` Jalali date."""
    g_date = convert_to_gregorian_date(jalali_date)
    if g_date is None:
        return None
    midnight = datetime(g_date.year, g_date.month, g_date.day)
    return round(midnight.timestamp() * 1000)


def get_time_ago(
    value: DateInput,
    suffix: Optional[str] = None,
    now: Optional[datetime] = None,
    persian_digits: bool = False,
) -> str:
    """Persian phrase for how long ago ``value`` was, e.g. ``"5 دقیقه پیش"``.

    Months are counted as 30 days and years as 365. ``suffix`` defaults to
    ``JALALITOOLS_TIME_AGO_SUFFIX`` or ``"پیش"``.
    """
    dt = to_datetime(value)
    if dt is None:
        return ""
    if suffix is None:
        suffix = load_settings().time_ago_suffix

    diff_sec = _milliseconds(_now(now) - dt) // 1000
    diff_min = diff_sec // 60
    diff_hr = diff_min // 60
    diff_day = diff_hr // 24
    diff_month = diff_day // 30
    diff_year = diff_day // 365

    if diff_sec < 60:
        return f"لحظاتی {suffix}"
    if diff_min < 60:
        amount, unit = diff_min, "دقیقه"
    elif diff_hr < 24:
        amount, unit = diff_hr, "ساعت"
    elif diff_day < 30:
        amount, unit = diff_day, "روز"
    elif diff_month < 12:
        amount, unit = diff_month, "ماه"
    else:
        amount, unit = diff_year, "سال"
    number = to_persian_digits(str(amount)) if persian_digits else str(amount)
    return f"{number} {unit} {suffix}"


def add_days_to_date(value: date, days: int) -> date:
    """Return a new date/datetime ``days`` calendar days after ``value``."""
    return value + timedelta(days=days)


def is_before_date(first: DateInput, second: DateInput) -> bool:
    """True when ``first`` is strictly earlier; unreadable input gives False."""
    first_dt = to_datetime(first)
    second_dt = to_datetime(second)
    if first_dt is None or second_dt is None:
        logger.debug("Cannot compare %r and %r", first, second)
        return False
    return first_dt < second_dt
