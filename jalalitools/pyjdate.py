"""Jalali/Gregorian conversion core and date/time string parsing."""

# pylint: disable=line-too-long,missing-function-docstring

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from jalalitools.digits import to_ascii_digits
from jalalitools.errors import InvalidDateError

logger = logging.getLogger(__name__)

# Jalali years up to the switch year count days from Gregorian 621, later
# years from 1600 with the Jalali year rebased by the switch year.
ANCHOR_SWITCH_YEAR = 979
EARLY_ANCHOR_GREGORIAN_YEAR = 621
LATE_ANCHOR_GREGORIAN_YEAR = 1600

GREGORIAN_400_YEAR_DAYS = 146097
GREGORIAN_100_YEAR_DAYS = 36524
GREGORIAN_4_YEAR_DAYS = 1461
JALALI_33_YEAR_DAYS = 12053

GREGORIAN_DAYS_BEFORE_MONTH = [0, 31, 59, 90, 120, 151, 181, 212, 243, 273, 304, 334]

GREGORIAN_MONTHS = [
    None,
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
]

JALALI_MONTHS = [
    None,
    "Farvardin",
    "Ordibehesht",
    "Khordad",
    "Tir",
    "Mordad",
    "Shahrivar",
    "Mehr",
    "Aban",
    "Azar",
    "Dey",
    "Bahman",
    "Esfand",
]

GREGORIAN_MONTH_ALIASES = {
    "jan": 1,
    "january": 1,
    "feb": 2,
    "february": 2,
    "mar": 3,
    "march": 3,
    "apr": 4,
    "april": 4,
    "may": 5,
    "jun": 6,
    "june": 6,
    "jul": 7,
    "july": 7,
    "aug": 8,
    "august": 8,
    "sep": 9,
    "sept": 9,
    "september": 9,
    "oct": 10,
    "october": 10,
    "nov": 11,
    "november": 11,
    "dec": 12,
    "december": 12,
}

JALALI_MONTH_ALIASES = {
    "far": 1,
    "farvardin": 1,
    "فروردین": 1,
    "ord": 2,
    "ordibehesht": 2,
    "اردیبهشت": 2,
    "kho": 3,
    "khordad": 3,
    "خرداد": 3,
    "tir": 4,
    "تیر": 4,
    "mor": 5,
    "mordad": 5,
    "مرداد": 5,
    "sha": 6,
    "shahrivar": 6,
    "شهریور": 6,
    "meh": 7,
    "mehr": 7,
    "مهر": 7,
    "aba": 8,
    "aban": 8,
    "آبان": 8,
    "aza": 9,
    "azar": 9,
    "آذر": 9,
    "dey": 10,
    "دی": 10,
    "bah": 11,
    "bahman": 11,
    "بهمن": 11,
    "esf": 12,
    "esfand": 12,
    "اسفند": 12,
}


@dataclass(frozen=True)
class DateParts:
    year: int
    month: int
    day: int


@dataclass(frozen=True)
class TimeParts:
    hour: int = 0
    minute: int = 0
    second: int = 0
    microsecond: int = 0

    def has_time(self) -> bool:
        return any((self.hour, self.minute, self.second, self.microsecond))


def date_parts_from_tuple(parts: tuple[int, int, int]) -> DateParts:
    return DateParts(*parts)


def time_parts_from_datetime(dt: datetime) -> TimeParts:
    return TimeParts(dt.hour, dt.minute, dt.second, dt.microsecond)


def is_leap_gregorian(year: int) -> bool:
    return (year % 4 == 0 and year % 100 != 0) or year % 400 == 0


def _gregorian_day_number(gy: int, gm: int, gd: int) -> int:
    """Days since 1600-01-01 in the proleptic Gregorian calendar (negative before it)."""
    gy2 = gy - LATE_ANCHOR_GREGORIAN_YEAR
    days = 365 * gy2 + (gy2 + 3) // 4 - (gy2 + 99) // 100 + (gy2 + 399) // 400
    days += GREGORIAN_DAYS_BEFORE_MONTH[gm - 1] + gd - 1
    if gm > 2 and is_leap_gregorian(gy):
        days += 1
    return days


def _jalali_day_number(jy: int, jm: int, jd: int) -> int:
    """Days since 1600-01-01 for a Jalali date, using the 33-year leap arithmetic.

    Month and day are not checked, so ``jm=13`` or ``jd=35`` simply carry over
    into the following days.
    """
    if jy <= ANCHOR_SWITCH_YEAR:
        anchor = EARLY_ANCHOR_GREGORIAN_YEAR
    else:
        anchor = LATE_ANCHOR_GREGORIAN_YEAR
        jy -= ANCHOR_SWITCH_YEAR

    days = 365 * jy + (jy // 33) * 8 + ((jy % 33) + 3) // 4 + 78 + jd
    if jm < 7:
        days += (jm - 1) * 31
    else:
        days += (jm - 7) * 30 + 186
    # 621 does not start a Gregorian 400-year cycle, so both anchors are
    # measured from 1600 before the cycles are unrolled.
    return days + _gregorian_day_number(anchor, 1, 1)


# First day counted from the late anchor (Jalali 980-01-01, Gregorian 1601-03-21).
_LATE_ANCHOR_FIRST_DAY = _jalali_day_number(ANCHOR_SWITCH_YEAR + 1, 1, 1)


def jalali_to_gregorian(jy: int, jm: int, jd: int) -> tuple[int, int, int]:
    """Convert a Jalali date to a Gregorian ``(year, month, day)``.

    The day count is unrolled through the 400, 100, 4 and 1 year Gregorian
    cycles, then the remaining day of year is walked over the month lengths.
    Months are 1-indexed on both sides. No validation is done.
    """
    days = _jalali_day_number(jy, jm, jd)

    gy = LATE_ANCHOR_GREGORIAN_YEAR + 400 * (days // GREGORIAN_400_YEAR_DAYS)
    days %= GREGORIAN_400_YEAR_DAYS
    if days > GREGORIAN_100_YEAR_DAYS:
        days -= 1
        gy += 100 * (days // GREGORIAN_100_YEAR_DAYS)
        days %= GREGORIAN_100_YEAR_DAYS
        if days >= 365:
            days += 1
    gy += 4 * (days // GREGORIAN_4_YEAR_DAYS)
    days %= GREGORIAN_4_YEAR_DAYS
    if days > 365:
        gy += (days - 1) // 365
        days = (days - 1) % 365
    gd = days + 1

    month_days = [0, 31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31]
    if is_leap_gregorian(gy):
        month_days[2] = 29
    gm = 1
    while gm <= 12 and gd > month_days[gm]:
        gd -= month_days[gm]
        gm += 1

    logger.debug("jalali %d-%d-%d -> gregorian %d-%d-%d", jy, jm, jd, gy, gm, gd)
    return gy, gm, gd


def gregorian_to_jalali(gy: int, gm: int, gd: int) -> tuple[int, int, int]:
    """Convert a Gregorian date to a Jalali ``(year, month, day)``.

    Exact inverse of :func:`jalali_to_gregorian` for Jalali years from 1 on.
    """
    g_day_no = _gregorian_day_number(gy, gm, gd)
    if g_day_no >= _LATE_ANCHOR_FIRST_DAY:
        jy = ANCHOR_SWITCH_YEAR
        anchor = LATE_ANCHOR_GREGORIAN_YEAR
    else:
        jy = 0
        anchor = EARLY_ANCHOR_GREGORIAN_YEAR

    j_day_no = g_day_no - _gregorian_day_number(anchor, 1, 1) - 79
    jy += 33 * (j_day_no // JALALI_33_YEAR_DAYS)
    j_day_no %= JALALI_33_YEAR_DAYS

    jy += 4 * (j_day_no // GREGORIAN_4_YEAR_DAYS)
    j_day_no %= GREGORIAN_4_YEAR_DAYS

    if j_day_no >= 366:
        jy += (j_day_no - 1) // 365
        j_day_no = (j_day_no - 1) % 365

    if j_day_no < 186:
        jm = 1 + j_day_no // 31
        jd = 1 + (j_day_no % 31)
    else:
        jm = 7 + (j_day_no - 186) // 30
        jd = 1 + (j_day_no - 186) % 30

    logger.debug("gregorian %d-%d-%d -> jalali %d-%d-%d", gy, gm, gd, jy, jm, jd)
    return jy, jm, jd


def is_leap_jalali(year: int) -> bool:
    """True when ``year`` has 366 days, i.e. Esfand has 30 days.

    This is not the same as asking whether the Gregorian year holding
    Farvardin 1 is leap. That shortcut agrees for 1399 and 1403 but calls
    1408 common even though 1408 has 366 days here.
    """
    return _jalali_day_number(year + 1, 1, 1) - _jalali_day_number(year, 1, 1) == 366


def parse_month(month: str | int, calendar: str) -> int:
    if isinstance(month, int):
        m = month
    else:
        raw = to_ascii_digits(month.strip())
        if raw.isdigit():
            m = int(raw)
        else:
            key = raw.lower()
            aliases = GREGORIAN_MONTH_ALIASES if calendar == "gregorian" else JALALI_MONTH_ALIASES
            if key not in aliases:
                raise InvalidDateError(f"Unknown {calendar} month: {month}")
            m = aliases[key]

    if not 1 <= m <= 12:
        raise InvalidDateError(f"Month out of range: {month}")
    return m


def month_name(calendar: str, month: int) -> str:
    return (GREGORIAN_MONTHS if calendar == "gregorian" else JALALI_MONTHS)[month]


def days_in_month(calendar: str, year: int, month: int) -> int:
    if calendar == "gregorian":
        month_days = [0, 31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31]
        if is_leap_gregorian(year):
            month_days[2] = 29
    else:
        month_days = [0, 31, 31, 31, 31, 31, 31, 30, 30, 30, 30, 30, 29]
        if is_leap_jalali(year):
            month_days[12] = 30
    return month_days[month]


def validate_date(calendar: str, year: int, month: int, day: int) -> None:
    if month < 1 or month > 12:
        raise InvalidDateError("Month must be between 1 and 12.")
    if day < 1 or day > days_in_month(calendar, year, month):
        raise InvalidDateError(f"Day out of range for {calendar} {year}-{month}.")


def validate_time(hour: int, minute: int, second: int, microsecond: int = 0) -> None:
    if hour < 0 or hour > 23:
        raise InvalidDateError("Hour must be between 0 and 23.")
    if minute < 0 or minute > 59:
        raise InvalidDateError("Minute must be between 0 and 59.")
    if second < 0 or second > 59:
        raise InvalidDateError("Second must be between 0 and 59.")
    if microsecond < 0 or microsecond > 999999:
        raise InvalidDateError("Microsecond must be between 0 and 999999.")


def normalize_calendar(calendar: str) -> str:
    cal = calendar.lower()
    if cal in ("g", "gregorian"):
        return "gregorian"
    if cal in ("j", "jalali"):
        return "jalali"
    raise InvalidDateError(f"Unknown calendar: {calendar}")


def convert_from(calendar: str, year: int, month: int, day: int) -> tuple[tuple[int, int, int], tuple[int, int, int]]:
    """Return ``(gregorian, jalali)`` triples for a date given in ``calendar``."""
    if calendar == "gregorian":
        j = gregorian_to_jalali(year, month, day)
        return (year, month, day), j
    g = jalali_to_gregorian(year, month, day)
    return g, (year, month, day)


def local_timezone(at: Optional[datetime] = None) -> timezone:
    """Host UTC offset in force at ``at`` (naive values are local wall time), or now."""
    tzinfo = (at or datetime.now()).astimezone().tzinfo
    if tzinfo is not None and isinstance(tzinfo, timezone):
        return tzinfo
    return timezone.utc


def parse_timezone_offset(offset: str) -> timezone:
    raw = offset.strip()
    if raw.upper() == "Z":
        return timezone.utc
    sign = 1 if raw[0] == "+" else -1
    payload = raw[1:]
    hours = minutes = "00"
    if ":" in payload:
        hours, minutes = payload.split(":", 1)
    elif len(payload) in (2, 4):
        hours = payload[:2]
        minutes = payload[2:] if len(payload) == 4 else "00"
    else:
        raise InvalidDateError(f"Invalid timezone offset: {offset}")
    try:
        delta = timedelta(hours=int(hours), minutes=int(minutes)) * sign
        return timezone(delta)
    except ValueError as exc:
        raise InvalidDateError(f"Invalid timezone offset: {offset}") from exc


def parse_date_parts(calendar: str, date_part: str) -> DateParts:
    raw = to_ascii_digits(date_part.strip().replace(",", ""))
    if raw.isdigit() and len(raw) == 8:
        return DateParts(int(raw[:4]), int(raw[4:6]), int(raw[6:]))
    sep = "-" if "-" in raw else "/" if "/" in raw else None
    if sep is None:
        if calendar == "gregorian":
            for fmt in ("%b %d %Y", "%B %d %Y", "%d %b %Y", "%d %B %Y"):
                try:
                    dt = datetime.strptime(raw, fmt)
                except ValueError:
                    continue
                return DateParts(dt.year, dt.month, dt.day)
        raise InvalidDateError(f"Invalid {calendar} date: {date_part}")
    parts = raw.split(sep)
    if len(parts) != 3 or not all(part.isdigit() for part in parts):
        raise InvalidDateError(f"Invalid {calendar} date: {date_part}")
    if len(parts[0]) == 4:
        year, month, day = parts
    elif len(parts[2]) == 4:
        day, month, year = parts
    else:
        raise InvalidDateError(f"Invalid {calendar} date: {date_part}")
    return DateParts(int(year), int(month), int(day))


def split_datetime_parts(raw: str) -> tuple[str, str, str]:
    date_part = raw
    time_part = ""
    tz_part = ""
    if "T" in raw:
        date_part, time_part = raw.split("T", 1)
    elif " " in raw:
        tokens = raw.split()
        time_index = next((i for i, token in enumerate(tokens) if ":" in token), None)
        if time_index is not None:
            date_part = " ".join(tokens[:time_index])
            time_part = tokens[time_index]
            if time_index + 1 < len(tokens) and tokens[time_index + 1][0] in "+-":
                time_part = f"{time_part}{tokens[time_index + 1]}"
        else:
            date_part = raw
    if time_part:
        if time_part.upper().endswith("Z"):
            tz_part = "Z"
            time_part = time_part[:-1]
        else:
            plus = time_part.rfind("+")
            minus = time_part.rfind("-")
            idx = max(plus, minus)
            if idx > 0:
                tz_part = time_part[idx:]
                time_part = time_part[:idx]
    return date_part, time_part, tz_part


def parse_time_parts(time_part: str, value: str, calendar: str) -> tuple[TimeParts, bool]:
    if not time_part:
        return TimeParts(), False
    microsecond = 0
    if "." in time_part:
        time_part, micro_str = time_part.split(".", 1)
        if not micro_str.isdigit():
            raise InvalidDateError(f"Invalid {calendar} time: {value}")
        microsecond = int(micro_str.ljust(6, "0")[:6])
    parts = time_part.split(":")
    if len(parts) > 3 or not all(part.isdigit() for part in parts):
        raise InvalidDateError(f"Invalid {calendar} time: {value}")
    hour, minute, second = (int(part) for part in parts + ["0"] * (3 - len(parts)))
    return TimeParts(hour, minute, second, microsecond), True


def parse_full_date(calendar: str, value: str) -> tuple[DateParts, TimeParts, Optional[timezone], bool]:
    """Split a date/time string into its parts.

    Accepts ``YYYY-MM-DD``, ``YYYY/MM/DD``, ``DD/MM/YYYY`` and ``YYYYMMDD``
    dates with an optional ``T`` or space separated time and a ``Z`` or
    ``+HH:MM`` suffix. Persian and Arabic-Indic digits are accepted too. The
    returned tzinfo is ``None`` when the string carries no offset.
    """
    raw = to_ascii_digits(value.strip())
    date_part, time_part, tz_part = split_datetime_parts(raw)
    date_parts = parse_date_parts(calendar, date_part)
    time_parts, time_provided = parse_time_parts(time_part, value, calendar)
    tzinfo = parse_timezone_offset(tz_part) if tz_part else None
    return date_parts, time_parts, tzinfo, time_provided


def parse_epoch(value: str) -> datetime:
    try:
        ts = float(to_ascii_digits(value.strip()))
    except ValueError as exc:
        raise InvalidDateError(f"Invalid unix timestamp: {value}") from exc
    return datetime.fromtimestamp(ts, tz=timezone.utc).astimezone()


def build_datetime(calendar: str, date_parts: DateParts, time_parts: TimeParts, tzinfo: Optional[timezone]) -> datetime:
    year, month, day = date_parts.year, date_parts.month, date_parts.day
    if calendar == "jalali":
        year, month, day = jalali_to_gregorian(year, month, day)
    wall = datetime(
        year,
        month,
        day,
        time_parts.hour,
        time_parts.minute,
        time_parts.second,
        time_parts.microsecond,
    )
    return wall.replace(tzinfo=tzinfo or local_timezone(wall))


def format_datetime(calendar: str, date_parts: DateParts, time_parts: TimeParts, show_time: bool) -> str:
    base = f"{date_parts.year:04d}-{date_parts.month:02d}-{date_parts.day:02d}"
    if show_time or time_parts.has_time():
        time_part = f"{time_parts.hour:02d}:{time_parts.minute:02d}:{time_parts.second:02d}"
        if time_parts.microsecond:
            time_part = f"{time_part}.{time_parts.microsecond:06d}"
        return f"{base} {time_part} ({month_name(calendar, date_parts.month)})"
    return f"{base} ({month_name(calendar, date_parts.month)})"


def format_unix_timestamp(dt: datetime) -> str:
    timestamp = dt.timestamp()
    if dt.microsecond:
        return f"{timestamp:.6f}".rstrip("0").rstrip(".")
    return str(int(timestamp))
