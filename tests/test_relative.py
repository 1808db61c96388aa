from datetime import date, datetime, timedelta, timezone

import pytest

from jalalitools.config import TIME_AGO_SUFFIX_ENV
from jalalitools.errors import InvalidDateError
from jalalitools.relative import (
    add_days_to_date,
    get_days_from_now,
    get_jalali_timestamp,
    get_time_ago,
    get_time_from_date,
    get_today,
    is_before_date,
)


def test_get_today(fixed_now):
    assert get_today(fixed_now) == "2024-11-06"
    assert get_today() == datetime.now().date().isoformat()


def test_get_time_from_date(fixed_now):
    assert get_time_from_date(datetime(2024, 11, 6, 9, 5, 7)) == "09:05:07"
    assert get_time_from_date("2024-11-06T18:30") == "18:30:00"
    assert get_time_from_date(now=fixed_now) == "12:00:00"
    assert get_time_from_date("garbage") == ""


@pytest.mark.parametrize(
    "target,expected",
    [
        (datetime(2024, 11, 8, 12, 0), 2),
        (datetime(2024, 11, 7, 13, 0), 2),
        (datetime(2024, 11, 6, 12, 0), 0),
        (datetime(2024, 11, 6, 12, 0, 1), 1),
        (datetime(2024, 11, 4, 12, 0), -2),
        (datetime(2024, 11, 5, 0, 0), -1),
        ("2024-11-16T12:00:00", 10),
    ],
)
def test_get_days_from_now_rounds_up(fixed_now, target, expected):
    assert get_days_from_now(target, now=fixed_now) == expected


def test_get_days_from_now_rejects_invalid_dates(fixed_now):
    with pytest.raises(InvalidDateError, match="Invalid date format"):
        get_days_from_now("31/31/2024", now=fixed_now)


@pytest.mark.parametrize(
    "delta,expected",
    [
        (timedelta(seconds=30), "لحظاتی پیش"),
        (timedelta(minutes=5), "5 دقیقه پیش"),
        (timedelta(minutes=59, seconds=59), "59 دقیقه پیش"),
        (timedelta(hours=3), "3 ساعت پیش"),
        (timedelta(days=2), "2 روز پیش"),
        (timedelta(days=29, hours=23), "29 روز پیش"),
        (timedelta(days=65), "2 ماه پیش"),
        (timedelta(days=359), "11 ماه پیش"),
        (timedelta(days=360), "0 سال پیش"),
        (timedelta(days=800), "2 سال پیش"),
        (-timedelta(days=3), "لحظاتی پیش"),
    ],
)
def test_get_time_ago_buckets(fixed_now, delta, expected):
    assert get_time_ago(fixed_now - delta, now=fixed_now) == expected


def test_get_time_ago_suffix_and_digits(fixed_now):
    five_minutes_ago = fixed_now - timedelta(minutes=5)
    assert get_time_ago(five_minutes_ago, suffix="قبل", now=fixed_now) == "5 دقیقه قبل"
    assert get_time_ago(five_minutes_ago, now=fixed_now, persian_digits=True) == "۵ دقیقه پیش"
    assert get_time_ago("garbage", now=fixed_now) == ""


def test_get_time_ago_suffix_from_env(monkeypatch, fixed_now):
    monkeypatch.setenv(TIME_AGO_SUFFIX_ENV, "قبل")
    assert get_time_ago(fixed_now - timedelta(hours=2), now=fixed_now) == "2 ساعت قبل"


def test_add_days_to_date_returns_new_value():
    start = datetime(2024, 2, 28, 10, 30)
    assert add_days_to_date(start, 1) == datetime(2024, 2, 29, 10, 30)
    assert add_days_to_date(start, 2) == datetime(2024, 3, 1, 10, 30)
    assert add_days_to_date(start, -28) == datetime(2024, 1, 31, 10, 30)
    assert start == datetime(2024, 2, 28, 10, 30)
    assert add_days_to_date(date(2025, 3, 20), 1) == date(2025, 3, 21)


def test_is_before_date():
    assert is_before_date("2024-01-01", "2024-01-02")
    assert is_before_date("2024-01-01T10:00", "2024-01-01T10:01")
    assert not is_before_date("2024-01-02", "2024-01-01")
    assert not is_before_date("2024-01-01", "2024-01-01")
    assert not is_before_date("garbage", "2024-01-01")


def test_get_jalali_timestamp():
    expected = round(datetime(2024, 11, 6).timestamp() * 1000)
    assert get_jalali_timestamp("1403-08-16") == expected
    assert get_jalali_timestamp("1403/8/16") == expected
    assert get_jalali_timestamp("garbage") is None


def test_aware_now_uses_offset_of_its_own_date(eastern_tz):
    now = datetime(2024, 1, 15, 4, 30, tzinfo=timezone.utc)
    assert get_today(now) == "2024-01-14"
    assert get_time_ago("2024-01-14 23:00", now=now) == "30 دقیقه پیش"
