from datetime import datetime, timedelta

import pytest
from click.testing import CliRunner

from jalalitools.cli import jdate_cli


@pytest.fixture
def runner():
    return CliRunner()


def test_convert_jalali_full_date(runner):
    result = runner.invoke(jdate_cli, ["convert", "-c", "j", "--full-date", "1403/08/16"])
    assert result.exit_code == 0, result.output
    assert "Gregorian: 2024-11-06 (November)" in result.output
    assert "Jalali:    1403-08-16 (Aban)" in result.output
    assert "Unix:" in result.output


def test_convert_persian_digits(runner):
    result = runner.invoke(jdate_cli, ["convert", "-c", "jalali", "--full-date", "۱۴۰۴/۰۱/۰۱"])
    assert result.exit_code == 0, result.output
    assert "Gregorian: 2025-03-21 (March)" in result.output


def test_convert_gregorian_parts_with_time(runner):
    result = runner.invoke(jdate_cli, ["convert", "-c", "g", "-y", "2024", "-m", "mar", "-d", "20", "-H", "8"])
    assert result.exit_code == 0, result.output
    assert "Jalali:    1403-01-01 08:00:00 (Farvardin)" in result.output


def test_convert_rejects_invalid_day(runner):
    result = runner.invoke(jdate_cli, ["convert", "-c", "j", "-y", "1404", "-m", "esfand", "-d", "30"])
    assert result.exit_code == 1
    assert "Day out of range for jalali 1404-12." in result.output


def test_convert_rejects_mixed_inputs(runner):
    result = runner.invoke(jdate_cli, ["convert", "-c", "j", "--full-date", "1403/08/16", "-y", "1403"])
    assert result.exit_code == 2
    assert "not both" in result.output


def test_convert_epoch(runner):
    result = runner.invoke(jdate_cli, ["convert", "-c", "g", "-e", "1730894400"])
    assert result.exit_code == 0, result.output
    assert "Unix:      1730894400" in result.output


@pytest.mark.parametrize(
    "args,expected",
    [
        (["leap", "1403"], "1403 is a leap year in the Jalali calendar."),
        (["leap", "1404"], "1404 is not a leap year in the Jalali calendar."),
        (["leap", "-c", "g", "1900"], "1900 is not a leap year in the Gregorian calendar."),
    ],
)
def test_leap(runner, args, expected):
    result = runner.invoke(jdate_cli, args)
    assert result.exit_code == 0, result.output
    assert result.output.strip() == expected


def test_format_tokens(runner):
    result = runner.invoke(jdate_cli, ["format", "2024-11-06", "-f", "jDDD-jMM-jYY"])
    assert result.output.strip() == "16 آبان 1403"
    result = runner.invoke(jdate_cli, ["format", "2024-11-06 09:05", "-f", "HH:mm", "--shift-minutes", "0"])
    assert result.output.strip() == "09:05"
    result = runner.invoke(jdate_cli, ["format", "2024-11-06 09:05", "-f", "HH:mm"], env={"JALALITOOLS_ISO_SHIFT_MINUTES": "15"})
    assert result.output.strip() == "09:20"


def test_format_rejects_garbage(runner):
    result = runner.invoke(jdate_cli, ["format", "garbage"])
    assert result.exit_code == 1
    assert "Cannot format" in result.output


def test_ago(runner):
    five_minutes_ago = (datetime.now() - timedelta(minutes=5)).isoformat(timespec="seconds")
    result = runner.invoke(jdate_cli, ["ago", five_minutes_ago, "--persian-digits"])
    assert result.exit_code == 0, result.output
    assert result.output.strip() == "۵ دقیقه پیش"


def test_days_from_now(runner):
    in_ten_days = (datetime.now() + timedelta(days=10)).isoformat(timespec="seconds")
    result = runner.invoke(jdate_cli, ["days-from-now", in_ten_days])
    assert result.exit_code == 0, result.output
    assert result.output.strip() == "10"


def test_days_from_now_invalid(runner):
    result = runner.invoke(jdate_cli, ["days-from-now", "garbage"])
    assert result.exit_code == 1
    assert "Invalid date format" in result.output


def test_current(runner):
    result = runner.invoke(jdate_cli, ["-v", "current"])
    assert result.exit_code == 0, result.output
    assert "Gregorian:" in result.output
    assert "Jalali:" in result.output
    assert "Weekday:" in result.output


def test_convert_epoch_in_winter_keeps_local_date(runner, eastern_tz):
    result = runner.invoke(jdate_cli, ["convert", "-c", "g", "-e", "1705293000"])
    assert result.exit_code == 0, result.output
    assert "Gregorian: 2024-01-14 23:30:00" in result.output
    assert "Jalali:    1402-10-24 23:30:00" in result.output


def test_convert_winter_parts_round_trip_to_epoch(runner, eastern_tz):
    result = runner.invoke(jdate_cli, ["convert", "-c", "j", "--full-date", "1402/10/24 23:30"])
    assert result.exit_code == 0, result.output
    assert "Unix:      1705293000" in result.output
