"""Jalali (Persian solar Hijri) and Gregorian calendar conversion."""

from jalalitools.pyjdate import (
    gregorian_to_jalali,
    is_leap_gregorian,
    is_leap_jalali,
    jalali_to_gregorian,
)

__version__ = "0.1.0"

__all__ = [
    "gregorian_to_jalali",
    "is_leap_gregorian",
    "is_leap_jalali",
    "jalali_to_gregorian",
]
