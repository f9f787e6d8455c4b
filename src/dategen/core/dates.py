"""
Calendar-free date helpers: month ends, weekdays, IMM dates and Easter.
"""

import calendar as _calendar
from datetime import date, timedelta
from enum import IntEnum
from functools import lru_cache

from dateutil.easter import EASTER_WESTERN, easter


class Weekday(IntEnum):
    """Weekdays numbered like ``date.weekday()``."""

    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6


def is_leap(year: int) -> bool:
    """Check whether a year is a Gregorian leap year."""
    return _calendar.isleap(year)


def month_length(year: int, month: int) -> int:
    """Number of days in a month."""
    return _calendar.monthrange(year, month)[1]


def end_of_month(d: date) -> date:
    """Last calendar day of the month containing ``d``."""
    return date(d.year, d.month, month_length(d.year, d.month))


def is_end_of_month(d: date) -> bool:
    """Check whether ``d`` is the last calendar day of its month."""
    return d.day == month_length(d.year, d.month)


def start_of_month(d: date) -> date:
    """First calendar day of the month containing ``d``."""
    return d.replace(day=1)


def nth_weekday(n: int, weekday: Weekday, month: int, year: int) -> date:
    """
    The n-th given weekday of a month, e.g. the third Wednesday.

    Args:
        n: Occurrence, from 1 to 5
        weekday: Weekday to look for
        month: Month (1-12)
        year: Year

    Raises:
        ValueError: If the month has fewer than ``n`` such weekdays
    """
    if not 1 <= n <= 5:
        raise ValueError(f"Weekday occurrence must be in [1, 5], got {n}")
    first = date(year, month, 1)
    offset = (int(weekday) - first.weekday()) % 7
    day = 1 + offset + 7 * (n - 1)
    if day > month_length(year, month):
        raise ValueError(
            f"No {n}th {Weekday(weekday).name.title()} in {year}-{month:02d}"
        )
    return date(year, month, day)


def is_imm_date(d: date, main_cycle: bool = True) -> bool:
    """
    Check whether ``d`` is an IMM date (third Wednesday of the month).

    Args:
        d: Date to check
        main_cycle: Only accept March, June, September and December
    """
    if d.weekday() != Weekday.WEDNESDAY:
        return False
    if not 15 <= d.day <= 21:
        return False
    if not main_cycle:
        return True
    return d.month in (3, 6, 9, 12)


def next_imm_date(d: date, main_cycle: bool = True) -> date:
    """First IMM date strictly after ``d``."""
    year, month = d.year, d.month
    while True:
        if not main_cycle or month in (3, 6, 9, 12):
            candidate = nth_weekday(3, Weekday.WEDNESDAY, month, year)
            if candidate > d:
                return candidate
        month += 1
        if month > 12:
            month = 1
            year += 1


@lru_cache(maxsize=512)
def easter_monday(year: int) -> date:
    """Western Easter Monday for a year."""
    return easter(year, EASTER_WESTERN) + timedelta(days=1)
