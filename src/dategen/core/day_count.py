"""
Day count conventions for accrual period year fractions.

Supports: ACT/360, ACT/365F, 30/360 (bond basis), 30E/360, ACT/ACT (ISDA)
"""

from datetime import date
from enum import Enum
from typing import Callable, Dict, Tuple

from dategen.core.dates import is_leap


class DayCountConvention(str, Enum):
    """Supported day count conventions."""

    ACT_360 = "ACT/360"
    ACT_365F = "ACT/365F"
    THIRTY_360 = "30/360"
    THIRTY_E_360 = "30E/360"
    ACT_ACT_ISDA = "ACT/ACT"


def _actual_days(start: date, end: date) -> int:
    return (end - start).days


def _thirty_360_days(start: date, end: date) -> int:
    """
    Days under the 30/360 bond basis.

    A 31st start becomes the 30th; a 31st end becomes the 30th only when
    the start is (now) the 30th.
    """
    d1 = 30 if start.day == 31 else start.day
    d2 = 30 if end.day == 31 and d1 == 30 else end.day
    return 360 * (end.year - start.year) + 30 * (end.month - start.month) + (d2 - d1)


def _thirty_e_360_days(start: date, end: date) -> int:
    """Days under 30E/360 (Eurobond basis): both 31sts become 30ths."""
    d1 = min(start.day, 30)
    d2 = min(end.day, 30)
    return 360 * (end.year - start.year) + 30 * (end.month - start.month) + (d2 - d1)


def _year_basis(year: int) -> float:
    return 366.0 if is_leap(year) else 365.0


def _act_act_isda(start: date, end: date) -> float:
    """
    ACT/ACT ISDA: days in leap years over 366 plus days in other years
    over 365.
    """
    if start.year == end.year:
        return _actual_days(start, end) / _year_basis(start.year)

    head = _actual_days(start, date(start.year + 1, 1, 1)) / _year_basis(start.year)
    tail = _actual_days(date(end.year, 1, 1), end) / _year_basis(end.year)
    return head + tail + (end.year - start.year - 1)


# Day counter and fixed year basis for each non-ISDA convention
_FIXED_BASIS: Dict[DayCountConvention, Tuple[Callable[[date, date], int], float]] = {
    DayCountConvention.ACT_360: (_actual_days, 360.0),
    DayCountConvention.ACT_365F: (_actual_days, 365.0),
    DayCountConvention.THIRTY_360: (_thirty_360_days, 360.0),
    DayCountConvention.THIRTY_E_360: (_thirty_e_360_days, 360.0),
}


def day_count_fraction(
    start: date,
    end: date,
    convention: DayCountConvention
) -> float:
    """
    Accrual year fraction from ``start`` to ``end``.

    Args:
        start: Accrual start
        end: Accrual end, not before ``start``
        convention: Convention or its market name ("ACT/360", "30/360", ...)

    Returns:
        Year fraction; 0.0 when the dates are equal

    Raises:
        ValueError: If ``end`` is before ``start`` or the convention is unknown

    Examples:
        >>> from datetime import date
        >>> day_count_fraction(date(2024, 1, 15), date(2024, 7, 15), "ACT/360")
        0.5055555555555555
    """
    if end < start:
        raise ValueError(f"Accrual end {end} is before accrual start {start}")
    if end == start:
        return 0.0

    convention = DayCountConvention(convention)
    if convention == DayCountConvention.ACT_ACT_ISDA:
        return _act_act_isda(start, end)

    count, basis = _FIXED_BASIS[convention]
    return count(start, end) / basis


def day_count(start: date, end: date, convention: DayCountConvention) -> int:
    """Number of days between two dates as counted by the convention."""
    convention = DayCountConvention(convention)
    count, _ = _FIXED_BASIS.get(convention, (_actual_days, 0.0))
    return count(start, end)
