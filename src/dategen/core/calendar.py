"""
Business day calendars and date adjustment conventions.

A Calendar answers whether a date is a business day and rolls dates to
business days under a BusinessDayConvention. Calendars are immutable once
built; ``with_holidays`` returns a modified copy.
"""

import copy
from datetime import date, timedelta
from enum import Enum
from typing import FrozenSet, Iterable, List, Optional, Sequence, Union

from dategen.core.dates import end_of_month as _month_end
from dategen.core.dates import start_of_month as _month_start
from dategen.core.dates import is_end_of_month as _is_month_end
from dategen.core.period import Period, TimeUnit, add_period


class BusinessDayConvention(str, Enum):
    """Business day adjustment conventions."""

    UNADJUSTED = "UNADJUSTED"
    FOLLOWING = "FOLLOWING"
    MODIFIED_FOLLOWING = "MODIFIED_FOLLOWING"
    PRECEDING = "PRECEDING"
    MODIFIED_PRECEDING = "MODIFIED_PRECEDING"
    HALF_MONTH_MODIFIED_FOLLOWING = "HALF_MONTH_MODIFIED_FOLLOWING"
    NEAREST = "NEAREST"


class Calendar:
    """
    Business day calendar with holiday support.

    The base class treats Saturdays and Sundays (or the given weekend days)
    and an explicit holiday set as non-business days. Market calendars
    override ``_is_market_business_day`` with their holiday rules.
    """

    def __init__(
        self,
        name: str = "WE",  # Weekend-only calendar
        holidays: Optional[Iterable[date]] = None,
        removed_holidays: Optional[Iterable[date]] = None,
        weekend_days: Sequence[int] = (5, 6),
    ) -> None:
        """
        Initialize calendar.

        Args:
            name: Calendar identifier (e.g., "WE", "TARGET")
            holidays: Additional non-business dates
            removed_holidays: Dates forced to be business days
            weekend_days: ``date.weekday()`` values treated as weekend
        """
        self._name = name
        self._added: FrozenSet[date] = frozenset(holidays or ())
        self._removed: FrozenSet[date] = frozenset(removed_holidays or ())
        self._weekend_days: FrozenSet[int] = frozenset(weekend_days)

    @property
    def name(self) -> str:
        return self._name

    @property
    def added_holidays(self) -> FrozenSet[date]:
        return self._added

    @property
    def removed_holidays(self) -> FrozenSet[date]:
        return self._removed

    def is_weekend(self, d: date) -> bool:
        """Check if a date falls on a weekend day for this calendar."""
        return d.weekday() in self._weekend_days

    def _is_market_business_day(self, d: date) -> bool:
        return not self.is_weekend(d)

    def is_business_day(self, d: date) -> bool:
        """Check if a date is a business day."""
        if d in self._added:
            return False
        if d in self._removed:
            return True
        return self._is_market_business_day(d)

    def is_holiday(self, d: date) -> bool:
        """Check if a date is a holiday or weekend."""
        return not self.is_business_day(d)

    def is_end_of_month(self, d: date) -> bool:
        """Check if ``d`` is on or after the last business day of its month."""
        return d.month != self.adjust(d + timedelta(days=1)).month

    def end_of_month(self, d: date) -> date:
        """Last business day of the month containing ``d``."""
        return self.adjust(_month_end(d), BusinessDayConvention.PRECEDING)

    def start_of_month(self, d: date) -> date:
        """First business day of the month containing ``d``."""
        return self.adjust(_month_start(d), BusinessDayConvention.FOLLOWING)

    def next_business_day(self, d: date) -> date:
        """Get the next business day on or after the given date."""
        current = d
        while not self.is_business_day(current):
            current += timedelta(days=1)
        return current

    def prev_business_day(self, d: date) -> date:
        """Get the previous business day on or before the given date."""
        current = d
        while not self.is_business_day(current):
            current -= timedelta(days=1)
        return current

    def adjust(
        self,
        d: date,
        convention: BusinessDayConvention = BusinessDayConvention.FOLLOWING,
    ) -> date:
        """
        Roll a date to a business day.

        Args:
            d: Date to adjust
            convention: Business day convention

        Returns:
            Adjusted date
        """
        if convention == BusinessDayConvention.UNADJUSTED:
            return d

        elif convention == BusinessDayConvention.FOLLOWING:
            return self.next_business_day(d)

        elif convention == BusinessDayConvention.PRECEDING:
            return self.prev_business_day(d)

        elif convention == BusinessDayConvention.MODIFIED_FOLLOWING:
            adjusted = self.next_business_day(d)
            # If adjusted date is in a different month, go backwards instead
            if adjusted.month != d.month:
                adjusted = self.prev_business_day(d)
            return adjusted

        elif convention == BusinessDayConvention.HALF_MONTH_MODIFIED_FOLLOWING:
            adjusted = self.next_business_day(d)
            if adjusted.month != d.month or (d.day <= 15 < adjusted.day):
                adjusted = self.prev_business_day(d)
            return adjusted

        elif convention == BusinessDayConvention.MODIFIED_PRECEDING:
            adjusted = self.prev_business_day(d)
            if adjusted.month != d.month:
                adjusted = self.next_business_day(d)
            return adjusted

        elif convention == BusinessDayConvention.NEAREST:
            later, earlier = d, d
            while self.is_holiday(later) and self.is_holiday(earlier):
                later += timedelta(days=1)
                earlier -= timedelta(days=1)
            return earlier if self.is_holiday(later) else later

        else:
            raise ValueError(f"Unknown business day convention: {convention}")

    def add_business_days(self, d: date, days: int) -> date:
        """Add business days to a date."""
        if days == 0:
            return d

        step = 1 if days > 0 else -1
        remaining = abs(days)
        current = d

        while remaining > 0:
            current += timedelta(days=step)
            if self.is_business_day(current):
                remaining -= 1

        return current

    def advance(
        self,
        d: date,
        step: Union[int, Period],
        unit: Optional[TimeUnit] = None,
        convention: BusinessDayConvention = BusinessDayConvention.FOLLOWING,
        end_of_month: bool = False,
    ) -> date:
        """
        Move a date by a number of units or by a period.

        Day steps count business days. Week, month and year steps move in
        calendar time and then adjust the result. With ``end_of_month``, a
        month/year step from a month-end date lands on the month end of the
        target month (calendar month end when unadjusted, last business day
        otherwise).

        Args:
            d: Start date
            step: Number of units, or a Period (then ``unit`` is ignored)
            unit: Unit of ``step`` when it is an integer (defaults to days)
            convention: Convention used to adjust the result
            end_of_month: Apply the end-of-month rule to month/year steps
        """
        if isinstance(step, Period):
            n, unit = step.length, step.unit
        else:
            n, unit = int(step), unit or TimeUnit.DAYS

        if n == 0:
            return self.adjust(d, convention)

        if unit == TimeUnit.DAYS:
            return self.add_business_days(d, n)

        moved = add_period(d, Period(n, unit))
        if unit == TimeUnit.WEEKS:
            return self.adjust(moved, convention)

        if end_of_month:
            if convention == BusinessDayConvention.UNADJUSTED and _is_month_end(d):
                return _month_end(moved)
            if self.is_end_of_month(d):
                return self.end_of_month(moved)
        return self.adjust(moved, convention)

    def business_days_between(
        self,
        start: date,
        end: date,
        include_first: bool = True,
        include_last: bool = False,
    ) -> int:
        """
        Count business days between two dates.

        The count is negative when ``end`` is before ``start``.
        """
        if start == end:
            if include_first and include_last and self.is_business_day(start):
                return 1
            return 0

        low, high = (start, end) if start < end else (end, start)
        count = 0
        current = low
        while current <= high:
            if self.is_business_day(current):
                count += 1
            current += timedelta(days=1)

        if self.is_business_day(start) and not include_first:
            count -= 1
        if self.is_business_day(end) and not include_last:
            count -= 1
        return count if start < end else -count

    def holiday_list(
        self,
        start: date,
        end: date,
        include_weekends: bool = False,
    ) -> List[date]:
        """Holidays between two dates, both included."""
        if end < start:
            raise ValueError(f"End date {end} must be >= start date {start}")
        result = []
        current = start
        while current <= end:
            if self.is_holiday(current) and (include_weekends or not self.is_weekend(current)):
                result.append(current)
            current += timedelta(days=1)
        return result

    def business_day_list(self, start: date, end: date) -> List[date]:
        """Business days between two dates, both included."""
        if end < start:
            raise ValueError(f"End date {end} must be >= start date {start}")
        result = []
        current = start
        while current <= end:
            if self.is_business_day(current):
                result.append(current)
            current += timedelta(days=1)
        return result

    def with_holidays(
        self,
        add: Iterable[date] = (),
        remove: Iterable[date] = (),
    ) -> "Calendar":
        """Copy of this calendar with extra and/or removed holidays."""
        add, remove = set(add), set(remove)
        result = copy.copy(self)
        result._added = frozenset((self._added - remove) | add)
        result._removed = frozenset((self._removed - add) | remove)
        return result

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Calendar):
            return NotImplemented
        return (
            self._name == other._name
            and self._added == other._added
            and self._removed == other._removed
        )

    def __hash__(self) -> int:
        return hash(self._name)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._name!r})"

    def __str__(self) -> str:
        return self._name


class NullCalendar(Calendar):
    """Calendar where every day is a business day."""

    def __init__(self) -> None:
        super().__init__("Null", weekend_days=())

    def add_business_days(self, d: date, days: int) -> date:
        if self.added_holidays:
            return super().add_business_days(d, days)
        return d + timedelta(days=days)


class WeekendsOnly(Calendar):
    """Calendar whose only non-business days are Saturdays and Sundays."""

    def __init__(self) -> None:
        super().__init__("WeekendsOnly")


class JoinRule(str, Enum):
    """How a joint calendar combines its members."""

    JOIN_HOLIDAYS = "JOIN_HOLIDAYS"            # holiday if holiday in any member
    JOIN_BUSINESS_DAYS = "JOIN_BUSINESS_DAYS"  # business day if business day in any member


class JointCalendar(Calendar):
    """Combination of several calendars."""

    def __init__(
        self,
        calendars: Sequence[Calendar],
        rule: JoinRule = JoinRule.JOIN_HOLIDAYS,
    ) -> None:
        if len(calendars) < 2:
            raise ValueError("A joint calendar needs at least two calendars")
        self._calendars = tuple(calendars)
        self._rule = JoinRule(rule)
        label = "JoinHolidays" if self._rule == JoinRule.JOIN_HOLIDAYS else "JoinBusinessDays"
        names = ", ".join(c.name for c in self._calendars)
        super().__init__(f"{label}({names})")

    @property
    def calendars(self) -> Sequence[Calendar]:
        return self._calendars

    def is_weekend(self, d: date) -> bool:
        if self._rule == JoinRule.JOIN_HOLIDAYS:
            return any(c.is_weekend(d) for c in self._calendars)
        return all(c.is_weekend(d) for c in self._calendars)

    def _is_market_business_day(self, d: date) -> bool:
        if self._rule == JoinRule.JOIN_HOLIDAYS:
            return all(c.is_business_day(d) for c in self._calendars)
        return any(c.is_business_day(d) for c in self._calendars)


# Default weekend-only calendar
DEFAULT_CALENDAR = WeekendsOnly()


def adjust_date(
    d: date,
    convention: BusinessDayConvention,
    calendar: Optional[Calendar] = None
) -> date:
    """
    Adjust a date according to a business day convention.

    Args:
        d: Date to adjust
        convention: Business day convention
        calendar: Calendar to use (defaults to weekend-only)

    Returns:
        Adjusted date
    """
    cal = calendar or DEFAULT_CALENDAR
    return cal.adjust(d, convention)


def business_days_between(
    start: date,
    end: date,
    calendar: Optional[Calendar] = None
) -> int:
    """Count business days between two dates (exclusive of start, inclusive of end)."""
    cal = calendar or DEFAULT_CALENDAR

    if end <= start:
        return 0

    return cal.business_days_between(start, end, include_first=False, include_last=True)
