"""
Tenors and frequencies.

A Period is a length plus a time unit (days, weeks, months, years). Periods
can be added to dates; month and year steps clamp the day to the end of the
target month (Jan 31 + 1M = Feb 28/29).
"""

import re
from datetime import date, timedelta
from enum import Enum
from typing import Tuple, Union

from dateutil.relativedelta import relativedelta

from dategen.errors import InvalidTenorError


class TimeUnit(str, Enum):
    """Units a period can be expressed in."""

    DAYS = "D"
    WEEKS = "W"
    MONTHS = "M"
    YEARS = "Y"


class Frequency(int, Enum):
    """Number of periods per year."""

    NO_FREQUENCY = -1
    ONCE = 0
    ANNUAL = 1
    SEMIANNUAL = 2
    EVERY_FOURTH_MONTH = 3
    QUARTERLY = 4
    BIMONTHLY = 6
    MONTHLY = 12
    EVERY_FOURTH_WEEK = 13
    BIWEEKLY = 26
    WEEKLY = 52
    DAILY = 365
    OTHER_FREQUENCY = 999


_PERIOD_TOKEN = re.compile(r"([+-]?\d+)([DWMY])", re.IGNORECASE)


class Period:
    """
    A tenor such as 3M, 1Y or 4W.

    Periods are immutable and hashable. Equality compares the normalized
    form, so Period(12, MONTHS) == Period(1, YEARS).
    """

    __slots__ = ("_length", "_unit")

    def __init__(self, length: int, unit: TimeUnit) -> None:
        if isinstance(length, bool) or int(length) != length:
            raise InvalidTenorError(f"Period length must be an integer, got {length!r}")
        self._length = int(length)
        self._unit = TimeUnit(unit)

    @classmethod
    def from_frequency(cls, frequency: Frequency) -> "Period":
        """Build the period matching one step of a frequency."""
        frequency = Frequency(frequency)
        if frequency == Frequency.NO_FREQUENCY:
            return cls(0, TimeUnit.DAYS)
        if frequency == Frequency.ONCE:
            return cls(0, TimeUnit.YEARS)
        if frequency == Frequency.ANNUAL:
            return cls(1, TimeUnit.YEARS)
        if frequency in (
            Frequency.SEMIANNUAL,
            Frequency.EVERY_FOURTH_MONTH,
            Frequency.QUARTERLY,
            Frequency.BIMONTHLY,
            Frequency.MONTHLY,
        ):
            return cls(12 // frequency.value, TimeUnit.MONTHS)
        if frequency in (
            Frequency.EVERY_FOURTH_WEEK,
            Frequency.BIWEEKLY,
            Frequency.WEEKLY,
        ):
            return cls(52 // frequency.value, TimeUnit.WEEKS)
        if frequency == Frequency.DAILY:
            return cls(1, TimeUnit.DAYS)
        raise InvalidTenorError(f"Cannot build a period from frequency {frequency.name}")

    @property
    def length(self) -> int:
        return self._length

    @property
    def unit(self) -> TimeUnit:
        return self._unit

    def normalized(self) -> "Period":
        """Express the period in the largest unit that keeps the length integral."""
        if self._length == 0:
            return Period(0, TimeUnit.DAYS)
        if self._unit == TimeUnit.MONTHS and self._length % 12 == 0:
            return Period(self._length // 12, TimeUnit.YEARS)
        if self._unit == TimeUnit.DAYS and self._length % 7 == 0:
            return Period(self._length // 7, TimeUnit.WEEKS)
        return Period(self._length, self._unit)

    def frequency(self) -> Frequency:
        """
        Frequency matching this period.

        Returns OTHER_FREQUENCY when the period does not divide a year
        (or a 52-week year) evenly.
        """
        length = abs(self._length)
        if length == 0:
            if self._unit == TimeUnit.YEARS:
                return Frequency.ONCE
            return Frequency.NO_FREQUENCY

        if self._unit == TimeUnit.YEARS:
            return Frequency.ANNUAL if length == 1 else Frequency.OTHER_FREQUENCY
        if self._unit == TimeUnit.MONTHS:
            if 12 % length == 0 and length <= 12:
                return Frequency(12 // length)
            return Frequency.OTHER_FREQUENCY
        if self._unit == TimeUnit.WEEKS:
            if length == 1:
                return Frequency.WEEKLY
            if length == 2:
                return Frequency.BIWEEKLY
            if length == 4:
                return Frequency.EVERY_FOURTH_WEEK
            return Frequency.OTHER_FREQUENCY
        if length == 1:
            return Frequency.DAILY
        return Frequency.OTHER_FREQUENCY

    def _months(self) -> int:
        if self._unit == TimeUnit.YEARS:
            return 12 * self._length
        return self._length

    def _days(self) -> int:
        if self._unit == TimeUnit.WEEKS:
            return 7 * self._length
        return self._length

    def _family(self) -> str:
        return "M" if self._unit in (TimeUnit.MONTHS, TimeUnit.YEARS) else "D"

    def _comparable(self, other: "Period") -> Tuple[int, int]:
        if self._length == 0 or other._length == 0:
            a = self._months() if self._family() == "M" else self._days()
            b = other._months() if other._family() == "M" else other._days()
            if self._length == 0 and other._length == 0:
                return 0, 0
            if self._length == 0:
                return 0, b
            return a, 0
        if self._family() != other._family():
            raise TypeError(f"Undecidable comparison between {self} and {other}")
        if self._family() == "M":
            return self._months(), other._months()
        return self._days(), other._days()

    def __add__(self, other: object) -> "Period":
        if not isinstance(other, Period):
            return NotImplemented
        if self._length == 0:
            return Period(other._length, other._unit)
        if other._length == 0:
            return Period(self._length, self._unit)
        if self._unit == other._unit:
            return Period(self._length + other._length, self._unit)
        if self._family() != other._family():
            raise InvalidTenorError(f"Cannot add {other} to {self}")
        if self._family() == "M":
            return Period(self._months() + other._months(), TimeUnit.MONTHS)
        return Period(self._days() + other._days(), TimeUnit.DAYS)

    def __radd__(self, other: object):
        if isinstance(other, date):
            return add_period(other, self)
        return NotImplemented

    def __rsub__(self, other: object):
        if isinstance(other, date):
            return add_period(other, -self)
        return NotImplemented

    def __sub__(self, other: object) -> "Period":
        if not isinstance(other, Period):
            return NotImplemented
        return self + (-other)

    def __neg__(self) -> "Period":
        return Period(-self._length, self._unit)

    def __mul__(self, n: int) -> "Period":
        if not isinstance(n, int) or isinstance(n, bool):
            return NotImplemented
        return Period(self._length * n, self._unit)

    __rmul__ = __mul__

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Period):
            return NotImplemented
        a, b = self.normalized(), other.normalized()
        return a._length == b._length and a._unit == b._unit

    def __hash__(self) -> int:
        n = self.normalized()
        return hash((n._length, n._unit))

    def __lt__(self, other: "Period") -> bool:
        a, b = self._comparable(other)
        return a < b

    def __le__(self, other: "Period") -> bool:
        return self == other or self < other

    def __gt__(self, other: "Period") -> bool:
        a, b = self._comparable(other)
        return a > b

    def __ge__(self, other: "Period") -> bool:
        return self == other or self > other

    def __repr__(self) -> str:
        return f"Period({self._length}, {self._unit.name})"

    def __str__(self) -> str:
        return f"{self._length}{self._unit.value}"


def parse_period(text: str) -> Period:
    """
    Parse a tenor string such as "6M", "1Y", "2W", "10D" or "1Y6M".

    Composite tenors are summed; mixing month-based and day-based units
    is rejected.

    Raises:
        InvalidTenorError: If the string is not a valid tenor
    """
    cleaned = text.strip().upper().replace(" ", "")
    if not cleaned:
        raise InvalidTenorError("Empty tenor string")

    tokens = _PERIOD_TOKEN.findall(cleaned)
    if not tokens or "".join(n + u for n, u in tokens) != cleaned:
        raise InvalidTenorError(f"Cannot parse tenor: {text!r}")

    result = Period(int(tokens[0][0]), TimeUnit(tokens[0][1]))
    for number, unit in tokens[1:]:
        result = result + Period(int(number), TimeUnit(unit))
    return result


def to_period(tenor: Union[Period, Frequency, str]) -> Period:
    """Coerce a Period, Frequency or tenor string into a Period."""
    if isinstance(tenor, Period):
        return tenor
    if isinstance(tenor, Frequency):
        return Period.from_frequency(tenor)
    if isinstance(tenor, str):
        return parse_period(tenor)
    raise InvalidTenorError(f"Unsupported tenor type: {type(tenor).__name__}")


def add_period(d: date, period: Period) -> date:
    """
    Add a period to a date without any calendar adjustment.

    Month and year steps keep the day of month, clamped to the length of
    the target month.
    """
    n = period.length
    if period.unit == TimeUnit.DAYS:
        return d + timedelta(days=n)
    if period.unit == TimeUnit.WEEKS:
        return d + timedelta(weeks=n)
    if period.unit == TimeUnit.MONTHS:
        return d + relativedelta(months=n)
    return d + relativedelta(years=n)
