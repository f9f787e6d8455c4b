"""
Schedule generation.

A Schedule is an ordered list of period boundary dates, each adjacent pair
forming a period flagged regular (a full tenor step) or irregular (a stub).
Schedules are generated from a start date, an end date, a tenor and a
DateGenerationRule, or built from an explicit list of dates.
"""

import copy
import logging
from bisect import bisect_left
from datetime import date
from typing import Any, Dict, Iterator, List, Optional, Sequence, Union

import numpy as np

from dategen.core.calendar import (
    DEFAULT_CALENDAR,
    BusinessDayConvention,
    Calendar,
    NullCalendar,
)
from dategen.core.date_generation import (
    DateGenerationRule,
    get_rule_policy,
    third_wednesday_of,
    validate_stub_date,
)
from dategen.core.dates import end_of_month as month_end
from dategen.core.day_count import DayCountConvention, day_count_fraction
from dategen.core.period import Frequency, Period, TimeUnit, add_period, to_period
from dategen.errors import (
    InvalidRangeError,
    InvalidRuleCombinationError,
    InvalidTenorError,
    ScheduleError,
)

logger = logging.getLogger(__name__)

# Raw dates are stepped on a calendar where every day is a business day
_NULL_CALENDAR = NullCalendar()

Tenor = Union[Period, Frequency, str]


class Schedule:
    """
    Ordered, strictly increasing schedule dates plus generation metadata.

    Schedules are immutable; ``until`` and ``after`` return new schedules.
    Metadata that was not supplied (typically for explicit schedules) raises
    ScheduleError when accessed; use the ``has_*`` methods to check first.
    """

    def __init__(
        self,
        dates: Sequence[date],
        calendar: Calendar,
        convention: BusinessDayConvention,
        termination_date_convention: Optional[BusinessDayConvention] = None,
        tenor: Optional[Period] = None,
        rule: Optional[DateGenerationRule] = None,
        end_of_month: Optional[bool] = None,
        is_regular: Optional[Sequence[bool]] = None,
        first_date: Optional[date] = None,
        next_to_last_date: Optional[date] = None,
    ) -> None:
        self._dates = tuple(dates)
        self._calendar = calendar
        self._convention = BusinessDayConvention(convention)
        self._termination_date_convention = (
            None if termination_date_convention is None
            else BusinessDayConvention(termination_date_convention)
        )
        self._tenor = tenor
        self._rule = None if rule is None else DateGenerationRule(rule)
        self._end_of_month = end_of_month
        self._is_regular = tuple(is_regular) if is_regular is not None else ()
        self._first_date = first_date
        self._next_to_last_date = next_to_last_date

        if self._is_regular and len(self._is_regular) != len(self._dates) - 1:
            raise ScheduleError(
                f"Regularity flags must number {len(self._dates) - 1} "
                f"for {len(self._dates)} dates, got {len(self._is_regular)}"
            )

    # ------------------------------------------------------------------
    # Sequence access
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._dates)

    def __iter__(self) -> Iterator[date]:
        return iter(self._dates)

    def __getitem__(self, idx: int) -> date:
        return self._dates[idx]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Schedule):
            return NotImplemented
        return self._dates == other._dates and self._is_regular == other._is_regular

    __hash__ = None

    @property
    def dates(self) -> List[date]:
        """Schedule dates as a new list."""
        return list(self._dates)

    def _require_dates(self) -> None:
        if not self._dates:
            raise ScheduleError("empty schedule")

    @property
    def start_date(self) -> date:
        self._require_dates()
        return self._dates[0]

    @property
    def end_date(self) -> date:
        self._require_dates()
        return self._dates[-1]

    def empty(self) -> bool:
        return not self._dates

    # ------------------------------------------------------------------
    # Metadata
    # ------------------------------------------------------------------

    @property
    def calendar(self) -> Calendar:
        return self._calendar

    @property
    def business_day_convention(self) -> BusinessDayConvention:
        return self._convention

    def has_termination_date_business_day_convention(self) -> bool:
        return self._termination_date_convention is not None

    @property
    def termination_date_business_day_convention(self) -> BusinessDayConvention:
        if self._termination_date_convention is None:
            raise ScheduleError("full interface (termination date bdc) not available")
        return self._termination_date_convention

    def has_tenor(self) -> bool:
        return self._tenor is not None

    @property
    def tenor(self) -> Period:
        if self._tenor is None:
            raise ScheduleError("full interface (tenor) not available")
        return self._tenor

    def has_rule(self) -> bool:
        return self._rule is not None

    @property
    def rule(self) -> DateGenerationRule:
        if self._rule is None:
            raise ScheduleError("full interface (rule) not available")
        return self._rule

    def has_end_of_month(self) -> bool:
        return self._end_of_month is not None

    @property
    def end_of_month(self) -> bool:
        if self._end_of_month is None:
            raise ScheduleError("full interface (end of month) not available")
        return self._end_of_month

    @property
    def first_date(self) -> Optional[date]:
        return self._first_date

    @property
    def next_to_last_date(self) -> Optional[date]:
        return self._next_to_last_date

    def has_is_regular(self) -> bool:
        return bool(self._is_regular)

    def is_regular(self, i: int) -> bool:
        """
        Whether the i-th period (from ``self[i-1]`` to ``self[i]``) is regular.

        Args:
            i: Period index, from 1 to ``len(self) - 1``

        Raises:
            ScheduleError: If no regularity information is available
            IndexError: If ``i`` is out of range
        """
        if not self._is_regular:
            raise ScheduleError("full interface (is_regular) not available")
        if not 1 <= i <= len(self._is_regular):
            raise IndexError(
                f"index ({i}) must be in [1, {len(self._is_regular)}]"
            )
        return self._is_regular[i - 1]

    @property
    def regularity(self) -> List[bool]:
        """Regularity flags, one per period."""
        if not self._is_regular:
            raise ScheduleError("full interface (is_regular) not available")
        return list(self._is_regular)

    # ------------------------------------------------------------------
    # Date queries
    # ------------------------------------------------------------------

    def previous_date(self, ref: date) -> Optional[date]:
        """Last schedule date strictly before ``ref``, or None."""
        pos = bisect_left(self._dates, ref)
        return self._dates[pos - 1] if pos > 0 else None

    def next_date(self, ref: date) -> Optional[date]:
        """First schedule date on or after ``ref``, or None."""
        pos = bisect_left(self._dates, ref)
        return self._dates[pos] if pos < len(self._dates) else None

    def until(self, truncation_date: date) -> "Schedule":
        """
        Schedule truncated after ``truncation_date``.

        Later dates are dropped; the truncation date becomes the last date
        (an irregular, unadjusted stub) when it is not already a schedule date.
        """
        self._require_dates()
        if truncation_date <= self._dates[0]:
            raise InvalidRangeError(
                f"truncation date {truncation_date} must be later than "
                f"schedule first date {self._dates[0]}"
            )
        if truncation_date >= self._dates[-1]:
            return self

        dates = list(self._dates)
        regular = list(self._is_regular)
        while dates[-1] > truncation_date:
            dates.pop()
            if regular:
                regular.pop()

        result = copy.copy(self)
        if dates[-1] != truncation_date:
            dates.append(truncation_date)
            if self._is_regular:
                regular.append(False)
            result._termination_date_convention = BusinessDayConvention.UNADJUSTED
        else:
            result._termination_date_convention = self._convention

        result._dates = tuple(dates)
        result._is_regular = tuple(regular)
        if self._next_to_last_date is not None and self._next_to_last_date >= truncation_date:
            result._next_to_last_date = None
        if self._first_date is not None and self._first_date >= truncation_date:
            result._first_date = None
        return result

    def after(self, truncation_date: date) -> "Schedule":
        """
        Schedule truncated before ``truncation_date``.

        Earlier dates are dropped; the truncation date becomes the first
        date (an irregular, unadjusted stub) when it is not already a
        schedule date.
        """
        self._require_dates()
        if truncation_date >= self._dates[-1]:
            raise InvalidRangeError(
                f"truncation date {truncation_date} must be earlier than "
                f"schedule end date {self._dates[-1]}"
            )
        if truncation_date <= self._dates[0]:
            return self

        dates = list(self._dates)
        regular = list(self._is_regular)
        while dates[0] < truncation_date:
            dates.pop(0)
            if regular:
                regular.pop(0)

        result = copy.copy(self)
        if dates[0] != truncation_date:
            dates.insert(0, truncation_date)
            if self._is_regular:
                regular.insert(0, False)
            result._convention = BusinessDayConvention.UNADJUSTED
        elif self._termination_date_convention is not None:
            result._convention = self._termination_date_convention

        result._dates = tuple(dates)
        result._is_regular = tuple(regular)
        if self._next_to_last_date is not None and self._next_to_last_date <= truncation_date:
            result._next_to_last_date = None
        if self._first_date is not None and self._first_date <= truncation_date:
            result._first_date = None
        return result

    def year_fractions(
        self,
        day_count: DayCountConvention = DayCountConvention.ACT_365F,
    ) -> np.ndarray:
        """Year fraction of each period, one entry per period."""
        return np.array([
            day_count_fraction(start, end, day_count)
            for start, end in zip(self._dates[:-1], self._dates[1:])
        ])

    def times(
        self,
        reference: date,
        day_count: DayCountConvention = DayCountConvention.ACT_365F,
    ) -> np.ndarray:
        """
        Time from ``reference`` to each schedule date, in years.

        Dates before the reference map to negative times.
        """
        result = np.empty(len(self._dates))
        for i, d in enumerate(self._dates):
            if d >= reference:
                result[i] = day_count_fraction(reference, d, day_count)
            else:
                result[i] = -day_count_fraction(d, reference, day_count)
        return result

    def to_dict(self) -> Dict[str, Any]:
        """Serialise dates and metadata to plain JSON-friendly types."""
        return {
            "dates": [d.isoformat() for d in self._dates],
            "is_regular": list(self._is_regular) or None,
            "calendar": self._calendar.name,
            "convention": self._convention.value,
            "termination_date_convention": (
                self._termination_date_convention.value
                if self._termination_date_convention is not None else None
            ),
            "tenor": str(self._tenor) if self._tenor is not None else None,
            "rule": self._rule.value if self._rule is not None else None,
            "end_of_month": self._end_of_month,
            "first_date": self._first_date.isoformat() if self._first_date else None,
            "next_to_last_date": (
                self._next_to_last_date.isoformat() if self._next_to_last_date else None
            ),
        }

    def __repr__(self) -> str:
        if not self._dates:
            return "Schedule([])"
        return (
            f"Schedule({self._dates[0]} -> {self._dates[-1]}, "
            f"{len(self._dates)} dates, tenor={self._tenor}, "
            f"rule={self._rule.value if self._rule is not None else None})"
        )


# ============================================================================
# Generation
# ============================================================================


def _default_effective_date(
    termination_date: date,
    next_to_last_date: Optional[date],
    evaluation_date: date,
) -> date:
    """Effective date implied by an evaluation date, a whole number of years back."""
    if evaluation_date >= termination_date:
        raise InvalidRangeError(
            f"null effective date: evaluation date {evaluation_date} is not "
            f"before termination date {termination_date}"
        )
    ref = next_to_last_date or termination_date
    years = (ref - evaluation_date).days // 366 + 1
    return add_period(ref, Period(-years, TimeUnit.YEARS))


def _allows_end_of_month(tenor: Period) -> bool:
    return (
        tenor.unit in (TimeUnit.MONTHS, TimeUnit.YEARS)
        and tenor >= Period(1, TimeUnit.MONTHS)
    )


def generate_schedule(
    effective_date: Optional[date],
    termination_date: date,
    tenor: Tenor,
    calendar: Optional[Calendar] = None,
    convention: BusinessDayConvention = BusinessDayConvention.MODIFIED_FOLLOWING,
    termination_date_convention: Optional[BusinessDayConvention] = None,
    rule: DateGenerationRule = DateGenerationRule.BACKWARD,
    end_of_month: bool = False,
    first_date: Optional[date] = None,
    next_to_last_date: Optional[date] = None,
    evaluation_date: Optional[date] = None,
) -> Schedule:
    """
    Generate a schedule of period boundary dates.

    Raw dates are stepped from the anchor by multiples of the tenor on a
    null calendar, then moved to month end or adjusted with the calendar.

    Args:
        effective_date: Schedule start date. May be None for BACKWARD
            schedules when ``evaluation_date`` is given; the start is then
            placed a whole number of years before the end.
        termination_date: Schedule end date
        tenor: Period between dates, as a Period, Frequency or string ("6M")
        calendar: Business day calendar (defaults to weekend-only)
        convention: Convention for all dates but the last
        termination_date_convention: Convention for the last date
            (defaults to ``convention``)
        rule: Date generation rule
        end_of_month: Keep dates on month ends when the anchor is one
        first_date: Optional end of the first (stub) period
        next_to_last_date: Optional start of the last (stub) period
        evaluation_date: Reference date used when ``effective_date`` is None

    Returns:
        Schedule with dates, regularity flags and metadata

    Raises:
        InvalidRangeError: Dates missing, out of order or out of range
        InvalidTenorError: Negative tenor, or a unit the rule cannot step by
        InvalidRuleCombinationError: Options the rule does not accept
    """
    cal = calendar or DEFAULT_CALENDAR
    convention = BusinessDayConvention(convention)
    term_conv = (
        convention if termination_date_convention is None
        else BusinessDayConvention(termination_date_convention)
    )
    rule = DateGenerationRule(rule)
    tenor = to_period(tenor)

    if termination_date is None:
        raise InvalidRangeError("null termination date")
    if effective_date is None:
        if first_date is None and rule == DateGenerationRule.BACKWARD and evaluation_date is not None:
            effective_date = _default_effective_date(
                termination_date, next_to_last_date, evaluation_date
            )
            logger.debug(f"Effective date defaulted to {effective_date}")
        else:
            raise InvalidRangeError("null effective date")
    if effective_date >= termination_date:
        raise InvalidRangeError(
            f"effective date ({effective_date}) later than or equal to "
            f"termination date ({termination_date})"
        )

    if tenor.length < 0:
        raise InvalidTenorError(f"non positive tenor ({tenor}) not allowed")
    if tenor.length == 0 and rule != DateGenerationRule.ZERO:
        logger.warning(f"Zero tenor {tenor}: using the ZERO rule instead of {rule.value}")
        rule = DateGenerationRule.ZERO

    policy = get_rule_policy(rule)
    if policy.roll_rule and tenor.unit in (TimeUnit.DAYS, TimeUnit.WEEKS):
        raise InvalidTenorError(
            f"{rule.value} date generation rule needs a month or year tenor, got {tenor}"
        )
    if policy.quarterly_tenor and (tenor.length * (12 if tenor.unit == TimeUnit.YEARS else 1)) % 3:
        raise InvalidRuleCombinationError(
            f"{rule.value} date generation rule needs a tenor multiple of 3 months, got {tenor}"
        )

    if end_of_month and not _allows_end_of_month(tenor):
        logger.warning(f"End-of-month ignored for tenor {tenor}")
        end_of_month = False
    if end_of_month and not policy.allows_end_of_month:
        raise InvalidRuleCombinationError(
            f"endOfMonth convention incompatible with {rule.value} date generation rule"
        )

    if first_date == effective_date:
        first_date = None
    if next_to_last_date == termination_date:
        next_to_last_date = None
    if first_date is not None:
        validate_stub_date("first date", first_date, effective_date, termination_date, rule)
    if next_to_last_date is not None:
        validate_stub_date(
            "next-to-last date", next_to_last_date, effective_date, termination_date, rule
        )

    seed: Optional[date] = None

    if policy.direction == "zero":
        tenor = Period(0, TimeUnit.YEARS)
        dates = [effective_date, termination_date]
        regular = [True]

    elif policy.direction == "backward":
        dates = [termination_date]
        regular = []
        seed = termination_date
        periods = 1

        if next_to_last_date is not None:
            temp = _NULL_CALENDAR.advance(seed, tenor * -periods, convention=convention,
                                          end_of_month=end_of_month)
            dates.append(next_to_last_date)
            regular.append(temp == next_to_last_date)
            seed = next_to_last_date

        exit_date = first_date or effective_date
        while True:
            temp = _NULL_CALENDAR.advance(seed, tenor * -periods, convention=convention,
                                          end_of_month=end_of_month)
            if temp < exit_date:
                if first_date is not None and (
                    cal.adjust(dates[-1], convention) != cal.adjust(first_date, convention)
                ):
                    dates.append(first_date)
                    regular.append(False)
                break
            if cal.adjust(dates[-1], convention) != cal.adjust(temp, convention):
                dates.append(temp)
                regular.append(True)
            else:
                logger.debug(f"Skipping {temp}: adjusts onto {dates[-1]}")
            periods += 1

        if cal.adjust(dates[-1], convention) != cal.adjust(effective_date, convention):
            dates.append(effective_date)
            regular.append(False)

        dates.reverse()
        regular.reverse()

    else:
        termination_date = policy.termination(effective_date, termination_date, rule)
        dates, regular = policy.start(effective_date, cal, convention, rule)
        seed = dates[-1]
        periods = 1

        if first_date is not None:
            temp = _NULL_CALENDAR.advance(seed, tenor * periods, convention=convention,
                                          end_of_month=end_of_month)
            dates.append(first_date)
            regular.append(temp == first_date)
            seed = first_date
        else:
            roll = policy.first_roll(effective_date, rule)
            if roll is not None and roll != effective_date:
                dates.append(roll)
                regular.append(policy.first_roll_regular)
                seed = roll

        exit_date = next_to_last_date or termination_date
        while True:
            temp = _NULL_CALENDAR.advance(seed, tenor * periods, convention=convention,
                                          end_of_month=end_of_month)
            if temp > exit_date:
                if next_to_last_date is not None and (
                    cal.adjust(dates[-1], convention) != cal.adjust(next_to_last_date, convention)
                ):
                    dates.append(next_to_last_date)
                    regular.append(False)
                break
            if cal.adjust(dates[-1], convention) != cal.adjust(temp, convention):
                dates.append(temp)
                regular.append(True)
            else:
                logger.debug(f"Skipping {temp}: adjusts onto {dates[-1]}")
            periods += 1

        if cal.adjust(dates[-1], term_conv) != cal.adjust(termination_date, term_conv):
            end, end_regular = policy.end_roll(termination_date, rule)
            dates.append(end)
            regular.append(end_regular)

    if policy.third_wednesday == "interior":
        for i in range(1, len(dates) - 1):
            dates[i] = third_wednesday_of(dates[i])
    elif policy.third_wednesday == "all":
        dates = [third_wednesday_of(d) for d in dates]

    if end_of_month and seed is not None and cal.is_end_of_month(seed):
        for i in range(1, len(dates) - 1):
            if convention == BusinessDayConvention.UNADJUSTED:
                dates[i] = month_end(dates[i])
            else:
                dates[i] = cal.end_of_month(dates[i])

        d1, d2 = dates[0], dates[-1]
        if term_conv != BusinessDayConvention.UNADJUSTED:
            d1 = cal.end_of_month(dates[0])
            d2 = cal.end_of_month(dates[-1])
        elif policy.direction == "backward":
            # the unadjusted termination is the last date going backward
            d2 = month_end(dates[-1])
        else:
            d1 = month_end(dates[0])
        # not applied when it would leave a single date
        if d1 != d2:
            dates[0], dates[-1] = d1, d2
    else:
        if policy.adjust_first:
            dates[0] = cal.adjust(dates[0], convention)
        for i in range(1, len(dates) - 1):
            dates[i] = cal.adjust(dates[i], convention)
        if term_conv != BusinessDayConvention.UNADJUSTED and policy.adjust_last:
            dates[-1] = cal.adjust(dates[-1], term_conv)

    # merge next-to-last dates that adjusted onto or past the last date
    while len(dates) >= 2 and dates[-2] >= dates[-1]:
        if len(regular) >= 2:
            regular[-2] = dates[-2] == dates[-1]
        dates[-2] = dates[-1]
        dates.pop()
        regular.pop()
    # and second dates that adjusted onto or before the first
    while len(dates) >= 2 and dates[1] <= dates[0]:
        if len(regular) >= 2:
            regular[1] = dates[1] == dates[0]
        dates[1] = dates[0]
        dates.pop(0)
        regular.pop(0)

    if len(dates) < 2:
        raise InvalidRangeError(
            f"degenerate single date ({dates[0]}) schedule: "
            f"seed date {seed}, exit date {termination_date}"
        )

    logger.debug(
        f"Generated {len(dates)} dates from {dates[0]} to {dates[-1]} "
        f"({rule.value}, {tenor}, {cal.name})"
    )

    return Schedule(
        dates=dates,
        calendar=cal,
        convention=convention,
        termination_date_convention=term_conv,
        tenor=tenor,
        rule=rule,
        end_of_month=end_of_month,
        is_regular=regular,
        first_date=first_date,
        next_to_last_date=next_to_last_date,
    )


def generate_explicit_schedule(
    dates: Sequence[date],
    calendar: Optional[Calendar] = None,
    convention: BusinessDayConvention = BusinessDayConvention.UNADJUSTED,
    termination_date_convention: Optional[BusinessDayConvention] = None,
    tenor: Optional[Tenor] = None,
    rule: Optional[DateGenerationRule] = None,
    end_of_month: Optional[bool] = None,
    is_regular: Optional[Sequence[bool]] = None,
) -> Schedule:
    """
    Build a schedule from explicit dates.

    Dates are kept exactly as given (no sorting, adjustment or checks);
    metadata and regularity flags are stored unchanged.

    Args:
        dates: Schedule dates
        calendar: Calendar (defaults to the null calendar)
        convention: Business day convention (defaults to unadjusted)
        termination_date_convention: Convention for the last date
        tenor: Tenor the dates were generated with
        rule: Rule the dates were generated with
        end_of_month: End-of-month flag the dates were generated with
        is_regular: One flag per period, ``len(dates) - 1`` in total

    Raises:
        ScheduleError: If the number of regularity flags does not match
    """
    if is_regular and len(is_regular) != len(dates) - 1:
        raise ScheduleError(
            f"isRegular size ({len(is_regular)}) must be zero or equal to "
            f"the number of dates minus 1 ({len(dates) - 1})"
        )
    return Schedule(
        dates=dates,
        calendar=calendar if calendar is not None else NullCalendar(),
        convention=convention,
        termination_date_convention=termination_date_convention,
        tenor=to_period(tenor) if tenor is not None else None,
        rule=rule,
        end_of_month=end_of_month,
        is_regular=is_regular,
    )
