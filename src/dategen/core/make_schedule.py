"""
Fluent schedule construction.

Example:
    >>> from datetime import date
    >>> from dategen.calendars import TARGET_CALENDAR
    >>> schedule = (
    ...     ScheduleBuilder()
    ...     .from_date(date(2024, 1, 15))
    ...     .to_date(date(2026, 1, 15))
    ...     .with_tenor("6M")
    ...     .with_calendar(TARGET_CALENDAR)
    ...     .forwards()
    ...     .build()
    ... )
"""

from datetime import date
from typing import Optional, Union

from dategen.core.calendar import BusinessDayConvention, Calendar, NullCalendar
from dategen.core.date_generation import DateGenerationRule
from dategen.core.period import Frequency, Period, to_period
from dategen.core.schedule import Schedule, generate_schedule
from dategen.errors import InvalidRangeError, InvalidTenorError


class ScheduleBuilder:
    """
    Builder for rule-based schedules.

    Unset options take dynamic defaults at ``build()`` time: the convention
    is FOLLOWING when a calendar was given and UNADJUSTED otherwise, the
    termination convention follows the convention, the calendar is the null
    calendar, the rule is BACKWARD and end-of-month is off.
    """

    def __init__(self) -> None:
        self._effective_date: Optional[date] = None
        self._termination_date: Optional[date] = None
        self._tenor: Optional[Period] = None
        self._calendar: Optional[Calendar] = None
        self._convention: Optional[BusinessDayConvention] = None
        self._termination_date_convention: Optional[BusinessDayConvention] = None
        self._rule = DateGenerationRule.BACKWARD
        self._end_of_month = False
        self._first_date: Optional[date] = None
        self._next_to_last_date: Optional[date] = None

    def from_date(self, effective_date: date) -> "ScheduleBuilder":
        self._effective_date = effective_date
        return self

    def to_date(self, termination_date: date) -> "ScheduleBuilder":
        self._termination_date = termination_date
        return self

    def with_tenor(self, tenor: Union[Period, str]) -> "ScheduleBuilder":
        self._tenor = to_period(tenor)
        return self

    def with_frequency(self, frequency: Frequency) -> "ScheduleBuilder":
        self._tenor = Period.from_frequency(frequency)
        return self

    def with_calendar(self, calendar: Calendar) -> "ScheduleBuilder":
        self._calendar = calendar
        return self

    def with_convention(self, convention: BusinessDayConvention) -> "ScheduleBuilder":
        self._convention = BusinessDayConvention(convention)
        return self

    def with_termination_date_convention(
        self, convention: BusinessDayConvention
    ) -> "ScheduleBuilder":
        self._termination_date_convention = BusinessDayConvention(convention)
        return self

    def with_rule(self, rule: DateGenerationRule) -> "ScheduleBuilder":
        self._rule = DateGenerationRule(rule)
        return self

    def forwards(self) -> "ScheduleBuilder":
        self._rule = DateGenerationRule.FORWARD
        return self

    def backwards(self) -> "ScheduleBuilder":
        self._rule = DateGenerationRule.BACKWARD
        return self

    def end_of_month(self, flag: bool = True) -> "ScheduleBuilder":
        self._end_of_month = flag
        return self

    def with_first_date(self, d: date) -> "ScheduleBuilder":
        self._first_date = d
        return self

    def with_next_to_last_date(self, d: date) -> "ScheduleBuilder":
        self._next_to_last_date = d
        return self

    def build(self) -> Schedule:
        """
        Generate the schedule.

        Raises:
            InvalidRangeError: If the start or end date is missing
            InvalidTenorError: If neither a tenor nor a frequency was given
        """
        if self._effective_date is None:
            raise InvalidRangeError("effective date not provided")
        if self._termination_date is None:
            raise InvalidRangeError("termination date not provided")
        if self._tenor is None:
            raise InvalidTenorError("tenor/frequency not provided")

        if self._convention is not None:
            convention = self._convention
        elif self._calendar is not None:
            convention = BusinessDayConvention.FOLLOWING
        else:
            convention = BusinessDayConvention.UNADJUSTED

        termination_convention = self._termination_date_convention or convention
        calendar = self._calendar if self._calendar is not None else NullCalendar()

        return generate_schedule(
            effective_date=self._effective_date,
            termination_date=self._termination_date,
            tenor=self._tenor,
            calendar=calendar,
            convention=convention,
            termination_date_convention=termination_convention,
            rule=self._rule,
            end_of_month=self._end_of_month,
            first_date=self._first_date,
            next_to_last_date=self._next_to_last_date,
        )
