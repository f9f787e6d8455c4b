"""Core utilities: periods, calendars, day counts and schedule generation."""

from dategen.core.period import Frequency, Period, TimeUnit, parse_period, to_period
from dategen.core.day_count import DayCountConvention, day_count_fraction
from dategen.core.calendar import (
    BusinessDayConvention,
    Calendar,
    JointCalendar,
    JoinRule,
    NullCalendar,
    WeekendsOnly,
    adjust_date,
)
from dategen.core.date_generation import DateGenerationRule, cds_maturity
from dategen.core.schedule import Schedule, generate_explicit_schedule, generate_schedule
from dategen.core.make_schedule import ScheduleBuilder

__all__ = [
    "Frequency",
    "Period",
    "TimeUnit",
    "parse_period",
    "to_period",
    "DayCountConvention",
    "day_count_fraction",
    "BusinessDayConvention",
    "Calendar",
    "JointCalendar",
    "JoinRule",
    "NullCalendar",
    "WeekendsOnly",
    "adjust_date",
    "DateGenerationRule",
    "cds_maturity",
    "Schedule",
    "generate_explicit_schedule",
    "generate_schedule",
    "ScheduleBuilder",
]
