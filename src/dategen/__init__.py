"""
dategen - Schedule date generation for fixed income instruments.

Generates coupon and accrual schedules between a start and an end date
using business day calendars and market conventions:
- Forward, backward and zero generation with stub periods
- IMM (third Wednesday), twentieth and CDS roll rules
- End-of-month rolling and business day adjustment
- TARGET, Japan and United States calendars
- Period tables with day count fractions

Example:
    >>> from datetime import date
    >>> from dategen import ScheduleBuilder, TARGET_CALENDAR
    >>> schedule = (
    ...     ScheduleBuilder()
    ...     .from_date(date(2024, 1, 15))
    ...     .to_date(date(2029, 1, 15))
    ...     .with_tenor("6M")
    ...     .with_calendar(TARGET_CALENDAR)
    ...     .build()
    ... )
    >>> print(schedule.dates)
"""

__version__ = "0.1.0"

# Errors
from dategen.errors import (
    ScheduleError,
    InvalidRangeError,
    InvalidTenorError,
    InvalidRuleCombinationError,
)

# Core types
from dategen.core.period import (
    Frequency,
    Period,
    TimeUnit,
    parse_period,
)
from dategen.core.calendar import (
    BusinessDayConvention,
    Calendar,
    JointCalendar,
    JoinRule,
    NullCalendar,
    WeekendsOnly,
)
from dategen.core.day_count import DayCountConvention, day_count_fraction
from dategen.core.date_generation import DateGenerationRule, cds_maturity

# Schedules
from dategen.core.schedule import (
    Schedule,
    generate_schedule,
    generate_explicit_schedule,
)
from dategen.core.make_schedule import ScheduleBuilder

# Calendars
from dategen.calendars import (
    TARGET,
    Japan,
    UnitedStates,
    USMarket,
    TARGET_CALENDAR,
    get_calendar,
)

# Reporting
from dategen.reporting import (
    PeriodTable,
    PeriodRow,
    build_period_table,
)

# Schedule definitions
from dategen.products.schema import (
    ScheduleSpec,
    load_schedule_spec,
    validate_schedule_spec_json,
    print_schedule_summary,
)

__all__ = [
    # Version
    "__version__",
    # Errors
    "ScheduleError",
    "InvalidRangeError",
    "InvalidTenorError",
    "InvalidRuleCombinationError",
    # Core types
    "Frequency",
    "Period",
    "TimeUnit",
    "parse_period",
    "BusinessDayConvention",
    "Calendar",
    "JointCalendar",
    "JoinRule",
    "NullCalendar",
    "WeekendsOnly",
    "DayCountConvention",
    "day_count_fraction",
    "DateGenerationRule",
    "cds_maturity",
    # Schedules
    "Schedule",
    "generate_schedule",
    "generate_explicit_schedule",
    "ScheduleBuilder",
    # Calendars
    "TARGET",
    "Japan",
    "UnitedStates",
    "USMarket",
    "TARGET_CALENDAR",
    "get_calendar",
    # Reporting
    "PeriodTable",
    "PeriodRow",
    "build_period_table",
    # Schedule definitions
    "ScheduleSpec",
    "load_schedule_spec",
    "validate_schedule_spec_json",
    "print_schedule_summary",
]
