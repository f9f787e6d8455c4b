"""
Strict Pydantic schema for JSON schedule definitions.

A definition names the dates, tenor, calendar and conventions of a
schedule; ``ScheduleSpec.build()`` generates it.
"""

from datetime import date
from enum import Enum
from typing import Optional, Union
from pydantic import BaseModel, Field, field_validator, model_validator
import json
from pathlib import Path

from dategen.calendars import get_calendar
from dategen.core.calendar import BusinessDayConvention
from dategen.core.date_generation import DateGenerationRule
from dategen.core.day_count import DayCountConvention
from dategen.core.period import parse_period
from dategen.core.schedule import Schedule, generate_schedule
from dategen.errors import ScheduleError
from dategen.reporting.periods import PeriodTable, build_period_table


class CalendarName(str, Enum):
    """Supported calendars."""
    NULL = "NULL"                    # Every day is a business day
    WEEKENDS = "WE"                  # Weekends only
    TARGET = "TARGET"                # Euro area
    JAPAN = "JAPAN"                  # Japanese banks
    US_GOVBOND = "US_GOVBOND"        # US government bond market
    US_SETTLEMENT = "US_SETTLEMENT"  # US settlement


class ScheduleSpec(BaseModel):
    """
    Complete definition of a rule-based schedule.

    All fields are validated for consistency before any date is generated.
    """

    schedule_id: Optional[str] = Field(default=None, min_length=1)
    effective_date: date
    termination_date: date
    tenor: str = Field(..., min_length=2, description="Tenor such as '6M', '1Y' or '1Y6M'")
    calendar: CalendarName = CalendarName.WEEKENDS
    convention: BusinessDayConvention = BusinessDayConvention.MODIFIED_FOLLOWING
    termination_date_convention: Optional[BusinessDayConvention] = Field(
        default=None,
        description="Convention for the last date (defaults to convention)"
    )
    rule: DateGenerationRule = DateGenerationRule.BACKWARD
    end_of_month: bool = False
    first_date: Optional[date] = None
    next_to_last_date: Optional[date] = None
    day_count: DayCountConvention = DayCountConvention.ACT_360

    @field_validator('tenor')
    @classmethod
    def validate_tenor(cls, v: str) -> str:
        """Validate the tenor string parses and is not negative."""
        try:
            period = parse_period(v)
        except ScheduleError as e:
            raise ValueError(str(e)) from e
        if period.length < 0:
            raise ValueError(f"tenor must not be negative, got {v}")
        return v.strip().upper()

    @model_validator(mode='after')
    def validate_dates(self) -> 'ScheduleSpec':
        """Validate date ordering."""
        if self.effective_date >= self.termination_date:
            raise ValueError("effective_date must be before termination_date")
        if self.first_date is not None:
            if not self.effective_date < self.first_date <= self.termination_date:
                raise ValueError("first_date must be in (effective_date, termination_date]")
        if self.next_to_last_date is not None:
            if not self.effective_date <= self.next_to_last_date < self.termination_date:
                raise ValueError("next_to_last_date must be in [effective_date, termination_date)")
        return self

    class Config:
        """Pydantic configuration."""
        extra = "forbid"

    def build(self) -> Schedule:
        """Generate the schedule described by this definition."""
        return generate_schedule(
            effective_date=self.effective_date,
            termination_date=self.termination_date,
            tenor=parse_period(self.tenor),
            calendar=get_calendar(self.calendar.value),
            convention=self.convention,
            termination_date_convention=self.termination_date_convention,
            rule=self.rule,
            end_of_month=self.end_of_month,
            first_date=self.first_date,
            next_to_last_date=self.next_to_last_date,
        )

    def period_table(self) -> PeriodTable:
        """Generate the schedule and tabulate its periods with ``day_count``."""
        return build_period_table(self.build(), self.day_count)


# ============================================================================
# Loading and validation functions
# ============================================================================

def load_schedule_spec(path: Union[str, Path]) -> ScheduleSpec:
    """
    Load and validate a schedule definition from JSON file.

    Args:
        path: Path to JSON file

    Returns:
        Validated ScheduleSpec object

    Raises:
        FileNotFoundError: If file doesn't exist
        ValidationError: If JSON doesn't match schema
    """
    filepath = Path(path)
    if not filepath.exists():
        raise FileNotFoundError(f"Schedule definition not found: {path}")

    with open(filepath, "r") as f:
        data = json.load(f)

    return ScheduleSpec(**data)


def validate_schedule_spec_json(data: dict) -> ScheduleSpec:
    """
    Validate schedule definition data dictionary.

    Args:
        data: Raw JSON data as dictionary

    Returns:
        Validated ScheduleSpec object
    """
    return ScheduleSpec(**data)


def print_schedule_summary(spec: ScheduleSpec, schedule: Optional[Schedule] = None) -> None:
    """Print a clean summary of a schedule definition and its dates."""
    schedule = schedule or spec.build()

    print("=" * 70)
    print(f"SCHEDULE SUMMARY: {spec.schedule_id or '-'}")
    print("=" * 70)

    print(f"\n--- DEFINITION ---")
    print(f"  Effective:     {spec.effective_date}")
    print(f"  Termination:   {spec.termination_date}")
    print(f"  Tenor:         {spec.tenor}")
    print(f"  Calendar:      {schedule.calendar.name}")
    print(f"  Convention:    {spec.convention.value}")
    print(f"  Term. conv.:   {schedule.termination_date_business_day_convention.value}")
    print(f"  Rule:          {schedule.rule.value}")
    print(f"  End of month:  {schedule.end_of_month}")
    if spec.first_date:
        print(f"  First date:    {spec.first_date}")
    if spec.next_to_last_date:
        print(f"  Next-to-last:  {spec.next_to_last_date}")

    print(f"\n--- DATES ({len(schedule)}) ---")
    for i, d in enumerate(schedule):
        flag = ""
        if i > 0 and schedule.has_is_regular() and not schedule.is_regular(i):
            flag = "  (stub)"
        print(f"  {d.isoformat()}  {d.strftime('%a')}{flag}")

    print("=" * 70)
    print("VALIDATION: PASSED")
    print("=" * 70)
