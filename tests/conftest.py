"""
Shared pytest fixtures for dategen tests.

Provides reusable calendars, schedules and schedule definitions.
"""

import pytest
from datetime import date
from typing import Any, Dict

from dategen.calendars import JAPAN, TARGET_CALENDAR, US_GOVERNMENT_BOND
from dategen.core.calendar import BusinessDayConvention, Calendar, NullCalendar
from dategen.core.date_generation import DateGenerationRule
from dategen.core.schedule import Schedule, generate_schedule


@pytest.fixture
def target() -> Calendar:
    """TARGET calendar."""
    return TARGET_CALENDAR


@pytest.fixture
def japan() -> Calendar:
    """Japanese calendar."""
    return JAPAN


@pytest.fixture
def us_government_bond() -> Calendar:
    """US government bond market calendar."""
    return US_GOVERNMENT_BOND


@pytest.fixture
def null_calendar() -> Calendar:
    """Calendar where every day is a business day."""
    return NullCalendar()


@pytest.fixture
def semiannual_schedule(target: Calendar) -> Schedule:
    """Five-year semiannual backward schedule on TARGET."""
    return generate_schedule(
        effective_date=date(2024, 1, 15),
        termination_date=date(2029, 1, 15),
        tenor="6M",
        calendar=target,
        convention=BusinessDayConvention.MODIFIED_FOLLOWING,
        rule=DateGenerationRule.BACKWARD,
    )


@pytest.fixture
def schedule_spec_dict() -> Dict[str, Any]:
    """Valid schedule definition as loaded from JSON."""
    return {
        "schedule_id": "EUR-IRS-5Y",
        "effective_date": "2024-01-15",
        "termination_date": "2029-01-15",
        "tenor": "6M",
        "calendar": "TARGET",
        "convention": "MODIFIED_FOLLOWING",
        "rule": "BACKWARD",
        "end_of_month": False,
        "day_count": "30/360",
    }
