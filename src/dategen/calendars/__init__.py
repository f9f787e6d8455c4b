"""Market calendars and a name registry."""

from typing import Dict

from dategen.core.calendar import Calendar, NullCalendar, WeekendsOnly
from dategen.calendars.japan import Japan
from dategen.calendars.target import TARGET
from dategen.calendars.united_states import UnitedStates, USMarket

# Pre-defined calendar instances
NULL_CALENDAR = NullCalendar()
WEEKENDS_ONLY = WeekendsOnly()
TARGET_CALENDAR = TARGET()
JAPAN = Japan()
US_GOVERNMENT_BOND = UnitedStates(USMarket.GOVERNMENT_BOND)
US_SETTLEMENT = UnitedStates(USMarket.SETTLEMENT)

# Calendar registry
CALENDARS: Dict[str, Calendar] = {
    "NULL": NULL_CALENDAR,
    "WE": WEEKENDS_ONLY,
    "WEEKENDS": WEEKENDS_ONLY,
    "TARGET": TARGET_CALENDAR,
    "EUR": TARGET_CALENDAR,  # Alias
    "JAPAN": JAPAN,
    "JP": JAPAN,
    "US_GOVBOND": US_GOVERNMENT_BOND,
    "US_SETTLEMENT": US_SETTLEMENT,
}


def get_calendar(name: str) -> Calendar:
    """
    Get a calendar by name.

    Args:
        name: Calendar name, case-insensitive (e.g. "TARGET", "JAPAN", "US_GOVBOND")

    Raises:
        ValueError: If the name is not registered
    """
    key = name.strip().upper()
    if key not in CALENDARS:
        raise ValueError(
            f"Unknown calendar: {name}. Available: {sorted(CALENDARS.keys())}"
        )
    return CALENDARS[key]


__all__ = [
    "TARGET",
    "Japan",
    "UnitedStates",
    "USMarket",
    "CALENDARS",
    "get_calendar",
    "NULL_CALENDAR",
    "WEEKENDS_ONLY",
    "TARGET_CALENDAR",
    "JAPAN",
    "US_GOVERNMENT_BOND",
    "US_SETTLEMENT",
]
