"""
Exception types raised while building calendars, periods and schedules.

All errors derive from ValueError so callers that already guard schedule
construction with ``except ValueError`` keep working.
"""


class ScheduleError(ValueError):
    """Base class for schedule construction and query errors."""


class InvalidRangeError(ScheduleError):
    """Dates are missing, out of order, or outside the schedule range."""


class InvalidTenorError(ScheduleError):
    """Tenor is negative, unparsable, or uses a unit the rule cannot step by."""


class InvalidRuleCombinationError(ScheduleError):
    """Parameters that are individually valid but incompatible with the rule."""
