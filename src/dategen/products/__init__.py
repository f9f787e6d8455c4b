"""Schedule definitions: JSON schema, loading and validation."""

from dategen.products.schema import (
    CalendarName,
    ScheduleSpec,
    load_schedule_spec,
    validate_schedule_spec_json,
    print_schedule_summary,
)

__all__ = [
    "CalendarName",
    "ScheduleSpec",
    "load_schedule_spec",
    "validate_schedule_spec_json",
    "print_schedule_summary",
]
