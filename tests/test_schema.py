"""Tests for Pydantic schema validation."""

import pytest
from datetime import date
import json
from pathlib import Path
from typing import Any, Dict

from pydantic import ValidationError

from dategen.core.calendar import BusinessDayConvention
from dategen.core.date_generation import DateGenerationRule
from dategen.core.day_count import DayCountConvention
from dategen.products.schema import (
    CalendarName,
    ScheduleSpec,
    load_schedule_spec,
    print_schedule_summary,
    validate_schedule_spec_json,
)

EXAMPLES = Path(__file__).parent.parent / "examples"


class TestScheduleSpec:
    """Tests for field and model validation."""

    def test_valid(self, schedule_spec_dict: Dict[str, Any]) -> None:
        spec = validate_schedule_spec_json(schedule_spec_dict)
        assert spec.effective_date == date(2024, 1, 15)
        assert spec.calendar == CalendarName.TARGET
        assert spec.convention == BusinessDayConvention.MODIFIED_FOLLOWING
        assert spec.rule == DateGenerationRule.BACKWARD
        assert spec.day_count == DayCountConvention.THIRTY_360

    def test_defaults(self) -> None:
        spec = ScheduleSpec(
            effective_date=date(2024, 1, 15),
            termination_date=date(2025, 1, 15),
            tenor="6m",
        )
        assert spec.tenor == "6M"
        assert spec.calendar == CalendarName.WEEKENDS
        assert spec.termination_date_convention is None
        assert spec.day_count == DayCountConvention.ACT_360

    def test_bad_tenor(self, schedule_spec_dict: Dict[str, Any]) -> None:
        schedule_spec_dict["tenor"] = "6X"
        with pytest.raises(ValidationError, match="Cannot parse tenor"):
            ScheduleSpec(**schedule_spec_dict)

    def test_negative_tenor(self, schedule_spec_dict: Dict[str, Any]) -> None:
        schedule_spec_dict["tenor"] = "-6M"
        with pytest.raises(ValidationError, match="must not be negative"):
            ScheduleSpec(**schedule_spec_dict)

    def test_dates_out_of_order(self, schedule_spec_dict: Dict[str, Any]) -> None:
        schedule_spec_dict["termination_date"] = "2023-01-15"
        with pytest.raises(ValidationError, match="effective_date must be before"):
            ScheduleSpec(**schedule_spec_dict)

    def test_first_date_out_of_range(self, schedule_spec_dict: Dict[str, Any]) -> None:
        schedule_spec_dict["first_date"] = "2030-01-15"
        with pytest.raises(ValidationError, match="first_date"):
            ScheduleSpec(**schedule_spec_dict)

    def test_unknown_calendar(self, schedule_spec_dict: Dict[str, Any]) -> None:
        schedule_spec_dict["calendar"] = "MARS"
        with pytest.raises(ValidationError):
            ScheduleSpec(**schedule_spec_dict)

    def test_extra_fields_forbidden(self, schedule_spec_dict: Dict[str, Any]) -> None:
        schedule_spec_dict["notional"] = 1_000_000
        with pytest.raises(ValidationError):
            ScheduleSpec(**schedule_spec_dict)


class TestBuild:
    """Tests for generating schedules from definitions."""

    def test_build(self, schedule_spec_dict: Dict[str, Any]) -> None:
        schedule = ScheduleSpec(**schedule_spec_dict).build()
        assert len(schedule) == 11
        assert schedule.calendar.name == "TARGET"
        assert schedule[8] == date(2028, 1, 17)

    def test_period_table_uses_day_count(self, schedule_spec_dict: Dict[str, Any]) -> None:
        table = ScheduleSpec(**schedule_spec_dict).period_table()
        assert table.day_count == DayCountConvention.THIRTY_360
        assert len(table.rows) == 10
        assert table.rows[0].days == 180
        assert table.rows[7].days == 182
        assert table.total_year_fraction == pytest.approx(5.0)

    def test_print_summary(self, schedule_spec_dict: Dict[str, Any],
                           capsys: pytest.CaptureFixture) -> None:
        print_schedule_summary(ScheduleSpec(**schedule_spec_dict))
        out = capsys.readouterr().out
        assert "EUR-IRS-5Y" in out
        assert "2028-01-17" in out
        assert "VALIDATION: PASSED" in out


class TestLoad:
    """Tests for loading definitions from JSON files."""

    def test_load_from_file(self, schedule_spec_dict: Dict[str, Any], tmp_path: Path) -> None:
        path = tmp_path / "schedule.json"
        path.write_text(json.dumps(schedule_spec_dict))
        spec = load_schedule_spec(path)
        assert spec.schedule_id == "EUR-IRS-5Y"
        assert spec.termination_date == date(2029, 1, 15)

    def test_load_cds_example(self) -> None:
        spec = load_schedule_spec(EXAMPLES / "cds_2015_quarterly.json")
        schedule = spec.build()
        assert schedule.start_date == date(2016, 9, 20)
        assert schedule.end_date == date(2021, 12, 20)

    def test_load_swap_example(self) -> None:
        spec = load_schedule_spec(EXAMPLES / "eur_swap_semiannual.json")
        assert spec.rule == DateGenerationRule.BACKWARD
        assert len(spec.build()) == 11

    def test_file_not_found(self) -> None:
        with pytest.raises(FileNotFoundError):
            load_schedule_spec("nonexistent.json")
