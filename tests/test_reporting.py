"""Tests for schedule period tables."""

import json

import pytest
from datetime import date

from dategen.core.day_count import DayCountConvention
from dategen.core.schedule import Schedule, generate_explicit_schedule, generate_schedule
from dategen.reporting import build_period_table


class TestPeriodTable:
    """Tests for build_period_table and its outputs."""

    def test_rows(self, semiannual_schedule: Schedule) -> None:
        table = build_period_table(semiannual_schedule)
        assert len(table.rows) == 10
        first = table.rows[0]
        assert first.index == 1
        assert first.start == date(2024, 1, 15)
        assert first.end == date(2024, 7, 15)
        assert first.days == 182
        assert first.year_fraction == pytest.approx(182 / 360)
        assert first.regular is True
        assert table.total_year_fraction == pytest.approx(1827 / 360)
        assert table.stub_count == 0

    def test_header(self, semiannual_schedule: Schedule) -> None:
        table = build_period_table(semiannual_schedule, DayCountConvention.ACT_365F)
        assert table.calendar == "TARGET"
        assert table.tenor == "6M"
        assert table.rule == "BACKWARD"
        assert table.total_year_fraction == pytest.approx(1827 / 365)

    def test_stub_count(self) -> None:
        schedule = generate_schedule(date(2024, 3, 15), date(2026, 1, 15), "6M")
        table = build_period_table(schedule)
        assert table.stub_count == 1
        assert table.rows[0].regular is False

    def test_explicit_schedule_without_flags(self) -> None:
        schedule = generate_explicit_schedule([date(2024, 1, 1), date(2024, 4, 1), date(2024, 7, 1)])
        table = build_period_table(schedule, DayCountConvention.THIRTY_360)
        assert [row.regular for row in table.rows] == [None, None]
        assert [row.days for row in table.rows] == [90, 90]
        assert table.tenor is None
        assert table.rule is None
        assert table.stub_count == 0

    def test_to_json(self, semiannual_schedule: Schedule) -> None:
        data = json.loads(build_period_table(semiannual_schedule).to_json())
        assert data["day_count"] == "ACT/360"
        assert len(data["periods"]) == 10
        assert data["periods"][8]["start"] == "2028-01-17"
        assert data["periods"][8]["days"] == 182

    def test_print_summary(self, semiannual_schedule: Schedule,
                           capsys: pytest.CaptureFixture) -> None:
        build_period_table(semiannual_schedule).print_summary()
        out = capsys.readouterr().out
        assert "PERIOD TABLE" in out
        assert "2029-01-15" in out
        assert "TOTAL" in out
