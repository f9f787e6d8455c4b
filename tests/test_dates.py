"""Tests for calendar-free date helpers."""

import pytest
from datetime import date

from dategen.core.dates import (
    Weekday,
    easter_monday,
    end_of_month,
    is_end_of_month,
    is_imm_date,
    is_leap,
    month_length,
    next_imm_date,
    nth_weekday,
    start_of_month,
)


class TestMonthHelpers:
    """Tests for month lengths and month ends."""

    def test_leap_years(self) -> None:
        assert is_leap(2024)
        assert is_leap(2000)
        assert not is_leap(1900)
        assert not is_leap(2023)

    def test_month_length(self) -> None:
        assert month_length(2024, 2) == 29
        assert month_length(2023, 2) == 28
        assert month_length(2024, 4) == 30

    def test_end_and_start_of_month(self) -> None:
        assert end_of_month(date(2024, 2, 10)) == date(2024, 2, 29)
        assert start_of_month(date(2024, 2, 10)) == date(2024, 2, 1)
        assert is_end_of_month(date(2024, 2, 29))
        assert not is_end_of_month(date(2023, 2, 27))


class TestWeekdays:
    """Tests for n-th weekday and IMM dates."""

    def test_third_wednesday(self) -> None:
        assert nth_weekday(3, Weekday.WEDNESDAY, 3, 2024) == date(2024, 3, 20)

    def test_missing_fifth_weekday(self) -> None:
        """February 2024 has only four Wednesdays."""
        with pytest.raises(ValueError, match="No 5th Wednesday"):
            nth_weekday(5, Weekday.WEDNESDAY, 2, 2024)

    def test_is_imm_date(self) -> None:
        """IMM dates are third Wednesdays; the main cycle is quarterly."""
        assert is_imm_date(date(2024, 3, 20))
        assert not is_imm_date(date(2024, 4, 17))
        assert is_imm_date(date(2024, 4, 17), main_cycle=False)
        assert not is_imm_date(date(2024, 3, 13))

    def test_next_imm_date(self) -> None:
        assert next_imm_date(date(2024, 3, 20)) == date(2024, 6, 19)
        assert next_imm_date(date(2024, 3, 20), main_cycle=False) == date(2024, 4, 17)


class TestEaster:
    """Tests for the Easter Monday computation."""

    @pytest.mark.parametrize("year,expected", [
        (2015, date(2015, 4, 6)),
        (2024, date(2024, 4, 1)),
        (2025, date(2025, 4, 21)),
    ])
    def test_easter_monday(self, year: int, expected: date) -> None:
        assert easter_monday(year) == expected
