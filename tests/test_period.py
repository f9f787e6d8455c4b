"""Tests for periods, frequencies and tenor parsing."""

import pytest
from datetime import date

from dategen.core.period import (
    Frequency,
    Period,
    TimeUnit,
    add_period,
    parse_period,
    to_period,
)
from dategen.errors import InvalidTenorError


class TestPeriod:
    """Tests for Period construction, equality and arithmetic."""

    def test_normalized_equality(self) -> None:
        """Equal lengths in different units compare equal."""
        assert Period(12, TimeUnit.MONTHS) == Period(1, TimeUnit.YEARS)
        assert Period(14, TimeUnit.DAYS) == Period(2, TimeUnit.WEEKS)
        assert Period(6, TimeUnit.MONTHS) != Period(1, TimeUnit.YEARS)

    def test_hash_follows_equality(self) -> None:
        """Equal periods hash alike so they can key dictionaries."""
        tenors = {Period(12, TimeUnit.MONTHS): "1Y"}
        assert tenors[Period(1, TimeUnit.YEARS)] == "1Y"

    def test_non_integer_length_rejected(self) -> None:
        with pytest.raises(InvalidTenorError, match="integer"):
            Period(1.5, TimeUnit.MONTHS)

    def test_arithmetic(self) -> None:
        """Addition, negation and integer scaling."""
        six_months = Period(6, TimeUnit.MONTHS)
        assert six_months + Period(1, TimeUnit.YEARS) == Period(18, TimeUnit.MONTHS)
        assert Period(1, TimeUnit.YEARS) - six_months == six_months
        assert -six_months == Period(-6, TimeUnit.MONTHS)
        assert Period(3, TimeUnit.MONTHS) * 2 == six_months
        assert 2 * Period(3, TimeUnit.MONTHS) == six_months

    def test_mixed_families_cannot_be_added(self) -> None:
        with pytest.raises(InvalidTenorError):
            Period(1, TimeUnit.MONTHS) + Period(1, TimeUnit.DAYS)

    def test_ordering(self) -> None:
        """Periods order within the month and the day families."""
        assert Period(1, TimeUnit.MONTHS) < Period(1, TimeUnit.YEARS)
        assert Period(1, TimeUnit.WEEKS) < Period(10, TimeUnit.DAYS)
        assert Period(6, TimeUnit.MONTHS) >= Period(6, TimeUnit.MONTHS)

    def test_ordering_across_families_is_undecidable(self) -> None:
        with pytest.raises(TypeError):
            Period(1, TimeUnit.MONTHS) < Period(30, TimeUnit.DAYS)

    def test_str(self) -> None:
        assert str(Period(6, TimeUnit.MONTHS)) == "6M"
        assert str(Period(1, TimeUnit.YEARS)) == "1Y"


class TestFrequency:
    """Tests for Frequency to Period conversions."""

    @pytest.mark.parametrize("frequency,expected", [
        (Frequency.ANNUAL, Period(1, TimeUnit.YEARS)),
        (Frequency.SEMIANNUAL, Period(6, TimeUnit.MONTHS)),
        (Frequency.EVERY_FOURTH_MONTH, Period(4, TimeUnit.MONTHS)),
        (Frequency.QUARTERLY, Period(3, TimeUnit.MONTHS)),
        (Frequency.BIMONTHLY, Period(2, TimeUnit.MONTHS)),
        (Frequency.MONTHLY, Period(1, TimeUnit.MONTHS)),
        (Frequency.EVERY_FOURTH_WEEK, Period(4, TimeUnit.WEEKS)),
        (Frequency.BIWEEKLY, Period(2, TimeUnit.WEEKS)),
        (Frequency.WEEKLY, Period(1, TimeUnit.WEEKS)),
        (Frequency.DAILY, Period(1, TimeUnit.DAYS)),
    ])
    def test_from_frequency(self, frequency: Frequency, expected: Period) -> None:
        assert Period.from_frequency(frequency) == expected

    def test_once_is_zero_years(self) -> None:
        period = Period.from_frequency(Frequency.ONCE)
        assert period.length == 0
        assert period.unit == TimeUnit.YEARS

    def test_other_frequency_rejected(self) -> None:
        with pytest.raises(InvalidTenorError):
            Period.from_frequency(Frequency.OTHER_FREQUENCY)

    def test_frequency_of_period(self) -> None:
        """Periods report the matching frequency, or OTHER_FREQUENCY."""
        assert Period(6, TimeUnit.MONTHS).frequency() == Frequency.SEMIANNUAL
        assert Period(1, TimeUnit.YEARS).frequency() == Frequency.ANNUAL
        assert Period(2, TimeUnit.WEEKS).frequency() == Frequency.BIWEEKLY
        assert Period(5, TimeUnit.MONTHS).frequency() == Frequency.OTHER_FREQUENCY
        assert Period(0, TimeUnit.YEARS).frequency() == Frequency.ONCE


class TestParsePeriod:
    """Tests for tenor string parsing."""

    @pytest.mark.parametrize("text,expected", [
        ("6M", Period(6, TimeUnit.MONTHS)),
        ("6m", Period(6, TimeUnit.MONTHS)),
        (" 1Y ", Period(1, TimeUnit.YEARS)),
        ("2W", Period(2, TimeUnit.WEEKS)),
        ("10D", Period(10, TimeUnit.DAYS)),
        ("1Y6M", Period(18, TimeUnit.MONTHS)),
    ])
    def test_valid(self, text: str, expected: Period) -> None:
        assert parse_period(text) == expected

    @pytest.mark.parametrize("text", ["", "M", "6X", "six months", "1Y2D"])
    def test_invalid(self, text: str) -> None:
        with pytest.raises(InvalidTenorError):
            parse_period(text)

    def test_to_period_accepts_all_forms(self) -> None:
        """Periods, frequencies and strings all coerce to a Period."""
        expected = Period(3, TimeUnit.MONTHS)
        assert to_period(expected) is expected
        assert to_period(Frequency.QUARTERLY) == expected
        assert to_period("3M") == expected


class TestDateArithmetic:
    """Tests for adding periods to dates."""

    def test_month_end_clamping(self) -> None:
        """Month steps clamp to the end of shorter months."""
        assert date(2024, 1, 31) + Period(1, TimeUnit.MONTHS) == date(2024, 2, 29)
        assert date(2023, 1, 31) + Period(1, TimeUnit.MONTHS) == date(2023, 2, 28)

    def test_subtract_years_from_leap_day(self) -> None:
        assert date(2024, 2, 29) - Period(1, TimeUnit.YEARS) == date(2023, 2, 28)

    def test_weeks_and_days(self) -> None:
        assert date(2024, 1, 1) + Period(2, TimeUnit.WEEKS) == date(2024, 1, 15)
        assert add_period(date(2024, 1, 1), Period(-1, TimeUnit.DAYS)) == date(2023, 12, 31)
