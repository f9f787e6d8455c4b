"""Tests for date generation rules and roll-date helpers."""

import pytest
from datetime import date

from dategen.core.date_generation import (
    DateGenerationRule,
    RULE_POLICIES,
    cds_maturity,
    get_rule_policy,
    next_twentieth,
    previous_twentieth,
    semi_annual_roll,
    third_wednesday_of,
    validate_stub_date,
)
from dategen.core.period import Period, TimeUnit
from dategen.errors import (
    InvalidRangeError,
    InvalidRuleCombinationError,
    InvalidTenorError,
)

FIVE_YEARS = Period(5, TimeUnit.YEARS)


class TestTwentieths:
    """Tests for previous/next twentieth roll dates."""

    def test_previous_twentieth_monthly(self) -> None:
        assert previous_twentieth(date(2024, 5, 25), DateGenerationRule.TWENTIETH) == date(2024, 5, 20)
        assert previous_twentieth(date(2024, 5, 10), DateGenerationRule.TWENTIETH) == date(2024, 4, 20)

    def test_previous_twentieth_imm(self) -> None:
        """IMM rules only roll on March, June, September and December."""
        assert previous_twentieth(date(2016, 12, 12), DateGenerationRule.CDS) == date(2016, 9, 20)
        assert previous_twentieth(date(2016, 12, 20), DateGenerationRule.CDS) == date(2016, 12, 20)

    def test_next_twentieth(self) -> None:
        assert next_twentieth(date(2024, 5, 21), DateGenerationRule.TWENTIETH) == date(2024, 6, 20)
        assert next_twentieth(date(2024, 6, 21), DateGenerationRule.TWENTIETH_IMM) == date(2024, 9, 20)
        assert next_twentieth(date(2024, 6, 20), DateGenerationRule.TWENTIETH_IMM) == date(2024, 6, 20)

    def test_old_cds_first_roll_needs_thirty_days(self) -> None:
        """A first coupon less than 30 days out moves to the following roll."""
        policy = RULE_POLICIES[DateGenerationRule.OLD_CDS]
        assert policy.first_roll(date(2024, 3, 1), DateGenerationRule.OLD_CDS) == date(2024, 6, 20)
        assert policy.first_roll(date(2024, 2, 1), DateGenerationRule.OLD_CDS) == date(2024, 3, 20)

    def test_third_wednesday_of(self) -> None:
        assert third_wednesday_of(date(2024, 6, 1)) == date(2024, 6, 19)


class TestCdsMaturity:
    """Tests for standard CDS maturities."""

    @pytest.mark.parametrize("trade_date,expected", [
        (date(2016, 12, 12), date(2021, 12, 20)),
        (date(2017, 3, 1), date(2021, 12, 20)),
        (date(2017, 3, 20), date(2022, 6, 20)),
        (date(2017, 9, 19), date(2022, 6, 20)),
        (date(2017, 9, 20), date(2022, 12, 20)),
    ])
    def test_cds2015_semi_annual_roll(self, trade_date: date, expected: date) -> None:
        assert cds_maturity(trade_date, FIVE_YEARS, DateGenerationRule.CDS2015) == expected

    def test_quarterly_roll_before_2015(self) -> None:
        assert cds_maturity(date(2017, 3, 1), FIVE_YEARS, DateGenerationRule.CDS) == date(2022, 3, 20)

    def test_zero_tenor(self) -> None:
        """A zero-tenor CDS2015 contract only exists outside June/December rolls."""
        zero = Period(0, TimeUnit.MONTHS)
        assert cds_maturity(date(2017, 3, 1), zero, DateGenerationRule.CDS2015) is None
        assert cds_maturity(date(2017, 3, 25), zero, DateGenerationRule.CDS2015) == date(2017, 6, 20)

    def test_invalid_tenor(self) -> None:
        with pytest.raises(InvalidTenorError, match="multiple of 3 months"):
            cds_maturity(date(2017, 3, 1), Period(4, TimeUnit.MONTHS), DateGenerationRule.CDS2015)
        with pytest.raises(InvalidTenorError, match="zero tenor"):
            cds_maturity(date(2017, 3, 1), Period(0, TimeUnit.MONTHS), DateGenerationRule.OLD_CDS)

    def test_invalid_rule(self) -> None:
        with pytest.raises(InvalidRuleCombinationError, match="CDS rules"):
            cds_maturity(date(2017, 3, 1), FIVE_YEARS, DateGenerationRule.BACKWARD)


class TestRulePolicies:
    """Tests for the rule policy table and stub date checks."""

    def test_every_rule_has_a_policy(self) -> None:
        for rule in DateGenerationRule:
            assert get_rule_policy(rule) is RULE_POLICIES[rule]

    def test_unknown_rule(self) -> None:
        with pytest.raises(InvalidRuleCombinationError, match="Unknown date generation rule"):
            get_rule_policy("SIDEWAYS")

    def test_adjustment_flags(self) -> None:
        """OLD_CDS leaves the first date alone; CDS rules leave the last date alone."""
        assert not get_rule_policy(DateGenerationRule.OLD_CDS).adjust_first
        assert not get_rule_policy(DateGenerationRule.CDS).adjust_last
        assert not get_rule_policy(DateGenerationRule.CDS2015).adjust_last
        assert get_rule_policy(DateGenerationRule.FORWARD).adjust_last

    @pytest.mark.parametrize("termination,expected", [
        (date(2021, 12, 12), date(2021, 12, 20)),
        (date(2022, 3, 1), date(2021, 12, 20)),
        (date(2022, 3, 20), date(2022, 6, 20)),
        (date(2021, 12, 20), date(2021, 12, 20)),
        (date(2022, 6, 20), date(2022, 6, 20)),
    ])
    def test_semi_annual_roll(self, termination: date, expected: date) -> None:
        """Standard CDS2015 maturities roll onto themselves."""
        assert semi_annual_roll(termination) == expected

    def test_stub_rejected_by_rule(self) -> None:
        with pytest.raises(InvalidRuleCombinationError, match="incompatible with ZERO"):
            validate_stub_date("first date", date(2024, 6, 1), date(2024, 1, 1),
                               date(2025, 1, 1), DateGenerationRule.ZERO)

    def test_third_wednesday_stub_must_be_imm(self) -> None:
        with pytest.raises(InvalidRuleCombinationError, match="not an IMM date"):
            validate_stub_date("first date", date(2024, 6, 1), date(2024, 1, 1),
                               date(2025, 1, 1), DateGenerationRule.THIRD_WEDNESDAY)
        validate_stub_date("first date", date(2024, 6, 19), date(2024, 1, 1),
                           date(2025, 1, 1), DateGenerationRule.THIRD_WEDNESDAY)

    def test_stub_out_of_range(self) -> None:
        with pytest.raises(InvalidRangeError, match="out of effective-termination"):
            validate_stub_date("first date", date(2025, 6, 1), date(2024, 1, 1),
                               date(2025, 1, 1), DateGenerationRule.FORWARD)
        with pytest.raises(InvalidRangeError, match="next-to-last date"):
            validate_stub_date("next-to-last date", date(2025, 1, 1), date(2024, 1, 1),
                               date(2025, 1, 1), DateGenerationRule.BACKWARD)
