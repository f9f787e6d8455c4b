"""
Date generation rules for schedules.

Each DateGenerationRule maps to a RulePolicy describing how raw schedule
dates are produced: which end anchors the generation, how the start and
end snap to roll dates, which inputs the rule accepts, and which boundary
dates are business-day adjusted.
"""

from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum
from typing import Callable, Dict, List, Optional, Tuple

from dategen.core.calendar import BusinessDayConvention, Calendar
from dategen.core.dates import Weekday, is_imm_date, nth_weekday
from dategen.core.period import Period, TimeUnit, add_period
from dategen.errors import (
    InvalidRangeError,
    InvalidRuleCombinationError,
    InvalidTenorError,
)

THREE_MONTHS = Period(3, TimeUnit.MONTHS)
OLD_CDS_MIN_STUB_DAYS = 30


class DateGenerationRule(str, Enum):
    """How schedule dates are generated between effective and termination."""

    BACKWARD = "BACKWARD"      # from termination back to effective
    FORWARD = "FORWARD"        # from effective forward to termination
    ZERO = "ZERO"              # no intermediate dates
    THIRD_WEDNESDAY = "THIRD_WEDNESDAY"                    # interior dates on IMM Wednesdays
    THIRD_WEDNESDAY_INCLUSIVE = "THIRD_WEDNESDAY_INCLUSIVE"  # all dates on IMM Wednesdays
    TWENTIETH = "TWENTIETH"    # interior dates on the 20th of the month
    TWENTIETH_IMM = "TWENTIETH_IMM"  # 20th of March, June, September, December
    OLD_CDS = "OLD_CDS"        # pre-2009 CDS, first coupon at least 30 days out
    CDS = "CDS"                # standard CDS, start on the previous IMM 20th
    CDS2015 = "CDS2015"        # CDS with semi-annual maturity rolling


_IMM_TWENTIETH_RULES = frozenset([
    DateGenerationRule.TWENTIETH_IMM,
    DateGenerationRule.OLD_CDS,
    DateGenerationRule.CDS,
    DateGenerationRule.CDS2015,
])


def previous_twentieth(d: date, rule: DateGenerationRule) -> date:
    """
    Latest roll 20th on or before ``d``.

    For IMM-based rules only the 20th of March, June, September and
    December qualify.
    """
    result = date(d.year, d.month, 20)
    if result > d:
        result = add_period(result, Period(-1, TimeUnit.MONTHS))
    if rule in _IMM_TWENTIETH_RULES:
        skip = result.month % 3
        if skip != 0:
            result = add_period(result, Period(-skip, TimeUnit.MONTHS))
    return result


def next_twentieth(d: date, rule: DateGenerationRule) -> date:
    """
    Earliest roll 20th on or after ``d``.

    For IMM-based rules only the 20th of March, June, September and
    December qualify.
    """
    result = date(d.year, d.month, 20)
    if result < d:
        result = add_period(result, Period(1, TimeUnit.MONTHS))
    if rule in _IMM_TWENTIETH_RULES:
        skip = result.month % 3
        if skip != 0:
            result = add_period(result, Period(3 - skip, TimeUnit.MONTHS))
    return result


def cds_maturity(
    trade_date: date,
    tenor: Period,
    rule: DateGenerationRule,
) -> Optional[date]:
    """
    Standard maturity of a CDS traded on ``trade_date``.

    Under CDS2015 maturities roll semi-annually: trades from March 20th to
    September 19th mature on a June 20th, trades from September 20th to
    March 19th on a December 20th.

    Args:
        trade_date: Trade date
        tenor: Protection tenor, a multiple of three months
        rule: One of CDS2015, CDS or OLD_CDS

    Returns:
        The maturity date, or None for a zero tenor under CDS2015 traded
        in a June/December roll window (no such contract exists)
    """
    if rule not in (DateGenerationRule.CDS2015, DateGenerationRule.CDS, DateGenerationRule.OLD_CDS):
        raise InvalidRuleCombinationError(
            f"cds_maturity is only defined for CDS rules, got {rule.value}"
        )
    if not (
        tenor.unit == TimeUnit.YEARS
        or (tenor.unit == TimeUnit.MONTHS and tenor.length % 3 == 0)
    ):
        raise InvalidTenorError(
            f"cds_maturity expects a tenor that is a multiple of 3 months, got {tenor}"
        )
    if rule == DateGenerationRule.OLD_CDS and tenor.length == 0:
        raise InvalidTenorError("A zero tenor is not supported for OLD_CDS")

    anchor = previous_twentieth(trade_date, rule)
    if rule == DateGenerationRule.CDS2015 and anchor.month in (6, 12):
        if tenor.length == 0:
            return None
        anchor = add_period(anchor, -THREE_MONTHS)

    maturity = add_period(add_period(anchor, tenor), THREE_MONTHS)
    if maturity <= trade_date:
        raise InvalidRangeError(
            f"CDS maturity {maturity} is not after trade date {trade_date}"
        )
    return maturity


def semi_annual_roll(d: date) -> date:
    """
    CDS2015 maturity roll on or after the previous IMM 20th of ``d``.

    March and September 20ths move forward to June and December; June and
    December 20ths are kept, so a standard maturity rolls onto itself.
    """
    result = previous_twentieth(d, DateGenerationRule.CDS2015)
    if result.month in (3, 9):
        result = add_period(result, THREE_MONTHS)
    return result


# ============================================================================
# Per-rule hooks
# ============================================================================

# (dates, regularity flags) the forward generation starts with
StartHook = Callable[[date, Calendar, BusinessDayConvention, DateGenerationRule], Tuple[List[date], List[bool]]]
# first roll date after the start, or None to step from the start directly
FirstRollHook = Callable[[date, DateGenerationRule], Optional[date]]
# termination actually used for generation
TerminationHook = Callable[[date, date, DateGenerationRule], date]
# stub date appended when the last generated date misses the termination
EndRollHook = Callable[[date, DateGenerationRule], Tuple[date, bool]]


def _start_at_effective(
    effective: date,
    calendar: Calendar,
    convention: BusinessDayConvention,
    rule: DateGenerationRule,
) -> Tuple[List[date], List[bool]]:
    return [effective], []


def _start_at_previous_twentieth(
    effective: date,
    calendar: Calendar,
    convention: BusinessDayConvention,
    rule: DateGenerationRule,
) -> Tuple[List[date], List[bool]]:
    prev20th = previous_twentieth(effective, rule)
    dates: List[date] = []
    regular: List[bool] = []
    if calendar.adjust(prev20th, convention) > effective:
        dates.append(add_period(prev20th, -THREE_MONTHS))
        regular.append(True)
    dates.append(prev20th)
    return dates, regular


def _no_first_roll(effective: date, rule: DateGenerationRule) -> Optional[date]:
    return None


def _first_twentieth(effective: date, rule: DateGenerationRule) -> Optional[date]:
    return next_twentieth(effective, rule)


def _first_twentieth_with_min_stub(effective: date, rule: DateGenerationRule) -> Optional[date]:
    next20th = next_twentieth(effective, rule)
    if (next20th - effective).days < OLD_CDS_MIN_STUB_DAYS:
        next20th = next_twentieth(next20th + timedelta(days=1), rule)
    return next20th


def _termination_as_given(effective: date, termination: date, rule: DateGenerationRule) -> date:
    return termination


def _termination_semi_annual_roll(effective: date, termination: date, rule: DateGenerationRule) -> date:
    maturity = semi_annual_roll(termination)
    if maturity <= effective:
        raise InvalidRangeError(
            f"CDS2015 maturity {maturity} for termination date {termination} "
            f"is not after effective date {effective}"
        )
    return maturity


def _end_at_termination(termination: date, rule: DateGenerationRule) -> Tuple[date, bool]:
    return termination, False


def _end_at_next_twentieth(termination: date, rule: DateGenerationRule) -> Tuple[date, bool]:
    return next_twentieth(termination, rule), True


@dataclass(frozen=True)
class RulePolicy:
    """
    Behaviour of a date generation rule.

    Attributes:
        direction: "backward", "forward" or "zero"
        stub_dates: Accepted first/next-to-last dates: "range" (any date in
            the schedule range), "imm" (IMM dates only) or None (rejected)
        allows_end_of_month: Whether the end-of-month flag may be set
        roll_rule: Tenor must be month/year based
        quarterly_tenor: Tenor must be a multiple of three months
        adjust_first: Adjust the first date with the convention
        adjust_last: Adjust the last date with the termination convention
        third_wednesday: Snap "interior" or "all" dates to IMM Wednesdays
        first_roll_regular: Whether the period up to the first roll is regular
    """

    direction: str = "forward"
    stub_dates: Optional[str] = "range"
    allows_end_of_month: bool = True
    roll_rule: bool = False
    quarterly_tenor: bool = False
    adjust_first: bool = True
    adjust_last: bool = True
    third_wednesday: Optional[str] = None
    first_roll_regular: bool = False
    start: StartHook = _start_at_effective
    first_roll: FirstRollHook = _no_first_roll
    termination: TerminationHook = _termination_as_given
    end_roll: EndRollHook = _end_at_termination


RULE_POLICIES: Dict[DateGenerationRule, RulePolicy] = {
    DateGenerationRule.BACKWARD: RulePolicy(direction="backward"),
    DateGenerationRule.FORWARD: RulePolicy(),
    DateGenerationRule.ZERO: RulePolicy(direction="zero", stub_dates=None),
    DateGenerationRule.THIRD_WEDNESDAY: RulePolicy(
        stub_dates="imm",
        allows_end_of_month=False,
        roll_rule=True,
        third_wednesday="interior",
    ),
    DateGenerationRule.THIRD_WEDNESDAY_INCLUSIVE: RulePolicy(
        stub_dates=None,
        allows_end_of_month=False,
        roll_rule=True,
        third_wednesday="all",
    ),
    DateGenerationRule.TWENTIETH: RulePolicy(
        stub_dates=None,
        allows_end_of_month=False,
        roll_rule=True,
        first_roll=_first_twentieth,
        end_roll=_end_at_next_twentieth,
    ),
    DateGenerationRule.TWENTIETH_IMM: RulePolicy(
        stub_dates=None,
        allows_end_of_month=False,
        roll_rule=True,
        quarterly_tenor=True,
        first_roll=_first_twentieth,
        end_roll=_end_at_next_twentieth,
    ),
    DateGenerationRule.OLD_CDS: RulePolicy(
        stub_dates=None,
        allows_end_of_month=False,
        roll_rule=True,
        quarterly_tenor=True,
        adjust_first=False,
        first_roll=_first_twentieth_with_min_stub,
        end_roll=_end_at_next_twentieth,
    ),
    DateGenerationRule.CDS: RulePolicy(
        stub_dates=None,
        allows_end_of_month=False,
        roll_rule=True,
        quarterly_tenor=True,
        adjust_last=False,
        first_roll_regular=True,
        start=_start_at_previous_twentieth,
        first_roll=_first_twentieth,
        end_roll=_end_at_next_twentieth,
    ),
    DateGenerationRule.CDS2015: RulePolicy(
        stub_dates=None,
        allows_end_of_month=False,
        roll_rule=True,
        quarterly_tenor=True,
        adjust_last=False,
        first_roll_regular=True,
        start=_start_at_previous_twentieth,
        first_roll=_first_twentieth,
        termination=_termination_semi_annual_roll,
        end_roll=_end_at_next_twentieth,
    ),
}


def get_rule_policy(rule: DateGenerationRule) -> RulePolicy:
    """Look up the policy for a rule."""
    try:
        return RULE_POLICIES[DateGenerationRule(rule)]
    except (KeyError, ValueError):
        raise InvalidRuleCombinationError(f"Unknown date generation rule: {rule!r}") from None


def third_wednesday_of(d: date) -> date:
    """Third Wednesday of the month containing ``d``."""
    return nth_weekday(3, Weekday.WEDNESDAY, d.month, d.year)


def validate_stub_date(
    label: str,
    stub: date,
    effective: date,
    termination: date,
    rule: DateGenerationRule,
) -> None:
    """
    Check a first or next-to-last date against the rule and the range.

    Args:
        label: "first date" or "next-to-last date"
        stub: The date to check
        effective: Schedule effective date
        termination: Schedule termination date
        rule: Generation rule
    """
    policy = get_rule_policy(rule)
    if policy.stub_dates is None:
        raise InvalidRuleCombinationError(
            f"{label} incompatible with {rule.value} date generation rule"
        )
    if policy.stub_dates == "imm":
        if not is_imm_date(stub, main_cycle=False):
            raise InvalidRuleCombinationError(f"{label} ({stub}) is not an IMM date")
        return
    if label == "first date":
        if not effective < stub <= termination:
            raise InvalidRangeError(
                f"first date ({stub}) out of effective-termination date range "
                f"({effective}, {termination}]"
            )
    elif not effective <= stub < termination:
        raise InvalidRangeError(
            f"next-to-last date ({stub}) out of effective-termination date range "
            f"[{effective}, {termination})"
        )
