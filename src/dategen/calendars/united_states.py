"""
United States calendars.

Two markets are supported:
- SETTLEMENT: generic settlement calendar (federal holidays, with Saturday
  holidays observed on the preceding Friday)
- GOVERNMENT_BOND: SIFMA recommended closings for the government bond
  market (adds Good Friday, drops Saturday observances of New Year's Day
  and Veterans Day)
"""

from datetime import date, timedelta
from enum import Enum

from dategen.core.calendar import Calendar
from dategen.core.dates import Weekday, easter_monday

MON, FRI, THU = Weekday.MONDAY, Weekday.FRIDAY, Weekday.THURSDAY


class USMarket(str, Enum):
    """US calendar variants."""

    SETTLEMENT = "SETTLEMENT"
    GOVERNMENT_BOND = "GOVERNMENT_BOND"


def _is_mlk_day(d: int, m: int, y: int, w: int) -> bool:
    # third Monday in January
    return 15 <= d <= 21 and w == MON and m == 1 and y >= 1983


def _is_washington_birthday(d: int, m: int, y: int, w: int) -> bool:
    if y >= 1971:
        # third Monday in February
        return 15 <= d <= 21 and w == MON and m == 2
    # February 22nd, possibly adjusted
    return (d == 22 or (d == 23 and w == MON) or (d == 21 and w == FRI)) and m == 2


def _is_memorial_day(d: int, m: int, y: int, w: int) -> bool:
    if y >= 1971:
        # last Monday in May
        return d >= 25 and w == MON and m == 5
    return (d == 30 or (d == 31 and w == MON) or (d == 29 and w == FRI)) and m == 5


def _is_juneteenth(d: int, m: int, y: int, w: int) -> bool:
    return (d == 19 or (d == 20 and w == MON) or (d == 18 and w == FRI)) and m == 6 and y >= 2022


def _is_independence_day(d: int, m: int, w: int) -> bool:
    return (d == 4 or (d == 5 and w == MON) or (d == 3 and w == FRI)) and m == 7


def _is_labor_day(d: int, m: int, w: int) -> bool:
    # first Monday in September
    return d <= 7 and w == MON and m == 9


def _is_columbus_day(d: int, m: int, y: int, w: int) -> bool:
    # second Monday in October
    return 8 <= d <= 14 and w == MON and m == 10 and y >= 1971


def _is_veterans_day(d: int, m: int, y: int, w: int, saturday_observed: bool) -> bool:
    if y <= 1970 or y >= 1978:
        # November 11th, adjusted
        observed = d == 11 or (d == 12 and w == MON)
        if saturday_observed:
            observed = observed or (d == 10 and w == FRI)
        return observed and m == 11
    # fourth Monday in October
    return 22 <= d <= 28 and w == MON and m == 10


def _is_thanksgiving(d: int, m: int, w: int) -> bool:
    # fourth Thursday in November
    return 22 <= d <= 28 and w == THU and m == 11


def _is_christmas(d: int, m: int, w: int) -> bool:
    return (d == 25 or (d == 26 and w == MON) or (d == 24 and w == FRI)) and m == 12


_GOVERNMENT_BOND_CLOSINGS = frozenset([
    date(2004, 6, 11),   # President Reagan's funeral
    date(2012, 10, 30),  # Hurricane Sandy
    date(2018, 12, 5),   # President Bush's funeral
])


class UnitedStates(Calendar):
    """United States calendars."""

    def __init__(self, market: USMarket = USMarket.SETTLEMENT) -> None:
        self._market = USMarket(market)
        label = {
            USMarket.SETTLEMENT: "US settlement",
            USMarket.GOVERNMENT_BOND: "US government bond market",
        }[self._market]
        super().__init__(label)

    @property
    def market(self) -> USMarket:
        return self._market

    def _is_market_business_day(self, dt: date) -> bool:
        if self.is_weekend(dt):
            return False
        if self._market == USMarket.GOVERNMENT_BOND:
            return self._is_government_bond_business_day(dt)
        return self._is_settlement_business_day(dt)

    def _is_settlement_business_day(self, dt: date) -> bool:
        d, m, y, w = dt.day, dt.month, dt.year, dt.weekday()
        if (
            # New Year's Day (Monday if Sunday, Friday if Saturday)
            ((d == 1 or (d == 2 and w == MON)) and m == 1)
            or (d == 31 and w == FRI and m == 12)
            or _is_mlk_day(d, m, y, w)
            or _is_washington_birthday(d, m, y, w)
            or _is_memorial_day(d, m, y, w)
            or _is_juneteenth(d, m, y, w)
            or _is_independence_day(d, m, w)
            or _is_labor_day(d, m, w)
            or _is_columbus_day(d, m, y, w)
            or _is_veterans_day(d, m, y, w, saturday_observed=True)
            or _is_thanksgiving(d, m, w)
            or _is_christmas(d, m, w)
        ):
            return False
        return True

    def _is_government_bond_business_day(self, dt: date) -> bool:
        d, m, y, w = dt.day, dt.month, dt.year, dt.weekday()
        good_friday = easter_monday(y) - timedelta(days=3)
        if (
            ((d == 1 or (d == 2 and w == MON)) and m == 1)
            or _is_mlk_day(d, m, y, w)
            or _is_washington_birthday(d, m, y, w)
            # Good Friday, a half day in 2015, 2021 and 2023
            or (dt == good_friday and y not in (2015, 2021, 2023))
            or _is_memorial_day(d, m, y, w)
            or _is_juneteenth(d, m, y, w)
            or _is_independence_day(d, m, w)
            or _is_labor_day(d, m, w)
            or _is_columbus_day(d, m, y, w)
            or _is_veterans_day(d, m, y, w, saturday_observed=False)
            or _is_thanksgiving(d, m, w)
            or _is_christmas(d, m, w)
        ):
            return False
        return dt not in _GOVERNMENT_BOND_CLOSINGS
