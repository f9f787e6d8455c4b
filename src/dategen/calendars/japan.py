"""
Japanese calendar.

Holidays observed by financial institutions (not to be confused with
exchange holidays): weekends, January 1st-3rd, Coming of Age Day, National
Foundation Day, Emperor's Birthday, Vernal and Autumnal Equinox, Showa
Day, Constitution Memorial Day, Greenery Day, Children's Day, Marine Day,
Mountain Day, Respect for the Aged Day, Sports Day, Culture Day, Labour
Thanksgiving Day and December 31st. Holidays falling on a Sunday are
observed on the following Monday.
"""

from datetime import date

from dategen.core.calendar import Calendar
from dategen.core.dates import Weekday

_VERNAL_EQUINOX_2000 = 20.69115
_AUTUMNAL_EQUINOX_2000 = 23.09
_EQUINOX_DRIFT_PER_YEAR = 0.242194

_ONE_OFF_HOLIDAYS = frozenset([
    date(1959, 4, 10),   # Marriage of Prince Akihito
    date(1989, 2, 24),   # Rites of Imperial Funeral
    date(1990, 11, 12),  # Enthronement Ceremony (Emperor Akihito)
    date(1993, 6, 9),    # Marriage of Prince Naruhito
    date(2019, 4, 30),   # Special holiday
    date(2019, 5, 1),    # Enthronement Day (Emperor Naruhito)
    date(2019, 5, 2),    # Special holiday
    date(2019, 10, 22),  # Enthronement Ceremony (Emperor Naruhito)
])


def _trunc_div(a: int, b: int) -> int:
    q = abs(a) // b
    return q if a >= 0 else -q


def equinox_days(year: int):
    """Day of month of the vernal (March) and autumnal (September) equinox."""
    offset = year - 2000
    moving = offset * _EQUINOX_DRIFT_PER_YEAR
    leap_years = _trunc_div(offset, 4) + _trunc_div(offset, 100) - _trunc_div(offset, 400)
    vernal = int(_VERNAL_EQUINOX_2000 + moving - leap_years)
    autumnal = int(_AUTUMNAL_EQUINOX_2000 + moving - leap_years)
    return vernal, autumnal


class Japan(Calendar):
    """Japanese bank calendar."""

    def __init__(self) -> None:
        super().__init__("Japan")

    def _is_market_business_day(self, dt: date) -> bool:
        if self.is_weekend(dt) or dt in _ONE_OFF_HOLIDAYS:
            return False

        d, m, y = dt.day, dt.month, dt.year
        w = dt.weekday()
        monday = w == Weekday.MONDAY
        ve, ae = equinox_days(y)

        if m == 1:
            if d in (1, 2, 3):
                return False
            # Coming of Age Day: 2nd Monday since 2000, January 15th before
            if y >= 2000 and monday and 8 <= d <= 14:
                return False
            if y < 2000 and (d == 15 or (d == 16 and monday)):
                return False
        elif m == 2:
            # National Foundation Day
            if d == 11 or (d == 12 and monday):
                return False
            # Emperor's Birthday (Emperor Naruhito)
            if y >= 2020 and (d == 23 or (d == 24 and monday)):
                return False
        elif m == 3:
            if d == ve or (d == ve + 1 and monday):
                return False
        elif m == 4:
            # Showa Day
            if d == 29 or (d == 30 and monday):
                return False
        elif m == 5:
            if d in (3, 4, 5):
                return False
            # any of the three above observed later if on a weekend
            if d == 6 and w in (Weekday.MONDAY, Weekday.TUESDAY, Weekday.WEDNESDAY):
                return False
        elif m == 7:
            # Marine Day, 3rd Monday since 2003, moved for the Olympics
            if monday and 15 <= d <= 21 and ((2003 <= y < 2020) or y >= 2022):
                return False
            if 1996 <= y < 2003 and (d == 20 or (d == 21 and monday)):
                return False
            if (y, d) in ((2020, 23), (2021, 22)):
                return False
            # Sports Day moved for the Olympics
            if (y, d) in ((2020, 24), (2021, 23)):
                return False
        elif m == 8:
            # Mountain Day
            if ((2016 <= y < 2020) or y >= 2022) and (d == 11 or (d == 12 and monday)):
                return False
            if (y, d) in ((2020, 10), (2021, 9)):
                return False
        elif m == 9:
            # Respect for the Aged Day, 3rd Monday since 2003
            if y >= 2003 and monday and 15 <= d <= 21:
                return False
            if y < 2003 and (d == 15 or (d == 16 and monday)):
                return False
            # a single day between Respect for the Aged Day and the equinox
            if y >= 2003 and w == Weekday.TUESDAY and d + 1 == ae and 16 <= d <= 22:
                return False
            if d == ae or (d == ae + 1 and monday):
                return False
        elif m == 10:
            # Sports Day, 2nd Monday since 2000
            if y >= 2000 and y not in (2020, 2021) and monday and 8 <= d <= 14:
                return False
            if y < 2000 and (d == 10 or (d == 11 and monday)):
                return False
        elif m == 11:
            # Culture Day
            if d == 3 or (d == 4 and monday):
                return False
            # Labour Thanksgiving Day
            if d == 23 or (d == 24 and monday):
                return False
        elif m == 12:
            # Emperor's Birthday (Emperor Akihito)
            if 1989 <= y < 2019 and (d == 23 or (d == 24 and monday)):
                return False
            if d == 31:
                return False
        return True
