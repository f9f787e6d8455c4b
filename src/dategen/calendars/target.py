"""
TARGET calendar (Trans-European Automated Real-time Gross settlement
Express Transfer system).

Holidays:
- Saturdays and Sundays
- New Year's Day, January 1st
- Good Friday (since 2000)
- Easter Monday (since 2000)
- Labour Day, May 1st (since 2000)
- Christmas, December 25th
- Day of Goodwill, December 26th (since 2000)
- December 31st (1998, 1999 and 2001)
"""

from datetime import date, timedelta

from dategen.core.calendar import Calendar
from dategen.core.dates import easter_monday


class TARGET(Calendar):
    """Euro area settlement calendar."""

    def __init__(self) -> None:
        super().__init__("TARGET")

    def _is_market_business_day(self, d: date) -> bool:
        if self.is_weekend(d):
            return False

        day, month, year = d.day, d.month, d.year
        em = easter_monday(year)

        if day == 1 and month == 1:
            return False
        if year >= 2000 and (d == em or d == em - timedelta(days=3)):
            return False
        if day == 1 and month == 5 and year >= 2000:
            return False
        if day == 25 and month == 12:
            return False
        if day == 26 and month == 12 and year >= 2000:
            return False
        if day == 31 and month == 12 and year in (1998, 1999, 2001):
            return False
        return True
