"""
Period tables for schedules.

Lists each accrual period of a schedule with its boundaries, day count,
year fraction and regularity.
"""

import json
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional

import numpy as np

from dategen.core.day_count import DayCountConvention, day_count, day_count_fraction
from dategen.core.schedule import Schedule


@dataclass
class PeriodRow:
    """A single accrual period."""

    index: int                  # 1-based period number
    start: date                 # Accrual start
    end: date                   # Accrual end
    days: int                   # Days counted by the convention
    year_fraction: float        # Accrual fraction
    regular: Optional[bool]     # None when the schedule carries no flags


@dataclass
class PeriodTable:
    """
    Accrual periods of a schedule.

    Contains:
    - One row per period
    - Schedule metadata used for the header
    """

    day_count: DayCountConvention
    calendar: str
    tenor: Optional[str] = None
    rule: Optional[str] = None
    rows: List[PeriodRow] = field(default_factory=list)

    @property
    def total_year_fraction(self) -> float:
        return float(np.sum([row.year_fraction for row in self.rows]))

    @property
    def stub_count(self) -> int:
        return sum(1 for row in self.rows if row.regular is False)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "day_count": self.day_count.value,
            "calendar": self.calendar,
            "tenor": self.tenor,
            "rule": self.rule,
            "periods": [
                {
                    "index": row.index,
                    "start": row.start.isoformat(),
                    "end": row.end.isoformat(),
                    "days": row.days,
                    "year_fraction": row.year_fraction,
                    "regular": row.regular,
                }
                for row in self.rows
            ],
            "total_year_fraction": self.total_year_fraction,
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    def print_summary(self) -> None:
        """Print formatted period table."""
        print("\n" + "=" * 70)
        print("PERIOD TABLE")
        print("=" * 70)
        print(f"  Calendar:   {self.calendar}")
        print(f"  Tenor:      {self.tenor or '-'}")
        print(f"  Rule:       {self.rule or '-'}")
        print(f"  Day count:  {self.day_count.value}")

        print(f"\n{'#':>3} {'Start':<12} {'End':<12} {'Days':>6} {'Fraction':>10} {'Regular':>8}")
        print("-" * 70)
        for row in self.rows:
            regular = "-" if row.regular is None else ("yes" if row.regular else "stub")
            print(
                f"{row.index:>3} "
                f"{row.start.isoformat():<12} "
                f"{row.end.isoformat():<12} "
                f"{row.days:>6} "
                f"{row.year_fraction:>10.6f} "
                f"{regular:>8}"
            )
        print("-" * 70)
        print(f"{'TOTAL':<36} {self.total_year_fraction:>10.6f}")
        print("=" * 70)


def build_period_table(
    schedule: Schedule,
    day_count_convention: DayCountConvention = DayCountConvention.ACT_360,
) -> PeriodTable:
    """
    Build the period table of a schedule.

    Args:
        schedule: Schedule with at least two dates
        day_count_convention: Convention for days and year fractions

    Returns:
        PeriodTable with one row per period
    """
    convention = DayCountConvention(day_count_convention)
    table = PeriodTable(
        day_count=convention,
        calendar=schedule.calendar.name,
        tenor=str(schedule.tenor) if schedule.has_tenor() else None,
        rule=schedule.rule.value if schedule.has_rule() else None,
    )

    dates = schedule.dates
    for i in range(1, len(dates)):
        start, end = dates[i - 1], dates[i]
        table.rows.append(PeriodRow(
            index=i,
            start=start,
            end=end,
            days=day_count(start, end, convention),
            year_fraction=day_count_fraction(start, end, convention),
            regular=schedule.is_regular(i) if schedule.has_is_regular() else None,
        ))

    return table
