"""
Reporting for schedules.

Provides:
- PeriodTable: Accrual periods with day counts and year fractions
"""

from dategen.reporting.periods import (
    PeriodRow,
    PeriodTable,
    build_period_table,
)

__all__ = [
    "PeriodRow",
    "PeriodTable",
    "build_period_table",
]
