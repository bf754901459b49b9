from __future__ import annotations

from datetime import date

from .base import AccrualPolicy

DAYS_PER_YEAR = 15


def whole_months_between(start: date, end: date) -> int:
    months = (end.year - start.year) * 12 + (end.month - start.month)
    if end.day < start.day:
        months -= 1
    return months


class MonthlyAccrualPolicy(AccrualPolicy):
    """floor(months_worked * 15 / 12), capped at 15."""

    name = "monthly"
    annual_cap = DAYS_PER_YEAR

    def accrued_days(self, hire_date: date, today: date) -> int:
        months = whole_months_between(hire_date, today)
        if months <= 0:
            return 0
        return min(months * DAYS_PER_YEAR // 12, DAYS_PER_YEAR)
