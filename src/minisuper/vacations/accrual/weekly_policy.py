from __future__ import annotations

from datetime import date

from .base import AccrualPolicy

WEEKS_PER_YEAR = 50
DAYS_PER_YEAR = 14


class WeeklyAccrualPolicy(AccrualPolicy):
    """floor(weeks_worked / 50 * 14); 50-week years, no cap."""

    name = "weekly"
    annual_cap = None

    def accrued_days(self, hire_date: date, today: date) -> int:
        weeks = (today - hire_date).days // 7
        if weeks <= 0:
            return 0
        return weeks * DAYS_PER_YEAR // WEEKS_PER_YEAR
