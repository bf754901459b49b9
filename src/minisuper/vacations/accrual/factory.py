from __future__ import annotations

from .base import AccrualPolicy
from .monthly_policy import MonthlyAccrualPolicy
from .weekly_policy import WeeklyAccrualPolicy

_POLICIES = {
    MonthlyAccrualPolicy.name: MonthlyAccrualPolicy,
    WeeklyAccrualPolicy.name: WeeklyAccrualPolicy,
}


def policy_for(name: str) -> AccrualPolicy:
    """Factory Pattern: one accrual policy for the whole application."""

    try:
        return _POLICIES[(name or "").strip().lower()]()
    except KeyError:
        raise ValueError(f"Unknown VACATION_POLICY {name!r}; expected one of {sorted(_POLICIES)}")
