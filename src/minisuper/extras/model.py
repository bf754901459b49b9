from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class ExtraHours:
    """Horas extra: el monto se fija al crear (horas x tarifa vigente)."""

    extra_id: int
    employee_id: int
    work_date: date
    hours: float
    amount: float
    description: Optional[str] = None
    approved: bool = False


def extra_pay(hours: float, hourly_rate: float) -> float:
    return round(float(hours) * float(hourly_rate), 2)
