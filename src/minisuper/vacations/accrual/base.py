from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional


@dataclass(frozen=True)
class VacationBalance:
    total: int
    used: float
    available: float


class AccrualPolicy(ABC):
    """Strategy interface: how vacation days accrue with tenure."""

    name: str = ""
    annual_cap: Optional[int] = None

    @abstractmethod
    def accrued_days(self, hire_date: date, today: date) -> int:
        raise NotImplementedError

    def balance(self, hire_date: date, today: date, used_days: Iterable[float]) -> VacationBalance:
        total = max(self.accrued_days(hire_date, today), 0)
        used = round(sum(float(d) for d in used_days), 2)
        return VacationBalance(total=total, used=used, available=max(round(total - used, 2), 0))
