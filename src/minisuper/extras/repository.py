from __future__ import annotations

from datetime import date
from typing import Any, Dict, Optional, Protocol, Sequence

from .model import ExtraHours


class ExtraRepository(Protocol):
    def list_all(self) -> Sequence[ExtraHours]:
        raise NotImplementedError

    def get_by_id(self, extra_id: int) -> Optional[ExtraHours]:
        raise NotImplementedError

    def list_by_employee(self, employee_id: int) -> Sequence[ExtraHours]:
        """Records of one employee, newest date first."""

        raise NotImplementedError

    def list_range(self, *, start: date, end: date, employee_id: Optional[int] = None) -> Sequence[ExtraHours]:
        raise NotImplementedError

    def create(
        self,
        *,
        employee_id: int,
        work_date: date,
        hours: float,
        amount: float,
        description: Optional[str] = None,
    ) -> int:
        raise NotImplementedError

    def update(self, extra_id: int, changes: Dict[str, Any]) -> bool:
        raise NotImplementedError

    def delete(self, extra_id: int) -> bool:
        raise NotImplementedError
