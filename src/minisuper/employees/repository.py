from __future__ import annotations

from datetime import date
from typing import Any, Dict, Optional, Protocol, Sequence

from ..core.enums import EmployeeRole, EmployeeStatus
from .model import Employee


class EmployeeRepository(Protocol):
    def list_all(self) -> Sequence[Employee]:
        raise NotImplementedError

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[Employee]:
        raise NotImplementedError

    def get_by_user_id(self, user_id: str) -> Optional[Employee]:
        raise NotImplementedError

    def create(
        self,
        *,
        name: str,
        email: str,
        role: EmployeeRole,
        hourly_rate: float,
        status: EmployeeStatus,
        hire_date: date,
        color: str,
        user_id: Optional[str],
    ) -> int:
        raise NotImplementedError

    def update(self, employee_id: int, changes: Dict[str, Any]) -> bool:
        """Apply a partial update; keys are Employee field names."""

        raise NotImplementedError

    def delete_by_id(self, employee_id: int) -> bool:
        raise NotImplementedError
