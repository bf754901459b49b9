from __future__ import annotations

from datetime import date, datetime, time
from typing import Any, Dict, Optional, Protocol, Sequence

from ..core.enums import VacationStatus
from .model import VacationRequest


class VacationRepository(Protocol):
    def list_all(self, *, status: Optional[VacationStatus] = None) -> Sequence[VacationRequest]:
        raise NotImplementedError

    def get_by_id(self, vacation_id: int) -> Optional[VacationRequest]:
        raise NotImplementedError

    def list_by_employee(self, employee_id: int) -> Sequence[VacationRequest]:
        """Requests of one employee, newest request first."""

        raise NotImplementedError

    def list_range(self, *, start: date, end: date, employee_id: Optional[int] = None) -> Sequence[VacationRequest]:
        """Requests whose [start_date, end_date] overlaps [start, end]."""

        raise NotImplementedError

    def create(
        self,
        *,
        employee_id: int,
        start_date: date,
        end_date: date,
        days: float,
        reason: Optional[str],
        requested_at: datetime,
        start_time: Optional[time] = None,
        end_time: Optional[time] = None,
    ) -> int:
        raise NotImplementedError

    def update(self, vacation_id: int, changes: Dict[str, Any]) -> bool:
        raise NotImplementedError

    def decide(
        self,
        *,
        vacation_id: int,
        status: VacationStatus,
        reviewed_by: str,
        reviewed_at: datetime,
    ) -> bool:
        """Move a PENDING request to status; False if it is not pending."""

        raise NotImplementedError

    def delete(self, vacation_id: int) -> bool:
        raise NotImplementedError
