from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import Schedule, ScheduleBlock, WeeklySchedule


class ScheduleRepository(Protocol):
    def list_all(self) -> Sequence[Schedule]:
        raise NotImplementedError

    def get_by_id(self, schedule_id: int) -> Optional[Schedule]:
        raise NotImplementedError

    def list_by_employee(self, employee_id: int) -> Sequence[Schedule]:
        """Schedules of one employee, newest date first."""

        raise NotImplementedError

    def list_range(self, *, start: date, end: date, employee_id: Optional[int] = None) -> Sequence[Schedule]:
        """Schedules with start <= work_date <= end, oldest first."""

        raise NotImplementedError

    def create(
        self,
        *,
        employee_id: int,
        work_date: date,
        blocks: Sequence[ScheduleBlock],
        total_hours: float,
    ) -> int:
        raise NotImplementedError

    def update(
        self,
        schedule_id: int,
        *,
        work_date: Optional[date] = None,
        blocks: Optional[Sequence[ScheduleBlock]] = None,
        total_hours: Optional[float] = None,
    ) -> bool:
        raise NotImplementedError

    def delete(self, schedule_id: int) -> bool:
        raise NotImplementedError


class WeeklyScheduleRepository(Protocol):
    def get(self, employee_id: int) -> Optional[WeeklySchedule]:
        raise NotImplementedError

    def save(self, weekly: WeeklySchedule) -> None:
        """Create or replace the template of weekly.employee_id."""

        raise NotImplementedError
