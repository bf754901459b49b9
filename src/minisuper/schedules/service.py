from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Optional, Sequence

from ..common.datetime_utils import parse_hhmm
from ..common.validators import require_date, require_time
from ..core.constants import DEFAULT_WEEKLY_END, DEFAULT_WEEKLY_START
from ..core.enums import BlockKind, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from .model import Schedule, ScheduleBlock, WeeklyDay, WeeklySchedule, total_work_hours
from .repository import ScheduleRepository, WeeklyScheduleRepository


def parse_blocks(raw_blocks: Any) -> List[ScheduleBlock]:
    """Validate block payloads and return them sorted by start time.

    Each block needs end > start; blocks of one day may not overlap.
    """

    if not isinstance(raw_blocks, (list, tuple)) or not raw_blocks:
        raise ValidationError("Debe agregar al menos un bloque de horario")

    blocks: List[ScheduleBlock] = []
    for raw in raw_blocks:
        if not isinstance(raw, dict):
            raise ValidationError("Bloque de horario inválido")
        start = require_time(raw.get("start_time"), "Hora de inicio")
        end = require_time(raw.get("end_time"), "Hora de fin")
        try:
            kind = BlockKind(raw.get("kind") or BlockKind.WORK.value)
        except ValueError:
            raise ValidationError("Tipo de bloque inválido")
        if end <= start:
            raise ValidationError("La hora de fin debe ser posterior a la hora de inicio")
        blocks.append(ScheduleBlock(start_time=start, end_time=end, kind=kind))

    blocks.sort(key=lambda b: b.start_time)
    for prev, nxt in zip(blocks, blocks[1:]):
        if nxt.start_time < prev.end_time:
            raise ValidationError("Los bloques de horario no pueden traslaparse")
    return blocks


def default_weekly_days() -> Dict[int, WeeklyDay]:
    start = parse_hhmm(DEFAULT_WEEKLY_START)
    end = parse_hhmm(DEFAULT_WEEKLY_END)
    # 0 = Sunday, off by default.
    return {day: WeeklyDay(start_time=start, end_time=end, is_work_day=day != 0) for day in range(7)}


class ScheduleService:
    def __init__(
        self,
        schedules: ScheduleRepository,
        weekly: WeeklyScheduleRepository,
        employees: EmployeeRepository,
    ):
        self._schedules = schedules
        self._weekly = weekly
        self._employees = employees

    def _require_employee(self, employee_id: Any):
        try:
            employee = self._employees.get_by_id(int(employee_id))
        except (TypeError, ValueError):
            raise ValidationError("Empleado inválido")
        if not employee:
            raise NotFoundError("Empleado no encontrado")
        return employee

    def list_schedules(
        self,
        *,
        employee_id: Optional[int] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> Sequence[Schedule]:
        if start and end:
            if end < start:
                raise ValidationError("Rango de fechas inválido")
            return self._schedules.list_range(start=start, end=end, employee_id=employee_id)
        if employee_id is not None:
            return self._schedules.list_by_employee(int(employee_id))
        return self._schedules.list_all()

    def get(self, schedule_id: int) -> Schedule:
        schedule = self._schedules.get_by_id(int(schedule_id))
        if not schedule:
            raise NotFoundError("Horario no encontrado")
        return schedule

    def create(self, *, current_role: Role, employee_id: Any, work_date: Any, blocks: Any) -> Schedule:
        if current_role != Role.ADMIN:
            raise AuthorizationError("No tienes permiso para esta acción")

        employee = self._require_employee(employee_id)
        day = require_date(work_date, "Fecha")
        parsed = parse_blocks(blocks)

        schedule_id = self._schedules.create(
            employee_id=employee.employee_id,
            work_date=day,
            blocks=parsed,
            total_hours=total_work_hours(parsed),
        )
        return self.get(schedule_id)

    def update(self, *, current_role: Role, schedule_id: int, changes: Dict[str, Any]) -> Schedule:
        if current_role != Role.ADMIN:
            raise AuthorizationError("No tienes permiso para esta acción")

        self.get(schedule_id)
        unknown = set(changes or {}) - {"work_date", "blocks"}
        if unknown:
            raise ValidationError(f"Campo no editable: {sorted(unknown)[0]}")

        work_date = require_date(changes["work_date"], "Fecha") if "work_date" in changes else None
        blocks = parse_blocks(changes["blocks"]) if "blocks" in changes else None

        ok = self._schedules.update(
            int(schedule_id),
            work_date=work_date,
            blocks=blocks,
            total_hours=total_work_hours(blocks) if blocks is not None else None,
        )
        if not ok:
            raise NotFoundError("Horario no encontrado")
        return self.get(schedule_id)

    def delete(self, *, current_role: Role, schedule_id: int) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("No tienes permiso para esta acción")

        if not self._schedules.delete(int(schedule_id)):
            raise NotFoundError("Horario no encontrado")

    def get_weekly(self, employee_id: int) -> WeeklySchedule:
        employee = self._require_employee(employee_id)
        weekly = self._weekly.get(employee.employee_id)
        if weekly:
            return weekly
        return WeeklySchedule(employee_id=employee.employee_id, employee_name=employee.name, days=default_weekly_days())

    def save_weekly(self, *, current_role: Role, employee_id: int, days: Any) -> WeeklySchedule:
        if current_role != Role.ADMIN:
            raise AuthorizationError("No tienes permiso para esta acción")
        if not isinstance(days, dict):
            raise ValidationError("Horario semanal inválido")

        employee = self._require_employee(employee_id)
        merged = default_weekly_days()
        for key, raw in days.items():
            try:
                weekday = int(key)
            except (TypeError, ValueError):
                raise ValidationError("Día de la semana inválido")
            if weekday not in merged or not isinstance(raw, dict):
                raise ValidationError("Día de la semana inválido")

            start = require_time(raw.get("start_time"), "Hora de inicio")
            end = require_time(raw.get("end_time"), "Hora de fin")
            is_work_day = raw.get("is_work_day", True)
            if not isinstance(is_work_day, bool):
                raise ValidationError("Día laboral debe ser verdadero o falso")
            if is_work_day and end <= start:
                raise ValidationError("La hora de fin debe ser posterior a la hora de inicio")
            merged[weekday] = WeeklyDay(start_time=start, end_time=end, is_work_day=is_work_day)

        weekly = WeeklySchedule(employee_id=employee.employee_id, employee_name=employee.name, days=merged)
        self._weekly.save(weekly)
        return weekly
