from __future__ import annotations

import logging
from datetime import date, datetime, time
from typing import Any, Dict, Optional, Sequence

from ..common.datetime_utils import hours_between, now_local, today_local
from ..common.validators import require_date, require_time
from ..core.constants import WORKDAY_HOURS
from ..core.enums import Role, VacationStatus
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from .accrual.base import AccrualPolicy, VacationBalance
from .model import VacationRequest
from .repository import VacationRepository

logger = logging.getLogger(__name__)


def requested_days(
    start_date: date,
    end_date: date,
    start_time: Optional[time] = None,
    end_time: Optional[time] = None,
) -> float:
    """Days charged for a request.

    A date range counts every calendar day inclusive. A single day with an
    hour range counts hours / WORKDAY_HOURS.
    """

    if end_date < start_date:
        raise ValidationError("La fecha de fin debe ser posterior a la fecha de inicio")

    if start_time is None and end_time is None:
        return float((end_date - start_date).days + 1)

    if start_time is None or end_time is None:
        raise ValidationError("Debe indicar hora de inicio y hora de fin")
    if start_date != end_date:
        raise ValidationError("El rango de horas solo aplica a solicitudes de un día")
    hours = hours_between(start_time, end_time)
    if hours <= 0:
        raise ValidationError("La hora de fin debe ser posterior a la hora de inicio")
    return round(hours / WORKDAY_HOURS, 2)


def _fmt_days(value: float) -> str:
    return f"{value:g}"


class VacationService:
    def __init__(self, vacations: VacationRepository, employees: EmployeeRepository, policy: AccrualPolicy):
        self._vacations = vacations
        self._employees = employees
        self._policy = policy

    @property
    def policy(self) -> AccrualPolicy:
        return self._policy

    def _require_employee(self, employee_id: Any) -> Employee:
        try:
            employee = self._employees.get_by_id(int(employee_id))
        except (TypeError, ValueError):
            raise ValidationError("Empleado inválido")
        if not employee:
            raise NotFoundError("Empleado no encontrado")
        return employee

    def list_vacations(self, *, status: Optional[VacationStatus] = None) -> Sequence[VacationRequest]:
        return self._vacations.list_all(status=status)

    def list_for_employee(self, employee_id: int) -> Sequence[VacationRequest]:
        return self._vacations.list_by_employee(int(employee_id))

    def list_range(self, *, start: date, end: date, employee_id: Optional[int] = None) -> Sequence[VacationRequest]:
        if end < start:
            raise ValidationError("Rango de fechas inválido")
        return self._vacations.list_range(start=start, end=end, employee_id=employee_id)

    def get(self, vacation_id: int) -> VacationRequest:
        vacation = self._vacations.get_by_id(int(vacation_id))
        if not vacation:
            raise NotFoundError("Solicitud no encontrada")
        return vacation

    def balance(self, employee_id: int, *, today: Optional[date] = None) -> VacationBalance:
        employee = self._require_employee(employee_id)
        approved = [
            v.days
            for v in self._vacations.list_by_employee(employee.employee_id)
            if v.status == VacationStatus.APPROVED
        ]
        return self._policy.balance(employee.hire_date, today or today_local(), approved)

    def _check_balance(self, employee_id: int, days: float, *, today: Optional[date] = None) -> None:
        available = self.balance(employee_id, today=today).available
        if days > available:
            raise ValidationError(
                "No tienes suficientes días disponibles. "
                f"Disponibles: {_fmt_days(available)}, Solicitados: {_fmt_days(days)}"
            )

    @staticmethod
    def _target_employee(current_role: Role, current_employee_id: Optional[int], employee_id: Any) -> Any:
        if current_role == Role.ADMIN:
            if employee_id in (None, ""):
                raise ValidationError("Empleado es obligatorio")
            return employee_id
        if current_employee_id is None:
            raise AuthorizationError("Tu usuario no está vinculado a un empleado")
        if employee_id not in (None, "") and int(employee_id) != int(current_employee_id):
            raise AuthorizationError("Solo puedes solicitar vacaciones para ti")
        return current_employee_id

    @staticmethod
    def _optional_time(value: Any, field_name: str) -> Optional[time]:
        if value in (None, ""):
            return None
        return require_time(value, field_name)

    def request(
        self,
        *,
        current_role: Role,
        current_employee_id: Optional[int],
        start_date: Any,
        end_date: Any,
        employee_id: Any = None,
        reason: Optional[str] = None,
        start_time: Any = None,
        end_time: Any = None,
        now: Optional[datetime] = None,
    ) -> VacationRequest:
        now = now or now_local()
        employee = self._require_employee(self._target_employee(current_role, current_employee_id, employee_id))

        start = require_date(start_date, "Fecha de inicio")
        end = require_date(end_date, "Fecha de fin")
        t_start = self._optional_time(start_time, "Hora de inicio")
        t_end = self._optional_time(end_time, "Hora de fin")
        days = requested_days(start, end, t_start, t_end)

        self._check_balance(employee.employee_id, days, today=now.date())

        vacation_id = self._vacations.create(
            employee_id=employee.employee_id,
            start_date=start,
            end_date=end,
            days=days,
            reason=(reason or "").strip() or None,
            requested_at=now,
            start_time=t_start,
            end_time=t_end,
        )
        return self.get(vacation_id)

    def _check_owner(self, vacation: VacationRequest, current_role: Role, current_employee_id: Optional[int]) -> None:
        if current_role == Role.ADMIN:
            return
        if current_employee_id is None or vacation.employee_id != int(current_employee_id):
            raise AuthorizationError("No tienes permiso para esta acción")

    def update(
        self,
        *,
        current_role: Role,
        current_employee_id: Optional[int],
        vacation_id: int,
        changes: Dict[str, Any],
        today: Optional[date] = None,
    ) -> VacationRequest:
        vacation = self.get(vacation_id)
        self._check_owner(vacation, current_role, current_employee_id)
        if vacation.status != VacationStatus.PENDING:
            raise ValidationError("Solo se pueden editar solicitudes pendientes")

        unknown = set(changes or {}) - {"start_date", "end_date", "start_time", "end_time", "reason"}
        if unknown:
            raise ValidationError(f"Campo no editable: {sorted(unknown)[0]}")

        start = require_date(changes["start_date"], "Fecha de inicio") if "start_date" in changes else vacation.start_date
        end = require_date(changes["end_date"], "Fecha de fin") if "end_date" in changes else vacation.end_date
        t_start = self._optional_time(changes["start_time"], "Hora de inicio") if "start_time" in changes else vacation.start_time
        t_end = self._optional_time(changes["end_time"], "Hora de fin") if "end_time" in changes else vacation.end_time

        clean: Dict[str, Any] = {
            "start_date": start,
            "end_date": end,
            "start_time": t_start,
            "end_time": t_end,
            "days": requested_days(start, end, t_start, t_end),
        }
        self._check_balance(vacation.employee_id, clean["days"], today=today)
        if "reason" in changes:
            clean["reason"] = (changes["reason"] or "").strip() or None

        if not self._vacations.update(vacation.vacation_id, clean):
            raise NotFoundError("Solicitud no encontrada")
        return self.get(vacation.vacation_id)

    def _decide(
        self,
        *,
        current_role: Role,
        reviewer: str,
        vacation_id: int,
        status: VacationStatus,
        now: Optional[datetime],
    ) -> VacationRequest:
        if current_role != Role.ADMIN:
            raise AuthorizationError("No tienes permiso para esta acción")

        vacation = self.get(vacation_id)
        if vacation.status != VacationStatus.PENDING:
            raise ValidationError("La solicitud ya fue procesada")

        now = now or now_local()
        if status == VacationStatus.APPROVED:
            self._check_balance(vacation.employee_id, vacation.days, today=now.date())

        decided = self._vacations.decide(
            vacation_id=vacation.vacation_id,
            status=status,
            reviewed_by=reviewer,
            reviewed_at=now,
        )
        if not decided:
            # Someone else decided it between the read and the update.
            raise ValidationError("La solicitud ya fue procesada")

        logger.info("Vacation %s %s by %s", vacation.vacation_id, status.value, reviewer)
        return self.get(vacation.vacation_id)

    def approve(self, *, current_role: Role, reviewer: str, vacation_id: int, now: Optional[datetime] = None) -> VacationRequest:
        return self._decide(
            current_role=current_role,
            reviewer=reviewer,
            vacation_id=vacation_id,
            status=VacationStatus.APPROVED,
            now=now,
        )

    def reject(self, *, current_role: Role, reviewer: str, vacation_id: int, now: Optional[datetime] = None) -> VacationRequest:
        return self._decide(
            current_role=current_role,
            reviewer=reviewer,
            vacation_id=vacation_id,
            status=VacationStatus.REJECTED,
            now=now,
        )

    def delete(self, *, current_role: Role, current_employee_id: Optional[int], vacation_id: int) -> None:
        vacation = self.get(vacation_id)
        self._check_owner(vacation, current_role, current_employee_id)
        if current_role != Role.ADMIN and vacation.status != VacationStatus.PENDING:
            raise ValidationError("Solo se pueden eliminar solicitudes pendientes")

        if not self._vacations.delete(vacation.vacation_id):
            raise NotFoundError("Solicitud no encontrada")
