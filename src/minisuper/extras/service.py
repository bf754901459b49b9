from __future__ import annotations

from datetime import date
from typing import Any, Dict, Optional, Sequence

from ..common.validators import require_date, require_positive_number
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from .model import ExtraHours, extra_pay
from .repository import ExtraRepository


def _stored_hours(value: Any) -> float:
    # Matches extras.hours DECIMAL(6,2).
    return require_positive_number(round(require_positive_number(value, "Horas"), 2), "Horas")


class ExtraService:
    def __init__(self, extras: ExtraRepository, employees: EmployeeRepository):
        self._extras = extras
        self._employees = employees

    def _require_employee(self, employee_id: Any) -> Employee:
        try:
            employee = self._employees.get_by_id(int(employee_id))
        except (TypeError, ValueError):
            raise ValidationError("Empleado inválido")
        if not employee:
            raise NotFoundError("Empleado no encontrado")
        return employee

    def list_extras(self) -> Sequence[ExtraHours]:
        return self._extras.list_all()

    def list_for_employee(self, employee_id: int) -> Sequence[ExtraHours]:
        return self._extras.list_by_employee(int(employee_id))

    def list_range(self, *, start: date, end: date, employee_id: Optional[int] = None) -> Sequence[ExtraHours]:
        if end < start:
            raise ValidationError("Rango de fechas inválido")
        return self._extras.list_range(start=start, end=end, employee_id=employee_id)

    def get(self, extra_id: int) -> ExtraHours:
        extra = self._extras.get_by_id(int(extra_id))
        if not extra:
            raise NotFoundError("Registro de horas extra no encontrado")
        return extra

    def create(
        self,
        *,
        current_role: Role,
        employee_id: Any,
        work_date: Any,
        hours: Any,
        description: Optional[str] = None,
    ) -> ExtraHours:
        if current_role != Role.ADMIN:
            raise AuthorizationError("No tienes permiso para esta acción")

        employee = self._require_employee(employee_id)
        if not employee.is_permanent:
            raise ValidationError("Solo los empleados fijos registran horas extra")

        day = require_date(work_date, "Fecha")
        worked = _stored_hours(hours)

        extra_id = self._extras.create(
            employee_id=employee.employee_id,
            work_date=day,
            hours=worked,
            amount=extra_pay(worked, employee.hourly_rate),
            description=(description or "").strip() or None,
        )
        return self.get(extra_id)

    def update(self, *, current_role: Role, extra_id: int, changes: Dict[str, Any]) -> ExtraHours:
        if current_role != Role.ADMIN:
            raise AuthorizationError("No tienes permiso para esta acción")

        extra = self.get(extra_id)
        unknown = set(changes or {}) - {"work_date", "hours", "description"}
        if unknown:
            raise ValidationError(f"Campo no editable: {sorted(unknown)[0]}")

        clean: Dict[str, Any] = {}
        if "work_date" in changes:
            clean["work_date"] = require_date(changes["work_date"], "Fecha")
        if "description" in changes:
            clean["description"] = (changes["description"] or "").strip() or None
        if "hours" in changes:
            worked = _stored_hours(changes["hours"])
            # Keep the rate the record was created with.
            rate = extra.amount / extra.hours if extra.hours else self._require_employee(extra.employee_id).hourly_rate
            clean["hours"] = worked
            clean["amount"] = extra_pay(worked, rate)

        if not self._extras.update(extra.extra_id, clean):
            raise NotFoundError("Registro de horas extra no encontrado")
        return self.get(extra.extra_id)

    def approve(self, *, current_role: Role, extra_id: int) -> ExtraHours:
        if current_role != Role.ADMIN:
            raise AuthorizationError("No tienes permiso para esta acción")

        extra = self.get(extra_id)
        if not extra.approved:
            self._extras.update(extra.extra_id, {"approved": True})
        return self.get(extra.extra_id)

    def delete(self, *, current_role: Role, extra_id: int) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("No tienes permiso para esta acción")

        if not self._extras.delete(int(extra_id)):
            raise NotFoundError("Registro de horas extra no encontrado")
