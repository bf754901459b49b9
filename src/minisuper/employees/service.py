from __future__ import annotations

import logging
from datetime import date
from typing import Any, Dict, Optional, Sequence

from ..common.datetime_utils import today_local
from ..common.validators import (
    require_color,
    require_date,
    require_email,
    require_min_length,
    require_non_empty,
    require_positive_number,
)
from ..core.constants import DEFAULT_EMPLOYEE_COLOR, DEFAULT_HOURLY_RATES, MIN_PASSWORD_LENGTH
from ..core.enums import EmployeeRole, EmployeeStatus, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..users.identity import IdentityProvider
from ..users.repository import UserRepository
from .model import Employee
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)


def parse_employee_role(value: Any) -> EmployeeRole:
    try:
        return EmployeeRole(value)
    except ValueError:
        raise ValidationError("Tipo de empleado inválido")


def parse_employee_status(value: Any) -> EmployeeStatus:
    try:
        return EmployeeStatus(value)
    except ValueError:
        raise ValidationError("Estado inválido")


class EmployeeService:
    """Use cases: manage employees (admin)."""

    def __init__(self, employees: EmployeeRepository, users: UserRepository, identity: IdentityProvider):
        self._employees = employees
        self._users = users
        self._identity = identity

    def list_employees(self) -> Sequence[Employee]:
        return self._employees.list_all()

    def get(self, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise NotFoundError("Empleado no encontrado")
        return employee

    def get_by_user_id(self, user_id: str) -> Optional[Employee]:
        return self._employees.get_by_user_id(user_id)

    @staticmethod
    def _check_hire_date(value: Any, today: date) -> date:
        hire_date = require_date(value, "Fecha de ingreso")
        if hire_date > today:
            raise ValidationError("La fecha de ingreso no puede ser futura")
        return hire_date

    def create(
        self,
        *,
        current_role: Role,
        name: str,
        email: str,
        password: str,
        role: Any,
        hire_date: Any,
        hourly_rate: Any = None,
        color: Optional[str] = None,
        status: Any = None,
        today: Optional[date] = None,
    ) -> Employee:
        if current_role != Role.ADMIN:
            raise AuthorizationError("No tienes permiso para esta acción")

        today = today or today_local()
        name = require_non_empty(name, "Nombre")
        email = require_email(email)
        require_min_length(password, "Contraseña", MIN_PASSWORD_LENGTH)
        emp_role = parse_employee_role(role)
        hire = self._check_hire_date(hire_date, today)
        rate = (
            float(DEFAULT_HOURLY_RATES[emp_role.value])
            if hourly_rate in (None, "")
            else require_positive_number(hourly_rate, "Tarifa por hora")
        )
        color = require_color(color) if color else DEFAULT_EMPLOYEE_COLOR
        emp_status = parse_employee_status(status) if status else EmployeeStatus.ACTIVE

        if self._employees.get_by_email(email):
            raise ValidationError("El correo ya está registrado")

        # Login account first; its subject id links the users/employees records.
        subject = self._identity.create_account(email, password)
        self._users.create(user_id=subject.uid, email=email, name=name, role=Role.EMPLOYEE)

        employee_id = self._employees.create(
            name=name,
            email=email,
            role=emp_role,
            hourly_rate=rate,
            status=emp_status,
            hire_date=hire,
            color=color,
            user_id=subject.uid,
        )
        logger.info("Created employee %s (%s)", employee_id, email)
        return self.get(employee_id)

    def update(
        self,
        *,
        current_role: Role,
        employee_id: int,
        changes: Dict[str, Any],
        today: Optional[date] = None,
    ) -> Employee:
        if current_role != Role.ADMIN:
            raise AuthorizationError("No tienes permiso para esta acción")

        current = self.get(employee_id)
        today = today or today_local()
        clean: Dict[str, Any] = {}

        for key, value in (changes or {}).items():
            if key == "name":
                clean["name"] = require_non_empty(value, "Nombre")
            elif key == "email":
                email = require_email(value)
                other = self._employees.get_by_email(email)
                if other and other.employee_id != current.employee_id:
                    raise ValidationError("El correo ya está registrado")
                clean["email"] = email
            elif key == "role":
                clean["role"] = parse_employee_role(value)
            elif key == "hourly_rate":
                clean["hourly_rate"] = require_positive_number(value, "Tarifa por hora")
            elif key == "status":
                clean["status"] = parse_employee_status(value)
            elif key == "hire_date":
                clean["hire_date"] = self._check_hire_date(value, today)
            elif key == "color":
                clean["color"] = require_color(value)
            else:
                raise ValidationError(f"Campo no editable: {key}")

        if current.user_id and "email" in clean and clean["email"] != current.email:
            # Login email changes first; EMAIL_IN_USE aborts the whole update.
            self._identity.update_email(current.user_id, clean["email"])

        if not self._employees.update(current.employee_id, clean):
            raise NotFoundError("Empleado no encontrado")
        if current.user_id and ("email" in clean or "name" in clean):
            self._users.update(current.user_id, email=clean.get("email"), name=clean.get("name"))
        return self.get(current.employee_id)

    def delete(self, *, current_role: Role, employee_id: int) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("No tienes permiso para esta acción")

        employee = self.get(employee_id)
        if not self._employees.delete_by_id(employee.employee_id):
            raise ValidationError("No se pudo eliminar el empleado")
        if employee.user_id:
            self._users.delete_by_id(employee.user_id)
            self._identity.delete_account(employee.user_id)
        logger.info("Deleted employee %s", employee.employee_id)
