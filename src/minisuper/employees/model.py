from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import EmployeeRole, EmployeeStatus


@dataclass(frozen=True)
class Employee:
    """Entidad de dominio: Empleado.

    Objeto de datos puro, sin acceso a la base de datos.
    """

    employee_id: int
    name: str
    email: str
    role: EmployeeRole
    hourly_rate: float
    status: EmployeeStatus
    hire_date: date
    color: str
    user_id: Optional[str] = None

    @property
    def is_permanent(self) -> bool:
        return self.role == EmployeeRole.PERMANENT
