from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Rol de la cuenta usado para permisos."""

    ADMIN = "admin"
    EMPLOYEE = "employee"


class EmployeeRole(str, Enum):
    """Clasificación del empleado."""

    PERMANENT = "permanent"
    REINFORCEMENT = "reinforcement"


class EmployeeStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class BlockKind(str, Enum):
    """Tipo de bloque dentro de un horario diario."""

    WORK = "work"
    BREAK = "break"


class VacationStatus(str, Enum):
    """Estado del flujo de aprobación de vacaciones."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class SessionState(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    RESOLVING = "resolving"
    AUTHENTICATED_ADMIN = "authenticated_admin"
    AUTHENTICATED_EMPLOYEE = "authenticated_employee"
    REJECTED = "rejected"
