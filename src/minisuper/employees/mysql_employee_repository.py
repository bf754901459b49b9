from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Any, Dict, Optional, Sequence

from ..core.enums import EmployeeRole, EmployeeStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import build_update, db_cursor, fetchall, fetchone
from .model import Employee
from .repository import EmployeeRepository

_COLUMNS = "employee_id, name, email, role, hourly_rate, status, hire_date, color, user_id"
_UPDATABLE = {"name", "email", "role", "hourly_rate", "status", "hire_date", "color", "user_id"}


def _to_employee(r: dict) -> Employee:
    return Employee(
        employee_id=int(r["employee_id"]),
        name=r["name"],
        email=r["email"],
        role=EmployeeRole(r["role"]),
        hourly_rate=float(r["hourly_rate"]),
        status=EmployeeStatus(r["status"]),
        hire_date=r["hire_date"],
        color=r["color"],
        user_id=r.get("user_id"),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _get_one(self, where: str, value: Any) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE {where}=%s", (value,))
            r = fetchone(cur)
            return _to_employee(r) if r else None

    def list_all(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees ORDER BY name ASC")
            return [_to_employee(r) for r in fetchall(cur)]

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        return self._get_one("employee_id", int(employee_id))

    def get_by_email(self, email: str) -> Optional[Employee]:
        return self._get_one("email", email)

    def get_by_user_id(self, user_id: str) -> Optional[Employee]:
        return self._get_one("user_id", user_id)

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO employees(name, email, role, hourly_rate, status, hire_date, color, user_id)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (name, email, role.value, hourly_rate, status.value, hire_date, color, user_id),
            )
            return int(cur.lastrowid)

    def update(self, employee_id: int, changes: Dict[str, Any]) -> bool:
        unknown = set(changes) - _UPDATABLE
        if unknown:
            raise KeyError(f"Unknown employee columns: {sorted(unknown)}")
        if not changes:
            return self.get_by_id(employee_id) is not None

        values = {k: (v.value if isinstance(v, Enum) else v) for k, v in changes.items()}
        sql, params = build_update("employees", "employee_id", values)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params + [int(employee_id)]))
            # MySQL reports 0 affected rows when values are unchanged.
            cur.execute("SELECT 1 AS found FROM employees WHERE employee_id=%s", (int(employee_id),))
            return fetchone(cur) is not None

    def delete_by_id(self, employee_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM employees WHERE employee_id=%s", (int(employee_id),))
            return cur.rowcount > 0
