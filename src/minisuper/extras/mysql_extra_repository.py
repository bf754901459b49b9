from __future__ import annotations

from datetime import date
from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import build_update, db_cursor, fetchall, fetchone
from .model import ExtraHours
from .repository import ExtraRepository

_COLUMNS = "extra_id, employee_id, work_date, hours, amount, description, approved"
_UPDATABLE = {"work_date", "hours", "amount", "description", "approved"}


def _to_extra(r: dict) -> ExtraHours:
    return ExtraHours(
        extra_id=int(r["extra_id"]),
        employee_id=int(r["employee_id"]),
        work_date=r["work_date"],
        hours=float(r["hours"]),
        amount=float(r["amount"]),
        description=r.get("description"),
        approved=bool(r.get("approved")),
    )


class MySQLExtraRepository(ExtraRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _select(self, where: str, params: tuple, order: str = "work_date DESC") -> list[ExtraHours]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM extras WHERE {where} ORDER BY {order}", params)
            return [_to_extra(r) for r in fetchall(cur)]

    def list_all(self) -> Sequence[ExtraHours]:
        return self._select("1=1", ())

    def get_by_id(self, extra_id: int) -> Optional[ExtraHours]:
        rows = self._select("extra_id=%s", (int(extra_id),))
        return rows[0] if rows else None

    def list_by_employee(self, employee_id: int) -> Sequence[ExtraHours]:
        return self._select("employee_id=%s", (int(employee_id),))

    def list_range(self, *, start: date, end: date, employee_id: Optional[int] = None) -> Sequence[ExtraHours]:
        clauses = ["work_date BETWEEN %s AND %s"]
        params: list[object] = [start, end]
        if employee_id is not None:
            clauses.append("employee_id=%s")
            params.append(int(employee_id))
        return self._select(" AND ".join(clauses), tuple(params), "work_date ASC")

    def create(
        self,
        *,
        employee_id: int,
        work_date: date,
        hours: float,
        amount: float,
        description: Optional[str] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO extras(employee_id, work_date, hours, amount, description, approved)
                VALUES(%s,%s,%s,%s,%s,0)
                """,
                (int(employee_id), work_date, hours, amount, description),
            )
            return int(cur.lastrowid)

    def update(self, extra_id: int, changes: Dict[str, Any]) -> bool:
        unknown = set(changes) - _UPDATABLE
        if unknown:
            raise KeyError(f"Unknown extras columns: {sorted(unknown)}")
        if not changes:
            return self.get_by_id(extra_id) is not None

        sql, params = build_update("extras", "extra_id", dict(changes))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params + [int(extra_id)]))
            cur.execute("SELECT 1 AS found FROM extras WHERE extra_id=%s", (int(extra_id),))
            return fetchone(cur) is not None

    def delete(self, extra_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM extras WHERE extra_id=%s", (int(extra_id),))
            return cur.rowcount > 0
