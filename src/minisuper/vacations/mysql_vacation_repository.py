from __future__ import annotations

from datetime import date, datetime, time
from enum import Enum
from typing import Any, Dict, Optional, Sequence

from ..core.enums import VacationStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import build_update, db_cursor, fetchall, fetchone, normalize_mysql_time
from .model import VacationRequest
from .repository import VacationRepository

_COLUMNS = (
    "vacation_id, employee_id, start_date, end_date, start_time, end_time, days, "
    "status, reason, requested_at, reviewed_by, reviewed_at"
)
_UPDATABLE = {"start_date", "end_date", "start_time", "end_time", "days", "reason"}


def _to_vacation(r: dict) -> VacationRequest:
    return VacationRequest(
        vacation_id=int(r["vacation_id"]),
        employee_id=int(r["employee_id"]),
        start_date=r["start_date"],
        end_date=r["end_date"],
        days=float(r["days"]),
        status=VacationStatus(r["status"]),
        requested_at=r["requested_at"],
        reason=r.get("reason"),
        start_time=normalize_mysql_time(r.get("start_time")),
        end_time=normalize_mysql_time(r.get("end_time")),
        reviewed_by=r.get("reviewed_by"),
        reviewed_at=r.get("reviewed_at"),
    )


class MySQLVacationRepository(VacationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _select(self, where: str, params: tuple, order: str = "requested_at DESC") -> list[VacationRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM vacations WHERE {where} ORDER BY {order}", params)
            return [_to_vacation(r) for r in fetchall(cur)]

    def list_all(self, *, status: Optional[VacationStatus] = None) -> Sequence[VacationRequest]:
        if status is None:
            return self._select("1=1", ())
        return self._select("status=%s", (status.value,))

    def get_by_id(self, vacation_id: int) -> Optional[VacationRequest]:
        rows = self._select("vacation_id=%s", (int(vacation_id),))
        return rows[0] if rows else None

    def list_by_employee(self, employee_id: int) -> Sequence[VacationRequest]:
        return self._select("employee_id=%s", (int(employee_id),))

    def list_range(self, *, start: date, end: date, employee_id: Optional[int] = None) -> Sequence[VacationRequest]:
        clauses = ["start_date <= %s", "end_date >= %s"]
        params: list[object] = [end, start]
        if employee_id is not None:
            clauses.append("employee_id=%s")
            params.append(int(employee_id))
        return self._select(" AND ".join(clauses), tuple(params), "start_date ASC")

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO vacations(
                    employee_id, start_date, end_date, start_time, end_time, days, status, reason, requested_at
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(employee_id),
                    start_date,
                    end_date,
                    start_time,
                    end_time,
                    days,
                    VacationStatus.PENDING.value,
                    reason,
                    requested_at,
                ),
            )
            return int(cur.lastrowid)

    def update(self, vacation_id: int, changes: Dict[str, Any]) -> bool:
        unknown = set(changes) - _UPDATABLE
        if unknown:
            raise KeyError(f"Unknown vacation columns: {sorted(unknown)}")
        if not changes:
            return self.get_by_id(vacation_id) is not None

        values = {k: (v.value if isinstance(v, Enum) else v) for k, v in changes.items()}
        sql, params = build_update("vacations", "vacation_id", values)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params + [int(vacation_id)]))
            cur.execute("SELECT 1 AS found FROM vacations WHERE vacation_id=%s", (int(vacation_id),))
            return fetchone(cur) is not None

    def decide(
        self,
        *,
        vacation_id: int,
        status: VacationStatus,
        reviewed_by: str,
        reviewed_at: datetime,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE vacations
                SET status=%s, reviewed_by=%s, reviewed_at=%s
                WHERE vacation_id=%s AND status=%s
                """,
                (status.value, reviewed_by, reviewed_at, int(vacation_id), VacationStatus.PENDING.value),
            )
            return cur.rowcount > 0

    def delete(self, vacation_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM vacations WHERE vacation_id=%s", (int(vacation_id),))
            return cur.rowcount > 0
