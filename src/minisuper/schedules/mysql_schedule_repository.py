from __future__ import annotations

import json
from datetime import date
from typing import Dict, List, Optional, Sequence

from ..common.datetime_utils import parse_hhmm
from ..core.enums import BlockKind
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time
from .model import Schedule, ScheduleBlock, WeeklyDay, WeeklySchedule
from .repository import ScheduleRepository, WeeklyScheduleRepository


class MySQLScheduleRepository(ScheduleRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _select(self, where: str, params: tuple, order: str) -> List[Schedule]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT schedule_id, employee_id, work_date, total_hours
                FROM schedules
                WHERE {where}
                ORDER BY {order}
                """,
                params,
            )
            rows = fetchall(cur)
            if not rows:
                return []

            ids = [int(r["schedule_id"]) for r in rows]
            placeholders = ",".join(["%s"] * len(ids))
            cur.execute(
                f"""
                SELECT schedule_id, start_time, end_time, kind
                FROM schedule_blocks
                WHERE schedule_id IN ({placeholders})
                ORDER BY start_time ASC
                """,
                tuple(ids),
            )
            blocks: Dict[int, List[ScheduleBlock]] = {}
            for b in fetchall(cur):
                blocks.setdefault(int(b["schedule_id"]), []).append(
                    ScheduleBlock(
                        start_time=normalize_mysql_time(b["start_time"]),
                        end_time=normalize_mysql_time(b["end_time"]),
                        kind=BlockKind(b["kind"]),
                    )
                )

            return [
                Schedule(
                    schedule_id=int(r["schedule_id"]),
                    employee_id=int(r["employee_id"]),
                    work_date=r["work_date"],
                    blocks=tuple(blocks.get(int(r["schedule_id"]), [])),
                    total_hours=float(r["total_hours"]),
                )
                for r in rows
            ]

    @staticmethod
    def _insert_blocks(cur, schedule_id: int, blocks: Sequence[ScheduleBlock]) -> None:
        for b in blocks:
            cur.execute(
                "INSERT INTO schedule_blocks(schedule_id, start_time, end_time, kind) VALUES(%s,%s,%s,%s)",
                (schedule_id, b.start_time, b.end_time, b.kind.value),
            )

    def list_all(self) -> Sequence[Schedule]:
        return self._select("1=1", (), "work_date ASC, employee_id ASC")

    def get_by_id(self, schedule_id: int) -> Optional[Schedule]:
        rows = self._select("schedule_id=%s", (int(schedule_id),), "schedule_id")
        return rows[0] if rows else None

    def list_by_employee(self, employee_id: int) -> Sequence[Schedule]:
        return self._select("employee_id=%s", (int(employee_id),), "work_date DESC")

    def list_range(self, *, start: date, end: date, employee_id: Optional[int] = None) -> Sequence[Schedule]:
        clauses = ["work_date BETWEEN %s AND %s"]
        params: list[object] = [start, end]
        if employee_id is not None:
            clauses.append("employee_id=%s")
            params.append(int(employee_id))
        return self._select(" AND ".join(clauses), tuple(params), "work_date ASC, employee_id ASC")

    def create(
        self,
        *,
        employee_id: int,
        work_date: date,
        blocks: Sequence[ScheduleBlock],
        total_hours: float,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO schedules(employee_id, work_date, total_hours) VALUES(%s,%s,%s)",
                (int(employee_id), work_date, total_hours),
            )
            schedule_id = int(cur.lastrowid)
            self._insert_blocks(cur, schedule_id, blocks)
            return schedule_id

    def update(
        self,
        schedule_id: int,
        *,
        work_date: Optional[date] = None,
        blocks: Optional[Sequence[ScheduleBlock]] = None,
        total_hours: Optional[float] = None,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT schedule_id FROM schedules WHERE schedule_id=%s", (int(schedule_id),))
            if not fetchone(cur):
                return False

            if work_date is not None:
                cur.execute("UPDATE schedules SET work_date=%s WHERE schedule_id=%s", (work_date, int(schedule_id)))
            if total_hours is not None:
                cur.execute("UPDATE schedules SET total_hours=%s WHERE schedule_id=%s", (total_hours, int(schedule_id)))
            if blocks is not None:
                cur.execute("DELETE FROM schedule_blocks WHERE schedule_id=%s", (int(schedule_id),))
                self._insert_blocks(cur, int(schedule_id), blocks)
            return True

    def delete(self, schedule_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM schedule_blocks WHERE schedule_id=%s", (int(schedule_id),))
            cur.execute("DELETE FROM schedules WHERE schedule_id=%s", (int(schedule_id),))
            return cur.rowcount > 0


class MySQLWeeklyScheduleRepository(WeeklyScheduleRepository):
    """Weekly templates stored as a JSON document per employee."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, employee_id: int) -> Optional[WeeklySchedule]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT employee_id, employee_name, template FROM weekly_schedules WHERE employee_id=%s",
                (int(employee_id),),
            )
            r = fetchone(cur)
            if not r:
                return None

            raw = json.loads(r["template"] or "{}")
            days = {
                int(k): WeeklyDay(
                    start_time=parse_hhmm(v["startTime"]),
                    end_time=parse_hhmm(v["endTime"]),
                    is_work_day=bool(v.get("isWorkDay", True)),
                )
                for k, v in raw.items()
            }
            return WeeklySchedule(employee_id=int(r["employee_id"]), employee_name=r["employee_name"], days=days)

    def save(self, weekly: WeeklySchedule) -> None:
        template = json.dumps(
            {
                str(k): {
                    "startTime": d.start_time.strftime("%H:%M"),
                    "endTime": d.end_time.strftime("%H:%M"),
                    "isWorkDay": d.is_work_day,
                }
                for k, d in sorted(weekly.days.items())
            }
        )
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO weekly_schedules(employee_id, employee_name, template)
                VALUES(%s,%s,%s)
                ON DUPLICATE KEY UPDATE employee_name=VALUES(employee_name), template=VALUES(template)
                """,
                (int(weekly.employee_id), weekly.employee_name, template),
            )
