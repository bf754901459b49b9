from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, time
from typing import Dict, Iterable

from ..common.datetime_utils import hours_between
from ..core.enums import BlockKind


@dataclass(frozen=True)
class ScheduleBlock:
    start_time: time
    end_time: time
    kind: BlockKind = BlockKind.WORK

    @property
    def hours(self) -> float:
        return hours_between(self.start_time, self.end_time)


@dataclass(frozen=True)
class Schedule:
    """Entidad de dominio: horario de un empleado para una fecha."""

    schedule_id: int
    employee_id: int
    work_date: date
    blocks: tuple[ScheduleBlock, ...] = ()
    total_hours: float = 0.0


def total_work_hours(blocks: Iterable[ScheduleBlock]) -> float:
    """Sum of work-block durations; breaks are not paid time."""

    return round(sum(b.hours for b in blocks if b.kind == BlockKind.WORK), 2)


@dataclass(frozen=True)
class WeeklyDay:
    start_time: time
    end_time: time
    is_work_day: bool = True


@dataclass(frozen=True)
class WeeklySchedule:
    """Plantilla semanal; llaves 0=domingo … 6=sábado."""

    employee_id: int
    employee_name: str
    days: Dict[int, WeeklyDay] = field(default_factory=dict)

    @property
    def weekly_hours(self) -> float:
        return round(
            sum(hours_between(d.start_time, d.end_time) for d in self.days.values() if d.is_work_day),
            2,
        )
