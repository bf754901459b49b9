from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional

from ..core.enums import VacationStatus


@dataclass(frozen=True)
class VacationRequest:
    """Solicitud de vacaciones: rango de fechas, o un solo día con rango de horas."""

    vacation_id: int
    employee_id: int
    start_date: date
    end_date: date
    days: float
    status: VacationStatus
    requested_at: datetime
    reason: Optional[str] = None
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    reviewed_by: Optional[str] = None
    reviewed_at: Optional[datetime] = None
