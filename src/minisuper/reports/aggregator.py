"""Hours aggregation over schedule and extra-hours records.

Periods are inclusive on both ends and use plain local dates.
"""
from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Dict, Iterable, Mapping, Optional

from ..extras.model import ExtraHours
from ..schedules.model import Schedule


@dataclass(frozen=True)
class Period:
    start: date
    end: date

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end


def current_week(today: date) -> Period:
    """Monday to Sunday of the week containing today."""
    start = today - timedelta(days=today.weekday())
    return Period(start=start, end=start + timedelta(days=6))


def current_month(today: date) -> Period:
    last_day = calendar.monthrange(today.year, today.month)[1]
    return Period(start=today.replace(day=1), end=today.replace(day=last_day))


@dataclass
class HoursTotal:
    hours: float = 0.0
    amount: float = 0.0
    records: int = 0

    def add(self, hours: float, amount: float) -> None:
        self.hours = round(self.hours + hours, 2)
        self.amount = round(self.amount + amount, 2)
        self.records += 1


def aggregate_schedules(
    schedules: Iterable[Schedule],
    period: Period,
    *,
    rates: Optional[Mapping[int, float]] = None,
) -> Dict[int, HoursTotal]:
    """Scheduled hours per employee; pay uses the current rate when rates are given."""

    totals: Dict[int, HoursTotal] = {}
    for s in schedules:
        if not period.contains(s.work_date):
            continue
        rate = float(rates.get(s.employee_id, 0)) if rates else 0.0
        totals.setdefault(s.employee_id, HoursTotal()).add(s.total_hours, s.total_hours * rate)
    return totals


def aggregate_extras(extras: Iterable[ExtraHours], period: Period) -> Dict[int, HoursTotal]:
    """Extra hours per employee; pay is the amount stored on each record."""

    totals: Dict[int, HoursTotal] = {}
    for e in extras:
        if not period.contains(e.work_date):
            continue
        totals.setdefault(e.employee_id, HoursTotal()).add(e.hours, e.amount)
    return totals


def grand_total(totals: Mapping[int, HoursTotal]) -> HoursTotal:
    out = HoursTotal()
    for t in totals.values():
        out.hours = round(out.hours + t.hours, 2)
        out.amount = round(out.amount + t.amount, 2)
        out.records += t.records
    return out
