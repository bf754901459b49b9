from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import List, Optional

from ..common.datetime_utils import today_local
from ..core.constants import RECENT_ITEMS_LIMIT
from ..core.enums import EmployeeStatus, VacationStatus
from ..core.exceptions import NotFoundError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..extras.repository import ExtraRepository
from ..schedules.model import Schedule
from ..schedules.repository import ScheduleRepository
from ..vacations.model import VacationRequest
from ..vacations.repository import VacationRepository
from ..vacations.service import VacationService
from .aggregator import HoursTotal, Period, aggregate_extras, aggregate_schedules, current_month, current_week, grand_total


@dataclass(frozen=True)
class EmployeeStats:
    employee: Employee
    total_vacation_days: int
    used_vacation_days: float
    available_vacation_days: float
    pending_vacations: int
    weekly_hours: float
    monthly_hours: float
    monthly_extra_hours: float
    monthly_extra_amount: float
    estimated_monthly_pay: float
    recent_vacations: List[VacationRequest]
    recent_schedules: List[Schedule]


@dataclass(frozen=True)
class EmployeeRow:
    employee_id: int
    name: str
    color: str
    weekly_hours: float
    weekly_amount: float
    monthly_extra_hours: float
    monthly_extra_amount: float


@dataclass(frozen=True)
class AdminSummary:
    week: Period
    month: Period
    total_employees: int
    active_employees: int
    pending_vacations: int
    weekly_hours: float
    weekly_amount: float
    monthly_extra_hours: float
    monthly_extra_amount: float
    employees: List[EmployeeRow]


class DashboardService:
    def __init__(
        self,
        employees: EmployeeRepository,
        schedules: ScheduleRepository,
        vacations: VacationRepository,
        extras: ExtraRepository,
        vacation_service: VacationService,
    ):
        self._employees = employees
        self._schedules = schedules
        self._vacations = vacations
        self._extras = extras
        self._vacation_service = vacation_service

    def admin_summary(self, *, today: Optional[date] = None) -> AdminSummary:
        today = today or today_local()
        week = current_week(today)
        month = current_month(today)

        employees = list(self._employees.list_all())
        rates = {e.employee_id: e.hourly_rate for e in employees}
        week_totals = aggregate_schedules(
            self._schedules.list_range(start=week.start, end=week.end), week, rates=rates
        )
        week_sum = grand_total(week_totals)
        extra_totals = aggregate_extras(self._extras.list_range(start=month.start, end=month.end), month)
        extra_sum = grand_total(extra_totals)

        rows = []
        for e in employees:
            w = week_totals.get(e.employee_id, HoursTotal())
            x = extra_totals.get(e.employee_id, HoursTotal())
            rows.append(
                EmployeeRow(
                    employee_id=e.employee_id,
                    name=e.name,
                    color=e.color,
                    weekly_hours=w.hours,
                    weekly_amount=w.amount,
                    monthly_extra_hours=x.hours,
                    monthly_extra_amount=x.amount,
                )
            )

        return AdminSummary(
            week=week,
            month=month,
            total_employees=len(employees),
            active_employees=sum(1 for e in employees if e.status == EmployeeStatus.ACTIVE),
            pending_vacations=len(self._vacations.list_all(status=VacationStatus.PENDING)),
            weekly_hours=week_sum.hours,
            weekly_amount=week_sum.amount,
            monthly_extra_hours=extra_sum.hours,
            monthly_extra_amount=extra_sum.amount,
            employees=rows,
        )

    def employee_stats(self, employee_id: int, *, today: Optional[date] = None) -> EmployeeStats:
        today = today or today_local()
        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise NotFoundError("Empleado no encontrado")

        week = current_week(today)
        month = current_month(today)
        balance = self._vacation_service.balance(employee.employee_id, today=today)

        vacations = list(self._vacations.list_by_employee(employee.employee_id))
        schedules = list(self._schedules.list_by_employee(employee.employee_id))
        extras = self._extras.list_by_employee(employee.employee_id)

        weekly = aggregate_schedules(schedules, week).get(employee.employee_id, HoursTotal())
        monthly = aggregate_schedules(schedules, month).get(employee.employee_id, HoursTotal())
        monthly_extras = aggregate_extras(extras, month).get(employee.employee_id, HoursTotal())

        return EmployeeStats(
            employee=employee,
            total_vacation_days=balance.total,
            used_vacation_days=balance.used,
            available_vacation_days=balance.available,
            pending_vacations=sum(1 for v in vacations if v.status == VacationStatus.PENDING),
            weekly_hours=weekly.hours,
            monthly_hours=monthly.hours,
            monthly_extra_hours=monthly_extras.hours,
            monthly_extra_amount=monthly_extras.amount,
            estimated_monthly_pay=round(monthly.hours * employee.hourly_rate + monthly_extras.amount, 2),
            recent_vacations=vacations[:RECENT_ITEMS_LIMIT],
            recent_schedules=schedules[:RECENT_ITEMS_LIMIT],
        )
