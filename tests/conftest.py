from __future__ import annotations

import uuid
from dataclasses import replace
from datetime import date

import pytest

from minisuper.container import build_services
from minisuper.core.enums import EmployeeRole, Role, VacationStatus
from minisuper.core.exceptions import IdentityError
from minisuper.employees.model import Employee
from minisuper.extras.model import ExtraHours
from minisuper.schedules.model import Schedule
from minisuper.users.identity import EMAIL_IN_USE, USER_NOT_FOUND, WRONG_PASSWORD, Subject
from minisuper.users.model import AppUser
from minisuper.vacations.model import VacationRequest


class FakeIdentity:
    def __init__(self):
        self.accounts: dict[str, tuple[str, str]] = {}  # email -> (uid, password)
        self.signed_out: list[str] = []

    def create_account(self, email, password):
        email = email.strip().lower()
        if email in self.accounts:
            raise IdentityError(EMAIL_IN_USE)
        uid = uuid.uuid4().hex
        self.accounts[email] = (uid, password)
        return Subject(uid=uid, email=email)

    def sign_in(self, email, password):
        email = (email or "").strip().lower()
        if email not in self.accounts:
            raise IdentityError(USER_NOT_FOUND)
        uid, stored = self.accounts[email]
        if stored != password:
            raise IdentityError(WRONG_PASSWORD)
        return Subject(uid=uid, email=email)

    def sign_out(self, uid):
        self.signed_out.append(uid)

    def _email_of(self, uid):
        return next(email for email, (known, _) in self.accounts.items() if known == uid)

    def update_email(self, uid, email):
        email = email.strip().lower()
        if email in self.accounts:
            raise IdentityError(EMAIL_IN_USE)
        self.accounts[email] = self.accounts.pop(self._email_of(uid))

    def delete_account(self, uid):
        del self.accounts[self._email_of(uid)]


class InMemoryUsers:
    def __init__(self):
        self.rows: dict[str, AppUser] = {}

    def get_by_id(self, user_id):
        return self.rows.get(user_id)

    def create(self, *, user_id, email, name, role):
        self.rows[user_id] = AppUser(user_id=user_id, email=email, name=name, role=role)
        return user_id

    def update(self, user_id, *, email=None, name=None):
        if user_id not in self.rows:
            return False
        changes = {k: v for k, v in (("email", email), ("name", name)) if v is not None}
        self.rows[user_id] = replace(self.rows[user_id], **changes)
        return True

    def delete_by_id(self, user_id):
        return self.rows.pop(user_id, None) is not None


class InMemoryEmployees:
    def __init__(self):
        self._next_id = 1
        self.rows: dict[int, Employee] = {}

    def list_all(self):
        return sorted(self.rows.values(), key=lambda e: e.name)

    def get_by_id(self, employee_id):
        return self.rows.get(int(employee_id))

    def get_by_email(self, email):
        return next((e for e in self.rows.values() if e.email == email), None)

    def get_by_user_id(self, user_id):
        return next((e for e in self.rows.values() if e.user_id == user_id), None)

    def create(self, *, name, email, role, hourly_rate, status, hire_date, color, user_id):
        eid = self._next_id
        self._next_id += 1
        self.rows[eid] = Employee(
            employee_id=eid,
            name=name,
            email=email,
            role=role,
            hourly_rate=hourly_rate,
            status=status,
            hire_date=hire_date,
            color=color,
            user_id=user_id,
        )
        return eid

    def update(self, employee_id, changes):
        if int(employee_id) not in self.rows:
            return False
        self.rows[int(employee_id)] = replace(self.rows[int(employee_id)], **changes)
        return True

    def delete_by_id(self, employee_id):
        return self.rows.pop(int(employee_id), None) is not None


class InMemorySchedules:
    def __init__(self):
        self._next_id = 1
        self.rows: dict[int, Schedule] = {}

    def list_all(self):
        return sorted(self.rows.values(), key=lambda s: s.work_date, reverse=True)

    def get_by_id(self, schedule_id):
        return self.rows.get(int(schedule_id))

    def list_by_employee(self, employee_id):
        return [s for s in self.list_all() if s.employee_id == int(employee_id)]

    def list_range(self, *, start, end, employee_id=None):
        out = [
            s
            for s in self.rows.values()
            if start <= s.work_date <= end and (employee_id is None or s.employee_id == employee_id)
        ]
        return sorted(out, key=lambda s: s.work_date)

    def create(self, *, employee_id, work_date, blocks, total_hours):
        sid = self._next_id
        self._next_id += 1
        self.rows[sid] = Schedule(
            schedule_id=sid,
            employee_id=employee_id,
            work_date=work_date,
            blocks=tuple(blocks),
            total_hours=total_hours,
        )
        return sid

    def update(self, schedule_id, *, work_date=None, blocks=None, total_hours=None):
        current = self.rows.get(int(schedule_id))
        if not current:
            return False
        changes = {}
        if work_date is not None:
            changes["work_date"] = work_date
        if blocks is not None:
            changes["blocks"] = tuple(blocks)
            changes["total_hours"] = total_hours
        self.rows[int(schedule_id)] = replace(current, **changes)
        return True

    def delete(self, schedule_id):
        return self.rows.pop(int(schedule_id), None) is not None


class InMemoryWeekly:
    def __init__(self):
        self.rows = {}

    def get(self, employee_id):
        return self.rows.get(int(employee_id))

    def save(self, weekly):
        self.rows[weekly.employee_id] = weekly


class InMemoryVacations:
    def __init__(self):
        self._next_id = 1
        self.rows: dict[int, VacationRequest] = {}

    def list_all(self, *, status=None):
        out = [v for v in self.rows.values() if status is None or v.status == status]
        return sorted(out, key=lambda v: v.requested_at, reverse=True)

    def get_by_id(self, vacation_id):
        return self.rows.get(int(vacation_id))

    def list_by_employee(self, employee_id):
        return [v for v in self.list_all() if v.employee_id == int(employee_id)]

    def list_range(self, *, start, end, employee_id=None):
        out = [
            v
            for v in self.rows.values()
            if v.start_date <= end and v.end_date >= start and (employee_id is None or v.employee_id == employee_id)
        ]
        return sorted(out, key=lambda v: v.start_date)

    def create(self, *, employee_id, start_date, end_date, days, reason, requested_at, start_time=None, end_time=None):
        vid = self._next_id
        self._next_id += 1
        self.rows[vid] = VacationRequest(
            vacation_id=vid,
            employee_id=employee_id,
            start_date=start_date,
            end_date=end_date,
            days=days,
            status=VacationStatus.PENDING,
            requested_at=requested_at,
            reason=reason,
            start_time=start_time,
            end_time=end_time,
        )
        return vid

    def update(self, vacation_id, changes):
        if int(vacation_id) not in self.rows:
            return False
        self.rows[int(vacation_id)] = replace(self.rows[int(vacation_id)], **changes)
        return True

    def decide(self, *, vacation_id, status, reviewed_by, reviewed_at):
        current = self.rows.get(int(vacation_id))
        if not current or current.status != VacationStatus.PENDING:
            return False
        self.rows[int(vacation_id)] = replace(current, status=status, reviewed_by=reviewed_by, reviewed_at=reviewed_at)
        return True

    def delete(self, vacation_id):
        return self.rows.pop(int(vacation_id), None) is not None


class InMemoryExtras:
    def __init__(self):
        self._next_id = 1
        self.rows: dict[int, ExtraHours] = {}

    def list_all(self):
        return sorted(self.rows.values(), key=lambda e: e.work_date, reverse=True)

    def get_by_id(self, extra_id):
        return self.rows.get(int(extra_id))

    def list_by_employee(self, employee_id):
        return [e for e in self.list_all() if e.employee_id == int(employee_id)]

    def list_range(self, *, start, end, employee_id=None):
        out = [
            e
            for e in self.rows.values()
            if start <= e.work_date <= end and (employee_id is None or e.employee_id == employee_id)
        ]
        return sorted(out, key=lambda e: e.work_date)

    def create(self, *, employee_id, work_date, hours, amount, description=None):
        xid = self._next_id
        self._next_id += 1
        self.rows[xid] = ExtraHours(
            extra_id=xid,
            employee_id=employee_id,
            work_date=work_date,
            hours=hours,
            amount=amount,
            description=description,
        )
        return xid

    def update(self, extra_id, changes):
        if int(extra_id) not in self.rows:
            return False
        self.rows[int(extra_id)] = replace(self.rows[int(extra_id)], **changes)
        return True

    def delete(self, extra_id):
        return self.rows.pop(int(extra_id), None) is not None


@pytest.fixture
def container():
    return build_services(
        identity=FakeIdentity(),
        users_repo=InMemoryUsers(),
        employees_repo=InMemoryEmployees(),
        schedules_repo=InMemorySchedules(),
        weekly_repo=InMemoryWeekly(),
        vacations_repo=InMemoryVacations(),
        extras_repo=InMemoryExtras(),
        vacation_policy="monthly",
    )


@pytest.fixture
def make_employee(container):
    """Create an employee with a login account through the service."""

    def _make(
        name="Ana Pérez",
        email="ana@super.com",
        role=EmployeeRole.PERMANENT,
        hire_date=date(2024, 1, 15),
        today=date(2025, 1, 15),
        **kwargs,
    ):
        return container.employee_service.create(
            current_role=Role.ADMIN,
            name=name,
            email=email,
            password="secreto123",
            role=role.value,
            hire_date=hire_date,
            today=today,
            **kwargs,
        )

    return _make
