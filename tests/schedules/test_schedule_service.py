from __future__ import annotations

from datetime import date, time

import pytest

from minisuper.core.enums import Role
from minisuper.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from minisuper.schedules.service import parse_blocks


def test_blocks_are_sorted_and_validated():
    blocks = parse_blocks(
        [
            {"start_time": "14:00", "end_time": "18:00"},
            {"start_time": "08:00", "end_time": "12:00"},
        ]
    )

    assert [b.start_time for b in blocks] == [time(8, 0), time(14, 0)]


@pytest.mark.parametrize(
    "raw",
    [
        [],
        [{"start_time": "10:00", "end_time": "09:00"}],
        [{"start_time": "10:00", "end_time": "10:00"}],
        [{"start_time": "08:00", "end_time": "12:00"}, {"start_time": "11:00", "end_time": "13:00"}],
        [{"start_time": "08:00", "end_time": "12:00", "kind": "lunch"}],
        [{"start_time": "8am", "end_time": "12:00"}],
    ],
)
def test_invalid_blocks_are_rejected(raw):
    with pytest.raises(ValidationError):
        parse_blocks(raw)


def test_create_sums_work_blocks(container, make_employee):
    emp = make_employee()

    schedule = container.schedule_service.create(
        current_role=Role.ADMIN,
        employee_id=emp.employee_id,
        work_date="2025-01-14",
        blocks=[
            {"start_time": "09:00", "end_time": "13:00"},
            {"start_time": "13:00", "end_time": "13:30", "kind": "break"},
            {"start_time": "13:30", "end_time": "17:00"},
        ],
    )

    assert schedule.total_hours == 7.5
    assert len(schedule.blocks) == 3


def test_create_requires_existing_employee(container):
    with pytest.raises(NotFoundError):
        container.schedule_service.create(
            current_role=Role.ADMIN,
            employee_id=99,
            work_date="2025-01-14",
            blocks=[{"start_time": "09:00", "end_time": "17:00"}],
        )


def test_employees_cannot_edit_schedules(container, make_employee):
    emp = make_employee()

    with pytest.raises(AuthorizationError):
        container.schedule_service.create(
            current_role=Role.EMPLOYEE,
            employee_id=emp.employee_id,
            work_date="2025-01-14",
            blocks=[{"start_time": "09:00", "end_time": "17:00"}],
        )


def test_update_recomputes_total_and_delete_removes(container, make_employee):
    emp = make_employee()
    schedule = container.schedule_service.create(
        current_role=Role.ADMIN,
        employee_id=emp.employee_id,
        work_date="2025-01-14",
        blocks=[{"start_time": "09:00", "end_time": "17:00"}],
    )

    updated = container.schedule_service.update(
        current_role=Role.ADMIN,
        schedule_id=schedule.schedule_id,
        changes={"blocks": [{"start_time": "09:00", "end_time": "12:00"}]},
    )
    assert updated.total_hours == 3
    assert updated.work_date == date(2025, 1, 14)

    container.schedule_service.delete(current_role=Role.ADMIN, schedule_id=schedule.schedule_id)
    assert container.schedule_service.list_schedules() == []


def test_list_by_range_is_inclusive_and_ascending(container, make_employee):
    emp = make_employee()
    for day in ("2025-01-20", "2025-01-13", "2025-01-12", "2025-01-19"):
        container.schedule_service.create(
            current_role=Role.ADMIN,
            employee_id=emp.employee_id,
            work_date=day,
            blocks=[{"start_time": "09:00", "end_time": "17:00"}],
        )

    found = container.schedule_service.list_schedules(start=date(2025, 1, 13), end=date(2025, 1, 19))

    assert [s.work_date for s in found] == [date(2025, 1, 13), date(2025, 1, 19)]


def test_weekly_template_defaults_and_save(container, make_employee):
    emp = make_employee()

    weekly = container.schedule_service.get_weekly(emp.employee_id)
    assert weekly.days[0].is_work_day is False
    assert weekly.weekly_hours == 48

    saved = container.schedule_service.save_weekly(
        current_role=Role.ADMIN,
        employee_id=emp.employee_id,
        days={"6": {"start_time": "09:00", "end_time": "13:00", "is_work_day": True}},
    )
    assert saved.weekly_hours == 44
    assert container.schedule_service.get_weekly(emp.employee_id) == saved


def test_weekly_work_day_flag_must_be_boolean(container, make_employee):
    emp = make_employee()

    with pytest.raises(ValidationError):
        container.schedule_service.save_weekly(
            current_role=Role.ADMIN,
            employee_id=emp.employee_id,
            days={"1": {"start_time": "09:00", "end_time": "17:00", "is_work_day": "false"}},
        )

    off = container.schedule_service.save_weekly(
        current_role=Role.ADMIN,
        employee_id=emp.employee_id,
        days={"1": {"start_time": "09:00", "end_time": "17:00", "is_work_day": False}},
    )
    assert off.days[1].is_work_day is False
    assert off.weekly_hours == 40
