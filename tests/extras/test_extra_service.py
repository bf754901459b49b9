from __future__ import annotations

import pytest

from minisuper.core.enums import EmployeeRole, Role
from minisuper.core.exceptions import AuthorizationError, ValidationError
from minisuper.extras.model import extra_pay


def test_amount_is_hours_times_rate(container, make_employee):
    emp = make_employee()  # permanent, default 2500

    extra = container.extra_service.create(
        current_role=Role.ADMIN, employee_id=emp.employee_id, work_date="2025-01-10", hours=2.5
    )

    assert extra.amount == 6250
    assert extra.approved is False
    assert extra_pay(2.5, 2500) == 6250


def test_reinforcement_employees_cannot_log_extras(container, make_employee):
    emp = make_employee(name="Beto", email="beto@super.com", role=EmployeeRole.REINFORCEMENT)

    with pytest.raises(ValidationError):
        container.extra_service.create(
            current_role=Role.ADMIN, employee_id=emp.employee_id, work_date="2025-01-10", hours=2
        )


def test_hours_must_be_positive(container, make_employee):
    emp = make_employee()

    with pytest.raises(ValidationError):
        container.extra_service.create(
            current_role=Role.ADMIN, employee_id=emp.employee_id, work_date="2025-01-10", hours=0
        )


def test_only_admin_creates_extras(container, make_employee):
    emp = make_employee()

    with pytest.raises(AuthorizationError):
        container.extra_service.create(
            current_role=Role.EMPLOYEE, employee_id=emp.employee_id, work_date="2025-01-10", hours=1
        )


def test_rate_change_does_not_touch_existing_amount(container, make_employee):
    emp = make_employee()
    extra = container.extra_service.create(
        current_role=Role.ADMIN, employee_id=emp.employee_id, work_date="2025-01-10", hours=2
    )
    container.employee_service.update(
        current_role=Role.ADMIN, employee_id=emp.employee_id, changes={"hourly_rate": 4000}
    )

    assert container.extra_service.get(extra.extra_id).amount == 5000

    updated = container.extra_service.update(
        current_role=Role.ADMIN, extra_id=extra.extra_id, changes={"hours": 3}
    )
    assert updated.amount == 7500


def test_approve_and_delete(container, make_employee):
    emp = make_employee()
    extra = container.extra_service.create(
        current_role=Role.ADMIN, employee_id=emp.employee_id, work_date="2025-01-10", hours=1
    )

    assert container.extra_service.approve(current_role=Role.ADMIN, extra_id=extra.extra_id).approved is True

    container.extra_service.delete(current_role=Role.ADMIN, extra_id=extra.extra_id)
    assert container.extra_service.list_extras() == []


def test_hours_are_rounded_before_pricing(container, make_employee):
    emp = make_employee()

    extra = container.extra_service.create(
        current_role=Role.ADMIN, employee_id=emp.employee_id, work_date="2025-01-10", hours=1.333
    )
    assert extra.hours == 1.33
    assert extra.amount == 3325

    updated = container.extra_service.update(
        current_role=Role.ADMIN, extra_id=extra.extra_id, changes={"hours": 2}
    )
    assert updated.amount == 5000
