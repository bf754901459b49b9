from __future__ import annotations

from datetime import date, datetime, time

import pytest

from minisuper.core.enums import Role, VacationStatus
from minisuper.core.exceptions import AuthorizationError, ValidationError
from minisuper.vacations.service import requested_days

NOW = datetime(2025, 1, 20, 9, 0, 0)


def _request(container, employee, **kwargs):
    params = dict(
        current_role=Role.EMPLOYEE,
        current_employee_id=employee.employee_id,
        start_date="2025-02-03",
        end_date="2025-02-05",
        reason="Viaje",
        now=NOW,
    )
    params.update(kwargs)
    return container.vacation_service.request(**params)


def test_requested_days_counts_inclusive_span_or_hours():
    assert requested_days(date(2025, 2, 3), date(2025, 2, 5)) == 3
    assert requested_days(date(2025, 2, 3), date(2025, 2, 3), time(9, 0), time(13, 0)) == 0.5

    with pytest.raises(ValidationError):
        requested_days(date(2025, 2, 5), date(2025, 2, 3))
    with pytest.raises(ValidationError):
        requested_days(date(2025, 2, 3), date(2025, 2, 4), time(9, 0), time(13, 0))


def test_request_starts_pending(container, make_employee):
    emp = make_employee()

    vac = _request(container, emp)

    assert vac.status == VacationStatus.PENDING
    assert vac.days == 3
    assert vac.requested_at == NOW


def test_approve_then_reject_is_refused(container, make_employee):
    emp = make_employee()
    vac = _request(container, emp)

    approved = container.vacation_service.approve(
        current_role=Role.ADMIN, reviewer="admin@super.com", vacation_id=vac.vacation_id, now=NOW
    )
    assert approved.status == VacationStatus.APPROVED
    assert approved.reviewed_by == "admin@super.com"
    assert approved.reviewed_at == NOW

    with pytest.raises(ValidationError):
        container.vacation_service.reject(
            current_role=Role.ADMIN, reviewer="admin@super.com", vacation_id=vac.vacation_id
        )
    with pytest.raises(ValidationError):
        container.vacation_service.approve(
            current_role=Role.ADMIN, reviewer="admin@super.com", vacation_id=vac.vacation_id
        )


def test_rejected_request_stays_rejected(container, make_employee):
    emp = make_employee()
    vac = _request(container, emp)

    rejected = container.vacation_service.reject(
        current_role=Role.ADMIN, reviewer="admin@super.com", vacation_id=vac.vacation_id
    )
    assert rejected.status == VacationStatus.REJECTED

    with pytest.raises(ValidationError):
        container.vacation_service.approve(
            current_role=Role.ADMIN, reviewer="admin@super.com", vacation_id=vac.vacation_id
        )


def test_only_admin_can_decide(container, make_employee):
    emp = make_employee()
    vac = _request(container, emp)

    with pytest.raises(AuthorizationError):
        container.vacation_service.approve(current_role=Role.EMPLOYEE, reviewer="x", vacation_id=vac.vacation_id)


def test_approved_days_reduce_balance(container, make_employee):
    emp = make_employee(hire_date=date(2024, 1, 15))
    vac = _request(container, emp)
    container.vacation_service.approve(current_role=Role.ADMIN, reviewer="admin", vacation_id=vac.vacation_id)

    balance = container.vacation_service.balance(emp.employee_id, today=date(2025, 1, 15))

    assert (balance.total, balance.used, balance.available) == (15, 3, 12)


def test_pending_and_rejected_do_not_count_as_used(container, make_employee):
    emp = make_employee()
    first = _request(container, emp)
    _request(container, emp, start_date="2025-03-03", end_date="2025-03-03")
    container.vacation_service.reject(current_role=Role.ADMIN, reviewer="admin", vacation_id=first.vacation_id)

    balance = container.vacation_service.balance(emp.employee_id, today=date(2025, 1, 15))

    assert balance.used == 0


def test_request_exceeding_balance_is_refused(container, make_employee):
    emp = make_employee(hire_date=date(2024, 11, 1), today=date(2025, 1, 15))

    # Two whole months -> 2 days available.
    with pytest.raises(ValidationError) as exc:
        _request(container, emp)
    assert "Disponibles: 2" in str(exc.value)


def test_editing_a_request_beyond_balance_is_refused(container, make_employee):
    emp = make_employee(hire_date=date(2024, 11, 1), today=date(2025, 1, 15))
    vac = _request(container, emp, start_date="2025-02-03", end_date="2025-02-03")

    with pytest.raises(ValidationError):
        container.vacation_service.update(
            current_role=Role.EMPLOYEE,
            current_employee_id=emp.employee_id,
            vacation_id=vac.vacation_id,
            changes={"end_date": "2025-03-31"},
            today=NOW.date(),
        )
    assert container.vacation_service.get(vac.vacation_id).days == 1


def test_approval_cannot_exceed_balance(container, make_employee):
    emp = make_employee(hire_date=date(2024, 1, 15))
    first = _request(container, emp, start_date="2025-02-03", end_date="2025-02-12")
    second = _request(container, emp, start_date="2025-03-03", end_date="2025-03-12")
    container.vacation_service.approve(
        current_role=Role.ADMIN, reviewer="admin", vacation_id=first.vacation_id, now=NOW
    )

    with pytest.raises(ValidationError):
        container.vacation_service.approve(
            current_role=Role.ADMIN, reviewer="admin", vacation_id=second.vacation_id, now=NOW
        )

    balance = container.vacation_service.balance(emp.employee_id, today=NOW.date())
    assert (balance.total, balance.used, balance.available) == (15, 10, 5)
    assert container.vacation_service.get(second.vacation_id).status == VacationStatus.PENDING


def test_employee_cannot_request_for_someone_else(container, make_employee):
    ana = make_employee()
    luis = make_employee(name="Luis", email="luis@super.com")

    with pytest.raises(AuthorizationError):
        _request(container, ana, employee_id=luis.employee_id)


def test_admin_must_name_the_employee(container, make_employee):
    make_employee()

    with pytest.raises(ValidationError):
        container.vacation_service.request(
            current_role=Role.ADMIN,
            current_employee_id=None,
            start_date="2025-02-03",
            end_date="2025-02-03",
            now=NOW,
        )


def test_only_pending_requests_can_be_edited(container, make_employee):
    emp = make_employee()
    vac = _request(container, emp)

    updated = container.vacation_service.update(
        current_role=Role.EMPLOYEE,
        current_employee_id=emp.employee_id,
        vacation_id=vac.vacation_id,
        changes={"end_date": "2025-02-06"},
    )
    assert updated.days == 4

    container.vacation_service.approve(current_role=Role.ADMIN, reviewer="admin", vacation_id=vac.vacation_id)
    with pytest.raises(ValidationError):
        container.vacation_service.update(
            current_role=Role.EMPLOYEE,
            current_employee_id=emp.employee_id,
            vacation_id=vac.vacation_id,
            changes={"reason": "otro"},
        )


def test_list_range_uses_overlap(container, make_employee):
    emp = make_employee()
    _request(container, emp, start_date="2025-02-03", end_date="2025-02-05")
    _request(container, emp, start_date="2025-03-10", end_date="2025-03-10")

    found = container.vacation_service.list_range(start=date(2025, 2, 5), end=date(2025, 2, 28))

    assert [v.start_date for v in found] == [date(2025, 2, 3)]
