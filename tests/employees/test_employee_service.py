from __future__ import annotations

from datetime import date

import pytest

from minisuper.core.enums import EmployeeRole, EmployeeStatus, Role
from minisuper.core.exceptions import AuthorizationError, IdentityError, NotFoundError, ValidationError


def test_create_links_login_account_and_user(container, make_employee):
    emp = make_employee()

    assert emp.user_id
    assert emp.status == EmployeeStatus.ACTIVE
    assert emp.hourly_rate == 2500
    assert emp.color == "#3B82F6"

    user = container.users_repo.get_by_id(emp.user_id)
    assert user.role == Role.EMPLOYEE
    assert user.email == "ana@super.com"
    assert container.employee_service.get_by_user_id(emp.user_id) == emp


def test_reinforcement_default_rate(make_employee):
    emp = make_employee(name="Beto", email="beto@super.com", role=EmployeeRole.REINFORCEMENT)

    assert emp.hourly_rate == 2000


def test_hire_date_cannot_be_in_the_future(make_employee):
    with pytest.raises(ValidationError):
        make_employee(hire_date=date(2025, 2, 1), today=date(2025, 1, 15))


def test_password_needs_six_characters(container):
    with pytest.raises(ValidationError):
        container.employee_service.create(
            current_role=Role.ADMIN,
            name="Ana",
            email="ana@super.com",
            password="123",
            role="permanent",
            hire_date="2024-01-01",
        )


def test_duplicate_email_is_refused(container, make_employee):
    make_employee()

    with pytest.raises(ValidationError):
        make_employee(name="Otra Ana")


def test_existing_login_account_surfaces_identity_error(container, make_employee):
    container.identity.create_account("eva@super.com", "secreto123")

    with pytest.raises(IdentityError):
        make_employee(name="Eva", email="eva@super.com")


def test_only_admin_manages_employees(container):
    with pytest.raises(AuthorizationError):
        container.employee_service.create(
            current_role=Role.EMPLOYEE,
            name="Ana",
            email="ana@super.com",
            password="secreto123",
            role="permanent",
            hire_date="2024-01-01",
        )


def test_update_changes_only_given_fields(container, make_employee):
    emp = make_employee()

    updated = container.employee_service.update(
        current_role=Role.ADMIN,
        employee_id=emp.employee_id,
        changes={"status": "inactive", "color": "#10B981"},
    )

    assert updated.status == EmployeeStatus.INACTIVE
    assert updated.color == "#10B981"
    assert updated.name == emp.name

    with pytest.raises(ValidationError):
        container.employee_service.update(
            current_role=Role.ADMIN, employee_id=emp.employee_id, changes={"user_id": "x"}
        )


def test_delete_removes_employee_from_list(container, make_employee):
    ana = make_employee()
    beto = make_employee(name="Beto", email="beto@super.com")

    container.employee_service.delete(current_role=Role.ADMIN, employee_id=ana.employee_id)

    assert [e.employee_id for e in container.employee_service.list_employees()] == [beto.employee_id]
    assert container.users_repo.get_by_id(ana.user_id) is None
    with pytest.raises(NotFoundError):
        container.employee_service.get(ana.employee_id)


def test_deleted_employee_email_can_be_reused(container, make_employee):
    ana = make_employee()
    container.employee_service.delete(current_role=Role.ADMIN, employee_id=ana.employee_id)

    with pytest.raises(IdentityError):
        container.make_session_resolver().sign_in("ana@super.com", "secreto123")

    again = make_employee()
    assert again.user_id != ana.user_id
    assert container.make_session_resolver().sign_in("ana@super.com", "secreto123").employee_id == again.employee_id


def test_email_change_moves_the_login(container, make_employee):
    emp = make_employee()

    container.employee_service.update(
        current_role=Role.ADMIN,
        employee_id=emp.employee_id,
        changes={"email": "ana.perez@super.com", "name": "Ana P."},
    )

    assert container.users_repo.get_by_id(emp.user_id).email == "ana.perez@super.com"
    assert container.users_repo.get_by_id(emp.user_id).name == "Ana P."
    ctx = container.make_session_resolver().sign_in("ana.perez@super.com", "secreto123")
    assert ctx.employee_id == emp.employee_id
    with pytest.raises(IdentityError):
        container.make_session_resolver().sign_in("ana@super.com", "secreto123")


def test_email_taken_by_another_login_leaves_employee_unchanged(container, make_employee):
    emp = make_employee()
    container.identity.create_account("jefa@super.com", "secreto123")

    with pytest.raises(IdentityError):
        container.employee_service.update(
            current_role=Role.ADMIN, employee_id=emp.employee_id, changes={"email": "jefa@super.com"}
        )

    assert container.employee_service.get(emp.employee_id).email == "ana@super.com"
