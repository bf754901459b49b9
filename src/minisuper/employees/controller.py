from __future__ import annotations

from flask import Flask

from ..common.web import admin_required, json_errors, login_required, ok, own_employee_id, payload
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/employees", methods=["GET"], endpoint="list_employees")
    @json_errors
    @admin_required(container)
    def list_employees(ctx):
        return ok(container.employee_service.list_employees())

    @app.route("/api/employees", methods=["POST"], endpoint="create_employee")
    @json_errors
    @admin_required(container)
    def create_employee(ctx):
        body = payload()
        employee = container.employee_service.create(
            current_role=ctx.role,
            name=body.get("name", ""),
            email=body.get("email", ""),
            password=body.get("password", ""),
            role=body.get("role"),
            hire_date=body.get("hire_date"),
            hourly_rate=body.get("hourly_rate"),
            color=body.get("color"),
            status=body.get("status"),
        )
        return ok(employee, 201)

    @app.route("/api/employees/<int:employee_id>", methods=["GET"], endpoint="get_employee")
    @json_errors
    @login_required(container)
    def get_employee(ctx, employee_id: int):
        return ok(container.employee_service.get(own_employee_id(ctx, employee_id)))

    @app.route("/api/employees/<int:employee_id>", methods=["PATCH"], endpoint="update_employee")
    @json_errors
    @admin_required(container)
    def update_employee(ctx, employee_id: int):
        employee = container.employee_service.update(
            current_role=ctx.role,
            employee_id=employee_id,
            changes=payload(),
        )
        return ok(employee)

    @app.route("/api/employees/<int:employee_id>", methods=["DELETE"], endpoint="delete_employee")
    @json_errors
    @admin_required(container)
    def delete_employee(ctx, employee_id: int):
        container.employee_service.delete(current_role=ctx.role, employee_id=employee_id)
        return ok()

    @app.route("/api/employees/<int:employee_id>/vacation-balance", methods=["GET"], endpoint="vacation_balance")
    @json_errors
    @login_required(container)
    def vacation_balance(ctx, employee_id: int):
        balance = container.vacation_service.balance(own_employee_id(ctx, employee_id))
        return ok({"policy": container.vacation_service.policy.name, "balance": balance})
