from __future__ import annotations

from flask import Flask, request

from ..common.web import admin_required, json_errors, login_required, ok, own_employee_id, payload, query_date, query_int
from ..container import Container
from ..core.enums import VacationStatus
from ..core.exceptions import ValidationError


def _status_filter():
    raw = request.args.get("status")
    if not raw:
        return None
    try:
        return VacationStatus(raw)
    except ValueError:
        raise ValidationError("Estado inválido")


def register(app: Flask, container: Container) -> None:
    service = container.vacation_service

    @app.route("/api/vacations", methods=["GET"], endpoint="list_vacations")
    @json_errors
    @login_required(container)
    def list_vacations(ctx):
        employee_id = own_employee_id(ctx, query_int("employee_id"))
        start, end = query_date("start"), query_date("end")
        if start and end:
            return ok(service.list_range(start=start, end=end, employee_id=employee_id))
        if employee_id is not None:
            return ok(service.list_for_employee(employee_id))
        return ok(service.list_vacations(status=_status_filter()))

    @app.route("/api/vacations", methods=["POST"], endpoint="request_vacation")
    @json_errors
    @login_required(container)
    def request_vacation(ctx):
        body = payload()
        vacation = service.request(
            current_role=ctx.role,
            current_employee_id=ctx.employee_id,
            employee_id=body.get("employee_id"),
            start_date=body.get("start_date"),
            end_date=body.get("end_date"),
            start_time=body.get("start_time"),
            end_time=body.get("end_time"),
            reason=body.get("reason"),
        )
        return ok(vacation, 201)

    @app.route("/api/vacations/<int:vacation_id>", methods=["GET"], endpoint="get_vacation")
    @json_errors
    @login_required(container)
    def get_vacation(ctx, vacation_id: int):
        vacation = service.get(vacation_id)
        own_employee_id(ctx, vacation.employee_id)
        return ok(vacation)

    @app.route("/api/vacations/<int:vacation_id>", methods=["PATCH"], endpoint="update_vacation")
    @json_errors
    @login_required(container)
    def update_vacation(ctx, vacation_id: int):
        vacation = service.update(
            current_role=ctx.role,
            current_employee_id=ctx.employee_id,
            vacation_id=vacation_id,
            changes=payload(),
        )
        return ok(vacation)

    @app.route("/api/vacations/<int:vacation_id>", methods=["DELETE"], endpoint="delete_vacation")
    @json_errors
    @login_required(container)
    def delete_vacation(ctx, vacation_id: int):
        service.delete(current_role=ctx.role, current_employee_id=ctx.employee_id, vacation_id=vacation_id)
        return ok()

    @app.route("/api/vacations/<int:vacation_id>/approve", methods=["POST"], endpoint="approve_vacation")
    @json_errors
    @admin_required(container)
    def approve_vacation(ctx, vacation_id: int):
        return ok(service.approve(current_role=ctx.role, reviewer=ctx.user.email, vacation_id=vacation_id))

    @app.route("/api/vacations/<int:vacation_id>/reject", methods=["POST"], endpoint="reject_vacation")
    @json_errors
    @admin_required(container)
    def reject_vacation(ctx, vacation_id: int):
        return ok(service.reject(current_role=ctx.role, reviewer=ctx.user.email, vacation_id=vacation_id))
