from __future__ import annotations

from flask import Flask

from ..common.web import admin_required, json_errors, login_required, ok, own_employee_id, payload, query_date, query_int
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.extra_service

    @app.route("/api/extras", methods=["GET"], endpoint="list_extras")
    @json_errors
    @login_required(container)
    def list_extras(ctx):
        employee_id = own_employee_id(ctx, query_int("employee_id"))
        start, end = query_date("start"), query_date("end")
        if start and end:
            return ok(service.list_range(start=start, end=end, employee_id=employee_id))
        if employee_id is not None:
            return ok(service.list_for_employee(employee_id))
        return ok(service.list_extras())

    @app.route("/api/extras", methods=["POST"], endpoint="create_extra")
    @json_errors
    @admin_required(container)
    def create_extra(ctx):
        body = payload()
        extra = service.create(
            current_role=ctx.role,
            employee_id=body.get("employee_id"),
            work_date=body.get("work_date"),
            hours=body.get("hours"),
            description=body.get("description"),
        )
        return ok(extra, 201)

    @app.route("/api/extras/<int:extra_id>", methods=["GET"], endpoint="get_extra")
    @json_errors
    @login_required(container)
    def get_extra(ctx, extra_id: int):
        extra = service.get(extra_id)
        own_employee_id(ctx, extra.employee_id)
        return ok(extra)

    @app.route("/api/extras/<int:extra_id>", methods=["PATCH"], endpoint="update_extra")
    @json_errors
    @admin_required(container)
    def update_extra(ctx, extra_id: int):
        return ok(service.update(current_role=ctx.role, extra_id=extra_id, changes=payload()))

    @app.route("/api/extras/<int:extra_id>/approve", methods=["POST"], endpoint="approve_extra")
    @json_errors
    @admin_required(container)
    def approve_extra(ctx, extra_id: int):
        return ok(service.approve(current_role=ctx.role, extra_id=extra_id))

    @app.route("/api/extras/<int:extra_id>", methods=["DELETE"], endpoint="delete_extra")
    @json_errors
    @admin_required(container)
    def delete_extra(ctx, extra_id: int):
        service.delete(current_role=ctx.role, extra_id=extra_id)
        return ok()
