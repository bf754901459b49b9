from __future__ import annotations

from flask import Flask

from ..common.web import admin_required, json_errors, login_required, ok, own_employee_id, payload, query_date, query_int
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/schedules", methods=["GET"], endpoint="list_schedules")
    @json_errors
    @login_required(container)
    def list_schedules(ctx):
        employee_id = own_employee_id(ctx, query_int("employee_id"))
        schedules = container.schedule_service.list_schedules(
            employee_id=employee_id,
            start=query_date("start"),
            end=query_date("end"),
        )
        return ok(schedules)

    @app.route("/api/schedules", methods=["POST"], endpoint="create_schedule")
    @json_errors
    @admin_required(container)
    def create_schedule(ctx):
        body = payload()
        schedule = container.schedule_service.create(
            current_role=ctx.role,
            employee_id=body.get("employee_id"),
            work_date=body.get("work_date"),
            blocks=body.get("blocks"),
        )
        return ok(schedule, 201)

    @app.route("/api/schedules/<int:schedule_id>", methods=["GET"], endpoint="get_schedule")
    @json_errors
    @login_required(container)
    def get_schedule(ctx, schedule_id: int):
        schedule = container.schedule_service.get(schedule_id)
        own_employee_id(ctx, schedule.employee_id)
        return ok(schedule)

    @app.route("/api/schedules/<int:schedule_id>", methods=["PATCH"], endpoint="update_schedule")
    @json_errors
    @admin_required(container)
    def update_schedule(ctx, schedule_id: int):
        schedule = container.schedule_service.update(
            current_role=ctx.role,
            schedule_id=schedule_id,
            changes=payload(),
        )
        return ok(schedule)

    @app.route("/api/schedules/<int:schedule_id>", methods=["DELETE"], endpoint="delete_schedule")
    @json_errors
    @admin_required(container)
    def delete_schedule(ctx, schedule_id: int):
        container.schedule_service.delete(current_role=ctx.role, schedule_id=schedule_id)
        return ok()

    @app.route("/api/weekly-schedules/<int:employee_id>", methods=["GET"], endpoint="get_weekly_schedule")
    @json_errors
    @login_required(container)
    def get_weekly_schedule(ctx, employee_id: int):
        weekly = container.schedule_service.get_weekly(own_employee_id(ctx, employee_id))
        return ok({"schedule": weekly, "weekly_hours": weekly.weekly_hours})

    @app.route("/api/weekly-schedules/<int:employee_id>", methods=["PUT"], endpoint="save_weekly_schedule")
    @json_errors
    @admin_required(container)
    def save_weekly_schedule(ctx, employee_id: int):
        weekly = container.schedule_service.save_weekly(
            current_role=ctx.role,
            employee_id=employee_id,
            days=payload().get("days"),
        )
        return ok({"schedule": weekly, "weekly_hours": weekly.weekly_hours})
