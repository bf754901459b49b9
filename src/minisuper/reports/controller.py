from __future__ import annotations

from flask import Flask

from ..common.web import fail, json_errors, login_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/dashboard", methods=["GET"], endpoint="dashboard")
    @json_errors
    @login_required(container)
    def dashboard(ctx):
        if ctx.is_admin:
            return ok(container.dashboard_service.admin_summary())
        if ctx.employee_id is None:
            return fail("Tu usuario no está vinculado a un empleado", 403)
        return ok(container.dashboard_service.employee_stats(ctx.employee_id))
