from __future__ import annotations

import logging

from flask import Flask, session

from ..common.web import fail, json_errors, login_required, ok, payload
from ..container import Container
from ..core.exceptions import IdentityError
from ..users.identity import translate_identity_error

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/login", methods=["POST"], endpoint="login")
    @json_errors
    def login():
        body = payload()
        email = (body.get("email") or "").strip()
        password = body.get("password") or ""
        if not email or not password:
            return fail("Correo y contraseña son obligatorios", 400)

        resolver = container.make_session_resolver()
        try:
            ctx = resolver.sign_in(email, password)
        except IdentityError as e:
            logger.info("Failed sign-in for %s: %s", email, e.code)
            return fail(translate_identity_error(e), 401)

        if ctx is None:
            session.clear()
            return fail("Usuario no autorizado", 403)

        session.clear()
        session["uid"] = ctx.user.user_id
        session["email"] = ctx.user.email
        return ok({"user": ctx.user, "employee": ctx.employee, "state": ctx.state})

    @app.route("/logout", methods=["POST"], endpoint="logout")
    @json_errors
    def logout():
        uid = session.get("uid")
        if uid:
            container.identity.sign_out(uid)
        session.clear()
        return ok()

    @app.route("/me", methods=["GET"], endpoint="me")
    @json_errors
    @login_required(container)
    def me(ctx):
        return ok({"user": ctx.user, "employee": ctx.employee, "state": ctx.state})
