"""Shared helpers for the Flask controllers: session guards and JSON replies."""
from __future__ import annotations

import logging
from datetime import date
from functools import wraps
from typing import Any, Dict, Optional

from flask import jsonify, request, session

from ..core.enums import Role
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    IdentityError,
    NotFoundError,
    ValidationError,
)
from ..users.identity import Subject, translate_identity_error
from ..users.session import SessionContext
from .serialization import to_json
from .validators import require_date

logger = logging.getLogger(__name__)


def ok(data: Any = None, status: int = 200):
    return jsonify({"success": True, "data": to_json(data)}), status


def fail(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def payload() -> Dict[str, Any]:
    body = request.get_json(silent=True)
    if body is None:
        return {}
    if not isinstance(body, dict):
        raise ValidationError("Cuerpo de la solicitud inválido")
    return body


def query_date(name: str) -> Optional[date]:
    raw = request.args.get(name)
    if not raw:
        return None
    return require_date(raw, name)


def query_int(name: str) -> Optional[int]:
    raw = request.args.get(name)
    if raw in (None, ""):
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValidationError(f"Parámetro inválido: {name}")


def current_session(container) -> Optional[SessionContext]:
    uid = session.get("uid")
    if not uid:
        return None

    resolver = container.make_session_resolver()
    ctx = resolver.on_auth_state_changed(Subject(uid=uid, email=session.get("email")))
    if ctx is None:
        session.clear()
    return ctx


def json_errors(view):
    """Translate domain errors into JSON replies; log anything unexpected."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except ValidationError as e:
            return fail(str(e), 400)
        except AuthenticationError as e:
            return fail(str(e), 401)
        except AuthorizationError as e:
            return fail(str(e), 403)
        except NotFoundError as e:
            return fail(str(e), 404)
        except IdentityError as e:
            return fail(translate_identity_error(e), 400)
        except Exception:
            logger.exception("Unhandled error in %s", view.__name__)
            return fail("Error del sistema, intenta de nuevo", 500)

    return wrapper


def login_required(container):
    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            ctx = current_session(container)
            if ctx is None:
                return fail("Inicia sesión para continuar", 401)
            return view(ctx, *args, **kwargs)

        return wrapper

    return decorator


def admin_required(container):
    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            ctx = current_session(container)
            if ctx is None:
                return fail("Inicia sesión para continuar", 401)
            if ctx.role != Role.ADMIN:
                return fail("No tienes permiso para esta acción", 403)
            return view(ctx, *args, **kwargs)

        return wrapper

    return decorator


def own_employee_id(ctx: SessionContext, requested: Optional[int]) -> Optional[int]:
    """Admins see any employee; employees only themselves."""

    if ctx.is_admin:
        return requested
    if ctx.employee_id is None:
        raise AuthorizationError("Tu usuario no está vinculado a un empleado")
    if requested is not None and requested != ctx.employee_id:
        raise AuthorizationError("No tienes permiso para esta acción")
    return ctx.employee_id
