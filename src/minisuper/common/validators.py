from __future__ import annotations

import re
from datetime import date, time
from typing import Any, Optional

from ..core.exceptions import ValidationError
from .datetime_utils import parse_hhmm, parse_iso_date

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
_COLOR_RE = re.compile(r"^#[0-9A-Fa-f]{6}$")


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} es obligatorio")
    return str(value).strip()


def require_min_length(value: Optional[str], field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} debe tener al menos {min_len} caracteres")
    return value


def require_email(value: Optional[str]) -> str:
    email = require_non_empty(value, "Correo").lower()
    if not EMAIL_RE.match(email):
        raise ValidationError("Correo inválido")
    return email


def require_color(value: Optional[str]) -> str:
    color = require_non_empty(value, "Color")
    if not _COLOR_RE.match(color):
        raise ValidationError("Color inválido (#RRGGBB)")
    return color


def require_date(value: Any, field_name: str) -> date:
    if isinstance(value, date):
        return value
    raw = require_non_empty(value, field_name)
    try:
        return parse_iso_date(raw)
    except ValueError:
        raise ValidationError(f"{field_name} inválida (AAAA-MM-DD)")


def require_time(value: Any, field_name: str) -> time:
    if isinstance(value, time):
        return value
    raw = require_non_empty(value, field_name)
    try:
        return parse_hhmm(raw)
    except ValueError:
        raise ValidationError(f"{field_name} inválida (HH:MM)")


def require_positive_number(value: Any, field_name: str) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} debe ser un número")
    if number <= 0:
        raise ValidationError(f"{field_name} debe ser mayor que 0")
    return number
