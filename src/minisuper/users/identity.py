from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from typing import Optional, Protocol

from mysql.connector import errorcode
from mysql.connector.errors import IntegrityError
from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import EMAIL_RE
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.exceptions import IdentityError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone

logger = logging.getLogger(__name__)

USER_NOT_FOUND = "auth/user-not-found"
WRONG_PASSWORD = "auth/wrong-password"
EMAIL_IN_USE = "auth/email-already-in-use"
WEAK_PASSWORD = "auth/weak-password"
INVALID_EMAIL = "auth/invalid-email"

IDENTITY_MESSAGES = {
    USER_NOT_FOUND: "No existe una cuenta con ese correo",
    WRONG_PASSWORD: "Contraseña incorrecta",
    EMAIL_IN_USE: "El correo ya está registrado",
    WEAK_PASSWORD: f"La contraseña debe tener al menos {MIN_PASSWORD_LENGTH} caracteres",
    INVALID_EMAIL: "Correo inválido",
}


def translate_identity_error(error: Exception) -> str:
    """Map a provider error to a localized message by matching its code or text."""

    text = f"{getattr(error, 'code', '')} {error}"
    for code, message in IDENTITY_MESSAGES.items():
        if code in text or code.split("/", 1)[1] in text:
            return message
    return "Error al iniciar sesión. Verifica tus credenciales."


@dataclass(frozen=True)
class Subject:
    """Identidad autenticada emitida por el proveedor."""

    uid: str
    email: Optional[str] = None


class IdentityProvider(Protocol):
    def create_account(self, email: str, password: str) -> Subject:
        raise NotImplementedError

    def sign_in(self, email: str, password: str) -> Subject:
        raise NotImplementedError

    def sign_out(self, uid: str) -> None:
        raise NotImplementedError

    def update_email(self, uid: str, email: str) -> None:
        raise NotImplementedError

    def delete_account(self, uid: str) -> None:
        raise NotImplementedError


class MySQLIdentityProvider(IdentityProvider):
    """Email/password accounts stored in `auth_accounts` with werkzeug hashes."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create_account(self, email: str, password: str) -> Subject:
        email = (email or "").strip().lower()
        if not EMAIL_RE.match(email):
            raise IdentityError(INVALID_EMAIL)
        if password is None or len(password) < MIN_PASSWORD_LENGTH:
            raise IdentityError(WEAK_PASSWORD)

        uid = uuid.uuid4().hex
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "INSERT INTO auth_accounts(uid, email, password_hash) VALUES(%s,%s,%s)",
                    (uid, email, generate_password_hash(password)),
                )
        except IntegrityError as e:
            if e.errno == errorcode.ER_DUP_ENTRY:
                raise IdentityError(EMAIL_IN_USE)
            raise
        return Subject(uid=uid, email=email)

    def sign_in(self, email: str, password: str) -> Subject:
        email = (email or "").strip().lower()
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT uid, email, password_hash FROM auth_accounts WHERE email=%s", (email,))
            row = fetchone(cur)

        if not row:
            raise IdentityError(USER_NOT_FOUND)

        try:
            ok = check_password_hash(row["password_hash"], password or "")
        except ValueError:
            # e.g. placeholder or corrupted hashes
            ok = False
        if not ok:
            raise IdentityError(WRONG_PASSWORD)

        return Subject(uid=row["uid"], email=row["email"])

    def sign_out(self, uid: str) -> None:
        # Sessions live in the signed Flask cookie; nothing is stored server side.
        logger.info("Signed out subject %s", uid)

    def update_email(self, uid: str, email: str) -> None:
        email = (email or "").strip().lower()
        if not EMAIL_RE.match(email):
            raise IdentityError(INVALID_EMAIL)

        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute("UPDATE auth_accounts SET email=%s WHERE uid=%s", (email, uid))
        except IntegrityError as e:
            if e.errno == errorcode.ER_DUP_ENTRY:
                raise IdentityError(EMAIL_IN_USE)
            raise

    def delete_account(self, uid: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM auth_accounts WHERE uid=%s", (uid,))
        logger.info("Deleted login account %s", uid)
