from __future__ import annotations

from typing import Optional

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import build_update, db_cursor, fetchone
from .model import AppUser
from .repository import UserRepository


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: str) -> Optional[AppUser]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT user_id, email, name, role FROM users WHERE user_id=%s",
                (user_id,),
            )
            row = fetchone(cur)
            if not row:
                return None
            return AppUser(
                user_id=row["user_id"],
                email=row["email"],
                name=row["name"],
                role=Role(row["role"]),
            )

    def create(self, *, user_id: str, email: str, name: str, role: Role) -> str:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO users(user_id, email, name, role) VALUES(%s,%s,%s,%s)",
                (user_id, email, name, role.value),
            )
        return user_id

    def delete_by_id(self, user_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM users WHERE user_id=%s", (user_id,))
            return cur.rowcount > 0

    def update(self, user_id: str, *, email: Optional[str] = None, name: Optional[str] = None) -> bool:
        changes = {k: v for k, v in (("email", email), ("name", name)) if v is not None}
        if not changes:
            return self.get_by_id(user_id) is not None

        sql, params = build_update("users", "user_id", changes)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params + [user_id]))
            cur.execute("SELECT 1 AS found FROM users WHERE user_id=%s", (user_id,))
            return fetchone(cur) is not None
