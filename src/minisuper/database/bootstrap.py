from __future__ import annotations

import re
import uuid
from datetime import date
from pathlib import Path
from typing import Iterable

import mysql.connector
from werkzeug.security import generate_password_hash

from ..core.constants import DEFAULT_ADMIN_EMAIL, DEFAULT_HOURLY_RATES
from .connection import DBConfig


def _connect(target: DBConfig, *, with_database: bool = True):
    kwargs = dict(
        host=target.host,
        port=target.port,
        user=target.user,
        password=target.password,
        use_pure=True,
    )
    if with_database:
        kwargs["database"] = target.database
    return mysql.connector.connect(**kwargs)


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql compatible regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _iter_sql_statements(sql: str) -> Iterable[str]:
    # Minimal SQL splitter for schema files (handles ';' inside quotes).
    buf: list[str] = []
    in_single = False
    in_double = False
    escape = False

    for ch in sql:
        if escape:
            buf.append(ch)
            escape = False
            continue

        if ch == "\\":
            buf.append(ch)
            escape = True
            continue

        if ch == "'" and not in_double:
            in_single = not in_single
        elif ch == '"' and not in_single:
            in_double = not in_double
        elif ch == ";" and not in_single and not in_double:
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue

        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def ensure_database_exists(db_config: dict) -> None:
    target = DBConfig.from_dict(db_config)
    conn = _connect(target, with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    sql = _strip_create_db_and_use(Path(schema_path).read_text(encoding="utf-8"))

    conn = _connect(DBConfig.from_dict(db_config))
    try:
        cur = conn.cursor()
        for stmt in _iter_sql_statements(sql):
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()


def ensure_admin_account(db_config: dict, *, email: str = DEFAULT_ADMIN_EMAIL, password: str = "admin123") -> None:
    """Create the login for the admin email.

    No `users` row is written: the session resolver treats this email as the
    admin account when no application user exists for it.
    """

    conn = _connect(DBConfig.from_dict(db_config))
    try:
        cur = conn.cursor(dictionary=True)
        cur.execute("SELECT uid FROM auth_accounts WHERE email=%s", (email,))
        if cur.fetchone():
            cur.execute(
                "UPDATE auth_accounts SET password_hash=%s WHERE email=%s",
                (generate_password_hash(password), email),
            )
        else:
            cur.execute(
                "INSERT INTO auth_accounts(uid, email, password_hash) VALUES(%s,%s,%s)",
                (uuid.uuid4().hex, email, generate_password_hash(password)),
            )
        conn.commit()
    finally:
        conn.close()


def ensure_demo_employees(db_config: dict) -> None:
    demo = [
        ("Byron Administrador", "byron@minisuper.com", "permanent", 3000, "#3B82F6", date(2022, 1, 1)),
        ("Dayana Administradora", "dayana@minisuper.com", "permanent", 3000, "#EF4444", date(2022, 1, 1)),
        ("Deylin Rodríguez", "deylin@minisuper.com", "permanent", DEFAULT_HOURLY_RATES["permanent"], "#10B981", date(2023, 1, 15)),
        ("Anais López", "anais@minisuper.com", "reinforcement", DEFAULT_HOURLY_RATES["reinforcement"], "#F59E0B", date(2023, 7, 1)),
    ]

    conn = _connect(DBConfig.from_dict(db_config))
    try:
        cur = conn.cursor(dictionary=True)
        for name, email, role, rate, color, hire_date in demo:
            cur.execute("SELECT uid FROM auth_accounts WHERE email=%s", (email,))
            row = cur.fetchone()
            if row:
                continue

            uid = uuid.uuid4().hex
            cur.execute(
                "INSERT INTO auth_accounts(uid, email, password_hash) VALUES(%s,%s,%s)",
                (uid, email, generate_password_hash("empleado123")),
            )
            cur.execute(
                "INSERT INTO users(user_id, email, name, role) VALUES(%s,%s,%s,'employee')",
                (uid, email, name),
            )
            cur.execute(
                """
                INSERT INTO employees(name, email, role, hourly_rate, status, hire_date, color, user_id)
                VALUES(%s,%s,%s,%s,'active',%s,%s,%s)
                """,
                (name, email, role, rate, hire_date, color, uid),
            )
        conn.commit()
    finally:
        conn.close()


def list_tables(db_config: dict) -> list[str]:
    conn = _connect(DBConfig.from_dict(db_config))
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
