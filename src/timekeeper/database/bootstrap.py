from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Iterable, Optional

from werkzeug.security import generate_password_hash

from ..core import constants
from ..core.enums import Role
from ..users.model import User
from ..users.repository import UserRepository
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).with_name("schema.sql")


def _iter_sql_statements(sql: str) -> Iterable[str]:
    # Split on ';' outside quoted strings; '--' comment lines are dropped.
    lines = [line for line in sql.splitlines() if not line.lstrip().startswith("--")]
    buf: list[str] = []
    quote: Optional[str] = None

    for ch in "\n".join(lines):
        if quote:
            if ch == quote:
                quote = None
        elif ch in ("'", '"'):
            quote = ch
        elif ch == ";":
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue
        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def ensure_database_exists(conn_factory: DatabaseConnection) -> None:
    database = conn_factory.config.database
    conn = conn_factory.connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(f"CREATE DATABASE IF NOT EXISTS `{database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci")
        conn.commit()
    finally:
        conn.close()


def apply_schema(conn_factory: DatabaseConnection, *, schema_path: str | Path = SCHEMA_PATH) -> None:
    ensure_database_exists(conn_factory)
    sql = Path(schema_path).read_text(encoding="utf-8")

    conn = conn_factory.connect()
    try:
        cur = conn.cursor()
        for stmt in _iter_sql_statements(sql):
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()
    logger.info("schema applied to %s", conn_factory.config.database)


def list_tables(conn_factory: DatabaseConnection) -> list[str]:
    conn = conn_factory.connect()
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()


def seed_default_admin(users: UserRepository, *, now: Optional[datetime] = None) -> bool:
    """Create the canonical admin when the store has no users at all.

    Returns True when the admin was inserted.
    """

    if users.count() > 0:
        return False

    users.upsert(
        User(
            user_id=constants.DEFAULT_ADMIN_ID,
            name=constants.DEFAULT_ADMIN_NAME,
            email=constants.DEFAULT_ADMIN_EMAIL,
            password_hash=generate_password_hash(constants.DEFAULT_ADMIN_PASSWORD),
            pin=constants.DEFAULT_ADMIN_PIN,
            role=Role.ADMIN,
            hourly_rate=0.0,
            overtime_rate=0.0,
            created_at=now or datetime.now(),
            birthday=constants.DEFAULT_ADMIN_BIRTHDAY,
        )
    )
    logger.info("seeded default admin user")
    return True
