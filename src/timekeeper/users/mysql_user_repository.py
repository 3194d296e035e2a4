from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_datetime
from .model import User
from .repository import UserRepository

_COLUMNS = """
    user_id, name, email, password_hash, pin, birthday, role,
    hourly_rate, overtime_rate, created_at
"""


def _to_user(row: dict) -> User:
    birthday = row.get("birthday")
    return User(
        user_id=str(row["user_id"]),
        name=row["name"],
        email=row["email"],
        password_hash=row["password_hash"],
        pin=str(row["pin"]),
        role=Role(row["role"]),
        hourly_rate=float(row.get("hourly_rate") or 0),
        overtime_rate=float(row.get("overtime_rate") or 0),
        created_at=normalize_mysql_datetime(row["created_at"]),
        birthday=str(birthday) if birthday else None,
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE user_id=%s", (user_id,))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def get_by_pin(self, pin: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE pin=%s", (pin,))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def get_by_email(self, email: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE email=%s", (email,))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def list_all(self) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users ORDER BY created_at ASC")
            return [_to_user(r) for r in fetchall(cur)]

    def count(self) -> int:
        with db_cursor(self._conn_factory, dictionary=False) as (_, cur):
            cur.execute("SELECT COUNT(*) FROM users")
            (total,) = cur.fetchone()
            return int(total)

    def upsert(self, user: User) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO users(
                    user_id, name, email, password_hash, pin, birthday, role,
                    hourly_rate, overtime_rate, created_at
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    name=VALUES(name), email=VALUES(email), password_hash=VALUES(password_hash),
                    pin=VALUES(pin), birthday=VALUES(birthday), role=VALUES(role),
                    hourly_rate=VALUES(hourly_rate), overtime_rate=VALUES(overtime_rate)
                """,
                (
                    user.user_id,
                    user.name,
                    user.email,
                    user.password_hash,
                    user.pin,
                    user.birthday,
                    user.role.value,
                    user.hourly_rate,
                    user.overtime_rate,
                    user.created_at,
                ),
            )

    def delete_by_id(self, user_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM users WHERE user_id=%s", (user_id,))
            return cur.rowcount > 0
