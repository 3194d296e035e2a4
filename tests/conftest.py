from __future__ import annotations

from datetime import date, datetime
from typing import Optional

import pytest

from timekeeper.container import wire
from timekeeper.core.enums import Role
from timekeeper.main import create_app
from timekeeper.payroll.model import PayrollExtras
from timekeeper.timelogs.model import TimeLog
from timekeeper.users.model import User


class InMemoryUsers:
    def __init__(self, users=()):
        self._by_id: dict[str, User] = {u.user_id: u for u in users}

    def get_by_id(self, user_id: str) -> Optional[User]:
        return self._by_id.get(user_id)

    def get_by_pin(self, pin: str) -> Optional[User]:
        return next((u for u in self._by_id.values() if u.pin == pin), None)

    def get_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self._by_id.values() if u.email == email), None)

    def list_all(self):
        return list(self._by_id.values())

    def count(self) -> int:
        return len(self._by_id)

    def upsert(self, user: User) -> None:
        self._by_id[user.user_id] = user

    def delete_by_id(self, user_id: str) -> bool:
        return self._by_id.pop(user_id, None) is not None


class InMemoryTimeLogs:
    def __init__(self, logs=()):
        self._by_id: dict[str, TimeLog] = {l.log_id: l for l in logs}

    def list_all(self):
        return list(self._by_id.values())

    def list_for_user(self, user_id: str):
        return [l for l in self._by_id.values() if l.user_id == user_id]

    def get_for_user_and_date(self, user_id: str, work_date: date) -> Optional[TimeLog]:
        return next(
            (l for l in self._by_id.values() if l.user_id == user_id and l.work_date == work_date),
            None,
        )

    def upsert(self, log: TimeLog) -> None:
        self._by_id[log.log_id] = log

    def delete_by_id(self, log_id: str) -> bool:
        return self._by_id.pop(log_id, None) is not None


class InMemoryExtras:
    def __init__(self, rows=()):
        self._by_user: dict[str, PayrollExtras] = {e.user_id: e for e in rows}

    def get_by_user(self, user_id: str) -> Optional[PayrollExtras]:
        return self._by_user.get(user_id)

    def list_all(self):
        return list(self._by_user.values())

    def upsert(self, extras: PayrollExtras) -> None:
        self._by_user[extras.user_id] = extras


def make_user(
    user_id: str = "u1",
    *,
    name: str = "Ana Cruz",
    pin: str = "1234",
    role: Role = Role.USER,
    hourly_rate: float = 100.0,
    overtime_rate: float = 150.0,
    password_hash: str = "",
) -> User:
    return User(
        user_id=user_id,
        name=name,
        email=f"{user_id}@example.com",
        password_hash=password_hash,
        pin=pin,
        role=role,
        hourly_rate=hourly_rate,
        overtime_rate=overtime_rate,
        created_at=datetime(2025, 1, 1, 8, 0),
    )


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 1, 31, 8, 30, 0)


@pytest.fixture
def users_repo():
    return InMemoryUsers([make_user("u1"), make_user("admin-1", name="System Admin", pin="0000", role=Role.ADMIN)])


@pytest.fixture
def timelogs_repo():
    return InMemoryTimeLogs()


@pytest.fixture
def extras_repo():
    return InMemoryExtras()


@pytest.fixture
def container(users_repo, timelogs_repo, extras_repo):
    return wire(users_repo=users_repo, timelogs_repo=timelogs_repo, extras_repo=extras_repo)


@pytest.fixture
def client(container):
    app = create_app(container=container, settings_module="timekeeper.settings.testing")
    return app.test_client()
