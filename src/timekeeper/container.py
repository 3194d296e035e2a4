from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .common.locks import KeyedLock
from .database.connection import DBConfig, DatabaseConnection
from .payroll.mysql_extras_repository import MySQLPayrollExtrasRepository
from .payroll.repository import PayrollExtrasRepository
from .payroll.service import PayrollReportService
from .timelogs.mysql_timelog_repository import MySQLTimeLogRepository
from .timelogs.repository import TimeLogRepository
from .timelogs.service import ClockService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    users_repo: UserRepository
    timelogs_repo: TimeLogRepository
    extras_repo: PayrollExtrasRepository

    auth_service: AuthService
    user_service: UserService
    clock_service: ClockService
    payroll_service: PayrollReportService

    conn: Optional[DatabaseConnection] = None


def wire(
    *,
    users_repo: UserRepository,
    timelogs_repo: TimeLogRepository,
    extras_repo: PayrollExtrasRepository,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Build the services on top of any repository implementation."""

    return Container(
        users_repo=users_repo,
        timelogs_repo=timelogs_repo,
        extras_repo=extras_repo,
        auth_service=AuthService(users_repo),
        user_service=UserService(users_repo),
        clock_service=ClockService(timelogs_repo, users_repo, locks=KeyedLock()),
        payroll_service=PayrollReportService(users_repo, timelogs_repo, extras_repo),
        conn=conn,
    )


def build_container(*, db_config: dict) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    return wire(
        users_repo=MySQLUserRepository(conn),
        timelogs_repo=MySQLTimeLogRepository(conn),
        extras_repo=MySQLPayrollExtrasRepository(conn),
        conn=conn,
    )
