from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_date, normalize_mysql_datetime
from .model import PunchPair, TimeLog
from .repository import TimeLogRepository

_COLUMNS = """
    log_id, user_id, work_date,
    morning_in, morning_out, afternoon_in, afternoon_out, overtime_in, overtime_out
"""


def _to_log(r: dict) -> TimeLog:
    return TimeLog(
        log_id=str(r["log_id"]),
        user_id=str(r["user_id"]),
        work_date=normalize_mysql_date(r["work_date"]),
        morning=PunchPair(
            clock_in=normalize_mysql_datetime(r.get("morning_in")),
            clock_out=normalize_mysql_datetime(r.get("morning_out")),
        ),
        afternoon=PunchPair(
            clock_in=normalize_mysql_datetime(r.get("afternoon_in")),
            clock_out=normalize_mysql_datetime(r.get("afternoon_out")),
        ),
        overtime=PunchPair(
            clock_in=normalize_mysql_datetime(r.get("overtime_in")),
            clock_out=normalize_mysql_datetime(r.get("overtime_out")),
        ),
    )


class MySQLTimeLogRepository(TimeLogRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[TimeLog]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM time_logs ORDER BY work_date DESC, user_id ASC")
            return [_to_log(r) for r in fetchall(cur)]

    def list_for_user(self, user_id: str) -> Sequence[TimeLog]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM time_logs WHERE user_id=%s ORDER BY work_date DESC",
                (user_id,),
            )
            return [_to_log(r) for r in fetchall(cur)]

    def get_for_user_and_date(self, user_id: str, work_date: date) -> Optional[TimeLog]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM time_logs WHERE user_id=%s AND work_date=%s",
                (user_id, work_date),
            )
            r = fetchone(cur)
            return _to_log(r) if r else None

    def upsert(self, log: TimeLog) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO time_logs(
                    log_id, user_id, work_date,
                    morning_in, morning_out, afternoon_in, afternoon_out, overtime_in, overtime_out
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    user_id=VALUES(user_id), work_date=VALUES(work_date),
                    morning_in=VALUES(morning_in), morning_out=VALUES(morning_out),
                    afternoon_in=VALUES(afternoon_in), afternoon_out=VALUES(afternoon_out),
                    overtime_in=VALUES(overtime_in), overtime_out=VALUES(overtime_out)
                """,
                (
                    log.log_id,
                    log.user_id,
                    log.work_date,
                    log.morning_in,
                    log.morning_out,
                    log.afternoon_in,
                    log.afternoon_out,
                    log.overtime_in,
                    log.overtime_out,
                ),
            )

    def delete_by_id(self, log_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM time_logs WHERE log_id=%s", (log_id,))
            return cur.rowcount > 0
