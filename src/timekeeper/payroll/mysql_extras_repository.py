from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, optional_float
from .model import PayrollExtras
from .repository import PayrollExtrasRepository

_COLUMNS = """
    user_id, days_worked, incentives, cash_advance, late_undertime_deduction,
    transport_fee, thirty_percent, manual_regular_hours, manual_overtime_hours
"""


def _to_extras(r: dict) -> PayrollExtras:
    return PayrollExtras(
        user_id=str(r["user_id"]),
        days_worked=int(r.get("days_worked") or 0),
        incentives=float(r.get("incentives") or 0),
        cash_advance=float(r.get("cash_advance") or 0),
        late_undertime_deduction=float(r.get("late_undertime_deduction") or 0),
        transport_fee=float(r.get("transport_fee") or 0),
        thirty_percent=float(r.get("thirty_percent") or 0),
        manual_regular_hours=optional_float(r.get("manual_regular_hours")),
        manual_overtime_hours=optional_float(r.get("manual_overtime_hours")),
    )


class MySQLPayrollExtrasRepository(PayrollExtrasRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_user(self, user_id: str) -> Optional[PayrollExtras]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM payroll_extras WHERE user_id=%s", (user_id,))
            r = fetchone(cur)
            return _to_extras(r) if r else None

    def list_all(self) -> Sequence[PayrollExtras]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM payroll_extras")
            return [_to_extras(r) for r in fetchall(cur)]

    def upsert(self, extras: PayrollExtras) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO payroll_extras(
                    user_id, days_worked, incentives, cash_advance, late_undertime_deduction,
                    transport_fee, thirty_percent, manual_regular_hours, manual_overtime_hours
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    days_worked=VALUES(days_worked), incentives=VALUES(incentives),
                    cash_advance=VALUES(cash_advance),
                    late_undertime_deduction=VALUES(late_undertime_deduction),
                    transport_fee=VALUES(transport_fee), thirty_percent=VALUES(thirty_percent),
                    manual_regular_hours=VALUES(manual_regular_hours),
                    manual_overtime_hours=VALUES(manual_overtime_hours)
                """,
                (
                    extras.user_id,
                    int(extras.days_worked),
                    extras.incentives,
                    extras.cash_advance,
                    extras.late_undertime_deduction,
                    extras.transport_fee,
                    extras.thirty_percent,
                    extras.manual_regular_hours,
                    extras.manual_overtime_hours,
                ),
            )
