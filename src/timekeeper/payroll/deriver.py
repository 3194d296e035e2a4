"""Turn users, their time-logs and manual extras into payroll entries."""

from __future__ import annotations

from collections import defaultdict
from datetime import date
from typing import Iterable, Mapping, Optional, Sequence

from ..core.enums import Role
from ..timelogs.model import TimeLog
from ..users.model import User
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .model import PayrollEntry, PayrollExtras


def derive_payroll(
    users: Iterable[User],
    logs: Iterable[TimeLog],
    extras_by_user: Mapping[str, PayrollExtras],
    *,
    calculator: Optional[PayrollCalculator] = None,
) -> list[PayrollEntry]:
    """One entry per ``Role.USER`` user, in input order. Admins are skipped."""

    calculator = calculator or StandardPayrollCalculator()

    logs_by_user: dict[str, list[TimeLog]] = defaultdict(list)
    for log in logs:
        logs_by_user[log.user_id].append(log)

    entries: list[PayrollEntry] = []
    for user in users:
        if user.role != Role.USER:
            continue
        extras = extras_by_user.get(user.user_id) or PayrollExtras.empty(user.user_id)
        entries.append(derive_entry(user, logs_by_user.get(user.user_id, []), extras, calculator=calculator))
    return entries


def derive_entry(
    user: User,
    logs: Sequence[TimeLog],
    extras: PayrollExtras,
    *,
    calculator: PayrollCalculator,
) -> PayrollEntry:
    computed_regular = 0.0
    computed_overtime = 0.0
    days: set[date] = set()

    for log in logs:
        computed_regular += calculator.regular_hours(log)
        computed_overtime += calculator.overtime_hours(log)
        if calculator.worked(log):
            days.add(log.work_date)

    # Manual hours replace the computed totals outright.
    regular_hours = extras.manual_regular_hours if extras.manual_regular_hours is not None else computed_regular
    overtime_hours = extras.manual_overtime_hours if extras.manual_overtime_hours is not None else computed_overtime
    days_worked = extras.days_worked if extras.days_worked > 0 else len(days)

    regular_pay = regular_hours * user.hourly_rate
    overtime_pay = overtime_hours * user.overtime_rate

    # No floor at zero: deductions may exceed earnings.
    total_pay = (regular_pay + overtime_pay + extras.incentives + extras.transport_fee) - (
        extras.cash_advance + extras.late_undertime_deduction + extras.thirty_percent
    )

    return PayrollEntry(
        user_id=user.user_id,
        user_name=user.name,
        email=user.email,
        total_regular_hours=regular_hours,
        total_overtime_hours=overtime_hours,
        regular_pay=regular_pay,
        overtime_pay=overtime_pay,
        days_worked=days_worked,
        incentives=extras.incentives,
        cash_advance=extras.cash_advance,
        late_undertime_deduction=extras.late_undertime_deduction,
        transport_fee=extras.transport_fee,
        thirty_percent=extras.thirty_percent,
        total_pay=total_pay,
    )
