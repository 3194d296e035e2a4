from __future__ import annotations

import csv
import io
import logging
import math
from typing import Optional

from ..common.validators import require_non_negative
from ..core.constants import THIRTY_PERCENT_RATE
from ..core.exceptions import NotFoundError, ValidationError
from ..timelogs.repository import TimeLogRepository
from ..users.model import User
from ..users.repository import UserRepository
from .analytics import summarize
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .deriver import derive_payroll
from .model import PayrollExtras, PayrollReport
from .repository import PayrollExtrasRepository

logger = logging.getLogger(__name__)

EXPORT_HEADERS = [
    "Name",
    "Days",
    "Reg Hours",
    "OT Hours",
    "Reg Pay",
    "OT Pay",
    "Incentives",
    "Transport",
    "Cash Adv",
    "Late Ded",
    "30%",
    "Total Pay",
]


def parse_extras(user_id: str, data: dict) -> PayrollExtras:
    """Build extras from a JSON payload (camelCase keys, missing = zero)."""

    def amount(key: str, label: str) -> float:
        return require_non_negative(data.get(key) or 0, label)

    def manual_hours(key: str, label: str) -> Optional[float]:
        value = data.get(key)
        if value is None or value == "":
            return None
        return require_non_negative(value, label)

    days = require_non_negative(data.get("daysWorked") or 0, "Days worked")
    if days != int(days):
        raise ValidationError("Days worked must be a whole number")

    return PayrollExtras(
        user_id=user_id,
        days_worked=int(days),
        incentives=amount("incentives", "Incentives"),
        cash_advance=amount("cashAdvance", "Cash advance"),
        late_undertime_deduction=amount("lateUndertimeDeduction", "Late/undertime deduction"),
        transport_fee=amount("transportFee", "Transport fee"),
        thirty_percent=amount("thirtyPercent", "30% deduction"),
        manual_regular_hours=manual_hours("manualRegularHours", "Regular hours"),
        manual_overtime_hours=manual_hours("manualOvertimeHours", "Overtime hours"),
    )


class PayrollReportService:
    """Use case: payroll report, manual adjustments and export."""

    def __init__(
        self,
        users: UserRepository,
        timelogs: TimeLogRepository,
        extras: PayrollExtrasRepository,
        *,
        calculator: Optional[PayrollCalculator] = None,
    ):
        self._users = users
        self._timelogs = timelogs
        self._extras = extras
        self._calculator = calculator or StandardPayrollCalculator()

    def build_report(self) -> PayrollReport:
        users = self._users.list_all()
        logs = self._timelogs.list_all()
        extras_by_user = {e.user_id: e for e in self._extras.list_all()}

        entries = derive_payroll(users, logs, extras_by_user, calculator=self._calculator)
        summary = summarize(entries)
        logger.info(
            "payroll report built: employees=%d total=%.2f health=%s",
            len(entries),
            summary.total_payroll,
            summary.advice.category.value,
        )
        return PayrollReport(entries=entries, summary=summary)

    def get_extras(self, user_id: str) -> PayrollExtras:
        return self._extras.get_by_user(user_id) or PayrollExtras.empty(user_id)

    def save_extras(self, extras: PayrollExtras) -> PayrollExtras:
        self._require_user(extras.user_id)
        self._extras.upsert(extras)
        logger.info("payroll extras saved user=%s", extras.user_id)
        return extras

    def suggest_thirty_percent(self, user_id: str, extras: PayrollExtras) -> float:
        """30% of the gross implied by the extras form, floored to a whole amount.

        Only manual hours feed the base; unset manual hours count as zero.
        """

        user = self._require_user(user_id)
        regular_pay = (extras.manual_regular_hours or 0) * user.hourly_rate
        overtime_pay = (extras.manual_overtime_hours or 0) * user.overtime_rate
        base = regular_pay + overtime_pay + extras.incentives + extras.transport_fee
        return float(math.floor(base * THIRTY_PERCENT_RATE))

    def export_csv(self, report: Optional[PayrollReport] = None) -> bytes:
        report = report or self.build_report()

        out = io.StringIO()
        writer = csv.writer(out)
        writer.writerow(EXPORT_HEADERS)
        for e in report.entries:
            writer.writerow(
                [
                    e.user_name,
                    e.days_worked,
                    f"{e.total_regular_hours:.2f}",
                    f"{e.total_overtime_hours:.2f}",
                    f"{e.regular_pay:.2f}",
                    f"{e.overtime_pay:.2f}",
                    f"{e.incentives:.2f}",
                    f"{e.transport_fee:.2f}",
                    f"{e.cash_advance:.2f}",
                    f"{e.late_undertime_deduction:.2f}",
                    f"{e.thirty_percent:.2f}",
                    f"{e.total_pay:.2f}",
                ]
            )
        return out.getvalue().encode("utf-8-sig")

    def _require_user(self, user_id: str) -> User:
        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError("Employee not found")
        return user
