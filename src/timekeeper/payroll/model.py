from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import AttendanceCategory, HealthSeverity


@dataclass(frozen=True)
class PayrollExtras:
    """Manual per-user adjustments kept next to the computed payroll.

    ``days_worked`` of 0 means "use the computed value"; ``None`` manual hours
    mean "use the computed hours".
    """

    user_id: str
    days_worked: int = 0
    incentives: float = 0.0
    cash_advance: float = 0.0
    late_undertime_deduction: float = 0.0
    transport_fee: float = 0.0
    thirty_percent: float = 0.0
    manual_regular_hours: Optional[float] = None
    manual_overtime_hours: Optional[float] = None

    @classmethod
    def empty(cls, user_id: str) -> "PayrollExtras":
        return cls(user_id=user_id)

    def to_dict(self) -> dict:
        return {
            "userId": self.user_id,
            "daysWorked": self.days_worked,
            "incentives": self.incentives,
            "cashAdvance": self.cash_advance,
            "lateUndertimeDeduction": self.late_undertime_deduction,
            "transportFee": self.transport_fee,
            "thirtyPercent": self.thirty_percent,
            "manualRegularHours": self.manual_regular_hours,
            "manualOvertimeHours": self.manual_overtime_hours,
        }


@dataclass(frozen=True)
class PayrollEntry:
    """Read-model: one employee's payroll line. Recomputed on every request."""

    user_id: str
    user_name: str
    email: str
    total_regular_hours: float
    total_overtime_hours: float
    regular_pay: float
    overtime_pay: float
    days_worked: int
    incentives: float
    cash_advance: float
    late_undertime_deduction: float
    transport_fee: float
    thirty_percent: float
    total_pay: float

    @property
    def allowances(self) -> float:
        return self.incentives + self.transport_fee

    @property
    def deductions(self) -> float:
        return self.cash_advance + self.late_undertime_deduction + self.thirty_percent

    def to_dict(self) -> dict:
        return {
            "userId": self.user_id,
            "userName": self.user_name,
            "email": self.email,
            "totalRegularHours": self.total_regular_hours,
            "totalOvertimeHours": self.total_overtime_hours,
            "regularPay": self.regular_pay,
            "overtimePay": self.overtime_pay,
            "daysWorked": self.days_worked,
            "incentives": self.incentives,
            "cashAdvance": self.cash_advance,
            "lateUndertimeDeduction": self.late_undertime_deduction,
            "transportFee": self.transport_fee,
            "thirtyPercent": self.thirty_percent,
            "totalPay": self.total_pay,
        }


@dataclass(frozen=True)
class AttendanceBreakdown:
    present: int
    late: int
    absent: int
    leave: int

    def as_ordered(self) -> list[tuple[AttendanceCategory, int]]:
        return [
            (AttendanceCategory.PRESENT, self.present),
            (AttendanceCategory.LATE, self.late),
            (AttendanceCategory.ABSENT, self.absent),
            (AttendanceCategory.LEAVE, self.leave),
        ]


@dataclass(frozen=True)
class HealthAdvice:
    category: AttendanceCategory
    severity: HealthSeverity
    message: str


@dataclass(frozen=True)
class PayrollSummary:
    total_payroll: float
    total_regular: float
    total_overtime: float
    total_allowances: float
    total_deductions: float
    attendance: AttendanceBreakdown
    advice: HealthAdvice

    def to_dict(self) -> dict:
        return {
            "totalPayroll": self.total_payroll,
            "totalRegular": self.total_regular,
            "totalOT": self.total_overtime,
            "totalAllowances": self.total_allowances,
            "totalDeductions": self.total_deductions,
            "attendance": {c.value: v for c, v in self.attendance.as_ordered()},
            "healthCategory": self.advice.category.value,
            "healthSeverity": self.advice.severity.value,
            "healthMessage": self.advice.message,
        }


@dataclass(frozen=True)
class PayrollReport:
    entries: list[PayrollEntry]
    summary: PayrollSummary
