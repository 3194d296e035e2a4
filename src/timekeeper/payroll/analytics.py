"""Organisation-wide payroll totals and the attendance health indicator."""

from __future__ import annotations

from typing import Sequence

from ..core.enums import AttendanceCategory, HealthSeverity
from .model import AttendanceBreakdown, HealthAdvice, PayrollEntry, PayrollSummary

HEALTH_ADVICE: dict[AttendanceCategory, HealthAdvice] = {
    AttendanceCategory.PRESENT: HealthAdvice(
        category=AttendanceCategory.PRESENT,
        severity=HealthSeverity.HEALTHY,
        message="Yey your company is enjoying! Feel safe. Keep it up!",
    ),
    AttendanceCategory.LATE: HealthAdvice(
        category=AttendanceCategory.LATE,
        severity=HealthSeverity.DISENGAGEMENT,
        message="Your employees seems not interested, better to consult them and give them awareness.",
    ),
    AttendanceCategory.ABSENT: HealthAdvice(
        category=AttendanceCategory.ABSENT,
        severity=HealthSeverity.RISK,
        message="Your company is at risk, make a total meeting and consult each of them to prevent loses.",
    ),
    AttendanceCategory.LEAVE: HealthAdvice(
        category=AttendanceCategory.LEAVE,
        severity=HealthSeverity.LEAVE,
        message="Your employees seems have problems, better consult them for better understanding.",
    ),
}


def attendance_breakdown(entries: Sequence[PayrollEntry]) -> AttendanceBreakdown:
    present = sum(e.days_worked for e in entries)
    # Approximation: one incident per employee carrying a deduction, not per late day.
    late = sum(1 for e in entries if e.late_undertime_deduction > 0)
    max_days = max([e.days_worked for e in entries] + [1])
    potential = max_days * len(entries)
    return AttendanceBreakdown(
        present=present,
        late=late,
        absent=max(0, potential - present),
        leave=0,
    )


def dominant_category(breakdown: AttendanceBreakdown) -> AttendanceCategory:
    """Largest bucket; on ties the earlier one (present first) wins."""

    best, best_value = None, None
    for category, value in breakdown.as_ordered():
        if best_value is None or value > best_value:
            best, best_value = category, value
    return best


def attendance_shares(breakdown: AttendanceBreakdown) -> dict[AttendanceCategory, float]:
    """Percentage of each bucket, for the breakdown chart."""

    ordered = breakdown.as_ordered()
    total = sum(v for _, v in ordered) or 1
    return {category: value / total * 100 for category, value in ordered}


def summarize(entries: Sequence[PayrollEntry]) -> PayrollSummary:
    breakdown = attendance_breakdown(entries)
    return PayrollSummary(
        total_payroll=sum(e.total_pay for e in entries),
        total_regular=sum(e.regular_pay for e in entries),
        total_overtime=sum(e.overtime_pay for e in entries),
        total_allowances=sum(e.allowances for e in entries),
        total_deductions=sum(e.deductions for e in entries),
        attendance=breakdown,
        advice=HEALTH_ADVICE[dominant_category(breakdown)],
    )
