from __future__ import annotations

from ...core.constants import AUTO_BREAK_HOURS
from ...timelogs.model import TimeLog
from ..hours import hours_between
from .base import PayrollCalculator


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule: morning pair + afternoon pair, overtime pair on its own.

    A day punched only at morningIn and afternoonOut is treated as one
    continuous span with an unrecorded lunch of ``AUTO_BREAK_HOURS``.
    """

    def __init__(self, *, auto_break_hours: float = AUTO_BREAK_HOURS):
        self._auto_break_hours = float(auto_break_hours)

    def regular_hours(self, log: TimeLog) -> float:
        hours = hours_between(log.morning_in, log.morning_out)
        hours += hours_between(log.afternoon_in, log.afternoon_out)
        if self._is_continuous_day(log):
            span = hours_between(log.morning_in, log.afternoon_out)
            hours += max(0.0, span - self._auto_break_hours)
        return hours

    def overtime_hours(self, log: TimeLog) -> float:
        return hours_between(log.overtime_in, log.overtime_out)

    @staticmethod
    def _is_continuous_day(log: TimeLog) -> bool:
        return (
            log.morning_in is not None
            and log.afternoon_out is not None
            and log.morning_out is None
            and log.afternoon_in is None
        )
