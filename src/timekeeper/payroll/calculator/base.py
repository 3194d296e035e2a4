from __future__ import annotations

from abc import ABC, abstractmethod

from ...timelogs.model import TimeLog


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def regular_hours(self, log: TimeLog) -> float:
        raise NotImplementedError

    @abstractmethod
    def overtime_hours(self, log: TimeLog) -> float:
        raise NotImplementedError

    def worked(self, log: TimeLog) -> bool:
        """Whether the day counts towards days worked."""
        return log.has_any_clock_in
