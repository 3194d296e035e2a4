from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.locks import KeyedLock
from ..core.enums import ClockSlot
from ..core.exceptions import DomainError, NotFoundError, ValidationError
from ..users.repository import UserRepository
from .engine import apply_clock, new_log_id
from .model import TimeLog
from .repository import TimeLogRepository

logger = logging.getLogger(__name__)

LOG_SORTS = ("date-desc", "date-asc", "in-desc", "in-asc", "out-desc", "out-asc")

SLOT_LABELS = {
    ClockSlot.MORNING_IN: "Morning Time In",
    ClockSlot.MORNING_OUT: "Morning Time Out",
    ClockSlot.AFTERNOON_IN: "Afternoon Time In",
    ClockSlot.AFTERNOON_OUT: "Afternoon Time Out",
    ClockSlot.OVERTIME_IN: "Overtime In",
    ClockSlot.OVERTIME_OUT: "Overtime Out",
}


def parse_slot(value: Optional[str]) -> ClockSlot:
    try:
        return ClockSlot(value)
    except ValueError:
        raise ValidationError(f"Unknown clock slot: {value!r}") from None


class ClockService:
    """Use case: employees punch in/out; admins maintain the logs."""

    def __init__(
        self,
        timelogs: TimeLogRepository,
        users: UserRepository,
        *,
        locks: Optional[KeyedLock] = None,
        new_id: Callable[[], str] = new_log_id,
    ):
        self._timelogs = timelogs
        self._users = users
        self._locks = locks if locks is not None else KeyedLock()
        self._new_id = new_id

    def clock(self, user_id: str, slot: ClockSlot, *, now: Optional[datetime] = None) -> TimeLog:
        now = now or now_local()
        slot = parse_slot(slot)

        if not self._users.get_by_id(user_id):
            raise NotFoundError("Employee not found")

        # Read-validate-write must not interleave with another punch of the same day.
        with self._locks.hold((user_id, now.date())):
            existing = self._timelogs.get_for_user_and_date(user_id, now.date())
            try:
                log = apply_clock(existing, slot, now, user_id=user_id, new_id=self._new_id)
            except DomainError as e:
                logger.info("clock rejected user=%s slot=%s: %s", user_id, slot.value, e)
                raise
            self._timelogs.upsert(log)

        logger.info("clock user=%s slot=%s at=%s", user_id, slot.value, now.isoformat())
        return log

    def get_today_log(self, user_id: str, *, today: Optional[date] = None) -> TimeLog:
        """Stored log for the day, or an empty unsaved one."""

        today = today or now_local().date()
        log = self._timelogs.get_for_user_and_date(user_id, today)
        if log:
            return log
        return TimeLog(log_id=self._new_id(), user_id=user_id, work_date=today)

    def save_log(self, log: TimeLog) -> TimeLog:
        """Admin insert/edit. Sequencing rules do not apply to manual corrections."""

        if not log.user_id:
            raise ValidationError("Please select an employee.")
        if not log.work_date:
            raise ValidationError("Please select a date.")
        if not self._users.get_by_id(log.user_id):
            raise NotFoundError("Employee not found")

        with self._locks.hold((log.user_id, log.work_date)):
            # One record per (user, day): an existing day record keeps its id.
            existing = self._timelogs.get_for_user_and_date(log.user_id, log.work_date)
            if existing:
                log = replace(log, log_id=existing.log_id)
            elif not log.log_id:
                log = replace(log, log_id=self._new_id())
            self._timelogs.upsert(log)
        logger.info("log saved id=%s user=%s date=%s", log.log_id, log.user_id, log.work_date)
        return log

    def delete_log(self, log_id: str) -> None:
        if not self._timelogs.delete_by_id(log_id):
            raise NotFoundError("Log not found")
        logger.info("log deleted id=%s", log_id)

    def list_logs(self, *, user_id: Optional[str] = None, sort: str = "date-desc") -> Sequence[TimeLog]:
        if sort not in LOG_SORTS:
            raise ValidationError(f"Unknown sort: {sort}")

        logs = list(self._timelogs.list_for_user(user_id) if user_id else self._timelogs.list_all())

        field, direction = sort.split("-")
        reverse = direction == "desc"
        if field == "date":
            logs.sort(key=lambda l: l.work_date, reverse=reverse)
        elif field == "in":
            logs.sort(key=lambda l: _sortable(l.first_clock_in), reverse=reverse)
        else:
            logs.sort(key=lambda l: _sortable(l.last_clock_out), reverse=reverse)
        return logs


def _sortable(value: Optional[datetime]) -> str:
    # Missing punches sort before any real timestamp.
    return value.isoformat() if value else ""
