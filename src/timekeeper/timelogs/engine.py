"""Clock engine: validate and apply a single punch to a day's time-log.

The engine is pure. It never reads or writes storage; callers fetch the
current log, call :func:`apply_clock` and persist the returned value.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from ..core.enums import ClockSlot
from ..core.exceptions import ClockSequenceError, DuplicatePunchError
from .model import TimeLog


@dataclass(frozen=True)
class ClockRule:
    """Predecessor requirement of a slot.

    ``requires_any`` lists slots of which at least one must already be
    stamped. An empty tuple means the slot can always be punched.
    """

    requires_any: tuple[ClockSlot, ...] = ()
    error_message: str = ""

    def check(self, log: TimeLog) -> None:
        if not self.requires_any:
            return
        if not any(log.get(required) for required in self.requires_any):
            raise ClockSequenceError(self.error_message)


SLOT_RULES: dict[ClockSlot, ClockRule] = {
    ClockSlot.MORNING_IN: ClockRule(),
    ClockSlot.MORNING_OUT: ClockRule(
        requires_any=(ClockSlot.MORNING_IN,),
        error_message="You must clock in (morningIn) first.",
    ),
    ClockSlot.AFTERNOON_IN: ClockRule(),
    # Allows morningIn -> afternoonOut without break punches.
    ClockSlot.AFTERNOON_OUT: ClockRule(
        requires_any=(ClockSlot.MORNING_IN, ClockSlot.AFTERNOON_IN),
        error_message="You must clock in (Morning or Afternoon) first.",
    ),
    ClockSlot.OVERTIME_IN: ClockRule(),
    ClockSlot.OVERTIME_OUT: ClockRule(
        requires_any=(ClockSlot.OVERTIME_IN,),
        error_message="You must clock in (overtimeIn) first.",
    ),
}

DUPLICATE_PUNCH_MESSAGE = "Already recorded for this slot."


def new_log_id() -> str:
    return uuid.uuid4().hex


def empty_log(*, user_id: str, now: datetime, new_id: Callable[[], str] = new_log_id) -> TimeLog:
    return TimeLog(log_id=new_id(), user_id=user_id, work_date=now.date())


def apply_clock(
    log: Optional[TimeLog],
    slot: ClockSlot,
    now: datetime,
    *,
    user_id: str,
    new_id: Callable[[], str] = new_log_id,
) -> TimeLog:
    """Stamp ``slot`` with ``now`` and return the updated log.

    ``log`` is the stored record for the user's day, or ``None`` on the first
    punch of the day, in which case a new record is created.

    Raises:
        ClockSequenceError: an Out slot is punched before its In slot.
        DuplicatePunchError: the slot already holds a punch.
    """

    slot = ClockSlot(slot)
    current = log if log is not None else empty_log(user_id=user_id, now=now, new_id=new_id)

    SLOT_RULES[slot].check(current)
    if current.get(slot) is not None:
        raise DuplicatePunchError(DUPLICATE_PUNCH_MESSAGE)

    return current.with_punch(slot, now)
