from __future__ import annotations

from datetime import date, datetime

import pytest

from timekeeper.core.enums import ClockSlot
from timekeeper.core.exceptions import ClockSequenceError, DuplicatePunchError
from timekeeper.timelogs.engine import SLOT_RULES, apply_clock
from timekeeper.timelogs.model import PunchPair, TimeLog

T0 = datetime(2026, 1, 31, 9, 0)
T1 = datetime(2026, 1, 31, 17, 0)


def _log(**segments) -> TimeLog:
    return TimeLog(log_id="log-1", user_id="u1", work_date=date(2026, 1, 31), **segments)


def test_first_morning_in_creates_log_with_only_that_slot():
    log = apply_clock(None, ClockSlot.MORNING_IN, T0, user_id="u1", new_id=lambda: "new-id")

    assert log.log_id == "new-id"
    assert log.user_id == "u1"
    assert log.work_date == date(2026, 1, 31)
    assert log.morning_in == T0
    assert [s for s in ClockSlot if log.get(s) is not None] == [ClockSlot.MORNING_IN]


def test_morning_out_without_log_requires_clock_in():
    with pytest.raises(ClockSequenceError, match=r"must clock in \(morningIn\) first"):
        apply_clock(None, ClockSlot.MORNING_OUT, T0, user_id="u1")


def test_overtime_out_requires_overtime_in():
    log = _log(morning=PunchPair(clock_in=T0))
    with pytest.raises(ClockSequenceError, match=r"\(overtimeIn\)"):
        apply_clock(log, ClockSlot.OVERTIME_OUT, T1, user_id="u1")


def test_afternoon_out_after_morning_in_needs_no_break_punches():
    log = apply_clock(_log(morning=PunchPair(clock_in=T0)), ClockSlot.AFTERNOON_OUT, T1, user_id="u1")

    assert log.afternoon_out == T1
    assert log.morning_out is None
    assert log.afternoon_in is None


def test_afternoon_out_after_afternoon_in_only():
    log = apply_clock(_log(afternoon=PunchPair(clock_in=T0)), ClockSlot.AFTERNOON_OUT, T1, user_id="u1")
    assert log.afternoon_out == T1


def test_afternoon_out_on_empty_log_fails():
    with pytest.raises(ClockSequenceError, match="Morning or Afternoon"):
        apply_clock(_log(), ClockSlot.AFTERNOON_OUT, T1, user_id="u1")


@pytest.mark.parametrize("slot", list(ClockSlot))
def test_second_punch_of_same_slot_is_rejected(slot):
    log = _log(
        morning=PunchPair(clock_in=T0),
        afternoon=PunchPair(clock_in=T0),
        overtime=PunchPair(clock_in=T0),
    )
    if log.get(slot) is None:
        log = apply_clock(log, slot, T1, user_id="u1")

    with pytest.raises(DuplicatePunchError, match="Already recorded"):
        apply_clock(log, slot, T1, user_id="u1")


def test_in_slots_have_no_predecessor():
    log = apply_clock(None, ClockSlot.OVERTIME_IN, T1, user_id="u1")
    log = apply_clock(log, ClockSlot.AFTERNOON_IN, T1, user_id="u1")
    assert log.overtime_in == T1
    assert log.afternoon_in == T1


def test_rejected_punch_leaves_input_untouched():
    log = _log(morning=PunchPair(clock_in=T0, clock_out=T1))
    with pytest.raises(DuplicatePunchError):
        apply_clock(log, ClockSlot.MORNING_OUT, datetime(2026, 1, 31, 18, 0), user_id="u1")
    assert log.morning_out == T1


def test_stamp_keeps_full_datetime():
    now = datetime(2026, 1, 31, 12, 1, 2, 345678)
    log = apply_clock(_log(morning=PunchPair(clock_in=T0)), ClockSlot.MORNING_OUT, now, user_id="u1")
    assert log.morning_out == now


def test_slot_given_as_wire_name():
    log = apply_clock(None, "overtimeIn", T0, user_id="u1")
    assert log.overtime_in == T0


def test_every_slot_has_a_rule():
    assert set(SLOT_RULES) == set(ClockSlot)
