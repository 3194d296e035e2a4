from __future__ import annotations

import threading
from datetime import date, datetime, timedelta

import pytest

from conftest import InMemoryTimeLogs, InMemoryUsers, make_user
from timekeeper.common.locks import KeyedLock
from timekeeper.core.enums import ClockSlot
from timekeeper.core.exceptions import ClockSequenceError, DuplicatePunchError, NotFoundError, ValidationError
from timekeeper.timelogs.model import PunchPair, TimeLog
from timekeeper.timelogs.service import ClockService


@pytest.fixture
def service():
    return ClockService(InMemoryTimeLogs(), InMemoryUsers([make_user("u1"), make_user("u2", pin="2222")]))


def test_clock_persists_new_log(service, fixed_now):
    log = service.clock("u1", ClockSlot.MORNING_IN, now=fixed_now)

    stored = service.get_today_log("u1", today=fixed_now.date())
    assert stored == log
    assert stored.morning_in == fixed_now


def test_clock_updates_existing_day(service, fixed_now):
    service.clock("u1", ClockSlot.MORNING_IN, now=fixed_now)
    later = fixed_now + timedelta(hours=8)
    log = service.clock("u1", ClockSlot.AFTERNOON_OUT, now=later)

    assert log.morning_in == fixed_now
    assert log.afternoon_out == later
    assert len(service.list_logs(user_id="u1")) == 1


def test_rejected_punch_is_not_saved(service, fixed_now):
    with pytest.raises(ClockSequenceError):
        service.clock("u1", ClockSlot.MORNING_OUT, now=fixed_now)
    assert service.list_logs() == []


def test_duplicate_punch(service, fixed_now):
    service.clock("u1", ClockSlot.OVERTIME_IN, now=fixed_now)
    with pytest.raises(DuplicatePunchError):
        service.clock("u1", ClockSlot.OVERTIME_IN, now=fixed_now + timedelta(minutes=1))


def test_unknown_user(service, fixed_now):
    with pytest.raises(NotFoundError):
        service.clock("ghost", ClockSlot.MORNING_IN, now=fixed_now)


def test_unknown_slot(service, fixed_now):
    with pytest.raises(ValidationError):
        service.clock("u1", "lunchIn", now=fixed_now)


def test_today_log_is_empty_when_nothing_stored(service):
    log = service.get_today_log("u1", today=date(2026, 3, 1))
    assert log.work_date == date(2026, 3, 1)
    assert all(log.get(slot) is None for slot in ClockSlot)
    assert service.list_logs() == []


def test_next_day_starts_new_log(service, fixed_now):
    service.clock("u1", ClockSlot.MORNING_IN, now=fixed_now)
    service.clock("u1", ClockSlot.MORNING_IN, now=fixed_now + timedelta(days=1))
    assert len(service.list_logs(user_id="u1")) == 2


def test_save_log_requires_user_and_date(service):
    with pytest.raises(ValidationError, match="employee"):
        service.save_log(TimeLog(log_id="", user_id="", work_date=date(2026, 1, 1)))
    with pytest.raises(ValidationError, match="date"):
        service.save_log(TimeLog(log_id="", user_id="u1", work_date=None))


def test_save_log_reuses_existing_day_record(service, fixed_now):
    original = service.clock("u1", ClockSlot.MORNING_IN, now=fixed_now)

    corrected = TimeLog(
        log_id="",
        user_id="u1",
        work_date=fixed_now.date(),
        morning=PunchPair(clock_in=fixed_now - timedelta(minutes=30), clock_out=fixed_now + timedelta(hours=3)),
    )
    saved = service.save_log(corrected)

    assert saved.log_id == original.log_id
    assert service.list_logs() == [saved]


def test_save_log_with_foreign_id_keeps_one_record_per_day(service, fixed_now):
    original = service.clock("u1", ClockSlot.MORNING_IN, now=fixed_now)

    saved = service.save_log(TimeLog(log_id="other", user_id="u1", work_date=fixed_now.date()))

    same_day = [l for l in service.list_logs(user_id="u1") if l.work_date == fixed_now.date()]
    assert saved.log_id == original.log_id
    assert same_day == [saved]
    service.delete_log(saved.log_id)
    assert service.list_logs() == []


def test_save_log_keeps_given_id_for_new_day(service):
    saved = service.save_log(TimeLog(log_id="manual-1", user_id="u1", work_date=date(2026, 2, 2)))

    assert saved.log_id == "manual-1"


def test_delete_log(service, fixed_now):
    log = service.clock("u1", ClockSlot.MORNING_IN, now=fixed_now)
    service.delete_log(log.log_id)
    assert service.list_logs() == []
    with pytest.raises(NotFoundError):
        service.delete_log(log.log_id)


def test_list_logs_filter_and_sort(service):
    d1 = datetime(2026, 1, 5, 9, 0)
    d2 = datetime(2026, 1, 6, 7, 0)
    service.clock("u1", ClockSlot.MORNING_IN, now=d1)
    service.clock("u1", ClockSlot.MORNING_IN, now=d2)
    service.clock("u2", ClockSlot.AFTERNOON_IN, now=datetime(2026, 1, 5, 13, 0))

    assert [l.work_date for l in service.list_logs(user_id="u1", sort="date-asc")] == [d1.date(), d2.date()]
    assert [l.first_clock_in for l in service.list_logs(sort="in-desc")][0] == d2
    assert [l.first_clock_in for l in service.list_logs(sort="in-asc")][0] == d1

    with pytest.raises(ValidationError):
        service.list_logs(sort="name-asc")


def test_concurrent_punches_for_same_day_only_one_wins(fixed_now):
    timelogs = InMemoryTimeLogs()
    service = ClockService(timelogs, InMemoryUsers([make_user("u1")]), locks=KeyedLock())
    results: list[str] = []

    def punch():
        try:
            service.clock("u1", ClockSlot.MORNING_IN, now=fixed_now)
            results.append("ok")
        except DuplicatePunchError:
            results.append("duplicate")

    threads = [threading.Thread(target=punch) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert sorted(results) == ["duplicate"] * 7 + ["ok"]
    assert len(timelogs.list_all()) == 1
