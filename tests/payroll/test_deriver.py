from __future__ import annotations

from datetime import date, datetime

import pytest

from conftest import make_user
from timekeeper.core.enums import Role
from timekeeper.payroll.deriver import derive_payroll
from timekeeper.payroll.model import PayrollExtras
from timekeeper.timelogs.model import PunchPair, TimeLog


def _day(day: int, user_id: str = "u1", **segments) -> TimeLog:
    return TimeLog(log_id=f"{user_id}-{day}", user_id=user_id, work_date=date(2026, 1, day), **segments)


def _at(day: int, hour: int, minute: int = 0) -> datetime:
    return datetime(2026, 1, day, hour, minute)


def _full_day(day: int, user_id: str = "u1") -> TimeLog:
    return _day(
        day,
        user_id,
        morning=PunchPair(clock_in=_at(day, 9), clock_out=_at(day, 12)),
        afternoon=PunchPair(clock_in=_at(day, 13), clock_out=_at(day, 17)),
    )


def test_admin_is_excluded():
    users = [make_user("u1"), make_user("admin-1", role=Role.ADMIN, pin="0000")]

    entries = derive_payroll(users, [], {})

    assert [e.user_id for e in entries] == ["u1"]


def test_hours_pay_and_days_from_logs():
    user = make_user("u1", hourly_rate=100, overtime_rate=150)
    logs = [
        _full_day(5),
        _day(6, morning=PunchPair(clock_in=_at(6, 9)), afternoon=PunchPair(clock_out=_at(6, 17))),
        _day(7, overtime=PunchPair(clock_in=_at(7, 18), clock_out=_at(7, 20))),
    ]

    (entry,) = derive_payroll([user], logs, {})

    assert entry.total_regular_hours == pytest.approx(14)
    assert entry.total_overtime_hours == pytest.approx(2)
    assert entry.regular_pay == pytest.approx(1400)
    assert entry.overtime_pay == pytest.approx(300)
    assert entry.days_worked == 3
    assert entry.total_pay == pytest.approx(1700)


def test_missing_extras_mean_zero_adjustments():
    (entry,) = derive_payroll([make_user("u1")], [_full_day(5)], {})

    assert entry.incentives == 0
    assert entry.cash_advance == 0
    assert entry.thirty_percent == 0
    assert entry.total_pay == entry.regular_pay


def test_manual_hours_override_computed_hours():
    extras = {"u1": PayrollExtras(user_id="u1", manual_regular_hours=5, manual_overtime_hours=0)}
    logs = [_full_day(5), _full_day(6)]

    (entry,) = derive_payroll([make_user("u1", hourly_rate=10)], logs, extras)

    assert entry.total_regular_hours == 5
    assert entry.regular_pay == pytest.approx(50)
    assert entry.total_overtime_hours == 0


def test_zero_manual_hours_still_override():
    extras = {"u1": PayrollExtras(user_id="u1", manual_regular_hours=0)}

    (entry,) = derive_payroll([make_user("u1")], [_full_day(5)], extras)

    assert entry.total_regular_hours == 0


def test_days_override_only_when_positive():
    logs = [_full_day(5), _full_day(6)]

    (with_override,) = derive_payroll([make_user("u1")], logs, {"u1": PayrollExtras(user_id="u1", days_worked=22)})
    (without,) = derive_payroll([make_user("u1")], logs, {"u1": PayrollExtras(user_id="u1", days_worked=0)})

    assert with_override.days_worked == 22
    assert without.days_worked == 2


def test_total_pay_formula():
    user = make_user("u1", hourly_rate=100)
    extras = {
        "u1": PayrollExtras(
            user_id="u1",
            manual_regular_hours=1,
            incentives=10,
            transport_fee=5,
            cash_advance=20,
        )
    }

    (entry,) = derive_payroll([user], [], extras)

    assert entry.regular_pay == 100
    assert entry.overtime_pay == 0
    assert entry.total_pay == pytest.approx(95)


def test_total_pay_may_go_negative():
    extras = {"u1": PayrollExtras(user_id="u1", cash_advance=500)}

    (entry,) = derive_payroll([make_user("u1")], [], extras)

    assert entry.total_pay == -500


def test_logs_of_other_users_are_ignored():
    logs = [_full_day(5, "u1"), _full_day(5, "u2"), _full_day(6, "u2")]

    entries = derive_payroll([make_user("u1"), make_user("u2", pin="2222")], logs, {})

    assert [e.days_worked for e in entries] == [1, 2]
