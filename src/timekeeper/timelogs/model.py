from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import format_iso_datetime, parse_iso_date, parse_iso_datetime
from ..core.enums import SLOT_POSITIONS, ClockSlot, PunchKind, Segment


@dataclass(frozen=True)
class PunchPair:
    """One in/out segment of a working day."""

    clock_in: Optional[datetime] = None
    clock_out: Optional[datetime] = None

    def get(self, kind: PunchKind) -> Optional[datetime]:
        return self.clock_in if kind == PunchKind.IN else self.clock_out

    def with_punch(self, kind: PunchKind, at: Optional[datetime]) -> "PunchPair":
        if kind == PunchKind.IN:
            return replace(self, clock_in=at)
        return replace(self, clock_out=at)


@dataclass(frozen=True)
class TimeLog:
    """Domain entity: all punches of one user on one calendar day."""

    log_id: str
    user_id: str
    work_date: date
    morning: PunchPair = field(default_factory=PunchPair)
    afternoon: PunchPair = field(default_factory=PunchPair)
    overtime: PunchPair = field(default_factory=PunchPair)

    def segment(self, segment: Segment) -> PunchPair:
        return {
            Segment.MORNING: self.morning,
            Segment.AFTERNOON: self.afternoon,
            Segment.OVERTIME: self.overtime,
        }[segment]

    def get(self, slot: ClockSlot) -> Optional[datetime]:
        segment, kind = SLOT_POSITIONS[slot]
        return self.segment(segment).get(kind)

    def with_punch(self, slot: ClockSlot, at: Optional[datetime]) -> "TimeLog":
        segment, kind = SLOT_POSITIONS[slot]
        updated = self.segment(segment).with_punch(kind, at)
        return replace(self, **{segment.value: updated})

    @property
    def morning_in(self) -> Optional[datetime]:
        return self.morning.clock_in

    @property
    def morning_out(self) -> Optional[datetime]:
        return self.morning.clock_out

    @property
    def afternoon_in(self) -> Optional[datetime]:
        return self.afternoon.clock_in

    @property
    def afternoon_out(self) -> Optional[datetime]:
        return self.afternoon.clock_out

    @property
    def overtime_in(self) -> Optional[datetime]:
        return self.overtime.clock_in

    @property
    def overtime_out(self) -> Optional[datetime]:
        return self.overtime.clock_out

    @property
    def has_any_clock_in(self) -> bool:
        return bool(self.morning_in or self.afternoon_in or self.overtime_in)

    @property
    def first_clock_in(self) -> Optional[datetime]:
        return self.morning_in or self.afternoon_in or self.overtime_in

    @property
    def last_clock_out(self) -> Optional[datetime]:
        return self.overtime_out or self.afternoon_out or self.morning_out

    def to_dict(self) -> dict:
        out = {
            "id": self.log_id,
            "userId": self.user_id,
            "date": self.work_date.strftime("%Y-%m-%d"),
        }
        for slot in ClockSlot:
            out[slot.value] = format_iso_datetime(self.get(slot))
        return out

    @classmethod
    def from_dict(cls, data: dict) -> "TimeLog":
        raw_date = data.get("date")
        log = cls(
            log_id=str(data.get("id") or ""),
            user_id=str(data.get("userId") or ""),
            work_date=parse_iso_date(str(raw_date)) if raw_date else None,
        )
        for slot in ClockSlot:
            log = log.with_punch(slot, parse_iso_datetime(data.get(slot.value)))
        return log
