from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for access checks and payroll eligibility."""

    USER = "user"
    ADMIN = "admin"


class Segment(str, Enum):
    """The three punch pairs of a working day."""

    MORNING = "morning"
    AFTERNOON = "afternoon"
    OVERTIME = "overtime"


class PunchKind(str, Enum):
    IN = "in"
    OUT = "out"


class ClockSlot(str, Enum):
    """Stampable fields of a time-log. Values are the wire names."""

    MORNING_IN = "morningIn"
    MORNING_OUT = "morningOut"
    AFTERNOON_IN = "afternoonIn"
    AFTERNOON_OUT = "afternoonOut"
    OVERTIME_IN = "overtimeIn"
    OVERTIME_OUT = "overtimeOut"


SLOT_POSITIONS: dict[ClockSlot, tuple[Segment, PunchKind]] = {
    ClockSlot.MORNING_IN: (Segment.MORNING, PunchKind.IN),
    ClockSlot.MORNING_OUT: (Segment.MORNING, PunchKind.OUT),
    ClockSlot.AFTERNOON_IN: (Segment.AFTERNOON, PunchKind.IN),
    ClockSlot.AFTERNOON_OUT: (Segment.AFTERNOON, PunchKind.OUT),
    ClockSlot.OVERTIME_IN: (Segment.OVERTIME, PunchKind.IN),
    ClockSlot.OVERTIME_OUT: (Segment.OVERTIME, PunchKind.OUT),
}


class AttendanceCategory(str, Enum):
    """Attendance buckets, in tie-break order for the dominant category."""

    PRESENT = "present"
    LATE = "late"
    ABSENT = "absent"
    LEAVE = "leave"


class HealthSeverity(str, Enum):
    HEALTHY = "healthy"
    DISENGAGEMENT = "disengagement"
    RISK = "risk"
    LEAVE = "leave"
