from __future__ import annotations

from enum import Enum


class PunchType(str, Enum):
    """Direction of an attendance punch."""

    CHECK_IN = "check-in"
    CHECK_OUT = "check-out"


class ShiftName(str, Enum):
    """Shift the punch belongs to."""

    MORNING = "morning"
    GENERAL = "general"
    AFTERNOON = "afternoon"
    NIGHT = "night"


class LeaveType(str, Enum):
    FULL = "full"
    HALF = "half"


class LeaveCategory(str, Enum):
    SICK = "sick"
    CASUAL = "casual"
    EARNED = "earned"
    COMPENSATORY = "compensatory"


class LeaveStatus(str, Enum):
    """Approval lifecycle of a leave request."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class HolidayType(str, Enum):
    NATIONAL = "national"
    CUSTOM = "custom"


class SnapshotState(str, Enum):
    """States of the backup/restore manager."""

    IDLE = "idle"
    BACKING_UP = "backing-up"
    RESTORING = "restoring"
    FAILED = "failed"
