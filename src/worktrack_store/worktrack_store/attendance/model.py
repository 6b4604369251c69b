from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import PunchType, ShiftName


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one check-in or check-out punch."""

    timestamp: str
    punch_type: PunchType
    shift: ShiftName
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    is_auto_detected: bool = False
    attendance_id: Optional[int] = None
