from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def insert(self, record: AttendanceRecord) -> int:
        raise NotImplementedError

    def get(self, attendance_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def query_by_range(self, start: str, end: str) -> Sequence[AttendanceRecord]:
        """Punches with `start <= timestamp <= end`, most recent first."""

        raise NotImplementedError
