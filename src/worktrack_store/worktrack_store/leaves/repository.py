from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import LeaveStatus
from .model import Leave


class LeaveRepository(Protocol):
    def insert(self, leave: Leave) -> int:
        raise NotImplementedError

    def get(self, leave_id: int) -> Optional[Leave]:
        raise NotImplementedError

    def query_by_range(self, start: str, end: str) -> Sequence[Leave]:
        """Leaves whose start_date falls within [start, end]."""

        raise NotImplementedError

    def update_status(self, leave_id: int, status: LeaveStatus) -> bool:
        """Decide a pending leave. Returns False if it is missing or already decided."""

        raise NotImplementedError
