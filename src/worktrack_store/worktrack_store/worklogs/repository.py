from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import WorkLog


class WorkLogRepository(Protocol):
    def insert(self, log: WorkLog) -> int:
        raise NotImplementedError

    def get(self, work_log_id: int) -> Optional[WorkLog]:
        raise NotImplementedError

    def query_by_range(self, start: str, end: str) -> Sequence[WorkLog]:
        raise NotImplementedError
