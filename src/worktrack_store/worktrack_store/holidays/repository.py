from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Holiday


class HolidayRepository(Protocol):
    def insert(self, holiday: Holiday) -> int:
        raise NotImplementedError

    def get(self, holiday_id: int) -> Optional[Holiday]:
        raise NotImplementedError

    def query_by_range(self, start: str, end: str) -> Sequence[Holiday]:
        raise NotImplementedError
