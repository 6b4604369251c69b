from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class WorkLog:
    """Domain entity: what was done on one working day."""

    date: str
    work_hours: float
    tasks: str = ""
    meetings: str = ""
    remarks: str = ""
    work_log_id: Optional[int] = None
