from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import LeaveCategory, LeaveStatus, LeaveType


@dataclass(frozen=True)
class Leave:
    """Domain entity: a leave request covering start_date..end_date."""

    start_date: str
    end_date: str
    leave_type: LeaveType
    category: LeaveCategory
    status: LeaveStatus = LeaveStatus.PENDING
    remarks: str = ""
    leave_id: Optional[int] = None
