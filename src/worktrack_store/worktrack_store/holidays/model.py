from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import HolidayType


@dataclass(frozen=True)
class Holiday:
    """Domain entity: a day off, national or user-defined."""

    date: str
    name: str
    holiday_type: HolidayType = HolidayType.CUSTOM
    is_recurring: bool = False
    holiday_id: Optional[int] = None
