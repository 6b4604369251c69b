from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Setting:
    key: str
    value: str
    setting_id: Optional[int] = None
