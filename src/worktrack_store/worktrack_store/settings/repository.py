from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Setting


class SettingRepository(Protocol):
    def insert(self, setting: Setting) -> int:
        raise NotImplementedError

    def upsert(self, key: str, value: str) -> int:
        """Insert `key` or replace its value; the row id is kept on replace."""

        raise NotImplementedError

    def get(self, key: str) -> Optional[Setting]:
        raise NotImplementedError

    def get_value(self, key: str, default: Optional[str] = None) -> Optional[str]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Setting]:
        raise NotImplementedError
