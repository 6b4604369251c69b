from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Sequence

from ..common.validators import require_non_empty, require_unsaved
from ..core.constants import TABLE_SETTINGS
from ..core.exceptions import ValidationError
from ..database.connection import Store
from ..database.sqlite_base import db_cursor, fetchall, fetchone
from .model import Setting
from .repository import SettingRepository

logger = logging.getLogger(__name__)


def _to_setting(r: Dict[str, Any]) -> Setting:
    return Setting(setting_id=int(r["id"]), key=r["key"], value=r["value"])


class SQLiteSettingRepository(SettingRepository):
    def __init__(self, store: Store):
        self._store = store

    def insert(self, setting: Setting) -> int:
        require_unsaved(setting.setting_id, "setting_id")
        return self.upsert(setting.key, setting.value)

    def upsert(self, key: str, value: str) -> int:
        require_non_empty(key, "key")
        if not isinstance(value, str):
            raise ValidationError("value", "must be text")

        with db_cursor(self._store, table=TABLE_SETTINGS) as (_, cur):
            cur.execute(
                """
                INSERT INTO settings(key, value)
                VALUES(?,?)
                ON CONFLICT(key) DO UPDATE SET value=excluded.value
                """,
                (key, value),
            )
            cur.execute("SELECT id FROM settings WHERE key=?", (key,))
            setting_id = int(fetchone(cur)["id"])
        logger.debug("Setting %r stored (id=%s)", key, setting_id)
        return setting_id

    def get(self, key: str) -> Optional[Setting]:
        with db_cursor(self._store, table=TABLE_SETTINGS) as (_, cur):
            cur.execute("SELECT id, key, value FROM settings WHERE key=?", (key,))
            r = fetchone(cur)
        return _to_setting(r) if r else None

    def get_value(self, key: str, default: Optional[str] = None) -> Optional[str]:
        setting = self.get(key)
        return setting.value if setting else default

    def list_all(self) -> Sequence[Setting]:
        with db_cursor(self._store, table=TABLE_SETTINGS) as (_, cur):
            cur.execute("SELECT id, key, value FROM settings ORDER BY key")
            rows = fetchall(cur)
        return [_to_setting(r) for r in rows]
