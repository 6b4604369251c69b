from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Dict, Optional, Sequence

from ..common.validators import require_bool, require_enum, require_iso_date, require_non_empty, require_unsaved
from ..core.constants import TABLE_HOLIDAYS
from ..core.enums import HolidayType
from ..database.connection import Store
from ..database.sqlite_base import db_cursor, decode_bool, decode_enum, encode_bool, fetchall, fetchone
from .model import Holiday
from .repository import HolidayRepository

logger = logging.getLogger(__name__)


def _validate(holiday: Holiday) -> Holiday:
    require_unsaved(holiday.holiday_id, "holiday_id")
    return replace(
        holiday,
        date=require_iso_date(holiday.date, "date"),
        name=require_non_empty(holiday.name, "name"),
        holiday_type=require_enum(holiday.holiday_type, HolidayType, "holiday_type"),
        is_recurring=require_bool(holiday.is_recurring, "is_recurring"),
    )


def _to_holiday(r: Dict[str, Any]) -> Holiday:
    return Holiday(
        holiday_id=int(r["id"]),
        date=r["date"],
        name=r["name"],
        holiday_type=decode_enum(r["holiday_type"], HolidayType, column="holidays.holiday_type"),
        is_recurring=decode_bool(r["is_recurring"], column="holidays.is_recurring"),
    )


class SQLiteHolidayRepository(HolidayRepository):
    def __init__(self, store: Store):
        self._store = store

    def insert(self, holiday: Holiday) -> int:
        holiday = _validate(holiday)
        with db_cursor(self._store, table=TABLE_HOLIDAYS) as (_, cur):
            cur.execute(
                """
                INSERT INTO holidays(date, name, holiday_type, is_recurring)
                VALUES(?,?,?,?)
                """,
                (holiday.date, holiday.name, holiday.holiday_type.value, encode_bool(holiday.is_recurring)),
            )
            holiday_id = int(cur.lastrowid)
        logger.debug("Added holiday %s %r on %s", holiday_id, holiday.name, holiday.date)
        return holiday_id

    def get(self, holiday_id: int) -> Optional[Holiday]:
        with db_cursor(self._store, table=TABLE_HOLIDAYS) as (_, cur):
            cur.execute(
                "SELECT id, date, name, holiday_type, is_recurring FROM holidays WHERE id=?",
                (int(holiday_id),),
            )
            r = fetchone(cur)
        return _to_holiday(r) if r else None

    def query_by_range(self, start: str, end: str) -> Sequence[Holiday]:
        require_iso_date(start, "start")
        require_iso_date(end, "end")
        with db_cursor(self._store, table=TABLE_HOLIDAYS) as (_, cur):
            cur.execute(
                """
                SELECT id, date, name, holiday_type, is_recurring
                FROM holidays
                WHERE date BETWEEN ? AND ?
                ORDER BY date DESC, id DESC
                """,
                (start, end),
            )
            rows = fetchall(cur)
        return [_to_holiday(r) for r in rows]
