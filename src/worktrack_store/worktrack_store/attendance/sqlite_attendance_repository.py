from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Dict, Optional, Sequence

from ..common.validators import (
    optional_number,
    require_bool,
    require_enum,
    require_iso_instant,
    require_unsaved,
)
from ..core.constants import TABLE_ATTENDANCE
from ..core.enums import PunchType, ShiftName
from ..database.connection import Store
from ..database.sqlite_base import (
    db_cursor,
    decode_bool,
    decode_enum,
    decode_optional_float,
    encode_bool,
    fetchall,
    fetchone,
)
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


def _validate(record: AttendanceRecord) -> AttendanceRecord:
    require_unsaved(record.attendance_id, "attendance_id")
    return replace(
        record,
        timestamp=require_iso_instant(record.timestamp, "timestamp"),
        punch_type=require_enum(record.punch_type, PunchType, "punch_type"),
        shift=require_enum(record.shift, ShiftName, "shift"),
        latitude=optional_number(record.latitude, "latitude"),
        longitude=optional_number(record.longitude, "longitude"),
        is_auto_detected=require_bool(record.is_auto_detected, "is_auto_detected"),
    )


def _to_record(r: Dict[str, Any]) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["id"]),
        timestamp=r["timestamp"],
        punch_type=decode_enum(r["punch_type"], PunchType, column="attendance.punch_type"),
        shift=decode_enum(r["shift"], ShiftName, column="attendance.shift"),
        latitude=decode_optional_float(r.get("latitude"), column="attendance.latitude"),
        longitude=decode_optional_float(r.get("longitude"), column="attendance.longitude"),
        is_auto_detected=decode_bool(r["is_auto_detected"], column="attendance.is_auto_detected"),
    )


class SQLiteAttendanceRepository(AttendanceRepository):
    def __init__(self, store: Store):
        self._store = store

    def insert(self, record: AttendanceRecord) -> int:
        record = _validate(record)
        with db_cursor(self._store, table=TABLE_ATTENDANCE) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance(timestamp, punch_type, shift, latitude, longitude, is_auto_detected)
                VALUES(?,?,?,?,?,?)
                """,
                (
                    record.timestamp,
                    record.punch_type.value,
                    record.shift.value,
                    record.latitude,
                    record.longitude,
                    encode_bool(record.is_auto_detected),
                ),
            )
            attendance_id = int(cur.lastrowid)
        logger.debug("Saved %s punch %s at %s", record.punch_type.value, attendance_id, record.timestamp)
        return attendance_id

    def get(self, attendance_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._store, table=TABLE_ATTENDANCE) as (_, cur):
            cur.execute(
                """
                SELECT id, timestamp, punch_type, shift, latitude, longitude, is_auto_detected
                FROM attendance
                WHERE id=?
                """,
                (int(attendance_id),),
            )
            r = fetchone(cur)
        return _to_record(r) if r else None

    def query_by_range(self, start: str, end: str) -> Sequence[AttendanceRecord]:
        require_iso_instant(start, "start")
        require_iso_instant(end, "end")
        with db_cursor(self._store, table=TABLE_ATTENDANCE) as (_, cur):
            cur.execute(
                """
                SELECT id, timestamp, punch_type, shift, latitude, longitude, is_auto_detected
                FROM attendance
                WHERE timestamp BETWEEN ? AND ?
                ORDER BY timestamp DESC, id DESC
                """,
                (start, end),
            )
            rows = fetchall(cur)
        return [_to_record(r) for r in rows]
