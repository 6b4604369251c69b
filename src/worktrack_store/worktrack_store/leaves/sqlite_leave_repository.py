from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Dict, Optional, Sequence

from ..common.validators import optional_text, require_enum, require_iso_date, require_unsaved
from ..core.constants import TABLE_LEAVES
from ..core.enums import LeaveCategory, LeaveStatus, LeaveType
from ..core.exceptions import ValidationError
from ..database.connection import Store
from ..database.sqlite_base import db_cursor, decode_enum, fetchall, fetchone
from .model import Leave
from .repository import LeaveRepository

logger = logging.getLogger(__name__)


def _validate(leave: Leave) -> Leave:
    require_unsaved(leave.leave_id, "leave_id")
    leave = replace(
        leave,
        start_date=require_iso_date(leave.start_date, "start_date"),
        end_date=require_iso_date(leave.end_date, "end_date"),
        leave_type=require_enum(leave.leave_type, LeaveType, "leave_type"),
        category=require_enum(leave.category, LeaveCategory, "category"),
        status=require_enum(leave.status, LeaveStatus, "status"),
        remarks=optional_text(leave.remarks, "remarks") or "",
    )
    if leave.status is not LeaveStatus.PENDING:
        raise ValidationError("status", "a new leave must start as pending")
    if leave.start_date > leave.end_date:
        # Ordering is left to the caller; only note it.
        logger.warning("Leave ends before it starts: %s > %s", leave.start_date, leave.end_date)
    return leave


def _to_leave(r: Dict[str, Any]) -> Leave:
    return Leave(
        leave_id=int(r["id"]),
        start_date=r["start_date"],
        end_date=r["end_date"],
        leave_type=decode_enum(r["leave_type"], LeaveType, column="leaves.leave_type"),
        category=decode_enum(r["category"], LeaveCategory, column="leaves.category"),
        status=decode_enum(r["status"], LeaveStatus, column="leaves.status"),
        remarks=r.get("remarks") or "",
    )


class SQLiteLeaveRepository(LeaveRepository):
    def __init__(self, store: Store):
        self._store = store

    def insert(self, leave: Leave) -> int:
        leave = _validate(leave)
        with db_cursor(self._store, table=TABLE_LEAVES) as (_, cur):
            cur.execute(
                """
                INSERT INTO leaves(start_date, end_date, leave_type, category, status, remarks)
                VALUES(?,?,?,?,?,?)
                """,
                (
                    leave.start_date,
                    leave.end_date,
                    leave.leave_type.value,
                    leave.category.value,
                    leave.status.value,
                    leave.remarks,
                ),
            )
            leave_id = int(cur.lastrowid)
        logger.debug("Submitted %s leave %s (%s..%s)", leave.category.value, leave_id, leave.start_date, leave.end_date)
        return leave_id

    def get(self, leave_id: int) -> Optional[Leave]:
        with db_cursor(self._store, table=TABLE_LEAVES) as (_, cur):
            cur.execute(
                """
                SELECT id, start_date, end_date, leave_type, category, status, remarks
                FROM leaves
                WHERE id=?
                """,
                (int(leave_id),),
            )
            r = fetchone(cur)
        return _to_leave(r) if r else None

    def query_by_range(self, start: str, end: str) -> Sequence[Leave]:
        require_iso_date(start, "start")
        require_iso_date(end, "end")
        with db_cursor(self._store, table=TABLE_LEAVES) as (_, cur):
            cur.execute(
                """
                SELECT id, start_date, end_date, leave_type, category, status, remarks
                FROM leaves
                WHERE start_date BETWEEN ? AND ?
                ORDER BY start_date DESC, id DESC
                """,
                (start, end),
            )
            rows = fetchall(cur)
        return [_to_leave(r) for r in rows]

    def update_status(self, leave_id: int, status: LeaveStatus) -> bool:
        status = require_enum(status, LeaveStatus, "status")
        if status is LeaveStatus.PENDING:
            raise ValidationError("status", "a leave can only be moved to approved or rejected")

        with db_cursor(self._store, table=TABLE_LEAVES) as (_, cur):
            cur.execute(
                """
                UPDATE leaves
                SET status=?
                WHERE id=? AND status=?
                """,
                (status.value, int(leave_id), LeaveStatus.PENDING.value),
            )
            changed = cur.rowcount > 0
        if changed:
            logger.debug("Leave %s marked %s", leave_id, status.value)
        return changed
