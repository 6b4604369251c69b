from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Dict, Optional, Sequence

from ..common.validators import optional_text, require_iso_date, require_number, require_unsaved
from ..core.constants import TABLE_WORK_LOGS
from ..database.connection import Store
from ..database.sqlite_base import db_cursor, decode_float, fetchall, fetchone
from .model import WorkLog
from .repository import WorkLogRepository

logger = logging.getLogger(__name__)


def _validate(log: WorkLog) -> WorkLog:
    require_unsaved(log.work_log_id, "work_log_id")
    return replace(
        log,
        date=require_iso_date(log.date, "date"),
        work_hours=require_number(log.work_hours, "work_hours", minimum=0),
        tasks=optional_text(log.tasks, "tasks") or "",
        meetings=optional_text(log.meetings, "meetings") or "",
        remarks=optional_text(log.remarks, "remarks") or "",
    )


def _to_log(r: Dict[str, Any]) -> WorkLog:
    return WorkLog(
        work_log_id=int(r["id"]),
        date=r["date"],
        work_hours=decode_float(r["work_hours"], column="work_logs.work_hours"),
        tasks=r.get("tasks") or "",
        meetings=r.get("meetings") or "",
        remarks=r.get("remarks") or "",
    )


class SQLiteWorkLogRepository(WorkLogRepository):
    def __init__(self, store: Store):
        self._store = store

    def insert(self, log: WorkLog) -> int:
        log = _validate(log)
        with db_cursor(self._store, table=TABLE_WORK_LOGS) as (_, cur):
            cur.execute(
                """
                INSERT INTO work_logs(date, tasks, meetings, work_hours, remarks)
                VALUES(?,?,?,?,?)
                """,
                (log.date, log.tasks, log.meetings, log.work_hours, log.remarks),
            )
            work_log_id = int(cur.lastrowid)
        logger.debug("Saved work log %s for %s (%.2fh)", work_log_id, log.date, log.work_hours)
        return work_log_id

    def get(self, work_log_id: int) -> Optional[WorkLog]:
        with db_cursor(self._store, table=TABLE_WORK_LOGS) as (_, cur):
            cur.execute(
                """
                SELECT id, date, tasks, meetings, work_hours, remarks
                FROM work_logs
                WHERE id=?
                """,
                (int(work_log_id),),
            )
            r = fetchone(cur)
        return _to_log(r) if r else None

    def query_by_range(self, start: str, end: str) -> Sequence[WorkLog]:
        require_iso_date(start, "start")
        require_iso_date(end, "end")
        with db_cursor(self._store, table=TABLE_WORK_LOGS) as (_, cur):
            cur.execute(
                """
                SELECT id, date, tasks, meetings, work_hours, remarks
                FROM work_logs
                WHERE date BETWEEN ? AND ?
                ORDER BY date DESC, id DESC
                """,
                (start, end),
            )
            rows = fetchall(cur)
        return [_to_log(r) for r in rows]
