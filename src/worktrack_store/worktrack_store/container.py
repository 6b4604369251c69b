from __future__ import annotations

from dataclasses import dataclass

from .attendance.sqlite_attendance_repository import SQLiteAttendanceRepository
from .backup.service import BackupRestoreManager
from .core.constants import DEFAULT_BACKUP_FILENAME
from .database.bootstrap import initialize
from .database.connection import Store
from .holidays.sqlite_holiday_repository import SQLiteHolidayRepository
from .leaves.sqlite_leave_repository import SQLiteLeaveRepository
from .settings.sqlite_setting_repository import SQLiteSettingRepository
from .worklogs.sqlite_work_log_repository import SQLiteWorkLogRepository


@dataclass(frozen=True)
class Container:
    store: Store

    attendance_repo: SQLiteAttendanceRepository
    work_logs_repo: SQLiteWorkLogRepository
    leaves_repo: SQLiteLeaveRepository
    holidays_repo: SQLiteHolidayRepository
    settings_repo: SQLiteSettingRepository

    snapshots: BackupRestoreManager

    def close(self) -> None:
        self.store.close()

    def __enter__(self) -> "Container":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def build_container(
    *,
    store_config: dict,
    backup_filename: str = DEFAULT_BACKUP_FILENAME,
    auto_init: bool = True,
) -> Container:
    store = Store.from_dict(store_config).open()
    if auto_init:
        initialize(store)

    return Container(
        store=store,
        attendance_repo=SQLiteAttendanceRepository(store),
        work_logs_repo=SQLiteWorkLogRepository(store),
        leaves_repo=SQLiteLeaveRepository(store),
        holidays_repo=SQLiteHolidayRepository(store),
        settings_repo=SQLiteSettingRepository(store),
        snapshots=BackupRestoreManager(store, backup_filename=backup_filename),
    )
