"""Example: using the repositories directly (no UI layer).

Records a check-in and prints today's punches, then takes a backup.
"""

from datetime import datetime, timezone

from src.worktrack_store.worktrack_store.attendance.model import AttendanceRecord
from src.worktrack_store.worktrack_store.core.enums import PunchType, ShiftName
from src.worktrack_store.worktrack_store.main import open_store


def main():
    with open_store() as container:
        now = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
        container.attendance_repo.insert(
            AttendanceRecord(timestamp=now, punch_type=PunchType.CHECK_IN, shift=ShiftName.GENERAL)
        )
        day = now[:10]
        print(container.attendance_repo.query_by_range(f"{day}T00:00:00Z", f"{day}T23:59:59Z"))
        print(container.snapshots.backup())


if __name__ == "__main__":
    main()
