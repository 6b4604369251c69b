"""Constants and defaults.

Note: Keep table names and file names here so the schema, repositories and
backup code agree on them.
"""

DEFAULT_DB_FILENAME = "attendance.db"
DEFAULT_DB_SUBDIR = "SQLite"
DEFAULT_BACKUP_FILENAME = "backup.db"
DEFAULT_BUSY_TIMEOUT_SECONDS = 5.0

TABLE_ATTENDANCE = "attendance"
TABLE_WORK_LOGS = "work_logs"
TABLE_LEAVES = "leaves"
TABLE_HOLIDAYS = "holidays"
TABLE_SETTINGS = "settings"

# Columns every table must expose; used to detect an incompatible pre-existing schema.
REQUIRED_COLUMNS = {
    TABLE_ATTENDANCE: ("id", "timestamp", "punch_type", "shift", "latitude", "longitude", "is_auto_detected"),
    TABLE_WORK_LOGS: ("id", "date", "tasks", "meetings", "work_hours", "remarks"),
    TABLE_LEAVES: ("id", "start_date", "end_date", "leave_type", "category", "status", "remarks"),
    TABLE_HOLIDAYS: ("id", "date", "name", "holiday_type", "is_recurring"),
    TABLE_SETTINGS: ("id", "key", "value"),
}

ALL_TABLES = tuple(REQUIRED_COLUMNS)
