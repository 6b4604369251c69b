import os
from pathlib import Path

STORE_CONFIG = {
    "data_dir": os.getenv("WORKTRACK_DATA_DIR", str(Path.home() / ".worktrack")),
    "db_filename": os.getenv("WORKTRACK_DB_FILENAME", "attendance.db"),
    "busy_timeout": float(os.getenv("WORKTRACK_BUSY_TIMEOUT", "5")),
}

BACKUP_FILENAME = os.getenv("WORKTRACK_BACKUP_FILENAME", "backup.db")

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_STORE = bool(int(os.getenv("AUTO_INIT_STORE", "1")))
