import os
from pathlib import Path

# Private data directory of the app; the store lives in <data_dir>/SQLite/.
STORE_CONFIG = {
    "data_dir": os.getenv("WORKTRACK_DATA_DIR", str(Path(__file__).resolve().parents[1] / "var" / "data")),
    "db_filename": os.getenv("WORKTRACK_DB_FILENAME", "attendance.db"),
    "busy_timeout": float(os.getenv("WORKTRACK_BUSY_TIMEOUT", "5")),
}

BACKUP_FILENAME = os.getenv("WORKTRACK_BACKUP_FILENAME", "backup.db")

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# Create missing tables on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_STORE = bool(int(os.getenv("AUTO_INIT_STORE", "1")))
