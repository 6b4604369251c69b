import os
import tempfile

STORE_CONFIG = {
    "data_dir": os.getenv("WORKTRACK_DATA_DIR", os.path.join(tempfile.gettempdir(), "worktrack-test")),
    "db_filename": "attendance.db",
    "busy_timeout": 1.0,
}

BACKUP_FILENAME = "backup.db"

DEBUG = False
TESTING = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")

AUTO_INIT_STORE = True
