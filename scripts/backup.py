"""Back up the store.

Usage: python scripts/backup.py [destination]

Without a destination the snapshot is written to <data_dir>/backup.db.
"""

from __future__ import annotations

import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from src.worktrack_store.worktrack_store.core.exceptions import BackupError
from src.worktrack_store.worktrack_store.main import open_store


def main(argv: list[str]) -> None:
    destination = argv[0] if argv else None
    with open_store() as container:
        try:
            out_file = container.snapshots.backup(destination)
        except BackupError as exc:
            raise SystemExit(f"Backup failed: {exc}")
        print(f"OK: Backup created: {out_file}")


if __name__ == "__main__":
    main(sys.argv[1:])
