"""Restore the store from a snapshot.

Usage: python scripts/restore.py <snapshot>

Destructive: the current store is replaced by the snapshot's contents.
"""

from __future__ import annotations

import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from src.worktrack_store.worktrack_store.core.exceptions import RestoreError
from src.worktrack_store.worktrack_store.main import open_store


def main(argv: list[str]) -> None:
    if len(argv) != 1:
        raise SystemExit("Usage: python scripts/restore.py <snapshot>")

    with open_store() as container:
        try:
            container.snapshots.restore(argv[0])
        except RestoreError as exc:
            raise SystemExit(f"Restore failed (store unchanged): {exc}")
        print(f"OK: Store {container.store.path} restored from {argv[0]}")


if __name__ == "__main__":
    main(sys.argv[1:])
