from __future__ import annotations

import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from src.worktrack_store.worktrack_store.database.bootstrap import initialize, list_tables
from src.worktrack_store.worktrack_store.main import open_store


def main() -> None:
    with open_store() as container:
        # Safe to repeat even when open_store() already created the tables.
        initialize(container.store)
        tables = list_tables(container.store)
        print(f"OK: Store ready -> {container.store.path} (tables={len(tables)}: {', '.join(tables)})")


if __name__ == "__main__":
    main()
