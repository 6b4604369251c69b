from __future__ import annotations

import pytest

from src.worktrack_store.worktrack_store.container import build_container
from src.worktrack_store.worktrack_store.database.connection import Store


@pytest.fixture
def store_config(tmp_path) -> dict:
    return {"data_dir": str(tmp_path / "data"), "db_filename": "attendance.db", "busy_timeout": 1.0}


@pytest.fixture
def container(store_config):
    c = build_container(store_config=store_config)
    yield c
    c.close()


@pytest.fixture
def store(container) -> Store:
    return container.store


@pytest.fixture
def row_count(store):
    def _count(table: str) -> int:
        with store.lock:
            return store.connection().execute(f"SELECT COUNT(*) FROM {table}").fetchone()[0]

    return _count


@pytest.fixture
def dump_tables(store):
    """Every row of every table, for before/after comparisons."""

    def _dump() -> dict:
        with store.lock:
            conn = store.connection()
            return {
                table: [tuple(r) for r in conn.execute(f"SELECT * FROM {table} ORDER BY id").fetchall()]
                for table in ("attendance", "work_logs", "leaves", "holidays", "settings")
            }

    return _dump
