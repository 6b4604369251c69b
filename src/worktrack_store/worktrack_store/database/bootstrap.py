from __future__ import annotations

import logging
import sqlite3
from pathlib import Path
from typing import Iterable, Optional

from ..core.constants import ALL_TABLES, REQUIRED_COLUMNS
from ..core.exceptions import SchemaError
from .connection import Store

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().with_name("schema.sql")


def _iter_sql_statements(sql: str) -> Iterable[str]:
    # Minimal SQL splitter for the schema file (handles ';' inside quotes).
    buf: list[str] = []
    in_single = False
    in_double = False

    for ch in sql:
        if ch == "'" and not in_double:
            in_single = not in_single
            buf.append(ch)
            continue

        if ch == '"' and not in_single:
            in_double = not in_double
            buf.append(ch)
            continue

        if ch == ";" and not in_single and not in_double:
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue

        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def _table_columns(conn: sqlite3.Connection, table: str) -> set[str]:
    rows = conn.execute(f"PRAGMA table_info({table})").fetchall()
    return {row[1] for row in rows}


def _check_columns(conn: sqlite3.Connection) -> None:
    for table, required in REQUIRED_COLUMNS.items():
        present = _table_columns(conn, table)
        if not present:
            raise SchemaError(f"Table {table} is missing", table=table)
        missing = [c for c in required if c not in present]
        if missing:
            raise SchemaError(
                f"Table {table} has an incompatible layout (missing columns: {', '.join(missing)})",
                table=table,
            )


def initialize(store: Store, *, schema_path: str | Path = SCHEMA_PATH) -> None:
    """Create the five tables if absent and check the existing ones.

    Idempotent. Any rejection by SQLite is fatal and raised as SchemaError.
    """
    try:
        sql = Path(schema_path).read_text(encoding="utf-8")
    except OSError as exc:
        raise SchemaError(f"Cannot read schema file {schema_path}: {exc}") from exc
    store.open()

    with store.lock:
        conn = store.connection()
        try:
            conn.execute("BEGIN IMMEDIATE")
            for stmt in _iter_sql_statements(sql):
                conn.execute(stmt)
            _check_columns(conn)
            conn.execute("COMMIT")
        except sqlite3.Error as exc:
            if conn.in_transaction:
                conn.execute("ROLLBACK")
            logger.error("Schema initialization failed for %s: %s", store.path, exc)
            raise SchemaError(f"Cannot create schema in {store.path}: {exc}") from exc
        except SchemaError:
            if conn.in_transaction:
                conn.execute("ROLLBACK")
            logger.error("Schema check failed for %s", store.path)
            raise

    store.mark_ready()
    logger.info("Store schema ready at %s", store.path)


def list_tables(store: Store) -> list[str]:
    with store.lock:
        rows = store.connection().execute(
            "SELECT name FROM sqlite_master WHERE type='table' AND name NOT LIKE 'sqlite_%' ORDER BY name"
        ).fetchall()
    return [row[0] for row in rows]


def verify_schema(db_path: str | Path) -> Optional[str]:
    """Check a database file for integrity and the five tables.

    Returns None when the file is usable, otherwise a description of the problem.
    Opens the file read-only so a bad snapshot is never modified.
    """
    db_path = Path(db_path)
    if not db_path.is_file():
        return f"{db_path} does not exist"

    try:
        conn = sqlite3.connect(f"{db_path.resolve().as_uri()}?mode=ro", uri=True)
    except sqlite3.Error as exc:
        return f"{db_path} cannot be opened: {exc}"
    try:
        result = conn.execute("PRAGMA integrity_check").fetchone()
        if not result or result[0] != "ok":
            return f"{db_path} failed integrity check: {result[0] if result else 'no result'}"
        for table in ALL_TABLES:
            present = _table_columns(conn, table)
            missing = [c for c in REQUIRED_COLUMNS[table] if c not in present]
            if missing:
                return f"{db_path} table {table} is missing columns: {', '.join(missing)}"
        return None
    except sqlite3.Error as exc:
        return f"{db_path} is not a readable store: {exc}"
    finally:
        conn.close()
