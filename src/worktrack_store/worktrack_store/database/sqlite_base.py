from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Tuple, Type, TypeVar

from ..core.exceptions import StorageError
from .connection import Store

E = TypeVar("E", bound=Enum)


@contextmanager
def db_cursor(store: Store, *, table: Optional[str] = None) -> Iterator[Tuple[sqlite3.Connection, sqlite3.Cursor]]:
    """One atomic unit of work against the store.

    Commits when the block exits normally and rolls back on any exception.
    SQLite errors are re-raised as StorageError naming `table`.
    """
    store.require_ready()
    with store.lock:
        conn = store.connection()
        try:
            conn.execute("BEGIN IMMEDIATE")
        except sqlite3.Error as exc:
            raise StorageError(f"Cannot start transaction on {table or 'store'}: {exc}", table=table, cause=exc) from exc

        cur = conn.cursor()
        try:
            yield conn, cur
            conn.execute("COMMIT")
        except sqlite3.Error as exc:
            _rollback(conn)
            raise StorageError(f"Storage failure on {table or 'store'}: {exc}", table=table, cause=exc) from exc
        except BaseException:
            _rollback(conn)
            raise
        finally:
            cur.close()


def _rollback(conn: sqlite3.Connection) -> None:
    if conn.in_transaction:
        conn.execute("ROLLBACK")


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return dict(row) if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return [dict(r) for r in rows or []]


def encode_bool(value: bool) -> int:
    return 1 if value else 0


def decode_bool(value: Any, *, column: str) -> bool:
    """Decode the 0/1 column encoding.

    Anything else means the file was written by something other than this store.
    """
    if isinstance(value, int) and value in (0, 1):
        return value == 1
    raise StorageError(f"Unexpected boolean encoding {value!r} in column {column}")


def decode_enum(value: Any, enum_cls: Type[E], *, column: str) -> E:
    try:
        return enum_cls(value)
    except ValueError:
        raise StorageError(f"Unexpected value {value!r} in column {column}") from None


def decode_float(value: Any, *, column: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise StorageError(f"Unexpected numeric value {value!r} in column {column}")
    return float(value)


def decode_optional_float(value: Any, *, column: str) -> Optional[float]:
    return None if value is None else decode_float(value, column=column)
