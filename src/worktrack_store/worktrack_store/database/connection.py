from __future__ import annotations

import logging
import sqlite3
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional

from ..core.constants import DEFAULT_BUSY_TIMEOUT_SECONDS, DEFAULT_DB_FILENAME, DEFAULT_DB_SUBDIR
from ..core.exceptions import SchemaError, StorageError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoreConfig:
    data_dir: Path
    db_filename: str = DEFAULT_DB_FILENAME
    busy_timeout: float = DEFAULT_BUSY_TIMEOUT_SECONDS

    @property
    def db_path(self) -> Path:
        return Path(self.data_dir) / DEFAULT_DB_SUBDIR / self.db_filename


def _as_config(store_config: dict) -> StoreConfig:
    return StoreConfig(
        data_dir=Path(store_config["data_dir"]),
        db_filename=str(store_config.get("db_filename", DEFAULT_DB_FILENAME)),
        busy_timeout=float(store_config.get("busy_timeout", DEFAULT_BUSY_TIMEOUT_SECONDS)),
    )


class Store:
    """The single open handle onto the SQLite file.

    Create one per process at startup and close it at shutdown. Every unit of
    work goes through `lock`, so only one transaction runs at a time.
    """

    def __init__(self, config: StoreConfig):
        self._config = config
        self._lock = threading.RLock()
        self._conn: Optional[sqlite3.Connection] = None
        self._ready = False

    @classmethod
    def from_dict(cls, store_config: dict) -> "Store":
        return cls(_as_config(store_config))

    @property
    def config(self) -> StoreConfig:
        return self._config

    @property
    def path(self) -> Path:
        return self._config.db_path

    @property
    def lock(self) -> threading.RLock:
        return self._lock

    @property
    def is_open(self) -> bool:
        return self._conn is not None

    def open(self) -> "Store":
        with self._lock:
            if self._conn is None:
                self._conn = self._connect()
                logger.debug("Opened store %s", self.path)
        return self

    def close(self) -> None:
        with self._lock:
            if self._conn is not None:
                self._conn.close()
                self._conn = None
                logger.debug("Closed store %s", self.path)

    def _connect(self) -> sqlite3.Connection:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(
                str(self.path),
                timeout=self._config.busy_timeout,
                isolation_level=None,
                check_same_thread=False,
            )
        except (OSError, sqlite3.Error) as exc:
            raise StorageError(f"Cannot open store at {self.path}: {exc}", cause=exc) from exc
        conn.row_factory = sqlite3.Row
        return conn

    def connection(self) -> sqlite3.Connection:
        """Return the open connection; callers must hold `lock`."""
        if self._conn is None:
            raise StorageError(f"Store at {self.path} is not open")
        return self._conn

    def mark_ready(self) -> None:
        self._ready = True

    def require_ready(self) -> None:
        if not self._ready:
            raise SchemaError("Store used before initialize() was called")

    @contextmanager
    def exclusive(self) -> Iterator[None]:
        """Block every other unit of work for the duration of the block."""
        with self._lock:
            yield

    def __enter__(self) -> "Store":
        return self.open()

    def __exit__(self, *exc_info) -> None:
        self.close()
