from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path
from typing import Optional

from ..common.datetime_utils import snapshot_suffix
from ..core.constants import DEFAULT_BACKUP_FILENAME
from ..core.enums import SnapshotState
from ..core.exceptions import BackupError, RestoreError
from ..database.bootstrap import verify_schema
from ..database.connection import Store

logger = logging.getLogger(__name__)


def _copy_durably(src: Path, dst: Path) -> None:
    shutil.copyfile(src, dst)
    with dst.open("rb+") as f:
        os.fsync(f.fileno())


def _discard(path: Optional[Path]) -> None:
    if path is not None and path.exists():
        path.unlink()


class BackupRestoreManager:
    """Whole-file snapshots of the store.

    Both operations hold `Store.exclusive()` while they touch the live file, so
    no unit of work can commit in the middle of a copy or a swap. A copy is only
    moved into place after it has been verified.
    """

    def __init__(self, store: Store, *, backup_filename: str = DEFAULT_BACKUP_FILENAME):
        self._store = store
        self._backup_filename = backup_filename
        self.state = SnapshotState.IDLE

    @property
    def default_backup_path(self) -> Path:
        return Path(self._store.config.data_dir) / self._backup_filename

    def backup(self, destination: str | Path | None = None) -> Path:
        """Copy the live store to `destination` (default: `<data_dir>/backup.db`)."""
        dest = Path(destination) if destination is not None else self.default_backup_path
        source = self._store.path
        tmp: Optional[Path] = None
        self.state = SnapshotState.BACKING_UP
        logger.info("Backing up %s -> %s", source, dest)

        try:
            with self._store.exclusive():
                if not source.is_file():
                    raise BackupError(f"Store file {source} does not exist")
                dest.parent.mkdir(parents=True, exist_ok=True)
                tmp = dest.with_name(f".{dest.name}.{snapshot_suffix()}.tmp")
                _copy_durably(source, tmp)

            problem = verify_schema(tmp)
            if problem:
                raise BackupError(f"Backup copy is not usable: {problem}")
            os.replace(tmp, dest)
            tmp = None
        except BackupError:
            self._fail_backup(tmp)
            raise
        except OSError as exc:
            self._fail_backup(tmp)
            raise BackupError(f"Cannot back up {source} to {dest}: {exc}") from exc

        self.state = SnapshotState.IDLE
        logger.info("Backup written to %s", dest)
        return dest

    def _fail_backup(self, tmp: Optional[Path]) -> None:
        self.state = SnapshotState.FAILED
        try:
            _discard(tmp)
        except OSError:
            logger.exception("Could not remove incomplete backup %s", tmp)
        logger.error("Backup of %s failed", self._store.path)

    def restore(self, snapshot: str | Path) -> None:
        """Replace the live store with `snapshot`.

        The snapshot is verified, copied next to the live file, verified again and
        only then swapped in with an atomic rename, all while the store is held
        exclusively. On failure the live store is left as it was.
        """
        snapshot = Path(snapshot)
        target = self._store.path
        side: Optional[Path] = None
        self.state = SnapshotState.RESTORING
        logger.info("Restoring %s from %s", target, snapshot)

        try:
            with self._store.exclusive():
                problem = verify_schema(snapshot)
                if problem:
                    raise RestoreError(f"Snapshot rejected: {problem}")

                target.parent.mkdir(parents=True, exist_ok=True)
                side = target.with_name(f"{target.name}.restore-{snapshot_suffix()}.tmp")
                _copy_durably(snapshot, side)
                problem = verify_schema(side)
                if problem:
                    raise RestoreError(f"Restored copy is not usable: {problem}")

                self._swap_in(side)
                side = None
        except RestoreError:
            self._fail_restore(side)
            raise
        except OSError as exc:
            self._fail_restore(side)
            raise RestoreError(f"Cannot restore {target} from {snapshot}: {exc}") from exc

        self.state = SnapshotState.IDLE
        logger.info("Store %s restored from %s", target, snapshot)

    def _swap_in(self, side: Path) -> None:
        with self._store.exclusive():
            was_open = self._store.is_open
            self._store.close()
            try:
                os.replace(side, self._store.path)
            finally:
                if was_open:
                    self._store.open()

    def _fail_restore(self, side: Optional[Path]) -> None:
        self.state = SnapshotState.FAILED
        try:
            _discard(side)
        except OSError:
            logger.exception("Could not remove restore side file %s", side)
        logger.error("Restore of %s failed; active store left unchanged", self._store.path)
