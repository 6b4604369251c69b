from __future__ import annotations

import sqlite3
import threading
from pathlib import Path

import pytest

from src.worktrack_store.worktrack_store.attendance.model import AttendanceRecord
from src.worktrack_store.worktrack_store.backup import service
from src.worktrack_store.worktrack_store.core.enums import (
    HolidayType,
    LeaveCategory,
    LeaveType,
    PunchType,
    ShiftName,
    SnapshotState,
)
from src.worktrack_store.worktrack_store.core.exceptions import BackupError, RestoreError
from src.worktrack_store.worktrack_store.database.connection import Store
from src.worktrack_store.worktrack_store.holidays.model import Holiday
from src.worktrack_store.worktrack_store.leaves.model import Leave
from src.worktrack_store.worktrack_store.worklogs.model import WorkLog


@pytest.fixture
def populated(container):
    container.attendance_repo.insert(
        AttendanceRecord(timestamp="2024-01-10T09:00:00Z", punch_type=PunchType.CHECK_IN, shift=ShiftName.GENERAL)
    )
    container.attendance_repo.insert(
        AttendanceRecord(
            timestamp="2024-01-10T18:00:00Z",
            punch_type=PunchType.CHECK_OUT,
            shift=ShiftName.GENERAL,
            latitude=1.0,
            is_auto_detected=True,
        )
    )
    container.work_logs_repo.insert(WorkLog(date="2024-01-10", work_hours=8, tasks="Reviews"))
    container.leaves_repo.insert(
        Leave(start_date="2024-01-20", end_date="2024-01-20", leave_type=LeaveType.HALF, category=LeaveCategory.CASUAL)
    )
    container.holidays_repo.insert(Holiday(date="2024-01-01", name="New Year", holiday_type=HolidayType.NATIONAL))
    container.settings_repo.upsert("theme", "dark")
    return container


def _leftovers(directory):
    return [p.name for p in directory.iterdir() if p.name.endswith(".tmp")]


def test_backup_then_restore_leaves_every_table_identical(populated, dump_tables, tmp_path):
    before = dump_tables()

    snapshot = populated.snapshots.backup(tmp_path / "snap.db")
    populated.snapshots.restore(snapshot)

    assert dump_tables() == before
    assert populated.snapshots.state is SnapshotState.IDLE


def test_restore_discards_writes_made_after_the_backup(populated, dump_tables, tmp_path):
    before = dump_tables()
    snapshot = populated.snapshots.backup(tmp_path / "snap.db")

    populated.settings_repo.upsert("theme", "light")
    populated.work_logs_repo.insert(WorkLog(date="2024-01-11", work_hours=6))

    populated.snapshots.restore(snapshot)

    assert dump_tables() == before
    assert populated.settings_repo.get_value("theme") == "dark"
    # The store stays usable through the same repositories.
    assert populated.work_logs_repo.insert(WorkLog(date="2024-01-12", work_hours=5)) > 0


def test_backup_defaults_to_data_dir(populated, store_config):
    snapshot = populated.snapshots.backup()

    assert snapshot == populated.snapshots.default_backup_path
    assert snapshot.parent == Path(store_config["data_dir"])
    assert snapshot.read_bytes() == populated.store.path.read_bytes()


@pytest.mark.parametrize("make_snapshot", ["missing", "corrupt", "foreign"])
def test_bad_snapshot_is_rejected_and_store_untouched(populated, dump_tables, tmp_path, make_snapshot):
    snapshot = tmp_path / "bad.db"
    if make_snapshot == "corrupt":
        snapshot.write_bytes(b"\x00garbage" * 512)
    elif make_snapshot == "foreign":
        conn = sqlite3.connect(snapshot)
        conn.execute("CREATE TABLE notes (id INTEGER PRIMARY KEY, body TEXT)")
        conn.commit()
        conn.close()
    before = dump_tables()

    with pytest.raises(RestoreError):
        populated.snapshots.restore(snapshot)

    assert dump_tables() == before
    assert populated.snapshots.state is SnapshotState.FAILED
    assert _leftovers(populated.store.path.parent) == []


def test_failed_swap_keeps_original_store(populated, dump_tables, tmp_path, monkeypatch):
    snapshot = populated.snapshots.backup(tmp_path / "snap.db")
    populated.settings_repo.upsert("theme", "light")
    before = dump_tables()

    def broken_replace(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr(service.os, "replace", broken_replace)

    with pytest.raises(RestoreError):
        populated.snapshots.restore(snapshot)

    monkeypatch.undo()
    assert dump_tables() == before
    assert populated.store.is_open
    assert _leftovers(populated.store.path.parent) == []


def test_backup_of_missing_store_fails(store_config, tmp_path):
    store = Store.from_dict(store_config)
    manager = service.BackupRestoreManager(store)

    with pytest.raises(BackupError):
        manager.backup(tmp_path / "out" / "snap.db")

    assert manager.state is SnapshotState.FAILED
    assert not (tmp_path / "out" / "snap.db").exists()


def test_unwritable_destination_fails_without_partial_file(populated, tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")

    with pytest.raises(BackupError):
        populated.snapshots.backup(blocker / "snap.db")

    assert _leftovers(tmp_path) == []
    assert populated.snapshots.state is SnapshotState.FAILED


def test_unverifiable_copy_is_discarded(populated, tmp_path, monkeypatch):
    out_dir = tmp_path / "out"
    monkeypatch.setattr(service, "verify_schema", lambda path: "simulated short write")

    with pytest.raises(BackupError):
        populated.snapshots.backup(out_dir / "snap.db")

    assert not (out_dir / "snap.db").exists()
    assert _leftovers(out_dir) == []


def test_backup_blocks_writers_until_the_copy_is_done(populated, tmp_path, monkeypatch):
    real_copy = service._copy_durably
    writer_done = threading.Event()
    seen = {}

    def write_setting():
        populated.settings_repo.upsert("during", "backup")
        writer_done.set()

    def copy_while_a_writer_waits(src, dst):
        writer = threading.Thread(target=write_setting)
        writer.start()
        seen["blocked"] = not writer_done.wait(0.3)
        real_copy(src, dst)
        seen["writer"] = writer

    monkeypatch.setattr(service, "_copy_durably", copy_while_a_writer_waits)

    snapshot = populated.snapshots.backup(tmp_path / "snap.db")
    seen["writer"].join(timeout=5)

    assert seen["blocked"] is True
    assert writer_done.is_set()
    conn = sqlite3.connect(snapshot)
    try:
        assert conn.execute("SELECT COUNT(*) FROM settings WHERE key='during'").fetchone()[0] == 0
    finally:
        conn.close()
    assert populated.settings_repo.get_value("during") == "backup"


def test_restore_blocks_writers_until_the_swap_is_done(populated, tmp_path, monkeypatch):
    snapshot = populated.snapshots.backup(tmp_path / "snap.db")
    real_copy = service._copy_durably
    writer_done = threading.Event()
    seen = {}

    def write_setting():
        populated.settings_repo.upsert("mid", "restore")
        writer_done.set()

    def copy_while_a_writer_waits(src, dst):
        writer = threading.Thread(target=write_setting)
        writer.start()
        seen["blocked"] = not writer_done.wait(0.3)
        real_copy(src, dst)
        seen["writer"] = writer

    monkeypatch.setattr(service, "_copy_durably", copy_while_a_writer_waits)

    populated.snapshots.restore(snapshot)
    seen["writer"].join(timeout=5)

    assert seen["blocked"] is True
    assert writer_done.is_set()
    # The write lands on the restored store instead of being erased by the swap.
    assert populated.settings_repo.get_value("mid") == "restore"
    assert populated.settings_repo.get_value("theme") == "dark"
