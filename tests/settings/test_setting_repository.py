from __future__ import annotations

import pytest

from src.worktrack_store.worktrack_store.core.exceptions import ValidationError
from src.worktrack_store.worktrack_store.settings.model import Setting


def test_upsert_twice_leaves_one_row_with_latest_value(container, store):
    first_id = container.settings_repo.upsert("k", "v1")
    second_id = container.settings_repo.upsert("k", "v2")

    with store.lock:
        rows = store.connection().execute("SELECT key, value FROM settings WHERE key='k'").fetchall()

    assert [tuple(r) for r in rows] == [("k", "v2")]
    assert first_id == second_id


def test_insert_behaves_like_upsert(container, row_count):
    repo = container.settings_repo
    repo.insert(Setting(key="theme", value="light"))
    repo.insert(Setting(key="theme", value="dark"))

    assert row_count("settings") == 1
    assert repo.get_value("theme") == "dark"


def test_get_missing_key(container):
    assert container.settings_repo.get("nope") is None
    assert container.settings_repo.get_value("nope", "fallback") == "fallback"


def test_list_all_is_sorted_by_key(container):
    repo = container.settings_repo
    repo.upsert("shift.default", "general")
    repo.upsert("auto_detect", "1")

    assert [s.key for s in repo.list_all()] == ["auto_detect", "shift.default"]


@pytest.mark.parametrize("key,value,field", [("", "x", "key"), ("k", None, "value"), ("k", 3, "value")])
def test_invalid_setting_is_rejected(container, row_count, key, value, field):
    with pytest.raises(ValidationError) as exc:
        container.settings_repo.upsert(key, value)

    assert exc.value.field == field
    assert row_count("settings") == 0
