import json

import pytest

from db import store as store_module
from db.store import StateStore
from models.state import SubjectProgress
from utils.errors import StateWriteError
from utils.events import MAX_LOG_ENTRIES, log_event


def test_first_load_creates_state_file(tmp_path):
    path = tmp_path / "data" / "state.json"
    store = StateStore(path)
    state = store.load()
    assert path.exists()
    on_disk = json.loads(path.read_text(encoding="utf-8"))
    assert set(on_disk) == {
        "user", "srs", "progress", "lessonProgress", "assessmentState", "vocabularyProgress", "log",
    }
    assert on_disk["user"]["level"] == 1
    assert state.user.xp == 0


def test_transaction_commits_with_camel_case_fields(tmp_path):
    store = StateStore(tmp_path / "state.json")
    store.load()
    with store.transaction() as state:
        state.user.xp = 40
    on_disk = json.loads((tmp_path / "state.json").read_text(encoding="utf-8"))
    assert on_disk["user"]["xp"] == 40
    assert "displayName" in on_disk["user"]
    assert not (tmp_path / "state.json.tmp").exists()

    reloaded = StateStore(tmp_path / "state.json")
    assert reloaded.load().user.xp == 40


def test_failed_write_keeps_previous_state(tmp_path, monkeypatch):
    store = StateStore(tmp_path / "state.json")
    store.load()

    def broken_write(path, data):
        raise OSError("disk full")

    monkeypatch.setattr(store_module, "write_json_atomic", broken_write)
    with pytest.raises(StateWriteError):
        with store.transaction() as state:
            state.user.xp = 99
    assert store.snapshot().user.xp == 0


def test_exception_inside_transaction_discards_changes(tmp_path):
    store = StateStore(tmp_path / "state.json")
    store.load()
    with pytest.raises(RuntimeError):
        with store.transaction() as state:
            state.user.level = 5
            raise RuntimeError("boom")
    assert store.snapshot().user.level == 1


def test_unreadable_state_falls_back_to_defaults(tmp_path):
    path = tmp_path / "state.json"
    path.write_text("{broken", encoding="utf-8")
    store = StateStore(path)
    assert store.load().user.level == 1
    assert path.read_text(encoding="utf-8") == "{broken"


def test_reset_restores_defaults(tmp_path):
    store = StateStore(tmp_path / "state.json")
    store.load()
    with store.transaction() as state:
        state.user.badges.append("Level 2")
        state.progress["s"] = SubjectProgress(correct=1, attempts=1)
    store.reset()
    state = store.snapshot()
    assert state.user.badges == []
    assert state.progress == {}


def test_event_log_is_capped():
    log = []
    for index in range(MAX_LOG_ENTRIES + 5):
        log_event(log, "answer", now=index, itemId=f"i{index}")
    assert len(log) == MAX_LOG_ENTRIES
    assert log[0]["ts"] == 5
    assert log[-1] == {"ts": MAX_LOG_ENTRIES + 4, "type": "answer", "itemId": f"i{MAX_LOG_ENTRIES + 4}"}
