# tests/test_history.py
import json

import pytest

from fileops.core.history import JsonDocumentStore, OperationHistoryLog, new_entry
from fileops.errors import FatalIO


@pytest.fixture
def log(tmp_path):
    return OperationHistoryLog.in_directory(tmp_path / "ops")


def test_empty_when_nothing_recorded(log):
    assert log.load("demo") == []


def test_append_is_newest_first_and_timestamped(log, tmp_path):
    log.append("demo", new_entry("delete", 2, True, errors=0))
    log.append("demo", new_entry("copy", 1, False, errors=1))

    entries = log.load("demo")

    assert [e["operation"] for e in entries] == ["copy", "delete"]
    assert entries[0]["errors"] == 1
    assert entries[0]["timestamp"].endswith("Z")
    assert entries[0]["id"] != entries[1]["id"]
    # One JSON document per project
    stored = json.loads((tmp_path / "ops" / "demo-history.json").read_text(encoding="utf-8"))
    assert stored == entries


def test_history_is_bounded(tmp_path):
    log = OperationHistoryLog(JsonDocumentStore(tmp_path), limit=100)
    for i in range(105):
        log.append("demo", new_entry(f"op-{i}", 1, True))

    entries = log.load("demo")

    assert len(entries) == 100
    assert entries[0]["operation"] == "op-104"
    assert entries[-1]["operation"] == "op-5"


def test_projects_are_separate(log):
    log.append("one", new_entry("delete", 1, True))

    assert log.load("two") == []


def test_clear_is_idempotent(log):
    log.append("demo", new_entry("delete", 1, True))
    log.clear("demo")
    log.clear("demo")

    assert log.load("demo") == []


def test_unreadable_document_fails_load_but_not_append(tmp_path):
    store = JsonDocumentStore(tmp_path, suffix="-history.json")
    store.path_for("demo").write_text("{not json", encoding="utf-8")
    log = OperationHistoryLog(store)

    with pytest.raises(FatalIO):
        log.load("demo")

    assert log.append("demo", new_entry("delete", 1, True)) is not None
    assert [e["operation"] for e in log.load("demo")] == ["delete"]


def test_append_failure_is_swallowed(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("a file, not a directory", encoding="utf-8")
    log = OperationHistoryLog.in_directory(blocker / "ops")

    assert log.append("demo", new_entry("delete", 1, True)) is None


def test_append_stamps_a_copy_of_the_entry(log):
    entry = new_entry("delete", 1, True)

    record = log.append("demo", entry)

    assert entry.timestamp is None
    assert record["timestamp"].endswith("Z")
    assert log.load("demo")[0]["timestamp"] == record["timestamp"]
