from __future__ import annotations

import json
import logging

import pytest

from console.audit_log import AuditLogRecorder, JsonFileAuditStore, MemoryAuditStore, MongoAuditStore
from console.models import AuditLogEntry


def entry(n: int) -> AuditLogEntry:
    return AuditLogEntry(
        timestamp=f"2026-10-18T10:00:{n:02d}+00:00",
        user_login="admin",
        employee_name=f"Employee {n}",
        system="CRM",
        old_status=bool(n % 2),
        new_status=not bool(n % 2),
    )


class FakeCursor:
    def __init__(self, docs):
        self._docs = docs

    def sort(self, keys):
        for field, _direction in reversed(keys):
            self._docs.sort(key=lambda doc: doc.get(field))
        return self

    def __iter__(self):
        for doc in self._docs:
            yield {key: value for key, value in doc.items() if key != "_id"}


class FakeCollection:
    """Stands in for a pymongo collection: insert_one plus find().sort()."""

    def __init__(self):
        self.docs = []

    def insert_one(self, doc):
        doc["_id"] = len(self.docs)
        self.docs.append(dict(doc))

    def find(self, criteria=None, projection=None):
        return FakeCursor(list(self.docs))


def test_memory_log_reads_newest_first() -> None:
    recorder = AuditLogRecorder(MemoryAuditStore())
    for n in range(4):
        recorder.append(entry(n))

    names = [item.employee_name for item in recorder.read_all()]
    assert names == ["Employee 3", "Employee 2", "Employee 1", "Employee 0"]


def test_record_stamps_a_timestamp() -> None:
    recorder = AuditLogRecorder(MemoryAuditStore())
    logged = recorder.record(
        user_login="admin", employee_name="Ana Silva", system="ERP", old_status=False, new_status=True
    )
    assert logged.timestamp
    assert recorder.read_all() == [logged]


def test_json_file_store_keeps_a_single_json_list(tmp_path) -> None:
    path = tmp_path / "history" / "log.json"
    store = JsonFileAuditStore(path)
    store.append(entry(1))
    store.append(entry(2))

    raw = json.loads(path.read_text(encoding="utf-8"))
    assert [doc["employeeName"] for doc in raw] == ["Employee 1", "Employee 2"]
    assert set(raw[0]) == {"timestamp", "userLogin", "employeeName", "system", "oldStatus", "newStatus"}
    assert AuditLogRecorder(JsonFileAuditStore(path)).read_all() == [entry(2), entry(1)]


def test_json_file_store_missing_file_is_empty(tmp_path) -> None:
    store = JsonFileAuditStore(tmp_path / "nested" / "log.json")
    assert store.read() == []
    store.append(entry(5))
    assert store.read() == [entry(5)]
    assert not (tmp_path / "nested" / "log.json.tmp").exists()


def test_corrupt_json_file_survives_append(tmp_path, caplog) -> None:
    path = tmp_path / "log.json"
    store = JsonFileAuditStore(path)
    for n in range(3):
        store.append(entry(n))
    truncated = path.read_text(encoding="utf-8")[:-5]
    path.write_text(truncated, encoding="utf-8")

    with caplog.at_level(logging.ERROR, logger="console.audit_log"):
        AuditLogRecorder(store).append(entry(9))

    assert path.read_text(encoding="utf-8") == truncated
    assert "Failed to persist audit entry" in caplog.text
    assert store.read() == []


def test_json_file_store_refuses_non_list_document(tmp_path) -> None:
    path = tmp_path / "log.json"
    path.write_text('{"logs": []}', encoding="utf-8")
    store = JsonFileAuditStore(path)

    with pytest.raises(ValueError):
        store.append(entry(1))
    assert json.loads(path.read_text(encoding="utf-8")) == {"logs": []}


def test_mongo_store_returns_oldest_first() -> None:
    collection = FakeCollection()
    store = MongoAuditStore(collection=collection)
    store.append(entry(2))
    store.append(entry(1))

    assert store.read() == [entry(1), entry(2)]
    assert AuditLogRecorder(store).read_all()[0] == entry(2)


def test_recorder_swallows_store_failures(caplog) -> None:
    class BrokenStore(MemoryAuditStore):
        def append(self, item):
            raise OSError("disk full")

        def read(self):
            raise OSError("disk gone")

    recorder = AuditLogRecorder(BrokenStore())
    with caplog.at_level(logging.ERROR):
        recorder.append(entry(1))
        assert recorder.read_all() == []

    assert "Failed to persist audit entry" in caplog.text
