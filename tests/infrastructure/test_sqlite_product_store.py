"""Tests for the SQLite storage engine.

File-backed tests use pytest's ``tmp_path`` so they leave no artefacts.
"""

import sqlite3
import threading

import pytest

from invtrack.domain.exceptions import (
    InvalidFieldValueError,
    StorageNotInitializedError,
    StorageWriteFailedError,
)
from invtrack.domain.model import contract
from invtrack.infrastructure.persistence.sqlite_product_store import SqliteProductStore
from tests.fakes import widget_values


@pytest.fixture
def store():
    s = SqliteProductStore()
    s.open()
    yield s
    s.close()


class TestOpen:

    def test_creates_file_and_table(self, tmp_path):
        path = tmp_path / "nested" / "inventory.db"
        s = SqliteProductStore(path)
        s.open()
        s.close()

        assert path.exists()
        conn = sqlite3.connect(path)
        tables = {r[0] for r in conn.execute("SELECT name FROM sqlite_master WHERE type='table'")}
        version = conn.execute("PRAGMA user_version").fetchone()[0]
        conn.close()
        assert contract.TABLE_NAME in tables
        assert version == contract.SCHEMA_VERSION

    def test_reopen_keeps_data(self, tmp_path):
        path = tmp_path / "inventory.db"
        s = SqliteProductStore(path)
        s.open()
        s.insert(widget_values())
        s.close()

        reopened = SqliteProductStore(path)
        reopened.open()
        assert [r["name"] for r in reopened.query()] == ["Widget"]
        reopened.close()

    def test_open_is_idempotent(self, store):
        store.insert(widget_values())
        store.open()
        assert len(list(store.query())) == 1

    def test_concurrent_first_open(self, tmp_path):
        s = SqliteProductStore(tmp_path / "inventory.db")
        barrier = threading.Barrier(8)
        errors = []

        def opener():
            try:
                barrier.wait()
                s.open()
            except Exception as exc:  # pragma: no cover - surfaced by the assert
                errors.append(exc)

        threads = [threading.Thread(target=opener) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert errors == []
        assert s.is_open
        s.close()

    def test_older_schema_version_is_recreated(self, tmp_path, monkeypatch):
        path = tmp_path / "inventory.db"
        s = SqliteProductStore(path)
        s.open()
        s.insert(widget_values())
        s.close()

        monkeypatch.setattr(contract, "SCHEMA_VERSION", contract.SCHEMA_VERSION + 1)
        upgraded = SqliteProductStore(path)
        upgraded.open()

        assert list(upgraded.query()) == []
        upgraded.close()
        conn = sqlite3.connect(path)
        assert conn.execute("PRAGMA user_version").fetchone()[0] == contract.SCHEMA_VERSION
        conn.close()


class TestNotInitialized:

    def test_query_fails_fast(self):
        with pytest.raises(StorageNotInitializedError, match="has not been opened"):
            SqliteProductStore().query()

    def test_insert_fails_fast(self):
        with pytest.raises(StorageNotInitializedError):
            SqliteProductStore().insert(widget_values())

    def test_closed_store_rejects_writes(self, store):
        store.close()
        with pytest.raises(StorageNotInitializedError):
            store.delete(None, ())

    def test_recreate_requires_open(self):
        with pytest.raises(StorageNotInitializedError):
            SqliteProductStore().recreate()


class TestPrimitives:

    def test_insert_returns_sequential_ids(self, store):
        assert store.insert(widget_values()) == 1
        assert store.insert(widget_values()) == 2

    def test_ids_not_reused_after_delete(self, store):
        store.insert(widget_values())
        store.delete("id = ?", (1,))
        assert store.insert(widget_values()) == 2

    def test_query_with_projection(self, store):
        store.insert(widget_values())
        assert list(store.query(projection=["id", "name"])) == [{"id": 1, "name": "Widget"}]

    def test_query_unknown_projection_column(self, store):
        with pytest.raises(InvalidFieldValueError, match="unknown column"):
            store.query(projection=["id", "colour"])

    def test_query_sort_order(self, store):
        store.insert(widget_values(name="B"))
        store.insert(widget_values(name="A"))
        assert [r["name"] for r in store.query(sort_order="name ASC")] == ["A", "B"]

    def test_update_counts_matched_rows(self, store):
        store.insert(widget_values(quantity=0))
        store.insert(widget_values(quantity=0))
        store.insert(widget_values(quantity=1))
        assert store.update("quantity = ?", (0,), {"quantity": 5}) == 2
        assert store.update("id = ?", (99,), {"quantity": 5}) == 0

    def test_delete_counts_removed_rows(self, store):
        store.insert(widget_values())
        store.insert(widget_values())
        assert store.delete(None, ()) == 2
        assert store.delete(None, ()) == 0

    def test_recreate_drops_rows(self, store):
        store.insert(widget_values())
        store.recreate()
        assert list(store.query()) == []
        assert store.insert(widget_values()) == 1


class TestWriteFailures:

    def test_constraint_violation_surfaces(self, store):
        with pytest.raises(StorageWriteFailedError, match="Could not insert") as exc_info:
            store.insert({"name": "No phone, no photo"})
        assert isinstance(exc_info.value.__cause__, sqlite3.IntegrityError)

    def test_failed_write_is_rolled_back(self, store):
        store.insert(widget_values())
        with pytest.raises(StorageWriteFailedError):
            store.update("id = ?", (1,), {"name": None})
        assert [r["name"] for r in store.query()] == ["Widget"]


class TestRowIterator:

    def test_exhaustion_closes_cursor(self, store):
        store.insert(widget_values())
        rows = store.query()
        assert len(list(rows)) == 1
        assert rows.closed

    def test_close_before_reading(self, store):
        store.insert(widget_values())
        rows = store.query()
        rows.close()
        assert rows.closed
        assert list(rows) == []
