"""SQLite-backed implementation of ProductStore."""

from __future__ import annotations

import logging
import sqlite3
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Generator, Iterator, Mapping, Sequence

from invtrack.domain.exceptions import (
    InvalidFieldValueError,
    StorageNotInitializedError,
    StorageWriteFailedError,
)
from invtrack.domain.model import contract
from invtrack.domain.repository.product_store import ProductStore, Row

logger = logging.getLogger(__name__)

MEMORY = ":memory:"


class SqliteProductStore(ProductStore):
    """
    Single-file SQLite store for the ``products`` table.

    Every mutation goes through ``_transaction()``, which commits on
    success and rolls back on failure. ``open()`` is guarded by a lock so
    two threads opening the store for the first time do not race on
    table creation.
    """

    def __init__(self, path: Path | str = MEMORY) -> None:
        self.path = path if path == MEMORY else Path(path)
        self._conn: sqlite3.Connection | None = None
        self._lock = threading.Lock()

    # --- Lifecycle ------------------------------------------------------------

    @property
    def is_open(self) -> bool:
        return self._conn is not None

    def open(self) -> None:
        with self._lock:
            if self._conn is not None:
                return
            if isinstance(self.path, Path):
                self.path.parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(str(self.path), check_same_thread=False)
            conn.row_factory = sqlite3.Row

            stored_version = conn.execute("PRAGMA user_version").fetchone()[0]
            if stored_version and stored_version < contract.SCHEMA_VERSION:
                logger.warning(
                    "Schema version %s is older than %s; recreating %s",
                    stored_version, contract.SCHEMA_VERSION, contract.TABLE_NAME,
                )
                self._drop_and_create(conn)
            else:
                conn.execute(contract.CREATE_TABLE_SQL)
                conn.execute(f"PRAGMA user_version = {contract.SCHEMA_VERSION:d}")
                conn.commit()
            self._conn = conn
            logger.debug("Opened product store at %s", self.path)

    def recreate(self) -> None:
        with self._lock:
            conn = self._connection()
            self._drop_and_create(conn)
            logger.info("Recreated table %s", contract.TABLE_NAME)

    def close(self) -> None:
        with self._lock:
            if self._conn is not None:
                self._conn.close()
                self._conn = None

    # --- Reads ----------------------------------------------------------------

    def query(
        self,
        selection: str | None = None,
        selection_args: Sequence[Any] = (),
        projection: Sequence[str] | None = None,
        sort_order: str | None = None,
    ) -> Iterator[Row]:
        columns = ", ".join(_checked_columns(projection)) if projection else "*"
        sql = f"SELECT {columns} FROM {contract.TABLE_NAME}"
        if selection:
            sql += f" WHERE {selection}"
        if sort_order:
            sql += f" ORDER BY {sort_order}"
        logger.debug("query: %s %r", sql, tuple(selection_args))
        cursor = self._connection().execute(sql, tuple(selection_args))
        return _RowIterator(cursor)

    # --- Writes ---------------------------------------------------------------

    def insert(self, values: Mapping[str, Any]) -> int:
        columns = _checked_columns(values)
        placeholders = ", ".join("?" for _ in columns)
        sql = (
            f"INSERT INTO {contract.TABLE_NAME} ({', '.join(columns)}) "
            f"VALUES ({placeholders})"
        )
        with self._transaction("insert") as conn:
            cursor = conn.execute(sql, tuple(values[c] for c in columns))
        return cursor.lastrowid

    def update(
        self,
        selection: str | None,
        selection_args: Sequence[Any],
        values: Mapping[str, Any],
    ) -> int:
        columns = _checked_columns(values)
        set_parts = ", ".join(f"{c} = ?" for c in columns)
        sql = f"UPDATE {contract.TABLE_NAME} SET {set_parts}"
        if selection:
            sql += f" WHERE {selection}"
        params = tuple(values[c] for c in columns) + tuple(selection_args)
        with self._transaction("update") as conn:
            cursor = conn.execute(sql, params)
        return cursor.rowcount

    def delete(self, selection: str | None, selection_args: Sequence[Any]) -> int:
        sql = f"DELETE FROM {contract.TABLE_NAME}"
        if selection:
            sql += f" WHERE {selection}"
        with self._transaction("delete") as conn:
            cursor = conn.execute(sql, tuple(selection_args))
        return cursor.rowcount

    # --- Internal helpers -----------------------------------------------------

    def _connection(self) -> sqlite3.Connection:
        if self._conn is None:
            raise StorageNotInitializedError(
                f"Product store at {self.path} has not been opened"
            )
        return self._conn

    @contextmanager
    def _transaction(self, operation: str) -> Generator[sqlite3.Connection, None, None]:
        """Commit on success; roll back and wrap sqlite errors on failure."""
        conn = self._connection()
        try:
            yield conn
            conn.commit()
        except (sqlite3.Error, OverflowError) as exc:
            # OverflowError: an int parameter too large for SQLite INTEGER
            conn.rollback()
            logger.error("%s on %s failed: %s", operation, contract.TABLE_NAME, exc)
            raise StorageWriteFailedError(
                f"Could not {operation} {contract.TABLE_NAME}: {exc}"
            ) from exc

    @staticmethod
    def _drop_and_create(conn: sqlite3.Connection) -> None:
        conn.execute(contract.DROP_TABLE_SQL)
        conn.execute(contract.CREATE_TABLE_SQL)
        conn.execute(f"PRAGMA user_version = {contract.SCHEMA_VERSION:d}")
        conn.commit()


def _checked_columns(columns: Sequence[str] | Mapping[str, Any]) -> list[str]:
    """Column names are interpolated into SQL, so only known ones pass."""
    checked = list(columns)
    for column in checked:
        if column not in contract.ALL_COLUMNS:
            raise InvalidFieldValueError(column, "unknown column")
    return checked


class _RowIterator:
    """Yields rows as dicts; closes the sqlite cursor when exhausted or closed."""

    def __init__(self, cursor: sqlite3.Cursor) -> None:
        self._cursor: sqlite3.Cursor | None = cursor

    def __iter__(self) -> _RowIterator:
        return self

    def __next__(self) -> Row:
        if self._cursor is None:
            raise StopIteration
        row = self._cursor.fetchone()
        if row is None:
            self.close()
            raise StopIteration
        return dict(row)

    @property
    def closed(self) -> bool:
        return self._cursor is None

    def close(self) -> None:
        if self._cursor is not None:
            self._cursor.close()
            self._cursor = None
