"""Store handle — one owned connection, its lock, and the open/closed state."""

from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Callable, Generator, TypeVar

from sqlitecollections.config import StoreConfig
from sqlitecollections.cursor import RowIterator
from sqlitecollections.errors import ReadOnlyError, StoreClosedError
from sqlitecollections.locking import HandleLock
from sqlitecollections.storage.connection import enable_query_only, normalize_path, open_connection
from sqlitecollections.storage.schema import ensure_table, validate_table_name

logger = logging.getLogger(__name__)

T = TypeVar("T")
H = TypeVar("H", bound="StoreHandle")


class StoreHandle:
    """Base class for SQLite-backed collections.

    A handle exclusively owns one connection. Every statement runs while
    holding the handle's HandleLock, so a handle can be shared between
    threads; independent handles on the same file rely on SQLite's own file
    locking. Once closed, every operation raises StoreClosedError.
    """

    kind: str = ""
    default_table: str = ""

    def __init__(
        self,
        database_path: str | Path,
        *,
        read_only: bool = False,
        table_name: str | None = None,
        config: StoreConfig | None = None,
    ) -> None:
        self._config = config or StoreConfig()
        self._read_only = read_only
        self._table = validate_table_name(table_name or self.default_table)
        self._path = normalize_path(database_path, self._config.file_extension)
        self._lock = HandleLock()
        self._closed = False
        self._conn = open_connection(
            self._path,
            timeout=self._config.busy_timeout_seconds,
            journal_mode=self._config.journal_mode.upper(),
            synchronous=self._config.synchronous.upper(),
        )
        try:
            ensure_table(self._conn, self.kind, self._table)
            if read_only:
                enable_query_only(self._conn)
        except BaseException:
            self._conn.close()
            raise
        logger.info(
            "Opened %s store at %s (table=%s, read_only=%s)",
            self.kind, self._path, self._table, read_only,
        )

    @classmethod
    def open_read_write(
        cls: type[H],
        database_path: str | Path,
        table_name: str | None = None,
        config: StoreConfig | None = None,
    ) -> H:
        """Open a handle that accepts mutations."""
        return cls(database_path, read_only=False, table_name=table_name, config=config)

    @classmethod
    def open_read_only(
        cls: type[H],
        database_path: str | Path,
        table_name: str | None = None,
        config: StoreConfig | None = None,
    ) -> H:
        """Open a handle that rejects every mutation with ReadOnlyError."""
        return cls(database_path, read_only=True, table_name=table_name, config=config)

    # --- State ---

    @property
    def path(self) -> str:
        return self._path

    @property
    def table_name(self) -> str:
        return self._table

    @property
    def read_only(self) -> bool:
        return self._read_only

    @property
    def closed(self) -> bool:
        return self._closed

    def _check_open(self) -> None:
        if self._closed:
            raise StoreClosedError(f"{type(self).__name__} is closed")

    def _check_writable(self) -> None:
        if self._read_only:
            raise ReadOnlyError(
                f"Cannot modify {type(self).__name__}: it was opened in read-only mode"
            )

    def _guard(self, *, write: bool = False) -> None:
        self._check_open()
        if write:
            self._check_writable()

    # --- Statement scope ---

    @contextmanager
    def _statement(self) -> Generator[sqlite3.Cursor, None, None]:
        """Hold the lock and a cursor for one operation.

        Commits on clean exit, rolls back on exception, and always closes
        the cursor.
        """
        with self._lock:
            self._check_open()
            cursor = self._conn.cursor()
            try:
                yield cursor
                if self._conn.in_transaction:
                    self._conn.commit()
            except BaseException:
                if self._conn.in_transaction:
                    self._conn.rollback()
                raise
            finally:
                cursor.close()

    def _scalar(self, sql: str, params: tuple[Any, ...] = ()) -> Any:
        """Run a query and return the first column of the first row, or None."""
        with self._statement() as cur:
            row = cur.execute(sql, params).fetchone()
        return None if row is None else row[0]

    def _rows(self, sql: str, params: tuple[Any, ...], convert: Callable[[tuple[Any, ...]], T]) -> RowIterator[T]:
        return RowIterator(self, sql, params, convert)

    # --- Lifecycle ---

    def backup(self, destination: str | Path) -> str:
        """Copy the whole database file to ``destination`` using SQLite's backup API.

        Returns the normalized destination path.
        """
        self._guard()
        dest_path = normalize_path(destination, self._config.file_extension)
        with self._lock:
            self._check_open()
            dest = sqlite3.connect(dest_path)
            try:
                self._conn.backup(dest)
            finally:
                dest.close()
        logger.info("Backup created: %s", dest_path)
        return dest_path

    def close(self) -> None:
        """Release the connection. Further operations raise StoreClosedError."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._conn.close()
        logger.debug("Closed %s store at %s", self.kind, self._path)

    def __enter__(self: H) -> H:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "closed" if self._closed else ("read-only" if self._read_only else "read-write")
        return f"<{type(self).__name__} {self._path!r} table={self._table!r} {state}>"
