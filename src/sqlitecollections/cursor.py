"""Lazy result iteration over a live cursor."""

from __future__ import annotations

import sqlite3
from typing import TYPE_CHECKING, Any, Callable, Generic, TypeVar

from sqlitecollections.errors import StoreClosedError

if TYPE_CHECKING:
    from sqlitecollections.handle import StoreHandle

T = TypeVar("T")


class RowIterator(Generic[T]):
    """Iterator that owns a handle's lock and an open cursor.

    The lock is taken when the iterator is created and held until the scan
    is exhausted, ``close()`` is called, the ``with`` block exits, or the
    iterator is garbage collected. Other threads using the same handle
    block for that whole time; the thread driving the iterator may keep
    using the handle. The iterator may be handed to another thread: whoever
    calls ``next()`` or ``close()`` takes over the lock.
    """

    def __init__(
        self,
        handle: StoreHandle,
        sql: str,
        params: tuple[Any, ...],
        convert: Callable[[tuple[Any, ...]], T],
    ) -> None:
        self._done = True
        self._handle = handle
        self._convert = convert
        handle._lock.acquire_scan()
        try:
            handle._check_open()
            self._cursor: sqlite3.Cursor = handle._conn.execute(sql, params)
        except BaseException:
            handle._lock.release_scan()
            raise
        self._done = False

    def __iter__(self) -> RowIterator[T]:
        return self

    def __next__(self) -> T:
        if self._done:
            raise StopIteration
        self._handle._lock.take_over()
        if self._handle.closed:
            self.close()
            raise StoreClosedError(f"{type(self._handle).__name__} was closed during iteration")
        try:
            row = self._cursor.fetchone()
        except BaseException:
            self.close()
            raise
        if row is None:
            self.close()
            raise StopIteration
        return self._convert(row)

    def close(self) -> None:
        """Release the cursor and the handle lock. Safe to call repeatedly."""
        if self._done:
            return
        lock = self._handle._lock
        lock.take_over()
        self._done = True
        try:
            if not self._handle.closed:
                self._cursor.close()
        finally:
            lock.release_scan()

    def __enter__(self) -> RowIterator[T]:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __del__(self) -> None:
        self.close()
