"""Persistent list of strings backed by a single-column SQLite table.

A position is the table's rowid minus one. Removing an element does not
renumber the elements after it, so the list can develop gaps; ``get`` on a
gap returns None just like a stored NULL. ``compact()`` renumbers
explicitly when a dense list is wanted.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from sqlitecollections.cursor import RowIterator
from sqlitecollections.errors import UnsupportedOperationError
from sqlitecollections.handle import StoreHandle
from sqlitecollections.interfaces import IndexedCollection

logger = logging.getLogger(__name__)

MAX_ROWID = 2**63 - 1
MAX_INDEX = MAX_ROWID - 1


def _check_index(index: Any) -> None:
    if isinstance(index, bool) or not isinstance(index, int):
        raise TypeError(f"Indices must be integers, got {type(index).__name__}")
    if index < 0:
        raise IndexError(f"Index must be non-negative, got {index}")


def _rowid(index: Any) -> int:
    """Validate a position and return the rowid that stores it."""
    _check_index(index)
    if index > MAX_INDEX:
        raise IndexError(f"Index out of range, must be at most {MAX_INDEX}, got {index}")
    return index + 1


def _check_value(value: Any) -> None:
    if value is not None and not isinstance(value, str):
        raise TypeError(f"Values must be str or None, got {type(value).__name__}")


class IndexedStore(StoreHandle, IndexedCollection):
    """A list-like store whose every mutation is committed before returning."""

    kind = "indexed"
    default_table = "list"

    # --- Positional access ---

    def get(self, index: int) -> str | None:
        self._guard()
        _check_index(index)
        if index > MAX_INDEX:
            return None
        rowid = index + 1
        return self._scalar(f'SELECT value FROM "{self._table}" WHERE rowid = ?', (rowid,))

    def set(self, index: int, value: str | None) -> None:
        self._guard(write=True)
        rowid = _rowid(index)
        _check_value(value)
        with self._statement() as cur:
            cur.execute(
                f'INSERT OR REPLACE INTO "{self._table}" (rowid, value) VALUES (?, ?)',
                (rowid, value),
            )

    def add(self, value: str | None) -> int:
        self._guard(write=True)
        _check_value(value)
        with self._statement() as cur:
            cur.execute(f'INSERT INTO "{self._table}" (value) VALUES (?)', (value,))
            return cur.lastrowid - 1

    def insert(self, index: int, value: str | None) -> None:
        self._guard(write=True)
        raise UnsupportedOperationError(
            f"{type(self).__name__} does not support positional insert"
        )

    def remove_at(self, index: int) -> bool:
        """Delete the element at ``index``; later positions keep their indices."""
        self._guard(write=True)
        rowid = _rowid(index)
        with self._statement() as cur:
            cur.execute(f'DELETE FROM "{self._table}" WHERE rowid = ?', (rowid,))
            return cur.rowcount > 0

    # --- Value access ---

    def remove(self, value: str | None) -> bool:
        self._guard(write=True)
        _check_value(value)
        with self._statement() as cur:
            cur.execute(
                f'DELETE FROM "{self._table}" WHERE rowid = ('
                f'SELECT rowid FROM "{self._table}" WHERE value IS ? ORDER BY rowid LIMIT 1)',
                (value,),
            )
            return cur.rowcount > 0

    def remove_all(self, value: str | None) -> int:
        """Delete every element equal to ``value``; return how many were removed."""
        self._guard(write=True)
        _check_value(value)
        with self._statement() as cur:
            cur.execute(f'DELETE FROM "{self._table}" WHERE value IS ?', (value,))
            return cur.rowcount

    def index_of(self, value: str | None) -> int:
        self._guard()
        _check_value(value)
        rowid = self._scalar(
            f'SELECT rowid FROM "{self._table}" WHERE value IS ? ORDER BY rowid LIMIT 1',
            (value,),
        )
        return -1 if rowid is None else rowid - 1

    def contains(self, value: str | None) -> bool:
        self._guard()
        _check_value(value)
        return self._scalar(
            f'SELECT 1 FROM "{self._table}" WHERE value IS ? LIMIT 1', (value,)
        ) is not None

    # --- Whole-list operations ---

    def count(self) -> int:
        self._guard()
        return self._scalar(f'SELECT COUNT(*) FROM "{self._table}"')

    def clear(self) -> None:
        self._guard(write=True)
        with self._statement() as cur:
            cur.execute(f'DELETE FROM "{self._table}"')

    def extend(self, values: Iterable[str | None]) -> None:
        """Append every value in one transaction."""
        self._guard(write=True)
        values = list(values)
        for value in values:
            _check_value(value)
        with self._statement() as cur:
            cur.executemany(
                f'INSERT INTO "{self._table}" (value) VALUES (?)', [(v,) for v in values]
            )

    def compact(self) -> int:
        """Renumber elements to positions 0..count-1, keeping their order.

        Runs in a single transaction. Returns the number of elements.
        """
        self._guard(write=True)
        with self._statement() as cur:
            values = [row[0] for row in cur.execute(
                f'SELECT value FROM "{self._table}" ORDER BY rowid'
            )]
            cur.execute(f'DELETE FROM "{self._table}"')
            cur.executemany(
                f'INSERT INTO "{self._table}" (rowid, value) VALUES (?, ?)',
                list(enumerate(values, start=1)),
            )
        logger.debug("Compacted %s to %d element(s)", self._table, len(values))
        return len(values)

    # --- Enumeration ---

    def iterate(self) -> RowIterator[str | None]:
        self._guard()
        return self._rows(
            f'SELECT value FROM "{self._table}" ORDER BY rowid', (), lambda row: row[0]
        )

    def entries(self) -> RowIterator[tuple[int, str | None]]:
        """Lazily yield ``(index, value)`` pairs, exposing any gaps."""
        self._guard()
        return self._rows(
            f'SELECT rowid, value FROM "{self._table}" ORDER BY rowid',
            (),
            lambda row: (row[0] - 1, row[1]),
        )
