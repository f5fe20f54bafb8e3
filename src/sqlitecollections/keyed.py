"""Persistent string-to-string map backed by a two-column SQLite table."""

from __future__ import annotations

import sqlite3
from typing import Any

from sqlitecollections.cursor import RowIterator
from sqlitecollections.errors import DuplicateKeyError, InvalidKeyError
from sqlitecollections.handle import StoreHandle
from sqlitecollections.interfaces import MISSING, KeyedCollection


def _check_key(key: Any) -> None:
    if not isinstance(key, str) or not key:
        raise InvalidKeyError(f"Key must be a non-empty string, got {key!r}")


def _check_value(value: Any) -> None:
    if value is not None and not isinstance(value, str):
        raise TypeError(f"Values must be str or None, got {type(value).__name__}")


class KeyedStore(StoreHandle, KeyedCollection):
    """A dict-like store whose every mutation is committed before returning.

    Setting a key to ``None`` stores NULL: the key stays present and
    ``try_get`` reports ``(True, None)``, which differs from an absent key.
    """

    kind = "keyed"
    default_table = "base"

    # --- Lookups ---

    def try_get(self, key: str) -> tuple[bool, str | None]:
        self._guard()
        _check_key(key)
        with self._statement() as cur:
            row = cur.execute(
                f'SELECT value FROM "{self._table}" WHERE key = ?', (key,)
            ).fetchone()
        if row is None:
            return False, None
        return True, row[0]

    def contains_key(self, key: str) -> bool:
        self._guard()
        _check_key(key)
        return self._scalar(f'SELECT 1 FROM "{self._table}" WHERE key = ? LIMIT 1', (key,)) is not None

    def contains_item(self, key: str, value: str | None) -> bool:
        """True if ``key`` exists and stores exactly ``value`` (None matches NULL)."""
        self._guard()
        _check_key(key)
        _check_value(value)
        return self._scalar(
            f'SELECT 1 FROM "{self._table}" WHERE key = ? AND value IS ? LIMIT 1',
            (key, value),
        ) is not None

    def count(self) -> int:
        self._guard()
        return self._scalar(f'SELECT COUNT(*) FROM "{self._table}"')

    # --- Mutations ---

    def set(self, key: str, value: str | None) -> None:
        self._guard(write=True)
        _check_key(key)
        _check_value(value)
        # Updates in place so the row keeps its rowid and scan position.
        with self._statement() as cur:
            cur.execute(
                f'INSERT INTO "{self._table}" (key, value) VALUES (?, ?) '
                "ON CONFLICT(key) DO UPDATE SET value = excluded.value",
                (key, value),
            )

    def add(self, key: str, value: str | None) -> None:
        self._guard(write=True)
        _check_key(key)
        _check_value(value)
        try:
            with self._statement() as cur:
                cur.execute(
                    f'INSERT INTO "{self._table}" (key, value) VALUES (?, ?)',
                    (key, value),
                )
        except sqlite3.IntegrityError as exc:
            raise DuplicateKeyError(key) from exc

    def remove(self, key: str, value=MISSING) -> bool:
        """Delete ``key`` and report whether a row existed.

        When ``value`` is given, the row is deleted only if it stores that
        value (None matches a stored NULL).
        """
        self._guard(write=True)
        _check_key(key)
        if value is MISSING:
            sql, params = f'DELETE FROM "{self._table}" WHERE key = ?', (key,)
        else:
            _check_value(value)
            sql, params = f'DELETE FROM "{self._table}" WHERE key = ? AND value IS ?', (key, value)
        with self._statement() as cur:
            cur.execute(sql, params)
            return cur.rowcount > 0

    def clear(self) -> None:
        self._guard(write=True)
        with self._statement() as cur:
            cur.execute(f'DELETE FROM "{self._table}"')

    # --- Enumeration ---

    def keys(self) -> set[str]:  # type: ignore[override]
        """Snapshot of every stored key."""
        self._guard()
        with self._statement() as cur:
            return {row[0] for row in cur.execute(f'SELECT key FROM "{self._table}"')}

    def values(self) -> list[str | None]:  # type: ignore[override]
        """Snapshot of every stored value, in scan order."""
        self._guard()
        with self._statement() as cur:
            return [row[0] for row in cur.execute(f'SELECT value FROM "{self._table}"')]

    def iterate(self) -> RowIterator[tuple[str, str | None]]:
        self._guard()
        return self._rows(f'SELECT key, value FROM "{self._table}"', (), lambda row: (row[0], row[1]))

    def __iter__(self) -> RowIterator[str]:
        self._guard()
        return self._rows(f'SELECT key FROM "{self._table}"', (), lambda row: row[0])
