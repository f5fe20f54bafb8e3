"""Exceptions raised by store handles.

Engine errors are not wrapped: anything raised by ``sqlite3`` (I/O failures,
lock contention past the busy timeout) reaches the caller unchanged.
``StorageFailure`` is exported as an alias so callers can catch it by name.
"""

from __future__ import annotations

import sqlite3

StorageFailure = sqlite3.Error


class StoreError(Exception):
    """Base class for errors raised by this package."""


class StoreClosedError(StoreError):
    """An operation was attempted on a store handle after close()."""


class ReadOnlyError(StoreError):
    """A mutation was attempted on a handle opened read-only."""


class InvalidKeyError(StoreError, ValueError):
    """A keyed operation received an empty or non-string key."""


class DuplicateKeyError(StoreError):
    """An insert-only add hit a key that already exists."""

    def __init__(self, key: str) -> None:
        super().__init__(f"Key already exists: {key!r}")
        self.key = key


class UnsupportedOperationError(StoreError, NotImplementedError):
    """The operation is deliberately not implemented by this store."""
