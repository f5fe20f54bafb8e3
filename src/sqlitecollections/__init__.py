"""Persistent dict- and list-like collections stored in a single SQLite file."""

from sqlitecollections.config import StoreConfig, load_config
from sqlitecollections.cursor import RowIterator
from sqlitecollections.errors import (
    DuplicateKeyError,
    InvalidKeyError,
    ReadOnlyError,
    StorageFailure,
    StoreClosedError,
    StoreError,
    UnsupportedOperationError,
)
from sqlitecollections.indexed import IndexedStore
from sqlitecollections.interfaces import MISSING, IndexedCollection, KeyedCollection
from sqlitecollections.keyed import KeyedStore
from sqlitecollections.registry import register_store

register_store("keyed", KeyedStore)
register_store("indexed", IndexedStore)

__version__ = "0.1.0"

__all__ = [
    "MISSING",
    "DuplicateKeyError",
    "IndexedCollection",
    "IndexedStore",
    "InvalidKeyError",
    "KeyedCollection",
    "KeyedStore",
    "ReadOnlyError",
    "RowIterator",
    "StorageFailure",
    "StoreClosedError",
    "StoreConfig",
    "StoreError",
    "UnsupportedOperationError",
    "load_config",
]
