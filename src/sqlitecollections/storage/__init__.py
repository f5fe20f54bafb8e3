"""Storage layer — SQLite connection setup and table bootstrap."""

from sqlitecollections.storage.connection import normalize_path, open_connection
from sqlitecollections.storage.schema import ensure_table, validate_table_name

__all__ = ["ensure_table", "normalize_path", "open_connection", "validate_table_name"]
