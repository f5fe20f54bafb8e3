"""SQLite connection management."""

from __future__ import annotations

import sqlite3
from pathlib import Path

from sqlitecollections.config import JOURNAL_MODES, SYNCHRONOUS_MODES

MEMORY_PATH = ":memory:"
RECOGNIZED_EXTENSIONS = (".db", ".sqlite", ".sqlite3")


def normalize_path(database_path: str | Path, extension: str = ".db") -> str:
    """Return the on-disk path for a store file.

    Appends ``extension`` unless the name already ends with a recognized
    SQLite extension (case-insensitive). ``:memory:`` is returned unchanged.
    """
    path = str(database_path)
    if path == MEMORY_PATH:
        return path
    if not path.lower().endswith(RECOGNIZED_EXTENSIONS):
        path += extension
    return path


def open_connection(
    database_path: str,
    *,
    timeout: float = 5.0,
    journal_mode: str = "WAL",
    synchronous: str = "FULL",
) -> sqlite3.Connection:
    """Open a SQLite connection shared by a single store handle.

    The connection may be used from any thread; callers serialize access.
    ``timeout`` is the engine busy timeout, after which lock contention
    surfaces as ``sqlite3.OperationalError``. Raises ValueError for an
    unknown journal or synchronous mode.
    """
    journal_mode = journal_mode.upper()
    synchronous = synchronous.upper()
    if journal_mode not in JOURNAL_MODES:
        raise ValueError(f"journal_mode must be one of {', '.join(JOURNAL_MODES)}, got {journal_mode!r}")
    if synchronous not in SYNCHRONOUS_MODES:
        raise ValueError(f"synchronous must be one of {', '.join(SYNCHRONOUS_MODES)}, got {synchronous!r}")
    conn = sqlite3.connect(database_path, timeout=timeout, check_same_thread=False)
    try:
        conn.execute(f"PRAGMA journal_mode={journal_mode}")
        conn.execute(f"PRAGMA synchronous={synchronous}")
    except BaseException:
        conn.close()
        raise
    return conn


def enable_query_only(conn: sqlite3.Connection) -> None:
    """Make the engine itself reject writes on this connection."""
    conn.execute("PRAGMA query_only=ON")
