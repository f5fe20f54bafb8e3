"""Backing table definitions and initialization."""

from __future__ import annotations

import logging
import re
import sqlite3

logger = logging.getLogger(__name__)

_TABLE_NAME_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

_KEYED_TABLE_SQL = """\
CREATE TABLE IF NOT EXISTS "{table}" (
    key     TEXT NOT NULL UNIQUE,
    value   TEXT,
    PRIMARY KEY (key)
);
"""

# Position is the implicit rowid minus one.
_INDEXED_TABLE_SQL = """\
CREATE TABLE IF NOT EXISTS "{table}" (
    value   TEXT
);
"""

_TABLE_SQL = {
    "keyed": _KEYED_TABLE_SQL,
    "indexed": _INDEXED_TABLE_SQL,
}


def validate_table_name(table_name: str) -> str:
    """Return ``table_name`` if it is a plain SQL identifier, else raise ValueError."""
    if not isinstance(table_name, str) or not _TABLE_NAME_RE.match(table_name):
        raise ValueError(f"Invalid table name: {table_name!r}")
    return table_name


def ensure_table(conn: sqlite3.Connection, kind: str, table_name: str) -> None:
    """Create the backing table for a store kind if it does not already exist."""
    try:
        template = _TABLE_SQL[kind]
    except KeyError:
        raise ValueError(f"Unknown store kind: {kind!r}") from None
    conn.executescript(template.format(table=validate_table_name(table_name)))
    conn.commit()
    logger.debug("Ensured %s table %s", kind, table_name)
