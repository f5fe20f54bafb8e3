"""Store registry — maps kind names ("keyed", "indexed") to store classes."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sqlitecollections.config import StoreConfig
    from sqlitecollections.handle import StoreHandle

_REGISTRY: dict[str, type[StoreHandle]] = {}


def register_store(kind: str, cls: type[StoreHandle]) -> None:
    """Register a store class for a given kind name."""
    _REGISTRY[kind] = cls


def get_store_class(kind: str) -> type[StoreHandle] | None:
    """Look up a store class by kind name. Returns None if not found."""
    return _REGISTRY.get(kind)


def registered_kinds() -> list[str]:
    """Return a sorted list of all registered store kinds."""
    return sorted(_REGISTRY)


def open_store(
    kind: str,
    database_path: str | Path,
    *,
    read_only: bool = False,
    table_name: str | None = None,
    config: StoreConfig | None = None,
) -> StoreHandle:
    """Open a store of the named kind. Raises ValueError for unknown kinds."""
    cls = get_store_class(kind)
    if cls is None:
        raise ValueError(
            f"Unknown store kind {kind!r}; expected one of: {', '.join(registered_kinds())}"
        )
    if read_only:
        return cls.open_read_only(database_path, table_name=table_name, config=config)
    return cls.open_read_write(database_path, table_name=table_name, config=config)
