"""Collection interfaces implemented by the store handles."""

from __future__ import annotations

from abc import abstractmethod
from collections.abc import Collection, Iterable, Iterator, MutableMapping
from typing import Optional


class _Missing:
    """Sentinel type for "no such key"."""

    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING = _Missing()


class KeyedCollection(MutableMapping[str, Optional[str]]):
    """A mapping of non-empty string keys to nullable string values.

    Implementations supply the lookup primitives; the mapping protocol
    (``[]``, ``in``, ``len``, ``del``) is derived from them here. A stored
    ``None`` is a value, not an absence: ``try_get`` tells the two apart.
    """

    @abstractmethod
    def try_get(self, key: str) -> tuple[bool, str | None]:
        """Return ``(found, value)`` without raising on a missing key."""

    @abstractmethod
    def set(self, key: str, value: str | None) -> None:
        """Insert or replace the value stored under ``key``."""

    @abstractmethod
    def add(self, key: str, value: str | None) -> None:
        """Insert ``key``; raise DuplicateKeyError if it already exists."""

    @abstractmethod
    def contains_key(self, key: str) -> bool:
        """Whether the key exists, independent of the stored value."""

    @abstractmethod
    def remove(self, key: str, value=MISSING) -> bool:
        """Delete ``key`` (only when it stores ``value``, if given)."""

    @abstractmethod
    def count(self) -> int:
        """Number of stored entries."""

    @abstractmethod
    def iterate(self) -> Iterator[tuple[str, str | None]]:
        """Lazily yield ``(key, value)`` pairs in scan order."""

    def get(self, key: str, default=MISSING):
        """Return the stored value, or ``default`` (MISSING) if ``key`` is absent."""
        found, value = self.try_get(key)
        return value if found else default

    def __getitem__(self, key: str) -> str | None:
        found, value = self.try_get(key)
        if not found:
            raise KeyError(key)
        return value

    def __setitem__(self, key: str, value: str | None) -> None:
        self.set(key, value)

    def __delitem__(self, key: str) -> None:
        if not self.remove(key):
            raise KeyError(key)

    def __contains__(self, key: object) -> bool:
        return self.contains_key(key)  # type: ignore[arg-type]

    def __len__(self) -> int:
        return self.count()

    def items(self):  # type: ignore[override]
        return self.iterate()


class IndexedCollection(Collection[Optional[str]]):
    """A list of nullable strings addressed by zero-based position.

    Positions are stable: removing an element leaves a gap rather than
    shifting later elements down, so ``get`` on a gap returns ``None``.
    """

    @abstractmethod
    def get(self, index: int) -> str | None:
        """Value at ``index``, or None when nothing is stored there."""

    @abstractmethod
    def set(self, index: int, value: str | None) -> None:
        """Store ``value`` at ``index``, creating the position if needed."""

    @abstractmethod
    def add(self, value: str | None) -> int:
        """Append ``value`` after the highest position; return its index."""

    @abstractmethod
    def insert(self, index: int, value: str | None) -> None:
        """Positional insert with shifting."""

    @abstractmethod
    def remove_at(self, index: int) -> bool:
        """Delete the element at ``index`` without renumbering."""

    @abstractmethod
    def remove(self, value: str | None) -> bool:
        """Delete the first element equal to ``value``."""

    @abstractmethod
    def index_of(self, value: str | None) -> int:
        """Index of the first element equal to ``value``, or -1."""

    @abstractmethod
    def contains(self, value: str | None) -> bool:
        """True if any element equals ``value``."""

    @abstractmethod
    def count(self) -> int:
        """Number of stored elements (gaps excluded)."""

    @abstractmethod
    def clear(self) -> None:
        """Delete every element."""

    @abstractmethod
    def iterate(self) -> Iterator[str | None]:
        """Lazily yield values in position order."""

    def append(self, value: str | None) -> int:
        return self.add(value)

    def __getitem__(self, index: int) -> str | None:
        return self.get(index)

    def __setitem__(self, index: int, value: str | None) -> None:
        self.set(index, value)

    def __delitem__(self, index: int) -> None:
        self.remove_at(index)

    def __contains__(self, value: object) -> bool:
        return self.contains(value)  # type: ignore[arg-type]

    def __len__(self) -> int:
        return self.count()

    def __iter__(self) -> Iterator[str | None]:
        return self.iterate()

    def extend(self, values: Iterable[str | None]) -> None:
        for value in values:
            self.add(value)
