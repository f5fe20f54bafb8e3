"""Handle lock whose scan holds can move between threads."""

from __future__ import annotations

import threading


class HandleLock:
    """Re-entrant lock guarding one store connection.

    Statements take ordinary re-entrant holds tied to the calling thread.
    An open RowIterator takes a scan hold instead: the thread that drives
    the iterator (``next()``, ``close()``, garbage collection) takes over
    ownership of the lock, waiting for any statement the previous owner has
    in flight, so a lazy iterator can be handed to another thread.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._owner: int | None = None
        self._depth = 0
        self._scans = 0

    # --- Statement holds ---

    def acquire(self) -> None:
        me = threading.get_ident()
        with self._cond:
            while self._owner is not None and self._owner != me:
                self._cond.wait()
            self._owner = me
            self._depth += 1

    def release(self) -> None:
        with self._cond:
            if self._owner != threading.get_ident():
                raise RuntimeError("Cannot release a handle lock owned by another thread")
            self._release_one()

    def __enter__(self) -> HandleLock:
        self.acquire()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.release()

    # --- Scan holds ---

    def acquire_scan(self) -> None:
        """Take a hold on behalf of an iterator."""
        self.acquire()
        with self._cond:
            self._scans += 1

    def take_over(self) -> None:
        """Make the calling thread the owner of the current scan hold."""
        with self._cond:
            self._take_over()

    def release_scan(self) -> None:
        """Drop an iterator's hold from whichever thread finishes it."""
        with self._cond:
            self._take_over()
            self._scans -= 1
            self._release_one()

    def _take_over(self) -> None:
        me = threading.get_ident()
        if self._owner == me:
            return
        # Wait until the current owner has no statement in flight.
        while self._depth > self._scans:
            self._cond.wait()
        if self._scans > 1:
            raise RuntimeError(
                "Cannot move an iterator to another thread while its creating "
                "thread holds other open iterators"
            )
        self._owner = me

    def _release_one(self) -> None:
        self._depth -= 1
        if self._depth == 0:
            self._owner = None
        self._cond.notify_all()
