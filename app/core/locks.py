from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Hashable, Iterator


class FairLock:
    """Ticket lock: waiters acquire in the order they arrived."""

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._next_ticket = 0
        self._serving = 0

    def acquire(self) -> None:
        with self._cond:
            ticket = self._next_ticket
            self._next_ticket += 1
            while ticket != self._serving:
                self._cond.wait()

    def release(self) -> None:
        with self._cond:
            self._serving += 1
            self._cond.notify_all()

    def __enter__(self) -> "FairLock":
        self.acquire()
        return self

    def __exit__(self, *_exc) -> None:
        self.release()


class _Entry:
    __slots__ = ("lock", "users")

    def __init__(self) -> None:
        self.lock = FairLock()
        self.users = 0


class KeyedLocks:
    """Per-key locks created on demand and dropped once nobody holds or waits on them."""

    def __init__(self, name: str = "locks") -> None:
        self.name = name
        self._guard = threading.Lock()
        self._entries: dict[Hashable, _Entry] = {}

    @contextmanager
    def hold(self, key: Hashable) -> Iterator[None]:
        with self._guard:
            entry = self._entries.get(key)
            if entry is None:
                entry = _Entry()
                self._entries[key] = entry
            entry.users += 1
        try:
            with entry.lock:
                yield
        finally:
            with self._guard:
                entry.users -= 1
                if entry.users == 0 and self._entries.get(key) is entry:
                    del self._entries[key]

    def active_keys(self) -> int:
        with self._guard:
            return len(self._entries)

    def clear(self) -> None:
        with self._guard:
            self._entries = {key: entry for key, entry in self._entries.items() if entry.users}


__all__ = ["FairLock", "KeyedLocks"]
