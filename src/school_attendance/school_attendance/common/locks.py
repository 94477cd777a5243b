from __future__ import annotations

from contextlib import contextmanager
from threading import Lock
from typing import Dict, Hashable, Iterator


class KeyedLock:
    """One mutex per key, created on first use and dropped when idle.

    Serializes read-modify-write sequences that share a key (for example a
    user's monthly summary) while letting different keys proceed in parallel.
    """

    def __init__(self) -> None:
        self._guard = Lock()
        self._locks: Dict[Hashable, Lock] = {}
        self._holders: Dict[Hashable, int] = {}

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)

    @contextmanager
    def hold(self, key: Hashable) -> Iterator[None]:
        with self._guard:
            lock = self._locks.setdefault(key, Lock())
            self._holders[key] = self._holders.get(key, 0) + 1
        try:
            with lock:
                yield
        finally:
            with self._guard:
                self._holders[key] -= 1
                if not self._holders[key]:
                    del self._holders[key]
                    del self._locks[key]
