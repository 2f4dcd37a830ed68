"""Per-key serialization of mutating calls.

Ball numbering reads the current state of an over before writing, so two
deliveries for the same innings must never interleave. Each innings (and each
match, for lifecycle transitions) gets its own lock, kept only while some
caller holds or waits for it.
"""

import threading
from contextlib import contextmanager
from typing import Dict, Generator


class KeyedLockRegistry:
    """Hands out one re-entrant lock per key, dropped once nobody uses it."""

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: Dict[str, threading.RLock] = {}
        self._users: Dict[str, int] = {}

    def _acquire_entry(self, key: str) -> threading.RLock:
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = threading.RLock()
                self._locks[key] = lock
            self._users[key] = self._users.get(key, 0) + 1
            return lock

    def _release_entry(self, key: str) -> None:
        with self._guard:
            remaining = self._users[key] - 1
            if remaining:
                self._users[key] = remaining
            else:
                del self._users[key]
                del self._locks[key]

    @contextmanager
    def hold(self, key: str) -> Generator[None, None, None]:
        lock = self._acquire_entry(key)
        try:
            with lock:
                yield
        finally:
            self._release_entry(key)

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)


def innings_key(innings_id: str) -> str:
    return f"innings:{innings_id}"


def match_key(match_id: str) -> str:
    return f"match:{match_id}"
