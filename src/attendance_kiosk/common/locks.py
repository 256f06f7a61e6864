from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Hashable, Iterator


class KeyedLocks:
    """One mutex per key, created on demand.

    Used to serialize read-modify-write cycles on a single attendance record
    (subject, date) while letting unrelated keys proceed in parallel.
    """

    def __init__(self):
        self._registry_lock = threading.Lock()
        self._locks: dict[Hashable, threading.Lock] = {}

    def _lock_for(self, key: Hashable) -> threading.Lock:
        with self._registry_lock:
            lock = self._locks.get(key)
            if lock is None:
                lock = threading.Lock()
                self._locks[key] = lock
            return lock

    @contextmanager
    def hold(self, key: Hashable) -> Iterator[None]:
        lock = self._lock_for(key)
        with lock:
            yield
