#!filepath: rewardpool/pool/guard.py
from __future__ import annotations

import threading
from contextlib import contextmanager
from functools import wraps
from typing import Callable

from rewardpool.utils.errors import ReentrantCall


class EntryGuard:
    """
    Mutual exclusion for a pool's mutating entry points.

    - other threads block until the current operation finishes
    - the owning thread re-entering (e.g. from a transfer callback) is rejected
    """

    def __init__(self):
        self._lock = threading.RLock()
        self._depth = 0

    def __enter__(self):
        self._lock.acquire()
        if self._depth > 0:
            self._lock.release()
            raise ReentrantCall("pool entry point re-entered during an operation")
        self._depth += 1
        return self

    def __exit__(self, exc_type, exc, tb):
        self._depth -= 1
        self._lock.release()
        return False

    @contextmanager
    def reading(self):
        """Consistent read; allowed from inside an operation on the same thread."""
        with self._lock:
            yield


def non_reentrant(func: Callable) -> Callable:
    """Run a method of an object carrying ``self.guard: EntryGuard`` under that guard."""

    @wraps(func)
    def wrapper(self, *args, **kwargs):
        with self.guard:
            return func(self, *args, **kwargs)

    return wrapper
