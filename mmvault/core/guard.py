"""
Scoped mutual-exclusion guard for pool entry points.

A guarded operation holds the guard for its whole call tree:
- re-entry from the same thread (e.g. a transfer hook calling back into the
  pool) raises `ReentrantError`,
- other threads block until the holder exits, so guarded operations never
  interleave.

`joined()` is the one exception: it serializes against other threads like a
normal entry, but runs inside a call tree that already holds the guard.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Iterator, Optional

from ..errors import ReentrantError


class ReentrancyGuard:
    """Non-reentrant lock used as a context manager: ``with guard: ...``."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._owner: Optional[int] = None

    @property
    def entered(self) -> bool:
        return self._owner is not None

    def held_by_current_thread(self) -> bool:
        return self._owner == threading.get_ident()

    def __enter__(self) -> "ReentrancyGuard":
        if self.held_by_current_thread():
            raise ReentrantError("reentrant call into a guarded pool operation")
        self._lock.acquire()
        self._owner = threading.get_ident()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self._owner = None
        self._lock.release()

    @contextmanager
    def joined(self) -> Iterator["ReentrancyGuard"]:
        """Enter the guard, or join the current thread's existing hold."""
        if self.held_by_current_thread():
            yield self
            return
        with self:
            yield self
