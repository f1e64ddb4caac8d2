"""Per-project locking and bounded waits for filesystem work."""
from __future__ import annotations

import threading
import time
from contextlib import contextmanager
from typing import Dict, Iterator

from autoforge.domain.errors import OperationTimeoutError


class Deadline:
    """Cooperative time budget, checked between file operations."""

    def __init__(self, seconds: float, description: str) -> None:
        self.seconds = seconds
        self.description = description
        self._expires_at = time.monotonic() + seconds

    def remaining(self) -> float:
        return max(0.0, self._expires_at - time.monotonic())

    def check(self) -> None:
        if time.monotonic() > self._expires_at:
            raise OperationTimeoutError(
                f"{self.description} did not finish within {self.seconds}s"
            )


class ProjectLocks:
    """One lock per project id: at most one writer, and no export during a write."""

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: Dict[str, threading.Lock] = {}

    def _lock_for(self, project_id: str) -> threading.Lock:
        with self._guard:
            return self._locks.setdefault(project_id, threading.Lock())

    @contextmanager
    def hold(self, project_id: str, deadline: Deadline) -> Iterator[None]:
        lock = self._lock_for(project_id)
        if not lock.acquire(timeout=deadline.remaining()):
            raise OperationTimeoutError(
                f"Timed out waiting for project {project_id} ({deadline.description})"
            )
        try:
            yield
        finally:
            lock.release()
