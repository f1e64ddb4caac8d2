"""Project identifier generation."""
from __future__ import annotations

import threading
import time
from typing import Callable


class ProjectIdGenerator:
    """Issues time-based identifiers that are unique and strictly increasing.

    The value is the wall clock in milliseconds scaled by 1000, bumped past the last
    issued value when two calls land on the same tick, so bursts of concurrent
    creations never collide. Identifiers are decimal strings of equal width
    for the foreseeable future, so they also sort lexicographically.
    """

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._lock = threading.Lock()
        self._last = 0

    def next_id(self) -> str:
        with self._lock:
            candidate = int(self._clock() * 1000) * 1000
            if candidate <= self._last:
                candidate = self._last + 1
            self._last = candidate
            return str(candidate)
