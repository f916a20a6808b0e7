"""
Log volume sampling.

Within each window, the first ``initial`` entries with a given level and
message are logged, then every ``thereafter``-th one. Everything else is
dropped. Counters restart when a new window begins.

Counters live in a fixed number of hash buckets, so memory stays bounded no
matter how many distinct messages are logged. Keys that collide share a
counter.
"""

import threading
import time
from typing import Any, Callable, Dict, Tuple

from structlog import DropEvent

BUCKETS = 4096


class Sampler:
    """structlog processor bounding the volume of repeated messages."""

    def __init__(
        self,
        initial: int = 100,
        thereafter: int = 100,
        interval: float = 1.0,
        clock: Callable[[], float] = time.monotonic,
        buckets: int = BUCKETS,
    ):
        if initial < 1 or thereafter < 1:
            raise ValueError("initial and thereafter must be positive")
        if interval <= 0:
            raise ValueError("interval must be positive")
        if buckets < 1:
            raise ValueError("buckets must be positive")
        self.initial = initial
        self.thereafter = thereafter
        self.interval = interval
        self._clock = clock
        self._lock = threading.Lock()
        self._window_start = clock()
        self._counts = [0] * buckets

    def _bucket(self, key: Tuple[str, str]) -> int:
        return hash(key) % len(self._counts)

    def _next_count(self, key: Tuple[str, str]) -> int:
        with self._lock:
            now = self._clock()
            if now - self._window_start >= self.interval:
                self._window_start = now
                self._counts = [0] * len(self._counts)
            bucket = self._bucket(key)
            self._counts[bucket] += 1
            return self._counts[bucket]

    def __call__(self, logger: Any, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
        key = (event_dict.get("level", method_name), str(event_dict.get("event", "")))
        count = self._next_count(key)
        if count <= self.initial:
            return event_dict
        if (count - self.initial) % self.thereafter == 0:
            return event_dict
        raise DropEvent
