"""In-memory ring buffer of recent per-datagram failures."""

import threading
from collections import deque


class FailureTracker:
    def __init__(self, max_size: int = 100):
        self._failures: deque[dict] = deque(maxlen=max_size)
        self._lock = threading.Lock()

    def add(self, sender: str, error: str, timestamp: str):
        """Store a failure, evicting the oldest if at capacity."""
        with self._lock:
            self._failures.append({"sender": sender, "error": error, "timestamp": timestamp})

    def get_recent(self, n: int = 10) -> list[dict]:
        """Return the N most recent failures, oldest first."""
        if n <= 0:
            return []
        with self._lock:
            return list(self._failures)[-n:]

    @property
    def count(self) -> int:
        with self._lock:
            return len(self._failures)
