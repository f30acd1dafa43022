"""Thread-safe counters for the syslog receiver."""

import threading
import time
from collections import defaultdict


class Metrics:
    def __init__(self):
        self._lock = threading.Lock()
        self._total_received = 0
        self._forwarded = 0
        self._failed = 0
        self._class_counts: dict[str, int] = defaultdict(int)
        self._facility_counts: dict[str, int] = defaultdict(int)
        self._start_time = time.monotonic()

    def record_received(self):
        with self._lock:
            self._total_received += 1

    def record_forwarded(self, sink_class: str, facility: str):
        """Bump the forwarded total and the per-class and per-facility counters."""
        with self._lock:
            self._forwarded += 1
            self._class_counts[sink_class] += 1
            self._facility_counts[facility.lower()] += 1

    def record_failed(self):
        with self._lock:
            self._failed += 1

    def snapshot(self) -> dict:
        """Return a point-in-time snapshot of all metrics."""
        with self._lock:
            elapsed = time.monotonic() - self._start_time
            total = self._total_received
            snap = {
                "total_received": total,
                "forwarded": self._forwarded,
                "failed": self._failed,
                "class_distribution": dict(self._class_counts),
                "facility_distribution": dict(self._facility_counts),
            }

        snap["elapsed_seconds"] = round(elapsed, 2)
        snap["messages_per_second"] = round(total / elapsed, 2) if elapsed > 0 else 0.0
        return snap
