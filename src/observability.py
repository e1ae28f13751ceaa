"""In-process metrics: request counters and timings, summarised via structlog."""

import threading
import time
from contextlib import contextmanager
from typing import Any

import structlog

logger = structlog.get_logger().bind(source="observability")


class Metrics:
    """Counters and duration lists keyed by dotted event names."""

    def __init__(self):
        self._lock = threading.Lock()
        self._counters: dict[str, int] = {}
        self._timers: dict[str, list[float]] = {}

    def counter(self, name: str, value: int = 1):
        with self._lock:
            self._counters[name] = self._counters.get(name, 0) + value

    def count(self, name: str) -> int:
        return self._counters.get(name, 0)

    @contextmanager
    def timer(self, name: str):
        """Record the wall time of the wrapped block, even if it raises."""
        start = time.perf_counter()
        try:
            yield
        finally:
            elapsed = time.perf_counter() - start
            with self._lock:
                self._timers.setdefault(name, []).append(elapsed)

    def summary(self) -> dict[str, Any]:
        with self._lock:
            timers = {
                name: {
                    "count": len(durations),
                    "avg_ms": round(sum(durations) / len(durations) * 1000, 2),
                    "max_ms": round(max(durations) * 1000, 2),
                }
                for name, durations in self._timers.items()
                if durations
            }
            return {"counters": dict(self._counters), "timers": timers}

    def reset(self):
        with self._lock:
            self._counters.clear()
            self._timers.clear()


# Module-level singleton
metrics = Metrics()


def log_metrics_summary():
    """Log the current metrics summary (called on app shutdown)."""
    logger.info("metrics_summary", **metrics.summary())
