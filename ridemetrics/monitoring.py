"""
Performance monitoring for the calculation tick.

Each CalculationManager owns its own PerformanceMonitor, so parallel engines
(and tests) never share timing state.
"""

import time
import logging
from collections import defaultdict, deque
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime
from typing import Deque, Dict, List, Optional
import threading

logger = logging.getLogger(__name__)

MAX_RECORDS = 1000


@dataclass
class TimingRecord:
    """Record of a timed operation."""

    function_name: str
    duration_ms: float
    timestamp: datetime = field(default_factory=datetime.now)


class PerformanceMonitor:
    """
    Tracks execution times and warns about operations slower than a threshold.

    Usage:
        monitor = PerformanceMonitor(slow_threshold_ms=100)

        with monitor.timed_block("tick"):
            recompute()

        stats = monitor.get_stats()
    """

    def __init__(self, slow_threshold_ms: Optional[float] = None, max_records: int = MAX_RECORDS):
        self.slow_threshold_ms = slow_threshold_ms
        self._timings: Deque[TimingRecord] = deque(maxlen=max_records)
        self._lock = threading.Lock()
        self._enabled = True

    def _record(self, name: str, duration: float) -> None:
        with self._lock:
            self._timings.append(TimingRecord(function_name=name, duration_ms=duration))

        # Log slow operations
        if self.slow_threshold_ms is not None and duration > self.slow_threshold_ms:
            logger.warning(
                f"Slow operation: {name} took {duration:.1f}ms (limit {self.slow_threshold_ms:.0f}ms)"
            )

    @contextmanager
    def timed_block(self, name: str):
        """Context manager for timing code blocks."""
        if not self._enabled:
            yield
            return
        start = time.perf_counter()
        try:
            yield
        finally:
            self._record(name, (time.perf_counter() - start) * 1000)

    def get_stats(self) -> Dict[str, Dict[str, float]]:
        """Get timing statistics by operation name."""
        stats = defaultdict(
            lambda: {"count": 0, "total_ms": 0, "min_ms": float("inf"), "max_ms": 0}
        )

        with self._lock:
            records = list(self._timings)

        for record in records:
            op_stats = stats[record.function_name]
            op_stats["count"] += 1
            op_stats["total_ms"] += record.duration_ms
            op_stats["min_ms"] = min(op_stats["min_ms"], record.duration_ms)
            op_stats["max_ms"] = max(op_stats["max_ms"], record.duration_ms)

        # Calculate averages
        for op_stats in stats.values():
            if op_stats["count"] > 0:
                op_stats["avg_ms"] = op_stats["total_ms"] / op_stats["count"]

        return dict(stats)

    def get_slow_operations(self, threshold_ms: Optional[float] = None) -> List[TimingRecord]:
        """Get operations slower than threshold (defaults to the monitor's own)."""
        if threshold_ms is None:
            threshold_ms = self.slow_threshold_ms or 0
        with self._lock:
            return [t for t in self._timings if t.duration_ms > threshold_ms]

    def clear(self):
        """Clear all timing records."""
        with self._lock:
            self._timings.clear()

    def enable(self):
        self._enabled = True

    def disable(self):
        self._enabled = False
