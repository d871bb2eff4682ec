"""Tests for the tick performance monitor."""
import logging

from ridemetrics.monitoring import PerformanceMonitor


class TestPerformanceMonitor:
    """Tests for PerformanceMonitor."""

    def test_timed_block(self):
        monitor = PerformanceMonitor()
        with monitor.timed_block("tick"):
            pass
        stats = monitor.get_stats()
        assert stats["tick"]["count"] == 1
        assert stats["tick"]["avg_ms"] >= 0

    def test_slow_operation_logged(self, caplog):
        monitor = PerformanceMonitor(slow_threshold_ms=-1)
        with caplog.at_level(logging.WARNING, logger="ridemetrics.monitoring"):
            with monitor.timed_block("tick"):
                pass
        assert "Slow operation: tick" in caplog.text
        assert len(monitor.get_slow_operations()) == 1

    def test_disabled(self):
        monitor = PerformanceMonitor()
        monitor.disable()
        with monitor.timed_block("tick"):
            pass
        assert monitor.get_stats() == {}
        monitor.enable()

    def test_bounded_history(self):
        monitor = PerformanceMonitor(max_records=3)
        for _ in range(5):
            with monitor.timed_block("tick"):
                pass
        assert monitor.get_stats()["tick"]["count"] == 3

    def test_instances_independent(self):
        first = PerformanceMonitor()
        second = PerformanceMonitor()
        with first.timed_block("tick"):
            pass
        second.clear()
        assert first.get_stats()["tick"]["count"] == 1
        assert second.get_stats() == {}
