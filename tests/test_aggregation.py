"""Unit tests for ridemetrics/calculations/aggregation.py"""
import pytest

from ridemetrics.calculations.aggregation import (
    average,
    latest_value,
    maximum,
    minimum,
    rolling_average,
    values_since,
    values_where,
    weighted_rolling_average,
)
from conftest import make_stream


class TestRollingAverage:
    """Tests for rolling_average."""

    def test_window_average(self):
        """Only samples inside the trailing window count."""
        stream = make_stream([100, 200, 300, 400, 500])  # t = 0..4000
        assert rolling_average(stream, 2000, 4000) == pytest.approx(400)

    def test_window_closed_on_both_ends(self):
        """A sample exactly at reference - window is included."""
        stream = [(1000, 100.0), (3000, 300.0)]
        assert rolling_average(stream, 2000, 3000) == pytest.approx(200)

    def test_future_samples_ignored(self):
        stream = [(1000, 100.0), (5000, 900.0)]
        assert rolling_average(stream, 3000, 2000) == pytest.approx(100)

    def test_empty_stream(self):
        assert rolling_average([], 3000, 1000) is None

    def test_empty_window(self):
        """Should return None when all samples are older than the window."""
        stream = make_stream([100, 200])
        assert rolling_average(stream, 1000, 60000) is None


class TestWeightedRollingAverage:
    """Tests for weighted_rolling_average."""

    def test_recent_samples_weigh_more(self):
        """Sample at reference time has weight 1, halfway sample weight 0.5."""
        stream = [(5000, 100.0), (10000, 400.0)]
        # weights 0.5 and 1.0 -> (50 + 400) / 1.5 = 300
        assert weighted_rolling_average(stream, 10000, 10000) == pytest.approx(300)

    def test_zero_total_weight(self):
        """Only a sample at the window start has zero weight -> None."""
        stream = [(0, 100.0)]
        assert weighted_rolling_average(stream, 1000, 1000) is None

    def test_constant_stream(self):
        stream = make_stream([250] * 5)
        assert weighted_rolling_average(stream, 10000, 4000) == pytest.approx(250)

    def test_non_positive_window(self):
        assert weighted_rolling_average(make_stream([1, 2]), 0, 1000) is None


class TestWholeStreamAggregates:
    """Tests for average / maximum / minimum."""

    def test_basic(self):
        stream = make_stream([150, 250, 200])
        assert average(stream) == pytest.approx(200)
        assert maximum(stream) == 250
        assert minimum(stream) == 150

    def test_empty(self):
        assert average([]) is None
        assert maximum([]) is None
        assert minimum([]) is None


class TestLatestValue:
    """Tests for latest_value staleness handling."""

    def test_fresh(self):
        stream = make_stream([100, 210], start=10000)
        assert latest_value(stream, max_age_ms=5000, now=12000) == 210

    def test_stale(self):
        """Value older than max age is not reported."""
        stream = make_stream([100, 210], start=10000)
        assert latest_value(stream, max_age_ms=5000, now=20000) is None

    def test_age_limit_inclusive(self):
        stream = [(10000, 180.0)]
        assert latest_value(stream, max_age_ms=5000, now=15000) == 180

    def test_empty(self):
        assert latest_value([], now=0) is None


class TestFilters:
    """Tests for values_since and values_where."""

    def test_values_since(self):
        stream = make_stream([1, 2, 3, 4])
        assert [v for _, v in values_since(stream, 2000)] == [3, 4]

    def test_values_where(self):
        stream = make_stream([0, 85, 0, 92])
        assert [v for _, v in values_where(stream, 0)] == [85, 92]
