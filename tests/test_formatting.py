"""Tests for display formatting helpers."""
from ridemetrics.calculations.formatting import (
    PLACEHOLDER,
    format_altitude,
    format_clock,
    format_decimals,
    format_distance,
    format_duration,
    format_pace,
    format_round,
    format_signed,
    format_speed,
)
from conftest import NOW_MS


class TestFormatDuration:

    def test_minutes_seconds(self):
        assert format_duration(65000) == "1:05"

    def test_hours(self):
        assert format_duration(3661000) == "1:01:01"

    def test_forced_hours(self):
        assert format_duration(65000, show_hours=True) == "0:01:05"

    def test_missing(self):
        assert format_duration(None) == PLACEHOLDER


class TestFormatNumbers:

    def test_round_half_away_from_zero(self):
        assert format_round(2.5) == "3"
        assert format_round(-2.5) == "-3"
        assert format_round(199.4) == "199"

    def test_decimals(self):
        assert format_decimals(0.876, 2) == "0.88"
        assert format_decimals(None, 2) == "--"

    def test_signed(self):
        assert format_signed(2.0) == "+2.0"
        assert format_signed(-3.0) == "-3.0"
        assert format_signed(0.0) == "+0.0"


class TestFormatPace:

    def test_pace(self):
        assert format_pace(1.5) == "1:30"

    def test_too_slow(self):
        """Paces slower than 30 min/unit are shown as a placeholder."""
        assert format_pace(45) == "--:--"
        assert format_pace(None) == "--:--"


class TestFormatUnits:
    """Unit-aware formatters."""

    def test_distance(self):
        assert format_distance(12340) == "12.34"
        assert format_distance(1609.344, imperial=True) == "1.00"

    def test_speed(self):
        assert format_speed(10) == "36.0"
        assert format_speed(10, imperial=True) == "22.4"

    def test_altitude(self):
        assert format_altitude(100) == "100"
        assert format_altitude(100, imperial=True) == "328"

    def test_clock(self):
        assert format_clock(NOW_MS) == "10:00"
        assert format_clock(None) == PLACEHOLDER
