"""Tests for the stored workout summary."""
import pytest

from ridemetrics.domain import MeasurementsState, UserSettings, WorkoutRecord
from ridemetrics.summary import summarize_workout
from conftest import NOW_MS


class TestSummarizeWorkout:
    """Tests for summarize_workout."""

    def test_steady_ride(self, measurements, settings):
        summary = summarize_workout(measurements, settings, NOW_MS - 600_000, NOW_MS)

        assert summary["duration"] == 600_000
        assert summary["avgPower"] == pytest.approx(200)
        assert summary["maxPower"] == pytest.approx(200)
        assert summary["normalizedPower"] == pytest.approx(200)
        assert summary["intensityFactor"] == pytest.approx(1.0)
        assert summary["trainingLoad"] == pytest.approx(16.667, abs=1e-3)
        assert summary["avgHeartrate"] == pytest.approx(140)
        assert summary["maxHeartrate"] == pytest.approx(140)
        assert summary["avgCadence"] == pytest.approx(90)
        assert summary["totalDistance"] == pytest.approx(5990)
        assert summary["totalElevationGain"] == 0
        assert summary["totalEnergy"] == pytest.approx(119.8)

    def test_power_curve(self, measurements, settings):
        """Durations longer than the 10 minute recording are left out."""
        summary = summarize_workout(measurements, settings, NOW_MS - 600_000, NOW_MS)
        durations = [p["duration"] for p in summary["powerCurve"]]
        assert durations == [1, 5, 10, 30, 60, 300]
        assert all(p["watts"] == pytest.approx(200) for p in summary["powerCurve"])

    def test_end_defaults_to_last_sample(self, measurements, settings):
        summary = summarize_workout(measurements, settings, NOW_MS - 600_000)
        assert summary["duration"] == 600_000

    def test_without_power(self, settings):
        """Energy falls back to heart rate when there is no power data."""
        state = MeasurementsState()
        for i in range(61):
            state.append("heartrate", i * 1000, 140)
        summary = summarize_workout(state, settings, 0)

        assert summary["avgPower"] is None
        assert summary["normalizedPower"] is None
        assert summary["trainingLoad"] is None
        assert summary["powerCurve"] == []
        assert summary["totalEnergy"] > 0

    def test_without_ftp(self, measurements):
        summary = summarize_workout(measurements, UserSettings(), NOW_MS - 600_000, NOW_MS)
        assert summary["normalizedPower"] == pytest.approx(200)
        assert summary["intensityFactor"] is None
        assert summary["trainingLoad"] is None

    def test_readable_as_history_record(self, measurements, settings):
        """A stored summary feeds straight back into the history analytics."""
        summary = summarize_workout(measurements, settings, NOW_MS - 600_000, NOW_MS)
        record = WorkoutRecord(id="w1", start_time=NOW_MS - 600_000, end_time=NOW_MS, summary=summary)

        assert record.max_power == pytest.approx(200)
        assert record.training_load == pytest.approx(16.667, abs=1e-3)
        assert record.power_curve[300] == pytest.approx(200)
