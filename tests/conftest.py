# Tests configuration for ridemetrics
import pytest
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from ridemetrics.domain import (
    ConnectionsState,
    MeasurementsState,
    UserSettings,
    WorkoutState,
)

# Fixed "now" for deterministic window calculations (2024-01-15 10:00:00 UTC)
NOW_MS = 1705312800000


def make_stream(values, start=0, step_ms=1000):
    """Build a [(timestamp, value), ...] stream with a fixed sample spacing."""
    return [(start + i * step_ms, float(v)) for i, v in enumerate(values)]


@pytest.fixture
def now_ms():
    return NOW_MS


@pytest.fixture
def settings():
    """Rider profile with FTP 200 W, max HR 190 bpm."""
    return UserSettings(ftp=200, max_hr=190, resting_hr=50, weight=70, age=35)


@pytest.fixture
def connections():
    """All sensors and GPS connected."""
    return ConnectionsState(sensors={
        'power': True,
        'heartrate': True,
        'cadence': True,
        'speed': True,
        'gps': True,
    })


@pytest.fixture
def active_workout():
    """Workout started 10 minutes before NOW_MS, lap started 1 minute ago."""
    start = NOW_MS - 600_000
    return WorkoutState(
        is_active=True,
        start_time=start,
        elapsed_time=600_000,
        lap_start_time=NOW_MS - 60_000,
    )


@pytest.fixture
def measurements():
    """Ten minutes of 1 Hz data ending at NOW_MS."""
    state = MeasurementsState()
    start = NOW_MS - 599_000
    for i in range(600):
        t = start + i * 1000
        state.append('power', t, 200)
        state.append('heartrate', t, 140)
        state.append('cadence', t, 90)
        state.append('speed', t, 10.0)
        state.append('distance', t, i * 10.0)
        state.append('altitude', t, 100 + i * 0.5)
    return state


@pytest.fixture
def fixed_clock():
    return lambda: NOW_MS
