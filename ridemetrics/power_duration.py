"""
Power-Duration Curve & Personal Records Module.

Provides functions for:
- Computing Mean Maximal Power (MMP) for a fixed set of durations
- Merging per-workout power curves into an all-time curve
- Detecting chronological Personal Records (PRs) across workout history
- Checking a freshly finished workout against history
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Union
import logging

import numpy as np
import pandas as pd

from .calculations.common import as_arrays
from .calculations.formatting import format_duration
from .config import Config
from .domain import WorkoutRecord

logger = logging.getLogger(__name__)


# ============================================================
# Constants
# ============================================================

# Durations tracked on the power curve (1s to 60min)
POWER_CURVE_DURATIONS = (1, 5, 10, 30, 60, 300, 1200, 3600)

# Curve durations with personal record tracking
PR_CURVE_DURATIONS = (60, 300, 1200)

# Durations reported by the post-workout record check
RECORD_CHECK_LABELS = {
    1: "1s Power",
    5: "5s Power",
    60: "1m Power",
    300: "5m Power",
    1200: "20m Power",
    3600: "1h Power",
}


@dataclass(frozen=True)
class PowerCurvePoint:
    """Best average power sustained for a duration."""
    duration_seconds: int
    best_watts: float


@dataclass(frozen=True)
class PersonalRecordEvent:
    """A running maximum being beaten, in chronological order."""
    date: datetime
    metric: str             # 'maxPower', 'maxHeartrate', 'power60s', ...
    value: float
    improvement_delta: Union[float, str]   # 'New' for the first record of a metric
    workout_id: str

    @property
    def is_first(self) -> bool:
        return self.improvement_delta == "New"


WorkoutLike = Union[WorkoutRecord, Mapping[str, Any]]


def _as_record(workout: WorkoutLike) -> WorkoutRecord:
    if isinstance(workout, WorkoutRecord):
        return workout
    return WorkoutRecord.from_dict(workout)


# ============================================================
# Mean Maximal Power from a stream
# ============================================================

def interpolate_to_1hz(stream: Sequence) -> pd.Series:
    """Resample a power stream to 1 Hz by linear interpolation.

    Args:
        stream: Power measurement stream (ms timestamps)

    Returns:
        Power series at 1Hz sampling rate (empty for an empty stream)
    """
    ts, watts = as_arrays(stream)
    if ts.size == 0:
        return pd.Series(dtype=float)

    seconds = (ts - ts[0]) / 1000.0
    watts = np.nan_to_num(watts)

    # Check if already 1Hz
    time_diff = np.diff(seconds)
    median_diff = np.median(time_diff) if len(time_diff) > 0 else 1.0
    if 0.9 <= median_diff <= 1.1:
        return pd.Series(watts)

    new_times = np.arange(0, seconds[-1] + 1, 1.0)
    return pd.Series(np.interp(new_times, seconds, watts))


def compute_max_mean_power(
    stream: Sequence,
    durations: Iterable[int] = POWER_CURVE_DURATIONS,
) -> Dict[int, float]:
    """Compute Maximum Mean Power for a list of durations.

    Uses a rolling mean over the 1 Hz series to find the best average power
    achievable for each duration window. Durations longer than the data are
    omitted.

    Returns:
        Dict mapping duration (seconds) to max mean power (watts)
    """
    power = interpolate_to_1hz(stream)
    n = len(power)

    results = {}
    for window in durations:
        if n < window:
            continue

        max_power = power.rolling(window=window, min_periods=window).mean().max()
        if pd.notna(max_power):
            results[int(window)] = float(max_power)

    return results


# ============================================================
# Power curve across workouts
# ============================================================

def _workout_curve(record: WorkoutRecord) -> Dict[int, float]:
    """Per-duration bests of one workout; maxPower stands in for 1 s when no curve is stored."""
    curve = record.power_curve
    if curve:
        return curve
    if record.max_power is not None:
        return {1: record.max_power}
    return {}


def compute_power_curve(workouts: Iterable[WorkoutLike]) -> List[PowerCurvePoint]:
    """Best watts per tracked duration across all workouts.

    Durations nobody has a value for are omitted, not zero-filled.

    Returns:
        PowerCurvePoints sorted by duration
    """
    best: Dict[int, float] = {}
    for workout in workouts:
        for duration, watts in _workout_curve(_as_record(workout)).items():
            if duration not in POWER_CURVE_DURATIONS:
                continue
            if duration not in best or watts > best[duration]:
                best[duration] = watts

    return [PowerCurvePoint(d, best[d]) for d in sorted(best)]


def curve_to_summary(curve: Mapping[int, float]) -> List[Dict[str, float]]:
    """Power curve in the stored summary shape: `[{duration, watts}, ...]`."""
    return [{"duration": int(d), "watts": round(float(w), 1)} for d, w in sorted(curve.items())]


# ============================================================
# Personal records
# ============================================================

def _record_metrics(record: WorkoutRecord) -> Dict[str, Optional[float]]:
    curve = record.power_curve
    metrics = {
        "maxPower": record.max_power,
        "maxHeartrate": record.max_heartrate,
    }
    for duration in PR_CURVE_DURATIONS:
        metrics[f"power{duration}s"] = curve.get(duration)
    return metrics


def compute_personal_records(workouts: Iterable[WorkoutLike]) -> List[PersonalRecordEvent]:
    """Detect personal records in chronological order.

    Workouts are processed by ascending start time. Each metric keeps a
    running maximum; a value strictly above it is a record. The first record
    of a metric has `improvement_delta == 'New'`, later ones the gain over
    the previous maximum.
    """
    records = sorted((_as_record(w) for w in workouts), key=lambda r: r.start_time)
    running: Dict[str, float] = {}
    events: List[PersonalRecordEvent] = []

    for record in records:
        when = pd.Timestamp(record.start_time, unit="ms", tz="UTC").tz_convert(Config.TIMEZONE).to_pydatetime()
        for metric, value in _record_metrics(record).items():
            if value is None or value <= 0:
                continue
            previous = running.get(metric)
            if previous is not None and value <= previous:
                continue
            delta = "New" if previous is None else value - previous
            running[metric] = value
            events.append(PersonalRecordEvent(when, metric, value, delta, record.id))

    logger.debug(f"Found {len(events)} personal record events in {len(records)} workouts")
    return events


def personal_record_history(workouts: Iterable[WorkoutLike]) -> List[PersonalRecordEvent]:
    """Record events, most recent first."""
    return list(reversed(compute_personal_records(workouts)))


class PersonalRecordTracker:
    """Best values over a workout history, used to announce records after a ride.

    Usage:
        tracker = PersonalRecordTracker(history)
        for line in tracker.check_new_records(finished_workout):
            announce(line)
    """

    def __init__(self, workouts: Iterable[WorkoutLike] = ()):
        self.max_power = 0.0
        self.max_heartrate = 0.0
        self.longest_duration = 0
        self.longest_distance = 0.0
        self.power_curve: Dict[int, float] = {}
        for workout in workouts:
            self._absorb(_as_record(workout))

    def _absorb(self, record: WorkoutRecord) -> None:
        if record.max_power and record.max_power > self.max_power:
            self.max_power = record.max_power
        if record.max_heartrate and record.max_heartrate > self.max_heartrate:
            self.max_heartrate = record.max_heartrate
        if (record.total_duration or 0) > self.longest_duration:
            self.longest_duration = record.total_duration
        if record.total_distance and record.total_distance > self.longest_distance:
            self.longest_distance = record.total_distance
        for duration, watts in record.power_curve.items():
            if watts > self.power_curve.get(duration, 0):
                self.power_curve[duration] = watts

    def check_new_records(self, workout: WorkoutLike) -> List[str]:
        """Human-readable descriptions of the records a new workout sets.

        The history is not updated; call `add()` once the workout is stored.
        """
        record = _as_record(workout)
        found: List[str] = []

        if record.max_power and record.max_power > self.max_power:
            found.append(f"Max Power: {record.max_power:.0f} W")

        if record.max_heartrate and record.max_heartrate > self.max_heartrate:
            found.append(f"Max Heart Rate: {record.max_heartrate:.0f} bpm")

        if (record.total_duration or 0) > self.longest_duration:
            found.append(f"Longest Ride: {format_duration(record.total_duration)}")

        for duration, watts in sorted(record.power_curve.items()):
            label = RECORD_CHECK_LABELS.get(duration)
            if label is None or watts <= self.power_curve.get(duration, 0):
                continue
            # 1 s power duplicates the max power record
            if duration == 1 and any(r.startswith("Max Power") for r in found):
                continue
            found.append(f"{label}: {watts:.0f} W")

        return found

    def add(self, workout: WorkoutLike) -> None:
        """Fold a stored workout into the history bests."""
        self._absorb(_as_record(workout))
