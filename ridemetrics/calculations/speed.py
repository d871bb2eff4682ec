"""
Speed, pace, distance and moving-time formulas.

Speeds are stored in m/s; conversion to the rider's unit system happens at
the formula boundary so formatted values need no further scaling.
"""
from typing import Optional, Sequence

import numpy as np

from ..config import Config
from .common import (
    KM_PER_MILE,
    METERS_PER_KM,
    METERS_PER_MILE,
    MS_TO_KMH,
    MS_TO_MPH,
    as_arrays,
    is_missing,
    pairwise_intervals,
)


def speed_in_user_unit(speed_ms: Optional[float], imperial: bool = False) -> Optional[float]:
    """m/s -> km/h or mph."""
    if is_missing(speed_ms):
        return None
    return speed_ms * (MS_TO_MPH if imperial else MS_TO_KMH)


def pace_in_user_unit(speed_ms: Optional[float], imperial: bool = False) -> Optional[float]:
    """m/s -> decimal minutes per km (or per mile)."""
    if is_missing(speed_ms) or speed_ms <= 0:
        return None
    min_per_km = 60 / (speed_ms * MS_TO_KMH)
    return min_per_km * KM_PER_MILE if imperial else min_per_km


def distance_in_user_unit(meters: Optional[float], imperial: bool = False) -> Optional[float]:
    """metres -> km or miles."""
    if is_missing(meters):
        return None
    return meters / (METERS_PER_MILE if imperial else METERS_PER_KM)


def calculate_moving_time(stream: Sequence, threshold: Optional[float] = None) -> Optional[float]:
    """ms spent with pairwise mean speed above `threshold` m/s."""
    if threshold is None:
        threshold = Config.MOVING_SPEED_THRESHOLD
    deltas, midpoints = pairwise_intervals(stream)
    if deltas.size == 0:
        return None
    return float(deltas[midpoints > threshold].sum())


def calculate_stopped_time(stream: Sequence, threshold: Optional[float] = None) -> Optional[float]:
    """ms spent with pairwise mean speed at or below `threshold` m/s."""
    if threshold is None:
        threshold = Config.MOVING_SPEED_THRESHOLD
    deltas, midpoints = pairwise_intervals(stream)
    if deltas.size == 0:
        return None
    return float(deltas[midpoints <= threshold].sum())


def calculate_vertical_speed(
    altitude_stream: Sequence,
    reference_time: int,
    window_ms: float = 30000,
) -> Optional[float]:
    """Climbing rate (VAM) in m/h over the trailing window; descents report 0."""
    ts, altitude = as_arrays(altitude_stream)
    mask = ts >= reference_time - window_ms
    ts, altitude = ts[mask], altitude[mask]
    if ts.size < 2:
        return None

    hours = (ts[-1] - ts[0]) / 3600000.0
    if hours <= 0:
        return None
    return max(0.0, float(altitude[-1] - altitude[0]) / hours)


def calculate_distance(distance_stream: Sequence, since: Optional[int] = None) -> Optional[float]:
    """Metres covered, from a cumulative distance channel.

    Without `since` this is the latest cumulative value; with `since` it is
    the increase over the samples at or after that time.
    """
    ts, meters = as_arrays(distance_stream)
    if ts.size == 0:
        return None
    if since is None:
        return float(meters[-1])

    lap = meters[ts >= since]
    if lap.size < 2:
        return 0.0
    return float(lap[-1] - lap[0])


def calculate_efficiency_factor(
    speed_stream: Sequence,
    power_stream: Sequence,
    imperial: bool = False,
    threshold: Optional[float] = None,
) -> Optional[float]:
    """Average moving speed (user unit) per watt of average positive power."""
    if threshold is None:
        threshold = Config.MOVING_SPEED_THRESHOLD
    _, speeds = as_arrays(speed_stream)
    _, watts = as_arrays(power_stream)
    speeds = speeds[speeds > threshold]
    watts = watts[watts > 0]
    if speeds.size == 0 or watts.size == 0:
        return None
    return speed_in_user_unit(float(np.mean(speeds)), imperial) / float(np.mean(watts))
