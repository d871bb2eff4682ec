"""
Elevation gain/loss and road gradient.
"""
from typing import Optional, Sequence

import numpy as np

from ..config import Config
from .common import METERS_TO_FEET, as_arrays, is_missing

GRADE_SAMPLES = 5
MIN_GRADE_DISTANCE_M = 10.0


def elevation_in_user_unit(meters: Optional[float], imperial: bool = False) -> Optional[float]:
    if is_missing(meters):
        return None
    return meters * METERS_TO_FEET if imperial else meters


def calculate_elevation_gain(stream: Sequence, threshold: Optional[float] = None) -> float:
    """Sum of sample-to-sample climbs larger than the noise threshold (metres)."""
    if threshold is None:
        threshold = Config.ELEVATION_NOISE_THRESHOLD
    _, altitude = as_arrays(stream)
    if altitude.size < 2:
        return 0.0
    diffs = np.diff(altitude)
    return float(diffs[diffs > threshold].sum())


def calculate_elevation_loss(stream: Sequence, threshold: Optional[float] = None) -> float:
    """Sum of sample-to-sample descents larger than the noise threshold (metres, positive)."""
    if threshold is None:
        threshold = Config.ELEVATION_NOISE_THRESHOLD
    _, altitude = as_arrays(stream)
    if altitude.size < 2:
        return 0.0
    drops = -np.diff(altitude)
    return float(drops[drops > threshold].sum())


def calculate_grade(
    altitude_stream: Sequence,
    distance_stream: Sequence,
    samples: int = GRADE_SAMPLES,
    min_distance: float = MIN_GRADE_DISTANCE_M,
) -> Optional[float]:
    """Current gradient in % over the last `samples` altitude readings.

    Horizontal distance is read from the cumulative distance channel,
    interpolated at the first and last altitude timestamps.
    """
    alt_ts, altitude = as_arrays(altitude_stream)
    dist_ts, distance = as_arrays(distance_stream)
    if alt_ts.size < samples or dist_ts.size < 2:
        return None

    alt_ts, altitude = alt_ts[-samples:], altitude[-samples:]
    start, end = np.interp([alt_ts[0], alt_ts[-1]], dist_ts, distance)
    horizontal = end - start
    if horizontal < min_distance:
        return None
    return float((altitude[-1] - altitude[0]) / horizontal * 100)


GRADE_BANDS = (
    # (upper bound exclusive, zone, name, colour)
    (-5.0, 1, "Steep Descent", "#3B82F6"),
    (0.0, 2, "Descent", "#60A5FA"),
    (3.0, 3, "Flat", "#10B981"),
    (6.0, 4, "Moderate Climb", "#F59E0B"),
    (10.0, 5, "Steep Climb", "#EF4444"),
    (float("inf"), 6, "Very Steep", "#7C3AED"),
)


def grade_band(grade: Optional[float]):
    """(zone, name, colour) for a gradient; the steepest descent band is inclusive."""
    if is_missing(grade):
        return None
    if grade <= GRADE_BANDS[0][0]:
        return GRADE_BANDS[0][1:]
    for upper, zone, name, color in GRADE_BANDS[1:]:
        if grade < upper:
            return zone, name, color
    return GRADE_BANDS[-1][1:]
