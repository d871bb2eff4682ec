"""
Moduł pomocniczy - wspólne funkcje i stałe dla pakietu calculations.

Shared helpers: conversion of measurement streams to numpy arrays and the
pairwise interval view used by every time-integrating formula.
"""
import math
from typing import Any, Sequence, Tuple

import numpy as np

# Unit conversion constants
MS_TO_KMH = 3.6
MS_TO_MPH = 2.23694
METERS_PER_KM = 1000.0
METERS_PER_MILE = 1609.344
METERS_TO_FEET = 3.28084
KM_PER_MILE = 1.60934

# Keytel et al. HR calorie equation (male coefficients)
KEYTEL_HR = 0.6309
KEYTEL_WEIGHT = 0.1988
KEYTEL_AGE = 0.2017
KEYTEL_INTERCEPT = -55.0969
KCAL_PER_KJ_FOOD = 4.184
DEFAULT_AGE = 30
DEFAULT_WEIGHT_KG = 75.0

# Normalized Power rolling window
NP_WINDOW_MS = 30000


def is_missing(value: Any) -> bool:
    """True for None and NaN."""
    if value is None:
        return True
    try:
        return math.isnan(value)
    except TypeError:
        return False


def as_arrays(stream: Sequence) -> Tuple[np.ndarray, np.ndarray]:
    """
    Convert a measurement stream to `(timestamps, values)` float arrays.
    Takes a length-bounded copy first so a concurrent append cannot be observed.

    Args:
        stream: Sequence of (timestamp, value) pairs

    Returns:
        Tuple of numpy arrays (empty arrays for an empty stream)
    """
    n = len(stream)
    if n == 0:
        return np.empty(0, dtype=float), np.empty(0, dtype=float)
    data = np.asarray(list(stream[:n]), dtype=float).reshape(n, 2)
    return data[:, 0], data[:, 1]


def pairwise_intervals(stream: Sequence) -> Tuple[np.ndarray, np.ndarray]:
    """Durations (ms) and midpoint values of each consecutive sample pair.

    Returns:
        (deltas_ms, midpoint_values); both empty when fewer than 2 samples
    """
    ts, values = as_arrays(stream)
    if ts.size < 2:
        return np.empty(0, dtype=float), np.empty(0, dtype=float)
    deltas = np.diff(ts)
    midpoints = (values[:-1] + values[1:]) / 2.0
    return deltas, midpoints

