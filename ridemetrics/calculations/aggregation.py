"""
SRP: Moduł odpowiedzialny za agregacje w oknach czasowych.

Time-windowed aggregation primitives over a measurement stream. Every
function here is pure and returns None instead of raising when there is
nothing to aggregate.
"""
from typing import Optional, Sequence, Tuple

import numpy as np

from ..config import Config
from ..domain.measurements import Measurement
from ..domain.workout import now_ms
from .common import as_arrays


def _window(
    stream: Sequence,
    window_ms: float,
    reference_time: Optional[int],
) -> Tuple[np.ndarray, np.ndarray, int]:
    """Samples with `reference_time - window_ms <= timestamp <= reference_time`."""
    ref = now_ms() if reference_time is None else reference_time
    ts, values = as_arrays(stream)
    if ts.size == 0:
        return ts, values, ref
    mask = (ts >= ref - window_ms) & (ts <= ref)
    return ts[mask], values[mask], ref


def rolling_average(
    stream: Sequence,
    window_ms: float,
    reference_time: Optional[int] = None,
) -> Optional[float]:
    """Arithmetic mean of the samples inside the trailing window.

    Args:
        stream: Measurement stream
        window_ms: Window length in milliseconds
        reference_time: Window end in ms (defaults to now)

    Returns:
        Mean value, or None if the stream or the window is empty
    """
    _, values, _ = _window(stream, window_ms, reference_time)
    if values.size == 0:
        return None
    return float(values.mean())


def weighted_rolling_average(
    stream: Sequence,
    window_ms: float,
    reference_time: Optional[int] = None,
) -> Optional[float]:
    """Linearly age-weighted mean over the trailing window.

    Each sample is weighted `1 - (reference_time - timestamp) / window_ms`, so
    a sample at the reference time counts fully and one at the window start
    counts zero.

    Returns:
        Weighted mean, or None for an empty window or zero total weight
    """
    if window_ms <= 0:
        return None
    ts, values, ref = _window(stream, window_ms, reference_time)
    if values.size == 0:
        return None

    weights = 1.0 - (ref - ts) / window_ms
    total_weight = weights.sum()
    if total_weight == 0:
        return None
    return float((values * weights).sum() / total_weight)


def average(stream: Sequence) -> Optional[float]:
    """Mean over the whole stream."""
    _, values = as_arrays(stream)
    return float(values.mean()) if values.size else None


def maximum(stream: Sequence) -> Optional[float]:
    """Maximum over the whole stream."""
    _, values = as_arrays(stream)
    return float(values.max()) if values.size else None


def minimum(stream: Sequence) -> Optional[float]:
    """Minimum over the whole stream."""
    _, values = as_arrays(stream)
    return float(values.min()) if values.size else None


def latest_value(
    stream: Sequence,
    max_age_ms: Optional[float] = None,
    now: Optional[int] = None,
) -> Optional[float]:
    """Value of the last sample if it is fresh.

    Args:
        stream: Measurement stream
        max_age_ms: Staleness limit (default Config.LATEST_VALUE_MAX_AGE_MS)
        now: Current time in ms (defaults to wall clock)

    Returns:
        Last value, or None if the stream is empty or the last sample is older
        than `max_age_ms`
    """
    n = len(stream)
    if n == 0:
        return None
    if max_age_ms is None:
        max_age_ms = Config.LATEST_VALUE_MAX_AGE_MS
    now = now_ms() if now is None else now

    timestamp, value = stream[n - 1]
    if now - timestamp <= max_age_ms:
        return float(value)
    return None


def values_since(stream: Sequence, start_ms: int) -> Tuple[Measurement, ...]:
    """Samples with `timestamp >= start_ms` (lap filtering)."""
    n = len(stream)
    return tuple(m for m in stream[:n] if m[0] >= start_ms)


def values_where(stream: Sequence, lower: float) -> Tuple[Measurement, ...]:
    """Samples whose value is strictly above `lower`."""
    n = len(stream)
    return tuple(m for m in stream[:n] if m[1] > lower)
