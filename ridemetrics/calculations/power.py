"""
SRP: Moduł odpowiedzialny za obliczenia związane z mocą.

NP, IF, TSS, work and power-to-weight over measurement streams. The same
functions back the live fields and the stored workout summary.
"""
from typing import Optional, Sequence

import numpy as np
import pandas as pd

from ..config import Config
from .common import NP_WINDOW_MS, as_arrays, is_missing, pairwise_intervals


def calculate_normalized_power(
    stream: Sequence,
    min_samples: Optional[int] = None,
) -> Optional[float]:
    """
    Calculate Normalized Power (NP) using Coggan's formula.

    NP = 4th root of (mean of 4th power of 30s rolling average power)

    The 30 s window is time based and closed on both ends: each sample is
    averaged with every sample from the preceding 30 seconds.

    Args:
        stream: Power measurement stream
        min_samples: Minimum number of samples (default Config.MIN_SAMPLES_NP)

    Returns:
        Normalized Power, or None with too few samples
    """
    if min_samples is None:
        min_samples = Config.MIN_SAMPLES_NP
    ts, watts = as_arrays(stream)
    if ts.size < min_samples or ts.size == 0:
        return None

    series = pd.Series(watts, index=pd.to_datetime(ts, unit="ms"))
    rolling_30s = series.rolling(pd.Timedelta(milliseconds=NP_WINDOW_MS), closed="both").mean()
    avg_pow4 = np.mean(np.power(rolling_30s.to_numpy(), 4))
    np_val = np.power(avg_pow4, 0.25)

    if pd.isna(np_val):
        return None
    return float(np_val)


def calculate_intensity_factor(
    normalized_power: Optional[float],
    ftp: Optional[float],
) -> Optional[float]:
    """IF = NP / FTP."""
    if is_missing(normalized_power) or is_missing(ftp) or ftp <= 0:
        return None
    return normalized_power / ftp


def calculate_tss(
    normalized_power: Optional[float],
    ftp: Optional[float],
    duration_seconds: float,
) -> Optional[float]:
    """
    Training Stress Score.

    TSS = (duration_s * NP * IF) / (FTP * 3600) * 100
    """
    intensity = calculate_intensity_factor(normalized_power, ftp)
    if intensity is None:
        return None
    return (duration_seconds * normalized_power * intensity) / (ftp * 3600) * 100


def calculate_kilojoules(stream: Sequence) -> Optional[float]:
    """Total mechanical work in kJ from pairwise mean power x time."""
    deltas, midpoints = pairwise_intervals(stream)
    if deltas.size == 0:
        return None
    joules = float(np.sum(midpoints * deltas / 1000.0))
    return joules / 1000.0


def calculate_watts_per_kg(power: Optional[float], weight: Optional[float]) -> Optional[float]:
    if is_missing(power) or is_missing(weight) or weight <= 0:
        return None
    return power / weight

