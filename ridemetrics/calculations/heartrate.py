"""
Heart rate derived metrics: heart-rate reserve and calorie estimation.
"""
from typing import Optional, Sequence

import numpy as np

from .common import (
    DEFAULT_AGE,
    KCAL_PER_KJ_FOOD,
    KEYTEL_AGE,
    KEYTEL_HR,
    KEYTEL_INTERCEPT,
    KEYTEL_WEIGHT,
    is_missing,
    pairwise_intervals,
)


def calculate_hr_reserve_percent(
    heart_rate: Optional[float],
    max_hr: Optional[float],
    resting_hr: Optional[float],
) -> Optional[float]:
    """Karvonen %HRR = (HR - rest) / (max - rest) * 100."""
    if is_missing(heart_rate) or not max_hr or not resting_hr:
        return None
    reserve = max_hr - resting_hr
    if reserve <= 0:
        return None
    return (heart_rate - resting_hr) / reserve * 100


def calories_per_minute(heart_rate: float, weight_kg: float, age: Optional[int] = None) -> float:
    """Keytel et al. energy expenditure (male equation) in kcal/min, floored at 0."""
    age = DEFAULT_AGE if age is None else age
    kcal = (age * KEYTEL_AGE + weight_kg * KEYTEL_WEIGHT + heart_rate * KEYTEL_HR + KEYTEL_INTERCEPT)
    return max(0.0, kcal / KCAL_PER_KJ_FOOD)


def calculate_hr_calories(
    stream: Sequence,
    weight_kg: Optional[float],
    age: Optional[int] = None,
) -> Optional[float]:
    """Integrate calorie burn over a heart rate stream, pair by pair."""
    if not weight_kg or weight_kg <= 0:
        return None
    deltas, midpoints = pairwise_intervals(stream)
    if deltas.size == 0:
        return None

    age = DEFAULT_AGE if age is None else age
    per_minute = (age * KEYTEL_AGE + weight_kg * KEYTEL_WEIGHT + midpoints * KEYTEL_HR + KEYTEL_INTERCEPT)
    per_minute = np.clip(per_minute / KCAL_PER_KJ_FOOD, 0, None)
    return float(np.sum(per_minute * deltas / 60000.0))
