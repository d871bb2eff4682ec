"""
Cadence bands and crank revolution counting.
"""
from typing import Optional, Sequence

import numpy as np

from .common import is_missing, pairwise_intervals

# (upper bound exclusive, zone, name, colour)
CADENCE_BANDS = (
    (60, 1, "Very Low", "#9CA3AF"),
    (75, 2, "Low", "#3B82F6"),
    (95, 3, "Optimal", "#10B981"),
    (110, 4, "High", "#F59E0B"),
    (float("inf"), 5, "Very High", "#EF4444"),
)

CADENCE_SHORT_NAMES = {1: "V.Low", 2: "Low", 3: "Optimal", 4: "High", 5: "V.High"}


def cadence_zone(cadence: Optional[float]) -> Optional[int]:
    """Cadence band 1-5 (Very Low .. Very High)."""
    if is_missing(cadence):
        return None
    for upper, zone, _name, _color in CADENCE_BANDS:
        if cadence < upper:
            return zone
    return CADENCE_BANDS[-1][1]


def calculate_total_revolutions(stream: Sequence) -> Optional[float]:
    """Crank revolutions from pairwise mean rpm x minutes."""
    deltas, midpoints = pairwise_intervals(stream)
    if deltas.size == 0:
        return None
    return float(round(np.sum(midpoints * deltas / 60000.0)))


def calculate_pedaling_percent(stream: Sequence) -> Optional[float]:
    """Share of time (%) with either end of a sample pair above 0 rpm."""
    deltas, midpoints = pairwise_intervals(stream)
    if deltas.size == 0 or deltas.sum() == 0:
        return None
    # midpoint > 0 <=> at least one endpoint > 0 for non-negative cadence
    return float(deltas[midpoints > 0].sum() / deltas.sum() * 100)
