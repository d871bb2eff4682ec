"""
Workout summary built from recorded streams.

Produces the `summary` dict stored with each workout. It uses the same
formulas as the live fields, so a stored summary matches what the rider saw.
"""
import logging
from typing import Any, Dict, Optional

from .calculations.aggregation import average, maximum, values_where
from .calculations.elevation import calculate_elevation_gain
from .calculations.heartrate import calculate_hr_calories
from .calculations.power import (
    calculate_intensity_factor,
    calculate_kilojoules,
    calculate_normalized_power,
    calculate_tss,
)
from .calculations.speed import calculate_distance
from .domain import MeasurementsState, UserSettings
from .power_duration import compute_max_mean_power, curve_to_summary

logger = logging.getLogger(__name__)


def summarize_workout(
    measurements: MeasurementsState,
    settings: UserSettings,
    start_time: int,
    end_time: Optional[int] = None,
) -> Dict[str, Any]:
    """Aggregate a recorded workout into its stored summary.

    Args:
        measurements: Recorded streams
        settings: Rider settings at the time of the workout
        start_time: Workout start (ms)
        end_time: Workout end (ms); defaults to the last recorded sample

    Returns:
        Dict with camelCase keys; a metric without data is None
    """
    if end_time is None:
        end_time = measurements.latest_timestamp() or start_time
    duration_ms = max(0, int(end_time - start_time))

    power = measurements.snapshot("power")
    heartrate = measurements.snapshot("heartrate")
    cadence = measurements.snapshot("cadence")

    normalized = calculate_normalized_power(power)
    energy = calculate_kilojoules(power)
    if not energy:
        energy = calculate_hr_calories(heartrate, settings.weight, settings.age)

    summary = {
        "duration": duration_ms,
        "avgPower": average(power),
        "maxPower": maximum(power),
        "normalizedPower": normalized,
        "intensityFactor": calculate_intensity_factor(normalized, settings.ftp),
        "trainingLoad": calculate_tss(normalized, settings.ftp, duration_ms / 1000),
        "avgHeartrate": average(heartrate),
        "maxHeartrate": maximum(heartrate),
        "avgCadence": average(values_where(cadence, 0)),
        "totalDistance": calculate_distance(measurements.snapshot("distance")),
        "totalElevationGain": calculate_elevation_gain(measurements.snapshot("altitude")),
        "totalEnergy": energy,
        "powerCurve": curve_to_summary(compute_max_mean_power(power)),
    }
    logger.debug(
        f"Summarized workout: {duration_ms / 1000:.0f}s, "
        f"{len(power)} power / {len(heartrate)} HR samples"
    )
    return summary
