"""
Calculations Module.

Pure formulas over measurement streams, shared by the live field catalog
and the stored workout summary.
"""
from .aggregation import (
    rolling_average,
    weighted_rolling_average,
    average,
    maximum,
    minimum,
    latest_value,
    values_since,
    values_where,
)
from .zones import (
    ZoneColor,
    percent_of_reference,
    zone_for,
    zone_color,
    colors_for_zone,
    time_in_zones,
    primary_zone,
    hex_to_rgba,
    darken_color,
)
from .power import (
    calculate_normalized_power,
    calculate_intensity_factor,
    calculate_tss,
    calculate_kilojoules,
    calculate_watts_per_kg,
)
from .heartrate import (
    calculate_hr_reserve_percent,
    calculate_hr_calories,
    calories_per_minute,
)
from .speed import (
    speed_in_user_unit,
    pace_in_user_unit,
    distance_in_user_unit,
    calculate_distance,
    calculate_moving_time,
    calculate_stopped_time,
    calculate_vertical_speed,
    calculate_efficiency_factor,
)
from .elevation import (
    calculate_elevation_gain,
    calculate_elevation_loss,
    calculate_grade,
    grade_band,
)
from .cadence import (
    cadence_zone,
    calculate_total_revolutions,
    calculate_pedaling_percent,
)

__all__ = [
    # Aggregation
    "rolling_average",
    "weighted_rolling_average",
    "average",
    "maximum",
    "minimum",
    "latest_value",
    "values_since",
    "values_where",
    # Zones
    "ZoneColor",
    "percent_of_reference",
    "zone_for",
    "zone_color",
    "colors_for_zone",
    "time_in_zones",
    "primary_zone",
    "hex_to_rgba",
    "darken_color",
    # Power
    "calculate_normalized_power",
    "calculate_intensity_factor",
    "calculate_tss",
    "calculate_kilojoules",
    "calculate_watts_per_kg",
    # Heart rate
    "calculate_hr_reserve_percent",
    "calculate_hr_calories",
    "calories_per_minute",
    # Speed & distance
    "speed_in_user_unit",
    "pace_in_user_unit",
    "distance_in_user_unit",
    "calculate_distance",
    "calculate_moving_time",
    "calculate_stopped_time",
    "calculate_vertical_speed",
    "calculate_efficiency_factor",
    # Elevation
    "calculate_elevation_gain",
    "calculate_elevation_loss",
    "calculate_grade",
    "grade_band",
    # Cadence
    "cadence_zone",
    "calculate_total_revolutions",
    "calculate_pedaling_percent",
]
