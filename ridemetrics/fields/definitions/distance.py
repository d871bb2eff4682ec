"""
Distance fields, read from the cumulative distance channel.
"""
from ...calculations.speed import calculate_distance, distance_in_user_unit
from ..base import CalculationContext, FieldCategory, FieldDefinition
from .common import decimals_formatter


def _lap_distance(ctx: CalculationContext):
    lap_start = ctx.workout.lap_start_time
    if lap_start is None:
        return None
    meters = calculate_distance(ctx.stream("distance"), since=lap_start)
    return distance_in_user_unit(meters, ctx.settings.is_imperial)


DISTANCE_FIELDS = [
    FieldDefinition(
        id="distance-total",
        name="Distance",
        short_name="Dist",
        category=FieldCategory.DISTANCE,
        description="Total distance covered",
        unit="km",
        unit_imperial="mi",
        icon="📍",
        requires_gps=True,
        requires_workout_active=True,
        decimals=2,
        min_value=0,
        calculator=lambda ctx: distance_in_user_unit(
            calculate_distance(ctx.stream("distance")), ctx.settings.is_imperial
        ),
        formatter=decimals_formatter(2),
    ),
    FieldDefinition(
        id="distance-lap",
        name="Lap Distance",
        short_name="Lap Dist",
        category=FieldCategory.DISTANCE,
        description="Distance covered in the current lap",
        unit="km",
        unit_imperial="mi",
        icon="📍",
        requires_gps=True,
        requires_workout_active=True,
        decimals=2,
        min_value=0,
        calculator=_lap_distance,
        formatter=decimals_formatter(2),
    ),
]
