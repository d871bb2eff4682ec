"""
Speed, pace and moving-time fields.

Speed samples are m/s; calculators return the rider's unit (km/h or mph,
min/km or min/mi) so formatters only round.
"""
from ...calculations.aggregation import average, latest_value, maximum, rolling_average, values_where
from ...calculations.elevation import elevation_in_user_unit
from ...calculations.formatting import format_pace
from ...calculations.speed import (
    calculate_efficiency_factor,
    calculate_moving_time,
    calculate_stopped_time,
    calculate_vertical_speed,
    pace_in_user_unit,
    speed_in_user_unit,
)
from ...config import Config
from ..base import CalculationContext, FieldCategory, FieldDefinition, SourceType, UpdateFrequency
from .common import decimals_formatter, duration_formatter, round_formatter


def _moving_average(ctx: CalculationContext):
    """Mean m/s over samples above the moving threshold."""
    return average(values_where(ctx.stream("speed"), Config.MOVING_SPEED_THRESHOLD))


def _speed(ctx: CalculationContext, value):
    return speed_in_user_unit(value, ctx.settings.is_imperial)


def _pace_formatter(value, settings) -> str:
    return format_pace(value)


def _vertical_speed(ctx: CalculationContext):
    vam = calculate_vertical_speed(ctx.stream("altitude"), ctx.now)
    return elevation_in_user_unit(vam, ctx.settings.is_imperial)


SPEED_FIELDS = [
    FieldDefinition(
        id="speed-current",
        name="Speed",
        short_name="SPD",
        category=FieldCategory.SPEED,
        description="Current speed",
        unit="km/h",
        unit_imperial="mph",
        source_type=SourceType.SENSOR,
        update_frequency=UpdateFrequency.REALTIME,
        icon="🚴",
        requires_gps=True,
        sensor_channel="speed",
        decimals=1,
        min_value=0,
        calculator=lambda ctx: _speed(ctx, latest_value(ctx.stream("speed"), now=ctx.now)),
        formatter=decimals_formatter(1),
    ),
    FieldDefinition(
        id="speed-5s",
        name="Speed (5s)",
        short_name="5s SPD",
        category=FieldCategory.SPEED,
        description="5-second rolling average speed",
        unit="km/h",
        unit_imperial="mph",
        icon="🚴",
        requires_gps=True,
        decimals=1,
        calculator=lambda ctx: _speed(ctx, rolling_average(ctx.stream("speed"), 5000, ctx.now)),
        formatter=decimals_formatter(1),
    ),
    FieldDefinition(
        id="speed-30s",
        name="Speed (30s)",
        short_name="30s SPD",
        category=FieldCategory.SPEED,
        description="30-second rolling average speed",
        unit="km/h",
        unit_imperial="mph",
        icon="🚴",
        requires_gps=True,
        decimals=1,
        calculator=lambda ctx: _speed(ctx, rolling_average(ctx.stream("speed"), 30000, ctx.now)),
        formatter=decimals_formatter(1),
    ),
    FieldDefinition(
        id="speed-avg",
        name="Avg Speed",
        short_name="Avg SPD",
        category=FieldCategory.SPEED,
        description="Average moving speed for the workout",
        unit="km/h",
        unit_imperial="mph",
        update_frequency=UpdateFrequency.PERIODIC,
        icon="🚴",
        requires_gps=True,
        requires_workout_active=True,
        decimals=1,
        calculator=lambda ctx: _speed(ctx, _moving_average(ctx)),
        formatter=decimals_formatter(1),
    ),
    FieldDefinition(
        id="speed-max",
        name="Max Speed",
        short_name="Max SPD",
        category=FieldCategory.SPEED,
        description="Maximum speed during the workout",
        unit="km/h",
        unit_imperial="mph",
        update_frequency=UpdateFrequency.ON_CHANGE,
        icon="🚴",
        requires_gps=True,
        requires_workout_active=True,
        decimals=1,
        calculator=lambda ctx: _speed(ctx, maximum(ctx.stream("speed"))),
        formatter=decimals_formatter(1),
    ),
    FieldDefinition(
        id="speed-pace",
        name="Pace",
        short_name="Pace",
        category=FieldCategory.SPEED,
        description="Current pace",
        unit="/km",
        unit_imperial="/mi",
        icon="⏱️",
        requires_gps=True,
        calculator=lambda ctx: pace_in_user_unit(
            rolling_average(ctx.stream("speed"), 5000, ctx.now), ctx.settings.is_imperial
        ),
        formatter=_pace_formatter,
    ),
    FieldDefinition(
        id="speed-pace-avg",
        name="Avg Pace",
        short_name="Avg Pace",
        category=FieldCategory.SPEED,
        description="Average moving pace for the workout",
        unit="/km",
        unit_imperial="/mi",
        update_frequency=UpdateFrequency.PERIODIC,
        icon="⏱️",
        requires_gps=True,
        requires_workout_active=True,
        calculator=lambda ctx: pace_in_user_unit(_moving_average(ctx), ctx.settings.is_imperial),
        formatter=_pace_formatter,
    ),
    FieldDefinition(
        id="speed-moving-time",
        name="Moving Time",
        short_name="Moving",
        category=FieldCategory.SPEED,
        description="Time spent moving",
        update_frequency=UpdateFrequency.PERIODIC,
        icon="⏱️",
        requires_gps=True,
        requires_workout_active=True,
        calculator=lambda ctx: calculate_moving_time(ctx.stream("speed")),
        formatter=duration_formatter,
    ),
    FieldDefinition(
        id="speed-stopped-time",
        name="Stopped Time",
        short_name="Stopped",
        category=FieldCategory.SPEED,
        description="Time spent stopped",
        update_frequency=UpdateFrequency.PERIODIC,
        icon="⏸️",
        requires_gps=True,
        requires_workout_active=True,
        calculator=lambda ctx: calculate_stopped_time(ctx.stream("speed")),
        formatter=duration_formatter,
    ),
    FieldDefinition(
        id="speed-vertical",
        name="Vertical Speed",
        short_name="VAM",
        category=FieldCategory.SPEED,
        description="Climbing rate over the last 30 seconds",
        unit="m/h",
        unit_imperial="ft/h",
        icon="⛰️",
        requires_gps=True,
        decimals=0,
        calculator=_vertical_speed,
        formatter=round_formatter,
    ),
    FieldDefinition(
        id="speed-efficiency",
        name="Efficiency",
        short_name="EF",
        category=FieldCategory.SPEED,
        description="Average moving speed per watt",
        update_frequency=UpdateFrequency.PERIODIC,
        icon="📈",
        requires_sensor=("power",),
        requires_gps=True,
        requires_workout_active=True,
        decimals=3,
        calculator=lambda ctx: calculate_efficiency_factor(
            ctx.stream("speed"), ctx.stream("power"), ctx.settings.is_imperial
        ),
        formatter=decimals_formatter(3),
    ),
]
