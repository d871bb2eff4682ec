"""
Elevation and gradient fields.
"""
from ...calculations.aggregation import latest_value, maximum, minimum
from ...calculations.elevation import (
    calculate_elevation_gain,
    calculate_elevation_loss,
    calculate_grade,
    elevation_in_user_unit,
    grade_band,
)
from ...calculations.formatting import format_signed
from ...calculations.zones import ZoneColor, darken_color, hex_to_rgba
from ..base import CalculationContext, FieldCategory, FieldDefinition, SourceType, UpdateFrequency
from .common import round_formatter


def _in_unit(ctx: CalculationContext, meters):
    return elevation_in_user_unit(meters, ctx.settings.is_imperial)


def _grade_formatter(value, settings) -> str:
    return format_signed(value, 1)


def _grade_colorizer(value, settings):
    band = grade_band(value)
    if band is None:
        return None
    zone, name, color = band
    return ZoneColor(zone, name, hex_to_rgba(color, 0.15), darken_color(color, 20), color)


ELEVATION_FIELDS = [
    FieldDefinition(
        id="elevation-current",
        name="Elevation",
        short_name="Elev",
        category=FieldCategory.ELEVATION,
        description="Current altitude",
        unit="m",
        unit_imperial="ft",
        source_type=SourceType.SENSOR,
        icon="⛰️",
        requires_gps=True,
        sensor_channel="altitude",
        decimals=0,
        calculator=lambda ctx: _in_unit(ctx, latest_value(ctx.stream("altitude"), now=ctx.now)),
        formatter=round_formatter,
    ),
    FieldDefinition(
        id="elevation-gain",
        name="Elevation Gain",
        short_name="Gain",
        category=FieldCategory.ELEVATION,
        description="Total climbing this workout",
        unit="m",
        unit_imperial="ft",
        icon="📈",
        requires_gps=True,
        requires_workout_active=True,
        decimals=0,
        min_value=0,
        calculator=lambda ctx: _in_unit(ctx, calculate_elevation_gain(ctx.stream("altitude"))),
        formatter=round_formatter,
    ),
    FieldDefinition(
        id="elevation-loss",
        name="Elevation Loss",
        short_name="Loss",
        category=FieldCategory.ELEVATION,
        description="Total descending this workout",
        unit="m",
        unit_imperial="ft",
        icon="📉",
        requires_gps=True,
        requires_workout_active=True,
        decimals=0,
        min_value=0,
        calculator=lambda ctx: _in_unit(ctx, calculate_elevation_loss(ctx.stream("altitude"))),
        formatter=round_formatter,
    ),
    FieldDefinition(
        id="elevation-grade",
        name="Grade",
        short_name="Grade",
        category=FieldCategory.ELEVATION,
        description="Current road gradient",
        unit="%",
        icon="📐",
        requires_gps=True,
        decimals=1,
        min_value=-50,
        max_value=50,
        calculator=lambda ctx: calculate_grade(ctx.stream("altitude"), ctx.stream("distance")),
        formatter=_grade_formatter,
        colorizer=_grade_colorizer,
    ),
    FieldDefinition(
        id="elevation-max",
        name="Max Elevation",
        short_name="Max Elev",
        category=FieldCategory.ELEVATION,
        description="Highest altitude this workout",
        unit="m",
        unit_imperial="ft",
        update_frequency=UpdateFrequency.ON_CHANGE,
        icon="🏔️",
        requires_gps=True,
        requires_workout_active=True,
        decimals=0,
        calculator=lambda ctx: _in_unit(ctx, maximum(ctx.stream("altitude"))),
        formatter=round_formatter,
    ),
    FieldDefinition(
        id="elevation-min",
        name="Min Elevation",
        short_name="Min Elev",
        category=FieldCategory.ELEVATION,
        description="Lowest altitude this workout",
        unit="m",
        unit_imperial="ft",
        update_frequency=UpdateFrequency.ON_CHANGE,
        icon="⛰️",
        requires_gps=True,
        requires_workout_active=True,
        decimals=0,
        calculator=lambda ctx: _in_unit(ctx, minimum(ctx.stream("altitude"))),
        formatter=round_formatter,
    ),
]
