"""
Cadence fields.
"""
from ...calculations.aggregation import average, latest_value, maximum, rolling_average, values_where
from ...calculations.cadence import (
    CADENCE_BANDS,
    CADENCE_SHORT_NAMES,
    cadence_zone,
    calculate_pedaling_percent,
    calculate_total_revolutions,
)
from ...calculations.zones import ZoneColor, darken_color, hex_to_rgba
from ..base import CalculationContext, FieldCategory, FieldDefinition, SourceType, UpdateFrequency
from .common import round_formatter

CADENCE = ("cadence",)


def _zone_formatter(value, settings) -> str:
    if value is None:
        return "--"
    return CADENCE_SHORT_NAMES.get(int(value), "--")


def _zone_colorizer(value, settings):
    if value is None:
        return None
    for _upper, zone, name, color in CADENCE_BANDS:
        if zone == int(value):
            return ZoneColor(zone, name, hex_to_rgba(color, 0.15), darken_color(color, 20), color)
    return None


def _avg_pedaling(ctx: CalculationContext):
    """Average cadence ignoring coasting (0 rpm) samples."""
    return average(values_where(ctx.stream("cadence"), 0))


CADENCE_FIELDS = [
    FieldDefinition(
        id="cadence-current",
        name="Cadence",
        short_name="CAD",
        category=FieldCategory.CADENCE,
        description="Current pedaling cadence",
        unit="rpm",
        source_type=SourceType.SENSOR,
        update_frequency=UpdateFrequency.REALTIME,
        icon="🔄",
        requires_sensor=CADENCE,
        sensor_channel="cadence",
        decimals=0,
        min_value=0,
        max_value=200,
        formatter=round_formatter,
    ),
    FieldDefinition(
        id="cadence-5s",
        name="Cadence (5s)",
        short_name="5s CAD",
        category=FieldCategory.CADENCE,
        description="5-second rolling average cadence",
        unit="rpm",
        icon="🔄",
        requires_sensor=CADENCE,
        decimals=0,
        calculator=lambda ctx: rolling_average(ctx.stream("cadence"), 5000, ctx.now),
        formatter=round_formatter,
    ),
    FieldDefinition(
        id="cadence-30s",
        name="Cadence (30s)",
        short_name="30s CAD",
        category=FieldCategory.CADENCE,
        description="30-second rolling average cadence",
        unit="rpm",
        icon="🔄",
        requires_sensor=CADENCE,
        decimals=0,
        calculator=lambda ctx: rolling_average(ctx.stream("cadence"), 30000, ctx.now),
        formatter=round_formatter,
    ),
    FieldDefinition(
        id="cadence-avg",
        name="Avg Cadence",
        short_name="Avg CAD",
        category=FieldCategory.CADENCE,
        description="Average cadence while pedaling",
        unit="rpm",
        update_frequency=UpdateFrequency.PERIODIC,
        icon="🔄",
        requires_sensor=CADENCE,
        requires_workout_active=True,
        decimals=0,
        calculator=_avg_pedaling,
        formatter=round_formatter,
    ),
    FieldDefinition(
        id="cadence-max",
        name="Max Cadence",
        short_name="Max CAD",
        category=FieldCategory.CADENCE,
        description="Maximum cadence during the workout",
        unit="rpm",
        update_frequency=UpdateFrequency.ON_CHANGE,
        icon="🔄",
        requires_sensor=CADENCE,
        requires_workout_active=True,
        decimals=0,
        calculator=lambda ctx: maximum(ctx.stream("cadence")),
        formatter=round_formatter,
    ),
    FieldDefinition(
        id="cadence-zone",
        name="Cadence Zone",
        short_name="CAD Zone",
        category=FieldCategory.CADENCE,
        description="Cadence band from very low to very high",
        icon="🎯",
        requires_sensor=CADENCE,
        decimals=0,
        calculator=lambda ctx: cadence_zone(latest_value(ctx.stream("cadence"), now=ctx.now)),
        formatter=_zone_formatter,
        colorizer=_zone_colorizer,
    ),
    FieldDefinition(
        id="cadence-revolutions",
        name="Total Revolutions",
        short_name="Revs",
        category=FieldCategory.CADENCE,
        description="Total crank revolutions this workout",
        update_frequency=UpdateFrequency.PERIODIC,
        icon="🔄",
        requires_sensor=CADENCE,
        requires_workout_active=True,
        decimals=0,
        calculator=lambda ctx: calculate_total_revolutions(ctx.stream("cadence")),
        formatter=round_formatter,
    ),
    FieldDefinition(
        id="cadence-pedaling-time",
        name="Pedaling Time",
        short_name="Pedal %",
        category=FieldCategory.CADENCE,
        description="Share of workout time spent pedaling",
        unit="%",
        update_frequency=UpdateFrequency.PERIODIC,
        icon="🔄",
        requires_sensor=CADENCE,
        requires_workout_active=True,
        decimals=0,
        calculator=lambda ctx: calculate_pedaling_percent(ctx.stream("cadence")),
        formatter=round_formatter,
    ),
]
