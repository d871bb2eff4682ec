"""
Power fields: live and averaged watts, zones, and session load (NP, IF, TSS).
"""
from ...calculations.aggregation import average, latest_value, maximum, rolling_average
from ...calculations.power import (
    calculate_intensity_factor,
    calculate_kilojoules,
    calculate_normalized_power,
    calculate_tss,
    calculate_watts_per_kg,
)
from ...calculations.zones import percent_of_reference, zone_for
from ..base import (
    CalculationContext,
    FieldCategory,
    FieldDefinition,
    SourceType,
    UpdateFrequency,
)
from .common import (
    decimals_formatter,
    lap_average,
    power_zone_colorizer,
    power_zone_number_colorizer,
    round_formatter,
)

POWER = ("power",)
MAX_WATTS = 2500


def _latest_power(ctx: CalculationContext):
    return latest_value(ctx.stream("power"), now=ctx.now)


def _normalized_power(ctx: CalculationContext):
    return calculate_normalized_power(ctx.stream("power"))


def _intensity_factor(ctx: CalculationContext):
    return calculate_intensity_factor(_normalized_power(ctx), ctx.settings.ftp)


def _tss(ctx: CalculationContext):
    return calculate_tss(_normalized_power(ctx), ctx.settings.ftp, ctx.workout.elapsed_time / 1000)


def _zone(ctx: CalculationContext):
    return zone_for(_latest_power(ctx), ctx.settings.ftp, ctx.settings.power_zones)


def _zone_formatter(value, settings) -> str:
    if value is None:
        return "--"
    return f"Z{int(value)}"


POWER_FIELDS = [
    FieldDefinition(
        id="power-current",
        name="Power",
        short_name="PWR",
        category=FieldCategory.POWER,
        description="Current power output from power meter",
        unit="W",
        source_type=SourceType.SENSOR,
        update_frequency=UpdateFrequency.REALTIME,
        icon="⚡",
        requires_sensor=POWER,
        sensor_channel="power",
        decimals=0,
        min_value=0,
        max_value=MAX_WATTS,
        formatter=round_formatter,
        colorizer=power_zone_colorizer,
    ),
    FieldDefinition(
        id="power-3s",
        name="Power (3s)",
        short_name="3s PWR",
        category=FieldCategory.POWER,
        description="3-second rolling average power for smoother display",
        unit="W",
        icon="⚡",
        requires_sensor=POWER,
        decimals=0,
        min_value=0,
        max_value=MAX_WATTS,
        calculator=lambda ctx: rolling_average(ctx.stream("power"), 3000, ctx.now),
        formatter=round_formatter,
        colorizer=power_zone_colorizer,
    ),
    FieldDefinition(
        id="power-10s",
        name="Power (10s)",
        short_name="10s PWR",
        category=FieldCategory.POWER,
        description="10-second rolling average power",
        unit="W",
        icon="⚡",
        requires_sensor=POWER,
        decimals=0,
        calculator=lambda ctx: rolling_average(ctx.stream("power"), 10000, ctx.now),
        formatter=round_formatter,
        colorizer=power_zone_colorizer,
    ),
    FieldDefinition(
        id="power-30s",
        name="Power (30s)",
        short_name="30s PWR",
        category=FieldCategory.POWER,
        description="30-second rolling average power",
        unit="W",
        icon="⚡",
        requires_sensor=POWER,
        decimals=0,
        calculator=lambda ctx: rolling_average(ctx.stream("power"), 30000, ctx.now),
        formatter=round_formatter,
        colorizer=power_zone_colorizer,
    ),
    FieldDefinition(
        id="power-avg",
        name="Avg Power",
        short_name="Avg PWR",
        category=FieldCategory.POWER,
        description="Average power for the entire workout",
        unit="W",
        update_frequency=UpdateFrequency.PERIODIC,
        icon="⚡",
        requires_sensor=POWER,
        requires_workout_active=True,
        decimals=0,
        calculator=lambda ctx: average(ctx.stream("power")),
        formatter=round_formatter,
    ),
    FieldDefinition(
        id="power-lap-avg",
        name="Lap Avg Power",
        short_name="Lap PWR",
        category=FieldCategory.POWER,
        description="Average power for the current lap",
        unit="W",
        icon="⚡",
        requires_sensor=POWER,
        requires_workout_active=True,
        decimals=0,
        calculator=lambda ctx: lap_average(ctx, "power"),
        formatter=round_formatter,
    ),
    FieldDefinition(
        id="power-max",
        name="Max Power",
        short_name="Max PWR",
        category=FieldCategory.POWER,
        description="Maximum power reached during the workout",
        unit="W",
        update_frequency=UpdateFrequency.ON_CHANGE,
        icon="⚡",
        requires_sensor=POWER,
        requires_workout_active=True,
        decimals=0,
        calculator=lambda ctx: maximum(ctx.stream("power")),
        formatter=round_formatter,
    ),
    FieldDefinition(
        id="power-zone",
        name="Power Zone",
        short_name="P Zone",
        category=FieldCategory.POWER,
        description="Current power zone based on FTP",
        icon="🎯",
        requires_sensor=POWER,
        decimals=0,
        calculator=_zone,
        formatter=_zone_formatter,
        colorizer=power_zone_number_colorizer,
    ),
    FieldDefinition(
        id="power-percent-ftp",
        name="Power % FTP",
        short_name="% FTP",
        category=FieldCategory.POWER,
        description="Current power as a percentage of FTP",
        unit="%",
        icon="📊",
        requires_sensor=POWER,
        decimals=0,
        calculator=lambda ctx: percent_of_reference(_latest_power(ctx), ctx.settings.ftp),
        formatter=round_formatter,
    ),
    FieldDefinition(
        id="power-normalized",
        name="Normalized Power",
        short_name="NP",
        category=FieldCategory.POWER,
        description="Normalized Power from the 30-second rolling average",
        unit="W",
        update_frequency=UpdateFrequency.PERIODIC,
        icon="⚡",
        requires_sensor=POWER,
        requires_workout_active=True,
        decimals=0,
        calculator=_normalized_power,
        formatter=round_formatter,
    ),
    FieldDefinition(
        id="power-if",
        name="Intensity Factor",
        short_name="IF",
        category=FieldCategory.POWER,
        description="Normalized Power divided by FTP",
        update_frequency=UpdateFrequency.PERIODIC,
        icon="📈",
        requires_sensor=POWER,
        requires_workout_active=True,
        decimals=2,
        calculator=_intensity_factor,
        formatter=decimals_formatter(2),
    ),
    FieldDefinition(
        id="power-tss",
        name="Training Stress Score",
        short_name="TSS",
        category=FieldCategory.POWER,
        description="Training load of the workout so far",
        update_frequency=UpdateFrequency.PERIODIC,
        icon="📈",
        requires_sensor=POWER,
        requires_workout_active=True,
        decimals=0,
        calculator=_tss,
        formatter=round_formatter,
    ),
    FieldDefinition(
        id="power-kilojoules",
        name="Work",
        short_name="kJ",
        category=FieldCategory.POWER,
        description="Total mechanical work done",
        unit="kJ",
        update_frequency=UpdateFrequency.PERIODIC,
        icon="🔋",
        requires_sensor=POWER,
        requires_workout_active=True,
        decimals=0,
        calculator=lambda ctx: calculate_kilojoules(ctx.stream("power")),
        formatter=round_formatter,
    ),
    FieldDefinition(
        id="power-wkg",
        name="Power/Weight",
        short_name="W/kg",
        category=FieldCategory.POWER,
        description="Current power relative to body weight",
        unit="W/kg",
        icon="⚖️",
        requires_sensor=POWER,
        decimals=1,
        calculator=lambda ctx: calculate_watts_per_kg(_latest_power(ctx), ctx.settings.weight),
        formatter=decimals_formatter(1),
    ),
]
