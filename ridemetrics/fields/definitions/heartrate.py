"""
Heart rate fields.
"""
from ...calculations.aggregation import average, latest_value, maximum, minimum, rolling_average
from ...calculations.heartrate import calculate_hr_calories, calculate_hr_reserve_percent
from ...calculations.zones import percent_of_reference, primary_zone, time_in_zones, zone_for
from ..base import CalculationContext, FieldCategory, FieldDefinition, SourceType, UpdateFrequency
from .common import hr_zone_colorizer, hr_zone_number_colorizer, lap_average, round_formatter

HEARTRATE = ("heartrate",)


def _latest_hr(ctx: CalculationContext):
    return latest_value(ctx.stream("heartrate"), now=ctx.now)


def _zone(ctx: CalculationContext):
    return zone_for(_latest_hr(ctx), ctx.settings.max_hr, ctx.settings.hr_zones)


def _time_in_zone(ctx: CalculationContext):
    totals = time_in_zones(ctx.stream("heartrate"), ctx.settings.max_hr, ctx.settings.hr_zones)
    return primary_zone(totals)


def _zone_formatter(value, settings) -> str:
    if value is None:
        return "--"
    zone = next((z for z in settings.hr_zones if z.zone == int(value)), None)
    return f"Z{int(value)} {zone.name}" if zone else f"Z{int(value)}"


HEARTRATE_FIELDS = [
    FieldDefinition(
        id="hr-current",
        name="Heart Rate",
        short_name="HR",
        category=FieldCategory.HEARTRATE,
        description="Current heart rate from monitor",
        unit="bpm",
        source_type=SourceType.SENSOR,
        update_frequency=UpdateFrequency.REALTIME,
        icon="❤️",
        requires_sensor=HEARTRATE,
        sensor_channel="heartrate",
        decimals=0,
        min_value=30,
        max_value=220,
        formatter=round_formatter,
        colorizer=hr_zone_colorizer,
    ),
    FieldDefinition(
        id="hr-5s",
        name="HR (5s)",
        short_name="5s HR",
        category=FieldCategory.HEARTRATE,
        description="5-second rolling average heart rate",
        unit="bpm",
        icon="❤️",
        requires_sensor=HEARTRATE,
        decimals=0,
        calculator=lambda ctx: rolling_average(ctx.stream("heartrate"), 5000, ctx.now),
        formatter=round_formatter,
        colorizer=hr_zone_colorizer,
    ),
    FieldDefinition(
        id="hr-30s",
        name="HR (30s)",
        short_name="30s HR",
        category=FieldCategory.HEARTRATE,
        description="30-second rolling average heart rate",
        unit="bpm",
        icon="❤️",
        requires_sensor=HEARTRATE,
        decimals=0,
        calculator=lambda ctx: rolling_average(ctx.stream("heartrate"), 30000, ctx.now),
        formatter=round_formatter,
        colorizer=hr_zone_colorizer,
    ),
    FieldDefinition(
        id="hr-avg",
        name="Avg HR",
        short_name="Avg HR",
        category=FieldCategory.HEARTRATE,
        description="Average heart rate for the entire workout",
        unit="bpm",
        update_frequency=UpdateFrequency.PERIODIC,
        icon="❤️",
        requires_sensor=HEARTRATE,
        requires_workout_active=True,
        decimals=0,
        calculator=lambda ctx: average(ctx.stream("heartrate")),
        formatter=round_formatter,
    ),
    FieldDefinition(
        id="hr-lap-avg",
        name="Lap Avg HR",
        short_name="Lap HR",
        category=FieldCategory.HEARTRATE,
        description="Average heart rate for the current lap",
        unit="bpm",
        icon="❤️",
        requires_sensor=HEARTRATE,
        requires_workout_active=True,
        decimals=0,
        calculator=lambda ctx: lap_average(ctx, "heartrate"),
        formatter=round_formatter,
    ),
    FieldDefinition(
        id="hr-max",
        name="Max HR",
        short_name="Max HR",
        category=FieldCategory.HEARTRATE,
        description="Maximum heart rate reached during the workout",
        unit="bpm",
        update_frequency=UpdateFrequency.ON_CHANGE,
        icon="❤️",
        requires_sensor=HEARTRATE,
        requires_workout_active=True,
        decimals=0,
        calculator=lambda ctx: maximum(ctx.stream("heartrate")),
        formatter=round_formatter,
    ),
    FieldDefinition(
        id="hr-min",
        name="Min HR",
        short_name="Min HR",
        category=FieldCategory.HEARTRATE,
        description="Minimum heart rate during the workout",
        unit="bpm",
        update_frequency=UpdateFrequency.ON_CHANGE,
        icon="❤️",
        requires_sensor=HEARTRATE,
        requires_workout_active=True,
        decimals=0,
        calculator=lambda ctx: minimum(ctx.stream("heartrate")),
        formatter=round_formatter,
    ),
    FieldDefinition(
        id="hr-zone",
        name="HR Zone",
        short_name="HR Zone",
        category=FieldCategory.HEARTRATE,
        description="Current heart rate zone based on max HR",
        icon="🎯",
        requires_sensor=HEARTRATE,
        decimals=0,
        calculator=_zone,
        formatter=_zone_formatter,
        colorizer=hr_zone_number_colorizer,
    ),
    FieldDefinition(
        id="hr-percent-max",
        name="HR % Max",
        short_name="% Max",
        category=FieldCategory.HEARTRATE,
        description="Current heart rate as a percentage of max HR",
        unit="%",
        icon="📊",
        requires_sensor=HEARTRATE,
        decimals=0,
        calculator=lambda ctx: percent_of_reference(_latest_hr(ctx), ctx.settings.max_hr),
        formatter=round_formatter,
    ),
    FieldDefinition(
        id="hr-percent-reserve",
        name="HR % Reserve",
        short_name="% HRR",
        category=FieldCategory.HEARTRATE,
        description="Heart rate reserve percentage (Karvonen)",
        unit="%",
        icon="📊",
        requires_sensor=HEARTRATE,
        decimals=0,
        calculator=lambda ctx: calculate_hr_reserve_percent(
            _latest_hr(ctx), ctx.settings.max_hr, ctx.settings.resting_hr
        ),
        formatter=round_formatter,
    ),
    FieldDefinition(
        id="hr-calories",
        name="Calories (HR)",
        short_name="Cal",
        category=FieldCategory.HEARTRATE,
        description="Estimated calories burned from heart rate",
        unit="kcal",
        update_frequency=UpdateFrequency.PERIODIC,
        icon="🔥",
        requires_sensor=HEARTRATE,
        requires_workout_active=True,
        decimals=0,
        calculator=lambda ctx: calculate_hr_calories(
            ctx.stream("heartrate"), ctx.settings.weight, ctx.settings.age
        ),
        formatter=round_formatter,
    ),
    FieldDefinition(
        id="hr-time-in-zone",
        name="Time in Zone",
        short_name="T-Zone",
        category=FieldCategory.HEARTRATE,
        description="Heart rate zone with the most time this workout",
        update_frequency=UpdateFrequency.PERIODIC,
        icon="⏱️",
        requires_sensor=HEARTRATE,
        requires_workout_active=True,
        decimals=0,
        calculator=_time_in_zone,
        formatter=_zone_formatter,
        colorizer=hr_zone_number_colorizer,
    ),
]
