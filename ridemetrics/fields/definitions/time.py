"""
Time fields, read from the workout state snapshot.
"""
from ...calculations.formatting import format_clock
from ..base import CalculationContext, FieldCategory, FieldDefinition, SourceType
from .common import duration_formatter


def _lap_time(ctx: CalculationContext):
    if ctx.workout.lap_start_time is None:
        return 0
    return max(0, ctx.now - ctx.workout.lap_start_time)


def _last_lap(ctx: CalculationContext):
    if not ctx.workout.laps:
        return None
    return ctx.workout.laps[-1].duration


def _clock_formatter(value, settings) -> str:
    return format_clock(value)


TIME_FIELDS = [
    FieldDefinition(
        id="time-elapsed",
        name="Elapsed Time",
        short_name="Time",
        category=FieldCategory.TIME,
        description="Total workout time",
        source_type=SourceType.WORKOUT,
        icon="⏱️",
        requires_workout_active=True,
        decimals=0,
        calculator=lambda ctx: ctx.workout.elapsed_time,
        formatter=duration_formatter,
    ),
    FieldDefinition(
        id="time-lap",
        name="Lap Time",
        short_name="Lap",
        category=FieldCategory.TIME,
        description="Elapsed time for current lap",
        source_type=SourceType.WORKOUT,
        icon="⏱️",
        requires_workout_active=True,
        decimals=0,
        calculator=_lap_time,
        formatter=duration_formatter,
    ),
    FieldDefinition(
        id="time-last-lap",
        name="Last Lap Time",
        short_name="Last Lap",
        category=FieldCategory.TIME,
        description="Duration of the previous lap",
        source_type=SourceType.WORKOUT,
        icon="⏱️",
        requires_workout_active=True,
        decimals=0,
        calculator=_last_lap,
        formatter=duration_formatter,
    ),
    FieldDefinition(
        id="time-started",
        name="Start Time",
        short_name="Started",
        category=FieldCategory.TIME,
        description="Time of day the workout started",
        source_type=SourceType.WORKOUT,
        icon="🕐",
        requires_workout_active=True,
        calculator=lambda ctx: ctx.workout.start_time,
        formatter=_clock_formatter,
    ),
]
