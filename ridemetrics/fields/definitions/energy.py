"""
Energy fields: total calories and current burn rate.

Power, when present, takes precedence over heart rate. 1 kJ of mechanical
work is counted as 1 kcal burned.
"""
from ...calculations.aggregation import latest_value
from ...calculations.common import DEFAULT_WEIGHT_KG
from ...calculations.heartrate import calculate_hr_calories, calories_per_minute
from ...calculations.power import calculate_kilojoules
from ..base import CalculationContext, FieldCategory, FieldDefinition, FieldSize, UpdateFrequency
from .common import round_formatter

KCAL_HOUR_PER_WATT = 3.6


def _total_calories(ctx: CalculationContext):
    kilojoules = calculate_kilojoules(ctx.stream("power"))
    if kilojoules:
        return kilojoules
    weight = ctx.settings.weight or DEFAULT_WEIGHT_KG
    calories = calculate_hr_calories(ctx.stream("heartrate"), weight, ctx.settings.age)
    return calories if calories is not None else 0.0


def _calorie_rate(ctx: CalculationContext):
    power = latest_value(ctx.stream("power"), now=ctx.now)
    if power and power > 0:
        return power * KCAL_HOUR_PER_WATT

    hr = latest_value(ctx.stream("heartrate"), now=ctx.now)
    if hr and hr > 0:
        weight = ctx.settings.weight or DEFAULT_WEIGHT_KG
        return calories_per_minute(hr, weight, ctx.settings.age) * 60
    return 0.0


ENERGY_FIELDS = [
    FieldDefinition(
        id="calories_total",
        name="Calories",
        short_name="Cals",
        category=FieldCategory.ENERGY,
        description="Total energy expenditure in kcal",
        unit="kcal",
        icon="🔥",
        supported_sizes=frozenset(FieldSize),
        requires_workout_active=True,
        decimals=0,
        min_value=0,
        calculator=_total_calories,
        formatter=round_formatter,
    ),
    FieldDefinition(
        id="calories_hour",
        name="Calories/Hr",
        short_name="Cal/h",
        category=FieldCategory.ENERGY,
        description="Current calorie burn rate",
        unit="kcal/h",
        update_frequency=UpdateFrequency.REALTIME,
        icon="🔥",
        supported_sizes=frozenset(FieldSize) - {FieldSize.FULL},
        decimals=0,
        min_value=0,
        calculator=_calorie_rate,
        formatter=round_formatter,
    ),
]
