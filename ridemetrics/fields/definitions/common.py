"""
Formatters and colorizers shared by the field catalog.
"""
from typing import Optional

from ...calculations.aggregation import average, values_since
from ...calculations.formatting import format_decimals, format_duration, format_round
from ...calculations.zones import ZoneColor, colors_for_zone, zone_color
from ...domain import UserSettings
from ..base import CalculationContext


def round_formatter(value: Optional[float], settings: UserSettings) -> str:
    return format_round(value)


def decimals_formatter(decimals: int):
    def formatter(value: Optional[float], settings: UserSettings) -> str:
        return format_decimals(value, decimals)
    return formatter


def duration_formatter(value: Optional[float], settings: UserSettings) -> str:
    return format_duration(value)


def power_zone_colorizer(value: Optional[float], settings: UserSettings) -> Optional[ZoneColor]:
    return zone_color(value, settings.ftp, settings.power_zones)


def hr_zone_colorizer(value: Optional[float], settings: UserSettings) -> Optional[ZoneColor]:
    return zone_color(value, settings.max_hr, settings.hr_zones)


def power_zone_number_colorizer(value: Optional[float], settings: UserSettings) -> Optional[ZoneColor]:
    """Colours for a field whose value is already a power zone number."""
    return _colors_for_number(value, settings.power_zones)


def hr_zone_number_colorizer(value: Optional[float], settings: UserSettings) -> Optional[ZoneColor]:
    return _colors_for_number(value, settings.hr_zones)


def _colors_for_number(value, zones) -> Optional[ZoneColor]:
    if value is None:
        return None
    config = next((z for z in zones if z.zone == int(value)), None)
    return colors_for_zone(config) if config else None


def lap_average(ctx: CalculationContext, channel: str) -> Optional[float]:
    """Average of a channel since the current lap started."""
    lap_start = ctx.workout.lap_start_time
    if lap_start is None:
        return None
    return average(values_since(ctx.stream(channel), lap_start))
