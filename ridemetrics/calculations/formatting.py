"""
Display formatting helpers shared by field formatters.

All formatters render a missing value as the placeholder `--`.
"""
from datetime import datetime, timezone
from typing import Optional

from .common import METERS_PER_KM, METERS_PER_MILE, METERS_TO_FEET, MS_TO_KMH, MS_TO_MPH, is_missing

PLACEHOLDER = "--"


def format_duration(ms: Optional[float], show_hours: bool = False) -> str:
    """Milliseconds -> `H:MM:SS` (or `M:SS` below one hour)."""
    if is_missing(ms):
        return PLACEHOLDER
    total_seconds = int(ms // 1000)
    hours, remainder = divmod(total_seconds, 3600)
    minutes, seconds = divmod(remainder, 60)

    if hours > 0 or show_hours:
        return f"{hours}:{minutes:02d}:{seconds:02d}"
    return f"{minutes}:{seconds:02d}"


def format_pace(minutes_per_unit: Optional[float], max_minutes: float = 30.0) -> str:
    """Decimal minutes per km/mile -> `M:SS`; paces slower than `max_minutes` show the placeholder."""
    if is_missing(minutes_per_unit) or minutes_per_unit <= 0 or minutes_per_unit > max_minutes:
        return "--:--"
    total_seconds = int(minutes_per_unit * 60)
    minutes, seconds = divmod(total_seconds, 60)
    return f"{minutes}:{seconds:02d}"


def format_round(value: Optional[float]) -> str:
    """Whole number, rounding half away from zero."""
    if is_missing(value):
        return PLACEHOLDER
    return str(int(value + 0.5) if value >= 0 else -int(-value + 0.5))


def format_decimals(value: Optional[float], decimals: int) -> str:
    if is_missing(value):
        return PLACEHOLDER
    return f"{value:.{decimals}f}"


def format_signed(value: Optional[float], decimals: int = 1) -> str:
    """Signed value with an explicit `+` for non-negative numbers (grades)."""
    if is_missing(value):
        return PLACEHOLDER
    sign = "+" if value >= 0 else ""
    return f"{sign}{value:.{decimals}f}"


def format_clock(timestamp_ms: Optional[float], tz: Optional[timezone] = None) -> str:
    """Epoch ms -> `HH:MM`."""
    if is_missing(timestamp_ms):
        return PLACEHOLDER
    moment = datetime.fromtimestamp(timestamp_ms / 1000, tz=tz or timezone.utc)
    return moment.strftime("%H:%M")


def format_distance(meters: Optional[float], imperial: bool = False, decimals: int = 2) -> str:
    if is_missing(meters):
        return PLACEHOLDER
    value = meters / METERS_PER_MILE if imperial else meters / METERS_PER_KM
    return f"{value:.{decimals}f}"


def format_speed(speed_ms: Optional[float], imperial: bool = False, decimals: int = 1) -> str:
    if is_missing(speed_ms):
        return PLACEHOLDER
    factor = MS_TO_MPH if imperial else MS_TO_KMH
    return f"{speed_ms * factor:.{decimals}f}"


def format_altitude(meters: Optional[float], imperial: bool = False, decimals: int = 0) -> str:
    if is_missing(meters):
        return PLACEHOLDER
    value = meters * METERS_TO_FEET if imperial else meters
    return f"{value:.{decimals}f}"
