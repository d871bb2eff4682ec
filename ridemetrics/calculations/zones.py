"""
Zone Model & Time-in-Zone.

Classifies a value as a percentage of a reference (FTP or max HR) into a
zone table, derives display colours, and integrates time spent per zone.
"""
import logging
import re
from dataclasses import asdict, dataclass
from typing import Dict, Optional, Sequence

from ..domain.zones import ZoneConfig
from .common import is_missing, pairwise_intervals

logger = logging.getLogger(__name__)

_HEX_RE = re.compile(r"^#?([a-f\d]{2})([a-f\d]{2})([a-f\d]{2})$", re.IGNORECASE)

ZONE_BG_ALPHA = 0.15
ZONE_TEXT_DARKEN_PERCENT = 20


@dataclass(frozen=True)
class ZoneColor:
    """Display colours for a zone."""
    zone: int
    zone_name: str
    bg: str
    text: str
    border: str

    def to_dict(self) -> Dict:
        data = asdict(self)
        data["zoneName"] = data.pop("zone_name")
        return data


def percent_of_reference(
    value: Optional[float],
    reference_value: Optional[float],
) -> Optional[float]:
    """`100 * value / reference_value`, or None when either is missing or the reference is <= 0."""
    if is_missing(value) or is_missing(reference_value) or reference_value <= 0:
        return None
    return (value / reference_value) * 100


def zone_for(
    value: Optional[float],
    reference_value: Optional[float],
    zones: Sequence[ZoneConfig],
) -> Optional[int]:
    """Zone number containing `value` as a percentage of `reference_value`.

    Intervals are half-open `[min_percent, max_percent)`, so a value sitting
    exactly on a boundary belongs to the upper zone. Anything at or above the
    highest zone's `min_percent` falls into the highest zone.

    Returns:
        Zone number, or None for missing input, a non-positive reference, or
        a percentage below the first zone
    """
    percent = percent_of_reference(value, reference_value)
    if percent is None:
        return None

    for zone in zones:
        if zone.min_percent <= percent < zone.max_percent:
            return zone.zone

    if zones and percent >= zones[-1].min_percent:
        return zones[-1].zone

    return None


def zone_color(
    value: Optional[float],
    reference_value: Optional[float],
    zones: Sequence[ZoneConfig],
) -> Optional[ZoneColor]:
    """Zone colours for a value: 15% alpha background, 20% darker text."""
    zone_num = zone_for(value, reference_value, zones)
    if zone_num is None:
        return None

    config = next((z for z in zones if z.zone == zone_num), None)
    if config is None:
        return None
    return colors_for_zone(config)


def colors_for_zone(config: ZoneConfig) -> ZoneColor:
    return ZoneColor(
        zone=config.zone,
        zone_name=config.name,
        bg=hex_to_rgba(config.color, ZONE_BG_ALPHA),
        text=darken_color(config.color, ZONE_TEXT_DARKEN_PERCENT),
        border=config.color,
    )


def time_in_zones(
    stream: Sequence,
    reference_value: Optional[float],
    zones: Sequence[ZoneConfig],
) -> Dict[int, float]:
    """Milliseconds spent in each zone.

    Each consecutive sample pair contributes its duration to the zone of the
    pair's mean value. Intervals whose mean falls outside every zone (below
    the table) are dropped, not reassigned.

    Returns:
        Dict zone number -> total ms, with every configured zone present
    """
    totals: Dict[int, float] = {zone.zone: 0.0 for zone in zones}

    if is_missing(reference_value) or reference_value <= 0:
        return totals

    deltas, midpoints = pairwise_intervals(stream)
    if deltas.size == 0:
        return totals

    dropped_ms = 0.0
    for delta, mid in zip(deltas, midpoints):
        zone = zone_for(float(mid), reference_value, zones)
        if zone is None:
            dropped_ms += delta
            continue
        totals[zone] += float(delta)

    if dropped_ms:
        logger.debug(f"time_in_zones: {dropped_ms:.0f} ms outside every zone was not attributed")
    return totals


def primary_zone(totals: Dict[int, float]) -> Optional[int]:
    """Zone with the most accumulated time; None when nothing was accumulated."""
    if not totals or max(totals.values()) <= 0:
        return None
    return max(totals, key=lambda zone: totals[zone])


# ============================================================
# Colour utilities
# ============================================================

def hex_to_rgba(hex_color: str, alpha: float) -> str:
    """`#rrggbb` -> `rgba(r, g, b, alpha)`; unrecognised input is returned unchanged."""
    match = _HEX_RE.match(hex_color)
    if not match:
        return hex_color
    r, g, b = (int(part, 16) for part in match.groups())
    return f"rgba({r}, {g}, {b}, {alpha})"


def darken_color(hex_color: str, percent: float) -> str:
    """Scale each channel of `#rrggbb` by `1 - percent/100`."""
    match = _HEX_RE.match(hex_color)
    if not match:
        return hex_color
    factor = 1 - percent / 100
    # round half up
    r, g, b = (int(int(part, 16) * factor + 0.5) for part in match.groups())
    return f"#{r:02x}{g:02x}{b:02x}"
