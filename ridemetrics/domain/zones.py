"""
Zone tables.

A zone table partitions percent-of-reference (FTP or max HR) into ordered,
non-overlapping half-open intervals. The last zone is unbounded above.
"""
from dataclasses import dataclass
from typing import Dict, List, Sequence


class ZoneConfigError(ValueError):
    """Raised for a zone table that does not form a valid partition."""


@dataclass(frozen=True)
class ZoneConfig:
    """One zone of a zone table."""
    zone: int              # 1-based zone number
    name: str
    min_percent: float     # % of FTP or max HR (inclusive)
    max_percent: float     # exclusive
    color: str             # hex colour

    @classmethod
    def from_dict(cls, data: Dict) -> "ZoneConfig":
        return cls(
            zone=int(data["zone"]),
            name=str(data.get("name", f"Zone {data['zone']}")),
            min_percent=float(data.get("minPercent", data.get("min_percent"))),
            max_percent=float(data.get("maxPercent", data.get("max_percent"))),
            color=str(data.get("color", "#9ca3af")),
        )


# Coggan 7-zone power model
DEFAULT_POWER_ZONES: List[ZoneConfig] = [
    ZoneConfig(1, "Recovery", 0, 55, "#9ca3af"),
    ZoneConfig(2, "Endurance", 55, 75, "#22c55e"),
    ZoneConfig(3, "Tempo", 75, 90, "#eab308"),
    ZoneConfig(4, "Threshold", 90, 105, "#f97316"),
    ZoneConfig(5, "VO2max", 105, 120, "#ef4444"),
    ZoneConfig(6, "Anaerobic", 120, 150, "#a855f7"),
    ZoneConfig(7, "Neuromuscular", 150, 999, "#ec4899"),
]

# 5-zone heart rate model (% of max HR)
DEFAULT_HR_ZONES: List[ZoneConfig] = [
    ZoneConfig(1, "Recovery", 50, 60, "#9ca3af"),
    ZoneConfig(2, "Aerobic", 60, 70, "#22c55e"),
    ZoneConfig(3, "Tempo", 70, 80, "#eab308"),
    ZoneConfig(4, "Threshold", 80, 90, "#f97316"),
    ZoneConfig(5, "VO2max", 90, 100, "#ef4444"),
]


def validate_zones(zones: Sequence[ZoneConfig], label: str = "zones") -> None:
    """Check that a zone table is a contiguous partition.

    Raises:
        ZoneConfigError: if the table is empty, min_percent is not strictly
            increasing, or a zone's max_percent differs from the next zone's
            min_percent.
    """
    if not zones:
        raise ZoneConfigError(f"{label}: zone table is empty")

    for prev, curr in zip(zones, zones[1:]):
        if curr.min_percent <= prev.min_percent:
            raise ZoneConfigError(
                f"{label}: min_percent must increase (zone {prev.zone}={prev.min_percent}, "
                f"zone {curr.zone}={curr.min_percent})"
            )
        if prev.max_percent != curr.min_percent:
            raise ZoneConfigError(
                f"{label}: gap or overlap between zone {prev.zone} (max {prev.max_percent}) "
                f"and zone {curr.zone} (min {curr.min_percent})"
            )
