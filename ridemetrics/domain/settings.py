"""
User settings snapshot consumed by field formulas.

Loading and saving the profile JSON is done by the host application; the
engine only receives an immutable snapshot per computation.
"""
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional

from .zones import DEFAULT_HR_ZONES, DEFAULT_POWER_ZONES, ZoneConfig, validate_zones

SETTINGS_VERSION = 1

# Keys as persisted by the profile store (camelCase) -> dataclass attribute
_PERSISTED_KEYS = {
    "unitSystem": "unit_system",
    "ftp": "ftp",
    "maxHr": "max_hr",
    "restingHr": "resting_hr",
    "weight": "weight",
    "age": "age",
    "targetDistance": "target_distance",
}


@dataclass(frozen=True)
class UserSettings:
    """Rider profile used by zone, power and energy formulas."""
    unit_system: str = "metric"          # 'metric' | 'imperial'
    ftp: Optional[float] = None          # W
    max_hr: Optional[float] = None       # bpm
    resting_hr: Optional[float] = None   # bpm
    weight: Optional[float] = None       # kg
    age: Optional[int] = None
    target_distance: Optional[float] = None  # km or mi, per unit_system
    power_zones: List[ZoneConfig] = field(default_factory=lambda: list(DEFAULT_POWER_ZONES))
    hr_zones: List[ZoneConfig] = field(default_factory=lambda: list(DEFAULT_HR_ZONES))
    version: int = SETTINGS_VERSION

    @property
    def is_imperial(self) -> bool:
        return self.unit_system == "imperial"

    def validate(self) -> "UserSettings":
        """Validate zone tables; raises ZoneConfigError on a broken table."""
        validate_zones(self.power_zones, "power_zones")
        validate_zones(self.hr_zones, "hr_zones")
        return self

    def with_changes(self, **changes: Any) -> "UserSettings":
        return replace(self, **changes)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UserSettings":
        """Build from a persisted profile dict (camelCase or snake_case keys)."""
        kwargs: Dict[str, Any] = {}
        for key, attr in _PERSISTED_KEYS.items():
            if key in data:
                kwargs[attr] = data[key]
            elif attr in data:
                kwargs[attr] = data[attr]

        power_zones = data.get("powerZones", data.get("power_zones"))
        if power_zones:
            kwargs["power_zones"] = [
                z if isinstance(z, ZoneConfig) else ZoneConfig.from_dict(z) for z in power_zones
            ]
        hr_zones = data.get("hrZones", data.get("hr_zones"))
        if hr_zones:
            kwargs["hr_zones"] = [
                z if isinstance(z, ZoneConfig) else ZoneConfig.from_dict(z) for z in hr_zones
            ]
        if "version" in data:
            kwargs["version"] = int(data["version"])
        return cls(**kwargs)
