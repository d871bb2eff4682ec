"""
Field Definition Base Module.

Describes a computable data field: identity, display metadata, availability
requirements and the formula that produces its value.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, FrozenSet, Optional, Tuple

from ..calculations.formatting import PLACEHOLDER
from ..calculations.zones import ZoneColor
from ..domain import ConnectionsState, MeasurementsState, UserSettings, WorkoutState


class FieldCategory(Enum):
    """Grouping used by the field picker."""
    POWER = "power"
    CADENCE = "cadence"
    HEARTRATE = "heartrate"
    SPEED = "speed"
    DISTANCE = "distance"
    ELEVATION = "elevation"
    TIME = "time"
    LAPS = "laps"
    ENERGY = "energy"


class FieldSize(Enum):
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"
    WIDE = "wide"
    TALL = "tall"
    FULL = "full"


class SourceType(Enum):
    """Where a field's value comes from."""
    SENSOR = "sensor"           # passthrough of a sensor channel
    GPS = "gps"
    CALCULATED = "calculated"   # derived by a formula
    WORKOUT = "workout"         # read from the workout state


class UpdateFrequency(Enum):
    REALTIME = "realtime"       # every tick
    SECOND = "second"
    PERIODIC = "periodic"       # every few seconds
    ON_CHANGE = "on-change"


@dataclass(frozen=True)
class CategoryInfo:
    id: str
    name: str
    icon: str
    color: str
    description: str


CATEGORY_INFO: Dict[FieldCategory, CategoryInfo] = {
    FieldCategory.POWER: CategoryInfo("power", "Power", "⚡", "#f97316", "Power meter data and calculations"),
    FieldCategory.CADENCE: CategoryInfo("cadence", "Cadence", "🔄", "#10b981", "Pedaling cadence metrics"),
    FieldCategory.HEARTRATE: CategoryInfo("heartrate", "Heart Rate", "❤️", "#ef4444", "Heart rate monitoring"),
    FieldCategory.SPEED: CategoryInfo("speed", "Speed & Pace", "🚴", "#3b82f6", "Speed and pace metrics"),
    FieldCategory.DISTANCE: CategoryInfo("distance", "Distance", "📍", "#6366f1", "Distance tracking"),
    FieldCategory.ELEVATION: CategoryInfo("elevation", "Elevation", "⛰️", "#84cc16", "Altitude and climbing"),
    FieldCategory.TIME: CategoryInfo("time", "Time", "⏱️", "#64748b", "Time and duration"),
    FieldCategory.LAPS: CategoryInfo("laps", "Laps", "🏁", "#a855f7", "Lap-specific metrics"),
    FieldCategory.ENERGY: CategoryInfo("energy", "Energy", "🔥", "#eab308", "Calories and work"),
}


@dataclass(frozen=True)
class SizeInfo:
    id: str
    name: str
    cols: int
    rows: int
    show_label: bool


SIZE_INFO: Dict[FieldSize, SizeInfo] = {
    FieldSize.SMALL: SizeInfo("small", "Small", 1, 1, False),
    FieldSize.MEDIUM: SizeInfo("medium", "Medium", 1, 1, True),
    FieldSize.LARGE: SizeInfo("large", "Large", 2, 1, True),
    FieldSize.WIDE: SizeInfo("wide", "Wide", 2, 1, True),
    FieldSize.TALL: SizeInfo("tall", "Tall", 1, 2, True),
    FieldSize.FULL: SizeInfo("full", "Full", 2, 2, True),
}

DEFAULT_SIZES: FrozenSet[FieldSize] = frozenset({FieldSize.SMALL, FieldSize.MEDIUM, FieldSize.LARGE})


@dataclass(frozen=True)
class CalculationContext:
    """Immutable inputs handed to a field calculator for one computation."""
    measurements: MeasurementsState
    workout: WorkoutState
    settings: UserSettings
    connections: ConnectionsState
    now: int                        # ms since epoch

    def stream(self, channel: str):
        """Length-bounded snapshot of a measurement channel."""
        return self.measurements.snapshot(channel)


Calculator = Callable[[CalculationContext], Optional[float]]
Formatter = Callable[[Optional[float], UserSettings], str]
Colorizer = Callable[[Optional[float], UserSettings], Optional[ZoneColor]]


def default_formatter(value: Optional[float], settings: UserSettings) -> str:
    if value is None:
        return PLACEHOLDER
    return str(value)


@dataclass(frozen=True)
class FieldDefinition:
    """A registered data field.

    `calculator` is required for calculated fields; sensor fields without a
    calculator read the latest fresh value of `sensor_channel`.
    """
    id: str
    name: str
    category: FieldCategory
    formatter: Formatter
    short_name: str = ""
    description: str = ""
    unit: Optional[str] = None
    unit_imperial: Optional[str] = None
    source_type: SourceType = SourceType.CALCULATED
    update_frequency: UpdateFrequency = UpdateFrequency.SECOND
    default_size: FieldSize = FieldSize.MEDIUM
    supported_sizes: FrozenSet[FieldSize] = DEFAULT_SIZES
    icon: str = ""
    requires_sensor: Tuple[str, ...] = ()
    requires_gps: bool = False
    requires_workout_active: bool = False
    calculator: Optional[Calculator] = field(default=None, compare=False)
    colorizer: Optional[Colorizer] = field(default=None, compare=False)
    sensor_channel: Optional[str] = None
    decimals: Optional[int] = None
    min_value: Optional[float] = None
    max_value: Optional[float] = None

    def unit_for(self, settings: UserSettings) -> Optional[str]:
        if settings.is_imperial and self.unit_imperial:
            return self.unit_imperial
        return self.unit

    def format(self, value: Optional[float], settings: UserSettings) -> str:
        return self.formatter(value, settings)

    def color(self, value: Optional[float], settings: UserSettings) -> Optional[ZoneColor]:
        """Zone colours for a value, None for fields without a colorizer."""
        if self.colorizer is None or value is None:
            return None
        return self.colorizer(value, settings)

    def in_range(self, value: float) -> bool:
        """Sanity check against `min_value`/`max_value`."""
        if self.min_value is not None and value < self.min_value:
            return False
        if self.max_value is not None and value > self.max_value:
            return False
        return True

    def to_dict(self) -> Dict[str, Any]:
        """Metadata view for pickers and serialisation (no callables)."""
        return {
            "id": self.id,
            "name": self.name,
            "shortName": self.short_name,
            "category": self.category.value,
            "description": self.description,
            "unit": self.unit,
            "unitImperial": self.unit_imperial,
            "sourceType": self.source_type.value,
            "updateFrequency": self.update_frequency.value,
            "defaultSize": self.default_size.value,
            "supportedSizes": sorted(s.value for s in self.supported_sizes),
            "icon": self.icon,
            "requiresSensor": list(self.requires_sensor),
            "requiresGps": self.requires_gps,
            "requiresWorkoutActive": self.requires_workout_active,
        }
