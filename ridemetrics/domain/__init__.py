"""
Domain Module.

Data model consumed by the metrics engine: measurement streams, zone tables,
user settings and workout snapshots.
"""
from .measurements import (
    CHANNELS,
    Measurement,
    MeasurementStream,
    MeasurementsState,
)
from .zones import (
    ZoneConfig,
    ZoneConfigError,
    DEFAULT_POWER_ZONES,
    DEFAULT_HR_ZONES,
    validate_zones,
)
from .settings import UserSettings, SETTINGS_VERSION
from .workout import (
    ConnectionsState,
    LapData,
    WorkoutState,
    WorkoutRecord,
    now_ms,
)

__all__ = [
    "CHANNELS",
    "Measurement",
    "MeasurementStream",
    "MeasurementsState",
    "ZoneConfig",
    "ZoneConfigError",
    "DEFAULT_POWER_ZONES",
    "DEFAULT_HR_ZONES",
    "validate_zones",
    "UserSettings",
    "SETTINGS_VERSION",
    "ConnectionsState",
    "LapData",
    "WorkoutState",
    "WorkoutRecord",
    "now_ms",
]
