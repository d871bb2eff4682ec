"""
ridemetrics - derived training metrics for cycling.

Live field computation from sensor streams (zones, rolling averages, NP,
TSS) and history analytics (fitness/fatigue trend, power curve, personal
records).
"""
from .config import Config
from .domain import (
    ConnectionsState,
    LapData,
    Measurement,
    MeasurementsState,
    UserSettings,
    WorkoutRecord,
    WorkoutState,
    ZoneConfig,
    ZoneConfigError,
    DEFAULT_POWER_ZONES,
    DEFAULT_HR_ZONES,
)
from .fields import FieldDefinition, FieldRegistry, create_default_registry
from .calculation_manager import CalculationManager, DisplaySurface
from .engine import MetricsEngine

__version__ = "1.0.0"

__all__ = [
    "Config",
    "ConnectionsState",
    "LapData",
    "Measurement",
    "MeasurementsState",
    "UserSettings",
    "WorkoutRecord",
    "WorkoutState",
    "ZoneConfig",
    "ZoneConfigError",
    "DEFAULT_POWER_ZONES",
    "DEFAULT_HR_ZONES",
    "FieldDefinition",
    "FieldRegistry",
    "create_default_registry",
    "CalculationManager",
    "DisplaySurface",
    "MetricsEngine",
]
