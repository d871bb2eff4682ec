"""
Curated field catalog, one module per category.
"""
from .power import POWER_FIELDS
from .heartrate import HEARTRATE_FIELDS
from .cadence import CADENCE_FIELDS
from .speed import SPEED_FIELDS
from .distance import DISTANCE_FIELDS
from .elevation import ELEVATION_FIELDS
from .time import TIME_FIELDS
from .energy import ENERGY_FIELDS

ALL_FIELDS = (
    POWER_FIELDS
    + HEARTRATE_FIELDS
    + CADENCE_FIELDS
    + SPEED_FIELDS
    + DISTANCE_FIELDS
    + ELEVATION_FIELDS
    + TIME_FIELDS
    + ENERGY_FIELDS
)

__all__ = [
    "ALL_FIELDS",
    "POWER_FIELDS",
    "HEARTRATE_FIELDS",
    "CADENCE_FIELDS",
    "SPEED_FIELDS",
    "DISTANCE_FIELDS",
    "ELEVATION_FIELDS",
    "TIME_FIELDS",
    "ENERGY_FIELDS",
]
