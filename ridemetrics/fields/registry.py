"""
Field Registry.

Catalog of FieldDefinitions searchable by id, category or free text.
Each engine owns its own registry instance.
"""
import logging
import threading
from typing import Dict, Iterable, List, Optional, Union

from .base import CATEGORY_INFO, FieldCategory, FieldDefinition, SourceType

logger = logging.getLogger(__name__)


class FieldRegistry:
    """Central registry for data field definitions.

    Registration order is preserved. Mutation and iteration share one
    re-entrant lock so a register/unregister from another thread is never
    interleaved with a listing.

    Usage:
        registry = FieldRegistry()
        registry.register_many(POWER_FIELDS)

        for category, fields in registry.all_categories().items():
            ...
    """

    def __init__(self, fields: Optional[Iterable[FieldDefinition]] = None):
        self._fields: Dict[str, FieldDefinition] = {}
        self._lock = threading.RLock()
        if fields:
            self.register_many(fields)

    def __len__(self) -> int:
        with self._lock:
            return len(self._fields)

    def __contains__(self, field_id: str) -> bool:
        return self.has(field_id)

    @staticmethod
    def _check_definition(definition: FieldDefinition) -> None:
        if not definition.id:
            raise ValueError("Field definition requires an id")
        if not definition.name:
            raise ValueError(f"Field '{definition.id}' requires a name")
        if not isinstance(definition.category, FieldCategory):
            raise ValueError(f"Field '{definition.id}' has invalid category: {definition.category!r}")
        if not callable(definition.formatter):
            raise ValueError(f"Field '{definition.id}' requires a formatter")

    def register(self, definition: FieldDefinition) -> bool:
        """Register a field definition.

        An id that is already registered keeps its first definition.

        Returns:
            True if the definition was added, False for a duplicate id

        Raises:
            ValueError: if the definition is missing id, name, category or formatter
        """
        self._check_definition(definition)
        with self._lock:
            if definition.id in self._fields:
                logger.warning(f"Field '{definition.id}' already registered, keeping existing definition")
                return False
            self._fields[definition.id] = definition
        logger.debug(f"Registered field: {definition.id} ({definition.name})")
        return True

    def register_many(self, definitions: Iterable[FieldDefinition]) -> int:
        """Register several definitions; returns how many were added."""
        return sum(1 for d in definitions if self.register(d))

    def unregister(self, field_id: str) -> bool:
        """Remove a field from registry."""
        with self._lock:
            if field_id in self._fields:
                del self._fields[field_id]
                return True
        return False

    def get(self, field_id: str) -> Optional[FieldDefinition]:
        with self._lock:
            return self._fields.get(field_id)

    def has(self, field_id: str) -> bool:
        with self._lock:
            return field_id in self._fields

    def all_fields(self) -> List[FieldDefinition]:
        with self._lock:
            return list(self._fields.values())

    def validate_field_id(self, field_id: str) -> FieldDefinition:
        """Return the definition for `field_id`; raises ValueError for an unknown id."""
        definition = self.get(field_id)
        if definition is None:
            raise ValueError(f"Unknown field id: '{field_id}'")
        return definition

    # --- Category views ---

    def by_category(self, category: Union[FieldCategory, str]) -> List[FieldDefinition]:
        """Fields of one category; an unknown category name gives an empty list."""
        try:
            category = FieldCategory(category)
        except ValueError:
            return []
        return [f for f in self.all_fields() if f.category is category]

    def all_categories(self) -> Dict[FieldCategory, List[FieldDefinition]]:
        """Fields grouped by category, categories in first-registration order."""
        groups: Dict[FieldCategory, List[FieldDefinition]] = {}
        for definition in self.all_fields():
            groups.setdefault(definition.category, []).append(definition)
        return groups

    def categories_with_counts(self) -> List[Dict]:
        """Category metadata with field counts; empty categories are omitted."""
        groups = self.all_categories()
        result = []
        for category, info in CATEGORY_INFO.items():
            count = len(groups.get(category, []))
            if count == 0:
                continue
            result.append({
                "id": info.id,
                "name": info.name,
                "icon": info.icon,
                "color": info.color,
                "count": count,
            })
        return result

    # --- Lookup & filters ---

    def search(self, query: str) -> List[FieldDefinition]:
        """Case-insensitive substring match on name and description.

        A blank query returns every field.
        """
        needle = (query or "").strip().lower()
        if not needle:
            return self.all_fields()
        return [
            f for f in self.all_fields()
            if needle in f.name.lower() or needle in f.description.lower()
        ]

    def by_ids(self, field_ids: Iterable[str]) -> List[FieldDefinition]:
        """Definitions in the requested order; unknown ids are skipped."""
        with self._lock:
            return [self._fields[i] for i in field_ids if i in self._fields]

    def requiring_sensor(self, sensor_type: str) -> List[FieldDefinition]:
        return [f for f in self.all_fields() if sensor_type in f.requires_sensor]

    def requiring_gps(self) -> List[FieldDefinition]:
        return [f for f in self.all_fields() if f.requires_gps]

    def requiring_workout_active(self) -> List[FieldDefinition]:
        return [f for f in self.all_fields() if f.requires_workout_active]

    def calculated_fields(self) -> List[FieldDefinition]:
        return [f for f in self.all_fields() if f.calculator is not None]

    def sensor_fields(self) -> List[FieldDefinition]:
        return [f for f in self.all_fields() if f.source_type is SourceType.SENSOR]

    def always_available(self) -> List[FieldDefinition]:
        """Fields with no sensor, GPS or workout requirement."""
        return [
            f for f in self.all_fields()
            if not f.requires_sensor and not f.requires_gps and not f.requires_workout_active
        ]

    def stats(self) -> Dict[str, object]:
        fields = self.all_fields()
        return {
            "total": len(fields),
            "by_category": {c.value: len(v) for c, v in self.all_categories().items()},
            "calculated": sum(1 for f in fields if f.calculator is not None),
            "sensor": sum(1 for f in fields if f.source_type is SourceType.SENSOR),
            "requires_gps": sum(1 for f in fields if f.requires_gps),
            "requires_workout": sum(1 for f in fields if f.requires_workout_active),
        }

    def clear(self) -> None:
        """Clear all registered fields."""
        with self._lock:
            self._fields.clear()
