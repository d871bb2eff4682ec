"""
Data field registry and catalog.
"""
from .base import (
    CATEGORY_INFO,
    SIZE_INFO,
    CalculationContext,
    CategoryInfo,
    FieldCategory,
    FieldDefinition,
    FieldSize,
    SizeInfo,
    SourceType,
    UpdateFrequency,
)
from .registry import FieldRegistry
from .definitions import ALL_FIELDS


def create_default_registry() -> FieldRegistry:
    """New registry populated with the built-in field catalog."""
    return FieldRegistry(ALL_FIELDS)


__all__ = [
    "CATEGORY_INFO",
    "SIZE_INFO",
    "CalculationContext",
    "CategoryInfo",
    "FieldCategory",
    "FieldDefinition",
    "FieldSize",
    "SizeInfo",
    "SourceType",
    "UpdateFrequency",
    "FieldRegistry",
    "ALL_FIELDS",
    "create_default_registry",
]
