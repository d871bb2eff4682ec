"""Tests for the field registry and the built-in field catalog."""
import pytest

from ridemetrics.fields import (
    ALL_FIELDS,
    FieldCategory,
    FieldDefinition,
    FieldRegistry,
    SourceType,
    create_default_registry,
)


def _formatter(value, settings):
    return "--" if value is None else str(value)


def _field(field_id, name="Field", category=FieldCategory.POWER, **kwargs):
    return FieldDefinition(id=field_id, name=name, category=category, formatter=_formatter, **kwargs)


class TestRegistration:
    """Tests for register / unregister."""

    def test_register(self):
        registry = FieldRegistry()
        assert registry.register(_field("a"))
        assert registry.has("a")
        assert "a" in registry
        assert len(registry) == 1

    def test_duplicate_keeps_first(self):
        """Registering an existing id is rejected and the first definition wins."""
        registry = FieldRegistry()
        registry.register(_field("x", name="A"))
        assert registry.register(_field("x", name="B")) is False
        assert registry.get("x").name == "A"
        assert len(registry) == 1

    @pytest.mark.parametrize("kwargs", [
        {"id": "", "name": "N", "category": FieldCategory.POWER, "formatter": _formatter},
        {"id": "i", "name": "", "category": FieldCategory.POWER, "formatter": _formatter},
        {"id": "i", "name": "N", "category": "power", "formatter": _formatter},
        {"id": "i", "name": "N", "category": FieldCategory.POWER, "formatter": None},
    ])
    def test_incomplete_definition_rejected(self, kwargs):
        with pytest.raises(ValueError):
            FieldRegistry().register(FieldDefinition(**kwargs))

    def test_unregister(self):
        registry = FieldRegistry([_field("a"), _field("b")])
        assert registry.unregister("a")
        assert not registry.unregister("a")
        assert [f.id for f in registry.all_fields()] == ["b"]

    def test_register_many_counts_added(self):
        registry = FieldRegistry()
        assert registry.register_many([_field("a"), _field("b"), _field("a")]) == 2

    def test_validate_field_id(self):
        registry = FieldRegistry([_field("a")])
        assert registry.validate_field_id("a").id == "a"
        with pytest.raises(ValueError):
            registry.validate_field_id("missing")

    def test_clear(self):
        registry = FieldRegistry([_field("a")])
        registry.clear()
        assert len(registry) == 0


class TestQueries:
    """Tests for category, search and filter queries."""

    @pytest.fixture
    def registry(self):
        return FieldRegistry([
            _field("p1", name="Power", description="Current watts"),
            _field("h1", name="Heart Rate", category=FieldCategory.HEARTRATE,
                   description="Beats per minute", requires_sensor=("heartrate",)),
            _field("p2", name="Avg Power", requires_workout_active=True, calculator=lambda ctx: 1),
            _field("s1", name="Speed", category=FieldCategory.SPEED, requires_gps=True,
                   source_type=SourceType.SENSOR),
        ])

    def test_by_category(self, registry):
        assert [f.id for f in registry.by_category(FieldCategory.POWER)] == ["p1", "p2"]
        assert [f.id for f in registry.by_category("heartrate")] == ["h1"]

    def test_unknown_category_is_empty(self, registry):
        assert registry.by_category("nope") == []

    def test_all_categories_order(self, registry):
        assert list(registry.all_categories()) == [
            FieldCategory.POWER, FieldCategory.HEARTRATE, FieldCategory.SPEED,
        ]

    def test_categories_with_counts(self, registry):
        counts = {c["id"]: c["count"] for c in registry.categories_with_counts()}
        assert counts == {"power": 2, "heartrate": 1, "speed": 1}

    def test_search_name_and_description(self, registry):
        assert {f.id for f in registry.search("power")} == {"p1", "p2"}
        assert [f.id for f in registry.search("BEATS")] == ["h1"]

    def test_blank_search_returns_all(self, registry):
        assert len(registry.search("  ")) == 4

    def test_by_ids_keeps_requested_order(self, registry):
        assert [f.id for f in registry.by_ids(["s1", "missing", "p1"])] == ["s1", "p1"]

    def test_filters(self, registry):
        assert [f.id for f in registry.requiring_sensor("heartrate")] == ["h1"]
        assert [f.id for f in registry.requiring_gps()] == ["s1"]
        assert [f.id for f in registry.requiring_workout_active()] == ["p2"]
        assert [f.id for f in registry.calculated_fields()] == ["p2"]
        assert [f.id for f in registry.sensor_fields()] == ["s1"]
        assert [f.id for f in registry.always_available()] == ["p1"]

    def test_stats(self, registry):
        stats = registry.stats()
        assert stats["total"] == 4
        assert stats["by_category"]["power"] == 2


class TestDefaultCatalog:
    """Tests for the built-in field catalog."""

    def test_all_fields_registered(self):
        registry = create_default_registry()
        assert len(registry) == len(ALL_FIELDS)

    def test_unique_ids(self):
        ids = [f.id for f in ALL_FIELDS]
        assert len(ids) == len(set(ids))

    def test_registries_are_independent(self):
        first = create_default_registry()
        second = create_default_registry()
        first.unregister("power-current")
        assert "power-current" not in first
        assert "power-current" in second

    @pytest.mark.parametrize("field_id", [
        "power-current", "power-3s", "power-normalized", "power-tss",
        "hr-current", "hr-zone", "cadence-avg", "speed-current",
        "distance-total", "elevation-gain", "time-elapsed", "calories_total",
    ])
    def test_core_fields_present(self, field_id):
        assert field_id in create_default_registry()

    def test_every_field_computable(self):
        """Each field has a calculator or a sensor channel to read."""
        for definition in ALL_FIELDS:
            assert definition.calculator is not None or definition.sensor_channel, definition.id

    def test_to_dict(self):
        data = create_default_registry().get("power-current").to_dict()
        assert data["category"] == "power"
        assert data["requiresSensor"] == ["power"]
        assert data["sourceType"] == "sensor"
