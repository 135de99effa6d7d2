"""Unit tests for the built-in subtype modules."""

import pytest

from homekeep.onboarding import get_onboarding
from homekeep.schema import MAINTAINABLE_DATA_SCHEMA, MAINTAINABLE_METADATA_BASE_SCHEMA
from homekeep.subtypes import SUBTYPE_ENTRIES, appliance, structure, system
from homekeep.subtypes.appliance import refrigerator
from homekeep.subtypes.system import heat
from homekeep.validation import validate_schema


class TestEntries:
    """Tests covering every built-in entry."""

    @pytest.mark.unit
    def test_static_list(self):
        """The static list is the category lists in order."""
        assert SUBTYPE_ENTRIES == [*appliance.ENTRIES, *system.ENTRIES, *structure.ENTRIES]
        assert [entry.subtype for entry in SUBTYPE_ENTRIES] == [
            "dishwasher",
            "refrigerator",
            "washing-machine",
            "heat",
            "cooling",
            "roof",
            "foundation",
        ]

    @pytest.mark.unit
    def test_category_packages_match_types(self):
        """Entries live in the package of their type."""
        for package, expected in (
            (appliance, "appliance"),
            (system, "system"),
            (structure, "structure"),
        ):
            assert {entry.type.value for entry in package.ENTRIES} == {expected}

    @pytest.mark.unit
    @pytest.mark.parametrize("entry", SUBTYPE_ENTRIES, ids=lambda e: e.subtype)
    def test_metadata_extends_base(self, entry):
        """Every metadata schema keeps the shared metadata definitions."""
        for key, definition in MAINTAINABLE_METADATA_BASE_SCHEMA.shape.items():
            assert entry.metadata_schema.shape[key] is definition

    @pytest.mark.unit
    @pytest.mark.parametrize("entry", SUBTYPE_ENTRIES, ids=lambda e: e.subtype)
    def test_schema_keeps_base_fields(self, entry):
        """Every full schema carries all base fields."""
        assert set(MAINTAINABLE_DATA_SCHEMA.shape) <= set(entry.schema.shape)
        assert entry.schema.shape["label"] is MAINTAINABLE_DATA_SCHEMA.shape["label"]


class TestRefrigerator:
    """Tests for the refrigerator subtype."""

    @pytest.mark.unit
    def test_capacity_positive(self):
        """Zero capacity is rejected."""
        result = validate_schema({"capacity": 0}, refrigerator.REFRIGERATOR_METADATA_SCHEMA)
        assert result.errors == {"capacity": ["Capacity must be positive"]}

    @pytest.mark.unit
    def test_styles(self):
        """All four styles are accepted."""
        for style in refrigerator.REFRIGERATOR_STYLES:
            assert validate_schema(
                {"style": style}, refrigerator.REFRIGERATOR_METADATA_SCHEMA
            ).success


class TestHeat:
    """Tests for the heat subtype."""

    @pytest.mark.unit
    def test_annotated_fields(self):
        """Eight fields are annotated, brand/btu/efficiency are not."""
        schema = heat.ENTRY.schema
        metadata = heat.HEAT_METADATA_SCHEMA
        top = [name for name, d in schema.shape.items() if get_onboarding(d)]
        nested = [name for name, d in metadata.shape.items() if get_onboarding(d)]
        assert top == ["subtype", "condition", "location"]
        assert nested == ["heatSource", "fuel", "age", "maintenanceFrequency", "estimatedCost"]
        for name in ("brand", "btu", "efficiency"):
            assert get_onboarding(metadata.shape[name]) is None

    @pytest.mark.unit
    def test_condition_defaults_to_good(self):
        """The condition question suggests 'good'."""
        metadata = get_onboarding(heat.ENTRY.schema.shape["condition"])
        assert metadata.default_value == "good"
        assert [option.value for option in metadata.options] == [
            "good",
            "fair",
            "poor",
            "critical",
        ]

    @pytest.mark.unit
    def test_fuel_hidden_for_heat_pumps(self):
        """The fuel question depends on the heat source."""
        rule = get_onboarding(heat.HEAT_METADATA_SCHEMA.shape["fuel"]).conditional
        assert rule.is_met({"metadata": {"heatSource": "furnace"}})
        assert not rule.is_met({"metadata": {"heatSource": "heat-pump"}})

    @pytest.mark.unit
    def test_optional_condition(self):
        """Condition stays optional in the schema itself."""
        result = validate_schema({"type": "system", "subtype": "heat"}, heat.ENTRY.schema)
        assert result.success
