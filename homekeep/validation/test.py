"""Unit tests for the Validation module."""

import datetime as dt

import pytest
from pydantic import ValidationError
from pydantic_core import PydanticCustomError

from homekeep.schema import PROPERTY_SCHEMA
from homekeep.validation import (
    ValidationResult,
    collect_errors,
    describe_kind,
    is_valid_base,
    is_valid_maintainable_subtype,
    is_valid_maintainable_type,
    is_valid_maintenance_log,
    is_valid_property_data,
    is_valid_record,
    is_valid_typed,
    validate_base,
    validate_maintenance_log,
    validate_partial_property_data,
    validate_property_data,
    validate_record,
    validate_typed,
)

TYPE_OPTIONS = (
    "'appliance'|'structure'|'utility'|'system'|'vehicle'|'instrument'|'landscape'|'other'"
)


class TestValidationResult:
    """Tests for the ValidationResult container."""

    @pytest.mark.unit
    def test_ok_is_truthy(self):
        """Successful results are truthy and carry data."""
        result = ValidationResult.ok({"a": 1})
        assert result
        assert result.data == {"a": 1}
        assert result.errors == {}

    @pytest.mark.unit
    def test_fail_is_falsy(self):
        """Failed results are falsy and carry errors only."""
        result = ValidationResult.fail({"a": ["bad"]})
        assert not result
        assert result.data is None
        assert result.to_dict() == {"success": False, "errors": {"a": ["bad"]}}

    @pytest.mark.unit
    def test_describe_kind(self):
        """JSON kinds are named like JSON, not Python."""
        assert describe_kind(None) == "null"
        assert describe_kind(True) == "boolean"
        assert describe_kind(3) == "number"
        assert describe_kind(2.5) == "number"
        assert describe_kind("x") == "string"
        assert describe_kind([1]) == "array"
        assert describe_kind({"a": 1}) == "object"


class TestCollectErrors:
    """Tests for error grouping."""

    @pytest.mark.unit
    def test_messages_accumulate_per_path(self):
        """Two errors at the same path are both kept, in order."""
        exc = ValidationError.from_exception_data(
            "PropertyData",
            [
                {"type": "missing", "loc": ("name",), "input": {}},
                {
                    "type": PydanticCustomError("custom", "Second message"),
                    "loc": ("name",),
                    "input": {},
                },
            ],
        )
        assert collect_errors(exc, PROPERTY_SCHEMA.model) == {
            "name": ["Invalid input: expected string, received undefined", "Second message"]
        }

    @pytest.mark.unit
    def test_root_errors_use_empty_key(self):
        """A non-object input is reported at the root."""
        result = validate_base("not an object")
        assert result.errors == {"": ["Invalid input: expected object, received string"]}


class TestValidateBase:
    """Tests for base-level validation."""

    @pytest.mark.unit
    def test_minimal_item(self):
        """type and subtype alone are valid."""
        result = validate_base({"type": "appliance", "subtype": "toaster"})
        assert result.success
        assert result.data == {"type": "appliance", "subtype": "toaster"}

    @pytest.mark.unit
    def test_missing_type(self, dishwasher_data):
        """A missing type is reported under 'type'."""
        del dishwasher_data["type"]
        result = validate_base(dishwasher_data)
        assert not result.success
        assert result.errors["type"] == [
            f"Invalid option: expected one of {TYPE_OPTIONS}, received undefined"
        ]

    @pytest.mark.unit
    def test_missing_subtype(self, dishwasher_data):
        """subtype is required at base level."""
        del dishwasher_data["subtype"]
        result = validate_base(dishwasher_data)
        assert result.errors == {
            "subtype": ["Invalid input: expected string, received undefined"]
        }

    @pytest.mark.unit
    def test_empty_subtype(self):
        """An empty subtype string fails."""
        result = validate_base({"type": "appliance", "subtype": ""})
        assert result.errors == {"subtype": ["Subtype is required"]}

    @pytest.mark.unit
    def test_invalid_type_names_received_kind(self):
        """Enum failures say what was received."""
        result = validate_base({"type": 42, "subtype": "x"})
        assert result.errors["type"] == [
            f"Invalid option: expected one of {TYPE_OPTIONS}, received number"
        ]

    @pytest.mark.unit
    def test_invalid_condition(self):
        """Unknown conditions list the allowed values."""
        result = validate_base({"type": "system", "subtype": "x", "condition": "broken"})
        assert result.errors == {
            "condition": [
                "Invalid option: expected one of 'good'|'fair'|'poor'|'critical', "
                "received string"
            ]
        }

    @pytest.mark.unit
    def test_type_mismatch_message(self):
        """Wrong scalar types are named on both sides."""
        result = validate_base({"type": "system", "subtype": "x", "label": 5})
        assert result.errors == {"label": ["Invalid input: expected string, received number"]}

    @pytest.mark.unit
    def test_tag_errors_use_index_path(self):
        """List item failures are keyed by index."""
        result = validate_base(
            {"type": "system", "subtype": "x", "tags": ["fine", "y" * 101]}
        )
        assert result.errors == {"tags.1": ["Tag must be less than 100 characters"]}

    @pytest.mark.unit
    def test_every_invalid_field_reported(self):
        """N invalid fields produce N error keys."""
        result = validate_base(
            {
                "type": "system",
                "subtype": "x",
                "label": "a" * 101,
                "location": "b" * 101,
                "condition": "meh",
                "tags": "not-a-list",
            }
        )
        assert set(result.errors) == {"label", "location", "condition", "tags"}
        assert result.errors["location"] == ["Location must be less than 100 characters"]
        assert result.errors["tags"] == ["Invalid input: expected array, received string"]

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "data",
        [
            {},
            "this should be an object",
            ["not", "an", "object"],
            {"type": None, "subtype": None, "label": None, "metadata": None},
            {"type": "system", "subtype": "hvac", "label": "A" * 1000},
            {"type": "not a type", "subtype": "x", "tags": [""], "location": ""},
        ],
        ids=["empty", "string", "array", "nulls", "extreme", "bad-enum"],
    )
    def test_malformed_payloads_rejected(self, data):
        """Malformed payloads fail without raising."""
        result = validate_base(data)
        assert not result.success
        assert result.errors

    @pytest.mark.unit
    def test_wrong_types_everywhere(self):
        """Every mistyped field gets its own key."""
        result = validate_base(
            {
                "label": 123,
                "type": "invalid-type",
                "subtype": 123,
                "condition": "terrible",
                "tags": "not-an-array",
                "location": 456,
                "metadata": "free-form at base level",
            }
        )
        assert set(result.errors) == {
            "label",
            "type",
            "subtype",
            "condition",
            "tags",
            "location",
        }
        assert result.errors["subtype"] == ["Invalid input: expected string, received number"]

    @pytest.mark.unit
    @pytest.mark.parametrize("metadata", ["just text", 12, True, [1, "two"], {"x": {"y": 1}}])
    def test_metadata_is_opaque(self, metadata):
        """Any JSON value passes as base-level metadata."""
        assert is_valid_base({"type": "other", "subtype": "x", "metadata": metadata})

    @pytest.mark.unit
    def test_unknown_keys_dropped(self):
        """Unknown top-level keys are not returned."""
        result = validate_base({"type": "other", "subtype": "x", "colour": "red"})
        assert result.data == {"type": "other", "subtype": "x"}


class TestValidateTyped:
    """Tests for typed validation."""

    @pytest.mark.unit
    def test_dishwasher_round_trip(self, registry, dishwasher_data):
        """A valid dishwasher comes back unchanged."""
        result = validate_typed(dishwasher_data, "dishwasher", registry=registry)
        assert result.success
        assert result.data == dishwasher_data

    @pytest.mark.unit
    def test_subtype_taken_from_data(self, registry, refrigerator_data):
        """The subtype argument is optional."""
        result = validate_typed(refrigerator_data, registry=registry)
        assert result.success
        assert result.data == refrigerator_data

    @pytest.mark.unit
    def test_every_subtype_accepts_minimal_record(self, registry):
        """Base fields plus discriminators are valid for every subtype."""
        for entry in registry.list_all():
            data = {"type": entry.type.value, "subtype": entry.subtype}
            result = validate_typed(data, entry.subtype, registry=registry)
            assert result.success, entry.subtype
            assert result.data == data

    @pytest.mark.unit
    def test_unknown_subtype_does_not_raise(self, registry):
        """Unknown subtypes fail under 'subtype'."""
        result = validate_typed(
            {"type": "appliance", "subtype": "toaster"}, "toaster", registry=registry
        )
        assert result.errors == {"subtype": ["Unknown subtype: toaster"]}

    @pytest.mark.unit
    def test_missing_subtype_does_not_raise(self, registry):
        """No subtype anywhere is a failure, not an exception."""
        result = validate_typed({"type": "appliance"}, registry=registry)
        assert result.errors == {"subtype": ["Subtype is required"]}

    @pytest.mark.unit
    def test_non_mapping_input(self, registry):
        """Garbage input with an explicit subtype fails at the root."""
        result = validate_typed(["nope"], "dishwasher", registry=registry)
        assert result.errors == {"": ["Invalid input: expected object, received array"]}

    @pytest.mark.unit
    def test_type_must_match_subtype(self, registry, dishwasher_data):
        """A dishwasher cannot claim to be a system."""
        dishwasher_data["type"] = "system"
        result = validate_typed(dishwasher_data, registry=registry)
        assert result.errors == {
            "type": ["Invalid option: expected one of 'appliance', received string"]
        }

    @pytest.mark.unit
    def test_negative_price_rejected(self, registry, dishwasher_data):
        """Negative purchase prices fail at the nested path."""
        dishwasher_data["metadata"]["purchasePrice"] = -5
        result = validate_typed(dishwasher_data, registry=registry)
        assert result.errors == {
            "metadata.purchasePrice": ["Purchase price cannot be negative"]
        }

    @pytest.mark.unit
    def test_negative_lifespan_rejected(self, registry, dishwasher_data):
        """Negative lifespans fail at the nested path."""
        dishwasher_data["metadata"]["expectedLifespan"] = -1
        result = validate_typed(dishwasher_data, registry=registry)
        assert result.errors == {
            "metadata.expectedLifespan": ["Expected lifespan cannot be negative"]
        }

    @pytest.mark.unit
    def test_metadata_must_be_object(self, registry, dishwasher_data):
        """Typed metadata is structured, not opaque."""
        dishwasher_data["metadata"] = "Samsung"
        result = validate_typed(dishwasher_data, registry=registry)
        assert result.errors == {
            "metadata": ["Invalid input: expected object, received string"]
        }

    @pytest.mark.unit
    def test_refrigerator_metadata_types(self, registry, refrigerator_data):
        """Each invalid metadata field is reported at its own path."""
        refrigerator_data["metadata"].update(
            {"capacity": -3, "style": "chest", "hasIceMaker": "yes"}
        )
        result = validate_typed(refrigerator_data, registry=registry)
        assert result.errors == {
            "metadata.capacity": ["Capacity must be positive"],
            "metadata.style": [
                "Invalid option: expected one of "
                "'top-freezer'|'bottom-freezer'|'side-by-side'|'french-door', "
                "received string"
            ],
            "metadata.hasIceMaker": ["Invalid input: expected boolean, received string"],
        }

    @pytest.mark.unit
    def test_heat_metadata(self, registry, heat_data):
        """Heat accepts its onboarding and extra fields."""
        assert is_valid_typed(heat_data, registry=registry)
        heat_data["metadata"]["fuel"] = "coal"
        assert not is_valid_typed(heat_data, registry=registry)


class TestValidateRecord:
    """Tests for persisted maintainable rows."""

    @pytest.mark.unit
    def test_valid_record(self, dishwasher_data):
        """A full row validates."""
        record = {
            "id": "m-1",
            "property_id": "p-1",
            "data": dishwasher_data,
            "created_at": "2024-05-01T12:00:00Z",
            "updated_at": "2024-05-01T12:00:00Z",
        }
        assert is_valid_record(record)

    @pytest.mark.unit
    def test_nested_data_errors(self):
        """Errors inside data are reported with a data prefix."""
        result = validate_record(
            {
                "id": "m-1",
                "property_id": "p-1",
                "data": {"subtype": "dishwasher"},
                "created_at": "2024-05-01",
                "updated_at": "2024-05-01",
            }
        )
        assert result.errors == {
            "data.type": [f"Invalid option: expected one of {TYPE_OPTIONS}, received undefined"]
        }


class TestValidateProperty:
    """Tests for property validation."""

    @pytest.mark.unit
    def test_full_property(self, property_data):
        """A complete property payload is accepted."""
        result = validate_property_data(property_data)
        assert result.success
        assert result.data == property_data

    @pytest.mark.unit
    def test_square_footage_boundary(self, property_data):
        """1,000,000 square feet is the inclusive upper bound."""
        property_data["squareFootage"] = 1_000_000
        assert is_valid_property_data(property_data)

        property_data["squareFootage"] = 1_000_001
        result = validate_property_data(property_data)
        assert not result.success
        assert "unreasonably large" in result.errors["squareFootage"][0]

    @pytest.mark.unit
    def test_future_year(self, property_data):
        """yearBuilt cannot be next year."""
        property_data["yearBuilt"] = dt.date.today().year + 1
        result = validate_property_data(property_data)
        assert result.errors == {"yearBuilt": ["Year built cannot be in the future"]}

    @pytest.mark.unit
    def test_numeric_strings_rejected(self, property_data):
        """Numbers are never parsed from strings."""
        property_data["bedrooms"] = "4"
        result = validate_property_data(property_data)
        assert result.errors == {
            "bedrooms": ["Invalid input: expected integer, received string"]
        }

    @pytest.mark.unit
    def test_required_fields(self):
        """name and address are required and non-empty."""
        result = validate_property_data({"name": "", "address": "1 Road"})
        assert result.errors == {"name": ["Property name is required"]}
        assert not is_valid_property_data({"name": "Cabin"})

    @pytest.mark.unit
    def test_partial_update(self):
        """Partial validation accepts any subset of fields."""
        result = validate_partial_property_data({"stories": 3})
        assert result.success
        assert result.data == {"stories": 3}
        assert not validate_partial_property_data({"stories": 11}).success


class TestValidateMaintenanceLog:
    """Tests for maintenance log validation."""

    @pytest.mark.unit
    def test_valid_log(self):
        """A typical log entry validates."""
        log = {
            "name": "Annual furnace service",
            "serviceType": "routine-maintenance",
            "cost": 149.99,
            "dateCompleted": "2024-10-02",
            "serviceProvider": "Acme HVAC",
        }
        result = validate_maintenance_log(log)
        assert result.success
        assert result.data == log

    @pytest.mark.unit
    def test_negative_cost(self):
        """Costs cannot be negative."""
        result = validate_maintenance_log({"name": "Fix", "cost": -1})
        assert result.errors == {"cost": ["Cost cannot be negative"]}
        assert not is_valid_maintenance_log({"cost": 10})


class TestTypeGuards:
    """Tests for the vocabulary guards."""

    @pytest.mark.unit
    def test_maintainable_type_guard(self):
        """Only known types pass."""
        assert is_valid_maintainable_type("appliance")
        assert not is_valid_maintainable_type("spaceship")
        assert not is_valid_maintainable_type(None)

    @pytest.mark.unit
    def test_subtype_guard(self, registry):
        """Only registered subtypes pass."""
        assert is_valid_maintainable_subtype("heat", registry=registry)
        assert not is_valid_maintainable_subtype("toaster", registry=registry)
        assert not is_valid_maintainable_subtype(3, registry=registry)
