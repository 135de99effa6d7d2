"""Unit tests for the Schema module."""

import datetime as dt
from typing import Literal

import pytest
from pydantic import StrictStr, ValidationError

from homekeep.schema import (
    MAINTAINABLE_DATA_SCHEMA,
    MAINTAINABLE_METADATA_BASE_SCHEMA,
    MAINTAINABLE_RECORD_SCHEMA,
    MAINTENANCE_LOG_SCHEMA,
    PARTIAL_PROPERTY_SCHEMA,
    PROPERTY_SCHEMA,
    Condition,
    MaintainableType,
    ObjectSchema,
    SubtypeSchemaEntry,
    choice,
    field,
    max_chars,
)


def _messages(exc: ValidationError) -> list[str]:
    return [error["msg"] for error in exc.errors()]


class TestVocabularies:
    """Tests for the controlled vocabularies."""

    @pytest.mark.unit
    def test_maintainable_types(self):
        """All eight top-level categories exist."""
        assert [t.value for t in MaintainableType] == [
            "appliance",
            "structure",
            "utility",
            "system",
            "vehicle",
            "instrument",
            "landscape",
            "other",
        ]

    @pytest.mark.unit
    def test_conditions(self):
        """Conditions are ordered best to worst."""
        assert [c.value for c in Condition] == ["good", "fair", "poor", "critical"]

    @pytest.mark.unit
    def test_choice_from_enum_and_list(self):
        """choice() accepts an enum or plain values."""
        schema = ObjectSchema(
            "Choices",
            {"a": field(choice(Condition)), "b": field(choice(["x", "y"]))},
        )
        schema.model.model_validate({"a": "fair", "b": "y"})
        with pytest.raises(ValidationError):
            schema.model.model_validate({"a": "broken", "b": "y"})

    @pytest.mark.unit
    def test_choice_requires_options(self):
        """An empty choice is rejected."""
        with pytest.raises(ValueError):
            choice([])


class TestObjectSchema:
    """Tests for ObjectSchema composition."""

    @pytest.mark.unit
    def test_extend_keeps_definitions_by_identity(self):
        """Extended schemas share unchanged field definitions."""
        extended = MAINTAINABLE_DATA_SCHEMA.extend("Extended", extra=field(StrictStr))
        for key, definition in MAINTAINABLE_DATA_SCHEMA.shape.items():
            assert extended.shape[key] is definition
        assert "extra" in extended.shape

    @pytest.mark.unit
    def test_extend_does_not_mutate_original(self):
        """The base schema is untouched by extension."""
        before = dict(MAINTAINABLE_DATA_SCHEMA.shape)
        MAINTAINABLE_DATA_SCHEMA.extend(label=field(StrictStr))
        assert dict(MAINTAINABLE_DATA_SCHEMA.shape) == before

    @pytest.mark.unit
    def test_extend_override_keeps_position(self):
        """Replaced keys stay where they were declared."""
        extended = MAINTAINABLE_DATA_SCHEMA.extend(condition=field(StrictStr))
        assert list(extended.shape) == list(MAINTAINABLE_DATA_SCHEMA.shape)

    @pytest.mark.unit
    def test_shape_is_read_only(self):
        """The shape mapping cannot be mutated."""
        with pytest.raises(TypeError):
            MAINTAINABLE_DATA_SCHEMA.shape["label"] = field(StrictStr)

    @pytest.mark.unit
    def test_rejects_non_field_values(self):
        """Only FieldInfo and ObjectSchema values are accepted."""
        with pytest.raises(TypeError):
            ObjectSchema("Bad", {"x": str})

    @pytest.mark.unit
    def test_nested_object_is_optional_but_not_null(self):
        """A nested schema may be absent but not null."""
        inner = ObjectSchema("Inner", {"size": field(StrictStr, default=None)})
        outer = ObjectSchema("Outer", {"inner": inner})
        assert outer.nested("inner") is inner
        outer.model.model_validate({})
        outer.model.model_validate({"inner": {"size": "large"}})
        with pytest.raises(ValidationError):
            outer.model.model_validate({"inner": None})

    @pytest.mark.unit
    def test_model_is_cached(self):
        """The compiled model is built once."""
        assert MAINTAINABLE_DATA_SCHEMA.model is MAINTAINABLE_DATA_SCHEMA.model

    @pytest.mark.unit
    def test_unknown_keys_are_dropped(self):
        """Extra keys are ignored, not rejected."""
        instance = MAINTAINABLE_DATA_SCHEMA.model.model_validate(
            {"type": "appliance", "subtype": "x", "bogus": 1}
        )
        assert "bogus" not in instance.model_dump(exclude_unset=True)

    @pytest.mark.unit
    def test_partial_makes_fields_optional(self):
        """partial() relaxes required fields but keeps their checks."""
        PARTIAL_PROPERTY_SCHEMA.model.model_validate({})
        PARTIAL_PROPERTY_SCHEMA.model.model_validate({"name": "Cabin"})
        with pytest.raises(ValidationError):
            PARTIAL_PROPERTY_SCHEMA.model.model_validate({"name": ""})

    @pytest.mark.unit
    def test_json_schema_export(self):
        """JSON Schema lists the properties and required keys."""
        schema = MAINTAINABLE_DATA_SCHEMA.json_schema()
        assert schema["type"] == "object"
        assert {"label", "type", "subtype", "metadata"} <= set(schema["properties"])
        assert set(schema["required"]) == {"type", "subtype"}


class TestFieldChecks:
    """Tests for constraint helpers and strict scalars."""

    @pytest.mark.unit
    def test_custom_message_is_verbatim(self):
        """Constraint failures carry the configured message."""
        schema = ObjectSchema(
            "Named", {"name": field(StrictStr, max_chars(3, "Too long, sorry"))}
        )
        with pytest.raises(ValidationError) as exc_info:
            schema.model.model_validate({"name": "abcd"})
        assert _messages(exc_info.value) == ["Too long, sorry"]

    @pytest.mark.unit
    def test_strings_are_not_coerced(self):
        """Numbers are not accepted for string fields."""
        with pytest.raises(ValidationError):
            MAINTAINABLE_DATA_SCHEMA.model.model_validate(
                {"type": "appliance", "subtype": "x", "label": 5}
            )

    @pytest.mark.unit
    def test_explicit_null_rejected_for_optional_string(self):
        """Optional means absent, not null."""
        with pytest.raises(ValidationError):
            MAINTAINABLE_DATA_SCHEMA.model.model_validate(
                {"type": "appliance", "subtype": "x", "location": None}
            )

    @pytest.mark.unit
    def test_numbers_accept_integers(self):
        """Integer input is fine for number fields."""
        MAINTAINABLE_METADATA_BASE_SCHEMA.model.model_validate({"purchasePrice": 100})

    @pytest.mark.unit
    def test_numbers_reject_strings(self):
        """Numeric strings are not coerced."""
        with pytest.raises(ValidationError):
            MAINTAINABLE_METADATA_BASE_SCHEMA.model.model_validate(
                {"purchasePrice": "100"}
            )

    @pytest.mark.unit
    def test_negative_price_message(self):
        """Negative purchase prices are rejected with a clear message."""
        with pytest.raises(ValidationError) as exc_info:
            MAINTAINABLE_METADATA_BASE_SCHEMA.model.model_validate(
                {"purchasePrice": -1}
            )
        assert _messages(exc_info.value) == ["Purchase price cannot be negative"]


class TestBaseSchema:
    """Tests for the base maintainable schema."""

    @pytest.mark.unit
    def test_minimal_item(self):
        """type and subtype are enough."""
        MAINTAINABLE_DATA_SCHEMA.model.model_validate(
            {"type": "system", "subtype": "heat"}
        )

    @pytest.mark.unit
    def test_subtype_must_not_be_empty(self):
        """An empty subtype fails."""
        with pytest.raises(ValidationError) as exc_info:
            MAINTAINABLE_DATA_SCHEMA.model.model_validate(
                {"type": "system", "subtype": ""}
            )
        assert _messages(exc_info.value) == ["Subtype is required"]

    @pytest.mark.unit
    def test_label_limit(self):
        """Labels longer than 100 characters fail."""
        with pytest.raises(ValidationError) as exc_info:
            MAINTAINABLE_DATA_SCHEMA.model.model_validate(
                {"type": "system", "subtype": "heat", "label": "x" * 101}
            )
        assert _messages(exc_info.value) == ["Label must be less than 100 characters"]

    @pytest.mark.unit
    def test_tag_limit(self):
        """Each tag is limited to 100 characters."""
        with pytest.raises(ValidationError) as exc_info:
            MAINTAINABLE_DATA_SCHEMA.model.model_validate(
                {"type": "system", "subtype": "heat", "tags": ["ok", "x" * 101]}
            )
        errors = exc_info.value.errors()
        assert errors[0]["loc"] == ("tags", 1)
        assert errors[0]["msg"] == "Tag must be less than 100 characters"

    @pytest.mark.unit
    def test_metadata_accepts_any_json(self):
        """Base-level metadata is free-form."""
        for metadata in ({"a": 1}, [1, 2], "text", 3, None):
            MAINTAINABLE_DATA_SCHEMA.model.model_validate(
                {"type": "system", "subtype": "heat", "metadata": metadata}
            )


class TestSubtypeSchemaEntry:
    """Tests for SubtypeSchemaEntry."""

    @pytest.fixture
    def entry(self):
        metadata = MAINTAINABLE_METADATA_BASE_SCHEMA.extend(
            "LampMetadata", bulb=field(StrictStr, default=None)
        )
        return SubtypeSchemaEntry(
            type="appliance", subtype="desk-lamp", metadata_schema=metadata
        )

    @pytest.mark.unit
    def test_type_is_normalised(self, entry):
        """String types become MaintainableType members."""
        assert entry.type is MaintainableType.APPLIANCE

    @pytest.mark.unit
    def test_invalid_type_rejected(self):
        """Unknown categories cannot be registered."""
        with pytest.raises(ValueError):
            SubtypeSchemaEntry(
                type="spaceship",
                subtype="x",
                metadata_schema=MAINTAINABLE_METADATA_BASE_SCHEMA,
            )

    @pytest.mark.unit
    def test_schema_locks_discriminators(self, entry):
        """The full schema only accepts its own type and subtype."""
        model = entry.schema.model
        model.model_validate({"type": "appliance", "subtype": "desk-lamp"})
        with pytest.raises(ValidationError):
            model.model_validate({"type": "system", "subtype": "desk-lamp"})
        with pytest.raises(ValidationError):
            model.model_validate({"type": "appliance", "subtype": "lamp"})

    @pytest.mark.unit
    def test_schema_name(self, entry):
        """The compiled schema is named after the subtype."""
        assert entry.schema.name == "DeskLampMaintainableData"

    @pytest.mark.unit
    def test_schema_is_cached(self, entry):
        """The full schema is composed once."""
        assert entry.schema is entry.schema

    @pytest.mark.unit
    def test_metadata_is_structured(self, entry):
        """Subtype metadata follows the metadata schema."""
        with pytest.raises(ValidationError):
            entry.schema.model.model_validate(
                {"type": "appliance", "subtype": "desk-lamp", "metadata": {"bulb": 4}}
            )

    @pytest.mark.unit
    def test_field_overrides(self):
        """Top-level overrides replace base definitions."""
        location = field(StrictStr, default=None, description="Room")
        entry = SubtypeSchemaEntry(
            type="appliance",
            subtype="fan",
            metadata_schema=MAINTAINABLE_METADATA_BASE_SCHEMA,
            fields={"location": location},
        )
        assert entry.schema.shape["location"] is location
        assert entry.schema.shape["label"] is MAINTAINABLE_DATA_SCHEMA.shape["label"]

    @pytest.mark.unit
    def test_discriminator_overrides(self):
        """Entries may replace the locked type and subtype definitions."""
        subtype = field(Literal["fan"], description="Annotated subtype")
        kind = field(Literal["appliance"], description="Annotated type")
        entry = SubtypeSchemaEntry(
            type="appliance",
            subtype="fan",
            metadata_schema=MAINTAINABLE_METADATA_BASE_SCHEMA,
            fields={"type": kind, "subtype": subtype},
        )
        assert entry.schema.shape["subtype"] is subtype
        assert entry.schema.shape["type"] is kind
        model = entry.schema.model
        model.model_validate({"type": "appliance", "subtype": "fan"})
        with pytest.raises(ValidationError):
            model.model_validate({"type": "appliance", "subtype": "heater"})

    @pytest.mark.unit
    def test_metadata_override(self):
        """A metadata definition in fields wins over metadata_schema."""
        metadata = MAINTAINABLE_METADATA_BASE_SCHEMA.extend(
            "BoxMetadata", size=field(StrictStr, default=None)
        )
        entry = SubtypeSchemaEntry(
            type="other",
            subtype="box",
            metadata_schema=MAINTAINABLE_METADATA_BASE_SCHEMA,
            fields={"metadata": metadata},
        )
        assert entry.schema.shape["metadata"] is metadata


class TestRecordSchema:
    """Tests for the persisted maintainable record."""

    @pytest.mark.unit
    def test_valid_record(self):
        """A full record validates."""
        MAINTAINABLE_RECORD_SCHEMA.model.model_validate(
            {
                "id": "m-1",
                "property_id": "p-1",
                "data": {"type": "appliance", "subtype": "dishwasher"},
                "created_at": "2024-01-01T00:00:00Z",
                "updated_at": "2024-01-02T00:00:00Z",
            }
        )

    @pytest.mark.unit
    def test_data_is_required(self):
        """A record without data fails."""
        with pytest.raises(ValidationError):
            MAINTAINABLE_RECORD_SCHEMA.model.model_validate(
                {
                    "id": "m-1",
                    "property_id": "p-1",
                    "created_at": "2024-01-01",
                    "updated_at": "2024-01-01",
                }
            )


class TestPropertySchema:
    """Tests for the property schema."""

    @pytest.mark.unit
    def test_name_and_address_required(self):
        """Both name and address are required."""
        with pytest.raises(ValidationError) as exc_info:
            PROPERTY_SCHEMA.model.model_validate({})
        locs = {error["loc"] for error in exc_info.value.errors()}
        assert locs == {("name",), ("address",)}

    @pytest.mark.unit
    def test_future_year_rejected(self):
        """yearBuilt cannot be in the future."""
        with pytest.raises(ValidationError) as exc_info:
            PROPERTY_SCHEMA.model.model_validate(
                {"name": "A", "address": "B", "yearBuilt": dt.date.today().year + 1}
            )
        assert _messages(exc_info.value) == ["Year built cannot be in the future"]

    @pytest.mark.unit
    def test_current_year_allowed(self):
        """The current year is the upper bound."""
        PROPERTY_SCHEMA.model.model_validate(
            {"name": "A", "address": "B", "yearBuilt": dt.date.today().year}
        )

    @pytest.mark.unit
    def test_fractional_bathrooms(self):
        """Bathrooms may be fractional; bedrooms may not."""
        PROPERTY_SCHEMA.model.model_validate(
            {"name": "A", "address": "B", "bathrooms": 2.5}
        )
        with pytest.raises(ValidationError):
            PROPERTY_SCHEMA.model.model_validate(
                {"name": "A", "address": "B", "bedrooms": 2.5}
            )

    @pytest.mark.unit
    def test_reports_every_failing_bound(self):
        """One message per violated bound."""
        with pytest.raises(ValidationError) as exc_info:
            PROPERTY_SCHEMA.model.model_validate(
                {"name": "A", "address": "B", "stories": 11, "garages": -1}
            )
        assert sorted(_messages(exc_info.value)) == [
            "Garages cannot be negative",
            "Stories seems unreasonably high",
        ]


class TestMaintenanceLogSchema:
    """Tests for the maintenance log schema."""

    @pytest.mark.unit
    def test_minimal_log(self):
        """Only the name is required."""
        MAINTENANCE_LOG_SCHEMA.model.model_validate({"name": "Filter change"})

    @pytest.mark.unit
    def test_date_format(self):
        """dateCompleted must be an ISO date."""
        MAINTENANCE_LOG_SCHEMA.model.model_validate(
            {"name": "Filter change", "dateCompleted": "2024-03-01"}
        )
        with pytest.raises(ValidationError):
            MAINTENANCE_LOG_SCHEMA.model.model_validate(
                {"name": "Filter change", "dateCompleted": "March 1st"}
            )

    @pytest.mark.unit
    def test_service_type_vocabulary(self):
        """serviceType is limited to the known kinds."""
        with pytest.raises(ValidationError):
            MAINTENANCE_LOG_SCHEMA.model.model_validate(
                {"name": "Fix", "serviceType": "magic"}
            )
