"""Authoritative Schema Module for maintainable items, properties and logs.

This module is the single source of truth for the structural contracts in
homekeep. It provides:
- Controlled vocabularies (maintainable types, conditions, home types)
- Field definitions with human-readable constraint messages
- A small composition layer (`ObjectSchema`) that keeps field definitions
  by identity while compiling them to pydantic models for validation
- The base maintainable schema every subtype extends
- Property, maintenance log and persisted-record schemas

Field definitions are pydantic `FieldInfo` objects. `ObjectSchema.extend()`
reuses them by identity, so anything keyed by a definition (for example
onboarding annotations) stays reachable from every schema built on top of it.
"""

import datetime as dt
import re
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from dataclasses import field as dataclass_field
from enum import Enum
from functools import cached_property
from types import MappingProxyType
from typing import Annotated, Any, Literal, TypedDict

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    JsonValue,
    StrictFloat,
    StrictInt,
    StrictStr,
    create_model,
)
from pydantic.fields import FieldInfo
from pydantic_core import PydanticCustomError, PydanticUndefined

# === VOCABULARIES ===


class MaintainableType(str, Enum):
    """Top-level maintainable categories."""

    APPLIANCE = "appliance"
    STRUCTURE = "structure"
    UTILITY = "utility"
    SYSTEM = "system"
    VEHICLE = "vehicle"
    INSTRUMENT = "instrument"
    LANDSCAPE = "landscape"
    OTHER = "other"


class Condition(str, Enum):
    """Condition rating shared by every maintainable."""

    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"
    CRITICAL = "critical"


class HomeType(str, Enum):
    """Kinds of residential property."""

    SINGLE_FAMILY = "single-family"
    TOWNHOUSE = "townhouse"
    CONDO = "condo"
    APARTMENT = "apartment"
    OTHER = "other"


class ServiceType(str, Enum):
    """Kinds of maintenance work recorded in a log entry."""

    ROUTINE_MAINTENANCE = "routine-maintenance"
    REPAIR = "repair"
    REPLACEMENT = "replacement"
    INSPECTION = "inspection"
    CLEANING = "cleaning"
    EMERGENCY = "emergency"


def choice(options: type[Enum] | Iterable[str]) -> Any:
    """Build a ``Literal`` annotation from an enum or a list of values.

    Args:
        options: Enum class (its values are used) or iterable of strings.

    Returns:
        ``Literal[...]`` over the option values.
    """
    if isinstance(options, type) and issubclass(options, Enum):
        values = tuple(member.value for member in options)
    else:
        values = tuple(options)
    if not values:
        raise ValueError("choice() needs at least one option")
    return Literal[values]


# === CONSTRAINTS ===


def _check(
    predicate: Callable[[Any], bool], error_type: str, message: str
) -> AfterValidator:
    """Wrap a predicate as a validator raising a custom error."""

    def validate(value: Any) -> Any:
        if not predicate(value):
            raise PydanticCustomError(error_type, message)
        return value

    return AfterValidator(validate)


def max_chars(limit: int, message: str | None = None) -> AfterValidator:
    """String length must be at most ``limit``."""
    return _check(
        lambda value: len(value) <= limit,
        "too_long",
        message or f"Must be at most {limit} characters",
    )


def min_chars(limit: int, message: str | None = None) -> AfterValidator:
    """String length must be at least ``limit``."""
    return _check(
        lambda value: len(value) >= limit,
        "too_short",
        message or f"Must be at least {limit} characters",
    )


def at_least(bound: float, message: str | None = None) -> AfterValidator:
    """Number must be ``>= bound``."""
    return _check(
        lambda value: value >= bound,
        "too_small",
        message or f"Must be at least {bound}",
    )


def at_most(bound: float, message: str | None = None) -> AfterValidator:
    """Number must be ``<= bound``."""
    return _check(
        lambda value: value <= bound,
        "too_big",
        message or f"Must be at most {bound}",
    )


def greater_than(bound: float, message: str | None = None) -> AfterValidator:
    """Number must be ``> bound``."""
    return _check(
        lambda value: value > bound,
        "too_small",
        message or f"Must be greater than {bound}",
    )


def max_items(limit: int, message: str | None = None) -> AfterValidator:
    """List must hold at most ``limit`` items."""
    return _check(
        lambda value: len(value) <= limit,
        "too_big",
        message or f"Must contain at most {limit} items",
    )


def not_after_current_year(message: str) -> AfterValidator:
    """Year must not be later than the current calendar year."""
    return _check(
        lambda value: value <= dt.date.today().year, "too_big", message
    )


def _is_iso_date(value: str) -> bool:
    try:
        dt.date.fromisoformat(value)
    except ValueError:
        return False
    return True


def iso_date(message: str = "Must be a date in YYYY-MM-DD format") -> AfterValidator:
    """String must parse as an ISO calendar date."""
    return _check(_is_iso_date, "invalid_date", message)


# === FIELD DEFINITIONS ===


def field(
    annotation: Any,
    *checks: AfterValidator,
    default: Any = PydanticUndefined,
    **field_kwargs: Any,
) -> FieldInfo:
    """Create a single field definition.

    The returned ``FieldInfo`` carries its annotation and any checks, and is
    a distinct object on every call, so it can be used as an identity key.

    Args:
        annotation: Field type, e.g. ``StrictStr`` or ``choice(Condition)``.
        *checks: Constraint validators applied after the type check.
        default: Default value; omit for a required field. Defaults are not
            validated, so ``default=None`` makes a field optional without
            accepting an explicit ``null``.
        **field_kwargs: Extra ``pydantic.Field`` arguments (description...).

    Returns:
        The field definition.
    """
    if checks:
        annotation = Annotated[(annotation, *checks)]
    return FieldInfo.from_annotated_attribute(annotation, Field(default, **field_kwargs))


def _optional_copy(definition: FieldInfo) -> FieldInfo:
    """Rebuild a field definition with a ``None`` default."""
    annotation = definition.annotation
    if definition.metadata:
        annotation = Annotated[(annotation, *definition.metadata)]
    return FieldInfo.from_annotated_attribute(
        annotation, Field(None, description=definition.description)
    )


_MODEL_CONFIG = ConfigDict(extra="ignore")


class ObjectSchema:
    """An object schema composed of named field definitions.

    Values in ``fields`` are either ``FieldInfo`` definitions (see
    `field()`) or nested ``ObjectSchema`` instances. Nested objects are
    optional: absent is fine, ``null`` is not.

    Example:
        >>> base = ObjectSchema("Thing", {"name": field(StrictStr)})
        >>> lamp = base.extend("Lamp", watts=field(StrictFloat, default=None))
        >>> lamp.shape["name"] is base.shape["name"]
        True
    """

    def __init__(
        self,
        name: str,
        fields: Mapping[str, "FieldInfo | ObjectSchema"] | None = None,
    ) -> None:
        self.name = name
        self._fields: dict[str, FieldInfo | ObjectSchema] = dict(fields or {})
        for key, definition in self._fields.items():
            if not isinstance(definition, (FieldInfo, ObjectSchema)):
                raise TypeError(
                    f"Field {key!r} of {name} must be a FieldInfo or ObjectSchema, "
                    f"got {type(definition).__name__}"
                )

    def __repr__(self) -> str:
        return f"ObjectSchema({self.name!r}, fields={list(self._fields)})"

    @property
    def shape(self) -> Mapping[str, "FieldInfo | ObjectSchema"]:
        """Read-only mapping of field name to definition, in declaration order."""
        return MappingProxyType(self._fields)

    def nested(self, name: str) -> "ObjectSchema | None":
        """Return the nested object schema stored under ``name``, if any."""
        definition = self._fields.get(name)
        return definition if isinstance(definition, ObjectSchema) else None

    def extend(
        self, name: str | None = None, /, **fields: "FieldInfo | ObjectSchema"
    ) -> "ObjectSchema":
        """Return a new schema with ``fields`` added or replaced.

        Existing definitions are shared with the new schema, replaced keys
        keep their position and new keys are appended.
        """
        return ObjectSchema(name or self.name, {**self._fields, **fields})

    def partial(self, name: str | None = None) -> "ObjectSchema":
        """Return a copy of this schema where every field is optional."""
        fields: dict[str, FieldInfo | ObjectSchema] = {}
        for key, definition in self._fields.items():
            if isinstance(definition, FieldInfo) and definition.is_required():
                definition = _optional_copy(definition)
            fields[key] = definition
        return ObjectSchema(name or f"Partial{self.name}", fields)

    @cached_property
    def model(self) -> type[BaseModel]:
        """Pydantic model compiled from the field definitions."""
        definitions: dict[str, Any] = {}
        for key, definition in self._fields.items():
            if isinstance(definition, ObjectSchema):
                definitions[key] = (definition.model, None)
            else:
                definitions[key] = (definition.annotation, definition)
        return create_model(self.name, __config__=_MODEL_CONFIG, **definitions)

    def json_schema(self) -> dict[str, Any]:
        """Export the JSON Schema of the compiled model."""
        return self.model.model_json_schema()


# === MAINTAINABLE SCHEMAS ===


class MaintainableData(TypedDict, total=False):
    """Validated shape of a maintainable item (the ``data`` column)."""

    label: str
    type: str
    subtype: str
    condition: str
    tags: list[str]
    location: str
    metadata: JsonValue


MAINTAINABLE_DATA_SCHEMA = ObjectSchema(
    "MaintainableData",
    {
        "label": field(
            StrictStr,
            max_chars(100, "Label must be less than 100 characters"),
            default=None,
            description="User-facing name, e.g. 'Upstairs Fridge'",
        ),
        "type": field(choice(MaintainableType), description="Broad category"),
        "subtype": field(
            StrictStr,
            min_chars(1, "Subtype is required"),
            description="Specific kind, e.g. 'refrigerator'",
        ),
        "condition": field(choice(Condition), default=None),
        "tags": field(
            list[
                Annotated[
                    StrictStr, max_chars(100, "Tag must be less than 100 characters")
                ]
            ],
            default=None,
        ),
        "location": field(
            StrictStr,
            max_chars(100, "Location must be less than 100 characters"),
            default=None,
            description="e.g. 'basement', 'garage left wall'",
        ),
        "metadata": field(
            JsonValue,
            default=None,
            description="Subtype specific details; any JSON value at this level",
        ),
    },
)

MAINTAINABLE_METADATA_BASE_SCHEMA = ObjectSchema(
    "MaintainableMetadata",
    {
        "installDate": field(StrictStr, default=None),
        "serialNumber": field(StrictStr, default=None),
        "model": field(StrictStr, default=None),
        "manufacturer": field(StrictStr, default=None),
        "purchasePrice": field(
            StrictFloat,
            at_least(0, "Purchase price cannot be negative"),
            default=None,
        ),
        "warrantyExpiration": field(StrictStr, default=None),
        "expectedLifespan": field(
            StrictFloat,
            at_least(0, "Expected lifespan cannot be negative"),
            default=None,
            description="In years",
        ),
        "notes": field(
            StrictStr,
            max_chars(1000, "Notes must be less than 1000 characters"),
            default=None,
        ),
    },
)


def _schema_name(subtype: str) -> str:
    words = re.split(r"[-_\s]+", subtype)
    return "".join(word.capitalize() for word in words if word) + "MaintainableData"


@dataclass(frozen=True, eq=False)
class SubtypeSchemaEntry:
    """Registry record for one maintainable subtype.

    Attributes:
        type: Owning top-level category.
        subtype: Literal discriminator, unique within a registry.
        metadata_schema: Legal shape of ``metadata`` for this subtype.
        fields: Top-level definitions replacing the defaults in the full
            schema (used to annotate ``condition``, ``location``...).
        label: Default display label for new items of this subtype.
    """

    type: MaintainableType
    subtype: str
    metadata_schema: ObjectSchema
    fields: Mapping[str, FieldInfo | ObjectSchema] = dataclass_field(
        default_factory=dict
    )
    label: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "type", MaintainableType(self.type))
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    @cached_property
    def schema(self) -> ObjectSchema:
        """Full schema: base fields with ``type``/``subtype`` locked.

        Definitions in ``fields`` take precedence, so an entry may replace
        ``subtype`` (or ``type``) with an annotated definition of its own.
        """
        overrides: dict[str, FieldInfo | ObjectSchema] = {
            "type": field(Literal[self.type.value], description="Broad category"),
            "subtype": field(Literal[self.subtype]),
            "metadata": self.metadata_schema,
            **self.fields,
        }
        return MAINTAINABLE_DATA_SCHEMA.extend(_schema_name(self.subtype), **overrides)


MAINTAINABLE_RECORD_SCHEMA = ObjectSchema(
    "Maintainable",
    {
        "id": field(StrictStr, min_chars(1, "Id is required")),
        "property_id": field(StrictStr, min_chars(1, "Property id is required")),
        "data": field(MAINTAINABLE_DATA_SCHEMA.model),
        "created_at": field(StrictStr),
        "updated_at": field(StrictStr),
    },
)


# === PROPERTY SCHEMA ===


class PropertyData(TypedDict, total=False):
    """Validated shape of a property."""

    name: str
    address: str
    yearBuilt: int
    squareFootage: float
    lotSize: float
    homeType: str
    bedrooms: int
    bathrooms: float
    stories: int
    garages: int
    notes: str


MAX_SQUARE_FOOTAGE = 1_000_000
MAX_LOT_SIZE = 10_000_000

PROPERTY_SCHEMA = ObjectSchema(
    "PropertyData",
    {
        "name": field(
            StrictStr,
            min_chars(1, "Property name is required"),
            max_chars(100, "Property name must be less than 100 characters"),
        ),
        "address": field(
            StrictStr,
            min_chars(1, "Street address is required"),
            max_chars(200, "Street address must be less than 200 characters"),
        ),
        "yearBuilt": field(
            StrictInt,
            at_least(800, "Year built must be after 800"),
            not_after_current_year("Year built cannot be in the future"),
            default=None,
        ),
        "squareFootage": field(
            StrictFloat,
            greater_than(0, "Square footage must be greater than 0"),
            at_most(MAX_SQUARE_FOOTAGE, "Square footage seems unreasonably large"),
            default=None,
        ),
        "lotSize": field(
            StrictFloat,
            greater_than(0, "Lot size must be greater than 0"),
            at_most(MAX_LOT_SIZE, "Lot size seems unreasonably large"),
            default=None,
            description="In square feet",
        ),
        "homeType": field(choice(HomeType), default=None),
        "bedrooms": field(
            StrictInt,
            at_least(0, "Bedrooms cannot be negative"),
            at_most(50, "Bedrooms seems unreasonably high"),
            default=None,
        ),
        "bathrooms": field(
            StrictFloat,
            at_least(0, "Bathrooms cannot be negative"),
            at_most(50, "Bathrooms seems unreasonably high"),
            default=None,
        ),
        "stories": field(
            StrictInt,
            at_least(1, "Must have at least 1 story"),
            at_most(10, "Stories seems unreasonably high"),
            default=None,
        ),
        "garages": field(
            StrictInt,
            at_least(0, "Garages cannot be negative"),
            at_most(20, "Garages seems unreasonably high"),
            default=None,
        ),
        "notes": field(
            StrictStr,
            max_chars(1000, "Notes must be less than 1000 characters"),
            default=None,
        ),
    },
)

PARTIAL_PROPERTY_SCHEMA = PROPERTY_SCHEMA.partial()


# === MAINTENANCE LOG SCHEMA ===


class MaintenanceLogData(TypedDict, total=False):
    """Validated shape of a maintenance log entry."""

    name: str
    category: str
    serviceType: str
    description: str
    cost: float
    dateCompleted: str
    serviceProvider: str
    notes: str


MAINTENANCE_LOG_SCHEMA = ObjectSchema(
    "MaintenanceLogData",
    {
        "name": field(
            StrictStr,
            min_chars(1, "Name is required"),
            max_chars(100, "Name must be less than 100 characters"),
        ),
        "category": field(StrictStr, default=None),
        "serviceType": field(choice(ServiceType), default=None),
        "description": field(
            StrictStr,
            max_chars(1000, "Description must be less than 1000 characters"),
            default=None,
        ),
        "cost": field(
            StrictFloat, at_least(0, "Cost cannot be negative"), default=None
        ),
        "dateCompleted": field(
            StrictStr,
            iso_date("Date completed must be a date in YYYY-MM-DD format"),
            default=None,
        ),
        "serviceProvider": field(
            StrictStr,
            max_chars(100, "Service provider must be less than 100 characters"),
            default=None,
        ),
        "notes": field(
            StrictStr,
            max_chars(1000, "Notes must be less than 1000 characters"),
            default=None,
        ),
    },
)


__all__ = [
    # Vocabularies
    "MaintainableType",
    "Condition",
    "HomeType",
    "ServiceType",
    "choice",
    # Constraints
    "max_chars",
    "min_chars",
    "at_least",
    "at_most",
    "greater_than",
    "max_items",
    "not_after_current_year",
    "iso_date",
    # Composition
    "field",
    "ObjectSchema",
    # Maintainables
    "MaintainableData",
    "MAINTAINABLE_DATA_SCHEMA",
    "MAINTAINABLE_METADATA_BASE_SCHEMA",
    "MAINTAINABLE_RECORD_SCHEMA",
    "SubtypeSchemaEntry",
    # Properties
    "PropertyData",
    "PROPERTY_SCHEMA",
    "PARTIAL_PROPERTY_SCHEMA",
    "MAX_SQUARE_FOOTAGE",
    "MAX_LOT_SIZE",
    # Maintenance logs
    "MaintenanceLogData",
    "MAINTENANCE_LOG_SCHEMA",
]
