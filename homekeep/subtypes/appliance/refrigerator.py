"""Refrigerator subtype."""

from pydantic import StrictBool, StrictFloat, StrictStr

from homekeep.schema import (
    MAINTAINABLE_METADATA_BASE_SCHEMA,
    MaintainableType,
    SubtypeSchemaEntry,
    choice,
    field,
    greater_than,
)

REFRIGERATOR_STYLES = ("top-freezer", "bottom-freezer", "side-by-side", "french-door")

REFRIGERATOR_METADATA_SCHEMA = MAINTAINABLE_METADATA_BASE_SCHEMA.extend(
    "RefrigeratorMetadata",
    brand=field(StrictStr, default=None),
    capacity=field(
        StrictFloat,
        greater_than(0, "Capacity must be positive"),
        default=None,
        description="In cubic feet",
    ),
    style=field(choice(REFRIGERATOR_STYLES), default=None),
    hasIceMaker=field(StrictBool, default=None),
    energyRating=field(StrictStr, default=None, description="e.g. 'Energy Star'"),
)

ENTRY = SubtypeSchemaEntry(
    type=MaintainableType.APPLIANCE,
    subtype="refrigerator",
    metadata_schema=REFRIGERATOR_METADATA_SCHEMA,
)
