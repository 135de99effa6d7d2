"""Washing machine subtype."""

from pydantic import StrictFloat, StrictStr

from homekeep.schema import (
    MAINTAINABLE_METADATA_BASE_SCHEMA,
    MaintainableType,
    SubtypeSchemaEntry,
    choice,
    field,
    greater_than,
)

WASHING_MACHINE_METADATA_SCHEMA = MAINTAINABLE_METADATA_BASE_SCHEMA.extend(
    "WashingMachineMetadata",
    brand=field(StrictStr, default=None),
    loadType=field(choice(["front-load", "top-load"]), default=None),
    capacity=field(
        StrictFloat,
        greater_than(0, "Capacity must be positive"),
        default=None,
        description="Drum capacity in cubic feet",
    ),
)

ENTRY = SubtypeSchemaEntry(
    type=MaintainableType.APPLIANCE,
    subtype="washing-machine",
    metadata_schema=WASHING_MACHINE_METADATA_SCHEMA,
)
