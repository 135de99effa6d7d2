"""Dishwasher subtype."""

from pydantic import StrictStr

from homekeep.schema import (
    MAINTAINABLE_METADATA_BASE_SCHEMA,
    MaintainableType,
    SubtypeSchemaEntry,
    field,
)

DISHWASHER_METADATA_SCHEMA = MAINTAINABLE_METADATA_BASE_SCHEMA.extend(
    "DishwasherMetadata",
    brand=field(StrictStr, default=None),
)

ENTRY = SubtypeSchemaEntry(
    type=MaintainableType.APPLIANCE,
    subtype="dishwasher",
    metadata_schema=DISHWASHER_METADATA_SCHEMA,
)
