"""Roof subtype."""

from pydantic import StrictStr

from homekeep.schema import (
    MAINTAINABLE_METADATA_BASE_SCHEMA,
    MaintainableType,
    SubtypeSchemaEntry,
    field,
)

ROOF_METADATA_SCHEMA = MAINTAINABLE_METADATA_BASE_SCHEMA.extend(
    "RoofMetadata",
    material=field(StrictStr, default=None, description="e.g. 'asphalt shingle'"),
)

ENTRY = SubtypeSchemaEntry(
    type=MaintainableType.STRUCTURE,
    subtype="roof",
    metadata_schema=ROOF_METADATA_SCHEMA,
)
