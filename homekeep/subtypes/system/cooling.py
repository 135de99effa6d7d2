"""Cooling system subtype."""

from pydantic import StrictFloat, StrictStr

from homekeep.schema import (
    MAINTAINABLE_METADATA_BASE_SCHEMA,
    MaintainableType,
    SubtypeSchemaEntry,
    field,
    greater_than,
)

COOLING_METADATA_SCHEMA = MAINTAINABLE_METADATA_BASE_SCHEMA.extend(
    "CoolingMetadata",
    brand=field(StrictStr, default=None),
    seer=field(
        StrictFloat,
        greater_than(0, "SEER rating must be positive"),
        default=None,
        description="Seasonal energy efficiency ratio",
    ),
    tonnage=field(
        StrictFloat, greater_than(0, "Tonnage must be positive"), default=None
    ),
    refrigerant=field(StrictStr, default=None, description="e.g. 'R-410A'"),
)

ENTRY = SubtypeSchemaEntry(
    type=MaintainableType.SYSTEM,
    subtype="cooling",
    metadata_schema=COOLING_METADATA_SCHEMA,
)
