"""Foundation subtype."""

from pydantic import StrictBool

from homekeep.schema import (
    MAINTAINABLE_METADATA_BASE_SCHEMA,
    MaintainableType,
    SubtypeSchemaEntry,
    choice,
    field,
)

FOUNDATION_MATERIALS = ("poured-concrete", "concrete-block", "stone", "brick", "wood", "other")

FOUNDATION_METADATA_SCHEMA = MAINTAINABLE_METADATA_BASE_SCHEMA.extend(
    "FoundationMetadata",
    material=field(choice(FOUNDATION_MATERIALS), default=None),
    hasBasement=field(StrictBool, default=None),
)

ENTRY = SubtypeSchemaEntry(
    type=MaintainableType.STRUCTURE,
    subtype="foundation",
    metadata_schema=FOUNDATION_METADATA_SCHEMA,
)
