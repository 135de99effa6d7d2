"""Schema module - authoritative source for homekeep data contracts.

This module provides:
- Controlled vocabularies (maintainable types, conditions, home types)
- Field definitions with human-readable constraint messages
- The `ObjectSchema` composition layer used by every subtype
- Base maintainable, property, maintenance log and record schemas

Example usage:
    >>> from homekeep.schema import MAINTAINABLE_DATA_SCHEMA, field
    >>> from pydantic import StrictStr
    >>> lamp = MAINTAINABLE_DATA_SCHEMA.extend("Lamp", bulb=field(StrictStr))
    >>> sorted(lamp.shape)[:2]
    ['bulb', 'condition']
"""

from .lib import (
    MAINTAINABLE_DATA_SCHEMA,
    MAINTAINABLE_METADATA_BASE_SCHEMA,
    MAINTAINABLE_RECORD_SCHEMA,
    MAINTENANCE_LOG_SCHEMA,
    MAX_LOT_SIZE,
    MAX_SQUARE_FOOTAGE,
    PARTIAL_PROPERTY_SCHEMA,
    PROPERTY_SCHEMA,
    Condition,
    HomeType,
    MaintainableData,
    MaintainableType,
    MaintenanceLogData,
    ObjectSchema,
    PropertyData,
    ServiceType,
    SubtypeSchemaEntry,
    at_least,
    at_most,
    choice,
    field,
    greater_than,
    iso_date,
    max_chars,
    max_items,
    min_chars,
    not_after_current_year,
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
