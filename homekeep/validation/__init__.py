"""Validation module - never-raising validation of untrusted input.

Example usage:
    >>> from homekeep.validation import validate_typed
    >>> result = validate_typed({"type": "appliance", "subtype": "dishwasher"})
    >>> result.success
    True
    >>> validate_typed({"type": "appliance", "subtype": "toaster"}).errors
    {'subtype': ['Unknown subtype: toaster']}
"""

from .lib import (
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
    validate_schema,
    validate_typed,
)

__all__ = [
    "ValidationResult",
    "collect_errors",
    "describe_kind",
    "validate_schema",
    # Maintainables
    "validate_base",
    "validate_typed",
    "is_valid_base",
    "is_valid_typed",
    "validate_record",
    "is_valid_record",
    "is_valid_maintainable_type",
    "is_valid_maintainable_subtype",
    # Properties
    "validate_property_data",
    "validate_partial_property_data",
    "is_valid_property_data",
    # Maintenance logs
    "validate_maintenance_log",
    "is_valid_maintenance_log",
]
