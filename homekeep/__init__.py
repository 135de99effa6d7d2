"""homekeep - schema registry, validation and onboarding for home maintenance data.

Example usage:
    >>> from homekeep import get_registry, validate_typed
    >>> result = validate_typed({"type": "system", "subtype": "heat"})
    >>> result.success
    True
"""

from homekeep.onboarding import (
    OnboardingFlow,
    OnboardingMetadata,
    extract_questions,
    get_onboarding,
    with_onboarding,
)
from homekeep.registry import MaintainableRegistry, UnknownSubtypeError, get_registry
from homekeep.schema import (
    MAINTAINABLE_DATA_SCHEMA,
    MaintainableData,
    MaintainableType,
    ObjectSchema,
    SubtypeSchemaEntry,
    field,
)
from homekeep.validation import (
    ValidationResult,
    is_valid_base,
    is_valid_typed,
    validate_base,
    validate_typed,
)

__version__ = "0.1.0"

__all__ = [
    # Schema
    "MAINTAINABLE_DATA_SCHEMA",
    "MaintainableData",
    "MaintainableType",
    "ObjectSchema",
    "SubtypeSchemaEntry",
    "field",
    # Registry
    "MaintainableRegistry",
    "UnknownSubtypeError",
    "get_registry",
    # Validation
    "ValidationResult",
    "validate_base",
    "validate_typed",
    "is_valid_base",
    "is_valid_typed",
    # Onboarding
    "OnboardingFlow",
    "OnboardingMetadata",
    "extract_questions",
    "get_onboarding",
    "with_onboarding",
]
