"""Validation pipeline for maintainables, properties and maintenance logs.

Validation never raises for bad input data. Every entry point returns a
`ValidationResult` holding either the validated data or every error message
grouped by dotted field path.

Maintainables are validated in two phases: `validate_base` checks the shared
shape and treats ``metadata`` as opaque JSON, then `validate_typed` resolves
the subtype schema and checks everything, metadata included.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Annotated, Any, Generic, Literal, TypeVar, get_args, get_origin

from pydantic import BaseModel, ValidationError

from homekeep.registry import MaintainableRegistry, get_registry
from homekeep.schema import (
    MAINTAINABLE_DATA_SCHEMA,
    MAINTAINABLE_RECORD_SCHEMA,
    MAINTENANCE_LOG_SCHEMA,
    PARTIAL_PROPERTY_SCHEMA,
    PROPERTY_SCHEMA,
    MaintainableType,
    ObjectSchema,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class ValidationResult(Generic[T]):
    """Outcome of a validation run.

    Attributes:
        success: Whether the input is valid.
        data: Validated data (JSON-compatible, unknown keys dropped) on
            success, None otherwise.
        errors: Messages per dotted field path on failure. The root object
            is keyed as ``""``.
    """

    success: bool
    data: T | None = None
    errors: dict[str, list[str]] = field(default_factory=dict)

    @classmethod
    def ok(cls, data: T) -> "ValidationResult[T]":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, errors: Mapping[str, list[str]]) -> "ValidationResult[T]":
        return cls(success=False, errors={key: list(msgs) for key, msgs in errors.items()})

    def __bool__(self) -> bool:
        return self.success

    def to_dict(self) -> dict[str, Any]:
        """Convert to the ``{success, data}`` / ``{success, errors}`` wire shape."""
        if self.success:
            return {"success": True, "data": self.data}
        return {"success": False, "errors": self.errors}


# === ERROR FORMATTING ===

_EXPECTED_BY_ERROR_TYPE = {
    "string_type": "string",
    "int_type": "integer",
    "float_type": "number",
    "bool_type": "boolean",
    "list_type": "array",
    "dict_type": "object",
    "model_type": "object",
    "model_attributes_type": "object",
}


def describe_kind(value: Any) -> str:
    """Name the JSON kind of a received value."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, Mapping):
        return "object"
    return type(value).__name__


def _field_annotation(model: type[BaseModel], loc: tuple[Any, ...]) -> Any:
    """Walk ``loc`` through a model and return the annotation it points at."""
    current: Any = model
    for part in loc:
        if get_origin(current) is Annotated:
            current = get_args(current)[0]
        if isinstance(current, type) and issubclass(current, BaseModel):
            field_info = current.model_fields.get(part) if isinstance(part, str) else None
            if field_info is None:
                return None
            current = field_info.annotation
        elif get_origin(current) is list and isinstance(part, int):
            current = get_args(current)[0]
        else:
            return None
    if get_origin(current) is Annotated:
        current = get_args(current)[0]
    return current


def _options(annotation: Any) -> str | None:
    if get_origin(annotation) is not Literal:
        return None
    return "|".join(repr(option) for option in get_args(annotation))


def _annotation_kind(annotation: Any) -> str | None:
    if annotation is bool:
        return "boolean"
    if annotation is int:
        return "integer"
    if annotation is float:
        return "number"
    if annotation is str:
        return "string"
    if get_origin(annotation) is list:
        return "array"
    if get_origin(annotation) is dict or (
        isinstance(annotation, type) and issubclass(annotation, BaseModel)
    ):
        return "object"
    return None


def _format_error(error: Mapping[str, Any], model: type[BaseModel]) -> str:
    error_type = error["type"]
    received = describe_kind(error.get("input"))

    if error_type == "missing":
        annotation = _field_annotation(model, tuple(error["loc"]))
        options = _options(annotation)
        if options:
            return f"Invalid option: expected one of {options}, received undefined"
        kind = _annotation_kind(annotation)
        if kind:
            return f"Invalid input: expected {kind}, received undefined"
        return "Required"

    if error_type == "literal_error":
        options = _options(_field_annotation(model, tuple(error["loc"])))
        if options is None:
            options = str(error.get("ctx", {}).get("expected", ""))
        return f"Invalid option: expected one of {options}, received {received}"

    if error_type in _EXPECTED_BY_ERROR_TYPE:
        expected = _EXPECTED_BY_ERROR_TYPE[error_type]
        return f"Invalid input: expected {expected}, received {received}"

    return error["msg"]


def collect_errors(exc: ValidationError, model: type[BaseModel]) -> dict[str, list[str]]:
    """Group every error of a pydantic failure by dotted field path.

    Messages for the same path are appended in the order pydantic reports
    them, never overwritten.

    Args:
        exc: The raised validation error.
        model: Model that produced ``exc``, used to describe missing fields.

    Returns:
        Mapping of dotted path (``"metadata.purchasePrice"``, ``"tags.0"``,
        ``""`` for the root) to messages.
    """
    grouped: dict[str, list[str]] = {}
    for error in exc.errors():
        path = ".".join(str(part) for part in error["loc"])
        grouped.setdefault(path, []).append(_format_error(error, model))
    return grouped


# === GENERIC ===


def validate_schema(data: Any, schema: ObjectSchema) -> ValidationResult[dict[str, Any]]:
    """Validate ``data`` against any object schema.

    Args:
        data: Untrusted input, typically parsed JSON.
        schema: Schema to validate against.

    Returns:
        ValidationResult: Data holds only the supplied, known keys.

    Example:
        >>> result = validate_schema({"name": "Cabin", "address": "1 Lake Rd"}, PROPERTY_SCHEMA)
        >>> result.success
        True
    """
    model = schema.model
    try:
        instance = model.model_validate(data)
    except ValidationError as exc:
        return ValidationResult.fail(collect_errors(exc, model))
    return ValidationResult.ok(instance.model_dump(mode="json", exclude_unset=True))


# === MAINTAINABLES ===


def validate_base(data: Any) -> ValidationResult[dict[str, Any]]:
    """Validate the shared maintainable shape; ``metadata`` stays opaque."""
    return validate_schema(data, MAINTAINABLE_DATA_SCHEMA)


def validate_typed(
    data: Any,
    subtype: str | None = None,
    registry: MaintainableRegistry | None = None,
) -> ValidationResult[dict[str, Any]]:
    """Validate a maintainable against its subtype schema.

    Args:
        data: Untrusted input.
        subtype: Subtype to validate as. Defaults to ``data["subtype"]``.
        registry: Registry to resolve from; defaults to the process-wide one.

    Returns:
        ValidationResult: An unknown or missing subtype fails under the
        ``"subtype"`` key instead of raising.
    """
    if subtype is None:
        subtype = data.get("subtype") if isinstance(data, Mapping) else None
    if not isinstance(subtype, str) or not subtype:
        return ValidationResult.fail({"subtype": ["Subtype is required"]})

    registry = registry if registry is not None else get_registry()
    entry = registry.get(subtype)
    if entry is None:
        logger.debug(f"Typed validation requested for unknown subtype '{subtype}'")
        return ValidationResult.fail({"subtype": [f"Unknown subtype: {subtype}"]})
    return validate_schema(data, entry.schema)


def is_valid_base(data: Any) -> bool:
    """Check whether ``data`` passes base validation."""
    return validate_base(data).success


def is_valid_typed(
    data: Any,
    subtype: str | None = None,
    registry: MaintainableRegistry | None = None,
) -> bool:
    """Check whether ``data`` passes typed validation."""
    return validate_typed(data, subtype, registry).success


def validate_record(data: Any) -> ValidationResult[dict[str, Any]]:
    """Validate a persisted maintainable row (``id``, ``data``, timestamps...)."""
    return validate_schema(data, MAINTAINABLE_RECORD_SCHEMA)


def is_valid_record(data: Any) -> bool:
    return validate_record(data).success


def is_valid_maintainable_type(value: Any) -> bool:
    """Check whether ``value`` is a known maintainable type."""
    return isinstance(value, str) and value in {t.value for t in MaintainableType}


def is_valid_maintainable_subtype(
    value: Any, registry: MaintainableRegistry | None = None
) -> bool:
    """Check whether ``value`` is a registered subtype."""
    registry = registry if registry is not None else get_registry()
    return isinstance(value, str) and value in registry


# === PROPERTIES ===


def validate_property_data(data: Any) -> ValidationResult[dict[str, Any]]:
    return validate_schema(data, PROPERTY_SCHEMA)


def validate_partial_property_data(data: Any) -> ValidationResult[dict[str, Any]]:
    """Validate a property update where every field is optional."""
    return validate_schema(data, PARTIAL_PROPERTY_SCHEMA)


def is_valid_property_data(data: Any) -> bool:
    return validate_property_data(data).success


# === MAINTENANCE LOGS ===


def validate_maintenance_log(data: Any) -> ValidationResult[dict[str, Any]]:
    return validate_schema(data, MAINTENANCE_LOG_SCHEMA)


def is_valid_maintenance_log(data: Any) -> bool:
    return validate_maintenance_log(data).success


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
