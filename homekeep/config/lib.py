"""Centralized environment configuration management for homekeep.

Provides a unified interface for all environment variables with:
- Single `get_environment()` function for all configuration
- Type-safe enum with metadata (default, type, description)
- Consistent resolution: override > environment > default

Example:
    >>> from homekeep.config import EnvVar, get_environment
    >>>
    >>> level = get_environment(EnvVar.HOMEKEEP_LOG_LEVEL)  # Returns str
    >>> indent = get_environment(EnvVar.HOMEKEEP_JSON_INDENT)  # Returns int
    >>>
    >>> # Override at runtime
    >>> indent = get_environment(EnvVar.HOMEKEEP_JSON_INDENT, override=4)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from typing import Any, overload

# =============================================================================
# Environment Variable Configuration
# =============================================================================


@dataclass(frozen=True)
class EnvConfig:
    """Metadata for an environment variable.

    Attributes:
        name: Environment variable name (e.g., "HOMEKEEP_LOG_LEVEL").
        default: Default value if not set in environment.
        var_type: Python type for value conversion (str or int).
        description: Human-readable description.
        category: Grouping category for documentation.
    """

    name: str
    default: Any
    var_type: type
    description: str = ""
    category: str = "general"


class EnvVar(Enum):
    """All environment variables used by homekeep.

    Each member contains an EnvConfig with name, default, type, and description.
    Use with `get_environment()` for type-safe access.

    Categories:
        - logging: Log output configuration
        - registry: Subtype registry loading
        - cli: Command line output
    """

    # -------------------------------------------------------------------------
    # Logging
    # -------------------------------------------------------------------------
    HOMEKEEP_LOG_LEVEL = EnvConfig(
        name="HOMEKEEP_LOG_LEVEL",
        default="INFO",
        var_type=str,
        description="Log level name (DEBUG, INFO, WARNING, ERROR)",
        category="logging",
    )

    # -------------------------------------------------------------------------
    # Registry
    # -------------------------------------------------------------------------
    HOMEKEEP_SUBTYPE_MODULES = EnvConfig(
        name="HOMEKEEP_SUBTYPE_MODULES",
        default=None,
        var_type=str,
        description=(
            "Comma-separated dotted paths of extra subtype modules "
            "(each exposing ENTRY or ENTRIES)"
        ),
        category="registry",
    )

    # -------------------------------------------------------------------------
    # CLI
    # -------------------------------------------------------------------------
    HOMEKEEP_JSON_INDENT = EnvConfig(
        name="HOMEKEEP_JSON_INDENT",
        default=2,
        var_type=int,
        description="Indentation used for JSON printed by the CLI",
        category="cli",
    )


# =============================================================================
# Type Conversion Helpers
# =============================================================================


def _convert_value(value: str | None, var_type: type, default: Any) -> Any:
    """Convert string value to target type.

    Args:
        value: Raw string value from environment (or None).
        var_type: Target Python type.
        default: Default value if conversion fails or value is None.

    Returns:
        Converted value or default.
    """
    if value is None:
        return default

    if var_type is str:
        return value

    if var_type is int:
        try:
            return int(value)
        except ValueError:
            return default

    # Unknown type, return as-is
    return value


# =============================================================================
# Main Interface
# =============================================================================


@overload
def get_environment(env_var: EnvVar, override: int) -> int: ...
@overload
def get_environment(env_var: EnvVar, override: str) -> str: ...
@overload
def get_environment(env_var: EnvVar, override: None = None) -> Any: ...


def get_environment(env_var: EnvVar, override: Any = None) -> Any:
    """Get environment variable value with type conversion.

    Resolution priority:
        1. Explicit override parameter (highest)
        2. Environment variable value
        3. Default from EnvConfig (lowest)

    Args:
        env_var: Environment variable enum member.
        override: Optional override value (bypasses env lookup).

    Returns:
        Value converted to the appropriate type (str or int).

    Example:
        >>> get_environment(EnvVar.HOMEKEEP_JSON_INDENT)
        2
        >>> get_environment(EnvVar.HOMEKEEP_JSON_INDENT, override=4)
        4
    """
    config: EnvConfig = env_var.value

    if override is not None:
        return override

    raw_value = os.environ.get(config.name)
    return _convert_value(raw_value, config.var_type, config.default)


def get_environment_info(env_var: EnvVar) -> EnvConfig:
    """Get metadata for an environment variable.

    Args:
        env_var: Environment variable enum member.

    Returns:
        EnvConfig with name, default, type, and description.
    """
    return env_var.value


# =============================================================================
# Convenience Functions
# =============================================================================


def get_subtype_modules(override: str | None = None) -> list[str]:
    """Get the extra subtype module paths to load into the registry.

    Resolution: override > HOMEKEEP_SUBTYPE_MODULES > no extra modules.

    Returns:
        Dotted module paths, stripped, empty entries removed.
    """
    raw = get_environment(EnvVar.HOMEKEEP_SUBTYPE_MODULES, override=override)
    if not raw:
        return []
    return [part.strip() for part in raw.split(",") if part.strip()]


def list_environment_variables(category: str | None = None) -> list[EnvVar]:
    """List all environment variables, optionally filtered by category.

    Args:
        category: Filter by category (logging, registry, cli).
                 None returns all variables.

    Returns:
        List of EnvVar enum members.
    """
    if category is None:
        return list(EnvVar)

    return [var for var in EnvVar if var.value.category == category]


__all__ = [
    # Core types
    "EnvConfig",
    "EnvVar",
    # Main interface
    "get_environment",
    "get_environment_info",
    # Convenience functions
    "get_subtype_modules",
    # Introspection
    "list_environment_variables",
]
