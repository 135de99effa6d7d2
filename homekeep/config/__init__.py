"""Centralized configuration management for homekeep.

Provides unified access to all configuration via the `get_environment()` function.

Example:
    >>> from homekeep.config import EnvVar, get_environment
    >>>
    >>> level = get_environment(EnvVar.HOMEKEEP_LOG_LEVEL)  # Returns str: "INFO"
    >>> modules = get_subtype_modules()  # Returns list[str]

Environment Variable Categories:
    logging: Log level
    registry: Extra subtype modules loaded at registry initialisation
    cli: Output formatting for `python -m homekeep`
"""

from .lib import (
    # Core types
    EnvConfig,
    EnvVar,
    # Main interface
    get_environment,
    get_environment_info,
    get_subtype_modules,
    # Introspection
    list_environment_variables,
)

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
