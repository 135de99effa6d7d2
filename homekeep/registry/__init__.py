"""Registry module - catalog of maintainable subtypes.

Example usage:
    >>> from homekeep.registry import get_registry
    >>> registry = get_registry()
    >>> "heat" in registry
    True
    >>> registry.resolve("heat").name
    'HeatMaintainableData'
"""

from .lib import (
    EntryLoader,
    MaintainableRegistry,
    UnknownSubtypeError,
    get_registry,
    list_type_names,
    load_builtin_entries,
)

__all__ = [
    "UnknownSubtypeError",
    "MaintainableRegistry",
    "EntryLoader",
    "get_registry",
    "list_type_names",
    "load_builtin_entries",
]
