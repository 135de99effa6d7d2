"""Subtype registry for maintainable items.

The registry is the catalog of every known subtype. It is populated lazily:
nothing is imported or registered until the first public operation is used,
and population happens exactly once even under concurrent first use.

Extra subtype modules can be listed in ``HOMEKEEP_SUBTYPE_MODULES``; each
must expose ``ENTRY`` (a `SubtypeSchemaEntry`) or ``ENTRIES`` (a list).
"""

import importlib
import logging
import threading
from collections.abc import Callable, Iterable
from functools import lru_cache

from homekeep.config import get_subtype_modules
from homekeep.schema import MaintainableType, ObjectSchema, SubtypeSchemaEntry

logger = logging.getLogger(__name__)

EntryLoader = Callable[[], Iterable[SubtypeSchemaEntry]]


class UnknownSubtypeError(LookupError):
    """Raised when a subtype is not registered."""

    def __init__(self, subtype: str) -> None:
        self.subtype = subtype
        super().__init__(f"Unknown subtype: {subtype}")


def list_type_names() -> list[str]:
    """List every maintainable type value, in declaration order."""
    return [t.value for t in MaintainableType]


def _entries_from_module(module_name: str) -> list[SubtypeSchemaEntry]:
    """Import a subtype module and return the entries it exports."""
    module = importlib.import_module(module_name)
    if hasattr(module, "ENTRIES"):
        return list(module.ENTRIES)
    if hasattr(module, "ENTRY"):
        return [module.ENTRY]
    raise ImportError(
        f"Subtype module '{module_name}' defines neither ENTRY nor ENTRIES",
        name=module_name,
    )


def load_builtin_entries() -> list[SubtypeSchemaEntry]:
    """Return the built-in entries followed by configured extra modules.

    Raises:
        ImportError: If a configured module cannot be imported or exports
            no entries.
    """
    from homekeep.subtypes import SUBTYPE_ENTRIES

    entries = list(SUBTYPE_ENTRIES)
    for module_name in get_subtype_modules():
        entries.extend(_entries_from_module(module_name))
    return entries


class MaintainableRegistry:
    """Catalog of subtype entries, keyed by subtype name.

    Args:
        loader: Callable returning the initial entries. Defaults to
            `load_builtin_entries`; pass ``lambda: []`` for an empty registry.

    Example:
        >>> registry = MaintainableRegistry()
        >>> registry.resolve("dishwasher").name
        'DishwasherMaintainableData'
        >>> registry.list_subtype_names("structure")
        ['roof', 'foundation']
    """

    def __init__(self, loader: EntryLoader | None = None) -> None:
        self._loader = loader or load_builtin_entries
        self._entries: dict[str, SubtypeSchemaEntry] = {}
        self._lock = threading.RLock()
        self._initialized = False
        self._loading = False

    def initialize(self) -> None:
        """Populate the registry from its loader; later calls are no-ops."""
        if self._initialized:
            return
        with self._lock:
            # _loading guards re-entry from the loader on the same thread
            if self._initialized or self._loading:
                return
            self._loading = True
            try:
                for entry in self._loader():
                    self._add(entry)
            except Exception:
                self._entries.clear()
                raise
            finally:
                self._loading = False
            self._initialized = True
            logger.debug(f"Registry initialized with {len(self._entries)} subtypes")

    def _add(self, entry: SubtypeSchemaEntry) -> bool:
        with self._lock:
            existing = self._entries.get(entry.subtype)
            if existing is not None:
                if existing is not entry:
                    logger.warning(
                        f"Subtype '{entry.subtype}' is already registered; "
                        "keeping the first registration"
                    )
                return False
            self._entries[entry.subtype] = entry
            return True

    def register(self, entry: SubtypeSchemaEntry) -> bool:
        """Register a subtype entry.

        The first registration of a subtype name wins. Registering a
        different entry under a taken name logs a warning and is ignored.

        Returns:
            True if the entry was added.
        """
        if not isinstance(entry, SubtypeSchemaEntry):
            raise TypeError(
                f"Expected SubtypeSchemaEntry, got {type(entry).__name__}"
            )
        self.initialize()
        return self._add(entry)

    def get(self, subtype: str) -> SubtypeSchemaEntry | None:
        """Return the entry for ``subtype``, or None."""
        self.initialize()
        return self._entries.get(subtype)

    def resolve(self, subtype: str) -> ObjectSchema:
        """Return the full schema for ``subtype``.

        Raises:
            UnknownSubtypeError: If the subtype is not registered.
        """
        entry = self.get(subtype)
        if entry is None:
            raise UnknownSubtypeError(subtype)
        return entry.schema

    def list_all(self) -> list[SubtypeSchemaEntry]:
        """All entries in registration order."""
        self.initialize()
        return list(self._entries.values())

    def list_by_type(self, type: MaintainableType | str) -> list[SubtypeSchemaEntry]:
        """Entries of one maintainable type, in registration order."""
        wanted = MaintainableType(type)
        return [entry for entry in self.list_all() if entry.type is wanted]

    def list_subtype_names(self, type: MaintainableType | str | None = None) -> list[str]:
        """Subtype names, optionally restricted to one type."""
        entries = self.list_all() if type is None else self.list_by_type(type)
        return [entry.subtype for entry in entries]

    def __contains__(self, subtype: object) -> bool:
        self.initialize()
        return subtype in self._entries

    def __len__(self) -> int:
        self.initialize()
        return len(self._entries)


@lru_cache(maxsize=1)
def get_registry() -> MaintainableRegistry:
    """Get the process-wide registry, created on first call."""
    return MaintainableRegistry()


__all__ = [
    "UnknownSubtypeError",
    "MaintainableRegistry",
    "EntryLoader",
    "get_registry",
    "list_type_names",
    "load_builtin_entries",
]
