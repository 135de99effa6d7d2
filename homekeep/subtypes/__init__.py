"""Built-in maintainable subtypes.

Each subtype lives in its own module under a category package and exports an
``ENTRY``. `SUBTYPE_ENTRIES` is the hand-maintained list the registry loads;
a new module must be added here to become known.
"""

from . import appliance, structure, system

SUBTYPE_ENTRIES = [*appliance.ENTRIES, *system.ENTRIES, *structure.ENTRIES]

__all__ = ["SUBTYPE_ENTRIES"]
