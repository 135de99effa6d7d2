"""Structure subtypes."""

from . import foundation, roof

ENTRIES = [roof.ENTRY, foundation.ENTRY]

__all__ = ["ENTRIES"]
