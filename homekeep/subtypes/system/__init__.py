"""System subtypes."""

from . import cooling, heat

ENTRIES = [heat.ENTRY, cooling.ENTRY]

__all__ = ["ENTRIES"]
