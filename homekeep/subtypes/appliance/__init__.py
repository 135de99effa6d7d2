"""Appliance subtypes."""

from . import dishwasher, refrigerator, washing_machine

ENTRIES = [dishwasher.ENTRY, refrigerator.ENTRY, washing_machine.ENTRY]

__all__ = ["ENTRIES"]
