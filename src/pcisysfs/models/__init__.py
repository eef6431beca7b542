"""Pydantic data models for pcisysfs."""

from pcisysfs.models.aer import (
    CorrectableAerCounters,
    DeviceAerCounters,
    InterfaceAerCounters,
    RootPortAerCounters,
    UncorrectableAerCounters,
)
from pcisysfs.models.device import PciDevice, PciPowerState
from pcisysfs.models.location import PciLocation, format_location, parse_location

__all__ = [
    "CorrectableAerCounters",
    "DeviceAerCounters",
    "InterfaceAerCounters",
    "PciDevice",
    "PciLocation",
    "PciPowerState",
    "RootPortAerCounters",
    "UncorrectableAerCounters",
    "format_location",
    "parse_location",
]
