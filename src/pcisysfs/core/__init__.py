"""Core sysfs parsing layer."""

from pcisysfs.core.aer import (
    Presence,
    RootPortTotals,
    parse_correctable,
    parse_device_aer,
    parse_root_port_totals,
    parse_uncorrectable,
)
from pcisysfs.core.attributes import parse_device
from pcisysfs.core.host import PciHost
from pcisysfs.core.netclass import NetClass, NetClassAerBridge
from pcisysfs.core.rootport import root_port_aer_counters, root_port_devices
from pcisysfs.core.scanner import find_parent, scan_devices
from pcisysfs.core.sysfs import SysfsReader

__all__ = [
    "NetClass",
    "NetClassAerBridge",
    "PciHost",
    "Presence",
    "RootPortTotals",
    "SysfsReader",
    "find_parent",
    "parse_correctable",
    "parse_device",
    "parse_device_aer",
    "parse_root_port_totals",
    "parse_uncorrectable",
    "root_port_aer_counters",
    "root_port_devices",
    "scan_devices",
]
