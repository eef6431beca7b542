"""Enumerate /sys/bus/pci/devices into a registry of PciDevice records."""

from __future__ import annotations

import posixpath

from pcisysfs.config import SysfsConfig
from pcisysfs.core.attributes import parse_device
from pcisysfs.core.sysfs import SysfsReader
from pcisysfs.exceptions import MalformedLocationError
from pcisysfs.models.device import PciDevice
from pcisysfs.models.location import PciLocation, parse_location
from pcisysfs.utils.logging import get_logger

logger = get_logger(__name__)

# Parent segments starting with this belong to the host bridge, not a device.
HOST_BRIDGE_PREFIX = "pci"


def resolve_locations(target: str) -> tuple[PciLocation, PciLocation | None]:
    """Extract device and parent locations from a device symlink target.

    A target looks like ``../../../devices/pci0000:00/0000:00:02.5/0000:04:00.0``:
    the last segment is the device, the one before it is the parent bridge.

    Raises:
        MalformedLocationError: Either segment is not a valid location.
    """
    target = target.rstrip("/")
    device_str = posixpath.basename(target)
    parent_str = posixpath.basename(posixpath.dirname(target))

    try:
        location = parse_location(device_str)
    except MalformedLocationError as exc:
        raise MalformedLocationError(
            f"failed to parse device location {device_str!r}: {exc}", path=target,
        ) from exc

    if parent_str.startswith(HOST_BRIDGE_PREFIX):
        return location, None

    try:
        parent = parse_location(parent_str)
    except MalformedLocationError as exc:
        raise MalformedLocationError(
            f"failed to parse parent device location {parent_str!r}: {exc}",
            path=target,
            location=str(location),
        ) from exc
    return location, parent


def scan_device(reader: SysfsReader, config: SysfsConfig, name: str) -> PciDevice:
    """Parse one entry of the PCI device collection."""
    entry = config.pci_devices_dir / name
    # Every entry must be a symlink into /sys/devices.
    target = reader.readlink(entry)
    location, parent = resolve_locations(target)
    return parse_device(reader, entry, location, parent)


def scan_devices(reader: SysfsReader, config: SysfsConfig) -> dict[str, PciDevice]:
    """Return every PCI device keyed by its canonical location string.

    The registry is built fresh on each call. A single bad entry aborts the
    whole scan; no partial registry is returned.
    """
    names = reader.list_dir(config.pci_devices_dir)
    devices: dict[str, PciDevice] = {}
    for name in names:
        device = scan_device(reader, config, name)
        devices[device.name] = device

    logger.info("pci_scan_complete", root=str(config.root), devices=len(devices))
    return devices


def find_parent(devices: dict[str, PciDevice], device: PciDevice) -> PciDevice | None:
    """Look up a device's parent in a registry by location value."""
    if device.parent_location is None:
        return None
    return devices.get(str(device.parent_location))
