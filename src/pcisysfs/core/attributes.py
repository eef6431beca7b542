"""Parse the scalar attribute files of one PCI device directory.

Refer to https://docs.kernel.org/PCI/sysfs-pci.html for the file formats.

Attributes are read in four groups:
  identity   class/vendor/device/subsystem ids and revision, all required
  link/NUMA  link speed and width, numa_node; optional, "Unknown" is absent
  SR-IOV     sriov_* files; optional, blank is absent
  power      d3cold_allowed and power_state; optional, blank is absent
"""

from __future__ import annotations

import re
from collections.abc import Callable
from pathlib import Path
from typing import Any

from pcisysfs.core.sysfs import SysfsReader
from pcisysfs.exceptions import NumericParseError, PciSysfsError, UnknownUnitError
from pcisysfs.models.device import PciDevice
from pcisysfs.models.location import PciLocation
from pcisysfs.utils.logging import get_logger

logger = get_logger(__name__)

LINK_SPEED_UNIT = "GT/s PCIe"

_DECIMAL_RE = re.compile(r"[0-9]+")
_SIGNED_DECIMAL_RE = re.compile(r"[+-]?[0-9]+")
_HEX_RE = re.compile(r"[0-9a-fA-F]+")


def _bounded(value: int, bits: int, signed: bool = False) -> int:
    if signed:
        low, high = -(1 << (bits - 1)), (1 << (bits - 1)) - 1
    else:
        low, high = 0, (1 << bits) - 1
    if not low <= value <= high:
        raise ValueError(f"value {value} out of range for {bits}-bit integer")
    return value


def _prefixed_u32(text: str) -> int:
    # Base taken from the prefix: "0x0200" is hex, "16" is decimal.
    return _bounded(int(text, 0), 32)


def _decimal_uint(bits: int) -> Callable[[str], int]:
    def convert(text: str) -> int:
        if not _DECIMAL_RE.fullmatch(text):
            raise ValueError(f"invalid decimal value {text!r}")
        return _bounded(int(text, 10), bits)
    return convert


def _hex_u32(text: str) -> int:
    if not _HEX_RE.fullmatch(text):
        raise ValueError(f"invalid hex value {text!r}")
    return _bounded(int(text, 16), 32)


def _numa_node(text: str) -> int:
    if not _SIGNED_DECIMAL_RE.fullmatch(text):
        raise ValueError(f"invalid numa node {text!r}")
    return _bounded(int(text, 10), 32, signed=True)


def _flag(text: str) -> bool:
    if not _SIGNED_DECIMAL_RE.fullmatch(text):
        raise ValueError(f"invalid boolean {text!r}")
    return _bounded(int(text, 10), 32, signed=True) != 0


def _link_speed(text: str) -> float:
    """Parse a value such as ``8.0 GT/s PCIe`` into GT/s."""
    number, sep, unit = text.partition(" ")
    if not sep:
        raise UnknownUnitError(f"missing unit in link speed {text!r}")
    if unit != LINK_SPEED_UNIT:
        raise UnknownUnitError(f"unknown unit in link speed {text!r}")
    return float(number.strip())


def _link_width(text: str) -> float:
    return float(_decimal_uint(64)(text))


def _power_state(text: str) -> str:
    return text


# file name -> PciDevice field
IDENTITY_FILES: dict[str, str] = {
    "class": "class_code",
    "vendor": "vendor",
    "device": "device",
    "subsystem_vendor": "subsystem_vendor",
    "subsystem_device": "subsystem_device",
    "revision": "revision",
}

# file name -> (PciDevice field, converter)
LINK_FILES: dict[str, tuple[str, Callable[[str], Any]]] = {
    "max_link_speed": ("max_link_speed", _link_speed),
    "max_link_width": ("max_link_width", _link_width),
    "current_link_speed": ("current_link_speed", _link_speed),
    "current_link_width": ("current_link_width", _link_width),
    "numa_node": ("numa_node", _numa_node),
}

SRIOV_FILES: dict[str, tuple[str, Callable[[str], Any]]] = {
    "sriov_drivers_autoprobe": ("sriov_drivers_autoprobe", _flag),
    "sriov_numvfs": ("sriov_numvfs", _decimal_uint(32)),
    "sriov_offset": ("sriov_offset", _decimal_uint(32)),
    "sriov_stride": ("sriov_stride", _decimal_uint(32)),
    "sriov_totalvfs": ("sriov_totalvfs", _decimal_uint(32)),
    "sriov_vf_device": ("sriov_vf_device", _hex_u32),
    "sriov_vf_total_msix": ("sriov_vf_total_msix", _decimal_uint(64)),
}

POWER_FILES: dict[str, tuple[str, Callable[[str], Any]]] = {
    "d3cold_allowed": ("d3cold_allowed", _flag),
    "power_state": ("power_state", _power_state),
}


def _convert(
    converter: Callable[[str], Any],
    text: str,
    path: Path,
    location: PciLocation,
) -> Any:
    try:
        return converter(text)
    except UnknownUnitError as exc:
        raise UnknownUnitError(str(exc), path=str(path), location=str(location)) from exc
    except ValueError as exc:
        raise NumericParseError(
            f"failed to parse {path.name} {text!r}: {exc}",
            path=str(path),
            location=str(location),
        ) from exc


def _read(reader: SysfsReader, path: Path, location: PciLocation, optional: bool) -> str | None:
    try:
        if optional:
            return reader.read_optional(path)
        return reader.read(path)
    except PciSysfsError as exc:
        if exc.location is None:
            exc.location = str(location)
        raise


def parse_identity(reader: SysfsReader, device_dir: Path, location: PciLocation) -> dict[str, int]:
    """Read the six required identity files."""
    values: dict[str, int] = {}
    for filename, field in IDENTITY_FILES.items():
        path = device_dir / filename
        text = _read(reader, path, location, optional=False)
        values[field] = _convert(_prefixed_u32, text, path, location)
    return values


def parse_link_attributes(
    reader: SysfsReader, device_dir: Path, location: PciLocation,
) -> dict[str, Any]:
    """Read link speed/width and NUMA node; missing or "Unknown" values are skipped."""
    values: dict[str, Any] = {}
    for filename, (field, converter) in LINK_FILES.items():
        path = device_dir / filename
        text = _read(reader, path, location, optional=True)
        # Unset or indeterminate per drivers/pci/probe.c pci_speed_string.
        if text is None or text == "" or text.startswith("Unknown"):
            continue
        values[field] = _convert(converter, text, path, location)
    return values


def _parse_optional_group(
    reader: SysfsReader,
    device_dir: Path,
    location: PciLocation,
    files: dict[str, tuple[str, Callable[[str], Any]]],
) -> dict[str, Any]:
    values: dict[str, Any] = {}
    for filename, (field, converter) in files.items():
        path = device_dir / filename
        text = _read(reader, path, location, optional=True)
        if not text:
            continue
        values[field] = _convert(converter, text, path, location)
    return values


def parse_sriov_attributes(
    reader: SysfsReader, device_dir: Path, location: PciLocation,
) -> dict[str, Any]:
    return _parse_optional_group(reader, device_dir, location, SRIOV_FILES)


def parse_power_attributes(
    reader: SysfsReader, device_dir: Path, location: PciLocation,
) -> dict[str, Any]:
    return _parse_optional_group(reader, device_dir, location, POWER_FILES)


def parse_device(
    reader: SysfsReader,
    device_dir: Path,
    location: PciLocation,
    parent_location: PciLocation | None = None,
) -> PciDevice:
    """Build a PciDevice from the attribute files in ``device_dir``.

    Raises:
        PciSysfsError: A required file is missing or unreadable, an optional
            file exists but cannot be read, or any present value fails to parse.
    """
    attrs: dict[str, Any] = {}
    attrs.update(parse_identity(reader, device_dir, location))
    attrs.update(parse_link_attributes(reader, device_dir, location))
    attrs.update(parse_sriov_attributes(reader, device_dir, location))
    attrs.update(parse_power_attributes(reader, device_dir, location))

    logger.debug("pci_device_parsed", location=str(location), attributes=len(attrs))
    return PciDevice(location=location, parent_location=parent_location, **attrs)
