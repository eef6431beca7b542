"""Parse AER counters from a PCI device directory.

Files read (all relative to one device directory):

  aer_dev_correctable            "<Name> <count>" lines, 8 known names
  aer_dev_fatal                  "<Name> <count>" lines, 18 known names
  aer_dev_nonfatal               same names as aer_dev_fatal
  aer_rootport_total_err_cor     single decimal, root ports only
  aer_rootport_total_err_fatal
  aer_rootport_total_err_nonfatal

What a missing file means is decided by a Presence policy per file. The same
policies are used by the per-device, root-port and network-interface paths.
"""

from __future__ import annotations

import re
from enum import Enum
from pathlib import Path
from typing import NamedTuple

from pcisysfs.core.sysfs import SysfsReader
from pcisysfs.exceptions import (
    MalformedCounterLineError,
    NumericParseError,
    SysfsNotFoundError,
)
from pcisysfs.models.aer import (
    CorrectableAerCounters,
    DeviceAerCounters,
    UncorrectableAerCounters,
)
from pcisysfs.utils.logging import get_logger

logger = get_logger(__name__)

CORRECTABLE_FILE = "aer_dev_correctable"
UNCORRECTABLE_FILE_PREFIX = "aer_dev_"
UNCORRECTABLE_KINDS = ("fatal", "nonfatal")

ROOTPORT_COR_FILE = "aer_rootport_total_err_cor"
ROOTPORT_FATAL_FILE = "aer_rootport_total_err_fatal"
ROOTPORT_NONFATAL_FILE = "aer_rootport_total_err_nonfatal"

_UINT64_MAX = (1 << 64) - 1
_UINT64_MAX_DIGITS = len(str(_UINT64_MAX))
_DECIMAL_RE = re.compile(r"[0-9]+")


class Presence(Enum):
    """What a missing counter file means."""
    REQUIRED = "required"   # error
    OPTIONAL = "optional"   # this field is absent
    RECORD = "record"       # the whole record is absent


class RootPortTotals(NamedTuple):
    """Root-port aggregate totals; None where the file is missing or blank."""
    total_err_cor: int | None
    total_err_fatal: int | None
    total_err_nonfatal: int | None


def _field_map(model: type) -> dict[str, str]:
    """Kernel counter name -> model field name, from the model aliases."""
    return {info.alias: name for name, info in model.model_fields.items()}


_CORRECTABLE_FIELDS = _field_map(CorrectableAerCounters)
_UNCORRECTABLE_FIELDS = _field_map(UncorrectableAerCounters)


def parse_uint64(text: str, path: Path | str, name: str | None = None) -> int:
    """Parse a decimal unsigned 64-bit counter value."""
    digits = text.lstrip("0") or "0"
    # Length check first: int() refuses very long decimal strings.
    if (
        not _DECIMAL_RE.fullmatch(text)
        or len(digits) > _UINT64_MAX_DIGITS
        or int(digits) > _UINT64_MAX
    ):
        what = f"value for {name}" if name else "value"
        raise NumericParseError(f"error parsing {what}: {text!r}", path=str(path))
    return int(digits)


def read_counter_file(reader: SysfsReader, path: Path, presence: Presence) -> str | None:
    """Read a counter file under a presence policy.

    Returns None when the file does not exist and the policy tolerates it.
    """
    try:
        return reader.read(path)
    except SysfsNotFoundError:
        if presence is Presence.REQUIRED:
            raise
        return None


def parse_counter_lines(text: str, path: Path, fields: dict[str, str]) -> dict[str, int]:
    """Decode ``<Name> <count>`` lines into field values.

    Unknown names are skipped; a repeated name keeps its last value.
    """
    values: dict[str, int] = {}
    for line in text.splitlines():
        if not line.strip():
            continue
        parts = line.split()
        if len(parts) != 2:
            raise MalformedCounterLineError(
                f"unexpected number of fields in line {line!r}", path=str(path),
            )
        name, raw = parts
        value = parse_uint64(raw, path, name)
        field = fields.get(name)
        if field is None:
            continue
        values[field] = value
    return values


def parse_correctable(reader: SysfsReader, device_dir: Path) -> CorrectableAerCounters:
    """Parse ``aer_dev_correctable``; the file must exist."""
    path = Path(device_dir) / CORRECTABLE_FILE
    text = read_counter_file(reader, path, Presence.REQUIRED)
    return CorrectableAerCounters(**parse_counter_lines(text, path, _CORRECTABLE_FIELDS))


def parse_uncorrectable(
    reader: SysfsReader, device_dir: Path, kind: str,
) -> UncorrectableAerCounters:
    """Parse ``aer_dev_fatal`` or ``aer_dev_nonfatal``; the file must exist."""
    if kind not in UNCORRECTABLE_KINDS:
        raise ValueError(f"kind must be one of {UNCORRECTABLE_KINDS}, got {kind!r}")
    path = Path(device_dir) / f"{UNCORRECTABLE_FILE_PREFIX}{kind}"
    text = read_counter_file(reader, path, Presence.REQUIRED)
    return UncorrectableAerCounters(**parse_counter_lines(text, path, _UNCORRECTABLE_FIELDS))


def read_total(reader: SysfsReader, path: Path, presence: Presence) -> int | None:
    """Read one root-port total; None if missing (when allowed) or blank."""
    text = read_counter_file(reader, path, presence)
    if not text:
        return None
    return parse_uint64(text, path)


def parse_root_port_totals(reader: SysfsReader, device_dir: Path) -> RootPortTotals:
    """Read the three root-port totals, each independently optional."""
    device_dir = Path(device_dir)
    return RootPortTotals(
        total_err_cor=read_total(reader, device_dir / ROOTPORT_COR_FILE, Presence.OPTIONAL),
        total_err_fatal=read_total(reader, device_dir / ROOTPORT_FATAL_FILE, Presence.OPTIONAL),
        total_err_nonfatal=read_total(
            reader, device_dir / ROOTPORT_NONFATAL_FILE, Presence.OPTIONAL,
        ),
    )


def parse_device_aer(reader: SysfsReader, device_dir: Path) -> DeviceAerCounters | None:
    """Read all AER counters of one device directory.

    Returns None when ``aer_dev_correctable`` does not exist, meaning the
    device does not support AER. Once it exists, the fatal and nonfatal
    tables are required; the root-port totals are optional per field.
    """
    device_dir = Path(device_dir)
    path = device_dir / CORRECTABLE_FILE
    text = read_counter_file(reader, path, Presence.RECORD)
    if text is None:
        logger.debug("aer_not_supported", device_dir=str(device_dir))
        return None

    correctable = CorrectableAerCounters(**parse_counter_lines(text, path, _CORRECTABLE_FIELDS))
    fatal = parse_uncorrectable(reader, device_dir, "fatal")
    non_fatal = parse_uncorrectable(reader, device_dir, "nonfatal")
    totals = parse_root_port_totals(reader, device_dir)

    return DeviceAerCounters(
        correctable=correctable,
        fatal=fatal,
        non_fatal=non_fatal,
        root_port_total_err_cor=totals.total_err_cor,
        root_port_total_err_fatal=totals.total_err_fatal,
        root_port_total_err_nonfatal=totals.total_err_nonfatal,
    )
