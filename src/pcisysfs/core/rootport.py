"""Root-port AER totals for devices bound to the pcieport driver."""

from __future__ import annotations

from pathlib import Path

from pcisysfs.config import SysfsConfig
from pcisysfs.core.aer import (
    ROOTPORT_COR_FILE,
    ROOTPORT_FATAL_FILE,
    ROOTPORT_NONFATAL_FILE,
    Presence,
    parse_uint64,
    read_counter_file,
    read_total,
)
from pcisysfs.core.sysfs import SysfsReader
from pcisysfs.models.aer import RootPortAerCounters
from pcisysfs.utils.logging import get_logger

logger = get_logger(__name__)


def root_port_devices(reader: SysfsReader, config: SysfsConfig) -> list[str]:
    """Names of the entries bound to pcieport (bind/unbind/uevent files excluded)."""
    return reader.list_dir(config.pcieport_driver_dir, include_regular=False)


def parse_root_port(reader: SysfsReader, device_dir: Path) -> RootPortAerCounters | None:
    """Read the totals of one bound device.

    Returns None if ``aer_rootport_total_err_cor`` does not exist: the device
    is not an AER-capable root port. The fatal and nonfatal totals are then
    required. A blank value counts as zero.
    """
    device_dir = Path(device_dir)
    cor_path = device_dir / ROOTPORT_COR_FILE
    cor_text = read_counter_file(reader, cor_path, Presence.RECORD)
    if cor_text is None:
        return None
    cor = parse_uint64(cor_text, cor_path) if cor_text else 0
    fatal = read_total(reader, device_dir / ROOTPORT_FATAL_FILE, Presence.REQUIRED)
    nonfatal = read_total(reader, device_dir / ROOTPORT_NONFATAL_FILE, Presence.REQUIRED)
    return RootPortAerCounters(
        total_err_cor=cor,
        total_err_fatal=fatal or 0,
        total_err_nonfatal=nonfatal or 0,
    )


def root_port_aer_counters(
    reader: SysfsReader, config: SysfsConfig,
) -> dict[str, RootPortAerCounters]:
    """Totals for every AER-capable root port, keyed by device name."""
    counters: dict[str, RootPortAerCounters] = {}
    for name in root_port_devices(reader, config):
        result = parse_root_port(reader, config.pcieport_driver_dir / name)
        if result is None:
            continue
        counters[name] = result

    logger.info("rootport_aer_collected", root_ports=len(counters))
    return counters
