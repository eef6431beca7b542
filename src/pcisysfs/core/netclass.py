"""Network interfaces in /sys/class/net and the AER counters behind them."""

from __future__ import annotations

from pathlib import Path

from pcisysfs.config import SysfsConfig
from pcisysfs.core.aer import parse_device_aer
from pcisysfs.core.sysfs import SysfsReader
from pcisysfs.exceptions import InterfaceNotFoundError
from pcisysfs.models.aer import InterfaceAerCounters
from pcisysfs.utils.logging import get_logger

logger = get_logger(__name__)

# Link from an interface to the bus device that backs it.
DEVICE_LINK = "device"


class NetClass:
    """Lookup of network interfaces under the net class directory."""

    def __init__(self, reader: SysfsReader, config: SysfsConfig) -> None:
        self._reader = reader
        self._config = config

    def interfaces(self) -> list[str]:
        """Names of all network interfaces, sorted."""
        return self._reader.list_dir(self._config.net_class_dir)

    def interface_dir(self, name: str) -> Path:
        """Directory of an interface.

        Raises:
            InterfaceNotFoundError: The interface does not exist.
        """
        if not name or "/" in name or name in (".", ".."):
            raise InterfaceNotFoundError(f"invalid interface name {name!r}")
        path = self._config.net_class_dir / name
        if not self._reader.exists(path):
            raise InterfaceNotFoundError(f"interface {name!r} not found", path=str(path))
        return path


class NetClassAerBridge:
    """Resolve network interfaces to the AER counters of their PCI device."""

    def __init__(self, net_class: NetClass, reader: SysfsReader) -> None:
        self._net_class = net_class
        self._reader = reader

    def _counters(self, name: str, device_dir: Path) -> InterfaceAerCounters | None:
        counters = parse_device_aer(self._reader, device_dir)
        if counters is None:
            return None
        return InterfaceAerCounters(name=name, **counters.model_dump())

    def aer_counters_by_iface(self, name: str) -> InterfaceAerCounters | None:
        """AER counters for one interface; None if its device lacks AER support.

        Raises:
            InterfaceNotFoundError: The interface does not exist.
        """
        iface_dir = self._net_class.interface_dir(name)
        return self._counters(name, iface_dir / DEVICE_LINK)

    def aer_counters(self) -> dict[str, InterfaceAerCounters | None]:
        """AER counters for every interface backed by a device.

        Interfaces without a ``device`` link (loopback, bridges, tunnels) are
        left out. Interfaces whose device lacks AER support map to None.
        """
        result: dict[str, InterfaceAerCounters | None] = {}
        for name in self._net_class.interfaces():
            device_dir = self._net_class.interface_dir(name) / DEVICE_LINK
            if not self._reader.exists(device_dir):
                logger.debug("interface_without_device", interface=name)
                continue
            result[name] = self._counters(name, device_dir)

        logger.info(
            "interface_aer_collected",
            interfaces=len(result),
            aer_capable=sum(1 for c in result.values() if c is not None),
        )
        return result
