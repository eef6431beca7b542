"""Single entry point for PCI and AER snapshots of the running host."""

from __future__ import annotations

from pcisysfs.config import SysfsConfig
from pcisysfs.core.aer import parse_device_aer
from pcisysfs.core.netclass import NetClass, NetClassAerBridge
from pcisysfs.core.rootport import root_port_aer_counters, root_port_devices
from pcisysfs.core.scanner import scan_devices
from pcisysfs.core.sysfs import SysfsReader
from pcisysfs.exceptions import DeviceNotFoundError
from pcisysfs.models.aer import DeviceAerCounters, InterfaceAerCounters, RootPortAerCounters
from pcisysfs.models.device import PciDevice
from pcisysfs.models.location import PciLocation, parse_location


class PciHost:
    """PCI devices and AER counters under one sysfs mount.

    Holds no state besides its configuration; every call reads sysfs afresh.
    """

    def __init__(
        self,
        config: SysfsConfig | None = None,
        reader: SysfsReader | None = None,
    ) -> None:
        self._config = config or SysfsConfig.from_env()
        self._reader = reader or SysfsReader()
        self._bridge = NetClassAerBridge(NetClass(self._reader, self._config), self._reader)

    @property
    def config(self) -> SysfsConfig:
        return self._config

    def pci_devices(self) -> dict[str, PciDevice]:
        """All PCI devices keyed by canonical location (``0000:01:00:0``)."""
        return scan_devices(self._reader, self._config)

    def aer_counters(self, location: PciLocation | PciDevice | str) -> DeviceAerCounters | None:
        """AER counters of one PCI device; None if it does not support AER.

        Raises:
            MalformedLocationError: ``location`` is not a valid address.
            DeviceNotFoundError: No device exists at that location.
        """
        if isinstance(location, PciDevice):
            location = location.location
        loc = parse_location(location)
        device_dir = self._config.pci_devices_dir / loc.directory_name
        if not self._reader.exists(device_dir):
            raise DeviceNotFoundError("no such PCI device", path=str(device_dir), location=str(loc))
        return parse_device_aer(self._reader, device_dir)

    def root_port_devices(self) -> list[str]:
        return root_port_devices(self._reader, self._config)

    def root_port_aer_counters(self) -> dict[str, RootPortAerCounters]:
        return root_port_aer_counters(self._reader, self._config)

    def aer_counters_by_iface(self, name: str) -> InterfaceAerCounters | None:
        return self._bridge.aer_counters_by_iface(name)

    def interface_aer_counters(self) -> dict[str, InterfaceAerCounters | None]:
        return self._bridge.aer_counters()
