"""pcisysfs - PCI device and AER counter snapshots from Linux sysfs."""

__version__ = "0.1.0"

from pcisysfs.config import SysfsConfig
from pcisysfs.core import PciHost, SysfsReader
from pcisysfs.exceptions import (
    DeviceNotFoundError,
    InterfaceNotFoundError,
    MalformedCounterLineError,
    MalformedLocationError,
    NumericParseError,
    PciSysfsError,
    SysfsIOError,
    SysfsNotFoundError,
    UnknownUnitError,
    UnresolvableSymlinkError,
)
from pcisysfs.models import (
    CorrectableAerCounters,
    DeviceAerCounters,
    InterfaceAerCounters,
    PciDevice,
    PciLocation,
    PciPowerState,
    RootPortAerCounters,
    UncorrectableAerCounters,
)

__all__ = [
    "__version__",
    "CorrectableAerCounters",
    "DeviceAerCounters",
    "DeviceNotFoundError",
    "InterfaceAerCounters",
    "InterfaceNotFoundError",
    "MalformedCounterLineError",
    "MalformedLocationError",
    "NumericParseError",
    "PciDevice",
    "PciHost",
    "PciLocation",
    "PciPowerState",
    "PciSysfsError",
    "RootPortAerCounters",
    "SysfsConfig",
    "SysfsIOError",
    "SysfsNotFoundError",
    "SysfsReader",
    "UncorrectableAerCounters",
    "UnknownUnitError",
    "UnresolvableSymlinkError",
]
