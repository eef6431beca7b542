"""Sysfs mount point configuration and derived directory paths."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_SYSFS_ROOT = Path("/sys")

# Explicit override for the sysfs mount point (containers, test fixtures).
SYSFS_ROOT_ENV = "PCISYSFS_ROOT"

PCI_DEVICES_SUBDIR = Path("bus") / "pci" / "devices"
PCIEPORT_DRIVER_SUBDIR = Path("bus") / "pci" / "drivers" / "pcieport"
NET_CLASS_SUBDIR = Path("class") / "net"


@dataclass(frozen=True)
class SysfsConfig:
    """Where sysfs is mounted and where the PCI and net collections live."""

    root: Path = DEFAULT_SYSFS_ROOT

    def __post_init__(self) -> None:
        object.__setattr__(self, "root", Path(self.root))

    @classmethod
    def from_env(cls) -> SysfsConfig:
        """Build a config, honouring the PCISYSFS_ROOT override if set."""
        env_root = os.environ.get(SYSFS_ROOT_ENV)
        if env_root:
            return cls(root=Path(env_root))
        return cls()

    def path(self, *parts: str | Path) -> Path:
        return self.root.joinpath(*parts)

    @property
    def pci_devices_dir(self) -> Path:
        return self.root / PCI_DEVICES_SUBDIR

    @property
    def pcieport_driver_dir(self) -> Path:
        return self.root / PCIEPORT_DRIVER_SUBDIR

    @property
    def net_class_dir(self) -> Path:
        return self.root / NET_CLASS_SUBDIR
