"""Pytest configuration and shared fixtures.

The ``sysfs_root`` fixture builds a miniature sysfs tree::

    devices/pci0000:00/0000:00:02.1/              root port, AER, totals 1/2/3
    devices/pci0000:00/0000:00:02.1/0000:01:00.0/ NIC endpoint, AER, SR-IOV
    devices/pci0000:00/0000:00:03.0/              root port, AER, totals 4/5/6
    devices/pci0000:00/0000:00:1c.0/              root port without AER
    bus/pci/devices/<location>    -> symlinks into devices/
    bus/pci/drivers/pcieport/...  -> the three root ports + bind/unbind/uevent
    class/net/eth0/device         -> 0000:01:00.0
    class/net/eth1/device         -> 0000:00:1c.0
    class/net/lo                  (no device link)
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import pytest

from pcisysfs.config import SysfsConfig
from pcisysfs.core.host import PciHost
from pcisysfs.core.sysfs import SysfsReader

CORRECTABLE_NAMES = [
    "RxErr", "BadTLP", "BadDLLP", "Rollover",
    "Timeout", "NonFatalErr", "CorrIntErr", "HeaderOF",
]
UNCORRECTABLE_NAMES = [
    "Undefined", "DLP", "SDES", "TLP", "FCP", "CmpltTO",
    "CmpltAbrt", "UnxCmplt", "RxOF", "MalfTLP", "ECRC", "UnsupReq",
    "ACSViol", "UncorrIntErr", "BlockedTLP", "AtomicOpBlocked",
    "TLPBlockedErr", "PoisonTLPBlocked",
]

ENDPOINT = "0000:01:00.0"
ROOT_PORT_A = "0000:00:02.1"
ROOT_PORT_B = "0000:00:03.0"
ROOT_PORT_NO_AER = "0000:00:1c.0"


def counter_text(names: list[str], start: int) -> str:
    """Counter file body with sequential values starting at ``start``."""
    return "".join(f"{name} {start + i}\n" for i, name in enumerate(names))


def aer_files(correctable_start: int = 1, fatal_start: int = 9, nonfatal_start: int = 27) -> dict[str, str]:
    return {
        "aer_dev_correctable": counter_text(CORRECTABLE_NAMES, correctable_start),
        "aer_dev_fatal": counter_text(UNCORRECTABLE_NAMES, fatal_start),
        "aer_dev_nonfatal": counter_text(UNCORRECTABLE_NAMES, nonfatal_start),
    }


def identity_files(
    class_code: str = "0x060400",
    vendor: str = "0x8086",
    device: str = "0x1234",
    revision: str = "0x01",
) -> dict[str, str]:
    return {
        "class": f"{class_code}\n",
        "vendor": f"{vendor}\n",
        "device": f"{device}\n",
        "subsystem_vendor": "0x8086\n",
        "subsystem_device": "0x0000\n",
        "revision": f"{revision}\n",
    }


def write_files(directory: Path, files: dict[str, str]) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    for name, content in files.items():
        (directory / name).write_text(content)
    return directory


def link(link_path: Path, target: Path) -> None:
    """Create a relative symlink, as sysfs does."""
    link_path.parent.mkdir(parents=True, exist_ok=True)
    os.symlink(os.path.relpath(target, link_path.parent), link_path)


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    logging.getLogger().handlers.clear()


@pytest.fixture
def write_device(tmp_path: Path):
    """Return a helper creating a device directory and its bus/pci/devices link."""
    root = tmp_path / "sys"

    def _write(devpath: str, files: dict[str, str]) -> Path:
        device_dir = write_files(root / "devices" / devpath, files)
        name = Path(devpath).name
        link(root / "bus" / "pci" / "devices" / name, device_dir)
        return device_dir

    return _write


@pytest.fixture
def sysfs_root(tmp_path: Path, write_device) -> Path:
    root = tmp_path / "sys"

    port_a = write_device(
        f"pci0000:00/{ROOT_PORT_A}",
        {
            **identity_files(),
            "max_link_speed": "16.0 GT/s PCIe\n",
            "max_link_width": "16\n",
            "current_link_speed": "8.0 GT/s PCIe\n",
            "current_link_width": "8\n",
            "numa_node": "0\n",
            "d3cold_allowed": "1\n",
            "power_state": "D0\n",
            **aer_files(101, 201, 301),
            "aer_rootport_total_err_cor": "1\n",
            "aer_rootport_total_err_fatal": "2\n",
            "aer_rootport_total_err_nonfatal": "3\n",
        },
    )
    endpoint = write_device(
        f"pci0000:00/{ROOT_PORT_A}/{ENDPOINT}",
        {
            **identity_files(class_code="0x020000", vendor="0x15b3", device="0x1017"),
            "max_link_speed": "8.0 GT/s PCIe\n",
            "max_link_width": "8\n",
            "current_link_speed": "8.0 GT/s PCIe\n",
            "current_link_width": "8\n",
            "numa_node": "-1\n",
            "sriov_drivers_autoprobe": "1\n",
            "sriov_numvfs": "4\n",
            "sriov_offset": "2\n",
            "sriov_stride": "1\n",
            "sriov_totalvfs": "8\n",
            "sriov_vf_device": "1018\n",
            "sriov_vf_total_msix": "64\n",
            "d3cold_allowed": "0\n",
            "power_state": "D3hot\n",
            **aer_files(),
        },
    )
    port_b = write_device(
        f"pci0000:00/{ROOT_PORT_B}",
        {
            **identity_files(),
            **aer_files(),
            "aer_rootport_total_err_cor": "4\n",
            "aer_rootport_total_err_fatal": "5\n",
            "aer_rootport_total_err_nonfatal": "6\n",
        },
    )
    port_no_aer = write_device(
        f"pci0000:00/{ROOT_PORT_NO_AER}",
        {
            **identity_files(),
            "max_link_speed": "Unknown\n",
            "current_link_speed": "Unknown\n",
            "max_link_width": "\n",
            "power_state": "\n",
        },
    )

    driver_dir = root / "bus" / "pci" / "drivers" / "pcieport"
    for port in (port_a, port_b, port_no_aer):
        link(driver_dir / port.name, port)
    write_files(driver_dir, {"bind": "", "unbind": "", "uevent": "DRIVER=pcieport\n"})

    net_dir = root / "class" / "net"
    link(net_dir / "eth0" / "device", endpoint)
    link(net_dir / "eth1" / "device", port_no_aer)
    write_files(net_dir / "lo", {"operstate": "unknown\n"})

    return root


@pytest.fixture
def config(sysfs_root: Path) -> SysfsConfig:
    return SysfsConfig(root=sysfs_root)


@pytest.fixture
def reader() -> SysfsReader:
    return SysfsReader()


@pytest.fixture
def host(config: SysfsConfig) -> PciHost:
    return PciHost(config)
