"""PCI device record built from /sys/bus/pci/devices/<location>."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field

from pcisysfs.models.location import PciLocation


class PciPowerState(StrEnum):
    """Values the kernel writes to ``power_state``."""
    UNKNOWN = "unknown"
    ERROR = "error"
    D0 = "D0"
    D1 = "D1"
    D2 = "D2"
    D3_HOT = "D3hot"
    D3_COLD = "D3cold"


class PciDevice(BaseModel):
    """One PCI function as seen in sysfs.

    Optional attributes are ``None`` when their file does not exist (or holds
    the kernel's "Unknown" placeholder), never a zero stand-in.
    """

    model_config = {"frozen": True}

    location: PciLocation
    parent_location: PciLocation | None = Field(
        default=None, description="Upstream bridge location, None below a host bridge",
    )

    class_code: int = Field(description="Class code (base, sub-class, prog-if)")
    vendor: int = Field(description="Vendor ID")
    device: int = Field(description="Device ID")
    subsystem_vendor: int
    subsystem_device: int
    revision: int

    numa_node: int | None = None

    max_link_speed: float | None = Field(default=None, description="GT/s")
    max_link_width: float | None = None
    current_link_speed: float | None = Field(default=None, description="GT/s")
    current_link_width: float | None = None

    sriov_drivers_autoprobe: bool | None = None
    sriov_numvfs: int | None = None
    sriov_offset: int | None = None
    sriov_stride: int | None = None
    sriov_totalvfs: int | None = None
    sriov_vf_device: int | None = None
    sriov_vf_total_msix: int | None = None

    d3cold_allowed: bool | None = None
    # Stored verbatim; compare against PciPowerState members.
    power_state: str | None = None

    @property
    def name(self) -> str:
        return str(self.location)
