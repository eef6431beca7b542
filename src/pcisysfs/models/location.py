"""PCI Segment:Bus:Device.Function location model and text codec."""

from __future__ import annotations

import re

from pydantic import BaseModel, Field

from pcisysfs.exceptions import MalformedLocationError

_HEX_RE = re.compile(r"[0-9a-fA-F]+")

# (field name, max value) in address order.
_COMPONENTS: tuple[tuple[str, int], ...] = (
    ("segment", 0xFFFF),
    ("bus", 0xFF),
    ("device", 0x1F),
    ("function", 0x7),
)


class PciLocation(BaseModel):
    """Location of a PCI function, e.g. ``0000:00:1f.6``."""

    model_config = {"frozen": True}

    segment: int = Field(ge=0, le=0xFFFF, description="PCI segment (domain)")
    bus: int = Field(ge=0, le=0xFF, description="PCI bus number")
    device: int = Field(ge=0, le=0x1F, description="PCI device (slot) number")
    function: int = Field(ge=0, le=0x7, description="PCI function number")

    @classmethod
    def parse(cls, text: str) -> PciLocation:
        return parse_location(text)

    @property
    def directory_name(self) -> str:
        """Name of the device's sysfs directory, with a dot before the function."""
        return f"{self.segment:04x}:{self.bus:02x}:{self.device:02x}.{self.function:x}"

    def __str__(self) -> str:
        return format_location(self)


def parse_location(text: str) -> PciLocation:
    """Parse ``SSSS:BB:DD.F`` or ``SSSS:BB:DD:F`` into a PciLocation.

    Raises:
        MalformedLocationError: If four hex components in range cannot be recovered.
    """
    if isinstance(text, PciLocation):
        return text
    if not isinstance(text, str):
        raise MalformedLocationError(f"invalid location {text!r}: not a string")

    parts = text.split(":")
    if len(parts) == 3:
        parts = parts[:2] + parts[2].split(".")
    if len(parts) != 4:
        raise MalformedLocationError(f"invalid location {text!r}")

    values: dict[str, int] = {}
    for (name, max_value), part in zip(_COMPONENTS, parts):
        if not _HEX_RE.fullmatch(part):
            raise MalformedLocationError(f"invalid {name} {part!r} in location {text!r}")
        value = int(part, 16)
        if value > max_value:
            raise MalformedLocationError(f"{name} out of range in location {text!r}")
        values[name] = value

    return PciLocation(**values)


def format_location(loc: PciLocation) -> str:
    """Render the canonical colon-separated form used as registry key."""
    return f"{loc.segment:04x}:{loc.bus:02x}:{loc.device:02x}:{loc.function:x}"
