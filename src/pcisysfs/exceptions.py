"""Exception hierarchy for sysfs PCI and AER parsing."""

from __future__ import annotations


class PciSysfsError(Exception):
    """Base exception for all pcisysfs errors."""

    def __init__(
        self,
        message: str,
        path: str | None = None,
        location: str | None = None,
    ) -> None:
        self.path = path
        self.location = location
        super().__init__(message)

    def __str__(self) -> str:
        msg = super().__str__()
        extra = []
        if self.path:
            extra.append(f"path={self.path}")
        if self.location:
            extra.append(f"location={self.location}")
        if extra:
            return f"{msg} ({', '.join(extra)})"
        return msg


class MalformedLocationError(PciSysfsError, ValueError):
    """Text is not a valid Segment:Bus:Device.Function address."""


class UnresolvableSymlinkError(PciSysfsError):
    """A topology entry is not a symlink or its target cannot be read."""


class UnknownUnitError(PciSysfsError, ValueError):
    """A link speed value carries an unexpected unit suffix."""


class MalformedCounterLineError(PciSysfsError, ValueError):
    """A counter file line does not have exactly two fields."""


class NumericParseError(PciSysfsError, ValueError):
    """A value that must be numeric could not be parsed."""


class SysfsIOError(PciSysfsError):
    """Reading a sysfs file or directory failed for a reason other than absence."""


class SysfsNotFoundError(PciSysfsError):
    """A sysfs file or directory does not exist.

    Optional attributes and AER presence checks recover from this locally;
    it only reaches callers for required files.
    """


class DeviceNotFoundError(SysfsNotFoundError):
    """No PCI device exists at the requested location."""


class InterfaceNotFoundError(PciSysfsError):
    """The named network interface does not exist."""
