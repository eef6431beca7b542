"""Reading sysfs pseudo-files, directories and symlinks.

Every sysfs access in pcisysfs goes through SysfsReader so that "file does
not exist" surfaces as SysfsNotFoundError, distinct from every other I/O
failure (SysfsIOError).
"""

from __future__ import annotations

import os
from pathlib import Path

from pcisysfs.exceptions import (
    SysfsIOError,
    SysfsNotFoundError,
    UnresolvableSymlinkError,
)


class SysfsReader:
    """Read-only access to the sysfs file contract."""

    def read(self, path: str | Path) -> str:
        """Return the whitespace-trimmed contents of a sysfs file.

        Raises:
            SysfsNotFoundError: The file does not exist.
            SysfsIOError: Any other read failure.
        """
        try:
            with open(path, "r", encoding="ascii", errors="replace") as handle:
                return handle.read().strip()
        except FileNotFoundError as exc:
            raise SysfsNotFoundError(f"no such file: {exc.strerror}", path=str(path)) from exc
        except OSError as exc:
            raise SysfsIOError(f"failed to read file: {exc.strerror or exc}", path=str(path)) from exc

    def read_optional(self, path: str | Path) -> str | None:
        """Like read(), but return None when the file does not exist."""
        try:
            return self.read(path)
        except SysfsNotFoundError:
            return None

    def exists(self, path: str | Path) -> bool:
        return os.path.exists(path)

    def list_dir(self, path: str | Path, include_regular: bool = True) -> list[str]:
        """Return the sorted entry names of a directory.

        Args:
            path: Directory to enumerate.
            include_regular: If False, regular files are left out (symlinks
                and directories are kept).
        """
        try:
            with os.scandir(path) as it:
                names = [
                    entry.name for entry in it
                    if include_regular or not entry.is_file(follow_symlinks=False)
                ]
        except FileNotFoundError as exc:
            raise SysfsNotFoundError(f"no such directory: {exc.strerror}", path=str(path)) from exc
        except OSError as exc:
            raise SysfsIOError(f"cannot access dir: {exc.strerror or exc}", path=str(path)) from exc
        return sorted(names)

    def readlink(self, path: str | Path) -> str:
        """Return the raw target of a symlink."""
        try:
            return os.readlink(path)
        except OSError as exc:
            raise UnresolvableSymlinkError(
                f"failed to readlink: {exc.strerror or exc}", path=str(path),
            ) from exc
