"""OS-specific discovery of the RPI-RP2 bootloader volume.

Each platform exposes removable volume metadata differently, so there is one
locator per platform and ``create_drive_locator`` picks the right one:

- Windows: check every drive letter and compare the volume label.
- macOS: look for a directory named after the label under ``/Volumes``.
- Linux: labels are unreliable, so a candidate must also contain the
  ``INFO_UF2.TXT`` marker file; ``lsblk`` is used as a fallback to find
  FAT partitions mounted in unusual places.
"""

import json
import logging
import os
import platform
import string
import subprocess
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any

from boxupdater.core.structlog_logger import get_struct_logger
from boxupdater.protocols import DriveLocatorProtocol


logger = get_struct_logger(__name__)

RP2_VOLUME_LABEL = "RPI-RP2"
UF2_MARKER_FILE = "INFO_UF2.TXT"
LSBLK_COMMAND = ["lsblk", "-o", "NAME,FSTYPE,MOUNTPOINT", "-n", "-J"]
LSBLK_TIMEOUT = 5


def is_directory(path: Path) -> bool:
    """Check if a path is an accessible directory without raising."""
    try:
        return path.is_dir()
    except OSError:
        return False


def has_marker_file(path: Path) -> bool:
    """Check if a mount point carries the UF2 bootloader marker file."""
    try:
        return (path / UF2_MARKER_FILE).is_file()
    except OSError:
        return False


def read_windows_volume_label(root: Path) -> str | None:
    """Read a volume label through ``GetVolumeInformationW``.

    Returns None when the call fails, e.g. for an empty card reader slot.
    """
    import ctypes

    volume_name = ctypes.create_unicode_buffer(261)
    file_system_name = ctypes.create_unicode_buffer(261)
    serial_number = ctypes.c_ulong(0)
    max_component_length = ctypes.c_ulong(0)
    file_system_flags = ctypes.c_ulong(0)

    try:
        success = ctypes.windll.kernel32.GetVolumeInformationW(  # type: ignore[attr-defined]
            ctypes.c_wchar_p(str(root)),
            volume_name,
            len(volume_name),
            ctypes.byref(serial_number),
            ctypes.byref(max_component_length),
            ctypes.byref(file_system_flags),
            file_system_name,
            len(file_system_name),
        )
    except (AttributeError, OSError) as e:
        logger.debug("volume_label_query_failed", root=str(root), error=str(e))
        return None

    if not success:
        return None
    return str(volume_name.value)


def parse_lsblk_mount_points(output: str) -> list[Path]:
    """Extract mount points of FAT partitions from ``lsblk -J`` output.

    Child devices (partitions) are walked depth first, in listing order.

    Raises:
        ValueError: If the output is not the expected JSON document
    """
    data = json.loads(output)
    if not isinstance(data, dict) or not isinstance(data.get("blockdevices"), list):
        raise ValueError("lsblk output has no blockdevices list")

    mount_points: list[Path] = []

    def walk(devices: list[Any]) -> None:
        for device in devices:
            if not isinstance(device, dict):
                continue
            if device.get("fstype") == "vfat":
                mounts = device.get("mountpoint")
                if mounts is None:
                    mounts = device.get("mountpoints")
                if isinstance(mounts, str):
                    mounts = [mounts]
                for mount in mounts or []:
                    if mount:
                        mount_points.append(Path(mount))
            children = device.get("children")
            if isinstance(children, list):
                walk(children)

    walk(data["blockdevices"])
    return mount_points


class WindowsDriveLocator:
    """Find the bootloader volume by label among lettered drives."""

    def __init__(
        self,
        drive_roots: Iterable[Path] | None = None,
        label_reader: Callable[[Path], str | None] | None = None,
    ) -> None:
        if drive_roots is None:
            drive_roots = [Path(f"{letter}:\\") for letter in string.ascii_uppercase]
        self.drive_roots = list(drive_roots)
        self._read_label = label_reader or read_windows_volume_label

    def find(self) -> Path | None:
        for root in self.drive_roots:
            if not is_directory(root):
                continue
            if self._read_label(root) == RP2_VOLUME_LABEL:
                return root
        return None


class MacOSDriveLocator:
    """Find the bootloader volume by its directory name under /Volumes."""

    def __init__(self, volumes_dir: Path = Path("/Volumes")) -> None:
        self.volumes_dir = volumes_dir

    def find(self) -> Path | None:
        try:
            entries = sorted(self.volumes_dir.iterdir())
        except OSError:
            return None

        for entry in entries:
            if entry.name == RP2_VOLUME_LABEL and is_directory(entry):
                return entry
        return None


class LinuxDriveLocator:
    """Find the bootloader volume by marker file, with an lsblk fallback."""

    def __init__(
        self,
        user: str | None = None,
        extra_mount_points: Iterable[Path] | None = None,
        use_lsblk: bool = True,
    ) -> None:
        self.user = user if user is not None else os.environ.get("USER")
        self.extra_mount_points = list(extra_mount_points or [])
        self.use_lsblk = use_lsblk

    def candidate_mount_points(self) -> list[Path]:
        """List conventional automount locations for the volume."""
        candidates = []
        if self.user:
            candidates.extend(
                [
                    Path("/media") / self.user / RP2_VOLUME_LABEL,
                    Path("/run/media") / self.user / RP2_VOLUME_LABEL,
                ]
            )
        candidates.append(Path("/mnt") / RP2_VOLUME_LABEL)
        candidates.extend(self.extra_mount_points)
        return candidates

    def find(self) -> Path | None:
        for mount_point in self.candidate_mount_points():
            if is_directory(mount_point) and has_marker_file(mount_point):
                return mount_point

        if self.use_lsblk:
            return self._find_with_lsblk()
        return None

    def _find_with_lsblk(self) -> Path | None:
        try:
            result = subprocess.run(
                LSBLK_COMMAND,
                capture_output=True,
                text=True,
                # Mount points are raw bytes; a stray non-UTF-8 name must not raise
                errors="replace",
                timeout=LSBLK_TIMEOUT,
                check=False,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            logger.debug("lsblk_unavailable", error=str(e))
            return None

        if result.returncode != 0:
            logger.debug("lsblk_failed", returncode=result.returncode)
            return None

        try:
            mount_points = parse_lsblk_mount_points(result.stdout)
        except ValueError as e:
            exc_info = logger.isEnabledFor(logging.DEBUG)
            logger.warning("lsblk_output_unparseable", error=str(e), exc_info=exc_info)
            return None

        for mount_point in mount_points:
            if has_marker_file(mount_point):
                return mount_point
        return None


class StubDriveLocator:
    """Locator for unsupported platforms; never finds a volume."""

    def __init__(self, system: str = "") -> None:
        self.system = system or platform.system()
        logger.warning("drive_discovery_unsupported", platform=self.system)

    def find(self) -> Path | None:
        return None


def create_drive_locator(system: str | None = None) -> DriveLocatorProtocol:
    """Factory function to create the drive locator for this platform."""
    system = system or platform.system()

    if system == "Windows":
        logger.debug("creating_windows_drive_locator")
        return WindowsDriveLocator()
    elif system == "Darwin":
        logger.debug("creating_macos_drive_locator")
        return MacOSDriveLocator()
    elif system == "Linux":
        logger.debug("creating_linux_drive_locator")
        return LinuxDriveLocator()
    else:
        return StubDriveLocator(system)
