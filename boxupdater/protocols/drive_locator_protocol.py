"""Protocol definition for bootloader drive discovery."""

from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class DriveLocatorProtocol(Protocol):
    """Finds the mounted RPI-RP2 bootloader volume.

    Implementations only read from the system and must be safe to call
    repeatedly and from several threads.
    """

    def find(self) -> Path | None:
        """Return the root of the bootloader volume, or None if absent."""
        ...
