"""Flash domain constants and models."""

from enum import Enum


FIRMWARE_FILENAME = "firmware.uf2"
NUKE_FILENAME = "flash_nuke.uf2"


class FlashMode(str, Enum):
    """What a flash operation writes to the bootloader volume."""

    ERASE = "erase"
    INSTALL = "install"

    @property
    def target_filename(self) -> str:
        """Name of the UF2 file written at the volume root."""
        return NUKE_FILENAME if self is FlashMode.ERASE else FIRMWARE_FILENAME

    @property
    def waits_for_reconnect(self) -> bool:
        """Erase reboots back into the bootloader; installed firmware does not."""
        return self is FlashMode.ERASE
