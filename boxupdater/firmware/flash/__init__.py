"""Flash domain for writing firmware to RP2 bootloader volumes.

This package contains:
- Flash service for erase and install operations
- Device wait service and its polling state machine
- OS-specific bootloader volume discovery
"""

from .device_wait_service import DeviceWaitService, create_device_wait_service
from .models import FIRMWARE_FILENAME, NUKE_FILENAME, FlashMode
from .os_adapters import (
    RP2_VOLUME_LABEL,
    UF2_MARKER_FILE,
    LinuxDriveLocator,
    MacOSDriveLocator,
    StubDriveLocator,
    WindowsDriveLocator,
    create_drive_locator,
)
from .service import FlashService, create_flash_service
from .wait_state import PollingWaitState, WaitOutcome


__all__ = [
    # Service classes and factories
    "FlashService",
    "create_flash_service",
    "DeviceWaitService",
    "create_device_wait_service",
    "PollingWaitState",
    "WaitOutcome",
    # Models and constants
    "FlashMode",
    "FIRMWARE_FILENAME",
    "NUKE_FILENAME",
    "RP2_VOLUME_LABEL",
    "UF2_MARKER_FILE",
    # Drive discovery
    "LinuxDriveLocator",
    "MacOSDriveLocator",
    "StubDriveLocator",
    "WindowsDriveLocator",
    "create_drive_locator",
]
