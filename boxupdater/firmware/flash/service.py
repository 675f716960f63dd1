"""Flash service writing UF2 images to the RPI-RP2 bootloader volume."""

import logging
import os
import threading
from pathlib import Path

from boxupdater.config.models import FlashTimings
from boxupdater.core.clock import Clock
from boxupdater.core.errors import DeviceNotFoundError, WriteFailedError
from boxupdater.core.structlog_logger import StructlogMixin
from boxupdater.firmware.flash.device_wait_service import (
    DeviceWaitService,
    create_device_wait_service,
)
from boxupdater.firmware.flash.models import FlashMode
from boxupdater.firmware.flash.nuke_image import load_nuke_image
from boxupdater.firmware.flash.os_adapters import create_drive_locator
from boxupdater.protocols import DriveLocatorProtocol


class FlashService(StructlogMixin):
    """USB mass-storage flash service for RP2 bootloaders.

    A flash operation is strictly sequential: locate the volume, write one
    UF2 file to its root, wait for the device to drop the volume and, for an
    erase, wait for the bootloader volume to come back.
    """

    def __init__(
        self,
        locator: DriveLocatorProtocol | None = None,
        wait_service: DeviceWaitService | None = None,
        clock: Clock | None = None,
        timings: FlashTimings | None = None,
        nuke_image: bytes | None = None,
        nuke_image_path: Path | None = None,
    ) -> None:
        """Initialize flash service with dependencies.

        Args:
            locator: Drive locator. If None, uses the one for this platform.
            wait_service: Device wait service. If None, one is built on ``locator``.
            clock: Time source for the wait service
            timings: Poll intervals and limits for the wait service
            nuke_image: Erase image bytes, overriding the bundled resource
            nuke_image_path: File to read the erase image from
        """
        self.locator = locator or create_drive_locator()
        self.wait_service = wait_service or create_device_wait_service(
            self.locator, clock=clock, timings=timings
        )
        self._nuke_image = nuke_image
        self._nuke_image_path = nuke_image_path

    def check_drive(self) -> bool:
        """Check if a bootloader volume is currently mounted."""
        return self.locator.find() is not None

    def flash(
        self,
        erase_requested: bool,
        firmware: bytes | None = None,
        cancel: threading.Event | None = None,
    ) -> None:
        """Erase the device or install a firmware image.

        Args:
            erase_requested: Write the nuke image instead of ``firmware``
            firmware: UF2 image to install; required unless erasing
            cancel: Event that stops the post-write waits when set

        Raises:
            ValueError: If neither erase nor firmware was requested
            DeviceNotFoundError: If no bootloader volume is mounted
            WriteFailedError: If the UF2 file could not be written
            DeviceDidNotDisconnectError: If the volume stayed mounted
            DeviceDidNotReconnectError: If the volume did not return after erase
            FlashCancelledError: If ``cancel`` was set while waiting
            ConfigError: If the nuke image is unavailable
        """
        install_image: bytes | None = None
        if erase_requested:
            mode = FlashMode.ERASE
        elif firmware is None:
            raise ValueError("firmware bytes are required unless erase is requested")
        else:
            mode = FlashMode.INSTALL
            install_image = firmware
        log = self.logger.bind(mode=mode.value)

        drive = self.locator.find()
        if drive is None:
            log.info("flash_device_not_found")
            raise DeviceNotFoundError()

        data = (
            install_image if install_image is not None else self._get_nuke_image()
        )

        target = drive / mode.target_filename
        self._write_file(target, data)
        log.info("uf2_written", path=str(target), size=len(data))

        self.wait_service.wait_for_disconnect(cancel)

        if mode.waits_for_reconnect:
            self.wait_service.wait_for_drive_cycle(cancel)

        log.info("flash_completed")

    def _get_nuke_image(self) -> bytes:
        if self._nuke_image is None:
            self._nuke_image = load_nuke_image(self._nuke_image_path)
        return self._nuke_image

    def _write_file(self, target: Path, data: bytes) -> None:
        try:
            with target.open("wb") as f:
                f.write(data)
                f.flush()
                self._sync_file(f.fileno(), target)
        except OSError as e:
            self.log_error_with_context("uf2_write_failed", e, path=str(target))
            raise WriteFailedError(target.name, e) from e

    def _sync_file(self, fileno: int, target: Path) -> None:
        # The bootloader may reboot as soon as the last block lands, which
        # can make fsync fail even though the image was received.
        try:
            os.fsync(fileno)
        except OSError as e:
            exc_info = self.logger.isEnabledFor(logging.DEBUG)
            self.logger.warning(
                "uf2_fsync_failed", path=str(target), error=str(e), exc_info=exc_info
            )


def create_flash_service(
    locator: DriveLocatorProtocol | None = None,
    clock: Clock | None = None,
    timings: FlashTimings | None = None,
    nuke_image_path: Path | None = None,
) -> FlashService:
    """Factory function to create a FlashService."""
    return FlashService(
        locator=locator,
        clock=clock,
        timings=timings,
        nuke_image_path=nuke_image_path,
    )
