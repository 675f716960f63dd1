"""Waiting for the bootloader volume to disappear and come back."""

import threading
from collections.abc import Callable
from pathlib import Path

from boxupdater.config.models import FlashTimings
from boxupdater.core.clock import Clock, create_system_clock
from boxupdater.core.errors import (
    DeviceDidNotDisconnectError,
    DeviceDidNotReconnectError,
    FlashCancelledError,
)
from boxupdater.core.structlog_logger import get_struct_logger
from boxupdater.firmware.flash.wait_state import PollingWaitState, WaitOutcome
from boxupdater.protocols import DriveLocatorProtocol


logger = get_struct_logger(__name__)


class DeviceWaitService:
    """Polls a drive locator until the volume changes state.

    The volume is re-checked on every poll; a previously returned path is
    never trusted because the bootloader may remount it elsewhere.
    """

    def __init__(
        self,
        locator: DriveLocatorProtocol,
        clock: Clock | None = None,
        timings: FlashTimings | None = None,
    ) -> None:
        """Initialize device wait service.

        Args:
            locator: Drive locator used for every check
            clock: Time source for poll sleeps. If None, uses the system clock.
            timings: Poll intervals and limits. If None, uses the defaults.
        """
        self.locator = locator
        self.clock = clock or create_system_clock()
        self.timings = timings or FlashTimings()

    def _poll_until(
        self,
        state: PollingWaitState,
        condition: Callable[[], bool],
        cancel: threading.Event | None,
    ) -> WaitOutcome:
        while not state.is_done:
            if cancel is not None and cancel.is_set():
                state.cancel()
                break
            if state.record_check(condition()) is not WaitOutcome.WAITING:
                break
            self.clock.sleep(state.poll_interval)
            state.record_sleep()

        logger.debug(
            "device_wait_finished",
            wait=state.name,
            outcome=state.outcome.value,
            checks=state.checks,
        )
        return state.outcome

    def _is_present(self) -> bool:
        return self.locator.find() is not None

    def _is_absent(self) -> bool:
        return self.locator.find() is None

    def wait_for_disconnect(self, cancel: threading.Event | None = None) -> None:
        """Wait until the bootloader volume is gone after a write.

        Raises:
            DeviceDidNotDisconnectError: If the volume is still present after
                ``disconnect_max_polls`` intervals
            FlashCancelledError: If ``cancel`` was set
        """
        state = PollingWaitState(
            name="disconnect",
            poll_interval=self.timings.disconnect_poll_interval,
            max_polls=self.timings.disconnect_max_polls,
        )
        outcome = self._poll_until(state, self._is_absent, cancel)
        if outcome is WaitOutcome.CANCELLED:
            raise FlashCancelledError()
        if outcome is WaitOutcome.TIMED_OUT:
            logger.warning(
                "device_did_not_disconnect", waited_seconds=state.elapsed_estimate
            )
            raise DeviceDidNotDisconnectError()
        logger.info("device_disconnected", waited_seconds=state.elapsed_estimate)

    def wait_for_drive_cycle(self, cancel: threading.Event | None = None) -> Path:
        """Wait for the volume to go away and a bootloader volume to reappear.

        Returns:
            Root of the remounted volume

        Raises:
            DeviceDidNotDisconnectError: If a bounded absence wait times out
            DeviceDidNotReconnectError: If no volume shows up in time
            FlashCancelledError: If ``cancel`` was set
        """
        absent = PollingWaitState(
            name="absent",
            poll_interval=self.timings.absent_poll_interval,
            max_polls=self.timings.absent_max_polls,
        )
        outcome = self._poll_until(absent, self._is_absent, cancel)
        if outcome is WaitOutcome.CANCELLED:
            raise FlashCancelledError()
        if outcome is WaitOutcome.TIMED_OUT:
            raise DeviceDidNotDisconnectError()

        found: list[Path] = []

        def reappeared() -> bool:
            drive = self.locator.find()
            if drive is None:
                return False
            found.append(drive)
            return True

        reconnect = PollingWaitState(
            name="reconnect",
            poll_interval=self.timings.reconnect_poll_interval,
            max_polls=self.timings.reconnect_max_attempts,
        )
        outcome = self._poll_until(reconnect, reappeared, cancel)
        if outcome is WaitOutcome.CANCELLED:
            raise FlashCancelledError()
        if outcome is WaitOutcome.TIMED_OUT:
            logger.warning(
                "device_did_not_reconnect", waited_seconds=reconnect.elapsed_estimate
            )
            raise DeviceDidNotReconnectError()

        # Give the remounted volume a moment to settle
        self.clock.sleep(self.timings.settle_delay)
        logger.info("device_reconnected", path=str(found[-1]))
        return found[-1]


def create_device_wait_service(
    locator: DriveLocatorProtocol,
    clock: Clock | None = None,
    timings: FlashTimings | None = None,
) -> DeviceWaitService:
    """Factory function to create DeviceWaitService."""
    return DeviceWaitService(locator, clock=clock, timings=timings)
