"""Tests for device wait service functionality."""

import threading
from pathlib import Path

import pytest

from boxupdater.config.models import FlashTimings
from boxupdater.core.errors import (
    DeviceDidNotDisconnectError,
    DeviceDidNotReconnectError,
    FlashCancelledError,
)
from boxupdater.firmware.flash.device_wait_service import (
    DeviceWaitService,
    create_device_wait_service,
)


VOLUME = Path("/media/user/RPI-RP2")
REMOUNTED = Path("/media/user/RPI-RP21")


@pytest.fixture
def make_service(scripted_locator, fake_clock):
    """Build a DeviceWaitService over a scripted locator and the fake clock."""

    def factory(results, timings=None):
        locator = scripted_locator(results)
        return DeviceWaitService(locator, clock=fake_clock, timings=timings), locator

    return factory


class TestWaitForDisconnect:
    def test_returns_once_volume_is_gone(self, make_service, fake_clock):
        service, locator = make_service([VOLUME, VOLUME, VOLUME, None])

        service.wait_for_disconnect()

        assert locator.calls == 4
        assert fake_clock.sleeps == [0.5, 0.5, 0.5]

    def test_already_gone_does_not_sleep(self, make_service, fake_clock):
        service, locator = make_service([None])

        service.wait_for_disconnect()

        assert locator.calls == 1
        assert fake_clock.sleeps == []

    def test_still_present_after_twenty_polls(self, make_service, fake_clock):
        service, locator = make_service([VOLUME])

        with pytest.raises(DeviceDidNotDisconnectError):
            service.wait_for_disconnect()

        assert fake_clock.sleeps == [0.5] * 20
        assert locator.calls == 21
        assert sum(fake_clock.sleeps) == pytest.approx(10.0)

    def test_custom_budget(self, make_service, fake_clock):
        timings = FlashTimings(disconnect_poll_interval=0.25, disconnect_max_polls=3)
        service, locator = make_service([VOLUME], timings)

        with pytest.raises(DeviceDidNotDisconnectError):
            service.wait_for_disconnect()

        assert fake_clock.sleeps == [0.25] * 3

    def test_cancelled_before_first_check(self, make_service, fake_clock):
        service, locator = make_service([VOLUME])
        cancel = threading.Event()
        cancel.set()

        with pytest.raises(FlashCancelledError):
            service.wait_for_disconnect(cancel)

        assert locator.calls == 0

    def test_cancelled_while_polling(self, scripted_locator, fake_clock):
        cancel = threading.Event()

        class CancellingLocator(scripted_locator):
            def find(self):
                result = super().find()
                if self.calls == 3:
                    cancel.set()
                return result

        locator = CancellingLocator([VOLUME])
        service = DeviceWaitService(locator, clock=fake_clock)

        with pytest.raises(FlashCancelledError):
            service.wait_for_disconnect(cancel)

        assert locator.calls == 3


class TestWaitForDriveCycle:
    def test_waits_for_absence_then_return(self, make_service, fake_clock):
        service, locator = make_service([VOLUME, VOLUME, None, None, None, REMOUNTED])

        assert service.wait_for_drive_cycle() == REMOUNTED

        assert locator.calls == 6
        # two sleeps before absence, two before the return, then the settle delay
        assert fake_clock.sleeps == [0.1, 0.1, 0.1, 0.1, 0.5]

    def test_reconnect_timeout(self, make_service, fake_clock):
        service, locator = make_service([None])

        with pytest.raises(DeviceDidNotReconnectError):
            service.wait_for_drive_cycle()

        # one absence check, then 101 reconnect checks with 100 sleeps
        assert locator.calls == 102
        assert fake_clock.sleeps == [0.1] * 100

    def test_bounded_absence_wait(self, make_service, fake_clock):
        timings = FlashTimings(absent_max_polls=5)
        service, _ = make_service([VOLUME], timings)

        with pytest.raises(DeviceDidNotDisconnectError):
            service.wait_for_drive_cycle()

        assert fake_clock.sleeps == [0.1] * 5

    def test_cancel_during_reconnect(self, scripted_locator, fake_clock):
        cancel = threading.Event()

        class CancellingLocator(scripted_locator):
            def find(self):
                result = super().find()
                if self.calls == 5:
                    cancel.set()
                return result

        locator = CancellingLocator([None])
        service = DeviceWaitService(locator, clock=fake_clock)

        with pytest.raises(FlashCancelledError):
            service.wait_for_drive_cycle(cancel)

        assert locator.calls == 5


def test_factory_uses_defaults(scripted_locator, fake_clock):
    service = create_device_wait_service(scripted_locator([None]), clock=fake_clock)

    assert service.timings == FlashTimings()
    assert service.clock is fake_clock
