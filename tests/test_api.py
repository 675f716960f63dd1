"""Tests for the BoxUpdater facade."""

import threading
from unittest.mock import Mock

import pytest

from boxupdater.api import BoxUpdater, create_box_updater
from boxupdater.config import BoxUpdaterSettings, FlashTimings
from boxupdater.core.errors import DeviceNotFoundError, FlashCancelledError
from boxupdater.firmware.flash import FIRMWARE_FILENAME
from boxupdater.releases import RawRelease


WAIT = 5.0


@pytest.fixture
def release_client():
    client = Mock()
    client.fetch_releases.return_value = [
        RawRelease.model_validate(
            {
                "tag_name": "v1.0.0",
                "assets": [
                    {"name": "fw.uf2", "browser_download_url": "https://dl.test/fw.uf2"}
                ],
            }
        )
    ]
    return client


@pytest.fixture
def settings() -> BoxUpdaterSettings:
    return BoxUpdaterSettings(flash=FlashTimings(disconnect_max_polls=2))


@pytest.fixture
def updater(settings, scripted_locator, fake_clock, release_client, rp2_volume):
    locator = scripted_locator([rp2_volume, None])
    with create_box_updater(
        settings,
        locator=locator,
        clock=fake_clock,
        release_client=release_client,
    ) as updater:
        yield updater


class TestFacade:
    def test_check_drive(self, updater):
        assert updater.check_drive() is True

    def test_flash_install(self, updater, rp2_volume):
        updater.flash(False, firmware=b"firmware")

        assert (rp2_volume / FIRMWARE_FILENAME).read_bytes() == b"firmware"

    def test_list_repositories_uses_bundled_config(self, updater):
        names = [repo.name for repo in updater.list_repositories()]

        assert "HayBox" in names
        assert "GP2040-CE" in names

    def test_list_releases_is_cached(self, updater, release_client):
        first = updater.list_releases("HayBox")
        second = updater.list_releases("HayBox")

        assert first == second
        assert first[0].download_url == "https://dl.test/fw.uf2"
        release_client.fetch_releases.assert_called_once_with("JonnyHaystack", "HayBox")

    def test_download_delegates(self):
        downloader = Mock()
        downloader.download.return_value = b"data"
        updater = BoxUpdater(
            flash_service=Mock(), downloader=downloader, release_service=Mock()
        )
        on_progress = Mock()

        assert updater.download("https://x", on_progress) == b"data"
        downloader.download.assert_called_once_with(
            "https://x", on_progress=on_progress
        )
        updater.close()


class TestBackgroundOperations:
    def test_submit_list_releases(self, updater):
        future = updater.submit_list_releases("HayBox")

        assert future.result(WAIT)[0].name == "fw.uf2"

    def test_submit_flash_reports_errors_through_future(
        self, settings, scripted_locator, fake_clock
    ):
        with create_box_updater(
            settings, locator=scripted_locator([None]), clock=fake_clock
        ) as updater:
            future = updater.submit_flash(False, b"fw")

            assert isinstance(future.exception(WAIT), DeviceNotFoundError)

    def test_submit_flash_can_be_cancelled(
        self, settings, scripted_locator, rp2_volume
    ):
        cancel = threading.Event()
        started = threading.Event()

        class BlockingClock:
            def monotonic(self) -> float:
                return 0.0

            def sleep(self, seconds: float) -> None:
                started.set()
                cancel.wait(WAIT)

        with create_box_updater(
            settings,
            locator=scripted_locator([rp2_volume]),
            clock=BlockingClock(),
        ) as updater:
            future = updater.submit_flash(False, b"fw", cancel)
            assert started.wait(WAIT)
            cancel.set()

            assert isinstance(future.exception(WAIT), FlashCancelledError)

    def test_submit_check_drive_and_repositories(self, updater):
        assert updater.submit_check_drive().result(WAIT) is True
        assert updater.submit_list_repositories().result(WAIT)
