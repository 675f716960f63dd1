"""Test fixtures for CLI tests."""

import os
from concurrent.futures import Future
from unittest.mock import Mock, patch

import pytest

from boxupdater.api import BoxUpdater
from boxupdater.releases.models import Release


def make_done_future(
    result=None, exception: BaseException | None = None
) -> Future:
    future: Future = Future()
    if exception is not None:
        future.set_exception(exception)
    else:
        future.set_result(result)
    return future


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path):
    """Keep BOXUPDATER_ variables and .env files out of CLI runs."""
    for key in list(os.environ):
        if key.startswith("BOXUPDATER_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def done_future():
    """Return a factory for futures that are already resolved."""
    return make_done_future


@pytest.fixture
def sample_releases() -> list[Release]:
    return [
        Release(
            name="HayBox-pico.uf2",
            tag_name="v3.0.0",
            download_url="https://dl.test/v3.0.0/HayBox-pico.uf2",
        ),
        Release(
            name="HayBox-pico.uf2",
            tag_name="v2.9.0",
            download_url="https://dl.test/v2.9.0/HayBox-pico.uf2",
        ),
        Release(
            name="HayBox-rp2040.uf2",
            tag_name="v2.9.0",
            download_url="https://dl.test/v2.9.0/HayBox-rp2040.uf2",
        ),
    ]


@pytest.fixture
def mock_updater(sample_repositories, sample_releases):
    """BoxUpdater double installed in place of the real factory."""
    updater = Mock(spec=BoxUpdater)
    updater.check_drive.return_value = True
    updater.list_repositories.return_value = sample_repositories
    updater.list_releases.return_value = sample_releases
    updater.download.return_value = b"UF2 data"
    updater.submit_flash.return_value = make_done_future()

    with patch("boxupdater.cli.app.create_box_updater", return_value=updater):
        yield updater
