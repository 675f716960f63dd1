"""Facade over the flash, download and release services.

``create_box_updater`` wires every service from one settings object. The
blocking operations also have ``submit_*`` variants that run on a worker
pool and return a ``Future``, so a caller's own thread stays responsive
while a flash is polling the device.
"""

import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any

from boxupdater.config import BoxUpdaterSettings, Repository, load_repositories
from boxupdater.core.cache import CacheManager, create_memory_cache
from boxupdater.core.clock import Clock
from boxupdater.core.structlog_logger import StructlogMixin
from boxupdater.firmware.download import Downloader, ProgressCallback, create_downloader
from boxupdater.firmware.flash import FlashService, create_flash_service
from boxupdater.protocols import DriveLocatorProtocol
from boxupdater.releases import (
    GitHubReleaseClient,
    Release,
    ReleaseService,
    create_release_client,
)


DEFAULT_MAX_WORKERS = 4


class BoxUpdater(StructlogMixin):
    """Single entry point used by the presentation layer."""

    def __init__(
        self,
        flash_service: FlashService,
        downloader: Downloader,
        release_service: ReleaseService,
        max_workers: int = DEFAULT_MAX_WORKERS,
    ) -> None:
        self.flash_service = flash_service
        self.downloader = downloader
        self.release_service = release_service
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="boxupdater"
        )

    def check_drive(self) -> bool:
        return self.flash_service.check_drive()

    def flash(
        self,
        erase_requested: bool,
        firmware: bytes | None = None,
        cancel: threading.Event | None = None,
    ) -> None:
        self.flash_service.flash(erase_requested, firmware=firmware, cancel=cancel)

    def download(self, url: str, on_progress: ProgressCallback | None = None) -> bytes:
        return self.downloader.download(url, on_progress=on_progress)

    def list_repositories(self) -> list[Repository]:
        return self.release_service.repositories()

    def list_releases(self, repo_name: str) -> list[Release]:
        return self.release_service.releases(repo_name)

    # Background variants

    def submit_check_drive(self) -> "Future[bool]":
        return self._submit(self.check_drive)

    def submit_flash(
        self,
        erase_requested: bool,
        firmware: bytes | None = None,
        cancel: threading.Event | None = None,
    ) -> "Future[None]":
        """Run ``flash`` on a worker thread.

        Set ``cancel`` to stop the post-write polling early; the future then
        fails with ``FlashCancelledError``.
        """
        return self._submit(self.flash, erase_requested, firmware, cancel)

    def submit_download(
        self, url: str, on_progress: ProgressCallback | None = None
    ) -> "Future[bytes]":
        """Run ``download`` on a worker thread.

        ``on_progress`` is called from the worker thread.
        """
        return self._submit(self.download, url, on_progress)

    def submit_list_repositories(self) -> "Future[list[Repository]]":
        return self._submit(self.list_repositories)

    def submit_list_releases(self, repo_name: str) -> "Future[list[Release]]":
        return self._submit(self.list_releases, repo_name)

    def _submit(self, fn: Any, *args: Any) -> Future[Any]:
        self.logger.debug("operation_submitted", operation=fn.__name__)
        return self._executor.submit(fn, *args)

    def close(self, wait: bool = True) -> None:
        """Shut down the worker pool."""
        self._executor.shutdown(wait=wait)

    def __enter__(self) -> "BoxUpdater":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def create_box_updater(
    settings: BoxUpdaterSettings | None = None,
    locator: DriveLocatorProtocol | None = None,
    clock: Clock | None = None,
    cache: CacheManager | None = None,
    release_client: GitHubReleaseClient | None = None,
    max_workers: int = DEFAULT_MAX_WORKERS,
) -> BoxUpdater:
    """Factory function to create a BoxUpdater.

    Args:
        settings: Runtime settings. If None, read from the environment.
        locator: Drive locator. If None, uses the one for this platform.
        clock: Time source for device polling
        cache: Shared release cache. If None, a memory cache is created.
        release_client: Release API client. If None, built from settings.
        max_workers: Size of the worker pool for ``submit_*`` calls

    Returns:
        Configured BoxUpdater instance
    """
    if settings is None:
        settings = BoxUpdaterSettings()

    flash_service = create_flash_service(
        locator=locator,
        clock=clock,
        timings=settings.flash,
        nuke_image_path=settings.nuke_image_path,
    )
    downloader = create_downloader(
        user_agent=settings.user_agent,
        timeout=settings.request_timeout,
        chunk_size=settings.download_chunk_size,
    )
    release_service = ReleaseService(
        cache=cache
        or create_memory_cache(default_ttl_seconds=settings.cache_ttl_seconds),
        client=release_client
        or create_release_client(
            base_url=settings.api_base_url,
            user_agent=settings.user_agent,
            timeout=settings.request_timeout,
        ),
        repository_loader=lambda: load_repositories(settings.repositories_file),
    )
    return BoxUpdater(
        flash_service=flash_service,
        downloader=downloader,
        release_service=release_service,
        max_workers=max_workers,
    )
