"""Streaming firmware downloader with progress reporting."""

import logging

import requests

from boxupdater.core.errors import TransferFailedError
from boxupdater.core.structlog_logger import get_struct_logger
from boxupdater.firmware.download.models import (
    DownloadProgress,
    ProgressCallback,
    compute_progress,
)


logger = get_struct_logger(__name__)

DEFAULT_CHUNK_SIZE = 8192


class Downloader:
    """Download a URL into memory, reporting progress per received chunk."""

    def __init__(
        self,
        session: requests.Session | None = None,
        user_agent: str = "boxupdater",
        timeout: float = 30.0,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": user_agent})
        self.timeout = timeout
        self.chunk_size = chunk_size

    def download(self, url: str, on_progress: ProgressCallback | None = None) -> bytes:
        """Download ``url`` and return the full body.

        Progress is only reported when the server declares a content length.

        Args:
            url: URL to fetch
            on_progress: Called with a DownloadProgress after every chunk

        Returns:
            The response body

        Raises:
            TransferFailedError: On any transport or HTTP error
        """
        logger.info("download_started", url=url)
        try:
            response = self.session.get(url, stream=True, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            self._log_failure(url, e)
            raise TransferFailedError(url, e) from e

        try:
            response.raise_for_status()
            total = self._content_length(response)
            buffer = bytearray()

            for chunk in response.iter_content(chunk_size=self.chunk_size):
                if not chunk:
                    continue
                buffer.extend(chunk)
                if total and on_progress is not None:
                    on_progress(
                        DownloadProgress(progress=compute_progress(len(buffer), total))
                    )
        except requests.exceptions.RequestException as e:
            self._log_failure(url, e)
            raise TransferFailedError(url, e) from e
        finally:
            response.close()

        logger.info("download_completed", url=url, size=len(buffer), total=total)
        return bytes(buffer)

    @staticmethod
    def _content_length(response: requests.Response) -> int | None:
        header = response.headers.get("Content-Length")
        if header is None:
            return None
        try:
            length = int(header)
        except ValueError:
            return None
        return length if length > 0 else None

    @staticmethod
    def _log_failure(url: str, error: Exception) -> None:
        exc_info = logger.isEnabledFor(logging.DEBUG)
        logger.error("download_failed", url=url, error=str(error), exc_info=exc_info)


def create_downloader(
    user_agent: str = "boxupdater",
    timeout: float = 30.0,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> Downloader:
    """Factory function to create a Downloader with its own session."""
    return Downloader(user_agent=user_agent, timeout=timeout, chunk_size=chunk_size)
