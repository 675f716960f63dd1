"""Client for the GitHub Releases API."""

import logging
from typing import Any

import requests
from pydantic import TypeAdapter, ValidationError

from boxupdater.core.errors import ReleaseLookupError
from boxupdater.core.structlog_logger import get_struct_logger
from boxupdater.releases.models import RawRelease


logger = get_struct_logger(__name__)

_RELEASE_LIST = TypeAdapter(list[RawRelease])


class GitHubReleaseClient:
    """Fetches the release list of a repository.

    The API rejects requests without a ``User-Agent`` header, so every
    request carries one.
    """

    BASE_URL = "https://api.github.com"

    def __init__(
        self,
        base_url: str = BASE_URL,
        user_agent: str = "boxupdater",
        timeout: float = 30.0,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "User-Agent": user_agent,
                "Accept": "application/vnd.github+json",
            }
        )

    def releases_url(self, owner: str, name: str) -> str:
        """Build the release-listing URL of a repository."""
        return f"{self.base_url}/repos/{owner}/{name}/releases"

    def fetch_releases(self, owner: str, name: str) -> list[RawRelease]:
        """Fetch the releases of ``owner/name`` in API order.

        Raises:
            ReleaseLookupError: On transport errors, HTTP errors or a payload
                that is not a release list
        """
        url = self.releases_url(owner, name)
        logger.debug("fetching_releases", url=url)

        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
            payload: Any = response.json()
        except requests.exceptions.HTTPError as e:
            self._log_failure(url, e)
            status = e.response.status_code if e.response is not None else "unknown"
            raise ReleaseLookupError(
                f"Release API returned HTTP {status} for {owner}/{name}"
            ) from e
        except requests.exceptions.RequestException as e:
            self._log_failure(url, e)
            raise ReleaseLookupError(
                f"Failed to fetch releases for {owner}/{name}: {e}"
            ) from e
        except ValueError as e:
            self._log_failure(url, e)
            raise ReleaseLookupError(
                f"Release API returned invalid JSON for {owner}/{name}"
            ) from e

        try:
            releases = _RELEASE_LIST.validate_python(payload)
        except ValidationError as e:
            self._log_failure(url, e)
            raise ReleaseLookupError(
                f"Unexpected release payload for {owner}/{name}: {e}"
            ) from e

        logger.info("releases_fetched", repo=f"{owner}/{name}", count=len(releases))
        return releases

    @staticmethod
    def _log_failure(url: str, error: Exception) -> None:
        exc_info = logger.isEnabledFor(logging.DEBUG)
        logger.error(
            "release_fetch_failed", url=url, error=str(error), exc_info=exc_info
        )


def create_release_client(
    base_url: str = GitHubReleaseClient.BASE_URL,
    user_agent: str = "boxupdater",
    timeout: float = 30.0,
) -> GitHubReleaseClient:
    """Factory function to create a GitHubReleaseClient."""
    return GitHubReleaseClient(base_url=base_url, user_agent=user_agent, timeout=timeout)
