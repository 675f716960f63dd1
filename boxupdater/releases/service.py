"""Cached lookup of configured repositories and their firmware releases."""

import re
from collections.abc import Callable

from boxupdater.config.models import Repository
from boxupdater.config.repositories import find_repository, load_repositories
from boxupdater.core.cache import CacheKey, CacheManager, create_memory_cache
from boxupdater.core.errors import InvalidFilterError, RepositoryNotFoundError
from boxupdater.core.structlog_logger import get_struct_logger
from boxupdater.releases.client import GitHubReleaseClient, create_release_client
from boxupdater.releases.models import RawRelease, Release


logger = get_struct_logger(__name__)

REPOSITORIES_CACHE_KEY = "repositories"


def releases_cache_key(repository: Repository) -> str:
    """Cache key of the resolved release list of a repository."""
    return CacheKey.from_parts("releases", repository.label)


def compile_asset_filter(asset_filter: str) -> re.Pattern[str]:
    """Compile a repository asset filter.

    Raises:
        InvalidFilterError: If the pattern is not a valid regular expression
    """
    try:
        return re.compile(asset_filter)
    except re.error as e:
        raise InvalidFilterError(asset_filter, e) from e


def select_release_assets(
    raw_releases: list[RawRelease], pattern: re.Pattern[str]
) -> list[Release]:
    """Flatten releases into one Release per asset whose name matches.

    Order follows the API release order, then asset order within a release.
    Assets with the same name in different releases are all kept.
    """
    return [
        Release(
            name=asset.name,
            tag_name=release.tag_name,
            download_url=asset.browser_download_url,
        )
        for release in raw_releases
        for asset in release.assets
        if pattern.search(asset.name)
    ]


class ReleaseService:
    """TTL-cached access to repositories and their releases.

    The cache is injected so one instance can be shared process-wide. Values
    are stored as tuples of frozen models and handed out as fresh lists, so
    callers cannot change what other callers see. A failed fetch leaves the
    cache as it was and the next call tries again.
    """

    def __init__(
        self,
        cache: CacheManager,
        client: GitHubReleaseClient | None = None,
        repository_loader: Callable[[], list[Repository]] | None = None,
        ttl_seconds: float | None = None,
    ) -> None:
        self.cache = cache
        self.client = client or create_release_client()
        self._load_repositories = repository_loader or load_repositories
        self.ttl_seconds = ttl_seconds

    def repositories(self) -> list[Repository]:
        """Return the configured repositories.

        Raises:
            ConfigError: If the repository configuration is malformed
        """
        cached = self.cache.get_or_fetch(
            REPOSITORIES_CACHE_KEY,
            lambda: tuple(self._load_repositories()),
            ttl=self.ttl_seconds,
        )
        return list(cached)

    def resolve_repository(self, repo_name: str) -> Repository:
        """Find a configured repository by display name or unique name.

        Raises:
            RepositoryNotFoundError: If no repository matches
        """
        repository = find_repository(self.repositories(), repo_name)
        if repository is None:
            raise RepositoryNotFoundError(repo_name)
        return repository

    def releases(self, repo_name: str) -> list[Release]:
        """Return the releases of a repository that match its asset filter.

        Raises:
            RepositoryNotFoundError: If the repository is not configured
            InvalidFilterError: If the repository's asset filter is invalid
            ReleaseLookupError: If the remote query fails
        """
        repository = self.resolve_repository(repo_name)
        cached = self.cache.get_or_fetch(
            releases_cache_key(repository),
            lambda: tuple(self._fetch_releases(repository)),
            ttl=self.ttl_seconds,
        )
        return list(cached)

    def _fetch_releases(self, repository: Repository) -> list[Release]:
        pattern = compile_asset_filter(repository.asset_filter)
        raw_releases = self.client.fetch_releases(repository.owner, repository.name)
        releases = select_release_assets(raw_releases, pattern)
        logger.info(
            "releases_resolved",
            repo=repository.full_name,
            release_count=len(raw_releases),
            asset_count=len(releases),
        )
        return releases


def create_release_service(
    cache: CacheManager | None = None,
    client: GitHubReleaseClient | None = None,
    repository_loader: Callable[[], list[Repository]] | None = None,
    ttl_seconds: float = 300.0,
) -> ReleaseService:
    """Factory function to create a ReleaseService.

    When no cache is given a private memory cache with ``ttl_seconds`` is
    created; share one cache between services to get process-wide caching.
    """
    return ReleaseService(
        cache=cache or create_memory_cache(default_ttl_seconds=ttl_seconds),
        client=client,
        repository_loader=repository_loader,
        ttl_seconds=ttl_seconds,
    )
