"""Configuration for boxupdater: settings and the repository list."""

from boxupdater.config.models import (
    BoxUpdaterSettings,
    FlashTimings,
    Repository,
    RepositoryList,
)
from boxupdater.config.repositories import (
    assign_display_names,
    find_repository,
    load_repositories,
    parse_repositories,
)


def create_settings(**overrides: object) -> BoxUpdaterSettings:
    """Factory function to create settings from environment and overrides."""
    return BoxUpdaterSettings(**overrides)  # type: ignore[arg-type]


__all__ = [
    "BoxUpdaterSettings",
    "FlashTimings",
    "Repository",
    "RepositoryList",
    "assign_display_names",
    "create_settings",
    "find_repository",
    "load_repositories",
    "parse_repositories",
]
