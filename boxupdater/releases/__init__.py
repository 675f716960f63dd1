"""Release discovery: remote release API client and cached lookups."""

from .client import GitHubReleaseClient, create_release_client
from .models import RawRelease, Release, ReleaseAsset
from .service import (
    ReleaseService,
    compile_asset_filter,
    create_release_service,
    select_release_assets,
)


__all__ = [
    "GitHubReleaseClient",
    "RawRelease",
    "Release",
    "ReleaseAsset",
    "ReleaseService",
    "compile_asset_filter",
    "create_release_client",
    "create_release_service",
    "select_release_assets",
]
