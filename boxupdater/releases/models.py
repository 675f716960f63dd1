"""Release models for the remote release API and resolved assets."""

from pydantic import Field

from boxupdater.models.base import BoxUpdaterBaseModel, FrozenBoxUpdaterModel


class ReleaseAsset(BoxUpdaterBaseModel):
    """Downloadable file attached to a remote release."""

    name: str
    browser_download_url: str
    size: int = 0
    content_type: str | None = None


class RawRelease(BoxUpdaterBaseModel):
    """Release as returned by the GitHub Releases API."""

    tag_name: str
    name: str | None = None
    draft: bool = False
    prerelease: bool = False
    published_at: str | None = None
    assets: list[ReleaseAsset] = Field(default_factory=list)


class Release(FrozenBoxUpdaterModel):
    """One downloadable asset of one release, selected by a repository filter."""

    name: str = Field(description="Asset file name")
    tag_name: str = Field(description="Tag of the release the asset belongs to")
    download_url: str = Field(description="Direct download URL of the asset")
