"""Repository configuration models."""

from pydantic import Field, field_validator

from boxupdater.models.base import FrozenBoxUpdaterModel


class Repository(FrozenBoxUpdaterModel):
    """Static descriptor of a firmware release source.

    ``asset_filter`` is a regular expression searched in release asset file
    names. It is compiled at lookup time, not at load time, so a bad pattern
    only affects the repository that carries it.
    """

    name: str = Field(description="Repository name on the release host")
    owner: str = Field(description="Owner (user or organisation) of the repository")
    description: str = Field(default="", description="Human readable description")
    asset_filter: str = Field(
        default=r"\.uf2$", description="Regular expression selecting release assets"
    )
    display_name: str = Field(
        default="", description="Unique label; defaults to the repository name"
    )

    @field_validator("name", "owner")
    @classmethod
    def validate_not_empty(cls, v: str) -> str:
        """Validate that identifying fields are not empty."""
        if not v:
            raise ValueError("must not be empty")
        return v

    @property
    def full_name(self) -> str:
        """Return ``owner/name`` as used in release API paths."""
        return f"{self.owner}/{self.name}"

    @property
    def label(self) -> str:
        """Return the display name, falling back to the plain name."""
        return self.display_name or self.name


class RepositoryList(FrozenBoxUpdaterModel):
    """Top-level layout of a repositories YAML file."""

    repositories: list[Repository] = Field(default_factory=list)
