"""Application settings with environment variable support."""

from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .flash import FlashTimings


class BoxUpdaterSettings(BaseSettings):
    """Runtime settings for boxupdater.

    Every field can be overridden with a ``BOXUPDATER_`` environment
    variable; nested flash timings use ``__`` as delimiter, for example
    ``BOXUPDATER_FLASH__DISCONNECT_MAX_POLLS=40``.
    """

    model_config = SettingsConfigDict(
        env_prefix="BOXUPDATER_",
        env_nested_delimiter="__",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    api_base_url: str = Field(
        default="https://api.github.com", description="Release API base URL"
    )
    user_agent: str = Field(
        default="boxupdater", description="User-Agent header sent with requests"
    )
    cache_ttl_seconds: float = Field(default=300.0, gt=0)
    request_timeout: float = Field(default=30.0, gt=0)
    download_chunk_size: int = Field(default=8192, ge=1)
    nuke_image_path: Path | None = Field(
        default=None, description="Override for the bundled flash_nuke.uf2"
    )
    repositories_file: Path | None = Field(
        default=None, description="Extra repositories YAML merged after the bundled list"
    )
    log_level: str = Field(
        default="WARNING", description="Log level used without -v flags"
    )
    flash: FlashTimings = Field(default_factory=FlashTimings)

    @field_validator("api_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalise the base URL so paths can be appended."""
        return v.rstrip("/")

    @field_validator("nuke_image_path", "repositories_file", mode="before")
    @classmethod
    def expand_path(cls, v: Any) -> Path | None:
        """Expand user home in configured paths."""
        if v is None or v == "":
            return None
        return Path(v).expanduser()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is recognized."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        upper_v = v.strip().upper()
        if upper_v not in valid_levels:
            raise ValueError(f"Log level must be one of {valid_levels}")
        return upper_v
