"""Download progress models."""

from collections.abc import Callable

from pydantic import Field

from boxupdater.models.base import FrozenBoxUpdaterModel


class DownloadProgress(FrozenBoxUpdaterModel):
    """Percentage of a download received so far."""

    progress: int = Field(ge=0, le=100)


ProgressCallback = Callable[[DownloadProgress], None]


def compute_progress(received: int, total: int) -> int:
    """Return ``floor(received / total * 100)`` clamped to 0..100."""
    return max(0, min(100, received * 100 // total))
