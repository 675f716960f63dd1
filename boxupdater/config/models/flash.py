"""Flash timing configuration models."""

from pydantic import Field

from boxupdater.models.base import BoxUpdaterBaseModel


class FlashTimings(BoxUpdaterBaseModel):
    """Poll intervals and limits used while a device processes a UF2 write.

    The defaults give roughly ten seconds for each wait phase.
    """

    disconnect_poll_interval: float = Field(default=0.5, gt=0)
    disconnect_max_polls: int = Field(default=20, ge=1)
    absent_poll_interval: float = Field(default=0.1, gt=0)
    absent_max_polls: int | None = Field(
        default=None, ge=1, description="None waits until the volume is gone"
    )
    reconnect_poll_interval: float = Field(default=0.1, gt=0)
    reconnect_max_attempts: int = Field(default=100, ge=1)
    settle_delay: float = Field(default=0.5, ge=0)
