"""Boxupdater - RP2 firmware updater for fightstick controllers."""

from importlib.metadata import distribution

from .api import BoxUpdater, create_box_updater
from .releases.models import Release


__version__ = distribution(__package__ or "boxupdater").version

__all__ = [
    "BoxUpdater",
    "Release",
    "__version__",
    "create_box_updater",
]

# Import CLI after setting __version__ to avoid circular imports
from .cli import app, main


__all__ += ["app", "main"]
