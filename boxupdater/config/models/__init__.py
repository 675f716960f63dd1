"""Configuration models."""

from .flash import FlashTimings
from .repository import Repository, RepositoryList
from .settings import BoxUpdaterSettings


__all__ = [
    "BoxUpdaterSettings",
    "FlashTimings",
    "Repository",
    "RepositoryList",
]
