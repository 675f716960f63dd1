"""Shared model base classes."""

from boxupdater.models.base import BoxUpdaterBaseModel, FrozenBoxUpdaterModel


__all__ = ["BoxUpdaterBaseModel", "FrozenBoxUpdaterModel"]
