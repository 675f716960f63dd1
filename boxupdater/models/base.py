"""Base model for all boxupdater Pydantic models.

This module provides a base model class that enforces consistent validation
behavior across all boxupdater models.
"""

from pydantic import BaseModel, ConfigDict


class BoxUpdaterBaseModel(BaseModel):
    """Base model class for all boxupdater Pydantic models.

    Remote payloads carry many fields we do not use, so unknown fields are
    ignored rather than rejected. String values are kept verbatim: asset
    names and filter patterns must match what the remote API returned.
    """

    model_config = ConfigDict(
        extra="ignore",
        # Use enum values in serialization
        use_enum_values=True,
        # Validate assignment after model creation
        validate_assignment=True,
    )


class FrozenBoxUpdaterModel(BoxUpdaterBaseModel):
    """Immutable variant used for values shared between cache and callers."""

    model_config = ConfigDict(
        extra="ignore",
        use_enum_values=True,
        frozen=True,
    )
