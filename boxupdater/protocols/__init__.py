"""Protocol definitions for boxupdater adapters and interfaces.

These protocols use Python's typing.Protocol system with the
@runtime_checkable decorator to enable both static type checking and
runtime isinstance() checks.
"""

from .drive_locator_protocol import DriveLocatorProtocol


__all__ = [
    "DriveLocatorProtocol",
]
