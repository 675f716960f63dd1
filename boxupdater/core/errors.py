"""Exception hierarchy for boxupdater.

Every failure surfaced to a caller derives from ``BoxUpdaterError`` so the
presentation layer can catch the whole family and show ``str(error)``.
"""


class BoxUpdaterError(Exception):
    """Base exception for all boxupdater errors."""


# Flash errors


class FlashError(BoxUpdaterError):
    """Base class for failures while writing to the bootloader volume."""


class DeviceNotFoundError(FlashError):
    """No bootloader volume was present when the operation started."""

    def __init__(self, message: str = "RPI-RP2 drive not found") -> None:
        super().__init__(message)


class WriteFailedError(FlashError):
    """Writing a UF2 file to the volume failed."""

    def __init__(self, filename: str, reason: object) -> None:
        self.filename = filename
        super().__init__(f"Failed to write {filename}: {reason}")


class DeviceDidNotDisconnectError(FlashError):
    """The volume stayed mounted after the write was completed."""

    def __init__(
        self, message: str = "Device did not disconnect after flashing"
    ) -> None:
        super().__init__(message)


class DeviceDidNotReconnectError(FlashError):
    """The volume did not come back after an erase."""

    def __init__(
        self, message: str = "Timeout waiting for device to reconnect"
    ) -> None:
        super().__init__(message)


class FlashCancelledError(FlashError):
    """A wait loop was abandoned through its cancellation event."""

    def __init__(self, message: str = "Flash operation cancelled") -> None:
        super().__init__(message)


# Download errors


class DownloadError(BoxUpdaterError):
    """Base class for firmware download failures."""


class TransferFailedError(DownloadError):
    """The HTTP transfer failed; no partial data is returned."""

    def __init__(self, url: str, reason: object) -> None:
        self.url = url
        super().__init__(f"Download of {url} failed: {reason}")


# Configuration and lookup errors


class ConfigError(BoxUpdaterError):
    """Bundled or user configuration is missing or malformed."""


class ReleaseLookupError(BoxUpdaterError):
    """Fetching or resolving releases for a repository failed."""


class RepositoryNotFoundError(ReleaseLookupError):
    """The requested repository is not configured."""

    def __init__(self, repo_name: str) -> None:
        self.repo_name = repo_name
        super().__init__(f"Repository not found: {repo_name}")


class InvalidFilterError(ReleaseLookupError):
    """A repository's asset filter is not a valid regular expression."""

    def __init__(self, pattern: str, reason: object) -> None:
        self.pattern = pattern
        super().__init__(f"Invalid asset filter {pattern!r}: {reason}")


__all__ = [
    "BoxUpdaterError",
    "ConfigError",
    "DeviceDidNotDisconnectError",
    "DeviceDidNotReconnectError",
    "DeviceNotFoundError",
    "DownloadError",
    "FlashCancelledError",
    "FlashError",
    "InvalidFilterError",
    "ReleaseLookupError",
    "RepositoryNotFoundError",
    "TransferFailedError",
    "WriteFailedError",
]
