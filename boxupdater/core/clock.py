"""Clock abstraction used by polling loops and the release cache."""

import time
from typing import Protocol, runtime_checkable


@runtime_checkable
class Clock(Protocol):
    """Source of time and of blocking delays."""

    def monotonic(self) -> float:
        """Return a monotonic timestamp in seconds."""
        ...

    def sleep(self, seconds: float) -> None:
        """Block the calling thread for ``seconds``."""
        ...


class SystemClock:
    """Clock backed by the ``time`` module."""

    def monotonic(self) -> float:
        return time.monotonic()

    def sleep(self, seconds: float) -> None:
        time.sleep(seconds)


def create_system_clock() -> Clock:
    """Factory function to create the default clock."""
    return SystemClock()


__all__ = ["Clock", "SystemClock", "create_system_clock"]
