"""Generic cache manager protocol and interface."""

from collections.abc import Callable
from typing import Any, Protocol, TypeVar, runtime_checkable

from boxupdater.core.cache.models import CacheEntry, CacheStats


T = TypeVar("T")


@runtime_checkable
class CacheManager(Protocol):
    """Generic cache manager interface.

    Implementations must be safe to share between threads.
    """

    def get(self, key: str, default: Any = None) -> Any:
        """Retrieve a value from the cache.

        Args:
            key: Cache key to retrieve
            default: Default value if key not found or expired

        Returns:
            Cached value or default
        """
        ...

    def set(self, key: str, value: Any, ttl: float | None = None) -> None:
        """Store a value in the cache, replacing any previous entry.

        Args:
            key: Cache key to store under
            value: Value to cache
            ttl: Time-to-live in seconds (None for the configured default)
        """
        ...

    def exists(self, key: str) -> bool:
        """Check if key exists in cache and is not expired."""
        ...

    def get_entry(self, key: str) -> CacheEntry | None:
        """Get the raw entry for a key, even when expired."""
        ...

    def get_or_fetch(
        self, key: str, fetch: Callable[[], T], ttl: float | None = None
    ) -> T:
        """Return the cached value or populate it with ``fetch()``.

        A failing ``fetch`` propagates its exception and leaves the cache
        untouched.
        """
        ...

    def clear(self) -> None:
        """Clear all entries from cache."""
        ...

    def get_stats(self) -> CacheStats:
        """Get cache performance statistics."""
        ...
