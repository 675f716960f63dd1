"""Cache data models and types."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class CacheEntry:
    """Cached value together with its absolute expiry time.

    Entries are immutable; an update replaces the whole entry.
    """

    data: Any
    expires_at: float

    def is_expired(self, now: float) -> bool:
        """Check if the entry has expired at ``now``."""
        return now > self.expires_at


@dataclass
class CacheStats:
    """In memory cache performance statistics."""

    total_entries: int = 0
    hit_count: int = 0
    miss_count: int = 0
    fetch_count: int = 0
    fetch_error_count: int = 0

    @property
    def hit_rate(self) -> float:
        """Calculate cache hit rate as percentage."""
        total_requests = self.hit_count + self.miss_count
        if total_requests == 0:
            return 0.0
        return (self.hit_count / total_requests) * 100.0


@dataclass
class CacheConfig:
    """Configuration for cache instances."""

    default_ttl_seconds: float = 300.0
    enable_statistics: bool = True


class CacheKey:
    """Helper for generating consistent cache keys."""

    @staticmethod
    def from_parts(*parts: str) -> str:
        """Generate a readable cache key from multiple string parts."""
        return ":".join(str(part) for part in parts if part)
