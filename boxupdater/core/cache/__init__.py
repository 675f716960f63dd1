"""Generic cache system for boxupdater.

Provides the process-wide, in-memory TTL cache used in front of remote
release queries. Nothing is persisted across restarts.
"""

from boxupdater.core.cache.cache_manager import CacheManager
from boxupdater.core.cache.memory_cache import MemoryCache
from boxupdater.core.cache.models import CacheConfig, CacheEntry, CacheKey, CacheStats
from boxupdater.core.clock import Clock


def create_memory_cache(
    default_ttl_seconds: float = 300.0,
    clock: Clock | None = None,
) -> CacheManager:
    """Create an in-memory cache manager.

    Args:
        default_ttl_seconds: Default time-to-live in seconds
        clock: Optional time source, mainly for tests

    Returns:
        Configured memory cache manager
    """
    config = CacheConfig(default_ttl_seconds=default_ttl_seconds)
    return MemoryCache(config, clock=clock)


__all__ = [
    "CacheConfig",
    "CacheEntry",
    "CacheKey",
    "CacheManager",
    "CacheStats",
    "MemoryCache",
    "create_memory_cache",
]
