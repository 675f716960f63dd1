"""In-memory TTL cache implementation."""

import threading
from collections.abc import Callable
from typing import Any, TypeVar

from boxupdater.core.cache.models import CacheConfig, CacheEntry, CacheStats
from boxupdater.core.clock import Clock, create_system_clock
from boxupdater.core.structlog_logger import get_struct_logger


logger = get_struct_logger(__name__)

T = TypeVar("T")


class MemoryCache:
    """In-memory cache with per-entry expiry.

    Data is lost when the application restarts. Each key has its own lock,
    so lookups on different keys never wait for each other while a fetch is
    in flight, and concurrent lookups on the same key fetch only once.
    Expired entries are not evicted; they are treated as absent and
    overwritten by the next successful fetch.
    """

    def __init__(
        self, config: CacheConfig | None = None, clock: Clock | None = None
    ) -> None:
        """Initialize memory cache.

        Args:
            config: Cache configuration options
            clock: Time source used for expiry checks
        """
        self.config = config or CacheConfig()
        self._clock = clock or create_system_clock()
        self._entries: dict[str, CacheEntry] = {}
        self._key_locks: dict[str, threading.RLock] = {}
        self._registry_lock = threading.Lock()
        self.stats = CacheStats()
        logger.debug("memory_cache_initialized", ttl=self.config.default_ttl_seconds)

    def _lock_for(self, key: str) -> threading.RLock:
        with self._registry_lock:
            lock = self._key_locks.get(key)
            if lock is None:
                lock = threading.RLock()
                self._key_locks[key] = lock
            return lock

    def _record(self, **increments: int) -> None:
        if not self.config.enable_statistics:
            return
        with self._registry_lock:
            for name, amount in increments.items():
                setattr(self.stats, name, getattr(self.stats, name) + amount)

    def _valid_entry(self, key: str) -> CacheEntry | None:
        entry = self._entries.get(key)
        if entry is None or entry.is_expired(self._clock.monotonic()):
            return None
        return entry

    def _store(self, key: str, value: Any, ttl: float | None) -> CacheEntry:
        ttl_to_use = self.config.default_ttl_seconds if ttl is None else ttl
        entry = CacheEntry(data=value, expires_at=self._clock.monotonic() + ttl_to_use)
        is_new = key not in self._entries
        # Single assignment: readers see either the old or the new entry
        self._entries[key] = entry
        if is_new:
            self._record(total_entries=1)
        logger.debug("cache_entry_stored", key=key, ttl=ttl_to_use)
        return entry

    def get(self, key: str, default: Any = None) -> Any:
        """Retrieve value from cache with statistics tracking."""
        entry = self._valid_entry(key)
        if entry is None:
            self._record(miss_count=1)
            return default
        self._record(hit_count=1)
        return entry.data

    def set(self, key: str, value: Any, ttl: float | None = None) -> None:
        """Store value in cache."""
        with self._lock_for(key):
            self._store(key, value, ttl)

    def exists(self, key: str) -> bool:
        """Check if key exists and has not expired."""
        return self._valid_entry(key) is not None

    def get_entry(self, key: str) -> CacheEntry | None:
        """Get the raw entry for a key, including expired ones."""
        return self._entries.get(key)

    def get_or_fetch(
        self, key: str, fetch: Callable[[], T], ttl: float | None = None
    ) -> T:
        """Return the cached value for ``key`` or fetch and store a new one."""
        with self._lock_for(key):
            entry = self._valid_entry(key)
            if entry is not None:
                self._record(hit_count=1)
                logger.debug("cache_hit", key=key)
                return entry.data  # type: ignore[no-any-return]

            self._record(miss_count=1)
            logger.debug("cache_miss", key=key, stale=key in self._entries)
            try:
                value = fetch()
            except Exception:
                self._record(fetch_error_count=1)
                raise
            self._record(fetch_count=1)
            self._store(key, value, ttl)
            return value

    def clear(self) -> None:
        """Clear all values from memory."""
        with self._registry_lock:
            self._entries.clear()
            self.stats.total_entries = 0
        logger.debug("memory_cache_cleared")

    def get_stats(self) -> CacheStats:
        """Get current cache statistics."""
        return self.stats

    def get_all_keys(self) -> list[str]:
        """Get all cache keys (for debugging and management)."""
        return list(self._entries.keys())
