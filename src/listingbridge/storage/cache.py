"""Process-wide keyed cache for bulk listing snapshots and name lists.

Entries are populated lazily on a miss and held until explicitly evicted.
An optional TTL can bound staleness when listings may change through paths
that never reach this process's evict calls.
"""

import logging
import threading
import time
from typing import Any, Optional, Protocol

logger = logging.getLogger(__name__)

# Cache namespaces
ALL_LISTINGS = "all-listings"
FEATURED_LISTINGS = "featured-listings"
CITY_NAMES = "city-names"
PROPERTY_TYPE_NAMES = "property-type-names"

LISTING_NAMESPACES = (ALL_LISTINGS, FEATURED_LISTINGS)


class Cache(Protocol):
    """Minimal cache interface consumed by the aggregator and search layers."""

    def get(self, key: str) -> Optional[Any]:
        ...

    def put(self, key: str, value: Any) -> None:
        ...

    def evict(self, key: str) -> None:
        ...


class CacheEntry:
    """Cache entry with optional TTL support."""

    def __init__(self, data: Any, ttl_seconds: Optional[float] = None):
        self.data = data
        self.created_at = time.monotonic()
        self.ttl = ttl_seconds

    def is_expired(self) -> bool:
        """Check if the cache entry has expired."""
        if self.ttl is None:
            return False
        return time.monotonic() - self.created_at > self.ttl


class InMemoryCache:
    """Thread-safe in-memory implementation of Cache.

    Each of get/put/evict holds the lock for its own duration only;
    check-then-fetch-then-store sequences in callers may race, which at
    worst causes a duplicate remote fetch.

    Example:
        cache = InMemoryCache()
        cache.put(ALL_LISTINGS, listings)
        cached = cache.get(ALL_LISTINGS)
        cache.evict(ALL_LISTINGS)
    """

    def __init__(self, ttl_seconds: Optional[float] = None):
        """Initialize the cache.

        Args:
            ttl_seconds: Expiry applied to every entry. None keeps entries
                         until they are evicted.
        """
        self.ttl_seconds = ttl_seconds
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    def get(self, key: str) -> Optional[Any]:
        """Get a cached value, or None on a miss or an expired entry."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None and entry.is_expired():
                del self._entries[key]
                entry = None
            if entry is None:
                self._misses += 1
                logger.debug(f"Cache miss: {key}")
                return None
            self._hits += 1
        logger.debug(f"Cache hit: {key}")
        return entry.data

    def put(self, key: str, value: Any) -> None:
        """Store a value under key, replacing any previous entry."""
        with self._lock:
            self._entries[key] = CacheEntry(value, self.ttl_seconds)
        logger.debug(f"Cached: {key}")

    def evict(self, key: str) -> None:
        """Remove a single entry; a missing key is not an error."""
        with self._lock:
            removed = self._entries.pop(key, None)
        if removed is not None:
            logger.debug(f"Evicted: {key}")

    def clear(self) -> None:
        """Remove every entry."""
        with self._lock:
            self._entries.clear()
        logger.debug("Cache cleared")

    def __contains__(self, key: str) -> bool:
        with self._lock:
            entry = self._entries.get(key)
            return entry is not None and not entry.is_expired()

    def get_stats(self) -> dict:
        """Get cache statistics.

        Returns:
            Dict with cached keys, hit and miss counters, and the TTL
        """
        with self._lock:
            keys = sorted(k for k, e in self._entries.items() if not e.is_expired())
            return {
                "keys": keys,
                "entries": len(keys),
                "hits": self._hits,
                "misses": self._misses,
                "ttl_seconds": self.ttl_seconds,
            }
