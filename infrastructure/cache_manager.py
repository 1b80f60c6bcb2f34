"""
infrastructure/cache_manager.py

Named result caches for the SRS query layer.

A CacheManager holds any number of named caches. Each one is a
cachetools.TTLCache with its own size/TTL policy and hit/miss counters.
The query dispatcher owns one manager and registers a single
"spatial_queries" cache in it; there is no process-wide instance.

Usage:
    from infrastructure.cache_manager import CacheManager

    caches = CacheManager()
    caches.register_cache("spatial_queries", maxsize=256, ttl=300)

    caches.set("spatial_queries", key, result)
    cached = caches.get("spatial_queries", key)   # None on miss or expiry

    caches.get_stats("spatial_queries")["hit_rate"]
"""

import threading
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Hashable, List, Optional

from cachetools import TTLCache

from component_15_logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class CachePolicy:
    """Size and expiry limits of one named cache."""

    maxsize: int
    ttl: int  # seconds

    def __post_init__(self):
        if self.maxsize <= 0:
            raise ValueError(f"maxsize must be positive, got {self.maxsize}")
        if self.ttl <= 0:
            raise ValueError(f"ttl must be positive, got {self.ttl}")


@dataclass
class CacheStatistics:
    """Request counters of one named cache."""

    cache_name: str
    hits: int = 0
    misses: int = 0
    sets: int = 0
    invalidations: int = 0
    created_at: datetime = field(default_factory=datetime.now)

    @property
    def total_requests(self) -> int:
        return self.hits + self.misses

    @property
    def hit_rate(self) -> float:
        """Fraction of lookups that were hits (0.0 with no lookups)."""
        total = self.total_requests
        return self.hits / total if total else 0.0


@dataclass
class _NamedCache:
    policy: CachePolicy
    entries: TTLCache
    stats: CacheStatistics


class CacheManager:
    """
    Registry of named TTL caches.

    Every public method takes the manager's RLock, so a manager can be
    shared by concurrent query threads.
    """

    def __init__(self):
        self._caches: Dict[str, _NamedCache] = {}
        self._lock = threading.RLock()

    def register_cache(
        self, name: str, maxsize: int, ttl: int, overwrite: bool = False
    ) -> None:
        """
        Create a named cache.

        Raises:
            ValueError: If the name is taken and overwrite is False, or if
                maxsize/ttl are not positive
        """
        policy = CachePolicy(maxsize=maxsize, ttl=ttl)

        with self._lock:
            if name in self._caches and not overwrite:
                raise ValueError(
                    f"Cache '{name}' already registered. Use overwrite=True to replace."
                )
            replaced = name in self._caches
            self._caches[name] = _NamedCache(
                policy=policy,
                entries=TTLCache(maxsize=maxsize, ttl=ttl),
                stats=CacheStatistics(cache_name=name),
            )

        logger.debug(
            "Cache replaced" if replaced else "Cache registered",
            extra={"cache": name, "maxsize": maxsize, "ttl": ttl},
        )

    def is_registered(self, name: str) -> bool:
        with self._lock:
            return name in self._caches

    def list_caches(self) -> List[str]:
        with self._lock:
            return sorted(self._caches)

    def unregister_cache(self, name: str) -> None:
        """Drop a cache with its entries and counters (ValueError if unknown)."""
        with self._lock:
            self._require(name)
            del self._caches[name]
        logger.debug("Cache unregistered", extra={"cache": name})

    def get(self, name: str, key: Hashable) -> Optional[Any]:
        """
        Look up a key.

        Returns:
            The cached value, or None if absent or expired

        Raises:
            ValueError: If the cache is not registered
        """
        with self._lock:
            cache = self._require(name)
            # Expired entries read as absent
            value = cache.entries.get(key)
            if value is None:
                cache.stats.misses += 1
            else:
                cache.stats.hits += 1
            return value

    def set(self, name: str, key: Hashable, value: Any) -> None:
        """Store a value; a full cache evicts its least recently used entry."""
        with self._lock:
            cache = self._require(name)
            cache.entries[key] = value
            cache.stats.sets += 1

    def invalidate(self, name: str, key: Optional[Hashable] = None) -> int:
        """
        Remove one key, or every entry when key is None.

        Returns:
            Number of entries removed
        """
        with self._lock:
            cache = self._require(name)
            if key is None:
                removed = len(cache.entries)
                cache.entries.clear()
            else:
                removed = 1 if cache.entries.pop(key, None) is not None else 0
            cache.stats.invalidations += removed

        if key is None:
            logger.info("Cache cleared", extra={"cache": name, "removed": removed})
        return removed

    def get_stats(self, name: Optional[str] = None) -> Dict[str, Any]:
        """
        Counters and policy of one cache, or of all caches keyed by name.

        Keys per cache: cache_name, hits, misses, sets, invalidations,
        total_requests, hit_rate, size, maxsize, ttl, created_at.
        """
        with self._lock:
            if name is None:
                return {cache_name: self.get_stats(cache_name) for cache_name in self._caches}

            cache = self._require(name)
            stats = cache.stats
            return {
                "cache_name": name,
                "hits": stats.hits,
                "misses": stats.misses,
                "sets": stats.sets,
                "invalidations": stats.invalidations,
                "total_requests": stats.total_requests,
                "hit_rate": stats.hit_rate,
                "size": len(cache.entries),
                "maxsize": cache.policy.maxsize,
                "ttl": cache.policy.ttl,
                "created_at": stats.created_at.isoformat(),
            }

    def reset_statistics(self, name: Optional[str] = None) -> None:
        """Zero the counters of one cache (or all) while keeping the entries."""
        with self._lock:
            names = [name] if name is not None else list(self._caches)
            for cache_name in names:
                self._require(cache_name).stats = CacheStatistics(cache_name=cache_name)

    def _require(self, name: str) -> _NamedCache:
        cache = self._caches.get(name)
        if cache is None:
            raise ValueError(f"Cache '{name}' not registered")
        return cache
