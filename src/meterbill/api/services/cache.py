"""Two-tier cache for per-user API responses."""

import logging
from pathlib import Path
from typing import Any

from cachetools import TTLCache
from diskcache import Cache as DiskCache

from meterbill.api.config import get_settings

logger = logging.getLogger(__name__)


class HybridCache:
    """Cache with a memory (L1) and a disk (L2) layer.

    L1 is a ``cachetools.TTLCache`` with one TTL for every entry. L2 is a
    ``diskcache.Cache`` that survives restarts and takes a TTL per entry.
    Reads fall through L1 to L2 and promote L2 hits back into L1.

    Attributes
    ----------
    l1 : TTLCache
        In-memory cache with automatic expiration
    l2 : DiskCache
        Disk-based persistent cache
    stats : dict
        Hit, miss and write counters
    """

    def __init__(
        self,
        memory_size: int = 1000,
        memory_ttl: int = 300,
        disk_path: str | None = None,
        disk_size_limit: int = 268_435_456,  # 256 MB
    ):
        """Initialize hybrid cache.

        Parameters
        ----------
        memory_size : int, optional
            Maximum number of items in L1, by default 1000
        memory_ttl : int, optional
            Lifetime of L1 entries in seconds, by default 300
        disk_path : str | None, optional
            Directory holding the disk cache, by default None (uses config)
        disk_size_limit : int, optional
            Maximum disk cache size in bytes, by default 256 MB
        """
        self.l1: TTLCache = TTLCache(maxsize=memory_size, ttl=memory_ttl)

        cache_dir = Path(disk_path or get_settings().CACHE_PATH) / "cache"
        cache_dir.mkdir(parents=True, exist_ok=True)
        self.l2 = DiskCache(str(cache_dir), size_limit=disk_size_limit)

        self.stats = {"l1_hits": 0, "l2_hits": 0, "misses": 0, "sets": 0, "invalidations": 0}

        logger.info(f"HybridCache initialized: L1={memory_size} items/{memory_ttl}s, L2={cache_dir}")

    def get(self, key: str) -> Any | None:
        """Get value from cache (L1 → L2 → None).

        Parameters
        ----------
        key : str
            Cache key

        Returns
        -------
        Any | None
            Cached value or None if miss
        """
        value = self.l1.get(key)
        if value is not None:
            self.stats["l1_hits"] += 1
            logger.debug(f"Cache L1 HIT: {key}")
            return value

        value = self.l2.get(key)
        if value is not None:
            self.stats["l2_hits"] += 1
            logger.debug(f"Cache L2 HIT: {key}")
            self.l1[key] = value
            return value

        self.stats["misses"] += 1
        logger.debug(f"Cache MISS: {key}")
        return None

    def set(self, key: str, value: Any, ttl_disk: int | None = None) -> None:
        """Store a value in both layers.

        Parameters
        ----------
        key : str
            Cache key
        value : Any
            Value to cache (must be pickle-able)
        ttl_disk : int | None, optional
            TTL for L2 in seconds, None for no expiration
        """
        self.stats["sets"] += 1
        self.l1[key] = value
        self.l2.set(key, value, expire=ttl_disk)
        logger.debug(f"Cache SET: {key} (L2 TTL={ttl_disk})")

    def invalidate(self, key: str) -> bool:
        """Drop a key from both layers.

        Parameters
        ----------
        key : str
            Cache key

        Returns
        -------
        bool
            True if the key was present in either layer
        """
        in_memory = self.l1.pop(key, None) is not None
        on_disk = self.l2.delete(key)
        if in_memory or on_disk:
            self.stats["invalidations"] += 1
            logger.debug(f"Invalidated cache key: {key}")
        return in_memory or on_disk

    def clear(self) -> None:
        """Clear all cache entries."""
        self.l1.clear()
        self.l2.clear()
        logger.info("Cache cleared (L1 and L2)")

    def get_stats(self) -> dict:
        """Get cache statistics.

        Returns
        -------
        dict
            Counters, layer sizes and hit rate
        """
        total_requests = self.stats["l1_hits"] + self.stats["l2_hits"] + self.stats["misses"]
        hits = self.stats["l1_hits"] + self.stats["l2_hits"]
        hit_rate = hits / total_requests * 100 if total_requests else 0.0

        return {
            **self.stats,
            "l1_size": len(self.l1),
            "l2_size": len(self.l2),
            "total_requests": total_requests,
            "hit_rate_percent": round(hit_rate, 2),
        }

    def cleanup(self) -> None:
        """Drop expired entries from both layers and log statistics."""
        self.l1.expire()
        expired = self.l2.expire()
        culled = self.l2.cull()
        if expired or culled:
            logger.info(f"Removed {expired} expired and {culled} culled entries from L2 cache")
        logger.info(f"Cache stats: {self.get_stats()}")

    def close(self) -> None:
        """Close the disk cache."""
        self.l2.close()
        logger.info("Cache closed")


# Global cache instance
_cache_instance: HybridCache | None = None


def get_cache() -> HybridCache:
    """Get or create global cache instance.

    Returns
    -------
    HybridCache
        Global cache instance
    """
    global _cache_instance
    if _cache_instance is None:
        settings = get_settings()
        _cache_instance = HybridCache(
            memory_size=settings.CACHE_MEMORY_SIZE,
            memory_ttl=settings.CACHE_TTL_PROFILES,
        )
    return _cache_instance


def profiles_key(user_id: int) -> str:
    """Cache key of a user's profile listing."""
    return f"profiles:{user_id}"
