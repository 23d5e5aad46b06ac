"""In-process TTL cache for aggregation results."""

import logging
import threading
import time
from datetime import date
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 300
DEFAULT_MAX_SIZE = 1000

# Bump when the shape of cached values changes so old entries are never read.
CACHE_SCHEMA_VERSION = 1

STATS_CACHE_PREFIX = "commission_stats"


class TTLCache:
    """Simple TTL cache with max size limit and an injectable clock."""

    def __init__(
        self,
        ttl: float = DEFAULT_TTL_SECONDS,
        maxsize: int = DEFAULT_MAX_SIZE,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._cache: dict[str, tuple[Any, float]] = {}
        self._ttl = ttl
        self._maxsize = maxsize
        self._clock = clock
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            entry = self._cache.get(key)
            if entry is None:
                return None
            value, inserted_at = entry
            if self._clock() - inserted_at < self._ttl:
                return value
            del self._cache[key]
            return None

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            if key not in self._cache and len(self._cache) >= self._maxsize:
                oldest_key = min(self._cache, key=lambda k: self._cache[k][1])
                del self._cache[oldest_key]
                logger.debug("Cache full (%d entries), evicted %s", self._maxsize, oldest_key)
            self._cache[key] = (value, self._clock())

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()

    def stats(self) -> dict[str, Any]:
        return {
            "size": len(self._cache),
            "maxsize": self._maxsize,
            "ttl": self._ttl,
        }

    def __len__(self) -> int:
        return len(self._cache)


def build_stats_cache_key(kind: Optional[str] = None, reference_date: Optional[date] = None) -> str:
    """Build the cache key for a commission stats lookup.

    Args:
        kind: Period kind value, or None for the all-time/FY/month stats
        reference_date: Explicit reference date, or None for "today"

    Returns:
        Key such as 'v1:commission_stats_quarter_2024-03-10'
    """
    name = STATS_CACHE_PREFIX
    if kind is not None:
        name = f"{name}_{kind}"
        if reference_date is not None:
            name = f"{name}_{reference_date.isoformat()}"
    return f"v{CACHE_SCHEMA_VERSION}:{name}"
