"""
In-Process Cache Module

Small TTL cache used for derived, read-only views of the record store:
- Namespaced keys
- Per-entry TTL with an injectable clock
- Explicit invalidation

Entries live in a cachetools.TLRUCache whose time-to-use function reads the
lifetime stored next to each value.
"""

import threading
import time
from datetime import timedelta
from typing import Any, Callable, NamedTuple, Optional, Union

from cachetools import TLRUCache


Clock = Callable[[], float]
TTL = Union[int, float, timedelta]


def _seconds(ttl: TTL) -> float:
    if isinstance(ttl, timedelta):
        return ttl.total_seconds()
    return float(ttl)


class _Entry(NamedTuple):
    value: Any
    lifetime: float


def _expires_at(key: str, entry: _Entry, now: float) -> float:
    return now + entry.lifetime


class CacheManager:
    """
    Cache manager with namespace support and TTL expiry.

    Values are held by reference. Concurrent misses may compute the same
    value more than once; the last write wins.

    Example:
        cache = CacheManager("facets", default_ttl=300)
        vocabulary = cache.get_or_set("vocabulary", lambda: derive(store))
        cache.invalidate_all()
    """

    def __init__(
        self,
        namespace: str,
        default_ttl: TTL = 300,
        clock: Optional[Clock] = None,
        maxsize: int = 128,
    ):
        self.namespace = namespace
        self.default_ttl = _seconds(default_ttl)
        self._entries: TLRUCache[str, _Entry] = TLRUCache(
            maxsize=maxsize,
            ttu=_expires_at,
            timer=clock or time.monotonic,
        )
        # cachetools caches are not thread-safe
        self._lock = threading.Lock()

    def _key(self, key: str) -> str:
        """Generate namespaced key"""
        return f"{self.namespace}:{key}"

    def _lookup(self, key: str) -> Optional[_Entry]:
        with self._lock:
            return self._entries.get(self._key(key))

    def get(self, key: str) -> Optional[Any]:
        """Get value from cache, None if missing or expired"""
        entry = self._lookup(key)
        return None if entry is None else entry.value

    def set(self, key: str, value: Any, ttl: Optional[TTL] = None) -> None:
        """Set value in cache"""
        lifetime = self.default_ttl if ttl is None else _seconds(ttl)
        with self._lock:
            self._entries[self._key(key)] = _Entry(value, lifetime)

    def delete(self, key: str) -> bool:
        """Delete key from cache"""
        with self._lock:
            return self._entries.pop(self._key(key), None) is not None

    def invalidate_all(self) -> int:
        """Invalidate all live keys in namespace"""
        with self._lock:
            self._entries.expire()
            count = len(self._entries)
            self._entries.clear()
            return count

    def get_or_set(
        self,
        key: str,
        factory: Callable[[], Any],
        ttl: Optional[TTL] = None,
    ) -> Any:
        """
        Get from cache or compute and cache.

        Args:
            key: Cache key
            factory: Function computing the value on a miss
            ttl: Time-to-live, defaults to the manager's TTL

        Returns:
            Cached or computed value
        """
        entry = self._lookup(key)
        if entry is not None:
            return entry.value

        value = factory()
        self.set(key, value, ttl)
        return value

    def __contains__(self, key: str) -> bool:
        return self._lookup(key) is not None
