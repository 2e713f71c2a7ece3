"""
Response Cache - process-wide key/value store with per-entry expiry

Constructed once at startup and handed to every resolver. Entries expire after
their TTL (12 hours unless the caller passes a shorter one). There is no size
bound by default and no stampede protection: two concurrent misses on the same
key both fetch and the last write wins.
"""

import math
import threading
import time
from typing import Any, Callable, Hashable, List, NamedTuple, Optional

from cachetools import TLRUCache

DEFAULT_TTL_SECONDS = 12 * 60 * 60


class _Miss:
    def __repr__(self) -> str:
        return "MISS"

    def __bool__(self) -> bool:
        return False


MISS = _Miss()


class _Entry(NamedTuple):
    value: Any
    ttl: float


def _time_to_use(key: Hashable, entry: _Entry, now: float) -> float:
    return now + entry.ttl


class ResponseCache:
    """
    Thread-safe TTL cache built on cachetools.TLRUCache.

    Args:
        ttl_seconds: default time-to-live for entries
        maxsize: maximum number of entries (unbounded by default)
        timer: clock returning seconds; injectable so tests can advance time
    """

    def __init__(self,
                 ttl_seconds: float = DEFAULT_TTL_SECONDS,
                 maxsize: float = math.inf,
                 timer: Callable[[], float] = time.monotonic):
        self.ttl_seconds = ttl_seconds
        self._store: TLRUCache = TLRUCache(maxsize=maxsize, ttu=_time_to_use, timer=timer)
        self._lock = threading.RLock()

    def get(self, key: str, default: Any = MISS) -> Any:
        """Return the cached value, or ``default`` (MISS) if absent or expired."""
        with self._lock:
            entry = self._store.get(key)
        if entry is None:
            return default
        return entry.value

    def set(self, key: str, value: Any, ttl: Optional[float] = None) -> None:
        ttl = self.ttl_seconds if ttl is None else ttl
        if ttl <= 0:
            return
        with self._lock:
            self._store[key] = _Entry(value, ttl)

    def expire(self) -> List[str]:
        """Drop every expired entry now and return their keys."""
        with self._lock:
            return [key for key, _ in self._store.expire()]

    def clear(self) -> None:
        with self._lock:
            self._store.clear()

    def __contains__(self, key: str) -> bool:
        with self._lock:
            return key in self._store

    def __len__(self) -> int:
        with self._lock:
            self._store.expire()
            return len(self._store)
