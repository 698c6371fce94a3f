"""Simple in-memory TTL cache. No Redis needed for this scale.

Note: Each uvicorn worker has its own cache instance. With --workers 2,
a lookup may be computed twice (once per worker). The cache still
eliminates repeated work within the same worker.
"""

import threading
import time
from collections import OrderedDict
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class CacheEntry:
    key: str
    value: Any
    inserted_at: float


class TTLCache:
    """Thread-safe TTL cache with lazy expiry and an optional size bound.

    An entry is readable while ``now - inserted_at < ttl_seconds``. Expired
    entries are dropped when the same key is read again, or by
    ``purge_expired()``. When ``max_entries`` is set, inserting into a full
    cache evicts the oldest entry first.
    """

    def __init__(
        self,
        ttl_seconds: float = 60,
        max_entries: int | None = None,
        clock: Callable[[], float] = time.time,
    ):
        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries if max_entries and max_entries > 0 else None
        self._clock = clock
        self._store: OrderedDict[str, CacheEntry] = OrderedDict()
        self._lock = threading.Lock()

    def get(self, key: str) -> Any | None:
        with self._lock:
            return self._get_locked(key)

    def put(self, key: str, value: Any) -> None:
        with self._lock:
            self._put_locked(key, value)

    def get_or_compute(self, key: str, compute: Callable[[], Any]) -> tuple[Any, bool]:
        """Return ``(value, hit)``, computing and storing the value on a miss.

        The lookup, the computation and the store happen under one lock, so
        concurrent misses on the same key compute once.
        """
        with self._lock:
            value = self._get_locked(key)
            if value is not None:
                return value, True
            value = compute()
            self._put_locked(key, value)
            return value, False

    def purge_expired(self) -> int:
        """Drop every expired entry. Returns how many were removed."""
        with self._lock:
            now = self._clock()
            stale = [k for k, e in self._store.items() if not self._is_fresh(e, now)]
            for key in stale:
                del self._store[key]
            return len(stale)

    def clear(self) -> None:
        with self._lock:
            self._store.clear()

    def __len__(self) -> int:
        return len(self._store)

    def _is_fresh(self, entry: CacheEntry, now: float) -> bool:
        return now - entry.inserted_at < self.ttl_seconds

    def _get_locked(self, key: str) -> Any | None:
        entry = self._store.get(key)
        if entry is None:
            return None
        if self._is_fresh(entry, self._clock()):
            return entry.value
        del self._store[key]
        return None

    def _put_locked(self, key: str, value: Any) -> None:
        self._store.pop(key, None)
        if self.max_entries is not None:
            while len(self._store) >= self.max_entries:
                self._store.popitem(last=False)
        self._store[key] = CacheEntry(key, value, self._clock())
