"""Thread-safe TTL cache for rendered translations."""

from __future__ import annotations

import threading
import time
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Any


@dataclass
class CacheEntry:
    """Cache entry with metadata.

    Attributes:
        value: Cached value
        created_at: Creation timestamp
        ttl: Time-to-live in seconds
    """
    value: Any
    created_at: float = field(default_factory=time.monotonic)
    ttl: float = 3600.0

    @property
    def is_expired(self) -> bool:
        """Check if entry is expired."""
        return time.monotonic() - self.created_at > self.ttl


class TTLCache:
    """Bounded cache with time-based expiration.

    Entries expire ``ttl`` seconds after being set. When full, the
    least recently used entry is evicted.
    """

    def __init__(self, max_size: int = 10000, ttl: float = 3600.0) -> None:
        self.max_size = max_size
        self.ttl = ttl
        self._cache: OrderedDict[str, CacheEntry] = OrderedDict()
        self._lock = threading.RLock()

    def get(self, key: str) -> tuple[bool, Any]:
        """Look up a key.

        Returns:
            ``(hit, value)``; ``value`` is None on a miss
        """
        with self._lock:
            entry = self._cache.get(key)
            if entry is None:
                return False, None

            if entry.is_expired:
                del self._cache[key]
                return False, None

            self._cache.move_to_end(key)
            return True, entry.value

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            self._cache.pop(key, None)
            while len(self._cache) >= self.max_size:
                self._cache.popitem(last=False)
            self._cache[key] = CacheEntry(value=value, created_at=time.monotonic(), ttl=self.ttl)

    def clear(self) -> None:
        """Clear all entries."""
        with self._lock:
            self._cache.clear()

    def cleanup_expired(self) -> int:
        """Remove all expired entries.

        Returns:
            Number of entries removed
        """
        with self._lock:
            expired = [k for k, v in self._cache.items() if v.is_expired]
            for key in expired:
                del self._cache[key]
            return len(expired)

    def __len__(self) -> int:
        return len(self._cache)

    def __contains__(self, key: str) -> bool:
        with self._lock:
            entry = self._cache.get(key)
            return entry is not None and not entry.is_expired
