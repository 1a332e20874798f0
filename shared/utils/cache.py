"""Time-boxed in-memory cache"""

import threading
import time
from typing import Any, Callable, Dict, Hashable, Optional, Tuple


class TTLCache:
    """Key/value cache whose entries expire after a fixed TTL

    The clock is injectable so expiry can be tested without sleeping.

    Usage:
        cache = TTLCache(ttl_seconds=3600)
        exercises = cache.get_or_load("exercises", reader.list_active_exercises)
    """

    def __init__(
        self,
        ttl_seconds: float,
        clock: Optional[Callable[[], float]] = None,
    ):
        """
        Args:
            ttl_seconds: entry lifetime in seconds (0 disables caching)
            clock: monotonic time source (default: time.monotonic)
        """
        if ttl_seconds < 0:
            raise ValueError("ttl_seconds must be >= 0")
        self.ttl_seconds = ttl_seconds
        self._clock = clock or time.monotonic
        self._entries: Dict[Hashable, Tuple[float, Any]] = {}
        self._lock = threading.Lock()

    def get(self, key: Hashable) -> Tuple[bool, Any]:
        """Return (hit, value)"""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return False, None
            expires_at, value = entry
            if self._clock() >= expires_at:
                del self._entries[key]
                return False, None
            return True, value

    def set(self, key: Hashable, value: Any) -> None:
        if self.ttl_seconds == 0:
            return
        with self._lock:
            self._entries[key] = (self._clock() + self.ttl_seconds, value)

    def get_or_load(self, key: Hashable, loader: Callable[[], Any]) -> Any:
        """Return the cached value or call loader and cache its result

        Loader exceptions propagate and nothing is cached.
        """
        hit, value = self.get(key)
        if hit:
            return value
        value = loader()
        self.set(key, value)
        return value

    def invalidate(self, key: Optional[Hashable] = None) -> None:
        """Drop one key, or everything when key is None"""
        with self._lock:
            if key is None:
                self._entries.clear()
            else:
                self._entries.pop(key, None)

    def __len__(self) -> int:
        return len(self._entries)
