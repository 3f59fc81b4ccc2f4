import json
import threading
import time
import logging
from typing import Any, Callable, Dict, List, Optional

logger = logging.getLogger(__name__)

DEFAULT_TTL_MS = 5 * 60 * 1000
NO_PARAMS = "all"


def _wall_clock_ms() -> float:
    return time.time() * 1000


def make_key(collection: str, params: Optional[Dict[str, Any]] = None) -> str:
    """Build a cache key from a collection name and query parameters.

    Parameters are serialized with sorted keys so logically identical queries
    always map to byte-identical keys.
    """
    if not params:
        return f"{collection}_{NO_PARAMS}"
    return f"{collection}_{json.dumps(params, sort_keys=True, separators=(',', ':'), default=str)}"


class CacheStore:
    """In-process key/value store with a per-entry time-to-live.

    Entries live for the lifetime of the process only. TTLs and timestamps are
    in milliseconds as reported by ``clock``.
    """

    def __init__(self, clock: Optional[Callable[[], float]] = None, default_ttl: int = DEFAULT_TTL_MS):
        self._clock = clock or _wall_clock_ms
        self._default_ttl = default_ttl
        self._cache: Dict[str, Dict[str, Any]] = {}
        self._lock = threading.Lock()

    @property
    def default_ttl(self) -> int:
        return self._default_ttl

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            item = self._cache.get(key)
            if item is None:
                return None
            if self._clock() - item["timestamp"] > item["ttl"]:
                del self._cache[key]
                logger.debug(f"Cache entry expired: {key}")
                return None
            return item["data"]

    def set(self, key: str, data: Any, ttl: Optional[int] = None) -> None:
        with self._lock:
            self._cache[key] = {
                "data": data,
                "timestamp": self._clock(),
                "ttl": self._default_ttl if ttl is None else ttl,
            }

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._cache.pop(key, None) is not None

    def invalidate(self, pattern: Optional[str] = None) -> int:
        with self._lock:
            if pattern is None:
                removed = len(self._cache)
                self._cache.clear()
            else:
                keys_to_delete = [key for key in self._cache if pattern in key]
                for key in keys_to_delete:
                    del self._cache[key]
                removed = len(keys_to_delete)
        logger.info(f"Invalidated {removed} cache entries for pattern {pattern or '*'}")
        return removed

    def size(self) -> int:
        with self._lock:
            return len(self._cache)

    def keys(self) -> List[str]:
        with self._lock:
            return list(self._cache.keys())

    make_key = staticmethod(make_key)
