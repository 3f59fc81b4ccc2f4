from typing import Any, Callable, Dict, Optional
import logging

from pydantic import BaseModel

from coursedesk.core.cache import CacheStore
from coursedesk.core.cache_config import CACHE_TTL, INVALIDATION_PATTERNS

logger = logging.getLogger(__name__)


def _detach(value: Any) -> Any:
    """Copy a cached value so callers never share objects with the store."""
    if isinstance(value, (list, tuple)):
        return [_detach(item) for item in value]
    if isinstance(value, BaseModel):
        return value.model_copy(deep=True)
    return value


class CacheService:
    """Read-through and invalidation policy on top of one CacheStore."""

    def __init__(self, cache: CacheStore):
        self.cache = cache

    def read_through(
        self,
        collection: str,
        loader: Callable[[], Any],
        params: Optional[Dict[str, Any]] = None,
        use_cache: bool = True,
    ) -> Any:
        key = self.cache.make_key(collection, params)

        if use_cache:
            cached = self.cache.get(key)
            if cached is not None:
                logger.debug(f"Cache HIT for key: {key}")
                return _detach(cached)
            logger.debug(f"Cache MISS for key: {key}")

        result = loader()
        if result is None:
            # the row is gone, so an older snapshot must not outlive this read
            self.cache.delete(key)
            return None

        snapshot = _detach(result)
        if isinstance(snapshot, list):
            snapshot = tuple(snapshot)
        self.cache.set(key, snapshot, ttl=CACHE_TTL.get(collection))
        return result

    def invalidate_for(self, event: str) -> int:
        removed = 0
        for pattern in INVALIDATION_PATTERNS[event]:
            removed += self.cache.invalidate(pattern)
        return removed

    def invalidate(self, pattern: Optional[str] = None) -> int:
        return self.cache.invalidate(pattern)

    def get_cache_stats(self) -> Dict[str, Any]:
        return {"size": self.cache.size(), "keys": sorted(self.cache.keys())}
