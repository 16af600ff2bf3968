# core/cache.py
"""
Caching utilities for upstream provider responses
"""
from typing import Any, Optional, Hashable
from cachetools import TTLCache

class CacheManager:
    """In-memory TTL cache keyed by request parameters"""

    def __init__(self, max_size: int = 1000, ttl: int = 1800):
        self.ttl = ttl
        self._cache: TTLCache = TTLCache(maxsize=max_size, ttl=ttl)

    def get(self, key: Hashable) -> Optional[Any]:
        """Get value from cache"""
        return self._cache.get(key)

    def set(self, key: Hashable, value: Any) -> None:
        """Set value in cache"""
        self._cache[key] = value

    def __len__(self) -> int:
        return len(self._cache)
