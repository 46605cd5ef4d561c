"""Cache infrastructure package.

Architecture:
- RedisAdapter: Redis primitives returning Result types
- CacheKeys: Shared-state key layout
- Use src.core.container.get_cache() for dependency injection
"""

from src.infrastructure.cache.cache_keys import CacheKeys
from src.infrastructure.cache.redis_adapter import RedisAdapter

__all__ = [
    "CacheKeys",
    "RedisAdapter",
]
