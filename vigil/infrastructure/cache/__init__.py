"""IP reputation cache adapters.

- InMemoryIPReputationCache: process-local (default)
- RedisIPReputationCache: shared across processes
- Use vigil.core.container.get_ip_reputation_cache() for dependency injection
"""

from vigil.infrastructure.cache.in_memory_ip_reputation_cache import (
    InMemoryIPReputationCache,
)
from vigil.infrastructure.cache.redis_ip_reputation_cache import (
    RedisIPReputationCache,
    ip_reputation_key,
)

__all__ = [
    "InMemoryIPReputationCache",
    "RedisIPReputationCache",
    "ip_reputation_key",
]
