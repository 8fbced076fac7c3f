"""Redis IP reputation cache (adapter).

Drop-in replacement for the in-memory cache when several processes should
share reputation results. Entries are stored as JSON under
``vigil:ip_reputation:<address>`` with a Redis expiry equal to the TTL.

Architecture:
- Implements IPReputationCacheProtocol without inheritance
- Maps Redis exceptions to CacheError
- Returns Result types; callers fail open on Failure
"""

import json
from datetime import datetime, timedelta

from redis.asyncio import Redis
from redis.exceptions import RedisError

from vigil.core.clock import Clock, utc_now
from vigil.core.enums import ErrorCode
from vigil.core.errors import DomainError
from vigil.core.result import Failure, Result, Success
from vigil.domain.protocols import IPReputationEntry
from vigil.infrastructure.enums import InfrastructureErrorCode
from vigil.infrastructure.errors import CacheError

KEY_PREFIX = "vigil:ip_reputation"


def ip_reputation_key(address: str) -> str:
    """Cache key for an address."""
    return f"{KEY_PREFIX}:{address}"


class RedisIPReputationCache:
    """Redis-backed IPReputationCacheProtocol.

    Attributes:
        _redis: Async Redis client instance.
    """

    def __init__(
        self, redis_client: Redis, ttl_seconds: int = 3600, clock: Clock = utc_now
    ) -> None:
        self._redis = redis_client
        self._ttl_seconds = ttl_seconds
        self._clock = clock

    async def get(self, address: str) -> Result[IPReputationEntry | None, DomainError]:
        """Get the fresh entry for an address.

        Returns:
            Success(entry), Success(None) on miss or stale entry, or
            Failure(CacheError).
        """
        key = ip_reputation_key(address)
        try:
            raw = await self._redis.get(key)
        except RedisError as e:
            return Failure(
                error=CacheError(
                    code=ErrorCode.CACHE_UNAVAILABLE,
                    infrastructure_code=InfrastructureErrorCode.CACHE_GET_ERROR,
                    message=f"Failed to get key '{key}' from cache",
                    details={"key": key, "error": str(e)},
                )
            )

        if raw is None:
            return Success(value=None)

        try:
            data = json.loads(raw.decode("utf-8") if isinstance(raw, bytes) else raw)
            entry = IPReputationEntry(
                address=data["address"],
                score=int(data["score"]),
                reasons=tuple(data.get("reasons", ())),
                cached_at=datetime.fromisoformat(data["cached_at"]),
            )
        except (ValueError, KeyError, TypeError) as e:
            return Failure(
                error=CacheError(
                    code=ErrorCode.CACHE_UNAVAILABLE,
                    infrastructure_code=InfrastructureErrorCode.CACHE_DATA_ERROR,
                    message=f"Malformed cache entry for key '{key}'",
                    details={"key": key, "error": str(e)},
                )
            )

        # Redis expiry normally removes stale keys first
        if self._clock() >= entry.cached_at + timedelta(seconds=self._ttl_seconds):
            return Success(value=None)
        return Success(value=entry)

    async def set(self, entry: IPReputationEntry) -> Result[None, DomainError]:
        """Store the entry with a TTL (overwrites any existing entry)."""
        key = ip_reputation_key(entry.address)
        payload = json.dumps(
            {
                "address": entry.address,
                "score": entry.score,
                "reasons": list(entry.reasons),
                "cached_at": entry.cached_at.isoformat(),
            }
        )
        try:
            await self._redis.setex(key, self._ttl_seconds, payload)
            return Success(value=None)
        except RedisError as e:
            return Failure(
                error=CacheError(
                    code=ErrorCode.CACHE_UNAVAILABLE,
                    infrastructure_code=InfrastructureErrorCode.CACHE_SET_ERROR,
                    message=f"Failed to set key '{key}' in cache",
                    details={"key": key, "error": str(e)},
                )
            )
