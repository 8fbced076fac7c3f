"""Unit tests for the IP reputation cache adapters.

Tests cover:
- In-memory TTL expiry and last-writer-wins
- Redis adapter key format, payload, expiry and error mapping (mocked client)
"""

import json
from datetime import timedelta
from unittest.mock import AsyncMock

import pytest
from freezegun import freeze_time
from redis.exceptions import ConnectionError as RedisConnectionError

from tests.conftest import WEEKDAY_NOON, FakeClock
from vigil.core.enums import ErrorCode
from vigil.core.result import Failure, Success
from vigil.domain.protocols import IPReputationEntry
from vigil.infrastructure.cache import (
    InMemoryIPReputationCache,
    RedisIPReputationCache,
    ip_reputation_key,
)
from vigil.infrastructure.enums import InfrastructureErrorCode
from vigil.infrastructure.errors import CacheError


def entry(address: str = "10.0.0.5", score: int = 5, cached_at=WEEKDAY_NOON):
    return IPReputationEntry(
        address=address,
        score=score,
        reasons=("Private or reserved network address",),
        cached_at=cached_at,
    )


@pytest.mark.unit
class TestInMemoryIPReputationCache:
    """Test the process-local cache."""

    @pytest.mark.asyncio
    async def test_miss_returns_none(self):
        cache = InMemoryIPReputationCache()

        result = await cache.get("10.0.0.5")

        assert result == Success(value=None)

    @pytest.mark.asyncio
    async def test_fresh_entry_returned(self):
        clock = FakeClock()
        cache = InMemoryIPReputationCache(ttl_seconds=3600, clock=clock)
        await cache.set(entry())

        clock.advance(minutes=59)
        result = await cache.get("10.0.0.5")

        assert result.value.score == 5

    @pytest.mark.asyncio
    async def test_expired_entry_is_a_miss(self):
        clock = FakeClock()
        cache = InMemoryIPReputationCache(ttl_seconds=3600, clock=clock)
        await cache.set(entry())

        clock.advance(hours=1)
        result = await cache.get("10.0.0.5")

        assert result.value is None

    @pytest.mark.asyncio
    async def test_default_clock_expiry(self):
        cache = InMemoryIPReputationCache(ttl_seconds=60)
        with freeze_time("2026-10-14 12:00:00"):
            await cache.set(entry())
            assert (await cache.get("10.0.0.5")).value is not None

        with freeze_time("2026-10-14 12:01:00"):
            assert (await cache.get("10.0.0.5")).value is None

    @pytest.mark.asyncio
    async def test_last_writer_wins(self):
        cache = InMemoryIPReputationCache(clock=FakeClock())
        await cache.set(entry(score=5))
        await cache.set(entry(score=35))

        result = await cache.get("10.0.0.5")

        assert result.value.score == 35
        assert len(cache) == 1


@pytest.mark.unit
class TestRedisIPReputationCache:
    """Test the Redis adapter with a mocked client."""

    def test_key_format(self):
        assert ip_reputation_key("10.0.0.5") == "vigil:ip_reputation:10.0.0.5"

    @pytest.mark.asyncio
    async def test_set_writes_json_with_ttl(self):
        redis = AsyncMock()
        cache = RedisIPReputationCache(redis_client=redis, ttl_seconds=3600)

        result = await cache.set(entry())

        assert isinstance(result, Success)
        key, ttl, payload = redis.setex.call_args.args
        assert key == "vigil:ip_reputation:10.0.0.5"
        assert ttl == 3600
        assert json.loads(payload)["score"] == 5

    @pytest.mark.asyncio
    async def test_get_decodes_entry(self):
        redis = AsyncMock()
        redis.get.return_value = json.dumps(
            {
                "address": "10.0.0.5",
                "score": 5,
                "reasons": ["Private or reserved network address"],
                "cached_at": WEEKDAY_NOON.isoformat(),
            }
        ).encode("utf-8")
        cache = RedisIPReputationCache(
            redis_client=redis, ttl_seconds=3600, clock=FakeClock()
        )

        result = await cache.get("10.0.0.5")

        assert result.value == entry()

    @pytest.mark.asyncio
    async def test_get_miss(self):
        redis = AsyncMock()
        redis.get.return_value = None
        cache = RedisIPReputationCache(redis_client=redis)

        result = await cache.get("10.0.0.5")

        assert result.value is None

    @pytest.mark.asyncio
    async def test_stale_payload_is_a_miss(self):
        redis = AsyncMock()
        redis.get.return_value = json.dumps(
            {
                "address": "10.0.0.5",
                "score": 5,
                "reasons": [],
                "cached_at": (WEEKDAY_NOON - timedelta(hours=2)).isoformat(),
            }
        )
        cache = RedisIPReputationCache(
            redis_client=redis, ttl_seconds=3600, clock=FakeClock()
        )

        result = await cache.get("10.0.0.5")

        assert result.value is None

    @pytest.mark.asyncio
    async def test_redis_error_mapped_to_cache_error(self):
        redis = AsyncMock()
        redis.get.side_effect = RedisConnectionError("refused")
        cache = RedisIPReputationCache(redis_client=redis)

        result = await cache.get("10.0.0.5")

        assert isinstance(result, Failure)
        assert isinstance(result.error, CacheError)
        assert result.error.code is ErrorCode.CACHE_UNAVAILABLE
        assert result.error.infrastructure_code is InfrastructureErrorCode.CACHE_GET_ERROR

    @pytest.mark.asyncio
    async def test_malformed_payload_mapped_to_data_error(self):
        redis = AsyncMock()
        redis.get.return_value = b"not-json"
        cache = RedisIPReputationCache(redis_client=redis)

        result = await cache.get("10.0.0.5")

        assert result.error.infrastructure_code is InfrastructureErrorCode.CACHE_DATA_ERROR

    @pytest.mark.asyncio
    async def test_set_error_mapped_to_cache_error(self):
        redis = AsyncMock()
        redis.setex.side_effect = RedisConnectionError("refused")
        cache = RedisIPReputationCache(redis_client=redis)

        result = await cache.set(entry())

        assert result.error.infrastructure_code is InfrastructureErrorCode.CACHE_SET_ERROR
