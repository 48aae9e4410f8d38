"""Tests for cache service implementations."""

from datetime import timedelta
from unittest.mock import AsyncMock

import pytest

from app.core import config
from app.services.cache_service import RedisCacheService
from app.services.memory_cache_service import MemoryCacheService


@pytest.fixture
def settings() -> config.TestingSettings:
    return config.TestingSettings()


class TestMemoryCacheService:
    async def test_set_and_get(self, settings: config.TestingSettings) -> None:
        cache = MemoryCacheService(settings)
        assert await cache.set("search:analytics", [{"category": "Web"}])
        assert await cache.get("search:analytics") == [{"category": "Web"}]

    async def test_expired_value_is_a_miss(self, settings: config.TestingSettings) -> None:
        cache = MemoryCacheService(settings)
        await cache.set("key", "value", expire=timedelta(seconds=-1))
        assert await cache.get("key") is None

class TestRedisCacheService:
    async def test_disabled_without_client(self, settings: config.TestingSettings) -> None:
        cache = RedisCacheService(None, settings)
        assert await cache.get("key") is None
        assert await cache.set("key", 1) is False
        assert await cache.ping() == "disabled"

    async def test_round_trips_json(self, settings: config.TestingSettings) -> None:
        client = AsyncMock()
        cache = RedisCacheService(client, settings)

        await cache.set("key", {"a": 1}, expire=timedelta(seconds=30))
        client.set.assert_awaited_once_with("key", '{"a": 1}', ex=30)

        client.get.return_value = b'{"a": 1}'
        assert await cache.get("key") == {"a": 1}

    async def test_default_expiry_from_settings(self, settings: config.TestingSettings) -> None:
        client = AsyncMock()
        cache = RedisCacheService(client, settings)
        await cache.set("key", 1)
        client.set.assert_awaited_once_with("key", "1", ex=settings.cache_ttl_seconds)

    async def test_errors_behave_as_misses(self, settings: config.TestingSettings) -> None:
        client = AsyncMock()
        client.get.side_effect = ConnectionError("redis down")
        client.set.side_effect = ConnectionError("redis down")
        client.ping.side_effect = ConnectionError("redis down")
        cache = RedisCacheService(client, settings)

        assert await cache.get("key") is None
        assert await cache.set("key", 1) is False
        assert (await cache.ping()).startswith("unhealthy")
