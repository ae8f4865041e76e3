# tests/infra/test_redis_client.py
"""
Тесты для клиента Redis.
"""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

import pytest

from reboque360.core.geo.models import Coordinates
from reboque360.infra.redis_client import RedisClient


class TestRedisClient:
    """Тесты для RedisClient."""

    @pytest.fixture
    def redis_client(self) -> RedisClient:
        """Новый экземпляр RedisClient для каждого теста."""
        RedisClient._instance = None
        return RedisClient()

    @pytest.fixture
    def connected_client(self, redis_client: RedisClient) -> RedisClient:
        redis_client._client = AsyncMock()
        return redis_client

    def test_singleton(self) -> None:
        """Паттерн Singleton."""
        RedisClient._instance = None

        assert RedisClient() is RedisClient()

    def test_client_not_initialized(self, redis_client: RedisClient) -> None:
        """Обращение к клиенту до connect() - ошибка."""
        with pytest.raises(RuntimeError, match="Redis не подключён"):
            _ = redis_client.client

    def test_make_key(self, redis_client: RedisClient) -> None:
        assert redis_client._make_key("geo:abc") == "reboque360:geo:abc"

    def test_make_key_custom_namespace(self, redis_client: RedisClient) -> None:
        redis_client._namespace = "custom"
        assert redis_client._make_key("geo:abc") == "custom:geo:abc"

    @pytest.mark.asyncio
    async def test_connect(self, redis_client: RedisClient) -> None:
        """Подключение проверяется через PING."""
        mock_redis = AsyncMock()
        mock_redis.ping = AsyncMock(return_value=True)

        with patch("redis.asyncio.from_url", return_value=mock_redis):
            await redis_client.connect(
                url="redis://localhost:6379/0",
                max_connections=10,
                namespace="test",
            )

        assert redis_client.client is mock_redis
        assert redis_client.namespace == "test"
        mock_redis.ping.assert_called_once()

    @pytest.mark.asyncio
    async def test_connect_already_connected(self, connected_client: RedisClient) -> None:
        """Повторное подключение пропускается."""
        with patch("redis.asyncio.from_url") as mock_from_url:
            await connected_client.connect()

        mock_from_url.assert_not_called()

    @pytest.mark.asyncio
    async def test_disconnect(self, connected_client: RedisClient) -> None:
        inner = connected_client._client

        await connected_client.disconnect()

        inner.aclose.assert_called_once()
        assert connected_client._client is None

    @pytest.mark.asyncio
    async def test_set_with_ttl(self, connected_client: RedisClient) -> None:
        """TTL передаётся как ex, ключ получает префикс."""
        connected_client._client.set = AsyncMock(return_value=True)

        assert await connected_client.set("k", "v", ttl=60) is True
        connected_client._client.set.assert_called_once_with("reboque360:k", "v", ex=60)

    @pytest.mark.asyncio
    async def test_model_round_trip(self, connected_client: RedisClient) -> None:
        """Модель сохраняется как JSON и читается обратно."""
        connected_client._client.set = AsyncMock(return_value=True)
        await connected_client.set_model("geo:x", Coordinates(lat=-23.5, lon=-46.6), ttl=10)
        stored = connected_client._client.set.call_args.args[1]

        connected_client._client.get = AsyncMock(return_value=stored)
        model = await connected_client.get_model("geo:x", Coordinates)

        assert model == Coordinates(lat=-23.5, lon=-46.6)

    @pytest.mark.asyncio
    async def test_get_model_invalid(self, connected_client: RedisClient) -> None:
        """Данные не по схеме считаются промахом."""
        connected_client._client.get = AsyncMock(return_value='{"lat": "north"}')

        assert await connected_client.get_model("geo:x", Coordinates) is None

    @pytest.mark.asyncio
    async def test_get_model_missing(self, connected_client: RedisClient) -> None:
        connected_client._client.get = AsyncMock(return_value=None)

        assert await connected_client.get_model("geo:x", Coordinates) is None

    @pytest.mark.asyncio
    async def test_health_check(self, connected_client: RedisClient) -> None:
        connected_client._client.ping = AsyncMock(return_value=True)
        assert await connected_client.health_check() is True

        connected_client._client.ping = AsyncMock(side_effect=ConnectionError("down"))
        assert await connected_client.health_check() is False

    @pytest.mark.asyncio
    async def test_health_check_not_connected(self, redis_client: RedisClient) -> None:
        """Без соединения health check возвращает False."""
        assert await redis_client.health_check() is False
