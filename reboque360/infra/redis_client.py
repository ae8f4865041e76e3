# reboque360/infra/redis_client.py
"""
Клиент Redis для кэша геокодирования.
Ключи автоматически получают префикс пространства имён.
"""

from __future__ import annotations

from typing import Type, TypeVar

import redis.asyncio as redis
from pydantic import BaseModel, ValidationError

from reboque360.common.constants import TypeMsg
from reboque360.common.logger import log_error, log_info

M = TypeVar("M", bound=BaseModel)


class RedisClient:
    """
    Асинхронный клиент Redis (один экземпляр на процесс).
    Строковые, JSON и Pydantic операции с TTL.
    """

    _instance: RedisClient | None = None

    def __new__(cls) -> RedisClient:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self) -> None:
        if getattr(self, "_initialized", False):
            return
        self._initialized = True
        self._client: redis.Redis | None = None
        self._namespace = "reboque360"

    @property
    def client(self) -> redis.Redis:
        if self._client is None:
            raise RuntimeError("Redis не подключён: вызовите connect()")
        return self._client

    @property
    def namespace(self) -> str:
        return self._namespace

    def _make_key(self, key: str) -> str:
        return f"{self._namespace}:{key}"

    async def connect(
        self,
        url: str | None = None,
        max_connections: int | None = None,
        namespace: str | None = None,
    ) -> None:
        """
        Подключается и проверяет соединение через PING.
        Недостающие параметры берутся из settings.redis.
        """
        if self._client is not None:
            return

        from reboque360.config import settings

        self._namespace = namespace or settings.redis.REDIS_NAMESPACE

        await log_info("Подключение к Redis...", type_msg=TypeMsg.INFO)
        self._client = redis.from_url(
            url or settings.redis.url,
            max_connections=max_connections or settings.redis.REDIS_MAX_CONNECTIONS,
            decode_responses=True,
        )
        await self._client.ping()
        await log_info("Redis подключён", type_msg=TypeMsg.INFO)

    async def disconnect(self) -> None:
        if self._client is None:
            return
        await self._client.aclose()
        self._client = None
        await log_info("Соединение с Redis закрыто", type_msg=TypeMsg.INFO)

    # =========================================================================
    # СТРОКИ
    # =========================================================================

    async def get(self, key: str) -> str | None:
        return await self.client.get(self._make_key(key))

    async def set(self, key: str, value: str, ttl: int | None = None) -> bool:
        """Записывает значение; ttl в секундах, None = бессрочно."""
        return bool(await self.client.set(self._make_key(key), value, ex=ttl))

    # =========================================================================
    # PYDANTIC
    # =========================================================================

    async def get_model(self, key: str, model_class: Type[M]) -> M | None:
        """Читает значение и валидирует его в модель; битые данные = промах."""
        raw = await self.get(key)
        if raw is None:
            return None
        try:
            return model_class.model_validate_json(raw)
        except ValidationError as e:
            await log_error(f"Кэш {key} не соответствует {model_class.__name__}: {e}")
            return None

    async def set_model(
        self,
        key: str,
        model: BaseModel,
        ttl: int | None = None,
    ) -> bool:
        return await self.set(key, model.model_dump_json(), ttl=ttl)

    async def health_check(self) -> bool:
        try:
            return bool(await self.client.ping())
        except Exception as e:
            await log_error(f"Redis health check: {e}")
            return False


def get_redis() -> RedisClient:
    """Глобальный RedisClient."""
    return RedisClient()


async def init_redis() -> RedisClient:
    """Подключается к Redis по настройкам из конфига."""
    client = get_redis()
    await client.connect()
    return client


async def close_redis() -> None:
    await get_redis().disconnect()
