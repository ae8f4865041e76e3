# reboque360/infra/database.py
"""
Пул соединений PostgreSQL (asyncpg).
Повтор при обрыве соединения, транзакции, применение init.sql при старте.
"""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from functools import wraps
from typing import Any, AsyncGenerator, Callable, TypeVar

import asyncpg
from asyncpg import Connection, Pool, Record

from reboque360.common.constants import TypeMsg
from reboque360.common.logger import log_error, log_info, log_warning

T = TypeVar("T")

# Ошибки, после которых имеет смысл повторить запрос
RETRYABLE_ERRORS: tuple[type[BaseException], ...] = (
    asyncpg.PostgresConnectionError,
    asyncpg.InterfaceError,
    ConnectionRefusedError,
    OSError,
)

# Произвольный ключ advisory lock для миграции схемы
SCHEMA_LOCK_KEY = 360360


def retry_on_connection_error(
    max_attempts: int = 3,
    delay: float = 1.0,
) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """
    Повторяет корутину при ошибках соединения с линейной задержкой.

    Args:
        max_attempts: Сколько всего попыток
        delay: Базовая задержка (секунды), умножается на номер попытки
    """
    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            last_error: BaseException | None = None

            for attempt in range(1, max_attempts + 1):
                try:
                    return await func(*args, **kwargs)
                except RETRYABLE_ERRORS as e:
                    last_error = e
                    if attempt == max_attempts:
                        await log_error(
                            f"PostgreSQL недоступен после {max_attempts} попыток: {e}"
                        )
                        break
                    await log_warning(
                        f"Сбой соединения с PostgreSQL ({attempt}/{max_attempts}): {e}"
                    )
                    await asyncio.sleep(delay * attempt)

            raise last_error  # type: ignore[misc]

        return wrapper  # type: ignore[return-value]

    return decorator


class DatabaseManager:
    """
    Обёртка над пулом asyncpg.
    Один экземпляр на процесс.
    """

    _instance: DatabaseManager | None = None

    def __new__(cls) -> DatabaseManager:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self) -> None:
        if getattr(self, "_initialized", False):
            return
        self._initialized = True
        self._pool: Pool | None = None

    @property
    def pool(self) -> Pool:
        if self._pool is None:
            raise RuntimeError("Пул PostgreSQL не создан: вызовите connect()")
        return self._pool

    @property
    def is_connected(self) -> bool:
        return self._pool is not None

    @retry_on_connection_error(max_attempts=3, delay=1.0)
    async def connect(
        self,
        dsn: str | None = None,
        min_size: int | None = None,
        max_size: int | None = None,
        command_timeout: int | None = None,
    ) -> None:
        """
        Создаёт пул. Недостающие параметры берутся из settings.database.
        Повторный вызов ничего не делает.
        """
        if self._pool is not None:
            return

        from reboque360.config import settings

        db_settings = settings.database
        await log_info("Создание пула PostgreSQL...", type_msg=TypeMsg.INFO)

        self._pool = await asyncpg.create_pool(
            dsn=dsn or db_settings.dsn,
            min_size=min_size or db_settings.DB_MIN_POOL_SIZE,
            max_size=max_size or db_settings.DB_MAX_POOL_SIZE,
            command_timeout=command_timeout or db_settings.DB_COMMAND_TIMEOUT,
        )

        await log_info("Пул PostgreSQL создан", type_msg=TypeMsg.INFO)

    async def disconnect(self) -> None:
        if self._pool is None:
            return
        await self._pool.close()
        self._pool = None
        await log_info("Пул PostgreSQL закрыт", type_msg=TypeMsg.INFO)

    @asynccontextmanager
    async def acquire(self) -> AsyncGenerator[Connection, None]:
        """Соединение из пула на время блока."""
        async with self.pool.acquire() as connection:
            yield connection

    @asynccontextmanager
    async def transaction(self) -> AsyncGenerator[Connection, None]:
        """
        Соединение внутри транзакции.
        Commit при нормальном выходе, rollback при исключении.

        Example:
            async with db.transaction() as conn:
                await conn.execute("UPDATE quotes ...")
                await conn.fetchrow("INSERT INTO services ... RETURNING *")
        """
        async with self.pool.acquire() as connection:
            async with connection.transaction():
                yield connection

    @retry_on_connection_error()
    async def execute(self, query: str, *args: Any) -> str:
        """Выполняет запрос, возвращает статус вида 'UPDATE 1'."""
        async with self.acquire() as conn:
            return await conn.execute(query, *args)

    @retry_on_connection_error()
    async def fetch(self, query: str, *args: Any) -> list[Record]:
        async with self.acquire() as conn:
            return await conn.fetch(query, *args)

    @retry_on_connection_error()
    async def fetchrow(self, query: str, *args: Any) -> Record | None:
        async with self.acquire() as conn:
            return await conn.fetchrow(query, *args)

    @retry_on_connection_error()
    async def fetchval(self, query: str, *args: Any, column: int = 0) -> Any:
        async with self.acquire() as conn:
            return await conn.fetchval(query, *args, column=column)

    async def health_check(self) -> bool:
        """True, если PostgreSQL отвечает на SELECT 1."""
        try:
            return await self.fetchval("SELECT 1") == 1
        except Exception as e:
            await log_error(f"PostgreSQL health check: {e}")
            return False


def affected_rows(status: str | None) -> int:
    """
    Количество затронутых строк из статуса asyncpg ('UPDATE 3' -> 3).
    """
    if not status:
        return 0
    try:
        return int(status.rsplit(" ", 1)[-1])
    except ValueError:
        return 0


def get_db() -> DatabaseManager:
    """Глобальный DatabaseManager."""
    return DatabaseManager()


async def init_db() -> DatabaseManager:
    """Подключается к PostgreSQL и применяет migrations/init.sql."""
    from reboque360.config import settings

    db = get_db()
    await db.connect()
    await log_info(
        f"PostgreSQL: {settings.database.DB_HOST}:{settings.database.DB_PORT}/{settings.database.DB_NAME}",
        type_msg=TypeMsg.INFO,
    )
    await apply_schema(db)
    return db


async def apply_schema(db: DatabaseManager) -> None:
    """
    Применяет init.sql под advisory lock.
    Скрипт идемпотентен (IF NOT EXISTS), поэтому выполняется на каждом старте.
    """
    from reboque360.config.loader import get_project_root

    schema_path = get_project_root() / "migrations" / "init.sql"
    if not schema_path.exists():
        await log_warning(f"Схема БД не найдена: {schema_path}")
        return

    schema_sql = schema_path.read_text(encoding="utf-8")

    try:
        async with db.transaction() as conn:
            await conn.execute("SELECT pg_advisory_xact_lock($1)", SCHEMA_LOCK_KEY)
            await conn.execute(schema_sql)
    except asyncpg.DuplicateObjectError as e:
        # Параллельный старт второго процесса
        await log_warning(f"Схема уже применяется другим процессом: {e}")
        return

    await log_info("Схема БД применена", type_msg=TypeMsg.INFO)


async def close_db() -> None:
    await get_db().disconnect()
