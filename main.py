#!/usr/bin/env python3
# main.py
"""
Главная точка входа Reboque360.

Режимы:
    api      - HTTP API (uvicorn), по умолчанию
    init_db  - создать базу данных (если её нет) и применить схему
"""

from __future__ import annotations

import asyncio
import sys

import asyncpg
import uvicorn

from reboque360.common.constants import TypeMsg
from reboque360.common.logger import log_error, log_info, setup_logging
from reboque360.config import settings


def run_api() -> None:
    """Запускает HTTP API."""
    uvicorn.run(
        "reboque360.api.app:app",
        host=settings.api.API_HOST,
        port=settings.api.API_PORT,
        reload=settings.system.DEBUG,
        log_level="debug" if settings.system.DEBUG else "info",
    )


async def create_database() -> None:
    """Создаёт базу DB_NAME через служебную базу postgres, если её ещё нет."""
    db_name = settings.database.DB_NAME

    sys_conn = await asyncpg.connect(
        user=settings.database.DB_USER,
        password=settings.database.DB_PASSWORD,
        host=settings.database.DB_HOST,
        port=settings.database.DB_PORT,
        database="postgres",
    )
    try:
        exists = await sys_conn.fetchval(
            "SELECT 1 FROM pg_database WHERE datname = $1", db_name
        )
        if exists:
            await log_info(f"База {db_name} уже существует", type_msg=TypeMsg.INFO)
            return
        # Имя базы нельзя передать параметром
        await sys_conn.execute(f'CREATE DATABASE "{db_name}"')
        await log_info(f"База {db_name} создана", type_msg=TypeMsg.INFO)
    finally:
        await sys_conn.close()


async def init_database() -> None:
    """Создаёт базу и применяет migrations/init.sql."""
    from reboque360.infra.database import close_db, init_db

    await create_database()
    await init_db()
    await close_db()


def print_usage() -> None:
    print("""
Reboque360

Использование:
    python main.py [режим]

Режимы:
    api        - HTTP API (по умолчанию)
    init_db    - создать базу данных и применить схему

Примеры:
    python main.py
    python main.py init_db
    """)


if __name__ == "__main__":
    mode = "api"

    if len(sys.argv) > 1:
        arg = sys.argv[1].lower()
        if arg in ("--help", "-h"):
            print_usage()
            sys.exit(0)
        elif arg in ("api", "init_db"):
            mode = arg
        else:
            print(f"Ошибка: неизвестный режим '{arg}'")
            print_usage()
            sys.exit(1)

    setup_logging()

    if mode == "init_db":
        try:
            asyncio.run(init_database())
        except (OSError, asyncpg.PostgresError) as e:
            asyncio.run(log_error(f"Не удалось подготовить базу данных: {e}"))
            sys.exit(1)
    else:
        run_api()
