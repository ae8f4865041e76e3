# reboque360/api/dependencies.py
"""
Dependency Injection для HTTP API.
"""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING, Annotated, Optional

from fastapi import Depends, Header, HTTPException, Query, Request
from pydantic import ValidationError

from reboque360.common.filters import DateRange
from reboque360.core.accounts.models import AccountContext
from reboque360.core.accounts.service import AccountService

if TYPE_CHECKING:
    from reboque360.core.finance.service import LedgerService
    from reboque360.core.fleet.service import FleetService
    from reboque360.core.geo.service import GeoService
    from reboque360.core.quotes.service import QuoteService
    from reboque360.core.tow_services.service import ServiceManager
    from reboque360.infra.database import DatabaseManager
    from reboque360.infra.redis_client import RedisClient


# Синглтоны для инфраструктуры
_db: "DatabaseManager | None" = None
_redis: "RedisClient | None" = None
_geo: "GeoService | None" = None

# Синглтоны для сервисов
_account_service: AccountService | None = None
_quote_service: "QuoteService | None" = None
_service_manager: "ServiceManager | None" = None
_ledger_service: "LedgerService | None" = None
_fleet_service: "FleetService | None" = None


async def init_dependencies(
    db: "DatabaseManager",
    redis: "RedisClient | None",
    geo: "GeoService",
) -> None:
    """Инициализировать зависимости при старте приложения."""
    global _db, _redis, _geo
    _db = db
    _redis = redis
    _geo = geo


def get_db() -> "DatabaseManager":
    """Получить менеджер базы данных."""
    if _db is None:
        raise RuntimeError("База данных не инициализирована. Вызовите init_dependencies()")
    return _db


def get_redis() -> "RedisClient | None":
    """Клиент Redis или None, если кэш отключён."""
    return _redis


def get_geo_service() -> "GeoService":
    """Получить геокодер."""
    if _geo is None:
        raise RuntimeError("GeoService не инициализирован. Вызовите init_dependencies()")
    return _geo


def get_account_service() -> AccountService:
    global _account_service

    if _account_service is None:
        _account_service = AccountService(db=get_db())

    return _account_service


def get_quote_service() -> "QuoteService":
    """Получить сервис заявок."""
    global _quote_service

    if _quote_service is None:
        from reboque360.core.quotes.service import QuoteService
        _quote_service = QuoteService(db=get_db(), geo=get_geo_service())

    return _quote_service


def get_service_manager() -> "ServiceManager":
    """Получить менеджер выездов."""
    global _service_manager

    if _service_manager is None:
        from reboque360.core.tow_services.service import ServiceManager
        _service_manager = ServiceManager(db=get_db())

    return _service_manager


def get_ledger_service() -> "LedgerService":
    global _ledger_service

    if _ledger_service is None:
        from reboque360.core.finance.service import LedgerService
        _ledger_service = LedgerService(db=get_db())

    return _ledger_service


def get_fleet_service() -> "FleetService":
    global _fleet_service

    if _fleet_service is None:
        from reboque360.core.fleet.service import FleetService
        _fleet_service = FleetService(db=get_db())

    return _fleet_service


async def cleanup_dependencies() -> None:
    """Очистить ресурсы при остановке приложения."""
    global _account_service, _quote_service, _service_manager
    global _ledger_service, _fleet_service, _geo
    _account_service = None
    _quote_service = None
    _service_manager = None
    _ledger_service = None
    _fleet_service = None

    if _geo is not None:
        await _geo.close()
        _geo = None


# =============================================================================
# КОНТЕКСТ ЗАПРОСА
# =============================================================================

async def get_current_account(
    request: Request,
    x_account_id: Annotated[str, Header(alias="X-Account-Id")],
    accounts: Annotated[AccountService, Depends(get_account_service)],
) -> AccountContext:
    """
    Загрузить аккаунт по заголовку X-Account-Id.

    Язык аккаунта сохраняется в request.state для локализации ошибок.
    """
    account = await accounts.get_account(x_account_id)
    request.state.language = account.language
    return account


def get_period(
    start: Annotated[Optional[date], Query(description="Первый день, включительно")] = None,
    end: Annotated[Optional[date], Query(description="Последний день, включительно")] = None,
) -> Optional[DateRange]:
    """Период фильтра списков; None, если границы не заданы."""
    if start is None and end is None:
        return None
    try:
        return DateRange(start=start, end=end)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))
