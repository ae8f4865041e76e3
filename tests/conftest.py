# tests/conftest.py
"""
Общие фикстуры и настройки для тестов.
"""

from __future__ import annotations

import json
import os
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

# Устанавливаем переменные окружения перед импортом модулей
os.environ.setdefault("DB_PASSWORD", "test_password")
os.environ.setdefault("REDIS_PASSWORD", "")

from reboque360.common.constants import (  # noqa: E402
    PlanTier,
    QuoteStatus,
    ServiceStatus,
    TransactionType,
)
from reboque360.core.accounts.models import AccountContext, AccountSettings  # noqa: E402
from reboque360.core.finance.models import Transaction  # noqa: E402
from reboque360.core.fleet.models import Vehicle  # noqa: E402
from reboque360.core.quotes.models import Quote  # noqa: E402
from reboque360.core.tow_services.models import Service, ServiceWithDetails  # noqa: E402


# =============================================================================
# ФИКСТУРЫ КОНФИГУРАЦИИ
# =============================================================================

@pytest.fixture(scope="session")
def project_root() -> Path:
    """Корневая директория проекта."""
    return Path(__file__).parent.parent


@pytest.fixture(scope="session")
def config_path(project_root: Path) -> Path:
    """Путь к файлу конфигурации."""
    return project_root / "config" / "config.json"


@pytest.fixture
def mock_config() -> dict[str, Any]:
    """Мок конфигурации для тестов."""
    return {
        "_comment_system": "Системные",
        "PROJECT_NAME": "reboque360_test",
        "VERSION": "1.0.0-test",
        "DEBUG": True,
        "ENVIRONMENT": "test",
        "DEFAULT_LANGUAGE": "pt",
        "LOG_LEVEL": "DEBUG",
        "LOG_TO_FILE": False,
        "LOG_FORMAT": "colored",
        "NOMINATIM_URL": "http://nominatim.test",
        "OSRM_URL": "http://osrm.test",
        "COUNTRY_CODES": "br",
        "HTTP_TIMEOUT": 5.0,
        "GEOCODE_CACHE_TTL": 60,
        "DB_HOST": "localhost",
        "DB_PORT": 5432,
        "DB_NAME": "reboque360_test",
        "DB_USER": "postgres",
        "DB_PASSWORD": "test_password",
        "REDIS_ENABLED": False,
        "REDIS_HOST": "localhost",
        "REDIS_PORT": 6379,
        "REDIS_DB": 1,
        "REDIS_NAMESPACE": "reboque_test",
        "DEFAULT_KM_VALUE": 5.5,
        "DEFAULT_MIN_CHARGE": 150.0,
        "DEFAULT_FUEL_PRICE": 5.89,
        "CURRENCY": "BRL",
        "MAINTENANCE_ALERT_KM": 5000,
        "FREE_QUOTE_LIMIT": 10,
        "PRO_QUOTE_LIMIT": None,
        "PREMIUM_QUOTE_LIMIT": None,
        "API_PORT": 8080,
        "CORS_ORIGINS": ["http://localhost:3000"],
    }


@pytest.fixture
def temp_config_file(tmp_path: Path, mock_config: dict[str, Any]) -> Path:
    """Создаёт временный файл конфигурации."""
    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps(mock_config, ensure_ascii=False, indent=2))
    return config_file


# =============================================================================
# ФИКСТУРЫ ИНФРАСТРУКТУРЫ (МОКИ)
# =============================================================================

@pytest.fixture
def mock_conn() -> AsyncMock:
    """Мок соединения внутри транзакции."""
    conn = AsyncMock()
    conn.execute = AsyncMock(return_value="UPDATE 1")
    return conn


@pytest.fixture
def mock_db(mock_conn: AsyncMock) -> MagicMock:
    """Мок менеджера базы данных."""
    db = MagicMock()
    db.fetchrow = AsyncMock(return_value=None)
    db.fetch = AsyncMock(return_value=[])
    db.execute = AsyncMock(return_value="INSERT 0 1")
    db.fetchval = AsyncMock(return_value=0)
    db.is_connected = True
    db.health_check = AsyncMock(return_value=True)

    @asynccontextmanager
    async def transaction():
        yield mock_conn

    db.transaction = MagicMock(side_effect=transaction)
    return db


@pytest.fixture
def mock_redis() -> AsyncMock:
    """Мок клиента Redis."""
    redis = AsyncMock()
    redis.get = AsyncMock(return_value=None)
    redis.set = AsyncMock(return_value=True)
    redis.delete = AsyncMock(return_value=1)
    redis.get_model = AsyncMock(return_value=None)
    redis.set_model = AsyncMock(return_value=True)
    redis.health_check = AsyncMock(return_value=True)
    return redis


@pytest.fixture
def mock_geo() -> AsyncMock:
    """Мок геокодера и провайдера маршрутов."""
    from reboque360.core.geo.models import Coordinates

    geo = AsyncMock()
    geo.geocode = AsyncMock(return_value=Coordinates(lat=-23.55, lon=-46.63))
    geo.route_distance_km = AsyncMock(return_value=10.0)
    geo.reverse_geocode = AsyncMock(return_value="Av. Paulista, 1000 - Bela Vista, São Paulo")
    return geo


# =============================================================================
# ФИКСТУРЫ МОДЕЛЕЙ
# =============================================================================

def make_account(plan: PlanTier = PlanTier.FREE, **overrides: Any) -> AccountContext:
    """Аккаунт с заданным планом."""
    data: dict[str, Any] = {
        "id": "acc-1",
        "name": "João",
        "company_name": "Guincho Rápido",
        "plan": plan,
        "language": "pt",
        "settings": AccountSettings(
            default_km_value=5.5,
            default_min_charge=150.0,
            default_return_address="Rua da Base, 10, São Paulo",
            fuel_price=5.89,
        ),
    }
    data.update(overrides)
    return AccountContext(**data)


@pytest.fixture
def free_account() -> AccountContext:
    return make_account(PlanTier.FREE)


@pytest.fixture
def pro_account() -> AccountContext:
    return make_account(PlanTier.PRO)


@pytest.fixture
def premium_account() -> AccountContext:
    return make_account(PlanTier.PREMIUM)


@pytest.fixture
def sample_quote_data() -> dict[str, Any]:
    """Пример строки заявки из БД."""
    return {
        "id": "quote-1",
        "account_id": "acc-1",
        "current_location": "Rua da Base, 10, São Paulo",
        "origin": "Av. Paulista, 1000, São Paulo",
        "destination": "Rua Augusta, 500, São Paulo",
        "return_address": "Rua da Base, 10, São Paulo",
        "total_distance": 125.0,
        "km_value": 5.5,
        "min_charge": 150.0,
        "extras": 50.0,
        "discount": None,
        "notes": "Carro sem chave",
        "total": 887.5,
        "fuel_cost": 86.62,
        "status": "pending",
        "vehicle_id": "veh-1",
        "created_at": datetime(2026, 3, 10, 12, 0, tzinfo=timezone.utc),
    }


@pytest.fixture
def sample_quote(sample_quote_data: dict[str, Any]) -> Quote:
    data = dict(sample_quote_data)
    data["status"] = QuoteStatus(data["status"])
    return Quote(**data)


@pytest.fixture
def sample_vehicle_data() -> dict[str, Any]:
    """Пример строки автомобиля из БД."""
    return {
        "id": "veh-1",
        "account_id": "acc-1",
        "plate": "ABC1D23",
        "model": "VW Delivery 9.170",
        "year": 2020,
        "km": 95000.0,
        "avg_consumption": 8.5,
        "next_maintenance_km": 100000.0,
        "created_at": datetime(2025, 1, 5, tzinfo=timezone.utc),
    }


@pytest.fixture
def sample_vehicle(sample_vehicle_data: dict[str, Any]) -> Vehicle:
    return Vehicle(**sample_vehicle_data)


@pytest.fixture
def sample_service_data() -> dict[str, Any]:
    """Пример строки выезда из БД (с полями заявки)."""
    return {
        "id": "svc-1",
        "account_id": "acc-1",
        "quote_id": "quote-1",
        "client_name": "Maria Souza",
        "client_phone": "11999990000",
        "status": "pending",
        "value": 887.5,
        "cost": 86.62,
        "created_at": datetime(2026, 3, 11, 9, 30, tzinfo=timezone.utc),
        "origin": "Av. Paulista, 1000, São Paulo",
        "destination": "Rua Augusta, 500, São Paulo",
        "vehicle_id": "veh-1",
    }


def make_service(
    service_id: str,
    quote_id: str,
    status: ServiceStatus,
    cost: float,
    value: float = 500.0,
    **overrides: Any,
) -> ServiceWithDetails:
    data: dict[str, Any] = {
        "id": service_id,
        "account_id": "acc-1",
        "quote_id": quote_id,
        "client_name": "Cliente",
        "client_phone": "11999990000",
        "status": status,
        "value": value,
        "cost": cost,
    }
    data.update(overrides)
    return ServiceWithDetails(**data)


def make_transaction(
    amount: float,
    tx_type: TransactionType,
    category: str = "",
    date: datetime | None = None,
) -> Transaction:
    data: dict[str, Any] = {
        "account_id": "acc-1",
        "description": f"{tx_type.value} {amount}",
        "amount": amount,
        "type": tx_type,
        "category": category,
    }
    if date is not None:
        data["date"] = date
    return Transaction(**data)


@pytest.fixture
def sample_service(sample_service_data: dict[str, Any]) -> Service:
    data = {k: v for k, v in sample_service_data.items()
            if k not in ("origin", "destination", "vehicle_id")}
    data["status"] = ServiceStatus(data["status"])
    return Service(**data)


@pytest.fixture
def account_factory():
    """Фабрика аккаунтов: account_factory(PlanTier.PRO, language="en")."""
    return make_account


@pytest.fixture
def service_factory():
    """Фабрика выездов с адресами заявки."""
    return make_service


@pytest.fixture
def transaction_factory():
    """Фабрика финансовых операций."""
    return make_transaction
