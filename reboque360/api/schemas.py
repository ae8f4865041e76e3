# reboque360/api/schemas.py
"""
Модели запросов и ответов HTTP API.
Доменные модели (Quote, Vehicle, Transaction...) отдаются как есть;
здесь только то, что нужно транспорту.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field

from reboque360.common.constants import PlanFeature, PlanTier, QuoteStatus
from reboque360.core.accounts.models import AccountContext, AccountSettings
from reboque360.core.accounts.plans import PlanDetails, get_plan_details
from reboque360.core.fleet.models import Vehicle
from reboque360.core.tow_services.models import Service, ServiceWithDetails


# =============================================================================
# ОБЩИЕ
# =============================================================================

class ErrorResponse(BaseModel):
    """Стандартный ответ с ошибкой."""

    error_code: str
    message: str
    details: dict[str, Any] | None = None
    request_id: str | None = None


class HealthStatus(BaseModel):
    """Статус здоровья сервиса."""

    service: str
    status: str = "healthy"  # healthy, degraded, unhealthy
    version: str | None = None
    uptime_seconds: float | None = None
    dependencies: dict[str, str] = Field(default_factory=dict)
    # dependencies: {"database": "healthy", "redis": "disabled"}


# =============================================================================
# АККАУНТ И ПЛАНЫ
# =============================================================================

class PlanResponse(BaseModel):
    """Тариф для экрана выбора плана."""

    tier: PlanTier
    name: str
    price: float
    quote_limit: Optional[int] = None
    features: list[PlanFeature]
    highlights: list[str]

    @classmethod
    def from_plan(cls, plan: PlanDetails) -> "PlanResponse":
        return cls(
            tier=plan.tier,
            name=plan.name,
            price=plan.price,
            quote_limit=plan.quote_limit,
            features=sorted(plan.features, key=lambda f: f.value),
            highlights=list(plan.highlights),
        )


class AccountResponse(BaseModel):
    """Аккаунт с описанием текущего тарифа."""

    id: str
    name: str
    company_name: Optional[str] = None
    language: str
    settings: AccountSettings
    plan: PlanResponse
    created_at: datetime

    @classmethod
    def from_account(cls, account: AccountContext) -> "AccountResponse":
        return cls(
            id=account.id,
            name=account.name,
            company_name=account.company_name,
            language=account.language,
            settings=account.settings,
            plan=PlanResponse.from_plan(get_plan_details(account.plan)),
            created_at=account.created_at,
        )


# =============================================================================
# ГЕО
# =============================================================================

class ReverseGeocodeResponse(BaseModel):
    lat: float
    lon: float
    address: str


# =============================================================================
# ЗАЯВКИ И ВЫЕЗДЫ
# =============================================================================

class QuoteStatusUpdate(BaseModel):
    """Ручная смена статуса заявки."""
    status: QuoteStatus


class ServiceResponse(Service):
    """Выезд с вычисленной прибылью."""

    profit_value: float = 0.0

    @classmethod
    def from_service(cls, service: Service) -> "ServiceResponse":
        return cls(**service.model_dump(), profit_value=service.profit)


class ServiceListItem(ServiceWithDetails):
    """Строка списка выездов: адреса заявки и прибыль."""

    profit_value: float = 0.0

    @classmethod
    def from_service(cls, service: ServiceWithDetails) -> "ServiceListItem":
        return cls(**service.model_dump(), profit_value=service.profit)


# =============================================================================
# АВТОПАРК
# =============================================================================

class VehicleResponse(Vehicle):
    """Автомобиль с признаком близкого ТО."""

    km_to_next_maintenance: float = 0.0
    maintenance_due: bool = False

    @classmethod
    def from_vehicle(cls, vehicle: Vehicle) -> "VehicleResponse":
        return cls(
            **vehicle.model_dump(),
            km_to_next_maintenance=vehicle.km_to_maintenance,
            maintenance_due=vehicle.maintenance_alert(),
        )
