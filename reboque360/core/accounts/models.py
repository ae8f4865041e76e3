# reboque360/core/accounts/models.py
"""
Модели аккаунта эвакуаторной компании.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field

from reboque360.common.constants import PlanTier
from reboque360.config import settings


def _pricing_default(name: str):
    return lambda: getattr(settings.pricing, name)


class AccountSettings(BaseModel):
    """Значения по умолчанию для новых заявок."""

    default_km_value: float = Field(
        default_factory=_pricing_default("DEFAULT_KM_VALUE"),
        ge=0.0,
        description="Цена за км",
    )
    default_min_charge: float = Field(
        default_factory=_pricing_default("DEFAULT_MIN_CHARGE"),
        ge=0.0,
        description="Минимальный тариф",
    )
    default_return_address: str = Field(
        default_factory=_pricing_default("DEFAULT_RETURN_ADDRESS"),
        description="База, куда эвакуатор возвращается",
    )
    fuel_price: float = Field(
        default_factory=_pricing_default("DEFAULT_FUEL_PRICE"),
        gt=0.0,
        description="Цена топлива за литр",
    )

    class Config:
        from_attributes = True


class AccountContext(BaseModel):
    """
    Контекст аккаунта, явно передаваемый в каждую операцию ядра.
    """

    id: str = Field(..., description="ID аккаунта")
    name: str = Field("", description="Имя владельца")
    company_name: Optional[str] = Field(None, description="Название компании")
    plan: PlanTier = Field(PlanTier.FREE, description="Тарифный план")
    language: str = Field("pt", description="Код языка")
    settings: AccountSettings = Field(default_factory=AccountSettings)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    class Config:
        from_attributes = True
