# reboque360/core/tow_services/models.py
"""
Модели выездов (serviços).
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4

from pydantic import BaseModel, Field

from reboque360.common.constants import ServiceStatus
from reboque360.core.pricing.service import calculate_profit

MISSING_QUOTE_PLACEHOLDER = "N/A"


class Service(BaseModel):
    """Выезд, созданный из заявки. Прибыль вычисляется, не хранится."""

    id: str = Field(default_factory=lambda: str(uuid4()), description="UUID выезда")
    account_id: str = Field(..., description="ID аккаунта")
    quote_id: str = Field(..., description="Заявка-источник (слабая ссылка)")
    client_name: str = Field(..., description="Имя клиента")
    client_phone: str = Field(..., description="Телефон клиента")
    status: ServiceStatus = Field(ServiceStatus.PENDING, description="Статус выезда")
    value: float = Field(..., description="Сумма для клиента (итог заявки)")
    cost: float = Field(0.0, description="Затраты (оценка топлива заявки)")
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Время создания",
    )

    class Config:
        from_attributes = True

    @property
    def profit(self) -> float:
        return calculate_profit(self.value, self.cost)


class ServiceWithDetails(Service):
    """Выезд с адресами заявки для списка."""

    origin: str = MISSING_QUOTE_PLACEHOLDER
    destination: str = MISSING_QUOTE_PLACEHOLDER
    vehicle_id: Optional[str] = None

    def matches(self, term: str) -> bool:
        """Поиск без учёта регистра по клиенту и адресам."""
        needle = term.lower()
        return any(
            needle in field.lower()
            for field in (self.client_name, self.origin, self.destination)
        )


class ServiceCreateDTO(BaseModel):
    """Данные клиента при создании выезда (по умолчанию заглушки из конфига)."""

    client_name: Optional[str] = None
    client_phone: Optional[str] = None


class ServiceStatusDTO(BaseModel):
    status: ServiceStatus
