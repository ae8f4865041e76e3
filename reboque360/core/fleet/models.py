# reboque360/core/fleet/models.py
"""
Модели автопарка.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4

from pydantic import BaseModel, Field


class Vehicle(BaseModel):
    """Эвакуатор компании."""

    id: str = Field(default_factory=lambda: str(uuid4()), description="UUID автомобиля")
    account_id: str = Field(..., description="ID аккаунта-владельца")
    plate: str = Field(..., min_length=1, description="Госномер")
    model: str = Field(..., min_length=1, description="Модель")
    year: int = Field(..., ge=1900, le=2100, description="Год выпуска")
    km: float = Field(0.0, ge=0.0, description="Текущий пробег")
    avg_consumption: float = Field(..., gt=0.0, description="Средний расход, км/л")
    next_maintenance_km: float = Field(0.0, ge=0.0, description="Пробег следующего ТО")
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    class Config:
        from_attributes = True

    @property
    def km_to_maintenance(self) -> float:
        """Сколько км осталось до ТО (отрицательное = просрочено)."""
        return self.next_maintenance_km - self.km

    def maintenance_alert(self, threshold_km: float | None = None) -> bool:
        """ТО близко: осталось threshold_km или меньше (по умолчанию из конфига)."""
        if threshold_km is None:
            from reboque360.config import settings
            threshold_km = settings.pricing.MAINTENANCE_ALERT_KM
        return self.km_to_maintenance <= threshold_km


class VehicleCreateDTO(BaseModel):
    """DTO добавления автомобиля."""

    plate: str = Field(..., min_length=1)
    model: str = Field(..., min_length=1)
    year: int = Field(..., ge=1900, le=2100)
    km: float = Field(0.0, ge=0.0)
    avg_consumption: float = Field(..., gt=0.0)
    next_maintenance_km: float = Field(0.0, ge=0.0)


class VehicleUpdateDTO(BaseModel):
    """DTO частичного обновления автомобиля."""

    plate: Optional[str] = Field(None, min_length=1)
    model: Optional[str] = Field(None, min_length=1)
    year: Optional[int] = Field(None, ge=1900, le=2100)
    km: Optional[float] = Field(None, ge=0.0)
    avg_consumption: Optional[float] = Field(None, gt=0.0)
    next_maintenance_km: Optional[float] = Field(None, ge=0.0)
