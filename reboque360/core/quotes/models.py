# reboque360/core/quotes/models.py
"""
Модели заявок (orçamentos).
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4

from pydantic import BaseModel, Field

from reboque360.common.constants import QuoteStatus
from reboque360.core.accounts.models import AccountSettings
from reboque360.core.pricing.service import PriceBreakdown


class Quote(BaseModel):
    """Заявка на эвакуацию."""

    id: str = Field(default_factory=lambda: str(uuid4()), description="UUID заявки")
    account_id: str = Field(..., description="ID аккаунта")

    # Маршрут
    current_location: str = Field(..., description="Где эвакуатор сейчас")
    origin: str = Field(..., description="Где забрать автомобиль клиента")
    destination: str = Field(..., description="Куда доставить")
    return_address: str = Field(..., description="Куда эвакуатор возвращается")
    total_distance: float = Field(0.0, ge=0.0, description="Полный пробег маршрута, км")

    # Цена
    km_value: float = Field(..., ge=0.0, description="Тариф за км")
    min_charge: float = Field(..., ge=0.0, description="Минимальный тариф")
    extras: float = Field(0.0, ge=0.0, description="Платные дороги и прочее")
    discount: Optional[float] = Field(None, ge=0.0, description="Скидка")
    notes: str = Field("", description="Комментарий")
    total: float = Field(..., description="Итог для клиента (может быть < 0)")
    fuel_cost: float = Field(0.0, ge=0.0, description="Оценка расхода топлива")

    status: QuoteStatus = Field(QuoteStatus.PENDING, description="Статус заявки")
    vehicle_id: Optional[str] = Field(None, description="Автомобиль для выезда")
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Время создания",
    )

    class Config:
        from_attributes = True

    @property
    def estimated_profit(self) -> float:
        return self.total - self.fuel_cost


class QuoteForm(BaseModel):
    """
    Сырые данные формы расчёта.
    Пустые тариф, минимум и адрес возврата берутся из настроек аккаунта.
    """

    current_location: str = ""
    origin: str = ""
    destination: str = ""
    return_address: str = ""
    km_value: Optional[float] = Field(None, ge=0.0)
    min_charge: Optional[float] = Field(None, ge=0.0)
    extras: float = Field(0.0, ge=0.0)
    discount: Optional[float] = Field(None, ge=0.0)
    notes: str = ""
    vehicle_id: Optional[str] = None

    def with_defaults(self, defaults: AccountSettings) -> "QuoteForm":
        """Копия формы с незаполненными полями из настроек аккаунта."""
        updates: dict = {}
        if self.km_value is None:
            updates["km_value"] = defaults.default_km_value
        if self.min_charge is None:
            updates["min_charge"] = defaults.default_min_charge
        if not self.return_address.strip():
            updates["return_address"] = defaults.default_return_address
        return self.model_copy(update=updates)

    def missing_addresses(self) -> list[str]:
        """Названия незаполненных адресов."""
        fields = ("current_location", "origin", "destination", "return_address")
        return [name for name in fields if not getattr(self, name).strip()]


class QuoteDraft(BaseModel):
    """Рассчитанная, но ещё не сохранённая заявка."""

    form: QuoteForm
    total_distance: float = Field(..., ge=0.0)
    breakdown: PriceBreakdown

    def to_quote(self, account_id: str) -> Quote:
        return Quote(
            account_id=account_id,
            current_location=self.form.current_location,
            origin=self.form.origin,
            destination=self.form.destination,
            return_address=self.form.return_address,
            total_distance=self.total_distance,
            km_value=self.form.km_value,
            min_charge=self.form.min_charge,
            extras=self.form.extras,
            discount=self.form.discount,
            notes=self.form.notes,
            total=self.breakdown.total,
            fuel_cost=self.breakdown.fuel_cost,
            vehicle_id=self.form.vehicle_id,
        )


class QuoteUpdateDTO(BaseModel):
    """
    Правка заявки. Переданы только изменяемые поля;
    discount=None явно убирает скидку.
    """

    total_distance: Optional[float] = Field(None, ge=0.0)
    km_value: Optional[float] = Field(None, ge=0.0)
    min_charge: Optional[float] = Field(None, ge=0.0)
    extras: Optional[float] = Field(None, ge=0.0)
    discount: Optional[float] = Field(None, ge=0.0)
    notes: Optional[str] = None

    def changes(self) -> dict:
        """Поля, реально переданные клиентом (discount может быть None)."""
        data = self.model_dump(exclude_unset=True)
        return {k: v for k, v in data.items() if v is not None or k == "discount"}


class QuoteShare(BaseModel):
    """Текст и ссылка для отправки заявки клиенту в WhatsApp."""

    message: str
    url: str
