# reboque360/core/finance/models.py
"""
Модели финансового учёта.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4

from pydantic import BaseModel, Field

from reboque360.common.constants import TransactionType


class Transaction(BaseModel):
    """Финансовая операция (доход или расход)."""

    id: str = Field(default_factory=lambda: str(uuid4()), description="UUID операции")
    account_id: str = Field(..., description="ID аккаунта")
    description: str = Field(..., min_length=1, description="Описание")
    amount: float = Field(..., description="Сумма")
    type: TransactionType = Field(..., description="Доход / расход")
    category: str = Field("", description="Категория (Combustível, Manutenção...)")
    service_id: Optional[str] = Field(None, description="Выезд-источник")
    date: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Дата операции",
    )

    class Config:
        from_attributes = True


class TransactionCreateDTO(BaseModel):
    """DTO новой операции."""

    description: str = Field(..., min_length=1)
    amount: float
    type: TransactionType
    category: str = ""
    service_id: Optional[str] = None
    date: Optional[datetime] = None


class FinancialSummary(BaseModel):
    """Итоги по операциям."""

    revenue: float = 0.0
    expenses: float = 0.0
    net_profit: float = 0.0


class CategoryTotal(BaseModel):
    name: str
    value: float


class VehicleCost(BaseModel):
    """Затраты завершённых выездов по автомобилю."""

    vehicle_id: str
    name: str
    total_cost: float


class MonthlyTotal(BaseModel):
    """Доходы и расходы за календарный месяц (YYYY-MM)."""

    month: str
    revenue: float = 0.0
    expenses: float = 0.0


class FinanceReport(BaseModel):
    """Отчёт финансового модуля за период."""

    summary: FinancialSummary
    expenses_by_category: list[CategoryTotal]
    transactions: list[Transaction]


class DashboardSummary(BaseModel):
    """Сводка главного экрана."""

    pending_services: int
    in_progress_services: int
    total_revenue: float
    total_expenses: float
    net_profit: float
    costs_by_vehicle: list[VehicleCost]
