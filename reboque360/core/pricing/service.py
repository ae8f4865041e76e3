# reboque360/core/pricing/service.py
"""
Ценообразование заявки и оценка расхода топлива.
Единственное место, где считается итог заявки: расчёт, редактирование
и сводка перед сохранением вызывают эти функции.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


def calculate_price(
    distance_km: float,
    rate_per_km: float,
    minimum_charge: float,
    extras: float,
    discount: Optional[float] = None,
) -> float:
    """
    Итог для клиента.

    base = км * тариф + минимальный + доп. расходы
    floor = минимальный + доп. расходы
    total = max(base, floor) - скидка

    Скидка вычитается ПОСЛЕ пола: итог может оказаться ниже пола
    и даже отрицательным. Ноль не подставляется.
    """
    base = distance_km * rate_per_km + minimum_charge + extras
    floored = max(base, minimum_charge + extras)
    return floored - (discount or 0.0)


def calculate_fuel_cost(
    distance_km: float,
    avg_consumption_km_per_liter: float,
    fuel_price_per_liter: float,
) -> float:
    """
    Внутренняя стоимость топлива: км / (км/л) * цена литра.
    Нулевой расход -> ZeroDivisionError; автомобили хранят расход > 0.
    """
    return distance_km / avg_consumption_km_per_liter * fuel_price_per_liter


def calculate_profit(value: float, cost: float) -> float:
    """Прибыль выезда или заявки: выручка минус затраты."""
    return value - cost


class PriceBreakdown(BaseModel):
    """Разбивка цены для подтверждения перед сохранением."""

    distance_km: float
    rate_per_km: float
    distance_charge: float
    minimum_charge: float
    extras: float
    floor: float
    discount: float
    total: float
    fuel_cost: float
    estimated_profit: float
    currency: str = "BRL"


class QuoteCalculator:
    """Калькулятор заявки: цена, топливо, ожидаемая прибыль."""

    def __init__(self, currency: str | None = None) -> None:
        if currency is None:
            from reboque360.config import settings
            currency = settings.pricing.CURRENCY
        self.currency = currency

    def breakdown(
        self,
        distance_km: float,
        rate_per_km: float,
        minimum_charge: float,
        extras: float,
        discount: Optional[float],
        avg_consumption_km_per_liter: float,
        fuel_price_per_liter: float,
    ) -> PriceBreakdown:
        """
        Raises:
            ZeroDivisionError: расход автомобиля равен нулю
        """
        total = calculate_price(distance_km, rate_per_km, minimum_charge, extras, discount)
        fuel_cost = calculate_fuel_cost(
            distance_km,
            avg_consumption_km_per_liter,
            fuel_price_per_liter,
        )

        return PriceBreakdown(
            distance_km=distance_km,
            rate_per_km=rate_per_km,
            distance_charge=distance_km * rate_per_km,
            minimum_charge=minimum_charge,
            extras=extras,
            floor=minimum_charge + extras,
            discount=discount or 0.0,
            total=total,
            fuel_cost=fuel_cost,
            estimated_profit=calculate_profit(total, fuel_cost),
            currency=self.currency,
        )
