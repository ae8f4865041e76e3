# tests/core/test_pricing.py
"""
Тесты ценообразования и расхода топлива.
"""

from __future__ import annotations

import pytest

from reboque360.core.pricing.service import (
    QuoteCalculator,
    calculate_fuel_cost,
    calculate_price,
    calculate_profit,
)


class TestCalculatePrice:
    """Тесты итоговой цены заявки."""

    def test_regular_quote(self) -> None:
        """125 км * 5.5 + 150 + 50."""
        assert calculate_price(125, 5.5, 150, 50) == pytest.approx(887.5)

    def test_zero_distance_charges_floor(self) -> None:
        assert calculate_price(0, 5.5, 150, 30) == pytest.approx(180.0)

    def test_discount_after_floor(self) -> None:
        """Скидка вычитается после пола."""
        assert calculate_price(10, 5, 150, 0, 500) == pytest.approx(-300.0)

    def test_discount_can_make_total_negative(self) -> None:
        """Отрицательный итог не обрезается до нуля."""
        assert calculate_price(0, 5, 150, 0, 500) == pytest.approx(-350.0)

    def test_no_discount_same_as_zero(self) -> None:
        assert calculate_price(40, 4.0, 100, 20, None) == calculate_price(40, 4.0, 100, 20, 0)

    def test_floor_never_exceeds_base(self) -> None:
        """База всегда не меньше пола при неотрицательных входах."""
        for distance in (0, 1, 17.3, 250):
            total = calculate_price(distance, 3.2, 120, 15)
            assert total >= 120 + 15
            assert total == pytest.approx(distance * 3.2 + 135)


class TestFuelCost:
    """Тесты оценки расхода топлива."""

    def test_fuel_cost(self) -> None:
        """125 км / 8.5 км/л * 5.89."""
        assert calculate_fuel_cost(125, 8.5, 5.89) == pytest.approx(86.62, abs=0.01)

    def test_fuel_cost_is_linear_in_distance(self) -> None:
        single = calculate_fuel_cost(50, 8.0, 6.0)
        assert calculate_fuel_cost(100, 8.0, 6.0) == pytest.approx(single * 2)

    def test_zero_distance(self) -> None:
        assert calculate_fuel_cost(0, 8.5, 5.89) == 0

    def test_zero_consumption(self) -> None:
        with pytest.raises(ZeroDivisionError):
            calculate_fuel_cost(10, 0, 5.89)


class TestProfit:
    def test_profit(self) -> None:
        assert calculate_profit(887.5, 86.62) == pytest.approx(800.88)

    def test_loss(self) -> None:
        assert calculate_profit(100, 150) == pytest.approx(-50)


class TestQuoteCalculator:
    """Тесты разбивки цены."""

    def test_breakdown(self) -> None:
        calculator = QuoteCalculator(currency="BRL")

        result = calculator.breakdown(
            distance_km=125,
            rate_per_km=5.5,
            minimum_charge=150,
            extras=50,
            discount=None,
            avg_consumption_km_per_liter=8.5,
            fuel_price_per_liter=5.89,
        )

        assert result.distance_charge == pytest.approx(687.5)
        assert result.floor == pytest.approx(200)
        assert result.discount == 0.0
        assert result.total == pytest.approx(887.5)
        assert result.fuel_cost == pytest.approx(86.62, abs=0.01)
        assert result.estimated_profit == pytest.approx(result.total - result.fuel_cost)
        assert result.currency == "BRL"

    def test_breakdown_with_discount(self) -> None:
        result = QuoteCalculator(currency="BRL").breakdown(
            distance_km=10,
            rate_per_km=5,
            minimum_charge=150,
            extras=0,
            discount=500,
            avg_consumption_km_per_liter=10,
            fuel_price_per_liter=6,
        )

        assert result.total == pytest.approx(-300)
        assert result.discount == 500
        assert result.fuel_cost == pytest.approx(6)

    def test_currency_from_config(self) -> None:
        from reboque360.config import settings

        assert QuoteCalculator().currency == settings.pricing.CURRENCY

    def test_breakdown_zero_consumption(self) -> None:
        with pytest.raises(ZeroDivisionError):
            QuoteCalculator(currency="BRL").breakdown(10, 5, 150, 0, None, 0, 5.89)
