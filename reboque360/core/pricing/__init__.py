# reboque360/core/pricing/__init__.py
"""
Ценообразование и оценка топлива.
"""

from reboque360.core.pricing.service import (
    PriceBreakdown,
    QuoteCalculator,
    calculate_fuel_cost,
    calculate_price,
    calculate_profit,
)

__all__ = [
    "PriceBreakdown",
    "QuoteCalculator",
    "calculate_fuel_cost",
    "calculate_price",
    "calculate_profit",
]
