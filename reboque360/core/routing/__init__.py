# reboque360/core/routing/__init__.py
"""
Расчёт расстояния многоплечевого маршрута.
"""

from reboque360.core.routing.service import (
    Leg,
    RouteDistanceCalculator,
    build_round_trip_legs,
    round_km,
)

__all__ = [
    "Leg",
    "RouteDistanceCalculator",
    "build_round_trip_legs",
    "round_km",
]
