# reboque360/core/routing/service.py
"""
Расстояние полного маршрута эвакуатора.

Маршрут состоит из плеч: текущее место -> клиент -> пункт назначения -> база.
Плечи считаются строго последовательно, чтобы не упираться в лимиты
публичных Nominatim/OSRM; два геокодирования внутри одного плеча идут
параллельно. Сумма округляется один раз, в конце.
"""

from __future__ import annotations

import asyncio
from typing import Iterable, Protocol

from reboque360.common.constants import TypeMsg
from reboque360.common.exceptions import AddressNotFoundError
from reboque360.common.logger import log_info
from reboque360.core.geo.models import Coordinates

Leg = tuple[str, str]


class GeoProvider(Protocol):
    """Что калькулятору нужно от гео-сервиса."""

    async def geocode(self, address: str) -> Coordinates | None: ...

    async def route_distance_km(
        self,
        from_coord: Coordinates,
        to_coord: Coordinates,
    ) -> float: ...


def build_round_trip_legs(
    current_location: str,
    origin: str,
    destination: str,
    return_address: str,
) -> list[Leg]:
    """Три плеча полного выезда."""
    return [
        (current_location, origin),
        (origin, destination),
        (destination, return_address),
    ]


def round_km(value: float) -> float:
    """Километраж с точностью 0.1."""
    return round(value, 1)


class RouteDistanceCalculator:
    """Суммирует расстояние по плечам маршрута."""

    def __init__(self, geo: GeoProvider) -> None:
        self._geo = geo

    async def leg_distance_km(self, from_address: str, to_address: str) -> float:
        """
        Расстояние одного плеча без округления.

        Raises:
            AddressNotFoundError: один из адресов не геокодирован
            RouteNotFoundError: между точками нет маршрута
        """
        from_coord, to_coord = await asyncio.gather(
            self._geo.geocode(from_address),
            self._geo.geocode(to_address),
        )

        if from_coord is None:
            raise AddressNotFoundError(from_address)
        if to_coord is None:
            raise AddressNotFoundError(to_address)

        return await self._geo.route_distance_km(from_coord, to_coord)

    async def get_distance(self, from_address: str, to_address: str) -> float:
        """Одно плечо, округлённое до 0.1 км."""
        return round_km(await self.leg_distance_km(from_address, to_address))

    async def total_distance_km(self, legs: Iterable[Leg]) -> float:
        """
        Сумма плеч, округлённая до 0.1 км.
        Плечо с пустым концом пропускается. Первая ошибка прерывает расчёт:
        частичная сумма не возвращается.
        """
        legs = list(legs)
        total = 0.0

        for from_address, to_address in legs:
            if not from_address or not to_address:
                continue
            total += await self.leg_distance_km(from_address, to_address)

        result = round_km(total)
        await log_info(
            f"Маршрут из {len(legs)} плеч: {result} км",
            type_msg=TypeMsg.DEBUG,
        )
        return result
