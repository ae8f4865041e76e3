# reboque360/core/geo/service.py
"""
Гео-сервис на OpenStreetMap.
Геокодирование через Nominatim, автомобильное расстояние через OSRM.
Публичные инстансы ограничивают частоту запросов, поэтому результаты
геокодирования кэшируются в Redis.
"""

from __future__ import annotations

from typing import Any, Optional

import httpx

from reboque360.common.constants import TypeMsg
from reboque360.common.exceptions import GeoProviderError, RouteNotFoundError
from reboque360.common.logger import log_debug, log_info, log_warning
from reboque360.core.geo.models import Coordinates
from reboque360.infra.redis_client import RedisClient


def normalize_address(address: str) -> str:
    """Нормализует адрес для ключа кэша: нижний регистр, одиночные пробелы."""
    return " ".join(address.lower().split())


def format_reverse_address(data: dict[str, Any]) -> Optional[str]:
    """
    Собирает адрес вида 'Rua X, 123 - Bairro, Cidade, UF'
    из ответа Nominatim reverse. None, если данных не хватает.
    """
    addr = data.get("address") or {}
    road = addr.get("road", "")
    house_number = addr.get("house_number", "")
    suburb = addr.get("suburb", "")
    city = addr.get("city") or addr.get("town") or addr.get("village") or ""
    state = addr.get("state", "")

    line1 = ", ".join(part for part in (road, house_number) if part)
    line2 = ", ".join(part for part in (suburb, city, state) if part)

    if line1 and line2:
        return f"{line1} - {line2}"
    return None


class GeoService:
    """
    Геокодер и провайдер маршрутов.

    Реализует:
    - Прямое геокодирование (адрес -> координаты), с кэшем
    - Расстояние по дорогам между двумя точками
    - Обратное геокодирование для кнопки «моё местоположение»
    """

    def __init__(
        self,
        redis: RedisClient | None = None,
        nominatim_url: str | None = None,
        osrm_url: str | None = None,
        country_codes: str | None = None,
        accept_language: str | None = None,
        timeout: float | None = None,
    ) -> None:
        """
        Args:
            redis: Клиент Redis для кэша (None = без кэша)
            nominatim_url: База Nominatim (из конфига, если None)
            osrm_url: База OSRM (из конфига, если None)
            country_codes: Ограничение поиска по странам
            accept_language: Заголовок Accept-Language
            timeout: Таймаут HTTP (секунды)
        """
        from reboque360.config import settings

        geo = settings.geo
        self._redis = redis
        self._nominatim_url = (nominatim_url or geo.NOMINATIM_URL).rstrip("/")
        self._osrm_url = (osrm_url or geo.OSRM_URL).rstrip("/")
        self._country_codes = country_codes or geo.COUNTRY_CODES
        self._accept_language = accept_language or geo.ACCEPT_LANGUAGE
        self._cache_ttl = geo.GEOCODE_CACHE_TTL
        self._client = httpx.AsyncClient(
            timeout=timeout or geo.HTTP_TIMEOUT,
            headers={"User-Agent": geo.USER_AGENT},
        )

    async def close(self) -> None:
        """Закрывает HTTP клиент."""
        await self._client.aclose()

    # =========================================================================
    # КЭШ
    # =========================================================================

    def _cache_key(self, address: str) -> str:
        return f"geocode:{self._country_codes}:{normalize_address(address)}"

    async def _cache_get(self, address: str) -> Optional[Coordinates]:
        if self._redis is None:
            return None
        try:
            return await self._redis.get_model(self._cache_key(address), Coordinates)
        except Exception as e:
            await log_warning(f"Кэш геокодирования недоступен: {e}")
            return None

    async def _cache_set(self, address: str, coords: Coordinates) -> None:
        if self._redis is None:
            return
        try:
            await self._redis.set_model(self._cache_key(address), coords, ttl=self._cache_ttl)
        except Exception as e:
            await log_warning(f"Не удалось записать кэш геокодирования: {e}")

    # =========================================================================
    # HTTP
    # =========================================================================

    async def _get_json(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        allow_client_error: bool = False,
    ) -> Any:
        """
        GET с разбором JSON; сетевые ошибки и не-2xx -> GeoProviderError.
        allow_client_error: 400/404 отдаются вызывающему (OSRM кладёт
        причину отказа в тело ответа).
        """
        try:
            response = await self._client.get(url, params=params, headers=headers)
            if not (allow_client_error and response.status_code in (400, 404)):
                response.raise_for_status()
            return response.json()
        except httpx.TimeoutException as e:
            raise GeoProviderError(f"timeout: {url}") from e
        except httpx.HTTPError as e:
            raise GeoProviderError(f"{type(e).__name__}: {e}") from e
        except ValueError as e:
            raise GeoProviderError(f"invalid JSON from {url}") from e

    # =========================================================================
    # ГЕОКОДИРОВАНИЕ
    # =========================================================================

    async def geocode(self, address: str) -> Optional[Coordinates]:
        """
        Адрес -> координаты.

        Returns:
            Координаты или None, если адрес пустой или не найден

        Raises:
            GeoProviderError: Nominatim недоступен
        """
        if not address or not address.strip():
            return None

        cached = await self._cache_get(address)
        if cached is not None:
            await log_debug(f"Геокодирование из кэша: {address}")
            return cached

        data = await self._get_json(
            f"{self._nominatim_url}/search",
            params={
                "q": address,
                "format": "json",
                "limit": 1,
                "countrycodes": self._country_codes,
            },
            headers={"Accept-Language": self._accept_language},
        )

        if not data:
            await log_info(f"Адрес не найден: {address}", type_msg=TypeMsg.WARNING)
            return None

        coords = Coordinates(lat=float(data[0]["lat"]), lon=float(data[0]["lon"]))
        await self._cache_set(address, coords)
        return coords

    async def reverse_geocode(self, lat: float, lon: float) -> str:
        """
        Координаты -> читаемый адрес. Никогда не бросает исключений:
        при любой ошибке возвращает координаты текстом.
        """
        fallback = f"Lat: {lat:.4f}, Lon: {lon:.4f}"
        try:
            data = await self._get_json(
                f"{self._nominatim_url}/reverse",
                params={
                    "format": "jsonv2",
                    "lat": lat,
                    "lon": lon,
                    "zoom": 18,
                    "addressdetails": 1,
                },
                headers={"Accept-Language": self._accept_language},
            )
        except GeoProviderError as e:
            await log_warning(f"Обратное геокодирование не удалось: {e}")
            return fallback

        if not isinstance(data, dict) or data.get("error"):
            await log_warning(f"Nominatim reverse: {data}")
            return fallback

        return format_reverse_address(data) or data.get("display_name") or fallback

    # =========================================================================
    # МАРШРУТЫ
    # =========================================================================

    async def route_distance_km(
        self,
        from_coord: Coordinates,
        to_coord: Coordinates,
    ) -> float:
        """
        Расстояние по дорогам в км (без округления).

        Raises:
            RouteNotFoundError: OSRM не нашёл маршрут
            GeoProviderError: OSRM недоступен
        """
        data = await self._get_json(
            f"{self._osrm_url}/route/v1/driving/{from_coord.as_osrm()};{to_coord.as_osrm()}",
            params={"overview": "false"},
            allow_client_error=True,
        )

        if not isinstance(data, dict) or data.get("code") != "Ok" or not data.get("routes"):
            await log_info(
                f"Маршрут не найден: {from_coord.as_osrm()} -> {to_coord.as_osrm()}",
                type_msg=TypeMsg.WARNING,
            )
            raise RouteNotFoundError(
                origin=from_coord.as_osrm(),
                destination=to_coord.as_osrm(),
            )

        return data["routes"][0]["distance"] / 1000
