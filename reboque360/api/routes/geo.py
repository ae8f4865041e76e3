# reboque360/api/routes/geo.py
"""
Обратное геокодирование для кнопки «моё местоположение».
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from reboque360.api.dependencies import get_current_account, get_geo_service
from reboque360.api.schemas import ReverseGeocodeResponse
from reboque360.core.accounts.models import AccountContext
from reboque360.core.geo.service import GeoService

router = APIRouter(prefix="/geo", tags=["Geo"])


@router.get("/reverse", response_model=ReverseGeocodeResponse, summary="Адрес по координатам")
async def reverse_geocode(
    lat: Annotated[float, Query(ge=-90, le=90)],
    lon: Annotated[float, Query(ge=-180, le=180)],
    account: Annotated[AccountContext, Depends(get_current_account)],
    geo: Annotated[GeoService, Depends(get_geo_service)],
) -> ReverseGeocodeResponse:
    """
    Всегда отвечает 200: при ошибке геокодера вместо адреса
    возвращается строка с координатами.
    """
    address = await geo.reverse_geocode(lat, lon)
    return ReverseGeocodeResponse(lat=lat, lon=lon, address=address)
