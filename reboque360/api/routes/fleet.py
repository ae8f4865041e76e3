# reboque360/api/routes/fleet.py
"""
Автопарк. Изменения доступны только на плане с модулем fleet.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from reboque360.api.dependencies import get_current_account, get_fleet_service
from reboque360.api.schemas import ErrorResponse, VehicleResponse
from reboque360.core.accounts.models import AccountContext
from reboque360.core.fleet.models import VehicleCreateDTO, VehicleUpdateDTO
from reboque360.core.fleet.service import FleetService

router = APIRouter(prefix="/vehicles", tags=["Fleet"])


@router.get("", response_model=list[VehicleResponse], summary="Автомобили")
async def list_vehicles(
    account: Annotated[AccountContext, Depends(get_current_account)],
    fleet: Annotated[FleetService, Depends(get_fleet_service)],
) -> list[VehicleResponse]:
    vehicles = await fleet.list_vehicles(account)
    return [VehicleResponse.from_vehicle(v) for v in vehicles]


@router.post(
    "",
    response_model=VehicleResponse,
    status_code=201,
    responses={403: {"model": ErrorResponse}},
    summary="Добавить автомобиль",
)
async def add_vehicle(
    dto: VehicleCreateDTO,
    account: Annotated[AccountContext, Depends(get_current_account)],
    fleet: Annotated[FleetService, Depends(get_fleet_service)],
) -> VehicleResponse:
    vehicle = await fleet.add_vehicle(account, dto)
    return VehicleResponse.from_vehicle(vehicle)


@router.get(
    "/{vehicle_id}",
    response_model=VehicleResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Получить автомобиль",
)
async def get_vehicle(
    vehicle_id: str,
    account: Annotated[AccountContext, Depends(get_current_account)],
    fleet: Annotated[FleetService, Depends(get_fleet_service)],
) -> VehicleResponse:
    vehicle = await fleet.get_vehicle(account, vehicle_id)
    return VehicleResponse.from_vehicle(vehicle)


@router.put(
    "/{vehicle_id}",
    response_model=VehicleResponse,
    responses={403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    summary="Изменить автомобиль",
)
async def update_vehicle(
    vehicle_id: str,
    dto: VehicleUpdateDTO,
    account: Annotated[AccountContext, Depends(get_current_account)],
    fleet: Annotated[FleetService, Depends(get_fleet_service)],
) -> VehicleResponse:
    vehicle = await fleet.update_vehicle(account, vehicle_id, dto)
    return VehicleResponse.from_vehicle(vehicle)


@router.delete(
    "/{vehicle_id}",
    status_code=204,
    responses={403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    summary="Удалить автомобиль",
)
async def delete_vehicle(
    vehicle_id: str,
    account: Annotated[AccountContext, Depends(get_current_account)],
    fleet: Annotated[FleetService, Depends(get_fleet_service)],
) -> None:
    await fleet.delete_vehicle(account, vehicle_id)
