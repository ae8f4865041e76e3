# reboque360/api/routes/services.py
"""
Выезды: список с поиском и смена статуса.
"""

from __future__ import annotations

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query

from reboque360.api.dependencies import get_current_account, get_period, get_service_manager
from reboque360.api.schemas import ErrorResponse, ServiceListItem, ServiceResponse
from reboque360.common.constants import ServiceStatus
from reboque360.common.filters import DateRange
from reboque360.core.accounts.models import AccountContext
from reboque360.core.tow_services.models import ServiceStatusDTO
from reboque360.core.tow_services.service import ServiceManager

router = APIRouter(prefix="/services", tags=["Services"])


@router.get("", response_model=list[ServiceListItem], summary="Список выездов")
async def list_services(
    account: Annotated[AccountContext, Depends(get_current_account)],
    manager: Annotated[ServiceManager, Depends(get_service_manager)],
    period: Annotated[Optional[DateRange], Depends(get_period)],
    status: Annotated[Optional[ServiceStatus], Query()] = None,
    search: Annotated[Optional[str], Query(description="Клиент или адрес")] = None,
    newest_first: Annotated[bool, Query()] = True,
) -> list[ServiceListItem]:
    services = await manager.list_services(
        account,
        status=status,
        search=search,
        period=period,
        newest_first=newest_first,
    )
    return [ServiceListItem.from_service(s) for s in services]


@router.get(
    "/{service_id}",
    response_model=ServiceResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Получить выезд",
)
async def get_service(
    service_id: str,
    account: Annotated[AccountContext, Depends(get_current_account)],
    manager: Annotated[ServiceManager, Depends(get_service_manager)],
) -> ServiceResponse:
    service = await manager.get_service(account, service_id)
    return ServiceResponse.from_service(service)


@router.put(
    "/{service_id}/status",
    response_model=ServiceResponse,
    responses={404: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
    summary="Сменить статус выезда",
)
async def update_service_status(
    service_id: str,
    request: ServiceStatusDTO,
    account: Annotated[AccountContext, Depends(get_current_account)],
    manager: Annotated[ServiceManager, Depends(get_service_manager)],
) -> ServiceResponse:
    """Только вперёд: pending -> in_progress -> completed."""
    service = await manager.update_status(account, service_id, request.status)
    return ServiceResponse.from_service(service)
