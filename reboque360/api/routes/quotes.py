# reboque360/api/routes/quotes.py
"""
Заявки: расчёт, сохранение, правка, ручной статус, отправка, выезд.
"""

from __future__ import annotations

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query

from reboque360.api.dependencies import (
    get_current_account,
    get_period,
    get_quote_service,
    get_service_manager,
)
from reboque360.api.schemas import ErrorResponse, QuoteStatusUpdate, ServiceResponse
from reboque360.common.constants import QuoteStatus
from reboque360.common.filters import DateRange
from reboque360.core.accounts.models import AccountContext
from reboque360.core.quotes.models import Quote, QuoteDraft, QuoteForm, QuoteShare, QuoteUpdateDTO
from reboque360.core.quotes.service import QuoteService
from reboque360.core.tow_services.models import ServiceCreateDTO
from reboque360.core.tow_services.service import ServiceManager

router = APIRouter(prefix="/quotes", tags=["Quotes"])


# =============================================================================
# РАСЧЁТ И СОХРАНЕНИЕ
# =============================================================================

@router.post(
    "/calculate",
    response_model=QuoteDraft,
    responses={422: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
    summary="Рассчитать маршрут и цену",
)
async def calculate_quote(
    form: QuoteForm,
    account: Annotated[AccountContext, Depends(get_current_account)],
    service: Annotated[QuoteService, Depends(get_quote_service)],
) -> QuoteDraft:
    """
    Маршрут: текущее место -> забор -> доставка -> база.
    Ничего не сохраняет и не расходует лимит плана.
    """
    return await service.calculate(account, form)


@router.post(
    "",
    response_model=Quote,
    status_code=201,
    responses={402: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
    summary="Рассчитать и сохранить заявку",
)
async def create_quote(
    form: QuoteForm,
    account: Annotated[AccountContext, Depends(get_current_account)],
    service: Annotated[QuoteService, Depends(get_quote_service)],
) -> Quote:
    draft = await service.calculate(account, form)
    return await service.create_quote(account, draft)


@router.get("", response_model=list[Quote], summary="Список заявок")
async def list_quotes(
    account: Annotated[AccountContext, Depends(get_current_account)],
    service: Annotated[QuoteService, Depends(get_quote_service)],
    period: Annotated[Optional[DateRange], Depends(get_period)],
    status: Annotated[Optional[QuoteStatus], Query()] = None,
) -> list[Quote]:
    return await service.list_quotes(account, status=status, period=period)


# =============================================================================
# ОДНА ЗАЯВКА
# =============================================================================

@router.get(
    "/{quote_id}",
    response_model=Quote,
    responses={404: {"model": ErrorResponse}},
    summary="Получить заявку",
)
async def get_quote(
    quote_id: str,
    account: Annotated[AccountContext, Depends(get_current_account)],
    service: Annotated[QuoteService, Depends(get_quote_service)],
) -> Quote:
    return await service.get_quote(account, quote_id)


@router.put(
    "/{quote_id}",
    response_model=Quote,
    responses={404: {"model": ErrorResponse}},
    summary="Изменить цену заявки",
)
async def update_quote(
    quote_id: str,
    dto: QuoteUpdateDTO,
    account: Annotated[AccountContext, Depends(get_current_account)],
    service: Annotated[QuoteService, Depends(get_quote_service)],
) -> Quote:
    """Итог пересчитывается; оценка топлива не меняется."""
    return await service.update_quote(account, quote_id, dto)


@router.delete(
    "/{quote_id}",
    status_code=204,
    responses={404: {"model": ErrorResponse}},
    summary="Удалить заявку",
)
async def delete_quote(
    quote_id: str,
    account: Annotated[AccountContext, Depends(get_current_account)],
    service: Annotated[QuoteService, Depends(get_quote_service)],
) -> None:
    await service.delete_quote(account, quote_id)


@router.put(
    "/{quote_id}/status",
    response_model=Quote,
    responses={404: {"model": ErrorResponse}},
    summary="Сменить статус вручную",
)
async def update_quote_status(
    quote_id: str,
    request: QuoteStatusUpdate,
    account: Annotated[AccountContext, Depends(get_current_account)],
    service: Annotated[QuoteService, Depends(get_quote_service)],
) -> Quote:
    return await service.update_status(account, quote_id, request.status)


@router.get(
    "/{quote_id}/share",
    response_model=QuoteShare,
    responses={404: {"model": ErrorResponse}},
    summary="Текст и ссылка WhatsApp",
)
async def share_quote(
    quote_id: str,
    account: Annotated[AccountContext, Depends(get_current_account)],
    service: Annotated[QuoteService, Depends(get_quote_service)],
) -> QuoteShare:
    quote = await service.get_quote(account, quote_id)
    return service.share_link(quote, account.language)


@router.post(
    "/{quote_id}/service",
    response_model=ServiceResponse,
    status_code=201,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
    summary="Создать выезд по заявке",
)
async def create_service(
    quote_id: str,
    request: ServiceCreateDTO,
    account: Annotated[AccountContext, Depends(get_current_account)],
    manager: Annotated[ServiceManager, Depends(get_service_manager)],
) -> ServiceResponse:
    """Повторный вызов для той же заявки отвечает 409."""
    service = await manager.create_from_quote(
        account,
        quote_id,
        client_name=request.client_name,
        client_phone=request.client_phone,
    )
    return ServiceResponse.from_service(service)
