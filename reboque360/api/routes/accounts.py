# reboque360/api/routes/accounts.py
"""
Аккаунт, настройки по умолчанию и тарифные планы.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from reboque360.api.dependencies import get_account_service, get_current_account
from reboque360.api.schemas import AccountResponse, ErrorResponse, PlanResponse
from reboque360.core.accounts.models import AccountContext, AccountSettings
from reboque360.core.accounts.plans import PLANS
from reboque360.core.accounts.service import AccountService

router = APIRouter(tags=["Account"])


@router.get(
    "/account",
    response_model=AccountResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Текущий аккаунт",
)
async def get_account(
    account: Annotated[AccountContext, Depends(get_current_account)],
) -> AccountResponse:
    return AccountResponse.from_account(account)


@router.put(
    "/account/settings",
    response_model=AccountResponse,
    summary="Сохранить значения по умолчанию",
)
async def update_settings(
    new_settings: AccountSettings,
    account: Annotated[AccountContext, Depends(get_current_account)],
    service: Annotated[AccountService, Depends(get_account_service)],
) -> AccountResponse:
    """Тариф за км, минимальный тариф, адрес базы и цена топлива."""
    updated = await service.update_settings(account, new_settings)
    return AccountResponse.from_account(updated)


@router.get("/plans", response_model=list[PlanResponse], summary="Тарифные планы")
async def list_plans() -> list[PlanResponse]:
    return [PlanResponse.from_plan(plan) for plan in PLANS.values()]
