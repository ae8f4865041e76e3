# reboque360/api/routes/finance.py
"""
Финансовый модуль и сводка главного экрана.
"""

from __future__ import annotations

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query

from reboque360.api.dependencies import get_current_account, get_ledger_service, get_period
from reboque360.api.schemas import ErrorResponse
from reboque360.common.filters import DateRange
from reboque360.core.accounts.models import AccountContext
from reboque360.core.finance.models import (
    DashboardSummary,
    FinanceReport,
    MonthlyTotal,
    Transaction,
    TransactionCreateDTO,
)
from reboque360.core.finance.service import LedgerService

router = APIRouter(tags=["Finance"])


@router.get(
    "/transactions",
    response_model=list[Transaction],
    responses={403: {"model": ErrorResponse}},
    summary="Операции",
)
async def list_transactions(
    account: Annotated[AccountContext, Depends(get_current_account)],
    ledger: Annotated[LedgerService, Depends(get_ledger_service)],
    period: Annotated[Optional[DateRange], Depends(get_period)],
) -> list[Transaction]:
    return await ledger.list_transactions(account, period)


@router.post(
    "/transactions",
    response_model=Transaction,
    status_code=201,
    responses={403: {"model": ErrorResponse}},
    summary="Записать доход или расход",
)
async def add_transaction(
    dto: TransactionCreateDTO,
    account: Annotated[AccountContext, Depends(get_current_account)],
    ledger: Annotated[LedgerService, Depends(get_ledger_service)],
) -> Transaction:
    return await ledger.add_transaction(account, dto)


@router.get(
    "/finance/summary",
    response_model=FinanceReport,
    responses={403: {"model": ErrorResponse}},
    summary="Итоги и расходы по категориям",
)
async def finance_summary(
    account: Annotated[AccountContext, Depends(get_current_account)],
    ledger: Annotated[LedgerService, Depends(get_ledger_service)],
    period: Annotated[Optional[DateRange], Depends(get_period)],
) -> FinanceReport:
    return await ledger.financial_report(account, period)


@router.get(
    "/finance/monthly",
    response_model=list[MonthlyTotal],
    responses={403: {"model": ErrorResponse}},
    summary="Доходы и расходы по месяцам",
)
async def finance_monthly(
    account: Annotated[AccountContext, Depends(get_current_account)],
    ledger: Annotated[LedgerService, Depends(get_ledger_service)],
    months: Annotated[int, Query(ge=1, le=24)] = 6,
) -> list[MonthlyTotal]:
    return await ledger.monthly_report(account, months=months)


@router.get("/dashboard", response_model=DashboardSummary, summary="Главный экран")
async def dashboard(
    account: Annotated[AccountContext, Depends(get_current_account)],
    ledger: Annotated[LedgerService, Depends(get_ledger_service)],
) -> DashboardSummary:
    return await ledger.dashboard_summary(account)
