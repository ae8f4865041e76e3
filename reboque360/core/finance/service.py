# reboque360/core/finance/service.py
"""
Сервис финансового учёта и сводки главного экрана.
"""

from __future__ import annotations

from typing import Optional

from reboque360.common.constants import PlanFeature, ServiceStatus, TypeMsg
from reboque360.common.exceptions import PersistenceError
from reboque360.common.filters import DateRange
from reboque360.common.logger import log_info
from reboque360.core.accounts.models import AccountContext
from reboque360.core.accounts.plans import require_feature
from reboque360.core.finance import ledger
from reboque360.core.finance.models import (
    DashboardSummary,
    FinanceReport,
    MonthlyTotal,
    Transaction,
    TransactionCreateDTO,
)
from reboque360.core.finance.repository import TransactionRepository
from reboque360.core.fleet.repository import VehicleRepository
from reboque360.core.quotes.repository import QuoteRepository
from reboque360.core.tow_services.repository import ServiceRepository
from reboque360.infra.database import DatabaseManager


class LedgerService:
    """
    Финансовый учёт.

    Операции и отчёты требуют модуль financial, помесячный отчёт
    дополнительно advanced_reports. Сводка главного экрана доступна всем.
    """

    def __init__(self, db: DatabaseManager) -> None:
        self._repo = TransactionRepository(db)
        self._services = ServiceRepository(db)
        self._quotes = QuoteRepository(db)
        self._vehicles = VehicleRepository(db)

    async def add_transaction(
        self,
        account: AccountContext,
        dto: TransactionCreateDTO,
    ) -> Transaction:
        require_feature(account, PlanFeature.FINANCIAL)

        data = dto.model_dump(exclude_none=True)
        tx = Transaction(account_id=account.id, **data)

        created = await self._repo.create(tx)
        if created is None:
            raise PersistenceError("create_transaction")

        await log_info(
            f"Аккаунт {account.id}: {tx.type.value} {tx.amount:.2f} ({tx.category})",
            type_msg=TypeMsg.INFO,
        )
        return created

    async def list_transactions(
        self,
        account: AccountContext,
        period: Optional[DateRange] = None,
    ) -> list[Transaction]:
        require_feature(account, PlanFeature.FINANCIAL)
        return await self._repo.list_by_account(account.id, period=period)

    async def financial_report(
        self,
        account: AccountContext,
        period: Optional[DateRange] = None,
    ) -> FinanceReport:
        """Итоги и расходы по категориям за период."""
        transactions = await self.list_transactions(account, period)
        return FinanceReport(
            summary=ledger.summarize_transactions(transactions),
            expenses_by_category=ledger.category_totals(transactions),
            transactions=transactions,
        )

    async def monthly_report(
        self,
        account: AccountContext,
        months: int = 6,
    ) -> list[MonthlyTotal]:
        require_feature(account, PlanFeature.ADVANCED_REPORTS)
        transactions = await self._repo.list_by_account(account.id)
        return ledger.monthly_totals(transactions, months=months)

    async def dashboard_summary(self, account: AccountContext) -> DashboardSummary:
        """Счётчики выездов, итоги операций, затраты по автомобилям."""
        services = await self._services.list_with_details(account.id)
        transactions = await self._repo.list_by_account(account.id)
        quotes = await self._quotes.list_by_account(account.id)
        vehicles = await self._vehicles.list_by_account(account.id)

        summary = ledger.summarize_transactions(transactions)

        return DashboardSummary(
            pending_services=sum(1 for s in services if s.status == ServiceStatus.PENDING),
            in_progress_services=sum(
                1 for s in services if s.status == ServiceStatus.IN_PROGRESS
            ),
            total_revenue=summary.revenue,
            total_expenses=summary.expenses,
            net_profit=summary.net_profit,
            costs_by_vehicle=ledger.costs_by_vehicle(vehicles, services, quotes),
        )
