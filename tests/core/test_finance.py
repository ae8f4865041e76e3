# tests/core/test_finance.py
"""
Тесты финансового учёта и сводки главного экрана.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from reboque360.common.constants import ServiceStatus, TransactionType
from reboque360.common.exceptions import FeatureNotAvailableError, PersistenceError
from reboque360.core.accounts.models import AccountContext
from reboque360.core.finance import ledger
from reboque360.core.finance.models import TransactionCreateDTO
from reboque360.core.finance.service import LedgerService
from reboque360.core.fleet.models import Vehicle
from reboque360.core.quotes.models import Quote

REVENUE = TransactionType.REVENUE
EXPENSE = TransactionType.EXPENSE


def make_quote(sample_quote: Quote, quote_id: str, vehicle_id: str | None) -> Quote:
    return sample_quote.model_copy(update={"id": quote_id, "vehicle_id": vehicle_id})


class TestSummarize:
    """Тесты итогов по операциям."""

    def test_summarize(self, transaction_factory) -> None:
        transactions = [
            transaction_factory(1000, REVENUE),
            transaction_factory(200, EXPENSE, "Combustível"),
            transaction_factory(50, EXPENSE, "Manutenção"),
        ]

        summary = ledger.summarize_transactions(transactions)

        assert summary.revenue == 1000
        assert summary.expenses == 250
        assert summary.net_profit == 750

    def test_summarize_empty(self) -> None:
        summary = ledger.summarize_transactions([])

        assert (summary.revenue, summary.expenses, summary.net_profit) == (0, 0, 0)

    def test_net_loss(self, transaction_factory) -> None:
        summary = ledger.summarize_transactions([
            transaction_factory(100, REVENUE),
            transaction_factory(400, EXPENSE, "Pedágio"),
        ])

        assert summary.net_profit == -300


class TestExpensesByCategory:
    def test_groups_expenses_only(self, transaction_factory) -> None:
        transactions = [
            transaction_factory(80, EXPENSE, "Combustível"),
            transaction_factory(500, REVENUE, "Serviço"),
            transaction_factory(120, EXPENSE, "Manutenção"),
            transaction_factory(20, EXPENSE, "Combustível"),
        ]

        totals = ledger.expenses_by_category(transactions)

        assert totals == {"Combustível": 100, "Manutenção": 120}
        assert list(totals) == ["Combustível", "Manutenção"]

    def test_category_totals_models(self, transaction_factory) -> None:
        result = ledger.category_totals([transaction_factory(10, EXPENSE, "Outros")])

        assert [(c.name, c.value) for c in result] == [("Outros", 10)]


class TestServiceProfit:
    def test_value_minus_cost(self, service_factory) -> None:
        service = service_factory("s1", "q1", ServiceStatus.COMPLETED, cost=86.62, value=887.5)

        assert ledger.service_profit(service) == pytest.approx(800.88)

    def test_loss_is_negative(self, service_factory) -> None:
        """Затраты больше суммы - прибыль отрицательная."""
        service = service_factory("s1", "q1", ServiceStatus.PENDING, cost=120, value=100)

        assert ledger.service_profit(service) == pytest.approx(-20)


class TestCostsByVehicle:
    """Тесты затрат по автомобилям."""

    def test_only_completed_services(
        self,
        sample_quote: Quote,
        sample_vehicle: Vehicle,
        service_factory,
    ) -> None:
        truck2 = sample_vehicle.model_copy(update={"id": "veh-2", "model": "Ford Cargo"})
        quotes = [
            make_quote(sample_quote, "q1", "veh-1"),
            make_quote(sample_quote, "q2", "veh-1"),
            make_quote(sample_quote, "q3", "veh-2"),
        ]
        services = [
            service_factory("s1", "q1", ServiceStatus.COMPLETED, cost=40),
            service_factory("s2", "q2", ServiceStatus.PENDING, cost=99),
            service_factory("s3", "q3", ServiceStatus.COMPLETED, cost=25),
            service_factory("s4", "q2", ServiceStatus.COMPLETED, cost=10),
        ]

        result = ledger.costs_by_vehicle([sample_vehicle, truck2], services, quotes)

        assert [(c.vehicle_id, c.name, c.total_cost) for c in result] == [
            ("veh-1", "VW Delivery 9.170", 50),
            ("veh-2", "Ford Cargo", 25),
        ]

    def test_orphan_service_ignored(
        self,
        sample_quote: Quote,
        sample_vehicle: Vehicle,
        service_factory,
    ) -> None:
        """Выезд удалённой заявки или заявки без автомобиля не учитывается."""
        quotes = [make_quote(sample_quote, "q1", None)]
        services = [
            service_factory("s1", "q1", ServiceStatus.COMPLETED, cost=40),
            service_factory("s2", "deleted", ServiceStatus.COMPLETED, cost=70),
        ]

        result = ledger.costs_by_vehicle([sample_vehicle], services, quotes)

        assert result[0].total_cost == 0

    def test_no_vehicles(self) -> None:
        assert ledger.costs_by_vehicle([], [], []) == []


class TestMonthlyTotals:
    """Тесты помесячного отчёта."""

    def test_months_window(self, transaction_factory) -> None:
        now = datetime(2026, 2, 15)
        transactions = [
            transaction_factory(100, REVENUE, date=datetime(2026, 2, 1)),
            transaction_factory(30, EXPENSE, "Combustível", date=datetime(2026, 2, 3)),
            transaction_factory(200, REVENUE, date=datetime(2025, 12, 31)),
            transaction_factory(999, REVENUE, date=datetime(2025, 8, 1)),
        ]

        result = ledger.monthly_totals(transactions, months=3, now=now)

        assert [m.month for m in result] == ["2025-12", "2026-01", "2026-02"]
        assert [(m.revenue, m.expenses) for m in result] == [(200, 0), (0, 0), (100, 30)]

    def test_year_boundary(self) -> None:
        result = ledger.monthly_totals([], months=14, now=datetime(2026, 1, 10))

        assert result[0].month == "2024-12"
        assert result[-1].month == "2026-01"
        assert len(result) == 14


class TestLedgerService:
    """Тесты LedgerService с проверкой плана."""

    @pytest.fixture
    def ledger_service(self, mock_db: MagicMock) -> LedgerService:
        return LedgerService(db=mock_db)

    @pytest.fixture
    def tx_rows(self) -> list[dict[str, Any]]:
        return [
            {
                "id": "tx-1",
                "account_id": "acc-1",
                "description": "Serviço Paulista",
                "amount": 887.5,
                "type": "revenue",
                "category": "Serviço",
                "service_id": "svc-1",
                "date": datetime(2026, 3, 12, tzinfo=timezone.utc),
            },
            {
                "id": "tx-2",
                "account_id": "acc-1",
                "description": "Diesel",
                "amount": 300.0,
                "type": "expense",
                "category": "Combustível",
                "service_id": None,
                "date": datetime(2026, 3, 13, tzinfo=timezone.utc),
            },
        ]

    @pytest.mark.asyncio
    async def test_free_plan_refused(
        self,
        ledger_service: LedgerService,
        mock_db: MagicMock,
        free_account: AccountContext,
    ) -> None:
        """Финансовый модуль недоступен на бесплатном плане."""
        with pytest.raises(FeatureNotAvailableError) as exc_info:
            await ledger_service.add_transaction(
                free_account,
                TransactionCreateDTO(description="Diesel", amount=300, type=EXPENSE),
            )

        assert exc_info.value.feature == "financial"
        mock_db.execute.assert_not_called()

        with pytest.raises(FeatureNotAvailableError):
            await ledger_service.list_transactions(free_account)

    @pytest.mark.asyncio
    async def test_add_transaction(
        self,
        ledger_service: LedgerService,
        mock_db: MagicMock,
        pro_account: AccountContext,
    ) -> None:
        tx = await ledger_service.add_transaction(
            pro_account,
            TransactionCreateDTO(
                description="Diesel",
                amount=300,
                type=EXPENSE,
                category="Combustível",
            ),
        )

        assert tx.account_id == "acc-1"
        assert tx.type == EXPENSE
        assert tx.date is not None
        assert "INSERT INTO transactions" in mock_db.execute.call_args.args[0]

    @pytest.mark.asyncio
    async def test_add_transaction_db_failure(
        self,
        ledger_service: LedgerService,
        mock_db: MagicMock,
        pro_account: AccountContext,
    ) -> None:
        mock_db.execute = AsyncMock(side_effect=ConnectionError("db down"))

        with pytest.raises(PersistenceError):
            await ledger_service.add_transaction(
                pro_account,
                TransactionCreateDTO(description="Diesel", amount=300, type=EXPENSE),
            )

    @pytest.mark.asyncio
    async def test_financial_report(
        self,
        ledger_service: LedgerService,
        mock_db: MagicMock,
        pro_account: AccountContext,
        tx_rows: list[dict[str, Any]],
    ) -> None:
        mock_db.fetch = AsyncMock(return_value=tx_rows)

        report = await ledger_service.financial_report(pro_account)

        assert report.summary.revenue == 887.5
        assert report.summary.expenses == 300
        assert report.summary.net_profit == 587.5
        assert [(c.name, c.value) for c in report.expenses_by_category] == [("Combustível", 300)]
        assert len(report.transactions) == 2

    @pytest.mark.asyncio
    async def test_monthly_report_requires_advanced(
        self,
        ledger_service: LedgerService,
        pro_account: AccountContext,
        premium_account: AccountContext,
    ) -> None:
        """Помесячный отчёт только на Premium."""
        with pytest.raises(FeatureNotAvailableError):
            await ledger_service.monthly_report(pro_account)

        result = await ledger_service.monthly_report(premium_account, months=3)
        assert len(result) == 3

    @pytest.mark.asyncio
    async def test_dashboard_summary(
        self,
        ledger_service: LedgerService,
        mock_db: MagicMock,
        free_account: AccountContext,
        sample_service_data: dict[str, Any],
        sample_quote_data: dict[str, Any],
        sample_vehicle_data: dict[str, Any],
        tx_rows: list[dict[str, Any]],
    ) -> None:
        """Сводка доступна на любом плане."""
        service_rows = [
            sample_service_data,
            {**sample_service_data, "id": "svc-2", "status": "in_progress"},
            {**sample_service_data, "id": "svc-3", "status": "completed", "cost": 40.0},
            {**sample_service_data, "id": "svc-4", "status": "pending"},
        ]

        async def fetch(query: str, *args: Any):
            if "FROM services" in query:
                return service_rows
            if "FROM transactions" in query:
                return tx_rows
            if "FROM quotes" in query:
                return [sample_quote_data]
            if "FROM vehicles" in query:
                return [sample_vehicle_data]
            return []

        mock_db.fetch = AsyncMock(side_effect=fetch)

        summary = await ledger_service.dashboard_summary(free_account)

        assert summary.pending_services == 2
        assert summary.in_progress_services == 1
        assert summary.total_revenue == 887.5
        assert summary.total_expenses == 300
        assert summary.net_profit == 587.5
        assert [(c.vehicle_id, c.total_cost) for c in summary.costs_by_vehicle] == [("veh-1", 40)]
