# reboque360/core/finance/__init__.py
"""
Домен финансового учёта.
"""

from reboque360.core.finance.ledger import (
    costs_by_vehicle,
    expenses_by_category,
    monthly_totals,
    service_profit,
    summarize_transactions,
)
from reboque360.core.finance.models import (
    DashboardSummary,
    FinanceReport,
    FinancialSummary,
    Transaction,
    TransactionCreateDTO,
    VehicleCost,
)
from reboque360.core.finance.repository import TransactionRepository
from reboque360.core.finance.service import LedgerService

__all__ = [
    "costs_by_vehicle",
    "expenses_by_category",
    "monthly_totals",
    "service_profit",
    "summarize_transactions",
    "DashboardSummary",
    "FinanceReport",
    "FinancialSummary",
    "Transaction",
    "TransactionCreateDTO",
    "VehicleCost",
    "TransactionRepository",
    "LedgerService",
]
