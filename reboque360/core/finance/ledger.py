# reboque360/core/finance/ledger.py
"""
Агрегаты финансового учёта. Чистые функции без ввода-вывода.
"""

from __future__ import annotations

from collections import defaultdict
from datetime import datetime, timezone
from typing import Iterable

from reboque360.common.constants import ServiceStatus, TransactionType
from reboque360.core.finance.models import (
    CategoryTotal,
    FinancialSummary,
    MonthlyTotal,
    Transaction,
    VehicleCost,
)
from reboque360.core.fleet.models import Vehicle
from reboque360.core.pricing.service import calculate_profit
from reboque360.core.quotes.models import Quote
from reboque360.core.tow_services.models import Service


def summarize_transactions(transactions: Iterable[Transaction]) -> FinancialSummary:
    """Доход, расход и чистая прибыль."""
    revenue = 0.0
    expenses = 0.0
    for tx in transactions:
        if tx.type == TransactionType.REVENUE:
            revenue += tx.amount
        else:
            expenses += tx.amount
    return FinancialSummary(
        revenue=revenue,
        expenses=expenses,
        net_profit=calculate_profit(revenue, expenses),
    )


def expenses_by_category(transactions: Iterable[Transaction]) -> dict[str, float]:
    """Сумма расходов по категориям в порядке первого появления."""
    totals: dict[str, float] = {}
    for tx in transactions:
        if tx.type != TransactionType.EXPENSE:
            continue
        totals[tx.category] = totals.get(tx.category, 0.0) + tx.amount
    return totals


def category_totals(transactions: Iterable[Transaction]) -> list[CategoryTotal]:
    return [
        CategoryTotal(name=name, value=value)
        for name, value in expenses_by_category(transactions).items()
    ]


def service_profit(service: Service) -> float:
    return calculate_profit(service.value, service.cost)


def costs_by_vehicle(
    vehicles: Iterable[Vehicle],
    services: Iterable[Service],
    quotes: Iterable[Quote],
) -> list[VehicleCost]:
    """
    Для каждого автомобиля: сумма cost завершённых выездов, чья заявка
    ссылается на этот автомобиль. Выезды без заявки не учитываются.
    """
    vehicle_by_quote = {q.id: q.vehicle_id for q in quotes}
    totals: dict[str, float] = defaultdict(float)

    for service in services:
        if service.status != ServiceStatus.COMPLETED:
            continue
        vehicle_id = vehicle_by_quote.get(service.quote_id)
        if vehicle_id:
            totals[vehicle_id] += service.cost

    return [
        VehicleCost(vehicle_id=v.id, name=v.model, total_cost=totals.get(v.id, 0.0))
        for v in vehicles
    ]


def monthly_totals(
    transactions: Iterable[Transaction],
    months: int = 6,
    now: datetime | None = None,
) -> list[MonthlyTotal]:
    """Доходы и расходы за последние months месяцев, от старого к новому."""
    now = now or datetime.now(timezone.utc)
    keys: list[str] = []
    year, month = now.year, now.month
    for _ in range(months):
        keys.append(f"{year:04d}-{month:02d}")
        month -= 1
        if month == 0:
            year, month = year - 1, 12
    keys.reverse()

    buckets = {key: MonthlyTotal(month=key) for key in keys}
    for tx in transactions:
        bucket = buckets.get(tx.date.strftime("%Y-%m"))
        if bucket is None:
            continue
        if tx.type == TransactionType.REVENUE:
            bucket.revenue += tx.amount
        else:
            bucket.expenses += tx.amount

    return [buckets[key] for key in keys]
