# reboque360/core/finance/repository.py
"""
Репозиторий финансовых операций.
"""

from __future__ import annotations

from typing import Optional

from reboque360.common.constants import TransactionType, TypeMsg
from reboque360.common.filters import DateRange, WhereBuilder
from reboque360.common.logger import log_error, log_info
from reboque360.core.finance.models import Transaction
from reboque360.infra.database import DatabaseManager


class TransactionRepository:
    """Репозиторий операций. Все запросы ограничены account_id."""

    def __init__(self, db: DatabaseManager) -> None:
        self._db = db

    async def create(self, tx: Transaction) -> Optional[Transaction]:
        try:
            await self._db.execute(
                """
                INSERT INTO transactions (
                    id, account_id, description, amount, type,
                    category, service_id, date
                )
                VALUES ($1, $2, $3, $4, $5, $6, $7, $8)
                """,
                tx.id,
                tx.account_id,
                tx.description,
                tx.amount,
                tx.type.value,
                tx.category,
                tx.service_id,
                tx.date,
            )
        except Exception as e:
            await log_error(f"Ошибка записи операции: {e}")
            return None

        await log_info(f"Операция {tx.id} ({tx.type.value}) записана", type_msg=TypeMsg.DEBUG)
        return tx

    async def list_by_account(
        self,
        account_id: str,
        period: DateRange | None = None,
    ) -> list[Transaction]:
        """Операции аккаунта, новые сверху."""
        where = WhereBuilder("account_id = $1", account_id)
        where.add_date_range("date", period)

        try:
            rows = await self._db.fetch(
                f"""
                SELECT id, account_id, description, amount, type,
                       category, service_id, date
                FROM transactions
                WHERE {where.sql}
                ORDER BY date DESC
                """,
                *where.params,
            )
        except Exception as e:
            await log_error(f"Ошибка загрузки операций {account_id}: {e}")
            return []

        return [self._row_to_transaction(row) for row in rows]

    def _row_to_transaction(self, row) -> Transaction:
        return Transaction(
            id=row["id"],
            account_id=row["account_id"],
            description=row["description"],
            amount=row["amount"],
            type=TransactionType(row["type"]),
            category=row["category"],
            service_id=row["service_id"],
            date=row["date"],
        )
