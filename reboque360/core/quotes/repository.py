# reboque360/core/quotes/repository.py
"""
Репозиторий заявок.
"""

from __future__ import annotations

from typing import Optional

from reboque360.common.constants import QuoteStatus, TypeMsg
from reboque360.common.filters import DateRange, WhereBuilder
from reboque360.common.logger import log_error, log_info
from reboque360.core.quotes.models import Quote
from reboque360.infra.database import DatabaseManager, affected_rows

QUOTE_COLUMNS = """
    id, account_id, current_location, origin, destination, return_address,
    total_distance, km_value, min_charge, extras, discount, notes,
    total, fuel_cost, status, vehicle_id, created_at
"""


def row_to_quote(row) -> Quote:
    """Строка БД -> Quote."""
    return Quote(
        id=row["id"],
        account_id=row["account_id"],
        current_location=row["current_location"],
        origin=row["origin"],
        destination=row["destination"],
        return_address=row["return_address"],
        total_distance=row["total_distance"],
        km_value=row["km_value"],
        min_charge=row["min_charge"],
        extras=row["extras"],
        discount=row["discount"],
        notes=row["notes"],
        total=row["total"],
        fuel_cost=row["fuel_cost"],
        status=QuoteStatus(row["status"]),
        vehicle_id=row["vehicle_id"],
        created_at=row["created_at"],
    )


class QuoteRepository:
    """Репозиторий заявок. Все запросы ограничены account_id."""

    def __init__(self, db: DatabaseManager) -> None:
        self._db = db

    async def count_by_account(self, account_id: str) -> Optional[int]:
        """Сколько заявок у аккаунта; None, если БД не ответила."""
        try:
            return await self._db.fetchval(
                "SELECT COUNT(*) FROM quotes WHERE account_id = $1",
                account_id,
            )
        except Exception as e:
            await log_error(f"Ошибка подсчёта заявок {account_id}: {e}")
            return None

    async def get_by_id(self, account_id: str, quote_id: str) -> Optional[Quote]:
        try:
            row = await self._db.fetchrow(
                f"""
                SELECT {QUOTE_COLUMNS}
                FROM quotes
                WHERE account_id = $1 AND id = $2
                """,
                account_id,
                quote_id,
            )
        except Exception as e:
            await log_error(f"Ошибка загрузки заявки {quote_id}: {e}")
            return None

        return row_to_quote(row) if row is not None else None

    async def list_by_account(
        self,
        account_id: str,
        status: QuoteStatus | None = None,
        period: DateRange | None = None,
    ) -> list[Quote]:
        """Заявки аккаунта, новые сверху."""
        where = WhereBuilder("account_id = $1", account_id)
        if status is not None:
            where.add("status = {}", status.value)
        where.add_date_range("created_at", period)

        try:
            rows = await self._db.fetch(
                f"""
                SELECT {QUOTE_COLUMNS}
                FROM quotes
                WHERE {where.sql}
                ORDER BY created_at DESC
                """,
                *where.params,
            )
        except Exception as e:
            await log_error(f"Ошибка загрузки заявок {account_id}: {e}")
            return []

        return [row_to_quote(row) for row in rows]

    async def create(self, quote: Quote) -> Optional[Quote]:
        try:
            await self._db.execute(
                """
                INSERT INTO quotes (
                    id, account_id, current_location, origin, destination,
                    return_address, total_distance, km_value, min_charge,
                    extras, discount, notes, total, fuel_cost, status,
                    vehicle_id, created_at
                )
                VALUES (
                    $1, $2, $3, $4, $5, $6, $7, $8, $9,
                    $10, $11, $12, $13, $14, $15, $16, $17
                )
                """,
                quote.id,
                quote.account_id,
                quote.current_location,
                quote.origin,
                quote.destination,
                quote.return_address,
                quote.total_distance,
                quote.km_value,
                quote.min_charge,
                quote.extras,
                quote.discount,
                quote.notes,
                quote.total,
                quote.fuel_cost,
                quote.status.value,
                quote.vehicle_id,
                quote.created_at,
            )
        except Exception as e:
            await log_error(f"Ошибка создания заявки: {e}")
            return None

        await log_info(f"Заявка {quote.id} создана", type_msg=TypeMsg.DEBUG)
        return quote

    async def update_pricing(self, quote: Quote) -> bool:
        """Сохраняет изменяемые поля цены после правки."""
        try:
            status = await self._db.execute(
                """
                UPDATE quotes
                SET total_distance = $3, km_value = $4, min_charge = $5,
                    extras = $6, discount = $7, notes = $8, total = $9
                WHERE account_id = $1 AND id = $2
                """,
                quote.account_id,
                quote.id,
                quote.total_distance,
                quote.km_value,
                quote.min_charge,
                quote.extras,
                quote.discount,
                quote.notes,
                quote.total,
            )
        except Exception as e:
            await log_error(f"Ошибка правки заявки {quote.id}: {e}")
            return False

        return affected_rows(status) == 1

    async def update_status(
        self,
        account_id: str,
        quote_id: str,
        status: QuoteStatus,
    ) -> bool:
        try:
            result = await self._db.execute(
                "UPDATE quotes SET status = $3 WHERE account_id = $1 AND id = $2",
                account_id,
                quote_id,
                status.value,
            )
        except Exception as e:
            await log_error(f"Ошибка смены статуса заявки {quote_id}: {e}")
            return False

        await log_info(f"Заявка {quote_id}: статус {status.value}", type_msg=TypeMsg.DEBUG)
        return affected_rows(result) == 1

    async def delete(self, account_id: str, quote_id: str) -> bool:
        """Удаляет только заявку; выезды и операции не затрагиваются."""
        try:
            result = await self._db.execute(
                "DELETE FROM quotes WHERE account_id = $1 AND id = $2",
                account_id,
                quote_id,
            )
        except Exception as e:
            await log_error(f"Ошибка удаления заявки {quote_id}: {e}")
            return False

        return affected_rows(result) == 1
