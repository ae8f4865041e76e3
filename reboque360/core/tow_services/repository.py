# reboque360/core/tow_services/repository.py
"""
Репозиторий выездов.
"""

from __future__ import annotations

from typing import Optional

from reboque360.common.constants import QuoteStatus, ServiceStatus, TypeMsg
from reboque360.common.filters import DateRange, WhereBuilder
from reboque360.common.logger import log_error, log_info
from reboque360.core.tow_services.models import (
    MISSING_QUOTE_PLACEHOLDER,
    Service,
    ServiceWithDetails,
)
from reboque360.infra.database import DatabaseManager, affected_rows

_SERVICE_COLUMNS = """
    s.id, s.account_id, s.quote_id, s.client_name, s.client_phone,
    s.status, s.value, s.cost, s.created_at
"""


class ServiceRepository:
    """Репозиторий выездов. Все запросы ограничены account_id."""

    def __init__(self, db: DatabaseManager) -> None:
        self._db = db

    async def get_by_id(self, account_id: str, service_id: str) -> Optional[Service]:
        try:
            row = await self._db.fetchrow(
                f"""
                SELECT {_SERVICE_COLUMNS}
                FROM services s
                WHERE s.account_id = $1 AND s.id = $2
                """,
                account_id,
                service_id,
            )
        except Exception as e:
            await log_error(f"Ошибка загрузки выезда {service_id}: {e}")
            return None

        return self._row_to_service(row) if row is not None else None

    async def create_from_quote(self, service: Service) -> Optional[Service]:
        """
        В одной транзакции помечает заявку как service_created и вставляет выезд.
        Заявка помечается только если ещё не была помечена; иначе ничего
        не вставляется и возвращается None.
        """
        try:
            async with self._db.transaction() as conn:
                flipped = await conn.execute(
                    """
                    UPDATE quotes
                    SET status = $3
                    WHERE account_id = $1 AND id = $2 AND status <> $3
                    """,
                    service.account_id,
                    service.quote_id,
                    QuoteStatus.SERVICE_CREATED.value,
                )
                if affected_rows(flipped) != 1:
                    return None

                await conn.execute(
                    """
                    INSERT INTO services (
                        id, account_id, quote_id, client_name, client_phone,
                        status, value, cost, created_at
                    )
                    VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9)
                    """,
                    service.id,
                    service.account_id,
                    service.quote_id,
                    service.client_name,
                    service.client_phone,
                    service.status.value,
                    service.value,
                    service.cost,
                    service.created_at,
                )
        except Exception as e:
            await log_error(f"Ошибка создания выезда по заявке {service.quote_id}: {e}")
            return None

        await log_info(
            f"Выезд {service.id} создан по заявке {service.quote_id}",
            type_msg=TypeMsg.DEBUG,
        )
        return service

    async def update_status(
        self,
        account_id: str,
        service_id: str,
        status: ServiceStatus,
    ) -> bool:
        try:
            result = await self._db.execute(
                "UPDATE services SET status = $3 WHERE account_id = $1 AND id = $2",
                account_id,
                service_id,
                status.value,
            )
        except Exception as e:
            await log_error(f"Ошибка смены статуса выезда {service_id}: {e}")
            return False

        return affected_rows(result) == 1

    async def list_with_details(
        self,
        account_id: str,
        status: ServiceStatus | None = None,
        period: DateRange | None = None,
        newest_first: bool = True,
    ) -> list[ServiceWithDetails]:
        """
        Выезды с адресами и автомобилем заявки.
        Если заявка удалена, адреса заменяются на 'N/A'.
        """
        where = WhereBuilder("s.account_id = $1", account_id)
        if status is not None:
            where.add("s.status = {}", status.value)
        where.add_date_range("s.created_at", period)
        direction = "DESC" if newest_first else "ASC"

        try:
            rows = await self._db.fetch(
                f"""
                SELECT {_SERVICE_COLUMNS},
                       q.origin, q.destination, q.vehicle_id
                FROM services s
                LEFT JOIN quotes q
                  ON q.id = s.quote_id AND q.account_id = s.account_id
                WHERE {where.sql}
                ORDER BY s.created_at {direction}
                """,
                *where.params,
            )
        except Exception as e:
            await log_error(f"Ошибка загрузки выездов {account_id}: {e}")
            return []

        return [self._row_to_details(row) for row in rows]

    def _row_to_service(self, row) -> Service:
        return Service(
            id=row["id"],
            account_id=row["account_id"],
            quote_id=row["quote_id"],
            client_name=row["client_name"],
            client_phone=row["client_phone"],
            status=ServiceStatus(row["status"]),
            value=row["value"],
            cost=row["cost"],
            created_at=row["created_at"],
        )

    def _row_to_details(self, row) -> ServiceWithDetails:
        base = self._row_to_service(row)
        return ServiceWithDetails(
            **base.model_dump(),
            origin=row["origin"] or MISSING_QUOTE_PLACEHOLDER,
            destination=row["destination"] or MISSING_QUOTE_PLACEHOLDER,
            vehicle_id=row["vehicle_id"],
        )
