# reboque360/core/tow_services/service.py
"""
Управление выездами: создание из заявки, статусы, список с поиском.
"""

from __future__ import annotations

from typing import Optional

from reboque360.common.constants import QuoteStatus, ServiceStatus, TypeMsg
from reboque360.common.exceptions import (
    PersistenceError,
    QuoteNotFoundError,
    ServiceAlreadyExistsError,
    ServiceNotFoundError,
)
from reboque360.common.filters import DateRange
from reboque360.common.logger import log_info
from reboque360.core.accounts.models import AccountContext
from reboque360.core.quotes.repository import QuoteRepository
from reboque360.core.quotes.state_machine import QuoteStateMachine
from reboque360.core.tow_services.models import Service, ServiceWithDetails
from reboque360.core.tow_services.repository import ServiceRepository
from reboque360.core.tow_services.state_machine import ServiceStateMachine
from reboque360.infra.database import DatabaseManager


class ServiceManager:
    """
    Менеджер выездов.

    Реализует:
    - Создание выезда из заявки (не более одного на заявку)
    - Смену статуса только вперёд
    - Список с фильтрами, поиском и сортировкой
    """

    def __init__(self, db: DatabaseManager) -> None:
        self._repo = ServiceRepository(db)
        self._quotes = QuoteRepository(db)

    async def create_from_quote(
        self,
        account: AccountContext,
        quote_id: str,
        client_name: Optional[str] = None,
        client_phone: Optional[str] = None,
    ) -> Service:
        """
        Создаёт выезд: value = итог заявки, cost = топливо заявки.

        Raises:
            QuoteNotFoundError: заявки нет
            ServiceAlreadyExistsError: по заявке уже создан выезд
        """
        from reboque360.config import settings

        quote = await self._quotes.get_by_id(account.id, quote_id)
        if quote is None:
            raise QuoteNotFoundError(quote_id)
        if not QuoteStateMachine.can_create_service(quote.status):
            raise ServiceAlreadyExistsError(quote_id)

        service = Service(
            account_id=account.id,
            quote_id=quote.id,
            client_name=client_name or settings.pricing.PLACEHOLDER_CLIENT_NAME,
            client_phone=client_phone or settings.pricing.PLACEHOLDER_CLIENT_PHONE,
            value=quote.total,
            cost=quote.fuel_cost,
        )

        created = await self._repo.create_from_quote(service)
        if created is None:
            # Либо параллельный запрос успел раньше, либо сбой БД
            current = await self._quotes.get_by_id(account.id, quote_id)
            if current is not None and current.status == QuoteStatus.SERVICE_CREATED:
                raise ServiceAlreadyExistsError(quote_id)
            raise PersistenceError("create_service")

        await log_info(
            f"Выезд {created.id} создан: {quote.origin} -> {quote.destination}",
            type_msg=TypeMsg.INFO,
        )
        return created

    async def get_service(self, account: AccountContext, service_id: str) -> Service:
        service = await self._repo.get_by_id(account.id, service_id)
        if service is None:
            raise ServiceNotFoundError(service_id)
        return service

    async def update_status(
        self,
        account: AccountContext,
        service_id: str,
        status: ServiceStatus,
    ) -> Service:
        """
        Raises:
            ServiceNotFoundError: выезда нет
            InvalidStatusTransitionError: попытка вернуть статус назад
        """
        service = await self.get_service(account, service_id)
        if service.status == status:
            return service

        ServiceStateMachine.ensure_transition(service.status, status)

        if not await self._repo.update_status(account.id, service_id, status):
            raise PersistenceError("update_service_status")

        await log_info(
            f"Выезд {service_id}: {service.status.value} -> {status.value}",
            type_msg=TypeMsg.INFO,
        )
        return service.model_copy(update={"status": status})

    async def list_services(
        self,
        account: AccountContext,
        status: Optional[ServiceStatus] = None,
        search: Optional[str] = None,
        period: Optional[DateRange] = None,
        newest_first: bool = True,
    ) -> list[ServiceWithDetails]:
        services = await self._repo.list_with_details(
            account.id,
            status=status,
            period=period,
            newest_first=newest_first,
        )
        if search and search.strip():
            services = [s for s in services if s.matches(search.strip())]
        return services
