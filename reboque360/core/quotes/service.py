# reboque360/core/quotes/service.py
"""
Сервис заявок.
Расчёт маршрута и цены, лимит плана, правка, ручной статус, отправка клиенту.
"""

from __future__ import annotations

from typing import Optional
from urllib.parse import quote as urlquote

from reboque360.common.constants import QuoteStatus, TypeMsg
from reboque360.common.exceptions import (
    InvalidQuoteInputError,
    PersistenceError,
    QuotaExceededError,
    QuoteNotFoundError,
    VehicleNotFoundError,
)
from reboque360.common.filters import DateRange
from reboque360.common.localization import get_text
from reboque360.common.logger import log_info
from reboque360.core.accounts.models import AccountContext
from reboque360.core.accounts.plans import get_plan_details
from reboque360.core.fleet.repository import VehicleRepository
from reboque360.core.pricing.service import QuoteCalculator, calculate_price
from reboque360.core.quotes.models import (
    Quote,
    QuoteDraft,
    QuoteForm,
    QuoteShare,
    QuoteUpdateDTO,
)
from reboque360.core.quotes.repository import QuoteRepository
from reboque360.core.quotes.state_machine import QuoteStateMachine
from reboque360.core.routing.service import (
    GeoProvider,
    RouteDistanceCalculator,
    build_round_trip_legs,
)
from reboque360.infra.database import DatabaseManager

WHATSAPP_SHARE_URL = "https://wa.me/?text="


class QuoteService:
    """
    Сервис заявок.
    Управляет жизненным циклом заявки от расчёта до ручной смены статуса.
    """

    def __init__(
        self,
        db: DatabaseManager,
        geo: GeoProvider,
        calculator: QuoteCalculator | None = None,
    ) -> None:
        """
        Args:
            db: Менеджер базы данных
            geo: Геокодер и провайдер маршрутов
            calculator: Калькулятор цены (по умолчанию валюта из конфига)
        """
        self._repo = QuoteRepository(db)
        self._vehicles = VehicleRepository(db)
        self._router = RouteDistanceCalculator(geo)
        self._calculator = calculator or QuoteCalculator()

    # =========================================================================
    # РАСЧЁТ
    # =========================================================================

    async def calculate(self, account: AccountContext, form: QuoteForm) -> QuoteDraft:
        """
        Считает маршрут и цену без сохранения. Лимит плана не проверяется.
        Тариф, минимум и адрес возврата по умолчанию берутся из настроек аккаунта.

        Raises:
            InvalidQuoteInputError: не выбран автомобиль или пустой адрес
            VehicleNotFoundError: автомобиля нет в аккаунте
            AddressNotFoundError: адрес не геокодирован
            RouteNotFoundError: маршрута нет
        """
        form = form.with_defaults(account.settings)

        if not form.vehicle_id:
            raise InvalidQuoteInputError("vehicle_id")

        missing = form.missing_addresses()
        if missing:
            raise InvalidQuoteInputError(", ".join(missing))

        vehicle = await self._vehicles.get_by_id(account.id, form.vehicle_id)
        if vehicle is None:
            raise VehicleNotFoundError(form.vehicle_id)

        legs = build_round_trip_legs(
            form.current_location,
            form.origin,
            form.destination,
            form.return_address,
        )
        distance = await self._router.total_distance_km(legs)

        breakdown = self._calculator.breakdown(
            distance_km=distance,
            rate_per_km=form.km_value,
            minimum_charge=form.min_charge,
            extras=form.extras,
            discount=form.discount,
            avg_consumption_km_per_liter=vehicle.avg_consumption,
            fuel_price_per_liter=account.settings.fuel_price,
        )

        await log_info(
            f"Расчёт заявки {account.id}: {distance} км, итог {breakdown.total:.2f}, "
            f"топливо {breakdown.fuel_cost:.2f}",
            type_msg=TypeMsg.DEBUG,
        )
        return QuoteDraft(form=form, total_distance=distance, breakdown=breakdown)

    # =========================================================================
    # CRUD
    # =========================================================================

    async def create_quote(self, account: AccountContext, draft: QuoteDraft) -> Quote:
        """
        Сохраняет рассчитанную заявку со статусом pending.

        Raises:
            QuotaExceededError: лимит плана исчерпан, ничего не сохранено
        """
        limit = get_plan_details(account.plan).quote_limit
        if limit is not None:
            count = await self._repo.count_by_account(account.id)
            if count is None:
                raise PersistenceError("count_quotes")
            if count >= limit:
                await log_info(
                    f"Аккаунт {account.id}: лимит заявок {limit} исчерпан",
                    type_msg=TypeMsg.WARNING,
                )
                raise QuotaExceededError(limit)

        created = await self._repo.create(draft.to_quote(account.id))
        if created is None:
            raise PersistenceError("create_quote")

        await log_info(f"Заявка {created.id} сохранена ({account.id})", type_msg=TypeMsg.INFO)
        return created

    async def get_quote(self, account: AccountContext, quote_id: str) -> Quote:
        quote = await self._repo.get_by_id(account.id, quote_id)
        if quote is None:
            raise QuoteNotFoundError(quote_id)
        return quote

    async def list_quotes(
        self,
        account: AccountContext,
        status: Optional[QuoteStatus] = None,
        period: Optional[DateRange] = None,
    ) -> list[Quote]:
        """Заявки аккаунта, новые сверху; период включительно по дням."""
        return await self._repo.list_by_account(account.id, status=status, period=period)

    async def update_quote(
        self,
        account: AccountContext,
        quote_id: str,
        dto: QuoteUpdateDTO,
    ) -> Quote:
        """
        Правка цены. Итог пересчитывается той же функцией, что и при расчёте;
        оценка топлива остаётся прежней.
        """
        quote = await self.get_quote(account, quote_id)
        edited = quote.model_copy(update=dto.changes())
        edited = edited.model_copy(update={
            "total": calculate_price(
                edited.total_distance,
                edited.km_value,
                edited.min_charge,
                edited.extras,
                edited.discount,
            ),
        })

        if not await self._repo.update_pricing(edited):
            raise PersistenceError("update_quote")

        await log_info(
            f"Заявка {quote_id}: итог {quote.total:.2f} -> {edited.total:.2f}",
            type_msg=TypeMsg.INFO,
        )
        return edited

    async def update_status(
        self,
        account: AccountContext,
        quote_id: str,
        status: QuoteStatus | str,
    ) -> Quote:
        """Ручная смена статуса в любое из четырёх значений."""
        quote = await self.get_quote(account, quote_id)
        new_status = QuoteStateMachine.validate_manual_status(status, current=quote.status)

        if not await self._repo.update_status(account.id, quote_id, new_status):
            raise PersistenceError("update_quote_status")

        return quote.model_copy(update={"status": new_status})

    async def delete_quote(self, account: AccountContext, quote_id: str) -> None:
        """Удаляет заявку. Созданный по ней выезд остаётся."""
        await self.get_quote(account, quote_id)

        if not await self._repo.delete(account.id, quote_id):
            raise PersistenceError("delete_quote")

        await log_info(f"Заявка {quote_id} удалена ({account.id})", type_msg=TypeMsg.INFO)

    # =========================================================================
    # ОТПРАВКА КЛИЕНТУ
    # =========================================================================

    @staticmethod
    def share_message(quote: Quote, lang: str = "pt") -> str:
        """Текст заявки для WhatsApp."""
        return get_text(
            "QUOTE_SHARE_MESSAGE",
            lang,
            origin=quote.origin,
            destination=quote.destination,
            distance=f"{quote.total_distance:.1f}",
            total=f"{quote.total:.2f}",
            notes=quote.notes or get_text("QUOTE_SHARE_NO_NOTES", lang),
        )

    @classmethod
    def share_link(cls, quote: Quote, lang: str = "pt") -> QuoteShare:
        """Ссылка wa.me с текстом заявки."""
        message = cls.share_message(quote, lang)
        return QuoteShare(
            message=message,
            url=WHATSAPP_SHARE_URL + urlquote(message, safe="-_.!~*'()"),
        )
