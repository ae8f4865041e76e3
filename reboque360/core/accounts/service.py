# reboque360/core/accounts/service.py
"""
Сервис аккаунтов: загрузка контекста и настройки по умолчанию.
"""

from __future__ import annotations

from reboque360.common.constants import TypeMsg
from reboque360.common.exceptions import AccountNotFoundError, PersistenceError
from reboque360.common.logger import log_info
from reboque360.core.accounts.models import AccountContext, AccountSettings
from reboque360.core.accounts.repository import AccountRepository
from reboque360.infra.database import DatabaseManager


class AccountService:
    """Сервис аккаунтов."""

    def __init__(self, db: DatabaseManager) -> None:
        self._repo = AccountRepository(db)

    async def get_account(self, account_id: str) -> AccountContext:
        """
        Raises:
            AccountNotFoundError: аккаунта нет
        """
        account = await self._repo.get_by_id(account_id)
        if account is None:
            raise AccountNotFoundError(account_id)
        return account

    async def update_settings(
        self,
        account: AccountContext,
        new_settings: AccountSettings,
    ) -> AccountContext:
        """Сохраняет настройки и возвращает обновлённый контекст."""
        if not await self._repo.update_settings(account.id, new_settings):
            raise PersistenceError("update_account_settings")

        await log_info(
            f"Аккаунт {account.id}: км={new_settings.default_km_value}, "
            f"мин={new_settings.default_min_charge}, топливо={new_settings.fuel_price}",
            type_msg=TypeMsg.INFO,
        )
        return account.model_copy(update={"settings": new_settings})
