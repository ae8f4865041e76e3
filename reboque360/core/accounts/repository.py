# reboque360/core/accounts/repository.py
"""
Репозиторий аккаунтов.
"""

from __future__ import annotations

from typing import Optional

from reboque360.common.constants import PlanTier, TypeMsg
from reboque360.common.logger import log_error, log_info
from reboque360.core.accounts.models import AccountContext, AccountSettings
from reboque360.infra.database import DatabaseManager, affected_rows


class AccountRepository:
    """Репозиторий аккаунтов."""

    def __init__(self, db: DatabaseManager) -> None:
        self._db = db

    async def get_by_id(self, account_id: str) -> Optional[AccountContext]:
        """
        Загружает аккаунт вместе с настройками.

        Returns:
            Аккаунт или None, если не найден или БД недоступна
        """
        try:
            row = await self._db.fetchrow(
                """
                SELECT id, name, company_name, plan, language,
                       default_km_value, default_min_charge,
                       default_return_address, fuel_price, created_at
                FROM accounts
                WHERE id = $1
                """,
                account_id,
            )
        except Exception as e:
            await log_error(f"Ошибка загрузки аккаунта {account_id}: {e}")
            return None

        if row is None:
            return None
        return self._row_to_account(row)

    async def update_settings(
        self,
        account_id: str,
        account_settings: AccountSettings,
    ) -> bool:
        """Сохраняет настройки по умолчанию. False, если строка не обновлена."""
        try:
            status = await self._db.execute(
                """
                UPDATE accounts
                SET default_km_value = $2,
                    default_min_charge = $3,
                    default_return_address = $4,
                    fuel_price = $5
                WHERE id = $1
                """,
                account_id,
                account_settings.default_km_value,
                account_settings.default_min_charge,
                account_settings.default_return_address,
                account_settings.fuel_price,
            )
        except Exception as e:
            await log_error(f"Ошибка сохранения настроек аккаунта {account_id}: {e}")
            return False

        await log_info(f"Настройки аккаунта {account_id} обновлены", type_msg=TypeMsg.DEBUG)
        return affected_rows(status) == 1

    def _row_to_account(self, row) -> AccountContext:
        return AccountContext(
            id=row["id"],
            name=row["name"],
            company_name=row["company_name"],
            plan=PlanTier(row["plan"]),
            language=row["language"],
            created_at=row["created_at"],
            settings=AccountSettings(
                default_km_value=row["default_km_value"],
                default_min_charge=row["default_min_charge"],
                default_return_address=row["default_return_address"],
                fuel_price=row["fuel_price"],
            ),
        )
