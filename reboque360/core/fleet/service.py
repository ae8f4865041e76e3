# reboque360/core/fleet/service.py
"""
Сервис автопарка.
Изменение автопарка доступно только на плане с модулем fleet;
чтение автомобиля для расчёта заявки доступно всем.
"""

from __future__ import annotations

from reboque360.common.constants import PlanFeature, TypeMsg
from reboque360.common.exceptions import PersistenceError, VehicleNotFoundError
from reboque360.common.logger import log_info
from reboque360.core.accounts.models import AccountContext
from reboque360.core.accounts.plans import require_feature
from reboque360.core.fleet.models import Vehicle, VehicleCreateDTO, VehicleUpdateDTO
from reboque360.core.fleet.repository import VehicleRepository
from reboque360.infra.database import DatabaseManager


class FleetService:
    """Сервис автопарка."""

    def __init__(self, db: DatabaseManager) -> None:
        self._repo = VehicleRepository(db)

    async def list_vehicles(self, account: AccountContext) -> list[Vehicle]:
        return await self._repo.list_by_account(account.id)

    async def get_vehicle(self, account: AccountContext, vehicle_id: str) -> Vehicle:
        """
        Raises:
            VehicleNotFoundError: автомобиля нет в аккаунте
        """
        vehicle = await self._repo.get_by_id(account.id, vehicle_id)
        if vehicle is None:
            raise VehicleNotFoundError(vehicle_id)
        return vehicle

    async def add_vehicle(self, account: AccountContext, dto: VehicleCreateDTO) -> Vehicle:
        require_feature(account, PlanFeature.FLEET)

        vehicle = Vehicle(account_id=account.id, **dto.model_dump())
        created = await self._repo.create(vehicle)
        if created is None:
            raise PersistenceError("create_vehicle")

        await log_info(
            f"Аккаунт {account.id}: добавлен {vehicle.model} ({vehicle.plate})",
            type_msg=TypeMsg.INFO,
        )
        return created

    async def update_vehicle(
        self,
        account: AccountContext,
        vehicle_id: str,
        dto: VehicleUpdateDTO,
    ) -> Vehicle:
        require_feature(account, PlanFeature.FLEET)

        vehicle = await self.get_vehicle(account, vehicle_id)
        updated = vehicle.model_copy(update=dto.model_dump(exclude_none=True))

        if not await self._repo.update(updated):
            raise PersistenceError("update_vehicle")
        return updated

    async def delete_vehicle(self, account: AccountContext, vehicle_id: str) -> None:
        require_feature(account, PlanFeature.FLEET)

        if not await self._repo.delete(account.id, vehicle_id):
            raise VehicleNotFoundError(vehicle_id)

        await log_info(f"Аккаунт {account.id}: удалён автомобиль {vehicle_id}", type_msg=TypeMsg.INFO)
