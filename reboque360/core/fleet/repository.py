# reboque360/core/fleet/repository.py
"""
Репозиторий автопарка.
"""

from __future__ import annotations

from typing import Optional

from reboque360.common.constants import TypeMsg
from reboque360.common.logger import log_error, log_info
from reboque360.core.fleet.models import Vehicle
from reboque360.infra.database import DatabaseManager, affected_rows

_VEHICLE_COLUMNS = """
    id, account_id, plate, model, year, km,
    avg_consumption, next_maintenance_km, created_at
"""


class VehicleRepository:
    """Репозиторий автомобилей. Все запросы ограничены account_id."""

    def __init__(self, db: DatabaseManager) -> None:
        self._db = db

    async def get_by_id(self, account_id: str, vehicle_id: str) -> Optional[Vehicle]:
        try:
            row = await self._db.fetchrow(
                f"""
                SELECT {_VEHICLE_COLUMNS}
                FROM vehicles
                WHERE account_id = $1 AND id = $2
                """,
                account_id,
                vehicle_id,
            )
        except Exception as e:
            await log_error(f"Ошибка загрузки автомобиля {vehicle_id}: {e}")
            return None

        return self._row_to_vehicle(row) if row is not None else None

    async def list_by_account(self, account_id: str) -> list[Vehicle]:
        try:
            rows = await self._db.fetch(
                f"""
                SELECT {_VEHICLE_COLUMNS}
                FROM vehicles
                WHERE account_id = $1
                ORDER BY created_at
                """,
                account_id,
            )
        except Exception as e:
            await log_error(f"Ошибка загрузки автопарка {account_id}: {e}")
            return []

        return [self._row_to_vehicle(row) for row in rows]

    async def create(self, vehicle: Vehicle) -> Optional[Vehicle]:
        try:
            await self._db.execute(
                """
                INSERT INTO vehicles (
                    id, account_id, plate, model, year, km,
                    avg_consumption, next_maintenance_km, created_at
                )
                VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9)
                """,
                vehicle.id,
                vehicle.account_id,
                vehicle.plate,
                vehicle.model,
                vehicle.year,
                vehicle.km,
                vehicle.avg_consumption,
                vehicle.next_maintenance_km,
                vehicle.created_at,
            )
        except Exception as e:
            await log_error(f"Ошибка добавления автомобиля {vehicle.plate}: {e}")
            return None

        await log_info(f"Автомобиль {vehicle.id} добавлен", type_msg=TypeMsg.DEBUG)
        return vehicle

    async def update(self, vehicle: Vehicle) -> bool:
        try:
            status = await self._db.execute(
                """
                UPDATE vehicles
                SET plate = $3, model = $4, year = $5, km = $6,
                    avg_consumption = $7, next_maintenance_km = $8
                WHERE account_id = $1 AND id = $2
                """,
                vehicle.account_id,
                vehicle.id,
                vehicle.plate,
                vehicle.model,
                vehicle.year,
                vehicle.km,
                vehicle.avg_consumption,
                vehicle.next_maintenance_km,
            )
        except Exception as e:
            await log_error(f"Ошибка обновления автомобиля {vehicle.id}: {e}")
            return False

        return affected_rows(status) == 1

    async def delete(self, account_id: str, vehicle_id: str) -> bool:
        try:
            status = await self._db.execute(
                "DELETE FROM vehicles WHERE account_id = $1 AND id = $2",
                account_id,
                vehicle_id,
            )
        except Exception as e:
            await log_error(f"Ошибка удаления автомобиля {vehicle_id}: {e}")
            return False

        return affected_rows(status) == 1

    def _row_to_vehicle(self, row) -> Vehicle:
        return Vehicle(
            id=row["id"],
            account_id=row["account_id"],
            plate=row["plate"],
            model=row["model"],
            year=row["year"],
            km=row["km"],
            avg_consumption=row["avg_consumption"],
            next_maintenance_km=row["next_maintenance_km"],
            created_at=row["created_at"],
        )
