# reboque360/core/fleet/__init__.py
"""
Домен автопарка.
"""

from reboque360.core.fleet.models import Vehicle, VehicleCreateDTO, VehicleUpdateDTO
from reboque360.core.fleet.repository import VehicleRepository
from reboque360.core.fleet.service import FleetService

__all__ = [
    "Vehicle",
    "VehicleCreateDTO",
    "VehicleUpdateDTO",
    "VehicleRepository",
    "FleetService",
]
