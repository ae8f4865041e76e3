# reboque360/core/tow_services/__init__.py
"""
Домен выездов эвакуатора.
"""

from reboque360.core.tow_services.models import (
    Service,
    ServiceCreateDTO,
    ServiceStatusDTO,
    ServiceWithDetails,
)
from reboque360.core.tow_services.repository import ServiceRepository
from reboque360.core.tow_services.service import ServiceManager
from reboque360.core.tow_services.state_machine import ServiceStateMachine

__all__ = [
    "Service",
    "ServiceCreateDTO",
    "ServiceStatusDTO",
    "ServiceWithDetails",
    "ServiceRepository",
    "ServiceManager",
    "ServiceStateMachine",
]
