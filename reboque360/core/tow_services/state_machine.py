# reboque360/core/tow_services/state_machine.py
"""
Статусы выезда: pending -> in_progress -> completed, только вперёд.
"""

from __future__ import annotations

from reboque360.common.constants import SERVICE_STATUS_ORDER, ServiceStatus
from reboque360.common.exceptions import InvalidStatusTransitionError


class ServiceStateMachine:
    """Допустимые переходы статуса выезда."""

    # Из каждого статуса можно остаться на месте или уйти дальше по порядку
    ALLOWED_TRANSITIONS: dict[ServiceStatus, tuple[ServiceStatus, ...]] = {
        status: SERVICE_STATUS_ORDER[index:]
        for index, status in enumerate(SERVICE_STATUS_ORDER)
    }

    @classmethod
    def can_transition(cls, current: ServiceStatus, new: ServiceStatus) -> bool:
        return new in cls.ALLOWED_TRANSITIONS.get(current, ())

    @classmethod
    def ensure_transition(cls, current: ServiceStatus, new: ServiceStatus) -> None:
        """
        Raises:
            InvalidStatusTransitionError: переход назад
        """
        if not cls.can_transition(current, new):
            raise InvalidStatusTransitionError(current=current.value, new=new.value)
