# reboque360/core/quotes/state_machine.py
"""
Правила статусов заявки.

Статус пользователь может выставить вручную в любое значение.
Охраняется только создание выезда: из заявки со статусом
service_created второй выезд не создаётся.
"""

from __future__ import annotations

from reboque360.common.constants import QuoteStatus
from reboque360.common.exceptions import InvalidStatusTransitionError


class QuoteStateMachine:
    """Правила статусов заявки."""

    @staticmethod
    def can_create_service(status: QuoteStatus) -> bool:
        return status != QuoteStatus.SERVICE_CREATED

    @staticmethod
    def validate_manual_status(
        value: QuoteStatus | str,
        current: QuoteStatus | None = None,
    ) -> QuoteStatus:
        """
        Ручная смена статуса: допустимо любое из четырёх значений.

        Raises:
            InvalidStatusTransitionError: значение не является статусом заявки
        """
        try:
            return QuoteStatus(value)
        except ValueError as e:
            raise InvalidStatusTransitionError(
                current=current.value if current else "",
                new=str(value),
            ) from e
