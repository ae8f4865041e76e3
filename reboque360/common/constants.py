# reboque360/common/constants.py
"""
Общие константы и перечисления.
"""

from enum import Enum


class TypeMsg(str, Enum):
    """Типы сообщений для логирования."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class QuoteStatus(str, Enum):
    """Статусы заявки (orçamento)."""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    SERVICE_CREATED = "service_created"

    def __str__(self) -> str:
        return self.value


class ServiceStatus(str, Enum):
    """Статусы выездной работы эвакуатора."""
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"

    def __str__(self) -> str:
        return self.value


class TransactionType(str, Enum):
    """Тип финансовой операции."""
    REVENUE = "revenue"
    EXPENSE = "expense"

    def __str__(self) -> str:
        return self.value


class PlanTier(str, Enum):
    """Тарифные планы подписки."""
    FREE = "free"
    PRO = "pro"
    PREMIUM = "premium"

    def __str__(self) -> str:
        return self.value


class PlanFeature(str, Enum):
    """Модули, доступ к которым зависит от плана."""
    FINANCIAL = "financial"
    FLEET = "fleet"
    ADVANCED_REPORTS = "advanced_reports"

    def __str__(self) -> str:
        return self.value


# Порядок статусов выездной работы (только вперёд)
SERVICE_STATUS_ORDER: tuple[ServiceStatus, ...] = (
    ServiceStatus.PENDING,
    ServiceStatus.IN_PROGRESS,
    ServiceStatus.COMPLETED,
)
