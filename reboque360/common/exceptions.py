# reboque360/common/exceptions.py
"""
Иерархия доменных исключений.

Каждое исключение несёт стабильный код (он же ключ локализации в
config/lang_dict.json) и параметры для форматирования сообщения.
Все ошибки восстановимы на уровне действия пользователя.
"""

from __future__ import annotations

from typing import Any


class Reboque360Error(Exception):
    """Базовое доменное исключение."""

    code: str = "ERROR_UNKNOWN"

    def __init__(self, message: str | None = None, **params: Any) -> None:
        self.params: dict[str, Any] = params
        super().__init__(message or self._default_message())

    def _default_message(self) -> str:
        if not self.params:
            return self.code
        details = ", ".join(f"{k}={v!r}" for k, v in self.params.items())
        return f"{self.code}: {details}"


# =============================================================================
# ГЕО / МАРШРУТЫ
# =============================================================================

class AddressNotFoundError(Reboque360Error):
    """Адрес не удалось геокодировать."""

    code = "ERROR_ADDRESS_NOT_FOUND"

    def __init__(self, address: str) -> None:
        self.address = address
        super().__init__(
            f"Не удалось найти координаты для адреса: \"{address}\"",
            address=address,
        )


class RouteNotFoundError(Reboque360Error):
    """Между координатами нет автомобильного маршрута."""

    code = "ERROR_ROUTE_NOT_FOUND"

    def __init__(self, origin: str = "", destination: str = "") -> None:
        self.origin = origin
        self.destination = destination
        super().__init__(
            f"Маршрут не найден: {origin} -> {destination}",
            origin=origin,
            destination=destination,
        )


class GeoProviderError(Reboque360Error):
    """Внешний геокодер/маршрутизатор недоступен или ответил ошибкой."""

    code = "ERROR_GEO_PROVIDER"

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Ошибка геосервиса: {reason}", reason=reason)


# =============================================================================
# ЗАЯВКИ И РАБОТЫ
# =============================================================================

class QuotaExceededError(Reboque360Error):
    """Достигнут лимит заявок тарифного плана."""

    code = "ERROR_QUOTA_EXCEEDED"

    def __init__(self, limit: int) -> None:
        self.limit = limit
        super().__init__(f"Достигнут лимит заявок плана: {limit}", limit=limit)


class ServiceAlreadyExistsError(Reboque360Error):
    """Для заявки уже создана работа."""

    code = "ERROR_SERVICE_ALREADY_EXISTS"

    def __init__(self, quote_id: str) -> None:
        self.quote_id = quote_id
        super().__init__(
            f"Для заявки {quote_id} уже создана работа",
            quote_id=quote_id,
        )


class InvalidQuoteInputError(Reboque360Error):
    """Некорректные данные формы заявки."""

    code = "ERROR_INVALID_QUOTE_INPUT"

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(reason, reason=reason)


class InvalidStatusTransitionError(Reboque360Error):
    """Недопустимый переход статуса."""

    code = "ERROR_INVALID_STATUS_TRANSITION"

    def __init__(self, current: str, new: str) -> None:
        super().__init__(
            f"Переход статуса {current} -> {new} запрещён",
            current=current,
            new=new,
        )


# =============================================================================
# ДОСТУП И ПОИСК
# =============================================================================

class FeatureNotAvailableError(Reboque360Error):
    """Модуль недоступен на текущем плане."""

    code = "ERROR_FEATURE_NOT_AVAILABLE"

    def __init__(self, feature: str, plan: str) -> None:
        self.feature = feature
        self.plan = plan
        super().__init__(
            f"Модуль {feature} недоступен на плане {plan}",
            feature=feature,
            plan=plan,
        )


class NotFoundError(Reboque360Error):
    """Запись не найдена в рамках аккаунта."""

    code = "ERROR_NOT_FOUND"
    entity: str = "record"

    def __init__(self, record_id: str) -> None:
        self.record_id = record_id
        super().__init__(f"{self.entity} {record_id} не найден(а)", id=record_id)


class QuoteNotFoundError(NotFoundError):
    code = "ERROR_QUOTE_NOT_FOUND"
    entity = "quote"


class ServiceNotFoundError(NotFoundError):
    code = "ERROR_SERVICE_NOT_FOUND"
    entity = "service"


class VehicleNotFoundError(NotFoundError):
    code = "ERROR_VEHICLE_NOT_FOUND"
    entity = "vehicle"


class AccountNotFoundError(NotFoundError):
    code = "ERROR_ACCOUNT_NOT_FOUND"
    entity = "account"


class PersistenceError(Reboque360Error):
    """Хранилище не смогло выполнить запись."""

    code = "ERROR_PERSISTENCE"

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"Ошибка сохранения: {operation}", operation=operation)
