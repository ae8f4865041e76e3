# tests/common/test_exceptions.py
"""
Тесты для доменных исключений.
"""

from __future__ import annotations

import pytest

from reboque360.common.exceptions import (
    AddressNotFoundError,
    FeatureNotAvailableError,
    NotFoundError,
    PersistenceError,
    QuotaExceededError,
    QuoteNotFoundError,
    Reboque360Error,
    RouteNotFoundError,
    ServiceAlreadyExistsError,
    VehicleNotFoundError,
)


class TestReboque360Error:
    """Тесты базового исключения."""

    def test_default_message_without_params(self) -> None:
        error = Reboque360Error()
        assert str(error) == "ERROR_UNKNOWN"
        assert error.params == {}

    def test_default_message_with_params(self) -> None:
        error = Reboque360Error(reason="x")
        assert str(error) == "ERROR_UNKNOWN: reason='x'"


class TestDomainErrors:
    """Тесты кодов и параметров конкретных ошибок."""

    def test_address_not_found_names_address(self) -> None:
        """Проверяет, что сообщение называет адрес."""
        error = AddressNotFoundError("Rua Inexistente, 999")

        assert error.code == "ERROR_ADDRESS_NOT_FOUND"
        assert error.address == "Rua Inexistente, 999"
        assert error.params == {"address": "Rua Inexistente, 999"}
        assert "Rua Inexistente, 999" in str(error)

    def test_route_not_found_is_distinct(self) -> None:
        """Проверяет, что «нет маршрута» отличается от «нет адреса»."""
        error = RouteNotFoundError("-46.6,-23.5", "-43.1,-22.9")

        assert error.code == "ERROR_ROUTE_NOT_FOUND"
        assert not isinstance(error, AddressNotFoundError)

    def test_quota_exceeded(self) -> None:
        error = QuotaExceededError(10)
        assert error.limit == 10
        assert error.params == {"limit": 10}

    def test_service_already_exists(self) -> None:
        error = ServiceAlreadyExistsError("quote-1")
        assert error.code == "ERROR_SERVICE_ALREADY_EXISTS"
        assert error.quote_id == "quote-1"

    def test_feature_not_available(self) -> None:
        error = FeatureNotAvailableError("fleet", "pro")
        assert error.params == {"feature": "fleet", "plan": "pro"}

    def test_persistence_error(self) -> None:
        error = PersistenceError("create_quote")
        assert error.operation == "create_quote"

    @pytest.mark.parametrize(
        "error_class,code",
        [
            (QuoteNotFoundError, "ERROR_QUOTE_NOT_FOUND"),
            (VehicleNotFoundError, "ERROR_VEHICLE_NOT_FOUND"),
        ],
    )
    def test_not_found_subclasses(self, error_class: type[NotFoundError], code: str) -> None:
        """Проверяет иерархию «не найдено»."""
        error = error_class("id-1")

        assert isinstance(error, NotFoundError)
        assert error.code == code
        assert error.record_id == "id-1"
        assert error.params == {"id": "id-1"}
