# reboque360/core/__init__.py
"""
Доменный слой (Core Domain).
Бизнес-логика заявок, выездов, финансов и автопарка.
Контекст аккаунта передаётся в каждую операцию явно.
"""

from reboque360.core.accounts import AccountContext, AccountService
from reboque360.core.pricing import QuoteCalculator
from reboque360.core.fleet import FleetService
from reboque360.core.quotes import Quote, QuoteService
from reboque360.core.tow_services import Service, ServiceManager
from reboque360.core.finance import LedgerService

__all__ = [
    "AccountContext",
    "AccountService",
    "QuoteCalculator",
    "FleetService",
    "Quote",
    "QuoteService",
    "Service",
    "ServiceManager",
    "LedgerService",
]
