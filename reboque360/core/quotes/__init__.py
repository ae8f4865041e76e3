# reboque360/core/quotes/__init__.py
"""
Домен заявок.
"""

from reboque360.core.quotes.models import (
    Quote,
    QuoteDraft,
    QuoteForm,
    QuoteShare,
    QuoteUpdateDTO,
)
from reboque360.core.quotes.repository import QuoteRepository
from reboque360.core.quotes.service import QuoteService
from reboque360.core.quotes.state_machine import QuoteStateMachine

__all__ = [
    "Quote",
    "QuoteDraft",
    "QuoteForm",
    "QuoteShare",
    "QuoteUpdateDTO",
    "QuoteRepository",
    "QuoteService",
    "QuoteStateMachine",
]
