# reboque360/core/accounts/__init__.py
"""
Домен аккаунтов и тарифных планов.
"""

from reboque360.core.accounts.models import AccountContext, AccountSettings
from reboque360.core.accounts.plans import (
    PLANS,
    PlanDetails,
    get_plan_details,
    has_feature,
    require_feature,
)
from reboque360.core.accounts.repository import AccountRepository
from reboque360.core.accounts.service import AccountService

__all__ = [
    "AccountContext",
    "AccountSettings",
    "PLANS",
    "PlanDetails",
    "get_plan_details",
    "has_feature",
    "require_feature",
    "AccountRepository",
    "AccountService",
]
