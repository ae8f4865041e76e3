# reboque360/core/accounts/plans.py
"""
Тарифные планы: лимит заявок и доступные модули.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from reboque360.common.constants import PlanFeature, PlanTier
from reboque360.common.exceptions import FeatureNotAvailableError
from reboque360.config import settings
from reboque360.core.accounts.models import AccountContext


@dataclass(frozen=True)
class PlanDetails:
    """Описание тарифа."""
    tier: PlanTier
    name: str
    price: float
    quote_limit: Optional[int]
    features: frozenset[PlanFeature]
    highlights: tuple[str, ...] = ()

    @property
    def is_unlimited(self) -> bool:
        return self.quote_limit is None


PLANS: dict[PlanTier, PlanDetails] = {
    PlanTier.FREE: PlanDetails(
        tier=PlanTier.FREE,
        name="Gratuito",
        price=0.0,
        quote_limit=settings.plans.FREE_QUOTE_LIMIT,
        features=frozenset(),
        highlights=(f"Até {settings.plans.FREE_QUOTE_LIMIT} orçamentos/mês",),
    ),
    PlanTier.PRO: PlanDetails(
        tier=PlanTier.PRO,
        name="Pro",
        price=39.90,
        quote_limit=settings.plans.PRO_QUOTE_LIMIT,
        features=frozenset({PlanFeature.FINANCIAL}),
        highlights=("Orçamentos ilimitados", "Módulo Financeiro Completo"),
    ),
    PlanTier.PREMIUM: PlanDetails(
        tier=PlanTier.PREMIUM,
        name="Premium",
        price=69.90,
        quote_limit=settings.plans.PREMIUM_QUOTE_LIMIT,
        features=frozenset({
            PlanFeature.FINANCIAL,
            PlanFeature.FLEET,
            PlanFeature.ADVANCED_REPORTS,
        }),
        highlights=(
            "Todos os recursos do Pro",
            "Módulo de Frota",
            "Relatórios Avançados",
        ),
    ),
}


def get_plan_details(plan: PlanTier | str) -> PlanDetails:
    """Тариф по коду; неизвестный код -> ValueError."""
    return PLANS[PlanTier(plan)]


def has_feature(plan: PlanTier | str, feature: PlanFeature) -> bool:
    return feature in get_plan_details(plan).features


def require_feature(account: AccountContext, feature: PlanFeature) -> None:
    """
    Проверяет, что модуль доступен на плане аккаунта.

    Raises:
        FeatureNotAvailableError: модуль не входит в план
    """
    if not has_feature(account.plan, feature):
        raise FeatureNotAvailableError(feature=feature.value, plan=account.plan.value)
