# reboque360/api/routes/__init__.py
"""
Роутеры HTTP API (подключаются с префиксом /api/v1).
"""

from reboque360.api.routes.accounts import router as accounts_router
from reboque360.api.routes.finance import router as finance_router
from reboque360.api.routes.fleet import router as fleet_router
from reboque360.api.routes.geo import router as geo_router
from reboque360.api.routes.quotes import router as quotes_router
from reboque360.api.routes.services import router as services_router

ROUTERS = (
    accounts_router,
    geo_router,
    quotes_router,
    services_router,
    finance_router,
    fleet_router,
)

__all__ = ["ROUTERS"]
