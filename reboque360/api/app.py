# reboque360/api/app.py
"""
FastAPI приложение Reboque360.

Endpoints (префикс /api/v1, аккаунт из заголовка X-Account-Id):
- GET/PUT /account, /account/settings - аккаунт и значения по умолчанию
- GET /plans - тарифные планы
- GET /geo/reverse - адрес по координатам
- /quotes... - расчёт, сохранение, правка, статус, отправка, выезд
- /services... - выезды
- /transactions, /finance/summary, /finance/monthly, /dashboard - финансы
- /vehicles... - автопарк
"""

from __future__ import annotations

import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from reboque360 import __version__
from reboque360.api.dependencies import (
    cleanup_dependencies,
    get_db,
    get_redis,
    init_dependencies,
)
from reboque360.api.routes import ROUTERS
from reboque360.api.schemas import ErrorResponse, HealthStatus
from reboque360.common.constants import TypeMsg
from reboque360.common.exceptions import (
    AddressNotFoundError,
    FeatureNotAvailableError,
    GeoProviderError,
    InvalidQuoteInputError,
    InvalidStatusTransitionError,
    NotFoundError,
    PersistenceError,
    QuotaExceededError,
    Reboque360Error,
    RouteNotFoundError,
    ServiceAlreadyExistsError,
)
from reboque360.common.localization import get_text
from reboque360.common.logger import log_error, log_info, log_warning
from reboque360.config import settings

_started_at = time.monotonic()

# Порядок важен: первый подходящий класс определяет HTTP статус
ERROR_STATUS_CODES: tuple[tuple[type[Reboque360Error], int], ...] = (
    (NotFoundError, 404),
    (ServiceAlreadyExistsError, 409),
    (QuotaExceededError, 402),
    (FeatureNotAvailableError, 403),
    (InvalidQuoteInputError, 422),
    (AddressNotFoundError, 422),
    (RouteNotFoundError, 422),
    (InvalidStatusTransitionError, 422),
    (GeoProviderError, 502),
    (PersistenceError, 500),
)


def status_code_for(exc: Reboque360Error) -> int:
    for error_class, status_code in ERROR_STATUS_CODES:
        if isinstance(exc, error_class):
            return status_code
    return 500


# === LIFESPAN ===

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Жизненный цикл приложения."""
    # Startup
    from reboque360.core.geo.service import GeoService
    from reboque360.infra.database import close_db, init_db
    from reboque360.infra.redis_client import close_redis, init_redis

    db = await init_db()

    redis = None
    if settings.redis.REDIS_ENABLED:
        try:
            redis = await init_redis()
        except Exception as e:
            await log_warning(f"Redis недоступен, кэш геокодирования отключён: {e}")

    await init_dependencies(db, redis, GeoService(redis=redis))
    await log_info(f"Reboque360 API {__version__} запущен", type_msg=TypeMsg.INFO)

    yield

    # Shutdown
    await cleanup_dependencies()
    if redis is not None:
        await close_redis()
    await close_db()


# === APP ===

app = FastAPI(
    title="Reboque360 API",
    description="Заявки на эвакуацию, выезды, финансы и автопарк.",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.api.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

for router in ROUTERS:
    app.include_router(router, prefix="/api/v1")


# === ERRORS ===

@app.exception_handler(Reboque360Error)
async def domain_error_handler(request: Request, exc: Reboque360Error) -> JSONResponse:
    """Доменная ошибка -> ErrorResponse с текстом на языке аккаунта."""
    status_code = status_code_for(exc)
    lang = getattr(request.state, "language", settings.system.DEFAULT_LANGUAGE)

    if status_code >= 500:
        await log_error(f"{request.method} {request.url.path}: {exc}")
    else:
        await log_info(f"{request.method} {request.url.path}: {exc}", type_msg=TypeMsg.DEBUG)

    body = ErrorResponse(
        error_code=exc.code,
        message=get_text(exc.code, lang, default=str(exc), **exc.params),
        details=exc.params or None,
    )
    return JSONResponse(status_code=status_code, content=body.model_dump())


# === HEALTH CHECK ===

@app.get("/health", response_model=HealthStatus, tags=["Health"])
async def health_check() -> HealthStatus:
    """Проверка здоровья сервиса и его зависимостей."""
    dependencies: dict[str, str] = {}

    try:
        db = get_db()
        db_ok = db.is_connected and await db.health_check()
    except RuntimeError:
        db_ok = False
    dependencies["database"] = "healthy" if db_ok else "unhealthy"

    redis = get_redis()
    if redis is None:
        dependencies["redis"] = "disabled"
    else:
        dependencies["redis"] = "healthy" if await redis.health_check() else "unhealthy"

    if not db_ok:
        status = "unhealthy"
    elif dependencies["redis"] == "unhealthy":
        status = "degraded"
    else:
        status = "healthy"

    return HealthStatus(
        service="reboque360_api",
        status=status,
        version=__version__,
        uptime_seconds=round(time.monotonic() - _started_at, 1),
        dependencies=dependencies,
    )
