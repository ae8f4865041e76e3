# reboque360/config/loader.py
"""
Загрузчик конфигурации проекта.
Единственный источник истины: config/config.json.
Секретные данные переопределяются из переменных окружения.
"""

from __future__ import annotations

import json
import os
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# =============================================================================
# ОПРЕДЕЛЕНИЕ ПУТЕЙ
# =============================================================================

def get_project_root() -> Path:
    """Возвращает корневую директорию проекта."""
    return Path(__file__).parent.parent.parent


def get_config_path() -> Path:
    """Возвращает путь к файлу конфигурации."""
    return get_project_root() / "config" / "config.json"


def load_config_json(path: Path | None = None) -> dict[str, Any]:
    """Загружает config.json и возвращает словарь без ключей-комментариев."""
    config_path = path or get_config_path()
    if not config_path.exists():
        raise FileNotFoundError(f"Файл конфигурации не найден: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        data = json.load(f)

    return {k: v for k, v in data.items() if not k.startswith("_comment_")}


# =============================================================================
# PYDANTIC МОДЕЛИ КОНФИГУРАЦИИ
# =============================================================================

class SystemSettings(BaseModel):
    """Системные настройки."""
    PROJECT_NAME: str = "reboque360"
    VERSION: str = "1.0.0"
    DEBUG: bool = True
    ENVIRONMENT: str = "development"
    DEFAULT_LANGUAGE: str = "pt"


class LoggingSettings(BaseModel):
    """Настройки логирования."""
    LOG_LEVEL: str = "DEBUG"
    LOG_TO_FILE: bool = False
    LOG_FILE_PATH: str = "logs/app.log"
    LOG_FORMAT: str = "colored"
    LOG_MAX_BYTES: int = 10485760


class GeoSettings(BaseModel):
    """Настройки геокодера (Nominatim) и маршрутизатора (OSRM)."""
    NOMINATIM_URL: str = "https://nominatim.openstreetmap.org"
    OSRM_URL: str = "https://router.project-osrm.org"
    COUNTRY_CODES: str = "br"
    ACCEPT_LANGUAGE: str = "pt-BR,pt;q=0.9"
    USER_AGENT: str = "reboque360/1.0"
    HTTP_TIMEOUT: float = 10.0
    GEOCODE_CACHE_TTL: int = 86400

    @field_validator("HTTP_TIMEOUT")
    @classmethod
    def positive_timeout(cls, v: float) -> float:
        """Таймаут обязателен: внешние вызовы не должны висеть."""
        if v <= 0:
            raise ValueError("HTTP_TIMEOUT должен быть > 0")
        return v


class DatabaseSettings(BaseModel):
    """Настройки PostgreSQL."""
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432
    DB_NAME: str = "reboque360"
    DB_USER: str = "postgres"
    DB_PASSWORD: str = ""
    DB_MIN_POOL_SIZE: int = 2
    DB_MAX_POOL_SIZE: int = 10
    DB_COMMAND_TIMEOUT: int = 60

    @field_validator("DB_PASSWORD", mode="before")
    @classmethod
    def get_from_env(cls, v: str) -> str:
        """Получает пароль из переменных окружения."""
        if not v:
            return os.getenv("DB_PASSWORD", "")
        return v

    @property
    def dsn(self) -> str:
        """DSN для подключения к PostgreSQL."""
        return (
            f"postgresql://{self.DB_USER}:{self.DB_PASSWORD}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        )


class RedisSettings(BaseModel):
    """Настройки Redis (кэш геокодирования)."""
    REDIS_ENABLED: bool = True
    REDIS_HOST: str = "localhost"
    REDIS_PORT: int = 6379
    REDIS_DB: int = 0
    REDIS_PASSWORD: str = ""
    REDIS_NAMESPACE: str = "reboque360"
    REDIS_MAX_CONNECTIONS: int = 20

    @field_validator("REDIS_PASSWORD", mode="before")
    @classmethod
    def get_from_env(cls, v: str) -> str:
        """Получает пароль из переменных окружения."""
        if not v:
            return os.getenv("REDIS_PASSWORD", "")
        return v

    @property
    def url(self) -> str:
        """URL для подключения к Redis."""
        auth = f":{self.REDIS_PASSWORD}@" if self.REDIS_PASSWORD else ""
        return f"redis://{auth}{self.REDIS_HOST}:{self.REDIS_PORT}/{self.REDIS_DB}"


class PricingSettings(BaseModel):
    """Значения по умолчанию для новых аккаунтов и расчётов."""
    DEFAULT_KM_VALUE: float = 5.50
    DEFAULT_MIN_CHARGE: float = 150.00
    DEFAULT_FUEL_PRICE: float = 5.89
    DEFAULT_RETURN_ADDRESS: str = ""
    CURRENCY: str = "BRL"
    MAINTENANCE_ALERT_KM: int = 5000
    PLACEHOLDER_CLIENT_NAME: str = "Novo Cliente"
    PLACEHOLDER_CLIENT_PHONE: str = "00000000000"


class PlanSettings(BaseModel):
    """Лимиты тарифных планов (None = без лимита)."""
    FREE_QUOTE_LIMIT: int | None = 10
    PRO_QUOTE_LIMIT: int | None = None
    PREMIUM_QUOTE_LIMIT: int | None = None


class ApiSettings(BaseModel):
    """Настройки HTTP API."""
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000
    CORS_ORIGINS: list[str] = Field(default_factory=lambda: ["*"])


# =============================================================================
# ГЛАВНЫЙ КЛАСС НАСТРОЕК
# =============================================================================

_SECTIONS: dict[str, type[BaseModel]] = {
    "system": SystemSettings,
    "logging": LoggingSettings,
    "geo": GeoSettings,
    "database": DatabaseSettings,
    "redis": RedisSettings,
    "pricing": PricingSettings,
    "plans": PlanSettings,
    "api": ApiSettings,
}

# Ключи, которые можно переопределить переменными окружения
_ENV_OVERRIDES: tuple[str, ...] = (
    "ENVIRONMENT",
    "LOG_LEVEL",
    "DB_HOST",
    "DB_PORT",
    "DB_NAME",
    "DB_USER",
    "REDIS_HOST",
    "REDIS_PORT",
    "API_PORT",
)


class Settings(BaseSettings):
    """
    Главный класс настроек приложения.
    Агрегирует все секции конфигурации.
    """
    system: SystemSettings = Field(default_factory=SystemSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    geo: GeoSettings = Field(default_factory=GeoSettings)
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    redis: RedisSettings = Field(default_factory=RedisSettings)
    pricing: PricingSettings = Field(default_factory=PricingSettings)
    plans: PlanSettings = Field(default_factory=PlanSettings)
    api: ApiSettings = Field(default_factory=ApiSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @classmethod
    def from_flat_dict(cls, data: dict[str, Any]) -> "Settings":
        """
        Раскладывает плоский словарь config.json по секциям.
        Каждый ключ попадает в секцию, у которой есть поле с таким именем.
        """
        merged = dict(data)
        for key in _ENV_OVERRIDES:
            env_value = os.getenv(key)
            if env_value is not None:
                merged[key] = env_value

        sections: dict[str, BaseModel] = {}
        for section_name, model in _SECTIONS.items():
            fields = {k: v for k, v in merged.items() if k in model.model_fields}
            sections[section_name] = model(**fields)

        return cls(**sections)

    @classmethod
    def from_config_json(cls, path: Path | None = None) -> "Settings":
        """Создаёт объект Settings из config.json."""
        return cls.from_flat_dict(load_config_json(path))


@lru_cache()
def get_settings() -> Settings:
    """
    Возвращает синглтон настроек приложения.
    Перед чтением конфига загружает .env из корня проекта.
    """
    from dotenv import load_dotenv

    env_path = get_project_root() / ".env"
    if env_path.exists():
        load_dotenv(env_path)

    return Settings.from_config_json()


settings = get_settings()
