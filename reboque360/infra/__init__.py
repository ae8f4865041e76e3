# reboque360/infra/__init__.py
"""
Инфраструктурный слой: PostgreSQL и Redis.
"""

from reboque360.infra.database import DatabaseManager, get_db
from reboque360.infra.redis_client import RedisClient, get_redis

__all__ = [
    "DatabaseManager",
    "get_db",
    "RedisClient",
    "get_redis",
]
