"""
Server Database Adapter

Adapter for client/server databases reached over the network:
- MySQL via aiomysql (mysql+aiomysql://...)
- PostgreSQL via asyncpg (postgresql+asyncpg://...)

These use a real connection pool. Requests check a connection out for the
duration of one store operation and return it afterwards, so unrelated
requests never wait on each other unless the pool is exhausted.
"""

from typing import Any

from sqlalchemy.pool import AsyncAdaptedQueuePool

from shortener.core.setting import Settings
from shortener.db.interface import DatabaseAdapter


class ServerDatabaseAdapter(DatabaseAdapter):
    """Pooled adapter for MySQL and PostgreSQL backends."""

    def __init__(self, settings: Settings, dialect_name: str):
        super().__init__(settings)
        self.dialect_name = dialect_name

    def get_pool_class(self) -> type[AsyncAdaptedQueuePool]:
        return AsyncAdaptedQueuePool

    def get_connect_args(self) -> dict[str, Any]:
        return {}

    def get_engine_kwargs(self) -> dict[str, Any]:
        """
        Pool sizing comes from settings. pool_pre_ping drops connections the
        server closed while they sat idle in the pool.
        """
        return {
            "echo": self.settings.DB_ECHO,
            "pool_size": self.settings.DB_POOL_SIZE,
            "max_overflow": self.settings.DB_MAX_OVERFLOW,
            "pool_timeout": self.settings.DB_POOL_TIMEOUT,
            "pool_pre_ping": True,
        }

    def get_dialect_name(self) -> str:
        return self.dialect_name

