"""
Database Engine and Session Management

This module builds the async SQLAlchemy engine and session factory from the
application settings, using a database adapter for backend-specific options.

Nothing is created at import time: the app factory calls these once at
startup with the resolved settings and hands the results to the mapping store.
"""

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from shortener.core.setting import Settings
from shortener.db.interface import DatabaseAdapter
from shortener.db.server_adapter import ServerDatabaseAdapter
from shortener.db.sqlite_adapter import SQLiteAdapter


def get_database_adapter(settings: Settings) -> DatabaseAdapter:
    """
    Pick the adapter matching the backend named in settings.DATABASE_URL.

    Raises:
        ValueError: If the URL names an unsupported backend
    """
    backend = make_url(settings.DATABASE_URL).get_backend_name()
    if backend == "sqlite":
        return SQLiteAdapter(settings)
    if backend in ("mysql", "postgresql"):
        return ServerDatabaseAdapter(settings, backend)
    raise ValueError(f"Unsupported database backend: {backend!r}")


def create_engine(settings: Settings) -> AsyncEngine:
    adapter = get_database_adapter(settings)
    return adapter.create_engine(settings.DATABASE_URL)


def create_session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """
    Create the async session factory bound to engine.

    Sessions are short-lived: one per store operation, opened with
    `async with` so the connection goes back to the pool on every exit path.
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,  # Prevents SQLAlchemy from expiring objects after commit
        autoflush=False,
    )
