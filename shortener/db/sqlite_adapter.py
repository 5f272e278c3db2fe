"""
SQLite Database Adapter

This module implements the DatabaseAdapter interface for SQLite.
All SQLite-specific configuration and behavior is encapsulated here.

SQLite is a file-based database that's perfect for:
- Local development
- Testing
- Single-instance deployments

Key characteristics:
- File-based (single .db file)
- No server required
- Single writer at a time (file locking); concurrent writers wait on the
  busy timeout instead of failing immediately
"""

from typing import Any

from sqlalchemy.pool import NullPool

from shortener.db.interface import DatabaseAdapter

# Seconds a connection waits on a locked database file before erroring
SQLITE_BUSY_TIMEOUT = 30


class SQLiteAdapter(DatabaseAdapter):
    """
    SQLite database adapter implementation.

    Every checkout opens a fresh aiosqlite connection (NullPool), so there is
    no connection shared between concurrent requests.
    """

    def get_pool_class(self) -> type[NullPool]:
        return NullPool

    def get_connect_args(self) -> dict[str, Any]:
        return {
            "check_same_thread": False,
            "timeout": SQLITE_BUSY_TIMEOUT,
        }

    def get_engine_kwargs(self) -> dict[str, Any]:
        return {
            "echo": self.settings.DB_ECHO
        }

    def get_dialect_name(self) -> str:
        return "sqlite"
