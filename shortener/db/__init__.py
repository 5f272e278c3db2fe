"""
Database module with abstraction layer.

This module provides:
- DatabaseAdapter interface: Abstract base class for database implementations
- SQLiteAdapter / ServerDatabaseAdapter: backend-specific engine configuration
- Engine and session factory construction from Settings
- UrlMapping: the persisted table model
"""

from shortener.db.interface import DatabaseAdapter
from shortener.db.models import UrlMapping
from shortener.db.session import create_engine, create_session_maker, get_database_adapter

__all__ = [
    "DatabaseAdapter",
    "UrlMapping",
    "create_engine",
    "create_session_maker",
    "get_database_adapter",
]
