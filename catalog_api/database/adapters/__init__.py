# ==============================================================================
# DATABASE ADAPTERS PACKAGE
# ==============================================================================

"""
Database Adapters
=================

Provides unified interface implementations for different databases:
- BaseDatabaseAdapter: Abstract interface definition
- SQLAlchemyAdapter: Shared SQLAlchemy async implementation
- SQLiteAdapter: SQLite using aiosqlite
- PostgreSQLAdapter: PostgreSQL using asyncpg
"""

from catalog_api.database.adapters.base_adapter import BaseDatabaseAdapter
from catalog_api.database.adapters.sql_adapter import SQLAlchemyAdapter
from catalog_api.database.adapters.sqlite_adapter import SQLiteAdapter
from catalog_api.database.adapters.postgresql_adapter import PostgreSQLAdapter

__all__ = [
    "BaseDatabaseAdapter",
    "SQLAlchemyAdapter",
    "SQLiteAdapter",
    "PostgreSQLAdapter",
]
