# ==============================================================================
# DATABASE PACKAGE INITIALIZATION
# ==============================================================================
# Database Abstraction Layer with SQLite and PostgreSQL support
# ==============================================================================

"""
Database Module
===============

Provides a unified database abstraction layer supporting:
- SQLite (development/testing)
- PostgreSQL (production)

Key Components:
- Adapters: Database-specific implementations
- Factory: Dynamic adapter instantiation
"""

from catalog_api.database.factory import DatabaseFactory
from catalog_api.database.adapters.base_adapter import BaseDatabaseAdapter

__all__ = [
    "DatabaseFactory",
    "BaseDatabaseAdapter",
]
