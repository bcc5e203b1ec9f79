# ==============================================================================
# POSTGRESQL ADAPTER - SQLAlchemy Async with asyncpg
# ==============================================================================
# Production database adapter with connection pooling
# ==============================================================================

from __future__ import annotations

from typing import Any, Dict, Optional

from catalog_api.core.settings import settings
from catalog_api.database.adapters.sql_adapter import SQLAlchemyAdapter


class PostgreSQLAdapter(SQLAlchemyAdapter):
    """
    PostgreSQL database adapter using SQLAlchemy async with asyncpg.

    Pool sizing comes from the ``DB_POOL_*`` settings.

    Example:
        >>> adapter = PostgreSQLAdapter()
        >>> await adapter.connect()
    """

    backend_name = "PostgreSQL"

    def __init__(self, database_url: Optional[str] = None) -> None:
        super().__init__(database_url or settings.postgres_url)

    def _engine_options(self) -> Dict[str, Any]:
        return {
            "pool_size": settings.DB_POOL_SIZE,
            "max_overflow": settings.DB_MAX_OVERFLOW,
            "pool_timeout": settings.DB_POOL_TIMEOUT,
            "pool_recycle": settings.DB_POOL_RECYCLE,
            "pool_pre_ping": True,
        }
