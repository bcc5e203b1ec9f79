# ==============================================================================
# SQLITE ADAPTER - SQLAlchemy Async with aiosqlite
# ==============================================================================
# Lightweight database adapter for development and testing
# ==============================================================================

from __future__ import annotations

from typing import Any, Dict, Optional

from catalog_api.core.settings import settings
from catalog_api.database.adapters.sql_adapter import SQLAlchemyAdapter


class SQLiteAdapter(SQLAlchemyAdapter):
    """
    SQLite database adapter using SQLAlchemy async with aiosqlite.

    Ideal for development, testing, and small-scale deployments.
    Provides the same interface as PostgreSQLAdapter for seamless
    database switching.

    Example:
        >>> adapter = SQLiteAdapter("sqlite:///./catalog.db")
        >>> await adapter.connect()  # Creates tables automatically
        >>> adapter.register_model("products", Product)
        >>> product = await adapter.create("products", {"title": "Course"})
    """

    backend_name = "SQLite"

    def __init__(self, database_url: Optional[str] = None) -> None:
        # Ensure async driver is used
        url = database_url or settings.SQLITE_URL
        if "sqlite://" in url and "aiosqlite" not in url:
            url = url.replace("sqlite://", "sqlite+aiosqlite://")
        super().__init__(url)

    def _engine_options(self) -> Dict[str, Any]:
        return {"connect_args": {"check_same_thread": False}}
