# ==============================================================================
# DATABASE FACTORY - Catalog Adapter Lifecycle
# ==============================================================================
# One cached adapter per database type, connected at startup and
# preloaded with the catalog collections
# ==============================================================================

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Tuple, Type

from catalog_api.core.constants import DatabaseConstants
from catalog_api.core.exceptions import DatabaseError
from catalog_api.core.settings import DatabaseType, settings
from catalog_api.database.adapters.base_adapter import BaseDatabaseAdapter
from catalog_api.database.adapters.postgresql_adapter import PostgreSQLAdapter
from catalog_api.database.adapters.sql_adapter import SQLAlchemyAdapter
from catalog_api.database.adapters.sqlite_adapter import SQLiteAdapter

logger = logging.getLogger(__name__)

ADAPTERS: Dict[DatabaseType, Type[SQLAlchemyAdapter]] = {
    DatabaseType.SQLITE: SQLiteAdapter,
    DatabaseType.POSTGRESQL: PostgreSQLAdapter,
}


def catalog_collections() -> List[Tuple[str, type]]:
    """Collection name -> model pairs served by the catalog."""
    from catalog_api.domain_models import (
        CardTagsComponent,
        Category,
        CategoryComponent,
        FullPriceComponent,
        Product,
        ProductComponent,
    )

    return [
        (DatabaseConstants.PRODUCTS_COLLECTION, Product),
        (DatabaseConstants.CATEGORIES_COLLECTION, Category),
        (DatabaseConstants.PRODUCT_COMPONENTS_COLLECTION, ProductComponent),
        (DatabaseConstants.CATEGORY_COMPONENTS_COLLECTION, CategoryComponent),
        (DatabaseConstants.FULL_PRICES_COLLECTION, FullPriceComponent),
        (DatabaseConstants.CARD_TAGS_COLLECTION, CardTagsComponent),
    ]


class DatabaseFactory:
    """
    Creates, caches and tears down the catalog database adapters.

    Example:
        >>> await DatabaseFactory.initialize()
        >>> adapter = DatabaseFactory.get_adapter()
        >>> product = await adapter.get_by_id("products", 1)
        >>> await DatabaseFactory.shutdown()
    """

    _instances: Dict[DatabaseType, BaseDatabaseAdapter] = {}

    @classmethod
    def create_adapter(
        cls,
        db_type: Optional[DatabaseType] = None,
        database_url: Optional[str] = None,
    ) -> BaseDatabaseAdapter:
        """
        Return the cached adapter for ``db_type``, creating it on first use.

        Args:
            db_type: Database type (defaults to settings.DATABASE_TYPE)
            database_url: Connection URL overriding the settings

        Raises:
            ValueError: If the database type has no adapter
        """
        db_type = db_type or settings.DATABASE_TYPE

        if db_type in cls._instances:
            return cls._instances[db_type]

        adapter_class = ADAPTERS.get(db_type)
        if adapter_class is None:
            raise ValueError(f"Unsupported database type: {db_type}")

        adapter = adapter_class(database_url)
        cls._instances[db_type] = adapter
        logger.info(f"Created {adapter_class.backend_name} adapter")
        return adapter

    @classmethod
    async def initialize(
        cls,
        db_type: Optional[DatabaseType] = None,
        database_url: Optional[str] = None,
    ) -> BaseDatabaseAdapter:
        """
        Connect the adapter and register the catalog collections.

        Raises:
            DatabaseError: If the connection or schema setup fails
        """
        adapter = cls.create_adapter(db_type, database_url)

        try:
            await adapter.connect()
        except DatabaseError:
            raise
        except Exception as e:
            logger.error(f"Database initialization failed: {e}")
            raise DatabaseError(f"Failed to initialize database: {e}") from e

        for collection, model in catalog_collections():
            adapter.register_model(collection, model)

        logger.info(f"Database ready: {db_type or settings.DATABASE_TYPE}")
        return adapter

    @classmethod
    def get_adapter(cls, db_type: Optional[DatabaseType] = None) -> BaseDatabaseAdapter:
        """
        Raises:
            RuntimeError: If ``initialize`` was not called
        """
        db_type = db_type or settings.DATABASE_TYPE
        if db_type not in cls._instances:
            raise RuntimeError(
                f"Database adapter for {db_type} not initialized. "
                f"Call DatabaseFactory.initialize() first."
            )
        return cls._instances[db_type]

    @classmethod
    def is_initialized(cls, db_type: Optional[DatabaseType] = None) -> bool:
        return (db_type or settings.DATABASE_TYPE) in cls._instances

    @classmethod
    async def health_check(cls, db_type: Optional[DatabaseType] = None) -> bool:
        """False when the adapter is missing or its ping fails."""
        if not cls.is_initialized(db_type):
            return False
        return await cls.get_adapter(db_type).health_check()

    @classmethod
    async def shutdown(cls) -> None:
        """Disconnect every cached adapter and clear the cache."""
        for db_type, adapter in cls._instances.items():
            try:
                await adapter.disconnect()
            except Exception as e:
                logger.error(f"Error disconnecting {db_type}: {e}")
        cls._instances.clear()
        logger.info("Database connections closed")

    @classmethod
    def reset(cls) -> None:
        """Forget cached adapters without disconnecting (tests)."""
        cls._instances.clear()
