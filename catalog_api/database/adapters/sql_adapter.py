# ==============================================================================
# SQL ADAPTER - SQLAlchemy Async Implementation
# ==============================================================================
# Shared implementation of the adapter contract for relational backends
# Eager loading of relation trees through chained selectinload options
# ==============================================================================

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, List, Optional, Sequence, Type

from sqlalchemy import and_, func, inspect as sa_inspect, select, text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import selectinload

from catalog_api.core.exceptions import AlreadyExistsError, DatabaseError
from catalog_api.core.settings import settings
from catalog_api.database.adapters.base_adapter import BaseDatabaseAdapter, Relations
from catalog_api.domain_models.base import SQLBase

logger = logging.getLogger(__name__)


class SQLAlchemyAdapter(BaseDatabaseAdapter[SQLBase]):
    """
    Relational adapter on top of SQLAlchemy's async ORM.

    Concrete backends only decide the connection URL and the engine
    options (see :meth:`_engine_options`).

    Attributes:
        _database_url: Async connection string
        _engine: SQLAlchemy async engine
        _session_factory: Session factory for creating sessions
        _model_registry: Mapping of collection names to model classes
    """

    backend_name = "SQL"

    def __init__(self, database_url: str) -> None:
        self._database_url = database_url
        self._engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker[AsyncSession]] = None
        self._model_registry: Dict[str, Type[SQLBase]] = {}

    @property
    def database_url(self) -> str:
        return self._database_url

    # ==========================================================================
    # MODEL REGISTRY
    # ==========================================================================

    def register_model(
        self,
        name: str,
        model: Type[SQLBase],
    ) -> None:
        """
        Register a SQLAlchemy model for table mapping.

        Args:
            name: Collection/table identifier
            model: SQLAlchemy model class
        """
        self._model_registry[name] = model
        logger.debug(f"Registered model '{name}' -> {model.__name__}")

    def model_for(self, collection: str) -> Type[SQLBase]:
        """
        Get registered model by collection name.

        Raises:
            ValueError: If model not registered
        """
        if collection not in self._model_registry:
            raise ValueError(
                f"Model '{collection}' not registered. "
                f"Available models: {list(self._model_registry.keys())}"
            )
        return self._model_registry[collection]

    def collection_for(self, model: type) -> str:
        for name, registered in self._model_registry.items():
            if registered is model:
                return name
        raise ValueError(f"Model {model.__name__} not registered")

    # ==========================================================================
    # LIFECYCLE METHODS
    # ==========================================================================

    def _engine_options(self) -> Dict[str, Any]:
        """Backend specific keyword arguments for ``create_async_engine``."""
        return {}

    async def connect(self) -> None:
        """
        Initialize database engine and create tables.

        Raises:
            DatabaseError: If the engine cannot be created or the schema
                cannot be applied
        """
        try:
            self._engine = create_async_engine(
                self._database_url,
                echo=settings.DEBUG,
                **self._engine_options(),
            )

            self._session_factory = async_sessionmaker(
                bind=self._engine,
                class_=AsyncSession,
                expire_on_commit=False,
                autoflush=False,
            )

            # Create tables for every model imported with the package
            import catalog_api.domain_models  # noqa: F401

            async with self._engine.begin() as conn:
                await conn.run_sync(SQLBase.metadata.create_all)

            logger.info(f"{self.backend_name} adapter connected successfully")

        except Exception as e:
            logger.error(f"Failed to connect to {self.backend_name}: {e}")
            raise DatabaseError(f"{self.backend_name} connection failed: {e}")

    async def disconnect(self) -> None:
        """Close database connections and dispose engine."""
        if self._engine:
            await self._engine.dispose()
            self._engine = None
            self._session_factory = None
            logger.info(f"{self.backend_name} adapter disconnected")

    async def health_check(self) -> bool:
        """
        Verify database connectivity.

        Returns:
            True if connection is healthy
        """
        try:
            async with self.session() as session:
                await session.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.warning(f"{self.backend_name} health check failed: {e}")
            return False

    # ==========================================================================
    # SESSION MANAGEMENT
    # ==========================================================================

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """
        Provide transactional session scope.

        Commits on successful exit, rolls back on exception.

        Raises:
            RuntimeError: If database not connected
        """
        if not self._session_factory:
            raise RuntimeError(
                "Database not connected. Call connect() first."
            )

        session: AsyncSession = self._session_factory()
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    # ==========================================================================
    # EAGER LOADING
    # ==========================================================================

    def _load_options(
        self,
        model: Type[SQLBase],
        relations: Optional[Relations],
        parent: Optional[Any] = None,
    ) -> List[Any]:
        """
        Translate a relation tree into chained ``selectinload`` options.

        Example:
            {"categories": {"products": True}} ->
                selectinload(Product.categories),
                selectinload(Product.categories).selectinload(Category.products)
        """
        if not relations:
            return []

        mapper = sa_inspect(model)
        options: List[Any] = []

        for name, nested in relations.items():
            if name not in mapper.relationships:
                logger.debug(f"Skipping unknown relation '{name}' on {model.__name__}")
                continue

            attribute = getattr(model, name)
            loader = parent.selectinload(attribute) if parent is not None else selectinload(attribute)
            options.append(loader)

            if isinstance(nested, dict):
                target = mapper.relationships[name].mapper.class_
                options.extend(self._load_options(target, nested, loader))

        return options

    def _conditions(self, model: Type[SQLBase], filters: Optional[Dict[str, Any]]) -> list:
        if not filters:
            return []
        return [
            getattr(model, key) == value
            for key, value in filters.items()
            if hasattr(model, key)
        ]

    # ==========================================================================
    # CRUD OPERATIONS
    # ==========================================================================

    async def create(
        self,
        collection: str,
        data: Dict[str, Any],
    ) -> SQLBase:
        """
        Create a new record.

        Raises:
            AlreadyExistsError: If the row violates a unique constraint
        """
        model = self.model_for(collection)

        try:
            async with self.session() as session:
                instance = model(**data)
                session.add(instance)
                await session.flush()
                await session.refresh(instance)
                return instance
        except IntegrityError as e:
            if not _is_unique_violation(e):
                raise
            logger.warning(f"Unique constraint violated in {collection}: {e.orig}")
            raise AlreadyExistsError(
                message=f"A {collection} record with the same unique value already exists",
                resource_type=collection,
            ) from e

    async def get_by_id(
        self,
        collection: str,
        id: Any,
        relations: Optional[Relations] = None,
    ) -> Optional[SQLBase]:
        """Retrieve record by primary key, eager-loading ``relations``."""
        model = self.model_for(collection)

        async with self.session() as session:
            return await session.get(
                model,
                id,
                options=self._load_options(model, relations),
            )

    async def get_all(
        self,
        collection: str,
        skip: int = 0,
        limit: Optional[int] = None,
        filters: Optional[Dict[str, Any]] = None,
        sort_by: Optional[str] = None,
        sort_order: str = "asc",
        relations: Optional[Relations] = None,
    ) -> List[SQLBase]:
        """Retrieve multiple records with filtering, sorting and eager loading."""
        model = self.model_for(collection)

        async with self.session() as session:
            query = select(model)

            # Apply filters
            conditions = self._conditions(model, filters)
            if conditions:
                query = query.where(and_(*conditions))

            # Apply sorting
            if sort_by and hasattr(model, sort_by):
                order_column = getattr(model, sort_by)
                if sort_order.lower() == "desc":
                    order_column = order_column.desc()
                query = query.order_by(order_column)
            else:
                query = query.order_by(model.id)

            # Apply pagination
            if skip:
                query = query.offset(skip)
            if limit is not None:
                query = query.limit(limit)

            options = self._load_options(model, relations)
            if options:
                query = query.options(*options)

            result = await session.execute(query)
            return list(result.scalars().all())

    async def find_by_ids(
        self,
        collection: str,
        ids: Sequence[Any],
    ) -> List[SQLBase]:
        """Retrieve all records whose primary key is in ``ids``."""
        if not ids:
            return []

        model = self.model_for(collection)

        async with self.session() as session:
            result = await session.execute(
                select(model).where(model.id.in_(list(ids)))
            )
            return list(result.scalars().all())

    async def update(
        self,
        collection: str,
        id: Any,
        data: Dict[str, Any],
    ) -> Optional[SQLBase]:
        """
        Update an existing record.

        Raises:
            AlreadyExistsError: If the new values violate a unique constraint
        """
        model = self.model_for(collection)

        try:
            async with self.session() as session:
                instance = await session.get(model, id)
                if not instance:
                    return None

                for key, value in data.items():
                    if hasattr(instance, key):
                        setattr(instance, key, value)

                await session.flush()
                await session.refresh(instance)
                return instance
        except IntegrityError as e:
            if not _is_unique_violation(e):
                raise
            logger.warning(f"Unique constraint violated in {collection}: {e.orig}")
            raise AlreadyExistsError(
                message=f"A {collection} record with the same unique value already exists",
                resource_type=collection,
            ) from e

    async def delete(
        self,
        collection: str,
        id: Any,
    ) -> bool:
        """Delete a record by ID."""
        model = self.model_for(collection)

        async with self.session() as session:
            instance = await session.get(model, id)
            if not instance:
                return False

            await session.delete(instance)
            return True

    # ==========================================================================
    # QUERY OPERATIONS
    # ==========================================================================

    async def count(
        self,
        collection: str,
        filters: Optional[Dict[str, Any]] = None,
    ) -> int:
        """Count records matching filters."""
        model = self.model_for(collection)

        async with self.session() as session:
            query = select(func.count()).select_from(model)

            conditions = self._conditions(model, filters)
            if conditions:
                query = query.where(and_(*conditions))

            result = await session.execute(query)
            return result.scalar() or 0

    async def exists(
        self,
        collection: str,
        filters: Dict[str, Any],
    ) -> bool:
        """Check if any record matches filters."""
        count = await self.count(collection, filters)
        return count > 0

    async def find_one(
        self,
        collection: str,
        filters: Dict[str, Any],
        relations: Optional[Relations] = None,
    ) -> Optional[SQLBase]:
        """Find a single record matching filters."""
        results = await self.get_all(
            collection,
            skip=0,
            limit=1,
            filters=filters,
            relations=relations,
        )
        return results[0] if results else None


def _is_unique_violation(error: IntegrityError) -> bool:
    # SQLite: "UNIQUE constraint failed", PostgreSQL: "violates unique constraint"
    return "unique" in str(error.orig).lower()
