# ==============================================================================
# BASE DATABASE ADAPTER - Catalog Storage Contract
# ==============================================================================
# What the services need from a backend: collections addressed by name,
# CRUD, batched id lookups for components, and eager loading driven by a
# relation tree
# ==============================================================================

from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Generic, List, Optional, Sequence, TypeVar

T = TypeVar("T")

# Relation tree: relation name -> True | nested tree
Relations = Dict[str, Any]


class BaseDatabaseAdapter(ABC, Generic[T]):
    """
    Storage contract shared by the SQLite and PostgreSQL backends.

    Collections are addressed by name (``"products"``,
    ``"components_products_full_prices"``) and mapped onto model classes
    through :meth:`register_model`.

    Read operations accept ``relations``, a relation tree such as
    ``{"categories": {"products": True}, "components": True}``. Every
    association named in it is loaded together with the records; names
    that are not associations of the model are skipped.

    Example:
        >>> adapter = SQLiteAdapter()
        >>> await adapter.connect()
        >>> adapter.register_model("products", Product)
        >>> await adapter.get_by_id("products", 1, relations={"categories": True})
    """

    # ==========================================================================
    # LIFECYCLE
    # ==========================================================================

    @abstractmethod
    async def connect(self) -> None:
        """
        Create the engine and the catalog tables.

        Raises:
            DatabaseError: If the backend cannot be reached
        """

    @abstractmethod
    async def disconnect(self) -> None:
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Round-trip a trivial query; False instead of raising."""

    # ==========================================================================
    # COLLECTIONS
    # ==========================================================================

    @abstractmethod
    def register_model(self, name: str, model: type) -> None:
        pass

    @abstractmethod
    def model_for(self, collection: str) -> type:
        """
        Raises:
            ValueError: If nothing is registered under ``collection``
        """

    @abstractmethod
    def collection_for(self, model: type) -> str:
        """Reverse of :meth:`model_for`, used to locate component tables."""

    @abstractmethod
    @asynccontextmanager
    async def session(self) -> AsyncIterator[Any]:
        """Transactional scope: commit on success, roll back on error."""
        yield

    # ==========================================================================
    # CRUD
    # ==========================================================================

    @abstractmethod
    async def create(self, collection: str, data: Dict[str, Any]) -> T:
        """Insert one record and return it with its generated id."""

    @abstractmethod
    async def get_by_id(
        self,
        collection: str,
        id: Any,
        relations: Optional[Relations] = None,
    ) -> Optional[T]:
        pass

    @abstractmethod
    async def get_all(
        self,
        collection: str,
        skip: int = 0,
        limit: Optional[int] = None,
        filters: Optional[Dict[str, Any]] = None,
        sort_by: Optional[str] = None,
        sort_order: str = "asc",
        relations: Optional[Relations] = None,
    ) -> List[T]:
        """
        List records of a collection.

        Args:
            collection: Collection name
            skip: Records to skip
            limit: Maximum records (None for all)
            filters: Field-value pairs for equality filtering
            sort_by: Sort field; primary key order when missing or unknown
            sort_order: ``"asc"`` or ``"desc"``
            relations: Relation tree to eager-load
        """

    @abstractmethod
    async def find_by_ids(self, collection: str, ids: Sequence[Any]) -> List[T]:
        """
        Batched lookup: one ``WHERE id IN (...)`` query.

        Ids without a row are absent from the result; order is not
        guaranteed.
        """

    @abstractmethod
    async def update(self, collection: str, id: Any, data: Dict[str, Any]) -> Optional[T]:
        """Apply ``data`` to an existing record; None when ``id`` is unknown."""

    @abstractmethod
    async def delete(self, collection: str, id: Any) -> bool:
        """True if a record was removed."""

    # ==========================================================================
    # QUERIES
    # ==========================================================================

    @abstractmethod
    async def count(self, collection: str, filters: Optional[Dict[str, Any]] = None) -> int:
        pass

    @abstractmethod
    async def exists(self, collection: str, filters: Dict[str, Any]) -> bool:
        pass

    @abstractmethod
    async def find_one(
        self,
        collection: str,
        filters: Dict[str, Any],
        relations: Optional[Relations] = None,
    ) -> Optional[T]:
        """First record matching ``filters``, or None."""
