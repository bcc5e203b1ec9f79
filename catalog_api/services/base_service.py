# ==============================================================================
# BASE SERVICE - Generic Data Service
# ==============================================================================
# CRUD operations over one collection with ``include`` resolution:
#   parse include -> relation tree -> eager-loading query -> components
# ==============================================================================

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from pydantic import BaseModel

from catalog_api.components.merge import ComponentMergeEngine
from catalog_api.components.registry import ComponentRegistry, component_registry
from catalog_api.core.constants import DatabaseConstants, ErrorMessages
from catalog_api.core.exceptions import AlreadyExistsError, BadRequestError
from catalog_api.database.adapters.base_adapter import BaseDatabaseAdapter
from catalog_api.relations.include_parser import IncludeParser
from catalog_api.relations.relation_tree import (
    RelationTree,
    build_relation_tree,
    tree_requests_components,
)

logger = logging.getLogger(__name__)

Entity = Dict[str, Any]
Payload = Union[BaseModel, Mapping[str, Any]]


class BaseService:
    """
    Generic service for a single collection.

    Results are serialized dictionaries: columns, the relations named in
    ``include`` and the requested components. Missing rows are reported
    as ``None`` / ``False`` / ``0``; deciding whether that is an error is
    left to the caller.

    Attributes:
        _adapter: Database adapter for operations
        _collection_name: Table/collection identifier
        _registry: Component declarations consulted for ``include``
        _include_parser: Validator of the ``include`` parameter
        _merge_engine: Batched component resolution
        resource_name: Display name used in error messages
        unique_fields: Columns checked for duplicates before writes

    Example:
        >>> service = BaseService(adapter, "products")
        >>> await service.find_by_id(1, include="categories,fullPrice")
        {'id': 1, 'title': '...', 'categories': [...], 'full_price': {...}}
    """

    resource_name = "Record"
    unique_fields: Tuple[str, ...] = ()

    def __init__(
        self,
        adapter: BaseDatabaseAdapter,
        collection_name: str,
        registry: Optional[ComponentRegistry] = None,
        include_parser: Optional[IncludeParser] = None,
    ) -> None:
        """
        Initialize service.

        Args:
            adapter: Database adapter instance
            collection_name: Table/collection name
            registry: Component registry (process-wide one by default)
            include_parser: Parser with custom limits (settings by default)
        """
        self._adapter = adapter
        self._collection_name = collection_name
        self._registry = registry if registry is not None else component_registry
        self._include_parser = include_parser or IncludeParser()
        self._merge_engine = ComponentMergeEngine(
            fetch_many=self._fetch_components,
            registry=self._registry,
        )

    @property
    def entity_type(self) -> type:
        """Model class backing the collection."""
        return self._adapter.model_for(self._collection_name)

    # ==========================================================================
    # INCLUDE RESOLUTION
    # ==========================================================================

    def _relations(self, include: Any) -> Tuple[Optional[List[str]], Optional[RelationTree]]:
        """
        Validate ``include`` and build the eager-load tree for it.

        Raises:
            ValidationError: If ``include`` is malformed
            BadRequestError: If ``include`` names the raw component links
        """
        paths = self._include_parser.parse(include)
        for path in paths or ():
            if DatabaseConstants.COMPONENTS_RELATION in path.split(self._include_parser.nested_separator):
                raise BadRequestError(
                    message=ErrorMessages.INTERNAL_RELATION.format(name=DatabaseConstants.COMPONENTS_RELATION),
                    details={"include": path},
                )
        tree = build_relation_tree(paths, self.entity_type, self._registry)
        return paths, tree

    async def _fetch_components(self, target: type, ids: List[Any]) -> List[Entity]:
        collection = self._adapter.collection_for(target)
        rows = await self._adapter.find_by_ids(collection, ids)
        return [row.to_dict() for row in rows]

    async def _serialize(
        self,
        records: Sequence[Any],
        paths: Optional[List[str]],
        tree: Optional[RelationTree],
    ) -> List[Entity]:
        entities = [record.to_dict(tree) for record in records]
        if tree_requests_components(tree):
            await self._merge_engine.resolve_many(entities, self.entity_type, paths)
        return entities

    async def _serialize_one(
        self,
        record: Optional[Any],
        paths: Optional[List[str]],
        tree: Optional[RelationTree],
    ) -> Optional[Entity]:
        if record is None:
            return None
        entities = await self._serialize([record], paths, tree)
        return entities[0]

    @staticmethod
    def _payload(data: Payload) -> Dict[str, Any]:
        if isinstance(data, BaseModel):
            return data.model_dump(exclude_unset=True)
        return dict(data)

    async def _ensure_unique(self, data: Dict[str, Any], exclude_id: Any = None) -> None:
        """
        Reject values of ``unique_fields`` already held by another record.

        Args:
            data: Payload about to be written
            exclude_id: Record being updated, which may keep its own values

        Raises:
            AlreadyExistsError: On the first duplicated field
        """
        for field in self.unique_fields:
            value = data.get(field)
            if value is None:
                continue
            existing = await self._adapter.find_one(self._collection_name, {field: value})
            if existing is not None and existing.id != exclude_id:
                raise AlreadyExistsError(
                    message=ErrorMessages.RESOURCE_ALREADY_EXISTS.format(
                        resource=self.resource_name, field=field, value=value
                    ),
                    resource_type=self.resource_name,
                    details={"field": field},
                )

    # ==========================================================================
    # READ OPERATIONS
    # ==========================================================================

    async def find_all(
        self,
        include: Any = None,
        filters: Optional[Dict[str, Any]] = None,
        sort_by: Optional[str] = None,
        sort_order: str = "asc",
        skip: int = 0,
        limit: Optional[int] = None,
    ) -> List[Entity]:
        """
        Retrieve all entities, optionally with relations and components.

        Args:
            include: Raw ``include`` parameter (``"categories,fullPrice"``)
            filters: Field-value pairs for equality filtering
            sort_by: Sort field
            sort_order: Sort direction
            skip: Records to skip
            limit: Maximum records (None for all)

        Returns:
            Serialized entities

        Raises:
            ValidationError: If ``include`` is malformed
        """
        paths, tree = self._relations(include)

        records = await self._adapter.get_all(
            self._collection_name,
            skip=skip,
            limit=limit,
            filters=filters,
            sort_by=sort_by,
            sort_order=sort_order,
            relations=tree,
        )
        return await self._serialize(records, paths, tree)

    async def find_by_id(self, id: Any, include: Any = None) -> Optional[Entity]:
        """
        Retrieve one entity by primary key.

        Returns:
            Serialized entity, or None when no row matches ``id``
        """
        paths, tree = self._relations(include)
        record = await self._adapter.get_by_id(self._collection_name, id, relations=tree)
        return await self._serialize_one(record, paths, tree)

    async def find_by(
        self,
        filters: Dict[str, Any],
        include: Any = None,
    ) -> List[Entity]:
        """Retrieve all entities matching equality filters."""
        return await self.find_all(include=include, filters=filters)

    async def find_one_by(
        self,
        filters: Dict[str, Any],
        include: Any = None,
    ) -> Optional[Entity]:
        """Retrieve the first entity matching equality filters."""
        paths, tree = self._relations(include)
        record = await self._adapter.find_one(self._collection_name, filters, relations=tree)
        return await self._serialize_one(record, paths, tree)

    # ==========================================================================
    # WRITE OPERATIONS
    # ==========================================================================

    async def create(self, data: Payload) -> Entity:
        """
        Create a new entity.

        Args:
            data: Creation schema or plain mapping

        Returns:
            Persisted entity including its generated id

        Raises:
            AlreadyExistsError: If a unique field is already taken
        """
        payload = self._payload(data)
        await self._ensure_unique(payload)
        record = await self._adapter.create(self._collection_name, payload)
        logger.info(f"Created {self._collection_name} record {record.id}")
        return record.to_dict()

    async def update(self, id: Any, data: Payload) -> Optional[Entity]:
        """
        Apply a partial update.

        Returns:
            Refreshed entity, or None when no row matches ``id``

        Raises:
            AlreadyExistsError: If a unique field is taken by another record
        """
        if not await self.exists(id):
            return None
        payload = self._payload(data)
        await self._ensure_unique(payload, exclude_id=id)
        record = await self._adapter.update(self._collection_name, id, payload)
        if record is None:
            return None
        logger.info(f"Updated {self._collection_name} record {id}")
        return record.to_dict()

    async def delete(self, id: Any) -> bool:
        """
        Delete an entity by primary key.

        Returns:
            True if a row was removed, False if ``id`` matched nothing
        """
        deleted = await self._adapter.delete(self._collection_name, id)
        if deleted:
            logger.info(f"Deleted {self._collection_name} record {id}")
        return deleted

    # ==========================================================================
    # QUERY OPERATIONS
    # ==========================================================================

    async def exists(self, id: Any) -> bool:
        """Check if entity exists."""
        return await self._adapter.exists(self._collection_name, {"id": id})

    async def exists_by(self, filters: Dict[str, Any]) -> bool:
        return await self._adapter.exists(self._collection_name, filters)

    async def count(
        self,
        filters: Optional[Dict[str, Any]] = None,
    ) -> int:
        """Count entities matching filters."""
        return await self._adapter.count(self._collection_name, filters)
