# ==============================================================================
# COMPONENT MERGE ENGINE - Batched Component Resolution
# ==============================================================================
# Replaces the raw component link list of serialized entities with the
# concrete component rows, one query per (component_type, field) pair
# ==============================================================================

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence, Tuple

from catalog_api.components.registry import (
    ComponentMetadata,
    ComponentRegistry,
    component_registry,
)
from catalog_api.core.constants import DatabaseConstants
from catalog_api.core.settings import settings
from catalog_api.relations.include_parser import split_path
from catalog_api.relations.relation_tree import RelatedTypeResolver, related_model

logger = logging.getLogger(__name__)

Entity = Dict[str, Any]
FetchMany = Callable[[type, List[Any]], Awaitable[List[Entity]]]

LINK_RELATION = DatabaseConstants.COMPONENTS_RELATION


class ComponentMergeEngine:
    """
    Resolves requested components onto serialized entities.

    Entities are plain dicts as produced by ``SQLBase.to_dict``. Each may
    carry a ``components`` list of link rows
    (``{"cmp_id", "component_type", "field", "order"}``). After
    resolution the list is gone and every requested component property
    holds the concrete row or None.

    Args:
        fetch_many: Batched lookup ``(target_type, ids) -> rows``
        registry: Component registry (process-wide one by default)
        related_type: Resolves the declared type behind a relation name
        nested_separator: Separator of nested relation paths

    Example:
        >>> engine = ComponentMergeEngine(fetch_many=adapter_fetch)
        >>> await engine.resolve_one(
        ...     {"id": 1, "components": [
        ...         {"field": "fullPrice", "component_type": "products.full-price", "cmp_id": 42},
        ...     ]},
        ...     Product,
        ...     ["fullPrice"],
        ... )
        {'id': 1, 'full_price': {'id': 42, 'price': 100}}
    """

    def __init__(
        self,
        fetch_many: FetchMany,
        registry: Optional[ComponentRegistry] = None,
        related_type: RelatedTypeResolver = related_model,
        nested_separator: Optional[str] = None,
    ) -> None:
        self.fetch_many = fetch_many
        self.registry = registry if registry is not None else component_registry
        self.related_type = related_type
        self.nested_separator = nested_separator or settings.INCLUDE_NESTED_SEPARATOR

    # ==========================================================================
    # PUBLIC API
    # ==========================================================================

    async def resolve_one(
        self,
        entity: Optional[Entity],
        entity_type: Optional[type],
        relations: Optional[Sequence[str]],
    ) -> Optional[Entity]:
        """Resolve components of a single entity (None passes through)."""
        if entity is None:
            return None
        await self.resolve_many([entity], entity_type, relations)
        return entity

    async def resolve_many(
        self,
        entities: List[Entity],
        entity_type: Optional[type],
        relations: Optional[Sequence[str]],
    ) -> List[Entity]:
        """
        Resolve components of entities sharing one declared type.

        Paths without a separator are resolved at this level. Nested
        paths are grouped by their first segment and resolved on the
        entities reachable through it, one level after the other.

        Args:
            entities: Serialized entities, modified in place
            entity_type: Declared model class of the entities
            relations: Validated relation paths of the request

        Returns:
            The same list, for chaining

        Raises:
            Exception: Whatever the batched lookup raises
        """
        if not entities:
            return entities

        if not relations:
            for entity in entities:
                entity.pop(LINK_RELATION, None)
            return entities

        current: List[str] = []
        nested: Dict[str, List[str]] = {}
        for relation in relations:
            if not relation:
                continue
            head, rest = split_path(relation, self.nested_separator)
            if rest is None:
                current.append(relation)
            elif head and rest:
                nested.setdefault(head, []).append(rest)
                # fullPrice.price still requests fullPrice itself
                if self.registry.is_component(entity_type, head):
                    current.append(head)

        await self._merge_level(entities, entity_type, current)

        for head, suffixes in nested.items():
            for key, child_type in self._children(entity_type, head):
                children = _collect_children(entities, key)
                if children:
                    await self.resolve_many(children, child_type, suffixes)

        return entities

    # ==========================================================================
    # INTERNALS
    # ==========================================================================

    def _children(self, entity_type: Optional[type], name: str) -> List[Tuple[str, Optional[type]]]:
        """
        Entity keys holding the next level of ``name`` and their types.

        A relation is stored under its own name; a component under its
        property key, typed by the component target.
        """
        matched = self.registry.match(entity_type, name)
        if matched:
            return [(metadata.property_key, metadata.target) for metadata in matched]
        return [(name, self.related_type(entity_type, name))]

    def _requested(self, entity_type: Optional[type], names: Sequence[str]) -> List[ComponentMetadata]:
        return [
            metadata
            for metadata in self.registry.lookup(entity_type)
            if any(metadata.matches(name) for name in names)
        ]

    async def _merge_level(
        self,
        entities: List[Entity],
        entity_type: Optional[type],
        names: Sequence[str],
    ) -> None:
        requested = self._requested(entity_type, names) if names else []
        if not requested:
            for entity in entities:
                entity.pop(LINK_RELATION, None)
            return

        cache = await self._load_targets(entities, requested)

        for entity in entities:
            links = entity.pop(LINK_RELATION, None)
            if not links:
                continue
            for metadata in requested:
                link = _find_link(links, metadata)
                if link is None:
                    entity[metadata.property_key] = None
                    continue
                rows = cache.get(metadata.cache_key, {})
                entity[metadata.property_key] = rows.get(link.get("cmp_id"))

    async def _load_targets(
        self,
        entities: List[Entity],
        requested: List[ComponentMetadata],
    ) -> Dict[Tuple[str, str], Dict[Any, Entity]]:
        """One ``id IN (...)`` query per distinct (component_type, field) pair."""
        targets: Dict[Tuple[str, str], type] = {}
        ids: Dict[Tuple[str, str], List[Any]] = {}

        for metadata in requested:
            key = metadata.cache_key
            if key in targets:
                continue
            targets[key] = metadata.target
            referenced = []
            for entity in entities:
                link = _find_link(entity.get(LINK_RELATION) or (), metadata)
                if link is not None and link.get("cmp_id") is not None:
                    referenced.append(link["cmp_id"])
            ids[key] = list(dict.fromkeys(referenced))

        keys = [key for key in targets if ids[key]]
        if not keys:
            return {}

        logger.debug(
            "Resolving components: "
            + ", ".join(f"{key[0]}:{key[1]} -> {ids[key]}" for key in keys)
        )

        results = await asyncio.gather(
            *(self.fetch_many(targets[key], ids[key]) for key in keys)
        )

        return {
            key: {row["id"]: row for row in rows}
            for key, rows in zip(keys, results)
        }


def _find_link(links: Sequence[Entity], metadata: ComponentMetadata) -> Optional[Entity]:
    for link in links:
        if link.get("field") == metadata.field and link.get("component_type") == metadata.component_type:
            return link
    return None


def _collect_children(entities: List[Entity], name: str) -> List[Entity]:
    children: List[Entity] = []
    for entity in entities:
        value = entity.get(name)
        if isinstance(value, list):
            children.extend(child for child in value if isinstance(child, dict))
        elif isinstance(value, dict):
            children.append(value)
    return children
