# ==============================================================================
# RELATION TREE BUILDER - Eager-Load Plan
# ==============================================================================
# Converts validated relation paths into a nested mapping:
#   {"categories": {"products": True}, "components": True}
# ==============================================================================

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional, Sequence, Union

from sqlalchemy import inspect as sa_inspect

from catalog_api.components.registry import ComponentRegistry, component_registry
from catalog_api.core.constants import DatabaseConstants
from catalog_api.core.settings import settings
from catalog_api.relations.include_parser import RelationPath

logger = logging.getLogger(__name__)

RelationTree = Dict[str, Union[bool, "RelationTree"]]
RelatedTypeResolver = Callable[[Optional[type], str], Optional[type]]

LINK_RELATION = DatabaseConstants.COMPONENTS_RELATION


def related_model(entity_type: Optional[type], name: str) -> Optional[type]:
    """
    Declared target class of an ORM relationship, None when unknown.

    Example:
        >>> related_model(Product, "categories")
        <class 'catalog_api.domain_models.category.Category'>
    """
    if entity_type is None:
        return None
    mapper = sa_inspect(entity_type, raiseerr=False)
    if mapper is None or not hasattr(mapper, "relationships"):
        return None
    relationships = mapper.relationships
    if name not in relationships:
        return None
    return relationships[name].mapper.class_


def build_relation_tree(
    paths: Optional[Sequence[Union[str, RelationPath]]],
    entity_type: Optional[type] = None,
    registry: Optional[ComponentRegistry] = None,
    related_type: RelatedTypeResolver = related_model,
    nested_separator: Optional[str] = None,
) -> Optional[RelationTree]:
    """
    Build the nested eager-load mapping for a list of relation paths.

    Precedence for one key: an intermediate segment upgrades a leaf
    ``True`` to a mapping, while a leaf never replaces an existing
    mapping. Segments naming a registered component of the entity type
    at their level are left out and the link relation is marked instead.

    Args:
        paths: Validated relation paths (strings or RelationPath)
        entity_type: Root model class used for component detection
        registry: Component registry (process-wide one by default)
        related_type: Resolves the model class behind a relation name
        nested_separator: Segment separator for string paths

    Returns:
        Nested mapping, or None when nothing is to be loaded
    """
    if not paths:
        return None

    registry = registry if registry is not None else component_registry
    separator = nested_separator or settings.INCLUDE_NESTED_SEPARATOR
    tree: RelationTree = {}

    for path in paths:
        segments = path.segments if isinstance(path, RelationPath) else path.split(separator)
        _insert_path(tree, segments, entity_type, registry, related_type)

    logger.debug(f"Built relation tree {tree} for {paths}")
    return tree or None


def _insert_path(
    tree: RelationTree,
    segments: Sequence[str],
    entity_type: Optional[type],
    registry: ComponentRegistry,
    related_type: RelatedTypeResolver,
) -> None:
    node: Dict[str, Any] = tree
    current_type = entity_type
    last = len(segments) - 1

    for index, segment in enumerate(segments):
        if not segment:
            continue

        if registry.is_component(current_type, segment):
            if not isinstance(node.get(LINK_RELATION), dict):
                node[LINK_RELATION] = True
            return

        if index == last:
            node.setdefault(segment, True)
            return

        if not isinstance(node.get(segment), dict):
            node[segment] = {}
        node = node[segment]
        current_type = related_type(current_type, segment)


def tree_requests_components(tree: Optional[RelationTree]) -> bool:
    """Whether the link relation was marked anywhere in the tree."""
    if not tree:
        return False
    return any(
        key == LINK_RELATION or (isinstance(value, dict) and tree_requests_components(value))
        for key, value in tree.items()
    )
