# ==============================================================================
# COMPONENT REGISTRY - Polymorphic Component Declarations
# ==============================================================================
# Process-wide lookup table: entity type -> declared component properties
# Populated once at import time of the domain models, read-only afterwards
# ==============================================================================

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ComponentMetadata:
    """
    Declaration of one component-bearing property on an entity type.

    Attributes:
        property_key: Attribute name the resolved component is assigned to
        field: Field name stored on the component link rows
        component_type: Discriminator stored on the component link rows
        target: Model class holding the concrete component rows
    """

    property_key: str
    field: str
    component_type: str
    target: type

    @property
    def cache_key(self) -> tuple:
        """Identity of the batched lookup serving this declaration."""
        return (self.component_type, self.field)

    def matches(self, name: str) -> bool:
        """Whether a requested relation name refers to this component."""
        return name == self.field or name == self.property_key


class ComponentRegistry:
    """
    Static mapping from entity type to its declared components.

    Registrations for the same entity type accumulate in declaration
    order and are never de-duplicated.

    Example:
        >>> registry = ComponentRegistry()
        >>> registry.register(Product, ComponentMetadata(
        ...     property_key="full_price",
        ...     field="fullPrice",
        ...     component_type="products.full-price",
        ...     target=FullPriceComponent,
        ... ))
        >>> [m.field for m in registry.lookup(Product)]
        ['fullPrice']
    """

    def __init__(self) -> None:
        self._entries: Dict[type, List[ComponentMetadata]] = {}

    def register(self, entity_type: type, metadata: ComponentMetadata) -> None:
        """Append one declaration to the entity type's bucket."""
        self._entries.setdefault(entity_type, []).append(metadata)
        logger.debug(
            f"Registered component '{metadata.property_key}' "
            f"({metadata.component_type}) on {entity_type.__name__}"
        )

    def lookup(self, entity_type: Optional[type]) -> List[ComponentMetadata]:
        """All declarations for an entity type, empty when none were made."""
        if entity_type is None:
            return []
        return list(self._entries.get(entity_type, ()))

    def has_components(self, entity_type: Optional[type]) -> bool:
        return bool(self._entries.get(entity_type))

    def fields(self, entity_type: Optional[type]) -> List[str]:
        return [metadata.field for metadata in self.lookup(entity_type)]

    def property_keys(self, entity_type: Optional[type]) -> List[str]:
        return [metadata.property_key for metadata in self.lookup(entity_type)]

    def match(self, entity_type: Optional[type], name: str) -> List[ComponentMetadata]:
        """Declarations whose field or property key equals ``name``."""
        return [metadata for metadata in self.lookup(entity_type) if metadata.matches(name)]

    def is_component(self, entity_type: Optional[type], name: str) -> bool:
        return any(metadata.matches(name) for metadata in self.lookup(entity_type))


# Process-wide registry used by the domain models and services
component_registry = ComponentRegistry()
