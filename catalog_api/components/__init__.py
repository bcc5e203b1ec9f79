# ==============================================================================
# COMPONENTS PACKAGE INITIALIZATION
# ==============================================================================

"""
Polymorphic Components
======================

- registry: Process-wide declarations of component properties per model
- merge: Batched resolution of component link rows into concrete rows
"""

from catalog_api.components.registry import (
    ComponentMetadata,
    ComponentRegistry,
    component_registry,
)

__all__ = [
    "ComponentMetadata",
    "ComponentRegistry",
    "component_registry",
]
