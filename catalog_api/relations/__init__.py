# ==============================================================================
# RELATIONS PACKAGE INITIALIZATION
# ==============================================================================

"""
Relation Loading
================

Turns the ``include`` query parameter into an eager-load plan:
- include_parser: Validates relation paths against the configured limits
- relation_tree: Builds the nested eager-load mapping
"""

from catalog_api.relations.include_parser import (
    IncludeParser,
    RelationPath,
    parse_include,
    split_path,
)
from catalog_api.relations.relation_tree import (
    build_relation_tree,
    related_model,
    tree_requests_components,
)

__all__ = [
    "IncludeParser",
    "RelationPath",
    "parse_include",
    "split_path",
    "build_relation_tree",
    "related_model",
    "tree_requests_components",
]
