# ==============================================================================
# RELATION TREE TESTS
# ==============================================================================
# Eager-load mapping built from validated relation paths
# ==============================================================================

from catalog_api.components.registry import ComponentMetadata, ComponentRegistry
from catalog_api.domain_models import Category, FullPriceComponent, Product
from catalog_api.relations.include_parser import IncludeParser
from catalog_api.relations.relation_tree import (
    build_relation_tree,
    related_model,
    tree_requests_components,
)


class TestTreeShape:
    """Tests for the plain nesting rules."""

    def test_empty_input(self):
        assert build_relation_tree(None) is None
        assert build_relation_tree([]) is None

    def test_flat_and_nested(self):
        """Intermediate segments become mappings, last segments leaves."""
        tree = build_relation_tree(["categories", "author.profile.avatar"])
        assert tree == {
            "categories": True,
            "author": {"profile": {"avatar": True}},
        }

    def test_nested_path_upgrades_leaf(self):
        """A deeper path turns an existing leaf into a mapping."""
        tree = build_relation_tree(["categories", "categories.products"])
        assert tree == {"categories": {"products": True}}

    def test_leaf_never_overwrites_mapping(self):
        """A later shallow path keeps the mapping created first."""
        tree = build_relation_tree(["categories.products", "categories"])
        assert tree == {"categories": {"products": True}}

    def test_sibling_nested_paths_merge(self):
        tree = build_relation_tree(["categories.products", "categories.author"])
        assert tree == {"categories": {"products": True, "author": True}}

    def test_empty_segments_are_skipped(self):
        assert build_relation_tree(["categories..products"]) == {
            "categories": {"products": True}
        }

    def test_idempotent(self):
        """Building twice from the same paths yields equal trees."""
        paths = ["categories.products", "categories", "fullPrice", "fullPrice"]
        first = build_relation_tree(paths, Product)
        second = build_relation_tree(paths, Product)
        assert first == second

    def test_accepts_typed_paths(self):
        """RelationPath values from the parser are accepted directly."""
        paths = IncludeParser().parse_paths("categories.products")
        assert build_relation_tree(paths) == {"categories": {"products": True}}


class TestComponentDetection:
    """Tests for component segments in the tree."""

    def test_component_replaced_by_link_relation(self):
        """Component names are left out and the link relation marked."""
        tree = build_relation_tree(["fullPrice", "categories"], Product)
        assert tree == {"components": True, "categories": True}
        assert tree_requests_components(tree) is True

    def test_property_key_is_detected(self):
        tree = build_relation_tree(["card_tags"], Product)
        assert tree == {"components": True}

    def test_several_components_mark_once(self):
        tree = build_relation_tree(["fullPrice", "cardTags"], Product)
        assert tree == {"components": True}

    def test_nested_component(self):
        """Components are detected on the model reached by the path."""
        tree = build_relation_tree(["categories.cardTags"], Product)
        assert tree == {"categories": {"components": True}}
        assert tree_requests_components(tree) is True

    def test_component_of_other_type_is_plain(self):
        """fullPrice is not declared on Category, so it stays a plain name."""
        tree = build_relation_tree(["categories.fullPrice"], Product)
        assert tree == {"categories": {"fullPrice": True}}
        assert tree_requests_components(tree) is False

    def test_unknown_relation_passes_through(self):
        tree = build_relation_tree(["somethingElse"], Product)
        assert tree == {"somethingElse": True}
        assert tree_requests_components(tree) is False

    def test_without_entity_type_no_detection(self):
        assert build_relation_tree(["fullPrice"]) == {"fullPrice": True}

    def test_custom_registry(self):
        class Owner:
            pass

        registry = ComponentRegistry()
        registry.register(
            Owner,
            ComponentMetadata(
                property_key="price",
                field="fullPrice",
                component_type="products.full-price",
                target=FullPriceComponent,
            ),
        )
        tree = build_relation_tree(["fullPrice", "tags"], Owner, registry=registry)
        assert tree == {"components": True, "tags": True}


class TestTreeHelpers:
    """Tests for model resolution and tree traversal helpers."""

    def test_related_model(self):
        assert related_model(Product, "categories") is Category
        assert related_model(Category, "products") is Product
        assert related_model(Product, "unknown") is None
        assert related_model(None, "categories") is None
        assert related_model(dict, "categories") is None

    def test_tree_requests_components_empty(self):
        assert tree_requests_components(None) is False
        assert tree_requests_components({}) is False
