# ==============================================================================
# COMPONENT REGISTRY TESTS
# ==============================================================================

from catalog_api.components.registry import (
    ComponentMetadata,
    ComponentRegistry,
    component_registry,
)
from catalog_api.domain_models import (
    CardTagsComponent,
    Category,
    FullPriceComponent,
    Product,
)


class Owner:
    pass


class Target:
    pass


def _metadata(property_key: str = "full_price", field: str = "fullPrice") -> ComponentMetadata:
    return ComponentMetadata(
        property_key=property_key,
        field=field,
        component_type="products.full-price",
        target=Target,
    )


class TestComponentRegistry:
    """Tests for registration and lookup."""

    def test_unknown_type_has_no_components(self):
        """Lookup of a never registered type is empty."""
        registry = ComponentRegistry()
        assert registry.lookup(Owner) == []
        assert registry.lookup(None) == []
        assert registry.has_components(Owner) is False

    def test_registrations_accumulate_in_order(self):
        """Entries for the same type accumulate without de-duplication."""
        registry = ComponentRegistry()
        first = _metadata()
        second = _metadata("card_tags", "cardTags")
        registry.register(Owner, first)
        registry.register(Owner, second)
        registry.register(Owner, first)

        assert registry.lookup(Owner) == [first, second, first]
        assert registry.fields(Owner) == ["fullPrice", "cardTags", "fullPrice"]
        assert registry.property_keys(Owner) == ["full_price", "card_tags", "full_price"]

    def test_lookup_returns_a_copy(self):
        """Mutating a lookup result leaves the registry unchanged."""
        registry = ComponentRegistry()
        registry.register(Owner, _metadata())

        entries = registry.lookup(Owner)
        entries.clear()

        assert len(registry.lookup(Owner)) == 1

    def test_match_by_field_or_property_key(self):
        """Both the field and the property key identify a component."""
        registry = ComponentRegistry()
        metadata = _metadata()
        registry.register(Owner, metadata)

        assert registry.match(Owner, "fullPrice") == [metadata]
        assert registry.match(Owner, "full_price") == [metadata]
        assert registry.match(Owner, "categories") == []
        assert registry.is_component(Owner, "fullPrice") is True
        assert registry.is_component(None, "fullPrice") is False

    def test_cache_key(self):
        """Batched lookups are keyed by component type and field."""
        assert _metadata().cache_key == ("products.full-price", "fullPrice")


class TestCatalogDeclarations:
    """Tests for the declarations made by the catalog models."""

    def test_product_components(self):
        entries = {m.field: m for m in component_registry.lookup(Product)}
        assert entries["fullPrice"].property_key == "full_price"
        assert entries["fullPrice"].component_type == "products.full-price"
        assert entries["fullPrice"].target is FullPriceComponent
        assert entries["cardTags"].target is CardTagsComponent

    def test_category_components(self):
        assert component_registry.fields(Category) == ["cardTags"]
