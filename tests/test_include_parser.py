# ==============================================================================
# INCLUDE PARSER TESTS
# ==============================================================================
# Validation of the ``include`` query parameter
# ==============================================================================

import pytest

from catalog_api.core.exceptions import ValidationError
from catalog_api.relations.include_parser import (
    IncludeParser,
    RelationPath,
    parse_include,
    split_path,
)


class TestParseInclude:
    """Tests for accepted ``include`` values."""

    def test_absent_and_empty_values(self):
        """No relations requested for missing, empty or non-string input."""
        assert parse_include(None) is None
        assert parse_include("") is None
        assert parse_include(42) is None
        assert parse_include(["categories"]) is None

    def test_only_separators_and_spaces(self):
        """Input without any path after trimming means no relations."""
        assert parse_include(" , ,, ") is None

    def test_trims_and_keeps_order(self):
        """Paths are trimmed, empty ones dropped, order preserved."""
        result = parse_include(" fullPrice , categories.products,,cardTags ")
        assert result == ["fullPrice", "categories.products", "cardTags"]

    def test_duplicates_are_preserved(self):
        """Repeated paths are not de-duplicated."""
        assert parse_include("categories,categories") == ["categories", "categories"]

    def test_maximum_depth_is_accepted(self):
        """Three segments is the default maximum."""
        assert parse_include("a.b.c") == ["a.b.c"]

    def test_maximum_relation_count_is_accepted(self):
        """Ten paths is the default maximum."""
        value = ",".join(f"rel_{i}" for i in range(10))
        assert parse_include(value) == [f"rel_{i}" for i in range(10)]

    def test_underscores_and_digits(self):
        """Segments may contain digits and underscores."""
        assert parse_include("card_tags_2.item_1") == ["card_tags_2.item_1"]


class TestParseIncludeErrors:
    """Tests for rejected ``include`` values."""

    @pytest.mark.parametrize("value", ["a;b", "a'b", 'a"b', "a\\b"])
    def test_dangerous_characters(self, value: str):
        """Forbidden characters fail regardless of other validity."""
        with pytest.raises(ValidationError) as exc_info:
            parse_include(value)
        assert "invalid characters" in exc_info.value.message

    def test_dangerous_characters_checked_before_count(self):
        """Character check happens before the relation count check."""
        value = ",".join(["a"] * 20) + ";"
        with pytest.raises(ValidationError) as exc_info:
            parse_include(value)
        assert "invalid characters" in exc_info.value.message

    def test_too_many_relations(self):
        """More than ten paths fails."""
        value = ",".join(f"rel_{i}" for i in range(11))
        with pytest.raises(ValidationError) as exc_info:
            parse_include(value)
        assert "Found: 11" in exc_info.value.message

    def test_too_deep(self):
        """Four segments exceeds the default depth."""
        with pytest.raises(ValidationError) as exc_info:
            parse_include("a.b.c.d")
        assert "Found: 4 levels" in exc_info.value.message

    @pytest.mark.parametrize("value", ["categories-products", "full price", "cat/egory", "ñandú"])
    def test_invalid_path_characters(self, value: str):
        """Anything outside letters, digits, underscore and dots fails."""
        with pytest.raises(ValidationError) as exc_info:
            parse_include(value)
        assert "Invalid relation format" in exc_info.value.message

    def test_error_details(self):
        """Errors carry the offending input in their details."""
        with pytest.raises(ValidationError) as exc_info:
            parse_include("a.b.c.d")
        body = exc_info.value.to_dict()
        assert body["success"] is False
        assert body["error"]["code"] == "VALIDATION_ERROR"
        assert body["error"]["details"]["validation_errors"]["include"] == ["a.b.c.d"]
        assert exc_info.value.status_code == 400


class TestIncludeParser:
    """Tests for the configurable parser."""

    def test_custom_limits(self):
        """Limits can be overridden per parser."""
        parser = IncludeParser(max_depth=2, max_relations=2)
        assert parser.parse("a.b,c") == ["a.b", "c"]
        with pytest.raises(ValidationError):
            parser.parse("a.b.c")
        with pytest.raises(ValidationError):
            parser.parse("a,b,c")

    def test_custom_separators(self):
        """Separators can be overridden per parser."""
        parser = IncludeParser(separator="|", nested_separator="/")
        assert parser.parse("categories/products|fullPrice") == [
            "categories/products",
            "fullPrice",
        ]

    def test_custom_nested_separator_replaces_dot(self):
        """With another nested separator a dot is no longer accepted."""
        parser = IncludeParser(nested_separator="/")

        assert parser.parse_paths("categories/products")[0].segments == ("categories", "products")
        with pytest.raises(ValidationError) as exc_info:
            parser.parse("categories.products")
        assert "'/'" in exc_info.value.message
        assert exc_info.value.errors["include"] == "categories.products"

    def test_custom_nested_separator_depth(self):
        """Depth is counted on the configured separator."""
        parser = IncludeParser(nested_separator="/", max_depth=2)

        assert parser.parse("a/b") == ["a/b"]
        with pytest.raises(ValidationError):
            parser.parse("a/b/c")

    def test_typed_paths(self):
        """parse_paths returns RelationPath values."""
        paths = IncludeParser().parse_paths("categories.products,fullPrice")
        assert paths == [
            RelationPath(text="categories.products", segments=("categories", "products")),
            RelationPath(text="fullPrice", segments=("fullPrice",)),
        ]
        assert paths[0].depth == 2
        assert paths[0].head == "categories"
        assert paths[0].is_nested is True
        assert paths[1].is_nested is False

    def test_empty_segments_are_allowed(self):
        """Consecutive dots yield empty segments without failing."""
        paths = IncludeParser().parse_paths("categories..products")
        assert paths[0].segments == ("categories", "", "products")


class TestSplitPath:
    """Tests for the head/rest split helper."""

    def test_nested(self):
        assert split_path("categories.products.images") == ("categories", "products.images")

    def test_single(self):
        assert split_path("fullPrice") == ("fullPrice", None)

    def test_custom_separator(self):
        assert split_path("categories/products", "/") == ("categories", "products")
        assert split_path("categories.products", "/") == ("categories.products", None)
