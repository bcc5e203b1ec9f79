# ==============================================================================
# COMPONENT MERGE ENGINE TESTS
# ==============================================================================
# Batched component resolution on serialized entities
# ==============================================================================

import asyncio
from typing import Any, Dict, List

import pytest

from catalog_api.components.merge import ComponentMergeEngine
from catalog_api.components.registry import ComponentMetadata, ComponentRegistry


class Course:
    pass


class Topic:
    pass


class FullPrice:
    pass


class CardTags:
    pass


FULL_PRICE = ComponentMetadata(
    property_key="fullPrice",
    field="fullPrice",
    component_type="product.full-price",
    target=FullPrice,
)
CARD_TAGS = ComponentMetadata(
    property_key="cardTags",
    field="cardTags",
    component_type="cards.card-tags",
    target=CardTags,
)


def link(metadata: ComponentMetadata, cmp_id: int) -> Dict[str, Any]:
    return {
        "field": metadata.field,
        "component_type": metadata.component_type,
        "cmp_id": cmp_id,
    }


class CountingFetcher:
    """In-memory batched lookup recording every query."""

    def __init__(self, tables: Dict[type, Dict[int, Dict[str, Any]]]) -> None:
        self.tables = tables
        self.calls: List[tuple] = []

    async def __call__(self, target: type, ids: List[int]) -> List[Dict[str, Any]]:
        self.calls.append((target, list(ids)))
        rows = self.tables.get(target, {})
        return [dict(rows[i]) for i in ids if i in rows]


@pytest.fixture
def registry() -> ComponentRegistry:
    registry = ComponentRegistry()
    registry.register(Course, FULL_PRICE)
    registry.register(Course, CARD_TAGS)
    registry.register(Topic, CARD_TAGS)
    return registry


@pytest.fixture
def fetcher() -> CountingFetcher:
    return CountingFetcher({
        FullPrice: {
            42: {"id": 42, "price": 100},
            43: {"id": 43, "price": 250},
        },
        CardTags: {
            7: {"id": 7, "left_tag": "New"},
            8: {"id": 8, "left_tag": "Popular"},
        },
    })


def _related(entity_type, name):
    return {(Course, "topics"): Topic, (Course, "topic"): Topic}.get((entity_type, name))


@pytest.fixture
def engine(registry: ComponentRegistry, fetcher: CountingFetcher) -> ComponentMergeEngine:
    return ComponentMergeEngine(
        fetch_many=fetcher,
        registry=registry,
        related_type=_related,
    )


class TestSingleLevel:
    """Tests for components declared on the requested type."""

    @pytest.mark.asyncio
    async def test_resolves_requested_component(self, engine):
        """The link list is replaced by the concrete component row."""
        entity = {"id": 1, "components": [link(FULL_PRICE, 42)]}

        result = await engine.resolve_one(entity, Course, ["fullPrice"])

        assert result == {"id": 1, "fullPrice": {"id": 42, "price": 100}}

    @pytest.mark.asyncio
    async def test_unrequested_components_absent(self, engine, fetcher):
        """Only requested components are resolved and assigned."""
        entity = {"id": 1, "components": [link(FULL_PRICE, 42), link(CARD_TAGS, 7)]}

        await engine.resolve_one(entity, Course, ["cardTags"])

        assert entity == {"id": 1, "cardTags": {"id": 7, "left_tag": "New"}}
        assert fetcher.calls == [(CardTags, [7])]

    @pytest.mark.asyncio
    async def test_missing_link_yields_none(self, engine):
        """A requested component without link is None, not an error."""
        entity = {"id": 1, "components": [link(FULL_PRICE, 42)]}

        await engine.resolve_one(entity, Course, ["fullPrice", "cardTags"])

        assert entity["fullPrice"] == {"id": 42, "price": 100}
        assert entity["cardTags"] is None

    @pytest.mark.asyncio
    async def test_missing_target_row_yields_none(self, engine):
        entity = {"id": 1, "components": [link(FULL_PRICE, 999)]}

        await engine.resolve_one(entity, Course, ["fullPrice"])

        assert entity == {"id": 1, "fullPrice": None}

    @pytest.mark.asyncio
    async def test_entity_without_links(self, engine, fetcher):
        """No links: the list is removed and no component keys are set."""
        empty = {"id": 1, "components": []}
        missing = {"id": 2}

        await engine.resolve_many([empty, missing], Course, ["fullPrice"])

        assert empty == {"id": 1}
        assert missing == {"id": 2}
        assert fetcher.calls == []

    @pytest.mark.asyncio
    async def test_no_relations_discards_links(self, engine, fetcher):
        entity = {"id": 1, "components": [link(FULL_PRICE, 42)]}

        await engine.resolve_one(entity, Course, None)

        assert entity == {"id": 1}
        assert fetcher.calls == []

    @pytest.mark.asyncio
    async def test_link_matches_field_and_type(self, engine):
        """A link with the right field but another type is ignored."""
        foreign = {"field": "fullPrice", "component_type": "other.price", "cmp_id": 42}
        entity = {"id": 1, "components": [foreign]}

        await engine.resolve_one(entity, Course, ["fullPrice"])

        assert entity == {"id": 1, "fullPrice": None}

    @pytest.mark.asyncio
    async def test_none_and_empty_inputs(self, engine):
        assert await engine.resolve_one(None, Course, ["fullPrice"]) is None
        assert await engine.resolve_many([], Course, ["fullPrice"]) == []


class TestBatching:
    """Tests for the one-query-per-pair property."""

    @pytest.mark.asyncio
    async def test_shared_target_is_fetched_once(self, engine, fetcher):
        """Two entities referencing the same row cause one query."""
        first = {"id": 1, "components": [link(FULL_PRICE, 42)]}
        second = {"id": 2, "components": [link(FULL_PRICE, 42)]}

        await engine.resolve_many([first, second], Course, ["fullPrice"])

        assert fetcher.calls == [(FullPrice, [42])]
        assert first["fullPrice"] == {"id": 42, "price": 100}
        assert second["fullPrice"] == {"id": 42, "price": 100}

    @pytest.mark.asyncio
    async def test_one_query_per_pair(self, engine, fetcher):
        """Distinct ids of one pair share a single query."""
        entities = [
            {"id": 1, "components": [link(FULL_PRICE, 42), link(CARD_TAGS, 7)]},
            {"id": 2, "components": [link(FULL_PRICE, 43), link(CARD_TAGS, 8)]},
            {"id": 3, "components": [link(FULL_PRICE, 42)]},
        ]

        await engine.resolve_many(entities, Course, ["fullPrice", "cardTags"])

        assert sorted(fetcher.calls, key=lambda call: call[0].__name__) == [
            (CardTags, [7, 8]),
            (FullPrice, [42, 43]),
        ]
        assert entities[1]["fullPrice"]["price"] == 250
        assert entities[2]["cardTags"] is None

    @pytest.mark.asyncio
    async def test_pairs_are_fetched_concurrently(self, registry):
        """Queries of one level are in flight at the same time."""
        started = 0
        both_started = asyncio.Event()

        async def fetch(target, ids):
            nonlocal started
            started += 1
            if started == 2:
                both_started.set()
            await both_started.wait()
            return [{"id": i} for i in ids]

        engine = ComponentMergeEngine(fetch_many=fetch, registry=registry)
        entity = {"id": 1, "components": [link(FULL_PRICE, 42), link(CARD_TAGS, 7)]}

        await asyncio.wait_for(
            engine.resolve_one(entity, Course, ["fullPrice", "cardTags"]),
            timeout=1.0,
        )

        assert entity == {"id": 1, "fullPrice": {"id": 42}, "cardTags": {"id": 7}}

    @pytest.mark.asyncio
    async def test_query_failure_propagates(self, registry):
        async def fetch(target, ids):
            raise RuntimeError("connection lost")

        engine = ComponentMergeEngine(fetch_many=fetch, registry=registry)
        entity = {"id": 1, "components": [link(FULL_PRICE, 42)]}

        with pytest.raises(RuntimeError, match="connection lost"):
            await engine.resolve_one(entity, Course, ["fullPrice"])


class TestNested:
    """Tests for components reached through relations."""

    @pytest.mark.asyncio
    async def test_list_relation(self, engine, fetcher):
        """Children of every parent are resolved in one batch."""
        courses = [
            {"id": 1, "topics": [
                {"id": 10, "components": [link(CARD_TAGS, 7)]},
                {"id": 11, "components": []},
            ]},
            {"id": 2, "topics": [
                {"id": 12, "components": [link(CARD_TAGS, 8)]},
            ]},
        ]

        await engine.resolve_many(courses, Course, ["topics.cardTags"])

        assert fetcher.calls == [(CardTags, [7, 8])]
        assert courses[0]["topics"][0] == {"id": 10, "cardTags": {"id": 7, "left_tag": "New"}}
        assert courses[0]["topics"][1] == {"id": 11}
        assert courses[1]["topics"][0]["cardTags"]["left_tag"] == "Popular"

    @pytest.mark.asyncio
    async def test_single_object_relation(self, engine):
        course = {"id": 1, "topic": {"id": 10, "components": [link(CARD_TAGS, 8)]}}

        await engine.resolve_one(course, Course, ["topic.cardTags"])

        assert course == {"id": 1, "topic": {"id": 10, "cardTags": {"id": 8, "left_tag": "Popular"}}}

    @pytest.mark.asyncio
    async def test_levels_combined(self, engine, fetcher):
        """Own components and nested ones resolve level by level."""
        course = {
            "id": 1,
            "components": [link(FULL_PRICE, 43)],
            "topics": [{"id": 10, "components": [link(CARD_TAGS, 7)]}],
        }

        await engine.resolve_one(course, Course, ["fullPrice", "topics", "topics.cardTags"])

        assert course["fullPrice"] == {"id": 43, "price": 250}
        assert course["topics"] == [{"id": 10, "cardTags": {"id": 7, "left_tag": "New"}}]
        assert "components" not in course
        assert [call[0] for call in fetcher.calls] == [FullPrice, CardTags]

    @pytest.mark.asyncio
    async def test_missing_relation_is_skipped(self, engine, fetcher):
        course = {"id": 1, "topics": None}

        await engine.resolve_one(course, Course, ["topics.cardTags"])

        assert course == {"id": 1, "topics": None}
        assert fetcher.calls == []

    @pytest.mark.asyncio
    async def test_component_head_of_nested_path(self, engine, fetcher):
        """fullPrice.price resolves fullPrice on the owner."""
        course = {"id": 1, "components": [link(FULL_PRICE, 42)]}

        await engine.resolve_one(course, Course, ["fullPrice.price"])

        assert course == {"id": 1, "fullPrice": {"id": 42, "price": 100}}
        assert fetcher.calls == [(FullPrice, [42])]

    @pytest.mark.asyncio
    async def test_component_head_continues_on_property_key(self):
        """The next level is read from the property key, typed by the target."""
        registry = ComponentRegistry()
        price = ComponentMetadata(
            property_key="full_price",
            field="fullPrice",
            component_type="product.full-price",
            target=FullPrice,
        )
        registry.register(Course, price)
        registry.register(FullPrice, CARD_TAGS)
        fetcher = CountingFetcher({
            FullPrice: {42: {"id": 42, "price": 100, "components": [link(CARD_TAGS, 7)]}},
            CardTags: {7: {"id": 7, "left_tag": "New"}},
        })
        engine = ComponentMergeEngine(fetch_many=fetcher, registry=registry)
        course = {"id": 1, "components": [link(price, 42)]}

        await engine.resolve_one(course, Course, ["fullPrice.cardTags"])

        assert course == {
            "id": 1,
            "full_price": {"id": 42, "price": 100, "cardTags": {"id": 7, "left_tag": "New"}},
        }
        assert fetcher.calls == [(FullPrice, [42]), (CardTags, [7])]
