# ==============================================================================
# CONFTEST - Pytest Fixtures and Configuration
# ==============================================================================
# Shared fixtures for all tests
# ==============================================================================

from __future__ import annotations

import os
import sys
from decimal import Decimal
from typing import AsyncGenerator, Dict

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Set test environment before importing app
os.environ["ENVIRONMENT"] = "development"
os.environ["DEBUG"] = "false"
os.environ["DATABASE_TYPE"] = "sqlite"
os.environ["SQLITE_URL"] = "sqlite+aiosqlite:///./test_catalog.db"
os.environ["LOG_LEVEL"] = "WARNING"

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

TEST_DB_PATH = "./test_catalog.db"


def _remove_test_db() -> None:
    if os.path.exists(TEST_DB_PATH):
        try:
            os.remove(TEST_DB_PATH)
        except (PermissionError, OSError):
            pass


# ==============================================================================
# DATABASE FIXTURES
# ==============================================================================

@pytest_asyncio.fixture
async def adapter():
    """Connected SQLite adapter on a fresh database file."""
    from catalog_api.database.factory import DatabaseFactory

    DatabaseFactory.reset()
    _remove_test_db()

    db_adapter = await DatabaseFactory.initialize()

    yield db_adapter

    await DatabaseFactory.shutdown()
    DatabaseFactory.reset()
    _remove_test_db()


async def seed_catalog(db_adapter) -> Dict[str, int]:
    """
    Insert a small catalog and return the generated ids.

    - ``emergency`` and ``cardiology`` share one full price row
    - ``emergency`` also carries card tags
    - ``handbook`` has no components and no categories
    - ``medicine`` lists the two courses and carries its own card tags
    """
    from catalog_api.domain_models import (
        CardTagsComponent,
        Category,
        CategoryComponent,
        FullPriceComponent,
        Product,
        ProductComponent,
        ProductType,
    )

    async with db_adapter.session() as session:
        price = FullPriceComponent(price=Decimal("100.00"), discount_price=Decimal("80.00"))
        product_tags = CardTagsComponent(left_tag="New", right_tag="Online")
        category_tags = CardTagsComponent(left_tag="Popular")
        session.add_all([price, product_tags, category_tags])
        await session.flush()

        medicine = Category(document_id="cat_medicine", name="Medicine", slug="medicine")
        medicine.components = [
            CategoryComponent(
                cmp_id=category_tags.id,
                component_type="cards.card-tags",
                field="cardTags",
            ),
        ]

        emergency = Product(
            document_id="prod_emergency",
            title="Emergency Medicine",
            slug="emergency-medicine",
            order=1,
            sku="EM-001",
            vertical=["health"],
            type=ProductType.PROGRAMA_LARGO,
            categories=[medicine],
        )
        emergency.components = [
            ProductComponent(
                cmp_id=price.id,
                component_type="products.full-price",
                field="fullPrice",
                order=1,
            ),
            ProductComponent(
                cmp_id=product_tags.id,
                component_type="cards.card-tags",
                field="cardTags",
                order=2,
            ),
        ]

        cardiology = Product(
            document_id="prod_cardiology",
            title="Cardiology",
            slug="cardiology",
            order=2,
            sku="CA-001",
            vertical=["health"],
            type=ProductType.CURSO_CORTO,
            categories=[medicine],
        )
        cardiology.components = [
            ProductComponent(
                cmp_id=price.id,
                component_type="products.full-price",
                field="fullPrice",
                order=1,
            ),
        ]

        handbook = Product(
            document_id="prod_handbook",
            title="Clinical Handbook",
            slug="clinical-handbook",
            order=3,
            sku="BK-001",
            vertical=["health", "books"],
            type=ProductType.LIBRO,
        )

        session.add_all([medicine, emergency, cardiology, handbook])
        await session.flush()

        return {
            "emergency": emergency.id,
            "cardiology": cardiology.id,
            "handbook": handbook.id,
            "medicine": medicine.id,
            "price": price.id,
            "product_tags": product_tags.id,
            "category_tags": category_tags.id,
        }


@pytest_asyncio.fixture
async def catalog(adapter) -> Dict[str, int]:
    """Seeded catalog ids on the ``adapter`` database."""
    return await seed_catalog(adapter)


# ==============================================================================
# HTTP CLIENT FIXTURES
# ==============================================================================

@pytest_asyncio.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Create async HTTP client for API testing."""
    # Reset factory to ensure clean state
    from catalog_api.database.factory import DatabaseFactory
    DatabaseFactory.reset()
    _remove_test_db()

    # Import app after environment is set
    from catalog_api.main import app

    # Initialize database with model registration
    await DatabaseFactory.initialize()

    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport,
        base_url="http://test",
        timeout=30.0,
    ) as async_client:
        yield async_client

    # Cleanup
    await DatabaseFactory.shutdown()
    DatabaseFactory.reset()
    _remove_test_db()


@pytest_asyncio.fixture
async def seeded_client(client: AsyncClient) -> AsyncGenerator[tuple[AsyncClient, Dict[str, int]], None]:
    """
    Client on a seeded catalog.

    Returns:
        Tuple of (client, ids)
    """
    from catalog_api.database.factory import DatabaseFactory

    ids = await seed_catalog(DatabaseFactory.get_adapter())
    yield client, ids


# ==============================================================================
# HELPER FIXTURES
# ==============================================================================

@pytest.fixture
def sample_product_data() -> dict:
    """Generate sample product creation data."""
    return {
        "document_id": "prod_new",
        "title": "Pediatrics",
        "slug": "pediatrics",
        "sku": "pe-001",
        "vertical": ["health"],
        "type": "Curso corto",
    }


@pytest.fixture
def sample_category_data() -> dict:
    """Generate sample category creation data."""
    return {
        "document_id": "cat_new",
        "name": "Surgery",
        "slug": "surgery",
        "locale": "es",
    }
