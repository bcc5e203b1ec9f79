# ==============================================================================
# API DEPENDENCIES - Dependency Injection
# ==============================================================================
# FastAPI dependencies for database access and services
# ==============================================================================

from __future__ import annotations

from typing import Annotated, Optional

from fastapi import Depends, Query

from catalog_api.database.factory import DatabaseFactory
from catalog_api.database.adapters.base_adapter import BaseDatabaseAdapter
from catalog_api.services.category_service import CategoryService
from catalog_api.services.product_service import ProductService


# ==============================================================================
# DATABASE DEPENDENCIES
# ==============================================================================

async def get_adapter() -> BaseDatabaseAdapter:
    """
    Get database adapter dependency.

    Returns initialized adapter from factory.
    """
    return DatabaseFactory.get_adapter()


# Annotated type for database adapter
DatabaseDep = Annotated[BaseDatabaseAdapter, Depends(get_adapter)]


# ==============================================================================
# QUERY PARAMETERS
# ==============================================================================

IncludeQuery = Annotated[
    Optional[str],
    Query(
        description=(
            "Comma-separated relations to load, nested with dots "
            "(e.g. `categories,fullPrice,categories.products`)"
        ),
        examples=["categories,fullPrice"],
    ),
]

SortOrderQuery = Annotated[
    str,
    Query(pattern="^(asc|desc)$", description="Sort direction"),
]


# ==============================================================================
# SERVICE DEPENDENCIES
# ==============================================================================

async def get_product_service(
    adapter: DatabaseDep,
) -> ProductService:
    """Get product service instance."""
    return ProductService(adapter)


async def get_category_service(
    adapter: DatabaseDep,
) -> CategoryService:
    """Get category service instance."""
    return CategoryService(adapter)


# Annotated service types
ProductServiceDep = Annotated[ProductService, Depends(get_product_service)]
CategoryServiceDep = Annotated[CategoryService, Depends(get_category_service)]
