# ==============================================================================
# PRODUCT SERVICE - Catalog Products
# ==============================================================================

from __future__ import annotations

from typing import Any, Optional

from catalog_api.core.constants import DatabaseConstants
from catalog_api.database.adapters.base_adapter import BaseDatabaseAdapter
from catalog_api.services.base_service import BaseService, Entity


class ProductService(BaseService):
    """
    Service for the ``products`` collection.

    Components available through ``include``: ``fullPrice``, ``cardTags``.
    """

    resource_name = "Product"
    unique_fields = ("sku", "slug", "order")

    def __init__(self, adapter: BaseDatabaseAdapter) -> None:
        super().__init__(adapter, DatabaseConstants.PRODUCTS_COLLECTION)

    async def find_by_slug(self, slug: str, include: Any = None) -> Optional[Entity]:
        """Retrieve a product by its URL slug."""
        return await self.find_one_by({"slug": slug}, include=include)

    async def find_by_sku(self, sku: str, include: Any = None) -> Optional[Entity]:
        return await self.find_one_by({"sku": sku}, include=include)
