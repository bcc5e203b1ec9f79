# ==============================================================================
# CATEGORY SERVICE - Catalog Categories
# ==============================================================================

from __future__ import annotations

from typing import Any, Optional

from catalog_api.core.constants import DatabaseConstants
from catalog_api.database.adapters.base_adapter import BaseDatabaseAdapter
from catalog_api.services.base_service import BaseService, Entity


class CategoryService(BaseService):
    """Service for the ``categories`` collection."""

    resource_name = "Category"
    unique_fields = ("slug",)

    def __init__(self, adapter: BaseDatabaseAdapter) -> None:
        super().__init__(adapter, DatabaseConstants.CATEGORIES_COLLECTION)

    async def find_by_slug(self, slug: str, include: Any = None) -> Optional[Entity]:
        return await self.find_one_by({"slug": slug}, include=include)
