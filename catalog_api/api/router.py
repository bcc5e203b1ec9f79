# ==============================================================================
# MAIN API ROUTER - Versioned Catalog Routes
# ==============================================================================
# /api/v1/products and /api/v1/categories
# ==============================================================================

from __future__ import annotations

from fastapi import APIRouter

from catalog_api.api.v1 import categories_router, products_router
from catalog_api.core.settings import settings

v1_router = APIRouter(prefix=settings.API_V1_PREFIX)
for resource_router in (products_router, categories_router):
    v1_router.include_router(resource_router)

api_router = APIRouter()
api_router.include_router(v1_router)
