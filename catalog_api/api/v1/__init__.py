# ==============================================================================
# API V1 ENDPOINTS PACKAGE
# ==============================================================================

"""
API V1 Endpoints
================

Version 1 API endpoint implementations.
"""

from catalog_api.api.v1.products import router as products_router
from catalog_api.api.v1.categories import router as categories_router

__all__ = [
    "products_router",
    "categories_router",
]
