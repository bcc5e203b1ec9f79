# ==============================================================================
# SERVICES PACKAGE INITIALIZATION
# ==============================================================================

"""
Service Layer
=============

Business logic for the catalog resources:
- BaseService: Generic CRUD with ``include`` and component resolution
- ProductService: Catalog products
- CategoryService: Product categories
"""

from catalog_api.services.base_service import BaseService
from catalog_api.services.product_service import ProductService
from catalog_api.services.category_service import CategoryService

__all__ = [
    "BaseService",
    "ProductService",
    "CategoryService",
]
