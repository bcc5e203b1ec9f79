# ==============================================================================
# DOMAIN MODELS PACKAGE INITIALIZATION
# ==============================================================================

"""
Domain Models
=============

SQLAlchemy ORM models for database entities:
- Product: Catalog products
- Category: Product categories
- FullPriceComponent / CardTagsComponent: Concrete component rows
- ProductComponent / CategoryComponent: Component link rows

Importing this package registers the component declarations of every
model with the process-wide component registry.
"""

from catalog_api.domain_models.base import SQLBase, TimestampMixin
from catalog_api.domain_models.enums import (
    ProductType,
    PurchaseType,
    SubjectDataType,
    SubscriptionType,
)
from catalog_api.domain_models.components import (
    BaseComponentLink,
    CardTagsComponent,
    CategoryComponent,
    FullPriceComponent,
    ProductComponent,
)
from catalog_api.domain_models.product import Product, products_categories
from catalog_api.domain_models.category import Category

__all__ = [
    "SQLBase",
    "TimestampMixin",
    "ProductType",
    "PurchaseType",
    "SubjectDataType",
    "SubscriptionType",
    "BaseComponentLink",
    "CardTagsComponent",
    "CategoryComponent",
    "FullPriceComponent",
    "ProductComponent",
    "Product",
    "products_categories",
    "Category",
]
