# ==============================================================================
# SCHEMAS PACKAGE INITIALIZATION
# ==============================================================================

"""
API Schemas
===========

Pydantic models for request validation and response envelopes.
"""

from catalog_api.schemas.base import APIResponse, BaseSchema, HealthResponse
from catalog_api.schemas.category import CategoryCreate, CategoryUpdate
from catalog_api.schemas.product import ProductCreate, ProductUpdate

__all__ = [
    "APIResponse",
    "BaseSchema",
    "HealthResponse",
    "CategoryCreate",
    "CategoryUpdate",
    "ProductCreate",
    "ProductUpdate",
]
