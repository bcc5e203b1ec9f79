# ==============================================================================
# PRODUCT SCHEMAS - Catalog Products
# ==============================================================================
# Request schemas for product management
# ==============================================================================

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import Field, field_validator

from catalog_api.domain_models.enums import (
    ProductType,
    PurchaseType,
    SubjectDataType,
    SubscriptionType,
)
from catalog_api.schemas.base import BaseSchema


class ProductCreate(BaseSchema):
    """Schema for creating a product."""

    document_id: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Content management document identifier",
    )
    title: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Product title",
    )
    slug: Optional[str] = Field(
        None,
        min_length=1,
        max_length=255,
        description="URL slug",
    )
    order: Optional[int] = Field(
        None,
        ge=0,
        description="Display position",
    )
    sku: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Stock Keeping Unit",
    )
    vertical: List[str] = Field(
        ...,
        min_length=1,
        description="Business verticals",
    )
    type: ProductType = Field(
        ...,
        description="Product type",
    )
    subject_data: Optional[SubjectDataType] = Field(
        None,
        description="Source of the subject data",
    )
    purchase_type: Optional[PurchaseType] = Field(
        None,
        description="Purchase flow",
    )
    subscription_type: Optional[SubscriptionType] = Field(
        None,
        description="Subscription tier",
    )
    stripe_id: Optional[str] = Field(
        None,
        min_length=1,
        max_length=255,
        description="Payment provider product identifier",
    )
    syllabus: Optional[str] = Field(
        None,
        description="Syllabus text",
    )
    is_soon: Optional[bool] = Field(
        None,
        description="Announced but not yet available",
    )
    is_premium: Optional[bool] = Field(
        None,
        description="Premium-only product",
    )
    published_at: Optional[datetime] = Field(
        None,
        description="Publication timestamp",
    )

    @field_validator("sku")
    @classmethod
    def validate_sku(cls, v: str) -> str:
        """Normalize SKU to uppercase."""
        return v.upper()


class ProductUpdate(BaseSchema):
    """Schema for updating a product. Every field is optional."""

    document_id: Optional[str] = Field(None, min_length=1, max_length=255)
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    slug: Optional[str] = Field(None, min_length=1, max_length=255)
    order: Optional[int] = Field(None, ge=0)
    sku: Optional[str] = Field(None, min_length=1, max_length=100)
    vertical: Optional[List[str]] = Field(None, min_length=1)
    type: Optional[ProductType] = None
    subject_data: Optional[SubjectDataType] = None
    purchase_type: Optional[PurchaseType] = None
    subscription_type: Optional[SubscriptionType] = None
    stripe_id: Optional[str] = Field(None, min_length=1, max_length=255)
    syllabus: Optional[str] = None
    is_soon: Optional[bool] = None
    is_premium: Optional[bool] = None
    published_at: Optional[datetime] = None

    @field_validator("sku")
    @classmethod
    def validate_sku(cls, v: Optional[str]) -> Optional[str]:
        return v.upper() if v is not None else v
