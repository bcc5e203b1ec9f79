# ==============================================================================
# CATEGORY SCHEMAS - Catalog Categories
# ==============================================================================

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field

from catalog_api.schemas.base import BaseSchema


class CategoryCreate(BaseSchema):
    """Schema for creating a category."""

    document_id: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Content management document identifier",
    )
    name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Category name",
    )
    slug: Optional[str] = Field(
        None,
        min_length=1,
        max_length=255,
        description="URL slug",
    )
    locale: Optional[str] = Field(
        None,
        max_length=255,
        description="Content locale",
    )
    published_at: Optional[datetime] = Field(
        None,
        description="Publication timestamp",
    )


class CategoryUpdate(BaseSchema):
    """Schema for updating a category."""

    document_id: Optional[str] = Field(None, min_length=1, max_length=255)
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    slug: Optional[str] = Field(None, min_length=1, max_length=255)
    locale: Optional[str] = Field(None, max_length=255)
    published_at: Optional[datetime] = None
