# ==============================================================================
# CATEGORY MODEL - Catalog Categories
# ==============================================================================

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from catalog_api.components.registry import ComponentMetadata, component_registry
from catalog_api.domain_models.base import SQLBase, TimestampMixin
from catalog_api.domain_models.components import CardTagsComponent, CategoryComponent
from catalog_api.domain_models.product import Product, products_categories


class Category(SQLBase, TimestampMixin):
    """
    Category grouping catalog products.

    Attributes:
        document_id: Identifier shared with the content management system
        name: Category display name
        slug: URL slug (unique)
        locale: Content locale
        published_at: Publication timestamp (None while draft)

    Relationships:
        products: Products listed in this category
        components: Component link rows (see ``card_tags``)
    """

    __tablename__ = "categories"

    document_id: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True,
    )
    slug: Mapped[Optional[str]] = mapped_column(
        String(255),
        unique=True,
        nullable=True,
    )
    locale: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
    )
    published_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    # Relationships
    products: Mapped[List[Product]] = relationship(
        Product,
        secondary=products_categories,
        back_populates="categories",
    )
    components: Mapped[List[CategoryComponent]] = relationship(
        CategoryComponent,
        back_populates="category",
        cascade="all, delete-orphan",
        order_by=CategoryComponent.order,
    )

    def __repr__(self) -> str:
        return f"<Category(id={self.id}, name={self.name})>"


component_registry.register(
    Category,
    ComponentMetadata(
        property_key="card_tags",
        field="cardTags",
        component_type="cards.card-tags",
        target=CardTagsComponent,
    ),
)
