# ==============================================================================
# PRODUCT MODEL - Catalog Products
# ==============================================================================
# Product entity with categories and polymorphic components
# ==============================================================================

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Enum as SQLEnum,
    ForeignKey,
    Integer,
    String,
    Table,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from catalog_api.components.registry import ComponentMetadata, component_registry
from catalog_api.domain_models.base import SQLBase, TimestampMixin
from catalog_api.domain_models.components import (
    CardTagsComponent,
    FullPriceComponent,
    ProductComponent,
)
from catalog_api.domain_models.enums import (
    ProductType,
    PurchaseType,
    SubjectDataType,
    SubscriptionType,
)

if TYPE_CHECKING:
    from catalog_api.domain_models.category import Category


products_categories = Table(
    "products_categories_lnk",
    SQLBase.metadata,
    Column(
        "product_id",
        ForeignKey("products.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "category_id",
        ForeignKey("categories.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


class Product(SQLBase, TimestampMixin):
    """
    Product model for the course and publication catalog.

    Attributes:
        document_id: Identifier shared with the content management system
        title: Product display name
        slug: URL slug (unique)
        order: Display position (unique)
        sku: Stock Keeping Unit (unique identifier)
        vertical: Business verticals the product belongs to
        type: Commercial format
        subject_data: Source of the subject data
        subscription_type: Subscription tier granting access
        is_soon: Announced but not yet available
        is_premium: Reserved for premium subscribers

    Relationships:
        categories: Categories listing this product
        components: Component link rows (see ``full_price``, ``card_tags``)
    """

    __tablename__ = "products"

    # Identification
    document_id: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True,
    )
    slug: Mapped[Optional[str]] = mapped_column(
        String(255),
        unique=True,
        nullable=True,
    )
    order: Mapped[Optional[int]] = mapped_column(
        Integer,
        unique=True,
        nullable=True,
    )
    sku: Mapped[str] = mapped_column(
        String(100),
        unique=True,
        index=True,
        nullable=False,
    )

    # Classification
    vertical: Mapped[List[str]] = mapped_column(
        JSON,
        nullable=False,
    )
    type: Mapped[ProductType] = mapped_column(
        SQLEnum(ProductType, values_callable=lambda e: [member.value for member in e]),
        nullable=False,
    )
    subject_data: Mapped[SubjectDataType] = mapped_column(
        SQLEnum(SubjectDataType, values_callable=lambda e: [member.value for member in e]),
        default=SubjectDataType.MANUAL,
        nullable=False,
    )
    purchase_type: Mapped[Optional[PurchaseType]] = mapped_column(
        SQLEnum(PurchaseType, values_callable=lambda e: [member.value for member in e]),
        nullable=True,
    )
    subscription_type: Mapped[SubscriptionType] = mapped_column(
        SQLEnum(SubscriptionType, values_callable=lambda e: [member.value for member in e]),
        default=SubscriptionType.PREMIUM,
        nullable=False,
    )

    # Payments
    stripe_id: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
    )

    # Content
    syllabus: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )

    # Status
    is_soon: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
    )
    is_premium: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
    )
    published_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    # Relationships
    categories: Mapped[List["Category"]] = relationship(
        "Category",
        secondary=products_categories,
        back_populates="products",
    )
    components: Mapped[List[ProductComponent]] = relationship(
        ProductComponent,
        back_populates="product",
        cascade="all, delete-orphan",
        order_by=ProductComponent.order,
    )

    def __repr__(self) -> str:
        return f"<Product(id={self.id}, title={self.title}, sku={self.sku})>"


# ==============================================================================
# COMPONENT DECLARATIONS
# ==============================================================================

component_registry.register(
    Product,
    ComponentMetadata(
        property_key="full_price",
        field="fullPrice",
        component_type="products.full-price",
        target=FullPriceComponent,
    ),
)
component_registry.register(
    Product,
    ComponentMetadata(
        property_key="card_tags",
        field="cardTags",
        component_type="cards.card-tags",
        target=CardTagsComponent,
    ),
)
