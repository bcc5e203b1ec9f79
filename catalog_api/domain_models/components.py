# ==============================================================================
# COMPONENT MODELS - Polymorphic Sub-Records
# ==============================================================================
# Concrete component tables and the link tables pointing at them
# ==============================================================================

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from sqlalchemy import ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from catalog_api.core.constants import DatabaseConstants
from catalog_api.domain_models.base import SQLBase

if TYPE_CHECKING:
    from catalog_api.domain_models.category import Category
    from catalog_api.domain_models.product import Product


# ==============================================================================
# CONCRETE COMPONENTS
# ==============================================================================

class FullPriceComponent(SQLBase):
    """
    Pricing block of a product.

    Attributes:
        price: Regular price
        discount_price: Price while a discount applies
        stripe_price_id: Price identifier in the payment provider
        tax: Tax label
        discount_percentage: Discount shown to customers
    """

    __tablename__ = DatabaseConstants.FULL_PRICES_COLLECTION

    price: Mapped[Decimal] = mapped_column(
        Numeric(precision=10, scale=2),
        nullable=False,
    )
    discount_price: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(precision=10, scale=2),
        nullable=True,
    )
    stripe_price_id: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
    )
    tax: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
    )
    discount_percentage: Mapped[Optional[int]] = mapped_column(
        Integer,
        nullable=True,
    )


class CardTagsComponent(SQLBase):
    """Left and right tags displayed on a catalog card."""

    __tablename__ = DatabaseConstants.CARD_TAGS_COLLECTION

    left_tag: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    right_tag: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
    )


# ==============================================================================
# COMPONENT LINKS
# ==============================================================================

class BaseComponentLink:
    """
    Columns shared by every component link table.

    A link row points from its owner (``entity_id``) to one concrete
    component row (``cmp_id``) in the table selected by
    ``component_type``. ``field`` names the owner property it fills.
    """

    cmp_id: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
    )
    component_type: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    field: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    order: Mapped[Optional[int]] = mapped_column(
        Integer,
        nullable=True,
    )


class ProductComponent(SQLBase, BaseComponentLink):
    """Component link rows owned by a product."""

    __tablename__ = DatabaseConstants.PRODUCT_COMPONENTS_COLLECTION

    entity_id: Mapped[int] = mapped_column(
        ForeignKey("products.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )

    product: Mapped["Product"] = relationship(
        "Product",
        back_populates="components",
    )


class CategoryComponent(SQLBase, BaseComponentLink):
    """Component link rows owned by a category."""

    __tablename__ = DatabaseConstants.CATEGORY_COMPONENTS_COLLECTION

    entity_id: Mapped[int] = mapped_column(
        ForeignKey("categories.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )

    category: Mapped["Category"] = relationship(
        "Category",
        back_populates="components",
    )
