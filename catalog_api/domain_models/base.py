# ==============================================================================
# BASE MODEL - SQLAlchemy Foundation
# ==============================================================================
# Base declarative class and common mixins for all SQL models
# ==============================================================================

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

from sqlalchemy import DateTime, Integer, func, inspect
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class SQLBase(DeclarativeBase):
    """
    Declarative base of the catalog tables.

    Every table gets an integer ``id`` and serializes itself through
    :meth:`to_dict`, following the same relation tree the adapter used
    for eager loading.

    Example:
        >>> product.to_dict({"categories": True})
        {"id": 1, "title": "...", "categories": [{"id": 3, ...}]}
    """

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    def to_dict(self, relations: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Convert model instance to dictionary.

        Columns are always included. Relationships are included only when
        named in ``relations`` and already loaded on the instance; names
        that are not relationships of this model are ignored.

        Args:
            relations: Relation tree (``name -> True | nested tree``)

        Returns:
            Dictionary with column values and requested relations
        """
        state = inspect(self)
        mapper = state.mapper

        data: Dict[str, Any] = {
            attr.key: getattr(self, attr.key)
            for attr in mapper.column_attrs
            if attr.key not in state.unloaded
        }

        if not relations:
            return data

        for name, nested in relations.items():
            if name not in mapper.relationships or name in state.unloaded:
                continue
            child_relations = nested if isinstance(nested, dict) else None
            value = getattr(self, name)
            if value is None:
                data[name] = None
            elif mapper.relationships[name].uselist:
                data[name] = [item.to_dict(child_relations) for item in value]
            else:
                data[name] = value.to_dict(child_relations)

        return data

    def __repr__(self) -> str:
        """Generate readable representation."""
        class_name = self.__class__.__name__
        return f"<{class_name}(id={self.id})>"


class TimestampMixin:
    """``created_at`` / ``updated_at`` filled in by the database."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
