"""SQLAlchemy model for user transactions."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Optional
from uuid import UUID

from sqlalchemy import DateTime, ForeignKey, Index, Numeric, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from spendsight.infrastructure.persistence.sqlalchemy.models.base import (
    Base,
    TimestampMixin,
)

if TYPE_CHECKING:
    from spendsight.infrastructure.persistence.sqlalchemy.models.category_model import (  # NOQA: E501
        CategoryModel,
    )


class TransactionModel(Base, TimestampMixin):
    """Database model for transactions.

    Written by the ingestion side of the product; analytics only reads it.
    """

    __tablename__ = "transactions"

    __table_args__ = (
        Index("ix_transactions_user_id", "user_id"),
        Index("ix_transactions_user_timestamp", "user_id", "timestamp"),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    user_id: Mapped[UUID] = mapped_column(Uuid, nullable=False)

    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    merchant: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    category_id: Mapped[Optional[UUID]] = mapped_column(
        Uuid,
        ForeignKey("categories.id", ondelete="SET NULL"),
        nullable=True,
    )

    category: Mapped[Optional[CategoryModel]] = relationship(
        "CategoryModel",
        lazy="joined",
    )

    def __repr__(self) -> str:
        return (
            f"<TransactionModel(id={self.id}, amount={self.amount}, "
            f"merchant={self.merchant})>"
        )
