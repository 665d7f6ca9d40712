"""SQLAlchemy model for detected recurring payments."""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from sqlalchemy import Boolean, DateTime, Float, Index, Integer, Numeric, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from spendsight.infrastructure.persistence.sqlalchemy.models.base import (
    Base,
    TimestampMixin,
)


class RecurringPatternModel(Base, TimestampMixin):
    """Database model for recurring patterns.

    Every detection run writes one generation; rows of earlier generations
    stay in the table with is_active = False.
    """

    __tablename__ = "recurring_patterns"

    __table_args__ = (
        Index("ix_recurring_patterns_user_active", "user_id", "is_active"),
        Index("ix_recurring_patterns_generation", "generation_id"),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    user_id: Mapped[UUID] = mapped_column(Uuid, nullable=False)

    merchant: Mapped[str] = mapped_column(String(255), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    frequency: Mapped[str] = mapped_column(String(20), nullable=False)
    next_expected_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )
    confidence: Mapped[float] = mapped_column(Float, nullable=False)
    occurrences: Mapped[int] = mapped_column(Integer, nullable=False)

    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    generation_id: Mapped[Optional[UUID]] = mapped_column(Uuid, nullable=True)

    def __repr__(self) -> str:
        return (
            f"<RecurringPatternModel(id={self.id}, merchant={self.merchant}, "
            f"frequency={self.frequency}, active={self.is_active})>"
        )
