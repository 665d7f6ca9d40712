"""SQLAlchemy model for savings recommendations."""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from sqlalchemy import Boolean, DateTime, Index, Numeric, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from spendsight.infrastructure.persistence.sqlalchemy.models.base import Base


class RecommendationModel(Base):
    """Database model for recommendations."""

    __tablename__ = "recommendations"

    __table_args__ = (
        Index("ix_recommendations_user_created", "user_id", "created_at"),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    user_id: Mapped[UUID] = mapped_column(Uuid, nullable=False)

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    potential_savings: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(12, 2),
        nullable=True,
    )
    category_id: Mapped[Optional[UUID]] = mapped_column(Uuid, nullable=True)
    recommendation_type: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        default="savings",
    )

    is_dismissed: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
    )
    is_applied: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<RecommendationModel(id={self.id}, title={self.title[:50]})>"
