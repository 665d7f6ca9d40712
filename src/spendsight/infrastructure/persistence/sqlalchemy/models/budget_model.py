"""SQLAlchemy model for budgets."""

from decimal import Decimal
from typing import Optional
from uuid import UUID

from sqlalchemy import ForeignKey, Index, Numeric, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from spendsight.infrastructure.persistence.sqlalchemy.models.base import (
    Base,
    TimestampMixin,
)


class BudgetModel(Base, TimestampMixin):
    """Database model for budgets. A NULL category covers all spending."""

    __tablename__ = "budgets"

    __table_args__ = (Index("ix_budgets_user_period", "user_id", "period"),)

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    user_id: Mapped[UUID] = mapped_column(Uuid, nullable=False)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    period: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default="monthly",
    )
    category_id: Mapped[Optional[UUID]] = mapped_column(
        Uuid,
        ForeignKey("categories.id", ondelete="SET NULL"),
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<BudgetModel(id={self.id}, name={self.name}, amount={self.amount})>"
