"""SQLAlchemy model for spending categories (reference data)."""

from uuid import UUID

from sqlalchemy import String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from spendsight.infrastructure.persistence.sqlalchemy.models.base import Base


class CategoryModel(Base):
    """Category names shared by all users. Read-only for analytics."""

    __tablename__ = "categories"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)

    def __repr__(self) -> str:
        return f"<CategoryModel(id={self.id}, name={self.name})>"
