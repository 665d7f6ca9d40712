"""Per-category spend summary handed to the reasoning service."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional
from uuid import UUID

UNCATEGORIZED_NAME = "Uncategorized"


@dataclass(frozen=True)
class CategorySpending:
    category_id: Optional[UUID]
    name: str
    total: Decimal
    count: int


@dataclass(frozen=True)
class SpendingSummary:
    """Compact structured summary, ordered by total spend (highest first)."""

    categories: tuple[CategorySpending, ...]

    @property
    def is_empty(self) -> bool:
        return not self.categories

    def find_category_id(self, name: Optional[str]) -> Optional[UUID]:
        """Resolve a category name (case-insensitive) to its id."""
        if not name:
            return None
        wanted = name.strip().lower()
        for category in self.categories:
            if category.name.lower() == wanted:
                return category.category_id
        return None

    def to_dict(self) -> list[dict]:
        return [
            {
                "category": category.name,
                "total": str(category.total),
                "transactions": category.count,
            }
            for category in self.categories
        ]
