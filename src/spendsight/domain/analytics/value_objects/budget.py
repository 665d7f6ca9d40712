"""Budget value objects."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Optional
from uuid import UUID


class BudgetPeriod(str, Enum):
    """Budget period. Only monthly budgets are evaluated."""

    MONTHLY = "monthly"


@dataclass(frozen=True)
class Budget:
    """A spending limit for one category (or for all spending)."""

    id: UUID
    user_id: UUID
    name: str
    limit_amount: Decimal
    category_id: Optional[UUID] = None
    period: BudgetPeriod = BudgetPeriod.MONTHLY

    def __post_init__(self) -> None:
        if self.limit_amount <= 0:
            msg = f"Budget limit must be positive, got {self.limit_amount}"
            raise ValueError(msg)

    @property
    def covers_all_categories(self) -> bool:
        return self.category_id is None
