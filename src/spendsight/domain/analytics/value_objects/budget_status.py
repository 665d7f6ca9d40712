"""Budget status value objects (computed, never persisted)."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from uuid import UUID

NEAR_LIMIT_PERCENTAGE = Decimal("80")
EXCEEDED_PERCENTAGE = Decimal("100")


class AlertLevel(str, Enum):
    NONE = "none"
    NEAR_LIMIT = "near_limit"
    EXCEEDED = "exceeded"

    @classmethod
    def from_percentage(cls, percentage: Decimal) -> "AlertLevel":
        if percentage >= EXCEEDED_PERCENTAGE:
            return cls.EXCEEDED
        if percentage >= NEAR_LIMIT_PERCENTAGE:
            return cls.NEAR_LIMIT
        return cls.NONE


@dataclass(frozen=True)
class BudgetStatus:
    """Period-to-date spend against a budget limit."""

    budget_id: UUID
    budget_name: str
    limit_amount: Decimal
    spent: Decimal
    percentage: Decimal
    alert_level: AlertLevel

    @property
    def remaining(self) -> Decimal:
        return self.limit_amount - self.spent
