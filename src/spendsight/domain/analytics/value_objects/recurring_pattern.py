"""Recurring payment pattern value objects."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from uuid import UUID, uuid4

MIN_CONFIDENCE = 0.70
MAX_CONFIDENCE = 0.99


class Frequency(str, Enum):
    """How often a recurring payment occurs."""

    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"

    @classmethod
    def from_average_interval(cls, avg_interval_days: float) -> "Frequency":
        if avg_interval_days < 10:
            return cls.WEEKLY
        if avg_interval_days > 300:
            return cls.YEARLY
        return cls.MONTHLY


@dataclass(frozen=True)
class RecurringPattern:
    """A merchant/amount group with regular enough timing to predict."""

    user_id: UUID
    merchant: str
    amount: Decimal
    frequency: Frequency
    next_expected_date: datetime
    confidence: float
    occurrences: int
    is_active: bool = True
    generation_id: Optional[UUID] = None
    id: UUID = field(default_factory=uuid4)

    def __post_init__(self) -> None:
        if not MIN_CONFIDENCE <= self.confidence <= MAX_CONFIDENCE:
            msg = (
                f"Confidence must be between {MIN_CONFIDENCE} and "
                f"{MAX_CONFIDENCE}, got {self.confidence}"
            )
            raise ValueError(msg)
