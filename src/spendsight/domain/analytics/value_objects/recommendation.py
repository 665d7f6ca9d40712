"""Savings recommendation value objects."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID, uuid4

from spendsight.domain.shared.time import utc_now

RECOMMENDATION_TYPE_SAVINGS = "savings"


@dataclass(frozen=True)
class Recommendation:
    """A savings suggestion derived from the reasoning service.

    ``is_dismissed`` and ``is_applied`` are owned by the presentation layer.
    """

    user_id: UUID
    title: str
    description: str
    potential_savings: Optional[Decimal] = None
    category_id: Optional[UUID] = None
    recommendation_type: str = RECOMMENDATION_TYPE_SAVINGS
    is_dismissed: bool = False
    is_applied: bool = False
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=utc_now)

    def __post_init__(self) -> None:
        if not self.title.strip() or not self.description.strip():
            msg = "Recommendation title and description must not be blank"
            raise ValueError(msg)
