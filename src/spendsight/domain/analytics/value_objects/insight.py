"""Spending insight value objects."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from uuid import UUID, uuid4

from spendsight.domain.shared.time import utc_now


class InsightType(str, Enum):
    ANOMALY = "anomaly"
    TREND = "trend"


class InsightSeverity(str, Enum):
    INFO = "info"
    WARNING = "warning"


@dataclass(frozen=True)
class Insight:
    """An anomalous transaction or a month-over-month spending shift.

    ``is_dismissed`` belongs to the presentation layer; the analytics
    engine always writes it as False.
    """

    user_id: UUID
    insight_type: InsightType
    severity: InsightSeverity
    title: str
    description: str
    amount: Decimal
    category_id: Optional[UUID] = None
    is_dismissed: bool = False
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=utc_now)
