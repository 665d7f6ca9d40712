"""Result DTOs returned by analytics runs."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from uuid import UUID

from spendsight.domain.analytics.value_objects import (
    AlertLevel,
    BudgetStatus,
    Insight,
    Recommendation,
    RecurringPattern,
)


@dataclass(frozen=True)
class RecurringDetectionResult:
    """Patterns detected (and persisted) by one run."""

    patterns: list[RecurringPattern]
    generation_id: Optional[UUID] = None

    @property
    def count(self) -> int:
        return len(self.patterns)


@dataclass(frozen=True)
class InsightDetectionResult:
    """Anomaly and trend insights generated by one run."""

    insights: list[Insight]

    @property
    def count(self) -> int:
        return len(self.insights)


@dataclass(frozen=True)
class RecommendationGenerationResult:
    """Recommendations generated by one run."""

    recommendations: list[Recommendation]
    used_fallback: bool = False

    @property
    def count(self) -> int:
        return len(self.recommendations)


@dataclass(frozen=True)
class BudgetStatusResult:
    """Budget statuses for the current period (not persisted)."""

    statuses: list[BudgetStatus]
    period_start: datetime

    @property
    def count(self) -> int:
        return len(self.statuses)

    @property
    def alerts(self) -> list[BudgetStatus]:
        return [s for s in self.statuses if s.alert_level is not AlertLevel.NONE]
