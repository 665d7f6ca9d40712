"""Analytics DTOs."""

from spendsight.application.dtos.analytics.analytics_run_dto import (
    BudgetStatusResult,
    InsightDetectionResult,
    RecommendationGenerationResult,
    RecurringDetectionResult,
)

__all__ = [
    "BudgetStatusResult",
    "InsightDetectionResult",
    "RecommendationGenerationResult",
    "RecurringDetectionResult",
]
