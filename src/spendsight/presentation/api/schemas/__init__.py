"""API request and response schemas."""

from spendsight.presentation.api.schemas.analytics import (
    BudgetStatusItemResponse,
    BudgetStatusResponse,
    InsightDetectionResponse,
    InsightResponse,
    RecommendationGenerationResponse,
    RecommendationResponse,
    RecurringDetectionResponse,
    RecurringPatternResponse,
)

__all__ = [
    "BudgetStatusItemResponse",
    "BudgetStatusResponse",
    "InsightDetectionResponse",
    "InsightResponse",
    "RecommendationGenerationResponse",
    "RecommendationResponse",
    "RecurringDetectionResponse",
    "RecurringPatternResponse",
]
