"""Pydantic schemas for analytics run endpoints.

Every run answers with ``count`` and ``items``; errors use the shared
``{"detail", "code"}`` shape from the exception handlers.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class RecurringPatternResponse(BaseModel):
    """A detected recurring payment."""

    id: UUID
    merchant: str
    amount: Decimal
    frequency: str = Field(description="weekly, monthly or yearly")
    next_expected_date: datetime
    confidence: float = Field(ge=0.70, le=0.99)
    occurrences: int

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "0b6a7a9e-3f1e-4d55-9d0b-8f1a3b1b2c3d",
                "merchant": "Netflix",
                "amount": "15.99",
                "frequency": "monthly",
                "next_expected_date": "2026-11-14T00:00:00Z",
                "confidence": 0.97,
                "occurrences": 6,
            }
        }
    )


class RecurringDetectionResponse(BaseModel):
    count: int
    items: list[RecurringPatternResponse]
    generation_id: Optional[UUID] = Field(
        default=None,
        description="Shared by all patterns of this run (null when none found)",
    )


class InsightResponse(BaseModel):
    """An anomaly or trend insight."""

    id: UUID
    insight_type: str = Field(description="anomaly or trend")
    severity: str = Field(description="info or warning")
    title: str
    description: str
    amount: Decimal
    category_id: Optional[UUID] = None
    created_at: datetime


class InsightDetectionResponse(BaseModel):
    count: int
    items: list[InsightResponse]


class RecommendationResponse(BaseModel):
    """A savings recommendation."""

    id: UUID
    title: str
    description: str
    potential_savings: Optional[Decimal] = None
    category_id: Optional[UUID] = None
    recommendation_type: str
    created_at: datetime


class RecommendationGenerationResponse(BaseModel):
    count: int
    items: list[RecommendationResponse]
    used_fallback: bool = Field(
        description="True when the reasoning service answer was unusable",
    )


class BudgetStatusItemResponse(BaseModel):
    """Month-to-date spend against one budget."""

    budget_id: UUID
    budget_name: str
    limit_amount: Decimal
    spent: Decimal
    remaining: Decimal
    percentage: Decimal
    alert_level: str = Field(description="none, near_limit or exceeded")


class BudgetStatusResponse(BaseModel):
    count: int
    items: list[BudgetStatusItemResponse]
    period_start: datetime
