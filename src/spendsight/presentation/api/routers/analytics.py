"""Analytics router.

Each endpoint runs exactly one analytics invocation for the authenticated
user. Runs that write commit once on success and roll back on any error.
"""

import logging
from datetime import datetime
from typing import Annotated, Optional

from fastapi import APIRouter, Query

from spendsight.application.commands import (
    DetectRecurringPaymentsCommand,
    DetectSpendingAnomaliesCommand,
    GenerateRecommendationsCommand,
)
from spendsight.application.queries import BudgetStatusQuery
from spendsight.domain.shared.time import ensure_tz_aware
from spendsight.presentation.api.dependencies import RepoFactory, SavingsAdvisor
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

logger = logging.getLogger(__name__)

router = APIRouter()

AsOfParam = Annotated[
    Optional[datetime],
    Query(description="Evaluate as of this instant (defaults to now, UTC)"),
]


def _as_of(value: Optional[datetime]) -> Optional[datetime]:
    return ensure_tz_aware(value) if value is not None else None


@router.post(
    "/recurring-patterns/detect",
    summary="Detect recurring payments",
    responses={
        200: {"description": "Patterns of the new generation"},
        503: {"description": "Storage unavailable"},
    },
)
async def detect_recurring_patterns(
    factory: RepoFactory,
    as_of: AsOfParam = None,
) -> RecurringDetectionResponse:
    """
    Scan the last six months for payments repeating at a regular interval.

    When at least one pattern is found, all previously active patterns are
    superseded by the new set. When none is found, nothing changes.
    """
    command = DetectRecurringPaymentsCommand.from_factory(factory)
    try:
        result = await command.execute(now=_as_of(as_of))
        await factory.session.commit()
    except Exception:
        await factory.session.rollback()
        # Let the global exception handler process domain exceptions
        raise

    return RecurringDetectionResponse(
        count=result.count,
        generation_id=result.generation_id,
        items=[
            RecurringPatternResponse(
                id=p.id,
                merchant=p.merchant,
                amount=p.amount,
                frequency=p.frequency.value,
                next_expected_date=p.next_expected_date,
                confidence=p.confidence,
                occurrences=p.occurrences,
            )
            for p in result.patterns
        ],
    )


@router.post(
    "/insights/detect",
    summary="Detect spending anomalies and trends",
    responses={
        200: {"description": "Insights stored by this run"},
        503: {"description": "Storage unavailable"},
    },
)
async def detect_insights(
    factory: RepoFactory,
    as_of: AsOfParam = None,
) -> InsightDetectionResponse:
    """
    Flag unusually large transactions per category and a significant
    increase of the last 30 days over the rest of the 3-month window.

    Every call stores new insights; earlier ones are kept.
    """
    command = DetectSpendingAnomaliesCommand.from_factory(factory)
    try:
        result = await command.execute(now=_as_of(as_of))
        await factory.session.commit()
    except Exception:
        await factory.session.rollback()
        raise

    return InsightDetectionResponse(
        count=result.count,
        items=[
            InsightResponse(
                id=i.id,
                insight_type=i.insight_type.value,
                severity=i.severity.value,
                title=i.title,
                description=i.description,
                amount=i.amount,
                category_id=i.category_id,
                created_at=i.created_at,
            )
            for i in result.insights
        ],
    )


@router.post(
    "/recommendations/generate",
    summary="Generate savings recommendations",
    responses={
        200: {"description": "Recommendations stored by this run"},
        502: {"description": "Reasoning service unavailable"},
        503: {"description": "Storage unavailable"},
    },
)
async def generate_recommendations(
    factory: RepoFactory,
    advisor: SavingsAdvisor,
    as_of: AsOfParam = None,
) -> RecommendationGenerationResponse:
    """
    Summarize three months of spending per category and ask the reasoning
    service for savings tips.

    An unusable answer yields one generic recommendation
    (`used_fallback: true`). Repeated calls store new batches.
    """
    command = GenerateRecommendationsCommand.from_factory(factory, advisor=advisor)
    try:
        result = await command.execute(now=_as_of(as_of))
        await factory.session.commit()
    except Exception:
        await factory.session.rollback()
        raise

    if result.used_fallback:
        logger.info("Returned fallback recommendation for %s", factory.user_context)

    return RecommendationGenerationResponse(
        count=result.count,
        used_fallback=result.used_fallback,
        items=[
            RecommendationResponse(
                id=r.id,
                title=r.title,
                description=r.description,
                potential_savings=r.potential_savings,
                category_id=r.category_id,
                recommendation_type=r.recommendation_type,
                created_at=r.created_at,
            )
            for r in result.recommendations
        ],
    )


@router.get(
    "/budgets/status",
    summary="Get budget status for the current month",
    responses={
        200: {"description": "Month-to-date spend per monthly budget"},
        503: {"description": "Storage unavailable"},
    },
)
async def get_budget_status(
    factory: RepoFactory,
    as_of: AsOfParam = None,
) -> BudgetStatusResponse:
    """
    Compare month-to-date spending against every monthly budget.

    Alert levels: `near_limit` from 80%, `exceeded` from 100%.
    Nothing is stored.
    """
    query = BudgetStatusQuery.from_factory(factory)
    result = await query.execute(now=_as_of(as_of))

    return BudgetStatusResponse(
        count=result.count,
        period_start=result.period_start,
        items=[
            BudgetStatusItemResponse(
                budget_id=s.budget_id,
                budget_name=s.budget_name,
                limit_amount=s.limit_amount,
                spent=s.spent,
                remaining=s.remaining,
                percentage=s.percentage,
                alert_level=s.alert_level.value,
            )
            for s in result.statuses
        ],
    )
