"""Generate savings recommendations through the reasoning service."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import TYPE_CHECKING, Optional

from spendsight.application.dtos.analytics import RecommendationGenerationResult
from spendsight.application.ports import SavingsAdvisorPort
from spendsight.application.services import AnalyticsRun, RunPhase
from spendsight.domain.analytics.repositories import (
    RecommendationRepository,
    TransactionRepository,
)
from spendsight.domain.analytics.services import (
    SpendingAggregator,
    build_recommendations,
)
from spendsight.domain.shared.exceptions import ExternalServiceError
from spendsight.domain.shared.time import utc_now

if TYPE_CHECKING:
    from spendsight.application.context import UserContext
    from spendsight.application.factories import RepositoryFactory

logger = logging.getLogger(__name__)


class GenerateRecommendationsCommand:
    """Turn three months of category spend into savings recommendations.

    There is no idempotency check: running twice over unchanged data
    stores two independent batches.
    """

    def __init__(
        self,
        transaction_repository: TransactionRepository,
        recommendation_repository: RecommendationRepository,
        user_context: UserContext,
        advisor: Optional[SavingsAdvisorPort] = None,
        aggregator: Optional[SpendingAggregator] = None,
    ):
        self._transaction_repo = transaction_repository
        self._recommendation_repo = recommendation_repository
        self._user_context = user_context
        self._advisor = advisor
        self._aggregator = aggregator or SpendingAggregator()

    @classmethod
    def from_factory(
        cls,
        factory: RepositoryFactory,
        advisor: Optional[SavingsAdvisorPort] = None,
    ) -> GenerateRecommendationsCommand:
        return cls(
            transaction_repository=factory.transaction_repository(),
            recommendation_repository=factory.recommendation_repository(),
            user_context=factory.user_context,
            advisor=advisor,
        )

    async def execute(
        self,
        now: Optional[datetime] = None,
    ) -> RecommendationGenerationResult:
        now = now or utc_now()
        user_id = self._user_context.user_id
        run = AnalyticsRun("generate_recommendations", user_id)

        with run.phase(RunPhase.FETCHING):
            transactions = await self._transaction_repo.find_since(
                self._aggregator.lookback_start(now),
            )

        with run.phase(RunPhase.COMPUTING):
            summary = self._aggregator.summarize(transactions, now)
            if summary.is_empty:
                logger.info("No transactions to summarize for user %s", user_id)
                recommendations, used_fallback = [], False
            else:
                advisor = self._require_advisor()
                response_text = await advisor.suggest_savings(summary)
                recommendations, used_fallback = build_recommendations(
                    response_text,
                    user_id,
                    summary,
                )

        if recommendations:
            with run.phase(RunPhase.PERSISTING):
                await self._recommendation_repo.add_all(recommendations)

        run.succeed(count=len(recommendations))
        return RecommendationGenerationResult(
            recommendations=recommendations,
            used_fallback=used_fallback,
        )

    def _require_advisor(self) -> SavingsAdvisorPort:
        if self._advisor is None:
            raise ExternalServiceError("Reasoning service is not configured")
        return self._advisor
