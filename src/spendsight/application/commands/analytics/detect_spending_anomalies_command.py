"""Detect spending anomalies and trends, and store them as insights."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Optional

from spendsight.application.dtos.analytics import InsightDetectionResult
from spendsight.application.services import AnalyticsRun, RunPhase
from spendsight.domain.analytics.repositories import (
    InsightRepository,
    TransactionRepository,
)
from spendsight.domain.analytics.services import AnomalyDetector
from spendsight.domain.shared.time import utc_now

if TYPE_CHECKING:
    from spendsight.application.context import UserContext
    from spendsight.application.factories import RepositoryFactory


class DetectSpendingAnomaliesCommand:
    """Flag outlier transactions and month-over-month spending increases.

    Insights are appended on every run; unresolved insights from earlier
    runs are not consulted.
    """

    def __init__(
        self,
        transaction_repository: TransactionRepository,
        insight_repository: InsightRepository,
        user_context: UserContext,
        detector: Optional[AnomalyDetector] = None,
    ):
        self._transaction_repo = transaction_repository
        self._insight_repo = insight_repository
        self._user_context = user_context
        self._detector = detector or AnomalyDetector()

    @classmethod
    def from_factory(
        cls,
        factory: RepositoryFactory,
    ) -> DetectSpendingAnomaliesCommand:
        return cls(
            transaction_repository=factory.transaction_repository(),
            insight_repository=factory.insight_repository(),
            user_context=factory.user_context,
        )

    async def execute(
        self,
        now: Optional[datetime] = None,
    ) -> InsightDetectionResult:
        now = now or utc_now()
        user_id = self._user_context.user_id
        run = AnalyticsRun("detect_spending_anomalies", user_id)

        with run.phase(RunPhase.FETCHING):
            transactions = await self._transaction_repo.find_since(
                self._detector.lookback_start(now),
            )

        with run.phase(RunPhase.COMPUTING):
            insights = self._detector.detect(transactions, user_id, now)

        if insights:
            with run.phase(RunPhase.PERSISTING):
                await self._insight_repo.add_all(insights)

        run.succeed(count=len(insights))
        return InsightDetectionResult(insights=insights)
