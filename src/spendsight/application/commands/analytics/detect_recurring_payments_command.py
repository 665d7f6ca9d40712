"""Detect recurring payments and replace the active pattern set."""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import TYPE_CHECKING, Optional
from uuid import uuid4

from spendsight.application.dtos.analytics import RecurringDetectionResult
from spendsight.application.services import AnalyticsRun, RunPhase
from spendsight.domain.analytics.repositories import (
    RecurringPatternRepository,
    TransactionRepository,
)
from spendsight.domain.analytics.services import RecurringPatternDetector
from spendsight.domain.shared.time import utc_now

if TYPE_CHECKING:
    from spendsight.application.context import UserContext
    from spendsight.application.factories import RepositoryFactory

logger = logging.getLogger(__name__)


class DetectRecurringPaymentsCommand:
    """Detect recurring payments over the last six months.

    A run that detects at least one pattern supersedes every previously
    active pattern of the user with a new generation. A run that detects
    nothing leaves the existing patterns untouched.
    """

    def __init__(
        self,
        transaction_repository: TransactionRepository,
        pattern_repository: RecurringPatternRepository,
        user_context: UserContext,
        detector: Optional[RecurringPatternDetector] = None,
    ):
        self._transaction_repo = transaction_repository
        self._pattern_repo = pattern_repository
        self._user_context = user_context
        self._detector = detector or RecurringPatternDetector()

    @classmethod
    def from_factory(
        cls,
        factory: RepositoryFactory,
    ) -> DetectRecurringPaymentsCommand:
        return cls(
            transaction_repository=factory.transaction_repository(),
            pattern_repository=factory.recurring_pattern_repository(),
            user_context=factory.user_context,
        )

    async def execute(
        self,
        now: Optional[datetime] = None,
    ) -> RecurringDetectionResult:
        now = now or utc_now()
        user_id = self._user_context.user_id
        run = AnalyticsRun("detect_recurring_payments", user_id)

        with run.phase(RunPhase.FETCHING):
            transactions = await self._transaction_repo.find_since(
                self._detector.lookback_start(now),
            )

        with run.phase(RunPhase.COMPUTING):
            patterns = self._detector.detect(transactions, user_id, now)

        if not patterns:
            run.succeed(count=0)
            return RecurringDetectionResult(patterns=[])

        generation_id = uuid4()
        patterns = [replace(p, generation_id=generation_id) for p in patterns]

        with run.phase(RunPhase.PERSISTING):
            await self._pattern_repo.replace_active(patterns, generation_id)

        run.succeed(count=len(patterns))
        return RecurringDetectionResult(
            patterns=patterns,
            generation_id=generation_id,
        )
