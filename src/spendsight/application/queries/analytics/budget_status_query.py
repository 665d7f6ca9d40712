"""Budget status query."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Optional

from spendsight.application.dtos.analytics import BudgetStatusResult
from spendsight.application.services import AnalyticsRun, RunPhase
from spendsight.domain.analytics.repositories import (
    BudgetRepository,
    TransactionRepository,
)
from spendsight.domain.analytics.services import BudgetEvaluator
from spendsight.domain.analytics.value_objects import BudgetPeriod
from spendsight.domain.shared.time import utc_now

if TYPE_CHECKING:
    from spendsight.application.context import UserContext
    from spendsight.application.factories import RepositoryFactory


class BudgetStatusQuery:
    """Evaluate monthly budgets against month-to-date spend. Writes nothing."""

    def __init__(
        self,
        budget_repository: BudgetRepository,
        transaction_repository: TransactionRepository,
        user_context: UserContext,
        evaluator: Optional[BudgetEvaluator] = None,
    ):
        self._budget_repo = budget_repository
        self._transaction_repo = transaction_repository
        self._user_context = user_context
        self._evaluator = evaluator or BudgetEvaluator()

    @classmethod
    def from_factory(cls, factory: RepositoryFactory) -> BudgetStatusQuery:
        return cls(
            budget_repository=factory.budget_repository(),
            transaction_repository=factory.transaction_repository(),
            user_context=factory.user_context,
        )

    async def execute(self, now: Optional[datetime] = None) -> BudgetStatusResult:
        now = now or utc_now()
        run = AnalyticsRun("budget_status", self._user_context.user_id)
        period_start = self._evaluator.period_start(now)

        with run.phase(RunPhase.FETCHING):
            budgets = await self._budget_repo.find_by_period(BudgetPeriod.MONTHLY)
            transactions = await self._transaction_repo.find_since(period_start)

        with run.phase(RunPhase.COMPUTING):
            statuses = self._evaluator.evaluate(budgets, transactions, now)

        run.succeed(count=len(statuses))
        return BudgetStatusResult(statuses=statuses, period_start=period_start)
