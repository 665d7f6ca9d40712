"""Budget evaluation (stateless, never persisted)."""

from __future__ import annotations

from collections import defaultdict
from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from spendsight.domain.analytics.value_objects import (
    AlertLevel,
    Budget,
    BudgetStatus,
    Transaction,
)
from spendsight.domain.shared.time import start_of_month


class BudgetEvaluator:
    """Computes period-to-date spend against monthly budget limits."""

    def period_start(self, now: datetime) -> datetime:
        return start_of_month(now)

    def evaluate(
        self,
        budgets: list[Budget],
        transactions: list[Transaction],
        now: datetime,
    ) -> list[BudgetStatus]:
        since = self.period_start(now)
        in_period = [txn for txn in transactions if txn.timestamp >= since]

        spent_by_category: dict[Optional[UUID], Decimal] = defaultdict(Decimal)
        for txn in in_period:
            spent_by_category[txn.category_id] += txn.amount
        total_spent = sum(spent_by_category.values(), Decimal("0"))

        statuses = []
        for budget in budgets:
            if budget.covers_all_categories:
                spent = total_spent
            else:
                spent = spent_by_category.get(budget.category_id, Decimal("0"))
            statuses.append(self.status_for(budget, spent))
        return statuses

    def status_for(self, budget: Budget, spent: Decimal) -> BudgetStatus:
        percentage = spent / budget.limit_amount * 100
        return BudgetStatus(
            budget_id=budget.id,
            budget_name=budget.name,
            limit_amount=budget.limit_amount,
            spent=spent,
            percentage=percentage,
            alert_level=AlertLevel.from_percentage(percentage),
        )
