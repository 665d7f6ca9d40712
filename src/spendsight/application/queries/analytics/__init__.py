"""Analytics queries (read-only runs)."""

from spendsight.application.queries.analytics.budget_status_query import (
    BudgetStatusQuery,
)

__all__ = ["BudgetStatusQuery"]
