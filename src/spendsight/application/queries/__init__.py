"""Application queries."""

from spendsight.application.queries.analytics import BudgetStatusQuery

__all__ = ["BudgetStatusQuery"]
