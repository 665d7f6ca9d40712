"""Repository factory protocol for application layer."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

from spendsight.domain.analytics.repositories import (
    BudgetRepository,
    InsightRepository,
    RecommendationRepository,
    RecurringPatternRepository,
    TransactionRepository,
)

if TYPE_CHECKING:
    from spendsight.application.context import UserContext


class RepositoryFactory(Protocol):
    """Protocol for creating user-scoped repositories."""

    @property
    def user_context(self) -> UserContext:
        """Get the current user for repository scoping."""
        ...

    @property
    def session(self) -> Any:
        """Get the database session for transaction management.

        The type is intentionally `Any` to avoid coupling the
        application layer to specific database implementations.
        Use this for commit/rollback at the presentation layer.
        """
        ...

    def transaction_repository(self) -> TransactionRepository:
        """Get transaction repository (read-only)."""
        ...

    def budget_repository(self) -> BudgetRepository:
        """Get budget repository (read-only)."""
        ...

    def recurring_pattern_repository(self) -> RecurringPatternRepository:
        """Get recurring pattern repository."""
        ...

    def insight_repository(self) -> InsightRepository:
        """Get insight repository."""
        ...

    def recommendation_repository(self) -> RecommendationRepository:
        """Get recommendation repository."""
        ...
