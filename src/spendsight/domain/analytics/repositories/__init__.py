"""Analytics repository interfaces."""

from spendsight.domain.analytics.repositories.budget_repository import (
    BudgetRepository,
)
from spendsight.domain.analytics.repositories.insight_repository import (
    InsightRepository,
)
from spendsight.domain.analytics.repositories.recommendation_repository import (
    RecommendationRepository,
)
from spendsight.domain.analytics.repositories.recurring_pattern_repository import (
    RecurringPatternRepository,
)
from spendsight.domain.analytics.repositories.transaction_repository import (
    TransactionRepository,
)

__all__ = [
    "BudgetRepository",
    "InsightRepository",
    "RecommendationRepository",
    "RecurringPatternRepository",
    "TransactionRepository",
]
