"""SQLAlchemy repositories for the analytics domain."""

from spendsight.infrastructure.persistence.sqlalchemy.repositories.analytics.budget_repository import (  # NOQA: E501
    BudgetRepositorySQLAlchemy,
)
from spendsight.infrastructure.persistence.sqlalchemy.repositories.analytics.insight_repository import (  # NOQA: E501
    InsightRepositorySQLAlchemy,
)
from spendsight.infrastructure.persistence.sqlalchemy.repositories.analytics.recommendation_repository import (  # NOQA: E501
    RecommendationRepositorySQLAlchemy,
)
from spendsight.infrastructure.persistence.sqlalchemy.repositories.analytics.recurring_pattern_repository import (  # NOQA: E501
    RecurringPatternRepositorySQLAlchemy,
)
from spendsight.infrastructure.persistence.sqlalchemy.repositories.analytics.transaction_repository import (  # NOQA: E501
    TransactionRepositorySQLAlchemy,
)

__all__ = [
    "BudgetRepositorySQLAlchemy",
    "InsightRepositorySQLAlchemy",
    "RecommendationRepositorySQLAlchemy",
    "RecurringPatternRepositorySQLAlchemy",
    "TransactionRepositorySQLAlchemy",
]
