"""SQLAlchemy repository implementations."""

from spendsight.infrastructure.persistence.sqlalchemy.repositories.analytics import (
    BudgetRepositorySQLAlchemy,
    InsightRepositorySQLAlchemy,
    RecommendationRepositorySQLAlchemy,
    RecurringPatternRepositorySQLAlchemy,
    TransactionRepositorySQLAlchemy,
)

# Repository Factory
from spendsight.infrastructure.persistence.sqlalchemy.repositories.factory import (
    SQLAlchemyRepositoryFactory,
    create_savings_advisor_from_settings,
)

__all__ = [
    # Factory (recommended for creating repositories)
    "SQLAlchemyRepositoryFactory",
    "create_savings_advisor_from_settings",
    # Analytics
    "BudgetRepositorySQLAlchemy",
    "InsightRepositorySQLAlchemy",
    "RecommendationRepositorySQLAlchemy",
    "RecurringPatternRepositorySQLAlchemy",
    "TransactionRepositorySQLAlchemy",
]
