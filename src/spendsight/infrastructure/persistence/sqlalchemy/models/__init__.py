"""SQLAlchemy models for persistence layer."""

from spendsight.infrastructure.persistence.sqlalchemy.models.base import Base
from spendsight.infrastructure.persistence.sqlalchemy.models.budget_model import (
    BudgetModel,
)
from spendsight.infrastructure.persistence.sqlalchemy.models.category_model import (
    CategoryModel,
)
from spendsight.infrastructure.persistence.sqlalchemy.models.insight_model import (
    InsightModel,
)
from spendsight.infrastructure.persistence.sqlalchemy.models.recommendation_model import (  # NOQA: E501
    RecommendationModel,
)
from spendsight.infrastructure.persistence.sqlalchemy.models.recurring_pattern_model import (  # NOQA: E501
    RecurringPatternModel,
)
from spendsight.infrastructure.persistence.sqlalchemy.models.transaction_model import (  # NOQA: E501
    TransactionModel,
)

__all__ = [
    "Base",
    "BudgetModel",
    "CategoryModel",
    "InsightModel",
    "RecommendationModel",
    "RecurringPatternModel",
    "TransactionModel",
]
