"""Analytics domain value objects."""

from spendsight.domain.analytics.value_objects.budget import Budget, BudgetPeriod
from spendsight.domain.analytics.value_objects.budget_status import (
    AlertLevel,
    BudgetStatus,
)
from spendsight.domain.analytics.value_objects.insight import (
    Insight,
    InsightSeverity,
    InsightType,
)
from spendsight.domain.analytics.value_objects.recommendation import (
    RECOMMENDATION_TYPE_SAVINGS,
    Recommendation,
)
from spendsight.domain.analytics.value_objects.recurring_pattern import (
    MAX_CONFIDENCE,
    MIN_CONFIDENCE,
    Frequency,
    RecurringPattern,
)
from spendsight.domain.analytics.value_objects.spending_summary import (
    UNCATEGORIZED_NAME,
    CategorySpending,
    SpendingSummary,
)
from spendsight.domain.analytics.value_objects.transaction import Transaction

__all__ = [
    # Inputs
    "Budget",
    "BudgetPeriod",
    "Transaction",
    # Recurring payments
    "Frequency",
    "MAX_CONFIDENCE",
    "MIN_CONFIDENCE",
    "RecurringPattern",
    # Insights
    "Insight",
    "InsightSeverity",
    "InsightType",
    # Budgets
    "AlertLevel",
    "BudgetStatus",
    # Recommendations
    "CategorySpending",
    "RECOMMENDATION_TYPE_SAVINGS",
    "Recommendation",
    "SpendingSummary",
    "UNCATEGORIZED_NAME",
]
