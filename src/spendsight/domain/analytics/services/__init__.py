"""Analytics domain services (pure, synchronous computation)."""

from spendsight.domain.analytics.services.anomaly_detector import AnomalyDetector
from spendsight.domain.analytics.services.budget_evaluator import BudgetEvaluator
from spendsight.domain.analytics.services.recommendation_parser import (
    build_recommendations,
    parse_recommendations,
)
from spendsight.domain.analytics.services.recurring_pattern_detector import (
    RecurringPatternDetector,
)
from spendsight.domain.analytics.services.spending_aggregator import (
    SpendingAggregator,
)

__all__ = [
    "AnomalyDetector",
    "BudgetEvaluator",
    "RecurringPatternDetector",
    "SpendingAggregator",
    "build_recommendations",
    "parse_recommendations",
]
