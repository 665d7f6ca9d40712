"""Analytics commands (runs that persist their results)."""

from spendsight.application.commands.analytics.detect_recurring_payments_command import (  # NOQA: E501
    DetectRecurringPaymentsCommand,
)
from spendsight.application.commands.analytics.detect_spending_anomalies_command import (  # NOQA: E501
    DetectSpendingAnomaliesCommand,
)
from spendsight.application.commands.analytics.generate_recommendations_command import (  # NOQA: E501
    GenerateRecommendationsCommand,
)

__all__ = [
    "DetectRecurringPaymentsCommand",
    "DetectSpendingAnomaliesCommand",
    "GenerateRecommendationsCommand",
]
