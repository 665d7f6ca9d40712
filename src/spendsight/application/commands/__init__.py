"""Application commands."""

from spendsight.application.commands.analytics import (
    DetectRecurringPaymentsCommand,
    DetectSpendingAnomaliesCommand,
    GenerateRecommendationsCommand,
)

__all__ = [
    "DetectRecurringPaymentsCommand",
    "DetectSpendingAnomaliesCommand",
    "GenerateRecommendationsCommand",
]
