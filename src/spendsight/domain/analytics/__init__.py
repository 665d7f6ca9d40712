"""Analytics domain: recurring payments, anomalies, budgets, recommendations."""

from spendsight.domain.analytics.exceptions import RecommendationParseError

__all__ = ["RecommendationParseError"]
