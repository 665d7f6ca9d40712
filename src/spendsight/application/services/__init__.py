"""Application services."""

from spendsight.application.services.analytics_run import AnalyticsRun, RunPhase

__all__ = ["AnalyticsRun", "RunPhase"]
