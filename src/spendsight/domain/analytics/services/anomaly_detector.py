"""Spending anomaly and trend detection.

Anomalies: per category bucket, any transaction strictly above
mean + 2 * population standard deviation.

Trends: total spend of the last 30 days against the rest of the window.

A bucket with a single transaction has a standard deviation of zero, so its
threshold equals that one amount. There is deliberately no minimum sample
size: any later transaction above it in the same bucket is flagged.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Optional
from uuid import UUID

from spendsight.domain.analytics.services.statistics import (
    amount_stats,
    round_half_up,
)
from spendsight.domain.analytics.value_objects import (
    Insight,
    InsightSeverity,
    InsightType,
    Transaction,
)
from spendsight.domain.shared.time import months_ago

logger = logging.getLogger(__name__)

LOOKBACK_MONTHS = 3
STD_DEV_MULTIPLIER = Decimal("2")
WARNING_THRESHOLD_MULTIPLIER = Decimal("1.5")

RECENT_PERIOD_DAYS = 30
TREND_INCREASE_PERCENT = Decimal("20")
TREND_WARNING_PERCENT = Decimal("50")


@dataclass(frozen=True)
class CategoryStats:
    """Amount statistics for one category bucket."""

    category_id: Optional[UUID]
    mean: Decimal
    std_dev: Decimal

    @property
    def threshold(self) -> Decimal:
        return self.mean + STD_DEV_MULTIPLIER * self.std_dev

    def is_anomalous(self, amount: Decimal) -> bool:
        return amount > self.threshold

    def severity_for(self, amount: Decimal) -> InsightSeverity:
        if amount > WARNING_THRESHOLD_MULTIPLIER * self.threshold:
            return InsightSeverity.WARNING
        return InsightSeverity.INFO

    def percent_above_mean(self, amount: Decimal) -> int | None:
        if self.mean <= 0:
            return None
        return round_half_up((amount / self.mean - 1) * 100)


def bucket_by_category(
    transactions: list[Transaction],
) -> dict[Optional[UUID], list[Transaction]]:
    """Bucket by category id; uncategorized transactions share the None key."""
    buckets: dict[Optional[UUID], list[Transaction]] = defaultdict(list)
    for txn in transactions:
        buckets[txn.category_id].append(txn)
    return dict(buckets)


def category_stats(
    category_id: Optional[UUID],
    transactions: list[Transaction],
) -> CategoryStats:
    mean, std_dev = amount_stats([txn.amount for txn in transactions])
    return CategoryStats(category_id=category_id, mean=mean, std_dev=std_dev)


class AnomalyDetector:
    """Produces anomaly and trend insights for a 3-month window."""

    def lookback_start(self, now: datetime) -> datetime:
        return months_ago(now, LOOKBACK_MONTHS)

    def detect(
        self,
        transactions: list[Transaction],
        user_id: UUID,
        now: datetime,
    ) -> list[Insight]:
        since = self.lookback_start(now)
        window = [txn for txn in transactions if txn.timestamp >= since]

        insights = self.detect_anomalies(window, user_id)
        trend = self.detect_trend(window, user_id, now)
        if trend is not None:
            insights.append(trend)
        return insights

    def detect_anomalies(
        self,
        transactions: list[Transaction],
        user_id: UUID,
    ) -> list[Insight]:
        insights: list[Insight] = []
        for category_id, bucket in bucket_by_category(transactions).items():
            stats = category_stats(category_id, bucket)
            logger.debug(
                "Category %s: n=%d mean=%s threshold=%s",
                category_id,
                len(bucket),
                stats.mean,
                stats.threshold,
            )
            insights.extend(
                self._anomaly_insight(txn, stats, user_id)
                for txn in bucket
                if stats.is_anomalous(txn.amount)
            )
        return insights

    def detect_trend(
        self,
        transactions: list[Transaction],
        user_id: UUID,
        now: datetime,
    ) -> Insight | None:
        boundary = now - timedelta(days=RECENT_PERIOD_DAYS)
        recent = sum(
            (t.amount for t in transactions if t.timestamp >= boundary),
            Decimal("0"),
        )
        prior = sum(
            (t.amount for t in transactions if t.timestamp < boundary),
            Decimal("0"),
        )
        if prior <= 0:
            return None

        increase = (recent - prior) / prior * 100
        if increase <= TREND_INCREASE_PERCENT:
            return None

        severity = (
            InsightSeverity.WARNING
            if increase > TREND_WARNING_PERCENT
            else InsightSeverity.INFO
        )
        return Insight(
            user_id=user_id,
            insight_type=InsightType.TREND,
            severity=severity,
            title="Spending increased significantly",
            description=(
                f"Your spending increased by {round_half_up(increase)}% "
                f"compared to last month. Last month: {prior:.2f}, "
                f"This month: {recent:.2f}."
            ),
            amount=recent - prior,
        )

    def _anomaly_insight(
        self,
        txn: Transaction,
        stats: CategoryStats,
        user_id: UUID,
    ) -> Insight:
        merchant = txn.merchant or "an unknown merchant"
        percent = stats.percent_above_mean(txn.amount)
        if percent is None:
            comparison = "is well above your average"
        else:
            comparison = f"is {percent}% higher than your average"

        return Insight(
            user_id=user_id,
            insight_type=InsightType.ANOMALY,
            severity=stats.severity_for(txn.amount),
            title=f"Unusual {txn.category_name or 'spending'} detected",
            description=f"{txn.amount:.2f} spent at {merchant} {comparison}.",
            amount=txn.amount,
            category_id=txn.category_id,
        )
