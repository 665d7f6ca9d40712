"""Recurring payment detection.

Transactions are grouped by merchant and rounded amount, and a group is
recurring when its payment intervals are regular relative to their mean.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import Decimal
from uuid import UUID

from spendsight.domain.analytics.services.statistics import (
    interval_stats,
    round_half_up,
)
from spendsight.domain.analytics.value_objects import (
    MAX_CONFIDENCE,
    MIN_CONFIDENCE,
    Frequency,
    RecurringPattern,
    Transaction,
)
from spendsight.domain.shared.time import months_ago

logger = logging.getLogger(__name__)

LOOKBACK_MONTHS = 6
MIN_OCCURRENCES = 2
MAX_RELATIVE_DEVIATION = 0.30
UNKNOWN_MERCHANT = "unknown"

SECONDS_PER_DAY = 86400

GroupKey = tuple[str, int]


@dataclass(frozen=True)
class IntervalAnalysis:
    """Timing statistics for one merchant/amount group."""

    intervals: list[int]
    avg_interval: float
    std_dev: float

    @property
    def is_recurring(self) -> bool:
        if self.avg_interval <= 0:
            return False
        return self.std_dev < MAX_RELATIVE_DEVIATION * self.avg_interval

    @property
    def frequency(self) -> Frequency:
        return Frequency.from_average_interval(self.avg_interval)

    @property
    def confidence(self) -> float:
        raw = 1 - self.std_dev / self.avg_interval
        return max(MIN_CONFIDENCE, min(MAX_CONFIDENCE, raw))


def group_key(transaction: Transaction) -> GroupKey:
    """Merchant (case-insensitive) x amount rounded to the whole unit."""
    merchant = (transaction.merchant or UNKNOWN_MERCHANT).lower()
    return merchant, round_half_up(transaction.amount)


def group_transactions(
    transactions: list[Transaction],
) -> dict[GroupKey, list[Transaction]]:
    """Partition transactions by group key; every input lands in one group."""
    groups: dict[GroupKey, list[Transaction]] = defaultdict(list)
    for txn in transactions:
        groups[group_key(txn)].append(txn)
    return dict(groups)


def day_intervals(timestamps: list[datetime]) -> list[int]:
    """Whole-day gaps between consecutive (sorted) timestamps."""
    return [
        round_half_up((later - earlier).total_seconds() / SECONDS_PER_DAY)
        for earlier, later in zip(timestamps, timestamps[1:])
    ]


def analyze_intervals(intervals: list[int]) -> IntervalAnalysis:
    avg_interval, std_dev = interval_stats(intervals)
    return IntervalAnalysis(
        intervals=intervals,
        avg_interval=avg_interval,
        std_dev=std_dev,
    )


class RecurringPatternDetector:
    """Detects recurring payments in a finite transaction window."""

    def lookback_start(self, now: datetime) -> datetime:
        return months_ago(now, LOOKBACK_MONTHS)

    def detect(
        self,
        transactions: list[Transaction],
        user_id: UUID,
        now: datetime,
    ) -> list[RecurringPattern]:
        since = self.lookback_start(now)
        window = [txn for txn in transactions if txn.timestamp >= since]

        patterns: list[RecurringPattern] = []
        for key, group in group_transactions(window).items():
            if len(group) < MIN_OCCURRENCES:
                continue

            pattern = self._detect_group(group, user_id)
            if pattern is None:
                logger.debug("Group %s is not regular enough", key)
                continue
            patterns.append(pattern)

        return patterns

    def _detect_group(
        self,
        group: list[Transaction],
        user_id: UUID,
    ) -> RecurringPattern | None:
        ordered = sorted(group, key=lambda txn: txn.timestamp)
        analysis = analyze_intervals(day_intervals([t.timestamp for t in ordered]))
        if not analysis.is_recurring:
            return None

        first, last = ordered[0], ordered[-1]
        # Fractional days are dropped from the projection
        next_expected = last.timestamp + timedelta(days=int(analysis.avg_interval))

        return RecurringPattern(
            user_id=user_id,
            merchant=first.merchant or UNKNOWN_MERCHANT,
            amount=Decimal(first.amount),
            frequency=analysis.frequency,
            next_expected_date=next_expected,
            confidence=analysis.confidence,
            occurrences=len(ordered),
        )
