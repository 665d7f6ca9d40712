"""Per-category spend aggregation for the reasoning service."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from spendsight.domain.analytics.value_objects import (
    UNCATEGORIZED_NAME,
    CategorySpending,
    SpendingSummary,
    Transaction,
)
from spendsight.domain.shared.time import months_ago

LOOKBACK_MONTHS = 3


class SpendingAggregator:
    """Builds the compact spend summary for the last three months."""

    def lookback_start(self, now: datetime) -> datetime:
        return months_ago(now, LOOKBACK_MONTHS)

    def summarize(
        self,
        transactions: list[Transaction],
        now: datetime,
    ) -> SpendingSummary:
        since = self.lookback_start(now)

        totals: dict[Optional[UUID], Decimal] = {}
        counts: dict[Optional[UUID], int] = {}
        names: dict[Optional[UUID], str] = {}

        for txn in transactions:
            if txn.timestamp < since:
                continue
            key = txn.category_id
            totals[key] = totals.get(key, Decimal("0")) + txn.amount
            counts[key] = counts.get(key, 0) + 1
            if key not in names:
                names[key] = txn.category_name or UNCATEGORIZED_NAME

        categories = sorted(
            (
                CategorySpending(
                    category_id=key,
                    name=names[key],
                    total=totals[key],
                    count=counts[key],
                )
                for key in totals
            ),
            key=lambda c: c.total,
            reverse=True,
        )
        return SpendingSummary(categories=tuple(categories))
