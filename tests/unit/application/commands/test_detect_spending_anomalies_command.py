"""Unit tests for DetectSpendingAnomaliesCommand."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from unittest.mock import AsyncMock
from uuid import UUID, uuid4

import pytest

from spendsight.application.commands import DetectSpendingAnomaliesCommand
from spendsight.application.context import UserContext
from spendsight.domain.analytics.value_objects import InsightType, Transaction
from spendsight.domain.shared.exceptions import DataAccessError

USER_ID = UUID("12345678-1234-5678-1234-567812345678")
NOW = datetime(2026, 6, 15, tzinfo=timezone.utc)
FOOD_ID = uuid4()


def _txn(amount: str, days_ago: int) -> Transaction:
    return Transaction(
        id=uuid4(),
        user_id=USER_ID,
        timestamp=NOW - timedelta(days=days_ago),
        amount=Decimal(amount),
        merchant="Bistro",
        category_id=FOOD_ID,
        category_name="Food",
    )


@pytest.fixture
def transaction_repo():
    repo = AsyncMock()
    repo.find_since = AsyncMock(return_value=[])
    return repo


@pytest.fixture
def insight_repo():
    repo = AsyncMock()
    repo.add_all = AsyncMock()
    return repo


@pytest.fixture
def command(transaction_repo, insight_repo):
    return DetectSpendingAnomaliesCommand(
        transaction_repository=transaction_repo,
        insight_repository=insight_repo,
        user_context=UserContext(user_id=USER_ID),
    )


class TestDetectSpendingAnomaliesCommand:
    @pytest.mark.asyncio
    async def test_reads_three_month_window(self, command, transaction_repo):
        await command.execute(now=NOW)

        transaction_repo.find_since.assert_awaited_once_with(
            datetime(2026, 3, 15, tzinfo=timezone.utc),
        )

    @pytest.mark.asyncio
    async def test_stores_anomaly_insights(
        self, command, transaction_repo, insight_repo
    ):
        transactions = [_txn("10", days_ago=40 + i) for i in range(9)]
        transactions.append(_txn("100", days_ago=45))
        transaction_repo.find_since.return_value = transactions

        result = await command.execute(now=NOW)

        assert result.count == 1
        assert result.insights[0].insight_type is InsightType.ANOMALY
        insight_repo.add_all.assert_awaited_once_with(result.insights)

    @pytest.mark.asyncio
    async def test_nothing_to_report_writes_nothing(self, command, insight_repo):
        result = await command.execute(now=NOW)

        assert result.count == 0
        insight_repo.add_all.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_repeated_runs_append_duplicates(
        self, command, transaction_repo, insight_repo
    ):
        transaction_repo.find_since.return_value = [
            _txn("100", days_ago=60),
            _txn("200", days_ago=5),
        ]

        first = await command.execute(now=NOW)
        second = await command.execute(now=NOW)

        assert first.count == second.count == 1
        assert first.insights[0].id != second.insights[0].id
        assert insight_repo.add_all.await_count == 2

    @pytest.mark.asyncio
    async def test_write_failure_reports_persisting_phase(
        self, command, transaction_repo, insight_repo
    ):
        transaction_repo.find_since.return_value = [
            _txn("100", days_ago=60),
            _txn("200", days_ago=5),
        ]
        insight_repo.add_all.side_effect = DataAccessError("down")

        with pytest.raises(DataAccessError) as exc_info:
            await command.execute(now=NOW)

        assert exc_info.value.details["phase"] == "persisting"
