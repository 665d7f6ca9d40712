"""SQLAlchemy implementation of TransactionRepository."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from spendsight.domain.analytics.repositories import TransactionRepository
from spendsight.domain.analytics.value_objects import Transaction
from spendsight.domain.shared.time import ensure_tz_aware
from spendsight.infrastructure.persistence.sqlalchemy.models import TransactionModel
from spendsight.infrastructure.persistence.sqlalchemy.repositories._utils import (
    data_access,
)

if TYPE_CHECKING:
    from spendsight.application.context import UserContext


class TransactionRepositorySQLAlchemy(TransactionRepository):
    """Read-only, user-scoped access to the transactions table."""

    def __init__(self, session: AsyncSession, user_context: UserContext):
        self._session = session
        self._user_id = user_context.user_id

    async def find_since(self, since: datetime) -> list[Transaction]:
        stmt = (
            select(TransactionModel)
            .where(
                TransactionModel.user_id == self._user_id,
                TransactionModel.timestamp >= since,
            )
            .order_by(TransactionModel.timestamp)
        )
        with data_access("read transactions"):
            result = await self._session.execute(stmt)
            models = result.scalars().all()
        return [self._map_to_domain(model) for model in models]

    def _map_to_domain(self, model: TransactionModel) -> Transaction:
        return Transaction(
            id=model.id,
            user_id=model.user_id,
            timestamp=ensure_tz_aware(model.timestamp),
            amount=Decimal(model.amount),
            merchant=model.merchant,
            category_id=model.category_id,
            category_name=model.category.name if model.category else None,
        )
