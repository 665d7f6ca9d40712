"""SQLAlchemy implementation of BudgetRepository."""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from spendsight.domain.analytics.repositories import BudgetRepository
from spendsight.domain.analytics.value_objects import Budget, BudgetPeriod
from spendsight.infrastructure.persistence.sqlalchemy.models import BudgetModel
from spendsight.infrastructure.persistence.sqlalchemy.repositories._utils import (
    data_access,
)

if TYPE_CHECKING:
    from spendsight.application.context import UserContext

logger = logging.getLogger(__name__)


class BudgetRepositorySQLAlchemy(BudgetRepository):
    """Read-only, user-scoped access to the budgets table."""

    def __init__(self, session: AsyncSession, user_context: UserContext):
        self._session = session
        self._user_id = user_context.user_id

    async def find_by_period(self, period: BudgetPeriod) -> list[Budget]:
        stmt = (
            select(BudgetModel)
            .where(
                BudgetModel.user_id == self._user_id,
                BudgetModel.period == period.value,
            )
            .order_by(BudgetModel.name)
        )
        with data_access("read budgets"):
            result = await self._session.execute(stmt)
            models = result.scalars().all()

        budgets = []
        for model in models:
            if model.amount is None or model.amount <= 0:
                # Rows written outside the product can carry a zero limit
                logger.warning(
                    "Skipping budget %s with non-positive limit %s",
                    model.id,
                    model.amount,
                )
                continue
            budgets.append(self._map_to_domain(model))
        return budgets

    def _map_to_domain(self, model: BudgetModel) -> Budget:
        return Budget(
            id=model.id,
            user_id=model.user_id,
            name=model.name,
            limit_amount=Decimal(model.amount),
            category_id=model.category_id,
            period=BudgetPeriod(model.period),
        )
