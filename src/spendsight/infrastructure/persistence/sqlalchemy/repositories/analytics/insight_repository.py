"""SQLAlchemy implementation of InsightRepository."""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from spendsight.domain.analytics.repositories import InsightRepository
from spendsight.domain.analytics.value_objects import (
    Insight,
    InsightSeverity,
    InsightType,
)
from spendsight.domain.shared.time import ensure_tz_aware
from spendsight.infrastructure.persistence.sqlalchemy.models import InsightModel
from spendsight.infrastructure.persistence.sqlalchemy.repositories._utils import (
    data_access,
)

if TYPE_CHECKING:
    from spendsight.application.context import UserContext

logger = logging.getLogger(__name__)


class InsightRepositorySQLAlchemy(InsightRepository):
    def __init__(self, session: AsyncSession, user_context: UserContext):
        self._session = session
        self._user_id = user_context.user_id

    async def add_all(self, insights: list[Insight]) -> None:
        if not insights:
            return
        with data_access("store insights"):
            self._session.add_all([self._map_to_model(i) for i in insights])
            await self._session.flush()
        logger.debug("Stored %d insight(s) for user %s", len(insights), self._user_id)

    async def find_all(self, include_dismissed: bool = False) -> list[Insight]:
        stmt = select(InsightModel).where(InsightModel.user_id == self._user_id)
        if not include_dismissed:
            stmt = stmt.where(InsightModel.is_dismissed == False)  # noqa: E712
        stmt = stmt.order_by(InsightModel.created_at.desc())

        with data_access("read insights"):
            result = await self._session.execute(stmt)
            models = result.scalars().all()
        return [self._map_to_domain(model) for model in models]

    def _map_to_model(self, insight: Insight) -> InsightModel:
        return InsightModel(
            id=insight.id,
            user_id=self._user_id,
            insight_type=insight.insight_type.value,
            severity=insight.severity.value,
            title=insight.title,
            description=insight.description,
            amount=insight.amount,
            category_id=insight.category_id,
            is_dismissed=insight.is_dismissed,
            created_at=insight.created_at,
        )

    def _map_to_domain(self, model: InsightModel) -> Insight:
        return Insight(
            id=model.id,
            user_id=model.user_id,
            insight_type=InsightType(model.insight_type),
            severity=InsightSeverity(model.severity),
            title=model.title,
            description=model.description,
            amount=Decimal(model.amount),
            category_id=model.category_id,
            is_dismissed=model.is_dismissed,
            created_at=ensure_tz_aware(model.created_at),
        )
