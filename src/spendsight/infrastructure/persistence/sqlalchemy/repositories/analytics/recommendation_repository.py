"""SQLAlchemy implementation of RecommendationRepository."""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from spendsight.domain.analytics.repositories import RecommendationRepository
from spendsight.domain.analytics.value_objects import Recommendation
from spendsight.domain.shared.time import ensure_tz_aware
from spendsight.infrastructure.persistence.sqlalchemy.models import (
    RecommendationModel,
)
from spendsight.infrastructure.persistence.sqlalchemy.repositories._utils import (
    data_access,
)

if TYPE_CHECKING:
    from spendsight.application.context import UserContext

logger = logging.getLogger(__name__)


class RecommendationRepositorySQLAlchemy(RecommendationRepository):
    def __init__(self, session: AsyncSession, user_context: UserContext):
        self._session = session
        self._user_id = user_context.user_id

    async def add_all(self, recommendations: list[Recommendation]) -> None:
        if not recommendations:
            return
        with data_access("store recommendations"):
            self._session.add_all([self._map_to_model(r) for r in recommendations])
            await self._session.flush()
        logger.debug(
            "Stored %d recommendation(s) for user %s",
            len(recommendations),
            self._user_id,
        )

    async def find_all(self) -> list[Recommendation]:
        stmt = (
            select(RecommendationModel)
            .where(RecommendationModel.user_id == self._user_id)
            .order_by(RecommendationModel.created_at.desc())
        )
        with data_access("read recommendations"):
            result = await self._session.execute(stmt)
            models = result.scalars().all()
        return [self._map_to_domain(model) for model in models]

    def _map_to_model(self, recommendation: Recommendation) -> RecommendationModel:
        return RecommendationModel(
            id=recommendation.id,
            user_id=self._user_id,
            title=recommendation.title,
            description=recommendation.description,
            potential_savings=recommendation.potential_savings,
            category_id=recommendation.category_id,
            recommendation_type=recommendation.recommendation_type,
            is_dismissed=recommendation.is_dismissed,
            is_applied=recommendation.is_applied,
            created_at=recommendation.created_at,
        )

    def _map_to_domain(self, model: RecommendationModel) -> Recommendation:
        savings = model.potential_savings
        return Recommendation(
            id=model.id,
            user_id=model.user_id,
            title=model.title,
            description=model.description,
            potential_savings=Decimal(savings) if savings is not None else None,
            category_id=model.category_id,
            recommendation_type=model.recommendation_type,
            is_dismissed=model.is_dismissed,
            is_applied=model.is_applied,
            created_at=ensure_tz_aware(model.created_at),
        )
