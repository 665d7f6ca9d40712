"""SQLAlchemy implementation of RecurringPatternRepository."""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from spendsight.domain.analytics.repositories import RecurringPatternRepository
from spendsight.domain.analytics.value_objects import Frequency, RecurringPattern
from spendsight.domain.shared.time import ensure_tz_aware
from spendsight.infrastructure.persistence.sqlalchemy.models import (
    RecurringPatternModel,
)
from spendsight.infrastructure.persistence.sqlalchemy.repositories._utils import (
    data_access,
)

if TYPE_CHECKING:
    from spendsight.application.context import UserContext

logger = logging.getLogger(__name__)


class RecurringPatternRepositorySQLAlchemy(RecurringPatternRepository):
    """User-scoped persistence for recurring patterns.

    ``replace_active`` only flushes. Deactivation and insertion become
    visible together when the caller commits the session.
    """

    def __init__(self, session: AsyncSession, user_context: UserContext):
        self._session = session
        self._user_id = user_context.user_id

    async def replace_active(
        self,
        patterns: list[RecurringPattern],
        generation_id: UUID,
    ) -> None:
        deactivate = (
            update(RecurringPatternModel)
            .where(
                RecurringPatternModel.user_id == self._user_id,
                RecurringPatternModel.is_active == True,  # noqa: E712
            )
            .values(is_active=False)
        )
        with data_access("replace recurring patterns"):
            result = await self._session.execute(deactivate)
            self._session.add_all(
                [self._map_to_model(p, generation_id) for p in patterns],
            )
            await self._session.flush()

        logger.info(
            "Superseded %d active pattern(s) with generation %s (%d pattern(s))",
            result.rowcount,
            generation_id,
            len(patterns),
        )

    async def find_active(self) -> list[RecurringPattern]:
        stmt = (
            select(RecurringPatternModel)
            .where(
                RecurringPatternModel.user_id == self._user_id,
                RecurringPatternModel.is_active == True,  # noqa: E712
            )
            .order_by(RecurringPatternModel.next_expected_date)
        )
        with data_access("read recurring patterns"):
            result = await self._session.execute(stmt)
            models = result.scalars().all()
        return [self._map_to_domain(model) for model in models]

    def _map_to_model(
        self,
        pattern: RecurringPattern,
        generation_id: UUID,
    ) -> RecurringPatternModel:
        return RecurringPatternModel(
            id=pattern.id,
            user_id=self._user_id,
            merchant=pattern.merchant,
            amount=pattern.amount,
            frequency=pattern.frequency.value,
            next_expected_date=pattern.next_expected_date,
            confidence=pattern.confidence,
            occurrences=pattern.occurrences,
            is_active=True,
            generation_id=generation_id,
        )

    def _map_to_domain(self, model: RecurringPatternModel) -> RecurringPattern:
        return RecurringPattern(
            id=model.id,
            user_id=model.user_id,
            merchant=model.merchant,
            amount=Decimal(model.amount),
            frequency=Frequency(model.frequency),
            next_expected_date=ensure_tz_aware(model.next_expected_date),
            confidence=model.confidence,
            occurrences=model.occurrences,
            is_active=model.is_active,
            generation_id=model.generation_id,
        )
