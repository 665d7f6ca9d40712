"""SQLAlchemy repository factory for creating user-scoped repositories."""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import TYPE_CHECKING, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from spendsight.infrastructure.integration.ai import OllamaSavingsAdvisor
from spendsight.infrastructure.persistence.sqlalchemy.repositories.analytics import (
    BudgetRepositorySQLAlchemy,
    InsightRepositorySQLAlchemy,
    RecommendationRepositorySQLAlchemy,
    RecurringPatternRepositorySQLAlchemy,
    TransactionRepositorySQLAlchemy,
)
from spendsight_config.settings import get_settings

if TYPE_CHECKING:
    from spendsight.application.context import UserContext
    from spendsight.application.ports import SavingsAdvisorPort

logger = logging.getLogger(__name__)


class SQLAlchemyRepositoryFactory:
    """SQLAlchemy implementation of the RepositoryFactory Protocol."""

    def __init__(self, session: AsyncSession, user_context: UserContext):
        self._session = session
        self._user_context = user_context

        # Cached instances (created on demand)
        self._transaction_repo: TransactionRepositorySQLAlchemy | None = None
        self._budget_repo: BudgetRepositorySQLAlchemy | None = None
        self._pattern_repo: RecurringPatternRepositorySQLAlchemy | None = None
        self._insight_repo: InsightRepositorySQLAlchemy | None = None
        self._recommendation_repo: RecommendationRepositorySQLAlchemy | None = None

    @property
    def user_context(self) -> UserContext:
        return self._user_context

    @property
    def session(self) -> AsyncSession:
        return self._session

    def transaction_repository(self) -> TransactionRepositorySQLAlchemy:
        if self._transaction_repo is None:
            self._transaction_repo = TransactionRepositorySQLAlchemy(
                self._session,
                self._user_context,
            )
        return self._transaction_repo

    def budget_repository(self) -> BudgetRepositorySQLAlchemy:
        if self._budget_repo is None:
            self._budget_repo = BudgetRepositorySQLAlchemy(
                self._session,
                self._user_context,
            )
        return self._budget_repo

    def recurring_pattern_repository(self) -> RecurringPatternRepositorySQLAlchemy:
        if self._pattern_repo is None:
            self._pattern_repo = RecurringPatternRepositorySQLAlchemy(
                self._session,
                self._user_context,
            )
        return self._pattern_repo

    def insight_repository(self) -> InsightRepositorySQLAlchemy:
        if self._insight_repo is None:
            self._insight_repo = InsightRepositorySQLAlchemy(
                self._session,
                self._user_context,
            )
        return self._insight_repo

    def recommendation_repository(self) -> RecommendationRepositorySQLAlchemy:
        if self._recommendation_repo is None:
            self._recommendation_repo = RecommendationRepositorySQLAlchemy(
                self._session,
                self._user_context,
            )
        return self._recommendation_repo


@lru_cache(maxsize=1)
def create_savings_advisor_from_settings() -> Optional[SavingsAdvisorPort]:
    """Create the reasoning-service adapter from application settings (cached)."""
    settings = get_settings()

    if not settings.ai_enabled:
        logger.debug("Savings recommendations are disabled")
        return None

    if settings.ai_provider == "ollama":
        logger.info(
            "Creating Ollama savings advisor (model: %s, url: %s)",
            settings.ai_ollama_model,
            settings.ollama_base_url,
        )
        return OllamaSavingsAdvisor(
            model=settings.ai_ollama_model,
            base_url=settings.ollama_base_url,
            timeout=settings.ai_ollama_timeout,
        )

    logger.warning("Unknown AI provider: %s", settings.ai_provider)
    return None
