"""Repository interface for savings recommendations."""

from abc import ABC, abstractmethod
from typing import List

from spendsight.domain.analytics.value_objects import Recommendation


class RecommendationRepository(ABC):
    """Persistence for recommendations of the current user."""

    @abstractmethod
    async def add_all(self, recommendations: List[Recommendation]) -> None:
        """Insert recommendations. Repeated runs add new rows."""

    @abstractmethod
    async def find_all(self) -> List[Recommendation]:
        """Find all recommendations, newest first."""
