"""Repository interface for spending insights."""

from abc import ABC, abstractmethod
from typing import List

from spendsight.domain.analytics.value_objects import Insight


class InsightRepository(ABC):
    """Persistence for spending insights of the current user."""

    @abstractmethod
    async def add_all(self, insights: List[Insight]) -> None:
        """Insert insights. No deduplication against earlier runs."""

    @abstractmethod
    async def find_all(self, include_dismissed: bool = False) -> List[Insight]:
        """Find insights, newest first."""
