"""Repository interface for recurring payment patterns."""

from abc import ABC, abstractmethod
from typing import List
from uuid import UUID

from spendsight.domain.analytics.value_objects import RecurringPattern


class RecurringPatternRepository(ABC):
    """Persistence for recurring patterns of the current user."""

    @abstractmethod
    async def replace_active(
        self,
        patterns: List[RecurringPattern],
        generation_id: UUID,
    ) -> None:
        """
        Supersede all active patterns with a new generation.

        Marking the previous patterns inactive and inserting the new ones
        must be applied atomically: readers never observe a state with no
        active patterns in between.

        Parameters
        ----------
        patterns
            Freshly detected patterns
        generation_id
            Identifier shared by every pattern of this detection run
        """

    @abstractmethod
    async def find_active(self) -> List[RecurringPattern]:
        """Find all active patterns, ordered by next expected date."""
