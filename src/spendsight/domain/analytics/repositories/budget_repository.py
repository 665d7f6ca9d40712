"""Repository interface for reading budgets."""

from abc import ABC, abstractmethod
from typing import List

from spendsight.domain.analytics.value_objects import Budget, BudgetPeriod


class BudgetRepository(ABC):
    """Read-only access to the current user's budgets."""

    @abstractmethod
    async def find_by_period(self, period: BudgetPeriod) -> List[Budget]:
        """Find all budgets of the given period."""
