"""Repository interface for reading transactions."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List

from spendsight.domain.analytics.value_objects import Transaction


class TransactionRepository(ABC):
    """Read-only access to the current user's transactions."""

    @abstractmethod
    async def find_since(self, since: datetime) -> List[Transaction]:
        """
        Find transactions on or after a lookback start.

        Parameters
        ----------
        since
            Inclusive lower bound of the transaction timestamp

        Returns
        -------
        Transactions ordered by timestamp ascending, with category names
        """
