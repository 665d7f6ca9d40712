"""Transaction snapshot value object (read-only input to every run)."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID


@dataclass(frozen=True)
class Transaction:
    """A user's transaction as read from the transaction store.

    The analytics engine never mutates transactions. ``category_name`` is
    only populated when the read joined the category reference data.
    """

    id: UUID
    user_id: UUID
    timestamp: datetime
    amount: Decimal
    merchant: Optional[str] = None
    category_id: Optional[UUID] = None
    category_name: Optional[str] = None
