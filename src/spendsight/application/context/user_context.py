"""User context for request-scoped user identity."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
from uuid import UUID


@dataclass(frozen=True)
class UserContext:
    """
    Immutable context for the current authenticated user.

    This is created once per request/command execution and passed to
    repositories. Repositories use the user_id to automatically filter
    all queries to the current user's data.
    """

    user_id: UUID
    email: Optional[str] = None

    @classmethod
    def from_values(cls, user_id: UUID, email: Optional[str] = None) -> UserContext:
        return cls(user_id=user_id, email=email)

    def __str__(self) -> str:
        return f"UserContext({self.email or self.user_id})"
