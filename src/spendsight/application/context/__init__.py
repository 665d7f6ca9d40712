"""Request-scoped application context."""

from spendsight.application.context.user_context import UserContext

__all__ = ["UserContext"]
