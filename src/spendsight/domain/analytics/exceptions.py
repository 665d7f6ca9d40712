"""Analytics domain exceptions."""

from typing import Any

from spendsight.domain.shared.exceptions import DomainException, ErrorCode


class RecommendationParseError(DomainException):
    """Raised when reasoning-service output does not match the schema.

    Recovered locally by the single fallback recommendation; never
    surfaced to API clients.
    """

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, ErrorCode.PARSE_ERROR, details)
