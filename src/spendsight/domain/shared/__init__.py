"""Shared domain components.

This module exports shared exceptions and time utilities used across
domain boundaries.
"""

from spendsight.domain.shared.exceptions import (
    AuthenticationError,
    DataAccessError,
    DomainException,
    ErrorCode,
    ExternalServiceError,
)
from spendsight.domain.shared.time import (
    ensure_tz_aware,
    months_ago,
    start_of_month,
    utc_now,
)

__all__ = [
    # Error codes
    "ErrorCode",
    # Base exception
    "DomainException",
    # Exception categories
    "AuthenticationError",
    "DataAccessError",
    "ExternalServiceError",
    # Utilities
    "ensure_tz_aware",
    "months_ago",
    "start_of_month",
    "utc_now",
]
