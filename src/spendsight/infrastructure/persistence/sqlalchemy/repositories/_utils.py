"""Shared utilities for SQLAlchemy repositories."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError

from spendsight.domain.shared.exceptions import DataAccessError

logger = logging.getLogger(__name__)


@contextmanager
def data_access(operation: str) -> Iterator[None]:
    """Translate driver and ORM failures into DataAccessError."""
    try:
        yield
    except SQLAlchemyError as exc:
        logger.error("Database operation '%s' failed: %s", operation, exc)
        raise DataAccessError(
            f"Storage unavailable while trying to {operation}",
            details={"operation": operation, "error": type(exc).__name__},
        ) from exc
