"""Strict validation of reasoning-service output.

The reasoning service returns free text that should contain a JSON array of
recommendation objects. There is exactly one accepted shape, validated by a
pydantic schema; anything else raises RecommendationParseError, and the
caller falls back to the single canned recommendation.
"""

from __future__ import annotations

import json
import logging
import re
from decimal import Decimal, InvalidOperation
from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, TypeAdapter, field_validator
from pydantic import ValidationError as PydanticValidationError

from spendsight.domain.analytics.exceptions import RecommendationParseError
from spendsight.domain.analytics.value_objects import (
    Recommendation,
    SpendingSummary,
)

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Savings Tip"
DEFAULT_DESCRIPTION = "Take small steps to reduce expenses."

# Column limits of the recommendations table
MAX_TITLE_LENGTH = 255
MAX_SAVINGS = Decimal("1e10")

FALLBACK_TITLE = "Track expenses weekly"
FALLBACK_DESCRIPTION = (
    "Review your spending once a week to spot unnecessary purchases early "
    "and move the difference into savings."
)

_CODE_FENCE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL)


class RecommendationPayload(BaseModel):
    """One recommendation object as returned by the reasoning service."""

    model_config = ConfigDict(extra="ignore")

    title: str = DEFAULT_TITLE
    description: str = DEFAULT_DESCRIPTION
    potential_savings: Optional[Decimal] = None
    category: Optional[str] = None

    @field_validator("title", mode="before")
    @classmethod
    def _title_or_default(cls, v: Any) -> str:
        return _trimmed_or_default(v, DEFAULT_TITLE)[:MAX_TITLE_LENGTH].rstrip()

    @field_validator("description", mode="before")
    @classmethod
    def _description_or_default(cls, v: Any) -> str:
        return _trimmed_or_default(v, DEFAULT_DESCRIPTION)

    @field_validator("potential_savings", mode="before")
    @classmethod
    def _coerce_savings(cls, v: Any) -> Optional[Decimal]:
        return coerce_savings(v)

    @field_validator("category", mode="before")
    @classmethod
    def _category_name(cls, v: Any) -> Optional[str]:
        if isinstance(v, str) and v.strip():
            return v.strip()
        return None


_PAYLOAD_LIST = TypeAdapter(list[RecommendationPayload])


def _trimmed_or_default(value: Any, default: str) -> str:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return default


def coerce_savings(value: Any) -> Optional[Decimal]:
    """Coerce a savings figure to a storable, non-negative Decimal or None."""
    if value is None or isinstance(value, bool):
        return None
    if not isinstance(value, (int, float, str, Decimal)):
        return None
    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation:
        return None
    if not amount.is_finite() or amount < 0 or amount >= MAX_SAVINGS:
        return None
    try:
        return amount.quantize(Decimal("0.01"))
    except InvalidOperation:
        return None


def _strip_code_fence(text: str) -> str:
    match = _CODE_FENCE.match(text)
    if match:
        return match.group(1)
    return text


def parse_recommendations(text: str) -> list[RecommendationPayload]:
    """Validate reasoning-service text against the recommendation schema.

    Raises
    ------
    RecommendationParseError
        If the text is not a JSON array of objects.
    """
    candidate = _strip_code_fence(text.strip())
    try:
        data = json.loads(candidate)
    except json.JSONDecodeError as e:
        raise RecommendationParseError(
            "Reasoning service returned non-JSON text",
            details={"error": str(e), "preview": text[:100]},
        ) from e

    try:
        return _PAYLOAD_LIST.validate_python(data)
    except PydanticValidationError as e:
        raise RecommendationParseError(
            "Reasoning service returned an unexpected structure",
            details={"errors": e.error_count(), "preview": text[:100]},
        ) from e


def fallback_recommendation(user_id: UUID) -> Recommendation:
    return Recommendation(
        user_id=user_id,
        title=FALLBACK_TITLE,
        description=FALLBACK_DESCRIPTION,
        potential_savings=None,
    )


def to_recommendations(
    payloads: list[RecommendationPayload],
    user_id: UUID,
    summary: SpendingSummary,
) -> list[Recommendation]:
    return [
        Recommendation(
            user_id=user_id,
            title=payload.title,
            description=payload.description,
            potential_savings=payload.potential_savings,
            category_id=summary.find_category_id(payload.category),
        )
        for payload in payloads
    ]


def build_recommendations(
    text: str,
    user_id: UUID,
    summary: SpendingSummary,
) -> tuple[list[Recommendation], bool]:
    """Turn reasoning-service text into recommendations.

    Returns the recommendations and whether the fallback was used.
    """
    try:
        payloads = parse_recommendations(text)
    except RecommendationParseError as e:
        logger.warning("%s, using fallback recommendation (%s)", e, e.details)
        return [fallback_recommendation(user_id)], True

    return to_recommendations(payloads, user_id, summary), False
