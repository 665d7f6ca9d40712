"""Tests for reasoning-service output validation."""

from decimal import Decimal
from uuid import UUID

import pytest

from spendsight.domain.analytics.exceptions import RecommendationParseError
from spendsight.domain.analytics.services.recommendation_parser import (
    DEFAULT_DESCRIPTION,
    DEFAULT_TITLE,
    FALLBACK_TITLE,
    MAX_TITLE_LENGTH,
    build_recommendations,
    coerce_savings,
    parse_recommendations,
)
from spendsight.domain.analytics.value_objects import (
    CategorySpending,
    SpendingSummary,
)
from spendsight.domain.shared.exceptions import ErrorCode

USER_ID = UUID("12345678-1234-5678-1234-567812345678")
FOOD_ID = UUID("00000000-0000-0000-0000-00000000f00d")


@pytest.fixture
def summary() -> SpendingSummary:
    return SpendingSummary(
        categories=(
            CategorySpending(
                category_id=FOOD_ID,
                name="Food",
                total=Decimal("420.00"),
                count=12,
            ),
            CategorySpending(
                category_id=None,
                name="Uncategorized",
                total=Decimal("80.00"),
                count=3,
            ),
        ),
    )


class TestParseRecommendations:
    def test_valid_array(self):
        text = (
            '[{"title": "Cook at home", "description": "Plan meals weekly.", '
            '"potential_savings": 50, "category": "Food"}]'
        )

        payloads = parse_recommendations(text)

        assert len(payloads) == 1
        assert payloads[0].title == "Cook at home"
        assert payloads[0].potential_savings == Decimal("50.00")
        assert payloads[0].category == "Food"

    def test_code_fence_is_stripped(self):
        text = '```json\n[{"title": "A", "description": "B"}]\n```'
        assert [p.title for p in parse_recommendations(text)] == ["A"]

    def test_missing_and_blank_fields_get_defaults(self):
        payloads = parse_recommendations('[{"title": "   "}, {}]')

        assert all(p.title == DEFAULT_TITLE for p in payloads)
        assert all(p.description == DEFAULT_DESCRIPTION for p in payloads)

    def test_fields_are_trimmed(self):
        payloads = parse_recommendations(
            '[{"title": "  Bike  ", "description": " Skip the bus. "}]',
        )
        assert payloads[0].title == "Bike"
        assert payloads[0].description == "Skip the bus."

    def test_extra_fields_are_ignored(self):
        payloads = parse_recommendations('[{"title": "A", "priority": "high"}]')
        assert payloads[0].title == "A"

    def test_empty_array(self):
        assert parse_recommendations("[]") == []

    @pytest.mark.parametrize(
        "text",
        [
            "Sure! Here are some tips: spend less.",
            '{"title": "Not an array"}',
            "[1, 2, 3]",
            '["just a string"]',
            "",
        ],
    )
    def test_malformed_output_raises(self, text):
        with pytest.raises(RecommendationParseError) as exc_info:
            parse_recommendations(text)
        assert exc_info.value.code is ErrorCode.PARSE_ERROR


class TestCoerceSavings:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (25, Decimal("25.00")),
            (12.5, Decimal("12.50")),
            ("30", Decimal("30.00")),
            (0, Decimal("0.00")),
            (-5, None),
            ("about 20", None),
            ("NaN", None),
            ("Infinity", None),
            (True, None),
            (None, None),
            ([10], None),
            (1e30, None),
            ("99999999999999999999999999999", None),
            (1e12, None),
            ("10000000000", None),
            ("9999999999.99", Decimal("9999999999.99")),
        ],
    )
    def test_coercion(self, value, expected):
        assert coerce_savings(value) == expected


class TestBuildRecommendations:
    def test_category_name_resolves_to_id(self, summary):
        text = '[{"title": "A", "description": "B", "category": "food"}]'

        recommendations, used_fallback = build_recommendations(text, USER_ID, summary)

        assert not used_fallback
        assert recommendations[0].category_id == FOOD_ID
        assert recommendations[0].user_id == USER_ID
        assert recommendations[0].recommendation_type == "savings"

    def test_unknown_category_is_left_empty(self, summary):
        text = '[{"title": "A", "description": "B", "category": "Travel"}]'

        recommendations, _ = build_recommendations(text, USER_ID, summary)

        assert recommendations[0].category_id is None

    def test_malformed_output_yields_exactly_one_fallback(self, summary):
        recommendations, used_fallback = build_recommendations(
            "I cannot help with that.",
            USER_ID,
            summary,
        )

        assert used_fallback
        assert len(recommendations) == 1
        assert recommendations[0].title == FALLBACK_TITLE
        assert recommendations[0].potential_savings is None

    def test_empty_array_yields_no_recommendations(self, summary):
        assert build_recommendations("[]", USER_ID, summary) == ([], False)

    def test_negative_savings_are_dropped(self, summary):
        text = '[{"title": "A", "description": "B", "potential_savings": -40}]'

        recommendations, _ = build_recommendations(text, USER_ID, summary)

        assert recommendations[0].potential_savings is None

    @pytest.mark.parametrize(
        "savings",
        ["1e30", '"99999999999999999999999999999"', "1e12"],
    )
    def test_oversized_savings_are_dropped(self, summary, savings):
        text = (
            '[{"title": "Cut", "description": "x", '
            f'"potential_savings": {savings}}}]'
        )

        recommendations, used_fallback = build_recommendations(text, USER_ID, summary)

        assert not used_fallback
        assert recommendations[0].title == "Cut"
        assert recommendations[0].potential_savings is None

    def test_long_title_is_cut_to_column_length(self, summary):
        text = '[{"title": "' + "x" * 300 + '", "description": "B"}]'

        recommendations, _ = build_recommendations(text, USER_ID, summary)

        assert recommendations[0].title == "x" * MAX_TITLE_LENGTH
