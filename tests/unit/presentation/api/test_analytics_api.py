"""API tests for the analytics endpoints."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from uuid import UUID, uuid4

import pytest
from sqlalchemy import func, select

from spendsight.domain.shared.exceptions import ExternalServiceError
from spendsight.infrastructure.persistence.sqlalchemy.models import (
    BudgetModel,
    CategoryModel,
    InsightModel,
    RecommendationModel,
    RecurringPatternModel,
    TransactionModel,
)
from spendsight.presentation.api.dependencies import get_savings_advisor

AS_OF = "2026-06-15T12:00:00Z"
NOW = datetime(2026, 6, 15, 12, 0, tzinfo=timezone.utc)
OTHER_USER_ID = UUID("00000000-0000-0000-0000-000000000001")


async def seed(session_maker, *models) -> None:
    async with session_maker() as session:
        session.add_all(models)
        await session.commit()


async def count_rows(session_maker, model, **filters) -> int:
    async with session_maker() as session:
        stmt = select(func.count()).select_from(model).filter_by(**filters)
        return (await session.execute(stmt)).scalar_one()


def transaction(user_id, days_ago: int, amount: str, **overrides):
    return TransactionModel(
        id=uuid4(),
        user_id=user_id,
        timestamp=NOW - timedelta(days=days_ago),
        amount=Decimal(amount),
        **overrides,
    )


class TestHealth:
    @pytest.mark.asyncio
    async def test_health_check(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert response.json()["api_versions"] == ["v1"]


class TestAuthentication:
    @pytest.mark.asyncio
    async def test_missing_token(self, client, api_v1_prefix):
        response = await client.post(
            f"{api_v1_prefix}/analytics/recurring-patterns/detect",
        )

        assert response.status_code == 401
        assert response.json()["code"] == "AUTHENTICATION_FAILED"
        assert response.headers["www-authenticate"] == "Bearer"

    @pytest.mark.asyncio
    async def test_token_signed_with_other_key(
        self, client, api_v1_prefix, make_token
    ):
        token = make_token(secret="some-other-secret-key-0123456789abcdef")

        response = await client.get(
            f"{api_v1_prefix}/analytics/budgets/status",
            headers={"Authorization": f"Bearer {token}"},
        )

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_refresh_token_is_rejected(
        self, client, api_v1_prefix, make_token
    ):
        token = make_token(type="refresh")

        response = await client.get(
            f"{api_v1_prefix}/analytics/budgets/status",
            headers={"Authorization": f"Bearer {token}"},
        )

        assert response.status_code == 401
        assert response.json()["detail"] == "Access token required"

    @pytest.mark.asyncio
    async def test_unauthenticated_request_never_calls_reasoning_service(
        self, client, api_v1_prefix, advisor
    ):
        response = await client.post(
            f"{api_v1_prefix}/analytics/recommendations/generate",
        )

        assert response.status_code == 401
        advisor.suggest_savings.assert_not_awaited()


class TestRecurringPatternsEndpoint:
    @pytest.mark.asyncio
    async def test_detects_and_persists_monthly_subscription(
        self, client, api_v1_prefix, auth_headers, session_maker, user_id
    ):
        await seed(
            session_maker,
            *[
                transaction(user_id, days_ago=d, amount="15.99", merchant="Netflix")
                for d in (120, 90, 60, 30)
            ],
            transaction(OTHER_USER_ID, days_ago=10, amount="9.99", merchant="Other"),
        )

        response = await client.post(
            f"{api_v1_prefix}/analytics/recurring-patterns/detect",
            params={"as_of": AS_OF},
            headers=auth_headers,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["count"] == 1
        assert body["generation_id"] is not None
        item = body["items"][0]
        assert item["merchant"] == "Netflix"
        assert item["frequency"] == "monthly"
        assert item["occurrences"] == 4
        assert Decimal(item["amount"]) == Decimal("15.99")
        assert item["confidence"] == pytest.approx(0.99)

        assert await count_rows(
            session_maker, RecurringPatternModel, user_id=user_id, is_active=True
        ) == 1

    @pytest.mark.asyncio
    async def test_second_run_supersedes_first(
        self, client, api_v1_prefix, auth_headers, session_maker, user_id
    ):
        await seed(
            session_maker,
            *[
                transaction(user_id, days_ago=d, amount="15.99", merchant="Netflix")
                for d in (120, 90, 60, 30)
            ],
        )
        url = f"{api_v1_prefix}/analytics/recurring-patterns/detect"

        first = await client.post(url, params={"as_of": AS_OF}, headers=auth_headers)
        second = await client.post(url, params={"as_of": AS_OF}, headers=auth_headers)

        assert first.json()["generation_id"] != second.json()["generation_id"]
        assert await count_rows(
            session_maker, RecurringPatternModel, user_id=user_id, is_active=True
        ) == 1
        assert await count_rows(
            session_maker, RecurringPatternModel, user_id=user_id, is_active=False
        ) == 1

    @pytest.mark.asyncio
    async def test_no_transactions(self, client, api_v1_prefix, auth_headers):
        response = await client.post(
            f"{api_v1_prefix}/analytics/recurring-patterns/detect",
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert response.json() == {"count": 0, "items": [], "generation_id": None}


class TestInsightsEndpoint:
    @pytest.mark.asyncio
    async def test_trend_insight_is_stored(
        self, client, api_v1_prefix, auth_headers, session_maker, user_id
    ):
        await seed(
            session_maker,
            transaction(user_id, days_ago=60, amount="100.00", merchant="Shop"),
            transaction(user_id, days_ago=5, amount="200.00", merchant="Shop"),
        )

        response = await client.post(
            f"{api_v1_prefix}/analytics/insights/detect",
            params={"as_of": AS_OF},
            headers=auth_headers,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["count"] == 1
        assert body["items"][0]["insight_type"] == "trend"
        assert body["items"][0]["severity"] == "warning"
        assert await count_rows(session_maker, InsightModel, user_id=user_id) == 1


class TestBudgetStatusEndpoint:
    @pytest.mark.asyncio
    async def test_near_limit_budget(
        self, client, api_v1_prefix, auth_headers, session_maker, user_id
    ):
        food = CategoryModel(id=uuid4(), name="Food")
        await seed(
            session_maker,
            food,
            BudgetModel(
                id=uuid4(),
                user_id=user_id,
                name="Food",
                amount=Decimal("500.00"),
                category_id=food.id,
            ),
            transaction(user_id, days_ago=3, amount="250.00", category_id=food.id),
            transaction(user_id, days_ago=1, amount="150.00", category_id=food.id),
            # Previous month, not counted
            transaction(user_id, days_ago=40, amount="300.00", category_id=food.id),
        )

        response = await client.get(
            f"{api_v1_prefix}/analytics/budgets/status",
            params={"as_of": AS_OF},
            headers=auth_headers,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["period_start"].startswith("2026-06-01T00:00:00")
        item = body["items"][0]
        assert item["alert_level"] == "near_limit"
        assert Decimal(item["spent"]) == Decimal("400")
        assert Decimal(item["remaining"]) == Decimal("100")


class TestRecommendationsEndpoint:
    @pytest.mark.asyncio
    async def test_generates_and_persists(
        self, client, api_v1_prefix, auth_headers, session_maker, user_id, advisor
    ):
        await seed(
            session_maker,
            transaction(user_id, days_ago=10, amount="80.00", merchant="Bistro"),
        )
        advisor.suggest_savings.return_value = (
            '[{"title": "Eat out less", "description": "Cook twice a week.", '
            '"potential_savings": 40}]'
        )

        response = await client.post(
            f"{api_v1_prefix}/analytics/recommendations/generate",
            params={"as_of": AS_OF},
            headers=auth_headers,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["count"] == 1
        assert body["used_fallback"] is False
        assert Decimal(body["items"][0]["potential_savings"]) == Decimal("40")
        assert await count_rows(
            session_maker, RecommendationModel, user_id=user_id
        ) == 1

    @pytest.mark.asyncio
    async def test_malformed_answer_returns_fallback(
        self, client, api_v1_prefix, auth_headers, session_maker, user_id, advisor
    ):
        await seed(
            session_maker,
            transaction(user_id, days_ago=10, amount="80.00", merchant="Bistro"),
        )
        advisor.suggest_savings.return_value = "Sure! Here are some tips."

        response = await client.post(
            f"{api_v1_prefix}/analytics/recommendations/generate",
            params={"as_of": AS_OF},
            headers=auth_headers,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["used_fallback"] is True
        assert body["count"] == 1
        assert body["items"][0]["potential_savings"] is None

    @pytest.mark.asyncio
    async def test_unreachable_service_returns_502_and_stores_nothing(
        self, client, api_v1_prefix, auth_headers, session_maker, user_id, advisor
    ):
        await seed(
            session_maker,
            transaction(user_id, days_ago=10, amount="80.00", merchant="Bistro"),
        )
        advisor.suggest_savings.side_effect = ExternalServiceError(
            "Reasoning service is unavailable",
        )

        response = await client.post(
            f"{api_v1_prefix}/analytics/recommendations/generate",
            params={"as_of": AS_OF},
            headers=auth_headers,
        )

        assert response.status_code == 502
        assert response.json() == {
            "detail": "Reasoning service is unavailable",
            "code": "EXTERNAL_SERVICE_ERROR",
        }
        assert await count_rows(session_maker, RecommendationModel) == 0

    @pytest.mark.asyncio
    async def test_disabled_service_returns_502(
        self, app, client, api_v1_prefix, auth_headers, session_maker, user_id
    ):
        app.dependency_overrides[get_savings_advisor] = lambda: None
        await seed(
            session_maker,
            transaction(user_id, days_ago=10, amount="80.00", merchant="Bistro"),
        )

        response = await client.post(
            f"{api_v1_prefix}/analytics/recommendations/generate",
            params={"as_of": AS_OF},
            headers=auth_headers,
        )

        assert response.status_code == 502
        assert response.json()["detail"] == "Reasoning service is not configured"
