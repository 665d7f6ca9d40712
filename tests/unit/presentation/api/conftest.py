"""Pytest fixtures for API tests.

Requests go through httpx.ASGITransport against an app whose database
session comes from an in-memory SQLite engine. The lifespan does not run,
so tables are created here.
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock
from uuid import UUID

import jwt
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from pydantic import SecretStr
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from spendsight.infrastructure.persistence.sqlalchemy.models import Base
from spendsight.presentation.api.app import API_V1_PREFIX, create_app
from spendsight.presentation.api.config import get_api_settings
from spendsight.presentation.api.dependencies import (
    get_db_session,
    get_savings_advisor,
)
from spendsight_config.settings import Settings

TEST_JWT_SECRET = "test-jwt-secret-for-testing-only-0123456789"


@pytest.fixture
def api_v1_prefix() -> str:
    """Get the API v1 prefix for building URLs."""
    return API_V1_PREFIX


@pytest.fixture
def api_settings() -> Settings:
    """Test API settings with debug enabled."""
    return Settings(
        jwt_secret_key=SecretStr(TEST_JWT_SECRET),
        database_url_override="sqlite+aiosqlite:///:memory:",
        api_debug=True,
        api_cors_origins="http://localhost:3000",
        ai_enabled=False,
    )


@pytest.fixture
def user_id() -> UUID:
    return UUID("12345678-1234-5678-1234-567812345678")


@pytest.fixture
def make_token(user_id):
    def _make(secret: str = TEST_JWT_SECRET, **overrides) -> str:
        now = datetime.now(tz=timezone.utc)
        payload = {
            "sub": str(user_id),
            "email": "test@example.com",
            "type": "access",
            "iat": now,
            "exp": now + timedelta(minutes=15),
        }
        payload.update(overrides)
        return jwt.encode(payload, secret, algorithm="HS256")

    return _make


@pytest.fixture
def auth_headers(make_token) -> dict[str, str]:
    return {"Authorization": f"Bearer {make_token()}"}


@pytest.fixture
def advisor() -> AsyncMock:
    """Reasoning-service stub; tests set its return value or side effect."""
    mock = AsyncMock()
    mock.suggest_savings = AsyncMock(return_value="[]")
    return mock


@pytest_asyncio.fixture
async def session_maker():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest.fixture
def app(api_settings, session_maker, advisor):
    application = create_app(api_settings)

    async def override_db_session():
        async with session_maker() as session:
            yield session

    application.dependency_overrides[get_api_settings] = lambda: api_settings
    application.dependency_overrides[get_db_session] = override_db_session
    application.dependency_overrides[get_savings_advisor] = lambda: advisor
    return application


@pytest_asyncio.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
