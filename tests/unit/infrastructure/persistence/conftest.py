"""
Pytest fixtures for infrastructure persistence tests.

Each test gets a fresh in-memory SQLite database (aiosqlite), so these tests
never touch a configured database.
"""

from dataclasses import dataclass
from typing import Optional
from uuid import UUID

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from spendsight.infrastructure.persistence.sqlalchemy.models import Base

TEST_USER_ID = UUID("12345678-1234-5678-1234-567812345678")
TEST_USER_EMAIL = "test@example.com"

# Secondary test user for isolation tests
TEST_USER_ID_2 = UUID("00000000-0000-0000-0000-000000000001")


@dataclass(frozen=True)
class MockUserContext:
    """Mock UserContext for testing."""

    user_id: UUID
    email: Optional[str] = TEST_USER_EMAIL


@pytest.fixture
def user_context():
    return MockUserContext(user_id=TEST_USER_ID)


@pytest.fixture
def other_user_context():
    return MockUserContext(user_id=TEST_USER_ID_2)


@pytest_asyncio.fixture(scope="function")
async def async_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def async_session(async_engine):
    """Isolated session; uncommitted changes are rolled back after the test."""
    session_maker = async_sessionmaker(
        async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    async with session_maker() as session:
        yield session
        await session.rollback()
