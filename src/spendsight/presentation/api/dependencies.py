"""FastAPI dependency injection for the SpendSight API.

Provides dependencies for:
- Database sessions
- Authentication (user context from JWT)
- Repository factory for user-scoped repositories
- The reasoning-service adapter
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Annotated, AsyncGenerator, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from spendsight.application.context import UserContext
from spendsight.application.ports import SavingsAdvisorPort
from spendsight.domain.shared.exceptions import AuthenticationError
from spendsight.infrastructure.persistence.sqlalchemy.repositories import (
    SQLAlchemyRepositoryFactory,
    create_savings_advisor_from_settings,
)
from spendsight.infrastructure.security import JWTTokenVerifier
from spendsight.presentation.api.config import get_api_settings
from spendsight_config.settings import Settings, get_settings

logger = logging.getLogger(__name__)

# Security scheme for JWT Bearer tokens
security = HTTPBearer(auto_error=False)


@lru_cache()
def get_database_url() -> str:
    """Get database URL from application settings."""
    url = get_settings().database_url

    # Ensure data directory exists for SQLite
    if url.startswith("sqlite") and ":memory:" not in url:
        db_path = url.split("///")[-1]
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    return url


# -----------------------------------------------------------------------------
# Database Engine & Session (Singleton)
# -----------------------------------------------------------------------------


@lru_cache(maxsize=1)
def get_engine() -> AsyncEngine:
    """
    Get the shared async database engine (singleton).

    The engine manages the connection pool and is reused across all requests.
    """
    return create_async_engine(
        get_database_url(),
        echo=False,
        pool_pre_ping=True,  # Verify connections before use
    )


@lru_cache(maxsize=1)
def get_session_maker() -> async_sessionmaker[AsyncSession]:
    """Get the shared async session maker (singleton)."""
    return async_sessionmaker(
        get_engine(),
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Database session dependency.

    Creates an async session for the request using the shared engine/pool.
    """
    async with get_session_maker()() as session:
        yield session


# Type alias for injected session
DBSession = Annotated[AsyncSession, Depends(get_db_session)]


# -----------------------------------------------------------------------------
# Authentication
# -----------------------------------------------------------------------------


def get_token_verifier(
    settings: Settings = Depends(get_api_settings),
) -> JWTTokenVerifier:
    """Get the JWT verifier configured with the shared secret."""
    return JWTTokenVerifier(secret_key=settings.jwt_secret_key.get_secret_value())


async def get_user_context(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    verifier: JWTTokenVerifier = Depends(get_token_verifier),
) -> UserContext:
    """
    Resolve the caller identity from the Authorization header.

    Runs before any repository is created, so an unauthenticated request
    never reaches storage.

    Raises
    ------
    AuthenticationError
        If the header is missing or the token does not verify
    """
    if credentials is None:
        raise AuthenticationError()

    try:
        return verifier.verify(credentials.credentials)
    except AuthenticationError as e:
        logger.warning("Invalid token: %s", e)
        raise


# Type alias for injected user context
CurrentUserContext = Annotated[UserContext, Depends(get_user_context)]


# -----------------------------------------------------------------------------
# Repository Factory & Reasoning Service
# -----------------------------------------------------------------------------


async def get_repository_factory(
    session: AsyncSession = Depends(get_db_session),
    user_context: UserContext = Depends(get_user_context),
) -> SQLAlchemyRepositoryFactory:
    """
    Get repository factory for the current user.

    The factory creates user-scoped repositories for analytics runs.
    """
    return SQLAlchemyRepositoryFactory(session=session, user_context=user_context)


# Type alias for injected repository factory
RepoFactory = Annotated[SQLAlchemyRepositoryFactory, Depends(get_repository_factory)]


def get_savings_advisor() -> Optional[SavingsAdvisorPort]:
    """Get the configured reasoning-service adapter (None when disabled)."""
    return create_savings_advisor_from_settings()


SavingsAdvisor = Annotated[Optional[SavingsAdvisorPort], Depends(get_savings_advisor)]
