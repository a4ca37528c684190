"""Pytest configuration and fixtures for agora.

Service scenarios run against the in-memory repositories wired by
agora.core.container. DB-dependent fixtures use
agora.infrastructure.persistence.database and skip without Postgres.
"""

import uuid
from collections.abc import Awaitable, Callable

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from agora.application.dtos.user import UserResult
from agora.application.services.decision_log import InMemoryDecisionLog
from agora.core.config import Settings
from agora.core.container import Container, build_container, memory_repositories
from agora.infrastructure.persistence import database

RegisterUser = Callable[..., Awaitable[UserResult]]


@pytest.fixture
def settings() -> Settings:
    """Memory-backend settings with telemetry off (ignores the developer's .env)."""
    return Settings(
        _env_file=None,
        database_backend="memory",
        telemetry_enabled=False,
        identity_fallback_on_delete=True,
    )


@pytest.fixture
def decision_log() -> InMemoryDecisionLog:
    return InMemoryDecisionLog()


@pytest.fixture
def container(settings: Settings, decision_log: InMemoryDecisionLog) -> Container:
    """All modules wired over fresh in-memory repositories."""
    return build_container(memory_repositories(), settings, decision_log)


@pytest.fixture
def register_user(container: Container) -> RegisterUser:
    """Register a user with fresh ids; pass user_id/profile_id to pin them."""
    counter = 0

    async def _register(
        user_id: str | None = None,
        profile_id: str | None = None,
        username: str | None = None,
    ) -> UserResult:
        nonlocal counter
        counter += 1
        return await container.users.register_user(
            user_id=user_id or str(uuid.uuid4()),
            profile_id=profile_id or str(uuid.uuid4()),
            username=username or f"user_{counter}_{uuid.uuid4().hex[:6]}",
        )

    return _register


@pytest.fixture
async def db_session() -> AsyncSession:
    """Database session for repository tests. Rolls back after test.

    Requires DATABASE_BACKEND=postgres and DATABASE_URL with the schema
    migrated (alembic upgrade head). Skips when Postgres is not configured.
    """
    database._ensure_engine()
    if database.AsyncSessionLocal is None:
        pytest.skip(
            "Postgres not configured: set DATABASE_BACKEND=postgres and DATABASE_URL, "
            "then run: alembic upgrade head"
        )
    async with database.AsyncSessionLocal() as session:
        yield session
        await session.rollback()
