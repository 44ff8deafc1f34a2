"""Pytest fixtures for SQLAlchemy integration tests."""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from identity_admin.infrastructure.auth import InMemoryIdentityProvider
from identity_admin.infrastructure.persistence.sqlalchemy import (
    Base,
    SQLAlchemyDomainEventRepository,
    SQLAlchemyRoleRepository,
    SQLAlchemyUserGroupRepository,
    SQLAlchemyUserRepository,
)


@pytest.fixture
async def engine():
    """Create async SQLite engine for testing.

    Returns:
        Async SQLAlchemy engine.
    """
    # In-memory SQLite, одне з'єднання на весь test (інакше кожна session бачить порожню БД)
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
async def session_factory(engine):
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,  # Важливо для testing
    )


@pytest.fixture
def identity_provider():
    return InMemoryIdentityProvider()


@pytest.fixture
def event_repository(session_factory):
    return SQLAlchemyDomainEventRepository(session_factory)


@pytest.fixture
def user_repository(session_factory, event_repository, identity_provider):
    return SQLAlchemyUserRepository(session_factory, event_repository, identity_provider)


@pytest.fixture
def user_group_repository(session_factory, event_repository):
    return SQLAlchemyUserGroupRepository(session_factory, event_repository)


@pytest.fixture
def role_repository(session_factory, event_repository):
    return SQLAlchemyRoleRepository(session_factory, event_repository)
