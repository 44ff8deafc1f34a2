"""Fixtures для e2e tests: реальний container поверх in-memory SQLite."""

import os

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

# Settings читаються при import main.py, тому env треба виставити до нього
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("ENVIRONMENT", "development")

from identity_admin.composition_root import create_container, seed_default_roles  # noqa: E402
from identity_admin.config import Settings, get_settings  # noqa: E402
from identity_admin.infrastructure.persistence.sqlalchemy import Base  # noqa: E402

get_settings.cache_clear()


@pytest.fixture
def settings():
    return Settings(
        database_url="sqlite+aiosqlite:///:memory:",
        secret_key="test-secret-key-0123456789-abcdefghij",
    )


@pytest.fixture
async def session_factory():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest.fixture
def dispatched_events():
    """Collects every dispatched event (registered before freeze)."""
    return []


@pytest.fixture
async def container(session_factory, settings, dispatched_events):
    async def collect(event) -> None:
        dispatched_events.append(event)

    extra = [
        (name, collect)
        for name in (
            "User.REGISTERED",
            "User.UPDATED",
            "User.DISABLED",
            "User.ACTIVATED",
            "User.DELETED",
            "User.ADDED_TO_USER_GROUP",
            "User.REMOVED_FROM_USER_GROUP",
            "UserGroup.CREATED",
            "UserGroup.UPDATED",
            "UserGroup.DELETED",
            "UserGroup.ROLE_ADDED",
            "UserGroup.ROLE_REMOVED",
        )
    ]
    container = create_container(session_factory, settings, extra_event_handlers=extra)
    await seed_default_roles(container.role_repository)
    return container
