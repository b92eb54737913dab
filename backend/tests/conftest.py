"""
Test configuration and fixtures.
Uses an in-memory SQLite database (aiosqlite) shared through a static pool.
"""
import os

# Set test environment before any imports
os.environ["STORE_URL"] = "sqlite+aiosqlite://"
os.environ["STORE_SERVICE_KEY"] = "test-service-key"
os.environ["ENVIRONMENT"] = "test"

import pytest
from typing import AsyncGenerator

from fastapi import FastAPI
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from app.models.base import Base
from app.models.anon_usage import AnonUsage
from app.models.profile import Profile
from app.services.plans import current_month_key


TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest.fixture(scope="function")
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create a fresh database and session for each test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_maker = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )

    async with session_maker() as session:
        yield session

    await engine.dispose()


@pytest.fixture(scope="function")
async def used_anon_key(db_session: AsyncSession) -> AnonUsage:
    """Anonymous key that already used its submission."""
    row = AnonUsage(anon_key="used-key", used_count=1)
    db_session.add(row)
    await db_session.commit()
    return row


@pytest.fixture(scope="function")
def make_profile(db_session: AsyncSession):
    """Factory inserting a profile, defaulting to a free plan in the current month."""
    async def _make_profile(
        user_id: str,
        plan: str = "free",
        dreams_used_month: int = 0,
        images_used_month: int = 0,
        month_key: str = None,
    ) -> Profile:
        profile = Profile(
            user_id=user_id,
            plan=plan,
            dreams_used_month=dreams_used_month,
            images_used_month=images_used_month,
            month_key=month_key or current_month_key(),
            prefs={},
        )
        db_session.add(profile)
        await db_session.commit()
        return profile

    return _make_profile


def get_test_app(db_session: AsyncSession) -> FastAPI:
    """Create a test FastAPI app with overridden dependencies."""
    from app.main import app
    from app.database import get_db

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    return app


@pytest.fixture(scope="function")
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create async HTTP client for API testing."""
    app = get_test_app(db_session)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    # Clean up overrides
    app.dependency_overrides.clear()
