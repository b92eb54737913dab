"""
Database configuration and session management.
Uses a SQLAlchemy async engine built lazily from the store settings.
"""
import logging
from typing import AsyncGenerator, Optional

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker

from app.config import settings
from app.exceptions import StoreConfigurationError
from app.models.base import Base

logger = logging.getLogger(__name__)

_engine: Optional[AsyncEngine] = None
_session_factory: Optional[async_sessionmaker] = None


def build_store_url(store_url: Optional[str], service_key: Optional[str]):
    """
    Combine the store URL and the service key into a connection URL.

    Raises:
        StoreConfigurationError: If either value is missing
    """
    if not store_url or not service_key:
        raise StoreConfigurationError(
            "Missing STORE_URL or STORE_SERVICE_KEY environment variables."
        )
    return make_url(store_url).set(password=service_key)


def get_engine() -> AsyncEngine:
    """Return the shared async engine, creating it on first use."""
    global _engine
    if _engine is None:
        url = build_store_url(settings.store_url, settings.store_service_key)
        engine_kwargs = {"echo": False, "pool_pre_ping": True}
        if url.get_backend_name() != "sqlite":
            engine_kwargs.update(pool_size=10, max_overflow=20)
        _engine = create_async_engine(url, **engine_kwargs)
        logger.info(
            "Store engine created",
            extra={"event": "store_engine_created", "backend": url.get_backend_name()}
        )
    return _engine


def get_session_factory() -> async_sessionmaker:
    """Return the shared session factory bound to the engine."""
    global _session_factory
    if _session_factory is None:
        _session_factory = async_sessionmaker(
            get_engine(),
            class_=AsyncSession,
            expire_on_commit=False,
            autocommit=False,
            autoflush=False,
        )
    return _session_factory


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency for FastAPI routes to get database session.
    Usage: db: AsyncSession = Depends(get_db)
    """
    async with get_session_factory()() as session:
        try:
            yield session
        finally:
            await session.close()


async def init_db():
    """
    Initialize database: create tables that do not exist yet.
    Called on application startup; fails fast when the store is not configured.
    """
    from app.models.anon_usage import AnonUsage  # noqa: F401
    from app.models.profile import Profile  # noqa: F401
    from app.models.dream import Dream  # noqa: F401

    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine():
    """Close pooled connections and forget the shared handle."""
    global _engine, _session_factory
    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _session_factory = None
