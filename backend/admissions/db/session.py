"""Async engine, session factory and the request-scoped session dependency."""

from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from admissions.config import settings


def async_database_url(url: str) -> str:
    """Use the asyncpg driver for plain postgresql:// URLs."""
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    return url


def create_engine_from_settings() -> AsyncEngine:
    """
    Build the async engine for the configured database.

    Tests get a NullPool so every event loop opens its own connections.
    """
    options = {"echo": settings.ENVIRONMENT == "development"}
    if settings.ENVIRONMENT == "test":
        options["poolclass"] = NullPool
    else:
        options["pool_pre_ping"] = True
    return create_async_engine(async_database_url(settings.DATABASE_URL), **options)


engine = create_engine_from_settings()

SessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency yielding one session per request.

    Services commit their own work; whatever is still pending when the
    request fails is rolled back.
    """
    async with SessionLocal() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
