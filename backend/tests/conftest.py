"""Shared fixtures: test settings, a throwaway SQLite database and seed helpers."""

import asyncio
import os

# Settings are read at import time; point them at SQLite before importing the app
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["ENVIRONMENT"] = "test"
os.environ["LOG_LEVEL"] = "WARNING"

from pathlib import Path

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

import admissions.models.domain  # noqa: F401  registers every table on the metadata
from admissions.config import settings
from admissions.db.base import Base


@pytest.fixture
def session_factory(tmp_path: Path):
    """Session factory bound to a fresh SQLite file with the full schema."""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'admissions.db'}",
        poolclass=NullPool,
    )

    async def create_schema() -> None:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    asyncio.run(create_schema())

    yield async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

    asyncio.run(engine.dispose())


@pytest.fixture
def workflow_settings(monkeypatch):
    """Let tests flip workflow and engine settings without leaking them."""

    def apply(**overrides) -> None:
        for name, value in overrides.items():
            monkeypatch.setattr(settings, name, value)

    return apply
