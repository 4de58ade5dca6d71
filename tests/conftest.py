"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import AsyncGenerator
from datetime import datetime, timezone

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession

from yyc.engine import ProgressionEngine
from yyc.profile import Profile
from yyc.storage.database import close_db, create_tables, get_session, init_db

# Wednesday afternoon, UTC. All tests run against an explicit clock.
NOW = datetime(2026, 3, 4, 15, 30, 0, tzinfo=timezone.utc)


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def profile() -> Profile:
    """A brand new learner profile."""
    return Profile.fresh()


@pytest.fixture
def engine() -> ProgressionEngine:
    """Engine over a fresh profile with the built-in badge catalog."""
    return ProgressionEngine()


@pytest_asyncio.fixture
async def db_session(tmp_path) -> AsyncGenerator[AsyncSession, None]:
    """Session on a throwaway sqlite database with the snapshot table created."""
    await init_db(f"sqlite+aiosqlite:///{tmp_path / 'profile.db'}")
    await create_tables()

    sessions = get_session()
    session = await sessions.__anext__()
    yield session
    await sessions.aclose()
    await close_db()
