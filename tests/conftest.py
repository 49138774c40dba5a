"""
Shared pytest fixtures and configuration for all tests.
"""

import os
from collections.abc import AsyncGenerator, Generator
from typing import Any
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
import pytest_asyncio
import strawberry

# Settings are read at import time, so point them at SQLite before any app import
os.environ.setdefault("BOOKSHELF_DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("BOOKSHELF_DEBUG", "false")


@pytest_asyncio.fixture(scope="function")
async def database(tmp_path) -> AsyncGenerator[None, None]:
    """Initialize the shared engine against a fresh SQLite database file with tables."""
    from bookshelf.database.connection import create_tables, dispose_database, init_database

    init_database(f"sqlite+aiosqlite:///{tmp_path / 'bookshelf.db'}", force_reinit=True)
    await create_tables()
    yield
    await dispose_database()


@pytest_asyncio.fixture(scope="function")
async def db_session(database: None) -> AsyncGenerator[Any, None]:
    """Provide an async SQLAlchemy session on the test database."""
    _ = database

    from bookshelf.database.connection import get_async_session

    async with get_async_session() as session:
        yield session


@pytest.fixture
def mock_info() -> MagicMock:
    """Create a mock GraphQL info object with request context."""
    info = MagicMock(spec=strawberry.Info)
    info.context = {"request": MagicMock()}
    return info


@pytest.fixture
def mock_session() -> AsyncMock:
    """A stand-in AsyncSession for resolver unit tests."""
    return AsyncMock()


@pytest.fixture
def patch_session(mock_session: AsyncMock) -> Generator[Any, None, None]:
    """Return a helper that patches `get_async_session` in a resolver module."""
    patchers = []

    def _patch(module: str) -> MagicMock:
        patcher = patch(f"{module}.get_async_session")
        factory = patcher.start()
        factory.return_value.__aenter__.return_value = mock_session
        factory.return_value.__aexit__.return_value = False
        patchers.append(patcher)
        return factory

    yield _patch

    for patcher in patchers:
        patcher.stop()


@pytest.fixture(autouse=True)
def reset_environment() -> Generator[None, None, None]:
    """Reset environment variables for each test."""
    original_env = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original_env)
