"""
Shared test fixtures and configuration for entire test suite.

Provides: In-memory SQLite store, in-memory store, caller identity
Dependencies: pytest, pytest-asyncio, sqlalchemy, aiosqlite
System role: Test infrastructure and fixture management
"""

import pytest


@pytest.fixture
def user_id() -> str:
    """Provide caller identity."""
    return "user-1"


@pytest.fixture
async def session_factory():
    """
    Create in-memory SQLite async database for testing.

    Yields:
        async_sessionmaker: Session factory bound to a fresh schema
    """
    from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
    from sqlalchemy.pool import StaticPool

    from mathchat.boundary.db.connection import create_tables

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await create_tables(engine)

    yield async_sessionmaker(engine, autoflush=False, expire_on_commit=False)

    await engine.dispose()


@pytest.fixture
def sql_store(session_factory):
    """Provide SqlChatStore on the in-memory database."""
    from mathchat.boundary.store.sql_store import SqlChatStore

    return SqlChatStore(session_factory)


@pytest.fixture
def memory_store():
    """Provide a fresh InMemoryChatStore."""
    from mathchat.boundary.store.memory_store import InMemoryChatStore

    return InMemoryChatStore()
