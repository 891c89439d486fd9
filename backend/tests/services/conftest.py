"""Service test fixtures - async in-memory DB, repository, and a fake dictionary.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - FakeDictionary records every fetch so tests can assert "no provider call"

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for cache queries
    - StaticPool: one connection, so every session sees the same in-memory database
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool

from vocabulary_api.db.base import Base
import vocabulary_api.models  # noqa: F401
from vocabulary_api.services.word_repository import SqlWordRepository

from tests.services.fakes import FakeDictionary, make_entry


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def repository(test_db):
    return SqlWordRepository(test_db)


@pytest.fixture
def dictionary():
    return FakeDictionary({
        "hello": make_entry(
            "hello",
            ("noun", "A greeting.", None),
            ("verb", "To greet.", "She helloed me."),
        ),
    })


@pytest.fixture
async def seed_words(repository):
    """Cache a handful of words directly through the repository."""
    for word, part in [
        ("apple", "noun"), ("applesauce", "noun"), ("pineapple", "noun"),
        ("apply", "verb"), ("banana", "noun"), ("snapple", "noun"),
    ]:
        await repository.save_lookup(make_entry(word, (part, f"Meaning of {word}.", None)))
