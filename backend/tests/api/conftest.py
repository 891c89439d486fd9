"""API test fixtures - FastAPI test clients with the WordService replaced or wired to a test DB.

Invariants:
    - `client` overrides get_word_service with a RecordingWordService (no DB, no network)
    - `db_client` keeps the real service but swaps get_db for in-memory SQLite
      and app.state.dictionary_client for a FakeDictionary
    - Overrides are cleared after every test

Design Decisions:
    - ASGITransport does not run the lifespan: app.state is seeded by hand
"""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool

from vocabulary_api.db.base import Base
import vocabulary_api.models  # noqa: F401
from vocabulary_api.infrastructure.database import get_db
from vocabulary_api.main import app
from vocabulary_api.services.word_service import get_word_service

from tests.services.fakes import FakeDictionary, make_entry
from tests.api.fake_word_service import RecordingWordService


@pytest.fixture
def word_service():
    return RecordingWordService()


@pytest.fixture
async def client(word_service):
    """Test client with the WordService dependency replaced by a fake."""
    app.dependency_overrides[get_word_service] = lambda: word_service
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def fake_dictionary():
    return FakeDictionary({
        "hello": make_entry(
            "hello",
            ("noun", "A greeting.", None),
            ("verb", "To greet.", "She helloed me."),
        ),
    })


@pytest.fixture
async def db_client(fake_dictionary):
    """Test client running the real WordService against in-memory SQLite."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    session_factory = async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False,
    )

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.state.dictionary_client = fake_dictionary

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    await engine.dispose()
