"""Word Service - cache-first lookup, dictionary fallback, search, statistics.

Invariants:
    - Cache hit never calls the dictionary and bumps lookup_count
    - Dictionary hit is persisted, so the next lookup is a cache hit
    - Dictionary miss is a LookupResult.not_found, not an exception
    - Dictionary failure propagates (route layer maps it to 500)
"""

import asyncio
from datetime import datetime, timezone

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)

from vocabulary_api.core.domain_types import LookupSource, WordText
from vocabulary_api.core.errors import DictionaryAPIError
from vocabulary_api.db.base import Base
from vocabulary_api.schemas.word import DefinitionDto, WordDto
from vocabulary_api.services.word_repository import SqlWordRepository
from vocabulary_api.services.word_service import CachedWordService, to_lookup_payload

from tests.services.fakes import make_entry


@pytest.fixture
def service(repository, dictionary):
    return CachedWordService(repository, dictionary)


async def test_lookup_miss_fetches_and_caches(service, dictionary, repository):
    result = await service.lookup("hello")

    assert result.success is True
    assert result.source == LookupSource.EXTERNAL
    assert [m.part_of_speech for m in result.payload.meanings] == ["noun", "verb"]
    assert dictionary.calls == ["hello"]

    cached = await service.get_from_cache("hello")
    assert cached is not None
    assert cached.lookup_count == 1


async def test_lookup_hit_skips_dictionary(service, dictionary, repository):
    await repository.save_lookup(make_entry("cached", ("noun", "Stored.", None)))

    result = await service.lookup("cached")

    assert result.success is True
    assert result.source == LookupSource.CACHE
    assert result.payload.meanings[0].definitions[0].definition == "Stored."
    assert dictionary.calls == []
    assert (await service.get_from_cache("cached")).lookup_count == 1


async def test_second_lookup_served_from_cache(service, dictionary):
    await service.lookup("hello")
    result = await service.lookup("hello")

    assert result.source == LookupSource.CACHE
    assert dictionary.calls == ["hello"]


async def test_lookup_normalizes_case_and_whitespace(service, dictionary):
    result = await service.lookup("  HeLLo ")

    assert result.success is True
    assert result.payload.word == "hello"
    assert dictionary.calls == ["hello"]


async def test_lookup_unknown_word_is_not_found(service, dictionary):
    result = await service.lookup("zzzzz")

    assert result.success is False
    assert result.payload is None
    assert "zzzzz" in result.error_message
    assert await service.get_from_cache("zzzzz") is None


async def test_lookup_propagates_dictionary_failure(service, dictionary):
    dictionary.error = DictionaryAPIError("boom", "connection_error")
    with pytest.raises(DictionaryAPIError):
        await service.lookup("hello")


async def test_get_from_cache_never_calls_dictionary(service, dictionary):
    assert await service.get_from_cache("hello") is None
    assert dictionary.calls == []


async def test_search_delegates_to_repository(service, seed_words):
    results = await service.search("app", 3)
    assert [w.text for w in results] == ["apple", "applesauce", "apply"]


async def test_statistics_reflect_cache(service, seed_words):
    await service.lookup("banana")
    await service.lookup("banana")
    await service.lookup("apple")

    stats = await service.get_statistics()

    assert stats.total_words == 6
    assert stats.total_definitions == 6
    assert stats.total_lookups == 3
    assert stats.part_of_speech_breakdown == {"noun": 5, "verb": 1}
    assert [w.word for w in stats.most_looked_up] == ["banana", "apple"]


def test_to_lookup_payload_groups_by_part_of_speech():
    record = WordDto(
        id=1, text="run", created_at=datetime.now(timezone.utc),
        definitions=[
            DefinitionDto(part_of_speech="verb", definition="Move fast."),
            DefinitionDto(part_of_speech="noun", definition="A jog."),
            DefinitionDto(part_of_speech="verb", definition="Operate."),
        ],
    )
    payload = to_lookup_payload(record)
    assert [m.part_of_speech for m in payload.meanings] == ["verb", "noun"]
    assert len(payload.meanings[0].definitions) == 2


# ─── concurrent first lookup ─────────────────────────────────────

@pytest.fixture
async def file_session_factory(tmp_path):
    """File-backed SQLite so each session gets its own connection."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'cache.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    await engine.dispose()


async def test_concurrent_first_lookups_share_one_row(file_session_factory, dictionary):
    async with file_session_factory() as db_a, file_session_factory() as db_b:
        a = CachedWordService(SqlWordRepository(db_a), dictionary)
        b = CachedWordService(SqlWordRepository(db_b), dictionary)

        results = await asyncio.gather(a.lookup("hello"), b.lookup("hello"))

    assert all(r.success for r in results)
    async with file_session_factory() as db:
        cached = await SqlWordRepository(db).get_by_text(WordText("hello"))
        stats = await SqlWordRepository(db).word_lookup_counts()
    assert stats == [("hello", 2)]
    assert len(cached.definitions) == 2
