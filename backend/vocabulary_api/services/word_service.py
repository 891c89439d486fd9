"""Word Service - cache-first lookup with dictionary fallback, search, and statistics.

Invariants:
    - Every input word normalized once, here, before any IO
    - Cache hit → no provider call; lookup_count incremented
    - Provider hit → persisted before the payload is returned
    - Provider "no entry" → LookupResult.not_found, never an exception
    - Infrastructure failures propagate as VocabularyError subclasses

Design Decisions:
    - Collaborators (repository, dictionary client) injected via constructor:
      routes receive a ready WordService through FastAPI Depends
    - Dictionary client lives on app.state (one pooled httpx client per process)
"""

import logging

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from vocabulary_api.core.domain_types import LookupSource, normalize_word
from vocabulary_api.core.repository_protocols import DictionaryClient, WordRepository
from vocabulary_api.core.word_stats import compute_word_statistics
from vocabulary_api.infrastructure.database import get_db
from vocabulary_api.schemas.word import (
    DefinitionEntry, LookupResult, Meaning, WordDto, WordLookupResponse, WordStatistics,
)
from vocabulary_api.services.word_repository import SqlWordRepository

logger = logging.getLogger(__name__)


def to_lookup_payload(record: WordDto) -> WordLookupResponse:
    """Group a cached record's flat definitions by part of speech."""
    grouped: dict[str, list[DefinitionEntry]] = {}
    for d in record.definitions:
        grouped.setdefault(d.part_of_speech, []).append(
            DefinitionEntry(definition=d.definition, example=d.example),
        )
    return WordLookupResponse(
        word=record.text,
        phonetic=record.phonetic,
        meanings=[
            Meaning(part_of_speech=part, definitions=defs)
            for part, defs in grouped.items()
        ],
    )


class CachedWordService:
    """WordService backed by a local repository and an external dictionary."""

    def __init__(self, repository: WordRepository, dictionary: DictionaryClient):
        self.repository = repository
        self.dictionary = dictionary

    async def lookup(self, word: str) -> LookupResult:
        text = normalize_word(word)
        cached = await self.repository.get_by_text(text)
        if cached:
            await self.repository.record_lookup(text)
            logger.info("Cache hit", extra={"word": text, "source": "cache"})
            return LookupResult.found(to_lookup_payload(cached), LookupSource.CACHE)

        entry = await self.dictionary.fetch(text)
        if entry is None:
            return LookupResult.not_found(f"'{text}' was not found in the dictionary")

        entry.word = text
        await self.repository.save_lookup(entry)
        await self.repository.record_lookup(text)
        return LookupResult.found(entry, LookupSource.EXTERNAL)

    async def get_from_cache(self, word: str) -> WordDto | None:
        return await self.repository.get_by_text(normalize_word(word))

    async def search(self, search_term: str, max_results: int) -> list[WordDto]:
        return await self.repository.search(search_term, max_results)

    async def get_statistics(self) -> WordStatistics:
        return compute_word_statistics(
            await self.repository.definition_counts(),
            await self.repository.word_lookup_counts(),
        )


async def get_word_service(
    request: Request, db: AsyncSession = Depends(get_db),
) -> CachedWordService:
    """FastAPI dependency - one service per request, sharing the app's dictionary client."""
    return CachedWordService(
        SqlWordRepository(db), request.app.state.dictionary_client,
    )
