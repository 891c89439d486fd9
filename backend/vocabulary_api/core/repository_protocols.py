"""Boundary Protocols - contracts between the route layer and the IO shell.

Invariants:
    - Routes depend on WordService only, never on the repository or HTTP client
    - All IO operations accessed through Protocol types
    - Implementations provided by the shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
    - Async in Protocol: every implementation does IO
"""

from typing import Protocol

from vocabulary_api.core.domain_types import WordText
from vocabulary_api.schemas.word import (
    LookupResult, WordDto, WordLookupResponse, WordStatistics,
)


class WordService(Protocol):
    """Contract for the lookup/search/statistics collaborator."""
    async def lookup(self, word: str) -> LookupResult: ...
    async def get_from_cache(self, word: str) -> WordDto | None: ...
    async def search(self, search_term: str, max_results: int) -> list[WordDto]: ...
    async def get_statistics(self) -> WordStatistics: ...


class WordRepository(Protocol):
    """Contract for the local word cache."""
    async def get_by_text(self, text: WordText) -> WordDto | None: ...
    async def save_lookup(self, entry: WordLookupResponse) -> WordDto: ...
    async def record_lookup(self, text: WordText) -> None: ...
    async def search(self, term: str, max_results: int) -> list[WordDto]: ...
    async def definition_counts(self) -> dict[str, int]: ...
    async def word_lookup_counts(self) -> list[tuple[str, int]]: ...


class DictionaryClient(Protocol):
    """Contract for the external dictionary provider."""
    async def fetch(self, word: WordText) -> WordLookupResponse | None: ...
