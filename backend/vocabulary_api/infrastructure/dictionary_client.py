"""Resilient Dictionary Client - wraps httpx.AsyncClient with retry, backoff, and error mapping.

Invariants:
    - 404 from the provider means "no definitions": returns None, never raises
    - Rate limits (429): exponential backoff with jitter, respects Retry-After header
    - Transient errors (5xx, connection): max_retries retries with exponential backoff
    - Client errors (4xx except 404/429), timeouts, malformed bodies: immediate failure
    - All failures mapped to DictionaryAPIError (core/errors.py)

Design Decisions:
    - Wrapper over raw client: isolates retry logic from the word service
    - ±25% jitter on backoff: prevents thundering herd on a shared public API
    - Provider payload parsed by a pure function (parse_dictionary_entries) for direct testing
"""

import asyncio
import random
import logging
from urllib.parse import quote

import httpx

from vocabulary_api.core.domain_types import WordText
from vocabulary_api.core.errors import DictionaryAPIError, ErrorContext
from vocabulary_api.schemas.word import DefinitionEntry, Meaning, WordLookupResponse

logger = logging.getLogger(__name__)


def parse_dictionary_entries(word: str, payload: object) -> WordLookupResponse | None:
    """Merge dictionaryapi.dev entries into one lookup payload.

    Meanings sharing a part of speech across entries are merged in order.
    Returns None when the payload carries no usable definition. Entries, meanings
    and senses that are not JSON objects are skipped; a non-list payload raises
    ValueError.
    """
    if not isinstance(payload, list):
        raise ValueError("expected a list of entries")

    phonetic: str | None = None
    merged: dict[str, list[DefinitionEntry]] = {}
    for entry in payload:
        if not isinstance(entry, dict):
            continue
        phonetic = phonetic or _extract_phonetic(entry)
        for meaning in _dicts(entry.get("meanings")):
            part = meaning.get("partOfSpeech")
            part = part.strip().lower() if isinstance(part, str) else ""
            for d in _dicts(meaning.get("definitions")):
                text = d.get("definition")
                if not isinstance(text, str) or not text.strip():
                    continue
                example = d.get("example")
                merged.setdefault(part or "unknown", []).append(
                    DefinitionEntry(
                        definition=text.strip(),
                        example=example if isinstance(example, str) and example else None,
                    ),
                )

    if not merged:
        return None
    headword = payload[0].get("word") if isinstance(payload[0], dict) else None
    if not isinstance(headword, str) or not headword:
        headword = word
    return WordLookupResponse(
        word=headword.lower(),
        phonetic=phonetic,
        meanings=[
            Meaning(part_of_speech=part, definitions=defs)
            for part, defs in merged.items()
        ],
    )


def _dicts(items: object) -> list[dict]:
    """Keep only the object entries of a JSON array; anything else yields nothing."""
    if not isinstance(items, list):
        return []
    return [item for item in items if isinstance(item, dict)]


def _extract_phonetic(entry: dict) -> str | None:
    if isinstance(entry.get("phonetic"), str) and entry["phonetic"]:
        return entry["phonetic"]
    for p in _dicts(entry.get("phonetics")):
        if isinstance(p.get("text"), str) and p["text"]:
            return p["text"]
    return None


class ResilientDictionaryClient:
    """Wraps httpx.AsyncClient with retry logic, timeouts, and error mapping."""

    def __init__(
        self,
        base_url: str,
        max_retries: int = 3,
        base_delay_ms: int = 500,
        max_delay_ms: int = 10_000,
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.client = httpx.AsyncClient(
            base_url=base_url,
            timeout=httpx.Timeout(timeout_seconds),
            headers={"Accept": "application/json"},
            transport=transport,
        )
        self.max_retries = max_retries
        self.base_delay_ms = base_delay_ms
        self.max_delay_ms = max_delay_ms

    async def fetch(self, word: WordText) -> WordLookupResponse | None:
        """Fetch definitions for a word, retrying transient failures."""
        context = ErrorContext(word=word)
        for attempt in range(self.max_retries + 1):
            try:
                response = await self.client.get(quote(word, safe=""))
            except httpx.TimeoutException:
                raise DictionaryAPIError(
                    "Dictionary API timeout", "timeout", context=context,
                )
            except httpx.TransportError as e:
                await self._handle_transient_error(e, attempt, context)
                continue

            if response.status_code == 404:
                logger.info(
                    "Dictionary has no entry",
                    extra={"word": word, "status_code": 404},
                )
                return None
            if response.status_code == 429:
                await self._handle_rate_limit(response, attempt, context)
                continue
            if response.status_code >= 500:
                await self._handle_transient_error(
                    f"HTTP {response.status_code}", attempt, context,
                )
                continue
            if response.status_code >= 400:
                raise DictionaryAPIError(
                    f"HTTP {response.status_code}", "client_error", context=context,
                )

            self._log_success(word, response, attempt)
            try:
                return parse_dictionary_entries(word, response.json())
            except ValueError as e:
                raise DictionaryAPIError(
                    f"Malformed response body: {e}", "malformed_response",
                    context=context,
                )

    async def close(self) -> None:
        await self.client.aclose()

    def _log_success(self, word: str, response: httpx.Response, attempt: int) -> None:
        logger.info(
            "Dictionary API success",
            extra={
                "word": word,
                "attempt": attempt + 1,
                "status_code": response.status_code,
            },
        )

    async def _handle_rate_limit(
        self, response: httpx.Response, attempt: int, context: ErrorContext,
    ) -> None:
        """Handle rate limit response with retry or raise."""
        retry_after_ms = self._extract_retry_after(response)
        if attempt >= self.max_retries:
            raise DictionaryAPIError(
                "Rate limit exceeded after retries",
                "rate_limit",
                retry_after_ms=retry_after_ms,
                context=context,
            )
        delay = retry_after_ms or self._backoff(attempt)
        logger.warning(
            f"Rate limit hit, retry after {delay}ms (attempt {attempt + 1})",
        )
        await asyncio.sleep(delay / 1000)

    async def _handle_transient_error(
        self, e: object, attempt: int, context: ErrorContext,
    ) -> None:
        """Handle transient errors with retry or raise."""
        if attempt >= self.max_retries:
            raise DictionaryAPIError(
                f"Transient failure after {self.max_retries} retries: {e}",
                "connection_error",
                context=context,
            )
        delay = self._backoff(attempt)
        logger.warning(f"Transient error, retry after {delay}ms: {e}")
        await asyncio.sleep(delay / 1000)

    def _backoff(self, attempt: int) -> int:
        """Exponential backoff with ±25% jitter."""
        delay = min(self.max_delay_ms, (2 ** attempt) * self.base_delay_ms)
        return int(delay * random.uniform(0.75, 1.25))  # nosec B311

    def _extract_retry_after(self, response: httpx.Response) -> int | None:
        """Extract Retry-After header (returns milliseconds)."""
        val = response.headers.get("retry-after")
        if val and val.isdigit():
            return int(val) * 1000
        return None
