"""Word Routes - lookup, cache-only read, partial-match search, statistics.

Invariants:
    - Validation runs before the WordService is touched; rejected requests never reach it
    - Every response is an ApiResponse envelope (success, data, error)
    - Collaborator "not found" → 404 with its message; collaborator exception → 500,
      logged with the word/term, generic message returned
    - Empty search results are a 200 with an empty list, never a 404

Design Decisions:
    - WordService injected via Depends(get_word_service): tests override it with fakes
    - Explicit try/except per route (not only the global handler): the log line carries
      the request's word or term, and the 500 envelope is produced in one place per endpoint
"""

import logging

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse

from vocabulary_api.core.domain_types import DEFAULT_MAX_RESULTS
from vocabulary_api.core.enforce_params import (
    validate_lookup_word, validate_cache_word, validate_search_params,
)
from vocabulary_api.core.errors import GENERIC_ERROR_MESSAGE
from vocabulary_api.core.repository_protocols import WordService
from vocabulary_api.schemas.envelope import ApiResponse
from vocabulary_api.schemas.word import WordDto, WordLookupResponse, WordStatistics
from vocabulary_api.services.word_service import get_word_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/words", tags=["words"])

_ERROR_RESPONSES = {
    400: {"model": ApiResponse[None], "description": "Invalid parameters"},
    500: {"model": ApiResponse[None], "description": "Internal error"},
}


def _envelope(status_code: int, body: ApiResponse) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


def _ok(data) -> JSONResponse:
    return _envelope(status.HTTP_200_OK, ApiResponse.success_result(data))


def _bad_request(error: dict) -> JSONResponse:
    return _envelope(
        status.HTTP_400_BAD_REQUEST, ApiResponse.error_result(error["message"]),
    )


def _not_found(message: str) -> JSONResponse:
    return _envelope(status.HTTP_404_NOT_FOUND, ApiResponse.error_result(message))


def _internal_error() -> JSONResponse:
    return _envelope(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        ApiResponse.error_result(GENERIC_ERROR_MESSAGE),
    )


@router.get(
    "/lookup/{word}",
    response_model=ApiResponse[WordLookupResponse],
    responses={**_ERROR_RESPONSES, 404: {"model": ApiResponse[None]}},
)
async def lookup_word(
    word: str, service: WordService = Depends(get_word_service),
):
    """Look up a word: local cache first, then the external dictionary."""
    error = validate_lookup_word(word)
    if error:
        logger.warning(
            f"Word lookup rejected: {error['message']}",
            extra={"word": word[:100], "error_code": error["error_code"]},
        )
        return _bad_request(error)

    try:
        logger.info("Looking up word", extra={"word": word})
        result = await service.lookup(word)
    except Exception:
        logger.error(
            "Unhandled error during word lookup",
            extra={"word": word}, exc_info=True,
        )
        return _internal_error()

    if result.success:
        return _ok(result.payload)
    return _not_found(result.error_message or "Word not found")


@router.get(
    "/cache/{word}",
    response_model=ApiResponse[WordDto],
    responses={**_ERROR_RESPONSES, 404: {"model": ApiResponse[None]}},
)
async def get_from_cache(
    word: str, service: WordService = Depends(get_word_service),
):
    """Read a word from the local cache only. Never calls the dictionary."""
    error = validate_cache_word(word)
    if error:
        return _bad_request(error)

    try:
        record = await service.get_from_cache(word)
    except Exception:
        logger.error(
            "Error retrieving word from cache",
            extra={"word": word}, exc_info=True,
        )
        return _internal_error()

    if record is not None:
        return _ok(record)
    return _not_found("Word not found in cache")


@router.get(
    "/search",
    response_model=ApiResponse[list[WordDto]],
    responses=_ERROR_RESPONSES,
)
async def search_words(
    search_term: str | None = Query(None, alias="searchTerm"),
    max_results: int = Query(DEFAULT_MAX_RESULTS, alias="maxResults"),
    service: WordService = Depends(get_word_service),
):
    """Partial-match search over cached words."""
    error = validate_search_params(search_term, max_results)
    if error:
        return _bad_request(error)

    try:
        logger.info(
            "Searching words",
            extra={"search_term": search_term, "max_results": max_results},
        )
        results = await service.search(search_term, max_results)
    except Exception:
        logger.error(
            "Error searching words",
            extra={"search_term": search_term}, exc_info=True,
        )
        return _internal_error()

    return _ok(results)


@router.get(
    "/statistics",
    response_model=ApiResponse[WordStatistics],
    responses={500: _ERROR_RESPONSES[500]},
)
async def get_statistics(service: WordService = Depends(get_word_service)):
    """Aggregate cache statistics."""
    try:
        logger.info("Retrieving word statistics")
        stats = await service.get_statistics()
    except Exception:
        logger.error("Error retrieving word statistics", exc_info=True)
        return _internal_error()
    return _ok(stats)
