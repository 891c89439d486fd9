"""Request Parameter Enforcement - validation rules for word endpoint inputs.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - Return error dict on violation, None on success
    - validate_* functions chain checks in order - first error wins
    - One message per violated rule (messages are part of the public contract)

Design Decisions:
    - Return dicts (not exceptions): routes decide the response shape,
      keeping the rejection path free of try/except
    - Search term length is measured on the raw term (whitespace counts once
      the term is known to be non-blank)
"""

from vocabulary_api.core.domain_types import (
    MAX_WORD_LENGTH,
    MIN_SEARCH_TERM_LENGTH,
    MIN_MAX_RESULTS,
    MAX_MAX_RESULTS,
)


def _error(field: str, message: str) -> dict:
    return {
        "status": "error",
        "error_code": "VALIDATION_ERROR",
        "field": field,
        "message": message,
    }


def check_word_present(word: str | None) -> dict | None:
    """Rule 1: word must contain at least one non-whitespace character."""
    if word is None or not word.strip():
        return _error("word", "Word parameter is required")
    return None


def check_word_length(word: str) -> dict | None:
    """Rule 2: word must not exceed MAX_WORD_LENGTH characters."""
    if len(word) > MAX_WORD_LENGTH:
        return _error("word", "Word parameter is too long")
    return None


def check_search_term_present(search_term: str | None) -> dict | None:
    """Rule 3: search term must contain at least one non-whitespace character."""
    if search_term is None or not search_term.strip():
        return _error("searchTerm", "Search term is required")
    return None


def check_search_term_length(search_term: str) -> dict | None:
    """Rule 4: search term must be at least MIN_SEARCH_TERM_LENGTH characters."""
    if len(search_term) < MIN_SEARCH_TERM_LENGTH:
        return _error(
            "searchTerm",
            f"Search term must be at least {MIN_SEARCH_TERM_LENGTH} characters",
        )
    return None


def check_max_results(max_results: int) -> dict | None:
    """Rule 5: max results must be within [MIN_MAX_RESULTS, MAX_MAX_RESULTS]."""
    if max_results < MIN_MAX_RESULTS or max_results > MAX_MAX_RESULTS:
        return _error(
            "maxResults",
            f"Max results must be between {MIN_MAX_RESULTS} and {MAX_MAX_RESULTS}",
        )
    return None


def validate_lookup_word(word: str | None) -> dict | None:
    """Chain lookup rules: presence, then length."""
    error = check_word_present(word)
    if error:
        return error
    return check_word_length(word)


def validate_cache_word(word: str | None) -> dict | None:
    """Cache reads only require a non-blank word."""
    return check_word_present(word)


def validate_search_params(
    search_term: str | None, max_results: int,
) -> dict | None:
    """Chain search rules: term presence, term length, result limit."""
    error = check_search_term_present(search_term)
    if error:
        return error
    error = check_search_term_length(search_term)
    if error:
        return error
    return check_max_results(max_results)
