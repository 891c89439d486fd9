"""Error Hierarchy - status codes, categories and envelope conversion."""

from vocabulary_api.core.errors import (
    DatabaseError,
    DictionaryAPIError,
    ErrorCategory,
    ErrorContext,
    ErrorSeverity,
    GENERIC_ERROR_MESSAGE,
    VocabularyError,
)


def test_client_status_keeps_message_in_envelope():
    err = VocabularyError(
        "Rejected", "REJECTED", ErrorCategory.EXTERNAL_API,
        ErrorSeverity.WARNING, http_status=409,
    )
    assert err.to_response() == {"success": False, "data": None, "error": "Rejected"}


def test_database_error_hides_internal_detail():
    err = DatabaseError("connection refused on 10.0.0.3", "execute")
    assert err.http_status == 503
    assert err.category == ErrorCategory.DATABASE
    assert "10.0.0.3" in err.message
    assert err.to_response()["error"] == GENERIC_ERROR_MESSAGE


def test_dictionary_error_records_retry_after():
    err = DictionaryAPIError(
        "slow down", "rate_limit", retry_after_ms=2000,
        context=ErrorContext(word="hello"),
    )
    assert err.context.retry_after_ms == 2000
    assert err.context.word == "hello"
    assert err.api_error_type == "rate_limit"
    assert err.to_response()["error"] == GENERIC_ERROR_MESSAGE
