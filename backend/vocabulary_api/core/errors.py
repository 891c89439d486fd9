"""Error Hierarchy - typed, categorized exceptions for all vocabulary failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Only infrastructure failures are raised; request validation and "not found" are
      returned as values (core/enforce_params.py, LookupResult)
    - to_response() produces the ApiResponse envelope (success=False, data=None)
    - Infrastructure messages are logged, never returned to callers

Design Decisions:
    - Single hierarchy with VocabularyError base: one global handler catches all
    - ErrorContext as dataclass: observability fields without coupling to logging
"""

from dataclasses import dataclass, field
from enum import Enum
from datetime import datetime, timezone


GENERIC_ERROR_MESSAGE = "An internal error occurred"


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    DATABASE = "database"
    EXTERNAL_API = "external_api"


@dataclass
class ErrorContext:
    """Context attached to an error for logs."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    word: str | None = None
    retry_after_ms: int | None = None


class VocabularyError(Exception):
    """Base exception for all vocabulary errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    @property
    def public_message(self) -> str:
        """Message safe to show the caller."""
        if self.http_status >= 500:
            return GENERIC_ERROR_MESSAGE
        return self.message

    def to_response(self) -> dict:
        """Convert to the standard envelope."""
        return {"success": False, "data": None, "error": self.public_message}


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(VocabularyError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation


class DictionaryAPIError(VocabularyError):
    """External dictionary provider call failed."""
    def __init__(
        self,
        message: str,
        api_error_type: str,
        retry_after_ms: int | None = None,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.retry_after_ms = retry_after_ms
        super().__init__(
            f"Dictionary API error ({api_error_type}): {message}",
            "DICTIONARY_API_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.CRITICAL, ctx, 503,
        )
        self.api_error_type = api_error_type
