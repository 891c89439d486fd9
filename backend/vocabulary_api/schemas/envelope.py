"""Response Envelope - uniform wrapper for every word endpoint response.

Invariants:
    - success=True  → data set, error None
    - success=False → data None, error set (human-readable, never internal detail)

Design Decisions:
    - Generic BaseModel: response_model=ApiResponse[WordDto] documents payload shape in OpenAPI
    - Named constructors mirror the two legal states; nobody builds the model by hand
"""

from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Envelope - success flag, optional payload, optional error message."""
    success: bool
    data: T | None = None
    error: str | None = None

    @classmethod
    def success_result(cls, data: T) -> "ApiResponse[T]":
        return cls(success=True, data=data, error=None)

    @classmethod
    def error_result(cls, message: str) -> "ApiResponse[T]":
        return cls(success=False, data=None, error=message)
