"""Word Schemas - Pydantic models for lookup payloads, cached records and statistics.

Invariants:
    - WordLookupResponse groups definitions by part of speech (dictionary view)
    - WordDto lists definitions flat, in stored order (cache view)
    - LookupResult.success=True ⇔ payload is set

Design Decisions:
    - from_attributes on DTOs: built straight from ORM rows by the repository
    - LookupResult models "not found" as data, not as an exception
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator

from vocabulary_api.core.domain_types import LookupSource


class DefinitionEntry(BaseModel):
    """One sense of a word inside a meaning."""
    definition: str
    example: str | None = None


class Meaning(BaseModel):
    """All senses sharing a part of speech."""
    part_of_speech: str
    definitions: list[DefinitionEntry] = Field(default_factory=list)


class WordLookupResponse(BaseModel):
    """Lookup payload - definition, parts of speech, example usage."""
    word: str
    phonetic: str | None = None
    meanings: list[Meaning] = Field(default_factory=list)
    source: LookupSource | None = None


class DefinitionDto(BaseModel):
    """Cached definition row."""
    model_config = ConfigDict(from_attributes=True)

    part_of_speech: str
    definition: str
    example: str | None = None


class WordDto(BaseModel):
    """Cached word record."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    text: str
    phonetic: str | None = None
    definitions: list[DefinitionDto] = Field(default_factory=list)
    lookup_count: int = 0
    created_at: datetime


class LookupResult(BaseModel):
    """Outcome of a combined cache + dictionary lookup."""
    success: bool
    error_message: str | None = None
    payload: WordLookupResponse | None = None
    source: LookupSource | None = None

    @model_validator(mode="after")
    def validate_payload_matches_success(self):
        if self.success and self.payload is None:
            raise ValueError("successful lookup requires payload")
        return self

    @classmethod
    def found(cls, payload: WordLookupResponse, source: LookupSource) -> "LookupResult":
        payload.source = source
        return cls(success=True, payload=payload, source=source)

    @classmethod
    def not_found(cls, message: str | None = None) -> "LookupResult":
        return cls(success=False, error_message=message)


class WordCount(BaseModel):
    """Word paired with how often it was looked up."""
    word: str
    lookup_count: int


class WordStatistics(BaseModel):
    """Aggregate cache statistics."""
    total_words: int = 0
    total_definitions: int = 0
    total_lookups: int = 0
    part_of_speech_breakdown: dict[str, int] = Field(default_factory=dict)
    most_looked_up: list[WordCount] = Field(default_factory=list)
    generated_at: datetime
