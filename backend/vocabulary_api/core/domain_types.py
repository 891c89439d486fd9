"""Domain Types - rich types that replace bare primitives across the codebase.

Invariants:
    - WordText is always normalized (stripped, lower-cased) before it touches storage
    - Validation limits live here, not scattered across routes

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


WordText = NewType("WordText", str)

MAX_WORD_LENGTH = 100
MIN_SEARCH_TERM_LENGTH = 2
DEFAULT_MAX_RESULTS = 50
MIN_MAX_RESULTS = 1
MAX_MAX_RESULTS = 100


class LookupSource(str, Enum):
    """Where a lookup payload came from."""
    CACHE = "cache"
    EXTERNAL = "external"


def normalize_word(raw: str) -> WordText:
    """Canonical storage form of a word."""
    return WordText(raw.strip().lower())
