"""ORM Models - SQLAlchemy declarative models for the word cache.

Invariants:
    - All models inherit from Base (db/base.py)
    - Word is the aggregate root; definitions scoped by word_id

Design Decisions:
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from vocabulary_api.models.word import Word  # noqa: F401
from vocabulary_api.models.word_definition import WordDefinition  # noqa: F401
