"""WordDefinition ORM - one sense of a cached word.

Invariants:
    - Always belongs to a Word (word_id FK, cascade delete)
    - position preserves provider order within the word
"""

from sqlalchemy import String, Text, Integer, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vocabulary_api.db.base import Base


class WordDefinition(Base):
    """Definition entity - part of speech, meaning text and optional example."""
    __tablename__ = "word_definitions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    word_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("words.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    part_of_speech: Mapped[str] = mapped_column(String(50), nullable=False)
    definition: Mapped[str] = mapped_column(Text, nullable=False)
    example: Mapped[str | None] = mapped_column(Text, nullable=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    word: Mapped["Word"] = relationship("Word", back_populates="definitions")
