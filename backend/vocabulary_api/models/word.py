"""Word ORM - one row per cached word.

Invariants:
    - text is unique and stored normalized (stripped, lower-cased)
    - lookup_count starts at 0 and only grows
    - definitions cascade-delete with their word

Design Decisions:
    - Integer autoincrement id: cache rows have no external identity
    - definitions eager-loaded (selectin): every read returns the full record
"""

from datetime import datetime, timezone

from sqlalchemy import String, Integer, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vocabulary_api.db.base import Base


class Word(Base):
    """Cached word with its definitions."""
    __tablename__ = "words"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    text: Mapped[str] = mapped_column(
        String(100), nullable=False, unique=True, index=True,
    )
    phonetic: Mapped[str | None] = mapped_column(String(200), nullable=True)
    lookup_count: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    last_looked_up_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )

    definitions: Mapped[list["WordDefinition"]] = relationship(
        "WordDefinition", back_populates="word",
        cascade="all, delete-orphan", lazy="selectin",
        order_by="WordDefinition.position",
    )
