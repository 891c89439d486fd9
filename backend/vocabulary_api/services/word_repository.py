"""Word Repository - SQLAlchemy implementation of the local word cache.

Invariants:
    - Inputs are already normalized (WordText); the repository never re-cases them
    - Reads return WordDto, never ORM rows (no lazy loads escape the session)
    - save_lookup is idempotent per word: an existing row gets its definitions replaced
    - save_lookup tolerates a concurrent insert of the same word (unique text)

Design Decisions:
    - Substring match via LIKE with escaped wildcards: works on SQLite and PostgreSQL
    - Prefix matches ranked first, then alphabetical: closest completions lead
"""

import logging
from datetime import datetime, timezone

from sqlalchemy import case, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from vocabulary_api.core.domain_types import WordText
from vocabulary_api.models.word import Word
from vocabulary_api.models.word_definition import WordDefinition
from vocabulary_api.schemas.word import WordDto, WordLookupResponse

logger = logging.getLogger(__name__)


def _escape_like(term: str) -> str:
    return (
        term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    )


class SqlWordRepository:
    """Word cache backed by an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_text(self, text: WordText) -> WordDto | None:
        word = await self._get_row(text)
        return WordDto.model_validate(word) if word else None

    async def save_lookup(self, entry: WordLookupResponse) -> WordDto:
        """Persist a provider payload under entry.word.

        A concurrent first lookup of the same word may insert the row between
        our read and our commit; the unique constraint then fails and the
        payload is applied to the row that won.
        """
        text = WordText(entry.word)
        word = await self._get_row(text)
        if word is None:
            word = Word(
                text=entry.word, lookup_count=0,
                created_at=datetime.now(timezone.utc),
            )
            self.db.add(word)
        self._apply_entry(word, entry)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            logger.info(
                "Word cached concurrently, updating existing row",
                extra={"word": entry.word},
            )
            word = await self._get_row(text)
            if word is None:
                raise
            self._apply_entry(word, entry)
            await self.db.commit()
        logger.info(
            f"Cached {len(word.definitions)} definitions",
            extra={"word": entry.word, "source": "external"},
        )
        return WordDto.model_validate(word)

    @staticmethod
    def _apply_entry(word: Word, entry: WordLookupResponse) -> None:
        word.phonetic = entry.phonetic
        word.definitions = [
            WordDefinition(
                part_of_speech=meaning.part_of_speech,
                definition=sense.definition,
                example=sense.example,
                position=position,
            )
            for position, (meaning, sense) in enumerate(
                (m, s) for m in entry.meanings for s in m.definitions
            )
        ]

    async def record_lookup(self, text: WordText) -> None:
        """Increment lookup_count and stamp last_looked_up_at."""
        await self.db.execute(
            update(Word)
            .where(Word.text == text)
            .values(
                lookup_count=Word.lookup_count + 1,
                last_looked_up_at=datetime.now(timezone.utc),
            ),
        )
        await self.db.commit()

    async def search(self, term: str, max_results: int) -> list[WordDto]:
        needle = _escape_like(term.strip().lower())
        prefix_first = case(
            (Word.text.like(f"{needle}%", escape="\\"), 0), else_=1,
        )
        result = await self.db.execute(
            select(Word)
            .where(Word.text.like(f"%{needle}%", escape="\\"))
            .order_by(prefix_first, Word.text)
            .limit(max_results),
        )
        return [WordDto.model_validate(w) for w in result.scalars().all()]

    async def definition_counts(self) -> dict[str, int]:
        """Definition count per part of speech."""
        result = await self.db.execute(
            select(WordDefinition.part_of_speech, func.count(WordDefinition.id))
            .group_by(WordDefinition.part_of_speech),
        )
        return {part: count for part, count in result.all()}

    async def word_lookup_counts(self) -> list[tuple[str, int]]:
        result = await self.db.execute(select(Word.text, Word.lookup_count))
        return [(text, count) for text, count in result.all()]

    async def _get_row(self, text: WordText) -> Word | None:
        result = await self.db.execute(select(Word).where(Word.text == text))
        return result.scalar_one_or_none()
