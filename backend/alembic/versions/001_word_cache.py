"""Word cache schema - words, word_definitions.

Revision ID: 001_word_cache
Revises: None
Create Date: 2026-10-17

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_word_cache"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "words",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("text", sa.String(100), nullable=False),
        sa.Column("phonetic", sa.String(200), nullable=True),
        sa.Column("lookup_count", sa.Integer, nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("last_looked_up_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_words_text", "words", ["text"], unique=True)

    op.create_table(
        "word_definitions",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "word_id", sa.Integer,
            sa.ForeignKey("words.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("part_of_speech", sa.String(50), nullable=False),
        sa.Column("definition", sa.Text, nullable=False),
        sa.Column("example", sa.Text, nullable=True),
        sa.Column("position", sa.Integer, nullable=False, server_default="0"),
    )
    op.create_index("ix_word_definitions_word_id", "word_definitions", ["word_id"])


def downgrade() -> None:
    op.drop_index("ix_word_definitions_word_id", table_name="word_definitions")
    op.drop_table("word_definitions")
    op.drop_index("ix_words_text", table_name="words")
    op.drop_table("words")
