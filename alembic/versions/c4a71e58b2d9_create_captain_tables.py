"""create captain tables

Revision ID: c4a71e58b2d9
Revises: 9d2f6a41c0e3
Create Date: 2025-01-04 20:00:55.000000

Captain needs the vector extension for similarity search. Databases that do
not expose it (some managed PostgreSQL offerings) still get the tables, with
JSON embeddings and no ivfflat index, so later migrations can run.

"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op
from app.utils.logging import get_logger
from app.utils.migrations import (
    create_embedding_index,
    embedding_column,
    setup_vector_extension,
    table_exists,
)

# revision identifiers, used by Alembic.
revision: str = "c4a71e58b2d9"
down_revision: Union[str, None] = "9d2f6a41c0e3"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

logger = get_logger("alembic.runtime.migration")


def _timestamps() -> list:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    """Create captain tables, with vector embeddings when available."""
    vector_supported = setup_vector_extension()
    if not vector_supported:
        logger.warning(
            "Proceeding without the 'vector' extension; Captain stays disabled."
        )

    _create_assistants()
    _create_documents()
    _create_assistant_responses(vector_supported)
    _create_article_embeddings(vector_supported)


def downgrade() -> None:
    """Drop captain tables.

    The vector extension stays enabled; other tables may use it.
    """
    op.drop_table("captain_assistant_responses", if_exists=True)
    op.drop_table("captain_documents", if_exists=True)
    op.drop_table("captain_assistants", if_exists=True)
    op.drop_table("article_embeddings", if_exists=True)


def _create_assistants() -> None:
    op.create_table(
        "captain_assistants",
        sa.Column("id", sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("account_id", sa.BigInteger(), nullable=False),
        sa.Column("description", sa.String(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_captain_assistants"),
    )
    op.create_index(
        "ix_captain_assistants_account_id", "captain_assistants", ["account_id"]
    )
    op.create_index(
        "ix_captain_assistants_account_id_name",
        "captain_assistants",
        ["account_id", "name"],
        unique=True,
    )


def _create_documents() -> None:
    op.create_table(
        "captain_documents",
        sa.Column("id", sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("external_link", sa.String(), nullable=False),
        sa.Column("content", sa.Text(), nullable=True),
        sa.Column("assistant_id", sa.BigInteger(), nullable=False),
        sa.Column("account_id", sa.BigInteger(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_captain_documents"),
    )
    op.create_index(
        "ix_captain_documents_account_id", "captain_documents", ["account_id"]
    )
    op.create_index(
        "ix_captain_documents_assistant_id", "captain_documents", ["assistant_id"]
    )
    op.create_index(
        "ix_captain_documents_assistant_id_external_link",
        "captain_documents",
        ["assistant_id", "external_link"],
        unique=True,
    )


def _create_assistant_responses(vector_supported: bool) -> None:
    op.create_table(
        "captain_assistant_responses",
        sa.Column("id", sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column("question", sa.String(), nullable=False),
        sa.Column("answer", sa.Text(), nullable=False),
        embedding_column(vector_supported),
        sa.Column("assistant_id", sa.BigInteger(), nullable=False),
        sa.Column("document_id", sa.BigInteger(), nullable=True),
        sa.Column("account_id", sa.BigInteger(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_captain_assistant_responses"),
    )
    op.create_index(
        "ix_captain_assistant_responses_account_id",
        "captain_assistant_responses",
        ["account_id"],
    )
    op.create_index(
        "ix_captain_assistant_responses_assistant_id",
        "captain_assistant_responses",
        ["assistant_id"],
    )
    op.create_index(
        "ix_captain_assistant_responses_document_id",
        "captain_assistant_responses",
        ["document_id"],
    )
    if vector_supported:
        create_embedding_index(
            "captain_assistant_responses",
            "vector_idx_knowledge_entries_embedding",
        )


def _create_article_embeddings(vector_supported: bool) -> None:
    # Older deployments already have this table
    if table_exists("article_embeddings"):
        logger.info("article_embeddings already exists, keeping it")
    op.create_table(
        "article_embeddings",
        sa.Column("id", sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column("article_id", sa.BigInteger(), nullable=False),
        sa.Column("term", sa.Text(), nullable=False),
        embedding_column(vector_supported),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_article_embeddings"),
        if_not_exists=True,
    )
    if vector_supported:
        create_embedding_index("article_embeddings", if_not_exists=True)
