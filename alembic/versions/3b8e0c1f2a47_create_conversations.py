"""create conversations

Revision ID: 3b8e0c1f2a47
Revises:
Create Date: 2023-11-20 09:12:44.301871

"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3b8e0c1f2a47"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create conversations table."""
    op.create_table(
        "conversations",
        sa.Column("id", sa.BigInteger(), autoincrement=True, nullable=False),
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
        sa.Column("account_id", sa.BigInteger(), nullable=False),
        sa.Column(
            "status", sa.String(length=50), server_default="open", nullable=False
        ),
        sa.PrimaryKeyConstraint("id", name="pk_conversations"),
    )
    op.create_index(
        "ix_conversations_account_id", "conversations", ["account_id"], unique=False
    )


def downgrade() -> None:
    """Drop conversations table."""
    op.drop_index("ix_conversations_account_id", table_name="conversations")
    op.drop_table("conversations")
