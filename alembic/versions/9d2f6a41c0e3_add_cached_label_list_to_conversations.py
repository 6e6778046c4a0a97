"""add cached_label_list to conversations

Revision ID: 9d2f6a41c0e3
Revises: 3b8e0c1f2a47
Create Date: 2023-12-11 01:08:07.000000

"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op
from app.models.conversation import Conversation
from app.models.label_cache import install_label_cache
from app.utils.logging import get_logger
from app.utils.migrations import clear_schema_caches, column_exists

# revision identifiers, used by Alembic.
revision: str = "9d2f6a41c0e3"
down_revision: Union[str, None] = "3b8e0c1f2a47"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

logger = get_logger("alembic.runtime.migration")


def upgrade() -> None:
    """Add denormalized label list column to conversations."""
    if column_exists("conversations", "cached_label_list"):
        logger.info("conversations.cached_label_list already exists")
    else:
        op.add_column(
            "conversations",
            sa.Column("cached_label_list", sa.String(), nullable=True),
        )

    clear_schema_caches()
    if not install_label_cache(Conversation):
        logger.warning("Conversation label cache missing, skipping include")


def downgrade() -> None:
    """Remove label list column from conversations."""
    op.drop_column("conversations", "cached_label_list")
