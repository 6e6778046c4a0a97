"""Helpers shared by Alembic revision scripts.

All functions here must be called from inside a running migration, where
``alembic.op`` is bound to a migration context.
"""

from typing import Optional

import sqlalchemy as sa
from sqlalchemy.dialects import postgresql
from sqlalchemy.exc import DBAPIError

from alembic import op
from app.config import settings
from app.utils.logging import get_logger
from app.utils.vector_types import Vector

logger = get_logger(__name__)

# JSONB on PostgreSQL, generic JSON elsewhere
JSON_EMBEDDING = sa.JSON().with_variant(
    postgresql.JSONB(astext_type=sa.Text()), "postgresql"
)

VECTOR_INDEX_METHOD = "ivfflat"
VECTOR_INDEX_OPCLASS = "vector_l2_ops"


def extension_enabled(bind: sa.engine.Connection, name: str) -> bool:
    """Check whether a PostgreSQL extension is installed in the database."""
    result = bind.execute(
        sa.text("SELECT 1 FROM pg_extension WHERE extname = :name"),
        {"name": name},
    )
    return result.scalar() is not None


def setup_vector_extension(name: Optional[str] = None) -> bool:
    """Enable the vector extension if the server allows it.

    The ``CREATE EXTENSION`` statement runs inside a SAVEPOINT so a refusal
    (extension not installed on the server, missing privileges) leaves the
    surrounding migration transaction usable.

    Args:
        name: Extension name, defaults to ``settings.VECTOR_EXTENSION``.

    Returns:
        True if vector columns can be used, False if tables must fall back to
        JSON embeddings.
    """
    name = name or settings.VECTOR_EXTENSION
    context = op.get_context()

    if context.dialect.name != "postgresql":
        logger.warning(
            "Dialect '%s' has no '%s' extension.", context.dialect.name, name
        )
        return False

    # Offline mode cannot observe failures; emit the statement and assume
    # the target database has the extension available.
    if context.as_sql:
        op.execute(f'CREATE EXTENSION IF NOT EXISTS "{name}"')
        return True

    bind = op.get_bind()
    if extension_enabled(bind, name):
        return True

    try:
        with bind.begin_nested():
            bind.execute(sa.text(f'CREATE EXTENSION IF NOT EXISTS "{name}"'))
    except DBAPIError as e:
        logger.warning("Failed to enable '%s' extension (%s).", name, e.orig)
        return False

    logger.info("Enabled '%s' extension.", name)
    return True


def embedding_column(
    vector_supported: bool, dim: Optional[int] = None, name: str = "embedding"
) -> sa.Column:
    """Build the embedding column for a vector-capable or fallback table.

    Args:
        vector_supported: Result of :func:`setup_vector_extension`.
        dim: Vector dimensions, defaults to ``settings.EMBEDDING_DIMENSIONS``.
        name: Column name.

    Returns:
        ``vector(dim)`` column, or a JSON column defaulting to an empty array.
    """
    if vector_supported:
        return sa.Column(name, Vector(dim or settings.EMBEDDING_DIMENSIONS))
    return sa.Column(name, JSON_EMBEDDING, server_default=sa.text("'[]'"))


def create_embedding_index(
    table_name: str,
    index_name: Optional[str] = None,
    column: str = "embedding",
    if_not_exists: bool = False,
) -> None:
    """Create an approximate nearest-neighbour (ivfflat, L2) index."""
    op.create_index(
        index_name or f"ix_{table_name}_{column}",
        table_name,
        [column],
        postgresql_using=VECTOR_INDEX_METHOD,
        postgresql_ops={column: VECTOR_INDEX_OPCLASS},
        if_not_exists=if_not_exists,
    )


def table_exists(table_name: str) -> bool:
    """Check for a table; always False when generating offline SQL."""
    if op.get_context().as_sql:
        return False
    return sa.inspect(op.get_bind()).has_table(table_name)


def column_exists(table_name: str, column_name: str) -> bool:
    """Check for a column; always False when generating offline SQL."""
    if op.get_context().as_sql:
        return False
    columns = sa.inspect(op.get_bind()).get_columns(table_name)
    return any(column["name"] == column_name for column in columns)


def clear_schema_caches() -> None:
    """Drop compiled statements built against the previous table layout."""
    if op.get_context().as_sql:
        return
    op.get_bind().engine.clear_compiled_cache()
