"""Database connection utilities."""

import asyncio
import sys
from pathlib import Path
from typing import Optional

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import declarative_base

from app.config import settings
from app.exceptions import DatabaseConnectionError, MigrationError
from app.utils.logging import get_logger

logger = get_logger(__name__)

# Base class for models
Base = declarative_base()

# Global engine and session factory
_engine: Optional[AsyncEngine] = None
_session_factory: Optional[async_sessionmaker] = None


def get_db_url() -> str:
    """Build database URL from settings."""
    return (
        f"postgresql+asyncpg://{settings.DB_USER}:{settings.DB_PASSWORD}"
        f"@{settings.DB_HOST}:{settings.DB_PORT}/{settings.DB_NAME}"
    )


async def get_db_engine() -> AsyncEngine:
    """Get or create database engine."""
    global _engine
    if _engine is None:
        _engine = create_async_engine(
            get_db_url(),
            echo=settings.DEBUG,
            pool_pre_ping=True,  # Verify connections before using
        )
    return _engine


async def verify_db_connection():
    """Verify database connection. Raises exception if connection fails."""
    engine = await get_db_engine()
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))


async def vector_search_available() -> bool:
    """Check whether the vector extension is enabled in the database.

    Embedding tables fall back to JSON columns when the extension could not
    be enabled during migration, in which case similarity search stays off.

    Raises:
        DatabaseConnectionError: If the database cannot be queried.
    """
    engine = await get_db_engine()
    try:
        async with engine.connect() as conn:
            result = await conn.execute(
                text("SELECT 1 FROM pg_extension WHERE extname = :name"),
                {"name": settings.VECTOR_EXTENSION},
            )
            return result.scalar() is not None
    except (SQLAlchemyError, OSError) as e:
        raise DatabaseConnectionError(f"Database connection error: {str(e)}")


def get_alembic_config():
    """Build Alembic config from the project's alembic.ini.

    Raises:
        FileNotFoundError: If alembic.ini is missing from the project root.
    """
    from alembic.config import Config

    project_root = Path(__file__).resolve().parents[2]
    alembic_ini_path = project_root / "alembic.ini"

    if not alembic_ini_path.exists():
        raise FileNotFoundError(
            f"Alembic configuration file not found at {alembic_ini_path}"
        )

    alembic_cfg = Config(str(alembic_ini_path))
    alembic_cfg.set_main_option("script_location", str(project_root / "alembic"))
    # ConfigParser interpolation treats "%" specially
    alembic_cfg.set_main_option(
        "sqlalchemy.url", get_db_url().replace("%", "%%")
    )
    return alembic_cfg


async def _reset_engine() -> None:
    """Dispose pooled connections so none keep statements for the old schema."""
    global _engine, _session_factory
    if _engine is not None:
        await _engine.dispose()
        _engine = None
    _session_factory = None


async def run_migrations(revision: str = "head"):
    """Upgrade the database schema using Alembic.

    Args:
        revision: Target revision, "head" by default.

    Raises:
        FileNotFoundError: If alembic.ini is missing.
        MigrationError: If Alembic reports an error.
    """
    from alembic import command
    from alembic.util import CommandError

    alembic_cfg = get_alembic_config()

    # env.py drives its own event loop via asyncio.run, so run it in a thread
    try:
        await asyncio.to_thread(command.upgrade, alembic_cfg, revision)
    except CommandError as e:
        raise MigrationError("upgrade", revision, str(e)) from e

    await _reset_engine()
    logger.info("Database schema upgraded", extra={"revision": revision})


async def downgrade_migrations(revision: str):
    """Revert the database schema to the given Alembic revision.

    Args:
        revision: Target revision (e.g. "-1" or a revision id).

    Raises:
        FileNotFoundError: If alembic.ini is missing.
        MigrationError: If Alembic reports an error.
    """
    from alembic import command
    from alembic.util import CommandError

    alembic_cfg = get_alembic_config()

    try:
        await asyncio.to_thread(command.downgrade, alembic_cfg, revision)
    except CommandError as e:
        raise MigrationError("downgrade", revision, str(e)) from e

    await _reset_engine()
    logger.info("Database schema downgraded", extra={"revision": revision})


async def init_db():
    """Initialize database connection and run migrations. Exits application if connection fails."""
    try:
        await run_migrations()
        await verify_db_connection()
    except Exception as e:
        logger.critical("Failed to initialize database: %s", e)
        sys.exit(1)


async def get_session() -> AsyncSession:
    """Get database session."""
    global _session_factory
    if _session_factory is None:
        engine = await get_db_engine()
        _session_factory = async_sessionmaker(
            engine, class_=AsyncSession, expire_on_commit=False
        )
    return _session_factory()


async def close_db():
    """Close database connections."""
    await _reset_engine()
