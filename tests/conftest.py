"""Pytest configuration and shared fixtures."""

import io
import os
from contextlib import contextmanager
from pathlib import Path
from typing import Generator
from unittest.mock import AsyncMock, patch

import pytest
from alembic.config import Config
from alembic.migration import MigrationContext
from alembic.operations import Operations
from alembic.script import ScriptDirectory
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Connection, Engine

from app.application import create_app
from app.config import Settings

PROJECT_ROOT = Path(__file__).resolve().parents[1]


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """Create test settings instance."""
    # Override environment variables for testing
    os.environ.setdefault("API_TITLE", "Helpdesk Test")
    os.environ.setdefault("API_VERSION", "0.1.0-test")
    os.environ.setdefault("DEBUG", "True")
    os.environ.setdefault("HOST", "127.0.0.1")
    os.environ.setdefault("PORT", "8000")
    # Database settings for tests
    os.environ.setdefault("DB_HOST", "localhost")
    os.environ.setdefault("DB_PORT", "5432")
    os.environ.setdefault("DB_USER", "test_user")
    os.environ.setdefault("DB_PASSWORD", "test_password")
    os.environ.setdefault("DB_NAME", "test_db")

    return Settings()


@pytest.fixture
def app(test_settings: Settings) -> Generator:
    """Create FastAPI application instance without touching the database."""
    with patch("app.application.init_db", new_callable=AsyncMock), patch(
        "app.application.close_db", new_callable=AsyncMock
    ):
        yield create_app()


@pytest.fixture
def client(app) -> Generator[TestClient, None, None]:
    """Create test client for FastAPI application."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture(scope="session")
def script_directory() -> ScriptDirectory:
    """Alembic script directory of the project."""
    return ScriptDirectory.from_config(Config(str(PROJECT_ROOT / "alembic.ini")))


@pytest.fixture
def revision_module(script_directory):
    """Return a loaded revision script module by revision id."""

    def _load(revision_id: str):
        return script_directory.get_revision(revision_id).module

    return _load


@pytest.fixture
def sqlite_engine() -> Generator[Engine, None, None]:
    """In-memory SQLite engine, a database without the vector extension."""
    engine = create_engine("sqlite://")
    yield engine
    engine.dispose()


@contextmanager
def bound_op(connection: Connection):
    """Bind ``alembic.op`` to a live connection."""
    context = MigrationContext.configure(connection)
    with Operations.context(context):
        yield context


@contextmanager
def offline_op(dialect_name: str = "postgresql"):
    """Bind ``alembic.op`` to an offline context; yields the SQL buffer."""
    buffer = io.StringIO()
    context = MigrationContext.configure(
        dialect_name=dialect_name,
        opts={"as_sql": True, "output_buffer": buffer},
    )
    with Operations.context(context):
        yield buffer


@pytest.fixture(name="bound_op")
def bound_op_fixture():
    """Factory binding ``alembic.op`` to a live connection."""
    return bound_op


@pytest.fixture(name="offline_op")
def offline_op_fixture():
    """Factory binding ``alembic.op`` to an offline SQL-emitting context."""
    return offline_op
