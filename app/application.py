"""FastAPI application factory."""

from contextlib import asynccontextmanager

from fastapi import APIRouter, FastAPI

from app.config import settings
from app.exceptions import DatabaseConnectionError
from app.utils.db import close_db, init_db, vector_search_available
from app.utils.logging import get_logger

logger = get_logger(__name__)

# Create main router
router = APIRouter()


@router.get("/")
async def root():
    """Root endpoint."""
    return {"message": f"{settings.API_TITLE} API", "version": settings.API_VERSION}


@router.get("/health")
async def health():
    """Health check endpoint.

    ``vector_search`` is False when the vector extension is missing and the
    captain tables were created with JSON embeddings.
    """
    try:
        vector_search = await vector_search_available()
    except DatabaseConnectionError as e:
        logger.error("Vector extension probe failed: %s", e)
        vector_search = False
    return {"status": "healthy", "vector_search": vector_search}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events."""
    await init_db()
    yield
    await close_db()


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    app = FastAPI(
        title=settings.API_TITLE,
        description="Helpdesk API",
        version=settings.API_VERSION,
        debug=settings.DEBUG,
        lifespan=lifespan,
    )

    app.include_router(router)

    return app
