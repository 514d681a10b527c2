"""Matcha API - FastAPI application."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .api import health_router, router
from .core.config import get_settings
from .core.logging import configure_logging, get_logger
from .db import close_db, init_db
from .db.errors import InvalidIdentifierError, InvalidRelationshipError, RepositoryError
from .models.common import ErrorResponse

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Open the database pool on startup and close it on shutdown."""
    configure_logging()
    settings = get_settings()
    await init_db()
    logger.info("matcha_api_started", environment=settings.environment)

    yield

    await close_db()
    logger.info("matcha_api_stopped")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Matcha API",
        description="Dating application data API",
        version="0.1.0",
        lifespan=lifespan,
    )

    @app.exception_handler(RepositoryError)
    async def repository_error_handler(request: Request, exc: RepositoryError) -> JSONResponse:
        """Rejected identifiers and relationships -> 400."""
        details = None
        if isinstance(exc, InvalidIdentifierError):
            details = {"identifier": exc.identifier, "table": exc.table}
        elif isinstance(exc, InvalidRelationshipError):
            details = {"user_table": exc.user_table, "item_column": exc.item_column}
        return JSONResponse(
            status_code=400,
            content=ErrorResponse(
                error=str(exc),
                code=type(exc).__name__,
                details=details,
            ).model_dump(),
        )

    app.include_router(health_router)
    app.include_router(router)
    return app


app = create_app()


def run() -> None:
    """Run the API with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "matcha.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.is_development,
    )
