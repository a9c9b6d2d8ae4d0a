"""
FastAPI application entry point
Main application factory and configuration
Reference: https://fastapi.tiangolo.com/tutorial/bigger-applications/
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.api import build_api_router
from app.api.routes import frontend, health
from app.core.config import Settings, settings as default_settings
from app.core.database import Database
from app.core.exceptions import register_exception_handlers
from app.core.logging_setup import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown events
    Opens the task store on startup and releases it on shutdown
    Reference: https://fastapi.tiangolo.com/advanced/events/
    """
    database: Database = app.state.database
    settings: Settings = app.state.settings

    # Startup: no storage means no service, so connection errors propagate
    try:
        await database.connect()
    except Exception as e:
        logger.error(f"✗ Database connection failed: {type(e).__name__}: {e}")
        raise
    logger.info("✓ Database ready")
    logger.info(f"Environment: {settings.ENVIRONMENT}")
    logger.info(f"Health check: http://{settings.HOST}:{settings.PORT}/health")
    logger.info(f"API tasks: http://{settings.HOST}:{settings.PORT}{settings.API_PREFIX}/tasks")

    yield

    # Shutdown: Dispose of database connections
    await database.dispose()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the application

    Each call gets its own storage handle, so tests can run isolated
    instances against temporary databases.

    Args:
        settings: Configuration to use; defaults to the environment-loaded settings
    """
    settings = settings or default_settings
    setup_logging(settings.LOG_LEVEL)

    # Reference: https://fastapi.tiangolo.com/reference/fastapi/
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        description="Task tracking REST API with a static frontend",
        docs_url="/docs",  # Swagger UI documentation
        redoc_url="/redoc",  # ReDoc documentation
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.database = Database(settings.database_url, echo=settings.SQL_ECHO)

    # The bundled frontend is served from the same origin; CORS covers
    # clients running on a separate dev server
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    register_exception_handlers(app, settings)

    # Order matters: the frontend catch-all must come last
    app.include_router(health.router)
    app.include_router(build_api_router(settings.API_PREFIX))
    app.include_router(frontend.router)

    return app


# Application instance used by uvicorn ("app.main:app")
app = create_app()


def run() -> None:
    """Start the HTTP server on the configured host and port"""
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=default_settings.HOST,
        port=default_settings.PORT,
        log_level=default_settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    run()
