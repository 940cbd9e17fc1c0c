"""
FastAPI application entrypoint for the Taaskly link preview service.

- Primary: Expose create_app() factory for Uvicorn (--factory) in all environments.
- Convenience: Allow `python -m main` for local development runs, honoring $PORT.

Architecture:
- One webhook endpoint answering link previews, collections and postbacks
- Account linking endpoint connecting local users to platform identities
- PostgreSQL (async SQLAlchemy) for communities, users, documents, folders and tasks
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from config import Settings, get_settings
from utils.logging import RequestIdMiddleware, configure_logging

# Configure logging at import time
configure_logging()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Async context manager for application lifespan events.

    Initializes the database connection pool on startup and disposes of
    it on shutdown.
    """
    settings: Settings = app.state.settings

    logger.info(
        "Starting Taaskly link service",
        extra={
            "env": settings.app_env,
            "database": settings.postgres_db,
            "base_url": settings.base_url,
        },
    )

    try:
        from db import init_db

        engine = init_db(settings)
        app.state.db_engine = engine
        logger.info("Database initialized", extra={"sqlite": settings.uses_sqlite})

    except Exception as e:
        logger.error(f"Failed to initialize application: {e}", exc_info=True)
        raise

    yield  # Application is running

    logger.info("Shutting down Taaskly link service")
    from db import close_db

    await close_db()
    logger.info("Database connection pool closed")


def create_app() -> FastAPI:
    """
    Application factory for FastAPI.

    Creates and configures the FastAPI application with:
    - Link webhook and account linking routes
    - Request ID tracking for observability
    - Dependency injection for settings

    Returns:
        FastAPI: Configured application instance
    """
    settings = get_settings()

    app = FastAPI(
        title="Taaskly Link API",
        description="Link previews, collections and postbacks for a collaboration platform",
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs" if settings.is_dev else None,  # Disable in production
        redoc_url="/redoc" if settings.is_dev else None,
    )

    # Store settings in app state for access in lifespan and routes
    app.state.settings = settings

    # --- Middleware ---

    # Request ID tracking (for correlation across logs)
    app.add_middleware(RequestIdMiddleware)

    # --- Routes ---

    from api.accounts import router as accounts_router
    from api.link import router as link_router

    app.include_router(link_router, prefix="/api/link", tags=["Link"])
    app.include_router(accounts_router, prefix="/api/accounts", tags=["Accounts"])

    # Health check endpoint
    @app.get("/health", tags=["System"])
    async def health_check():
        """Health check endpoint for load balancers and monitoring."""
        return {
            "status": "healthy",
            "env": settings.app_env,
        }

    # Root endpoint
    @app.get("/", tags=["System"])
    async def root():
        """Root endpoint with API information."""
        return {
            "service": "Taaskly Link API",
            "version": "0.1.0",
            "docs": "/docs" if settings.is_dev else "disabled",
        }

    logger.info(
        "FastAPI application created",
        extra={
            "env": settings.app_env,
            "routes_count": len(app.routes),
        },
    )

    return app


if __name__ == "__main__":
    """
    Development server entry point.

    Run with: python main.py

    In production, use:
        uvicorn main:create_app --factory --host 0.0.0.0 --port 8000
    """
    import os

    import uvicorn

    settings = get_settings()
    port = int(os.getenv("PORT", "8000"))

    logger.info(f"Starting development server on port {port}")

    uvicorn.run(
        "main:create_app",
        factory=True,
        host="0.0.0.0",
        port=port,
        reload=settings.is_dev,  # Auto-reload in development
        log_level=settings.log_level.lower(),
    )
