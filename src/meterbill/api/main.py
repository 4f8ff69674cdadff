"""Main FastAPI application."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from meterbill.api.config import get_settings
from meterbill.api.database import get_database
from meterbill.api.middleware.error_handler import ErrorHandlerMiddleware
from meterbill.api.middleware.rate_limit import RateLimitMiddleware
from meterbill.api.routers import auth_router, profiles_router, readings_router, tariffs_router
from meterbill.api.services.cache import get_cache
from meterbill.api.services.scheduler import SchedulerService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager.

    Initializes the database and cache, and starts the maintenance
    scheduler when enabled.

    Parameters
    ----------
    app : FastAPI
        FastAPI application instance

    Yields
    ------
    None
        Control during application lifetime
    """
    settings = get_settings()
    logger.info("meterbill API starting up...")

    db = get_database()
    await db.init_db()
    logger.info("Database initialized")

    cache = get_cache()
    logger.info("Cache initialized")

    scheduler = None
    if settings.ENABLE_SCHEDULER:
        scheduler = SchedulerService(cache, db, cleanup_interval=settings.CLEANUP_INTERVAL)
        scheduler.start()
        logger.info("Scheduler started")

    app.state.scheduler = scheduler

    yield

    logger.info("meterbill API shutting down...")

    if scheduler:
        scheduler.shutdown()
        logger.info("Scheduler stopped")

    cache.close()
    logger.info("Cache closed")


def create_app() -> FastAPI:
    """Create and configure FastAPI application.

    Returns
    -------
    FastAPI
        Configured FastAPI application instance
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.API_TITLE,
        description=settings.API_DESCRIPTION,
        version=settings.API_VERSION,
        license_info=settings.API_LICENSE,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    # Last added runs first
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(
        RateLimitMiddleware,
        limit=settings.RATE_LIMIT,
        window=settings.RATE_WINDOW,
    )
    app.add_middleware(ErrorHandlerMiddleware)

    app.include_router(auth_router)
    app.include_router(profiles_router)
    app.include_router(readings_router)
    app.include_router(tariffs_router)

    @app.get("/", tags=["Root"])
    async def root() -> JSONResponse:
        """Root endpoint with API information."""
        return JSONResponse(
            content={
                "message": settings.API_TITLE,
                "version": settings.API_VERSION,
                "docs": "/docs",
                "openapi": "/openapi.json",
            }
        )

    @app.get("/health", tags=["Health"])
    async def health() -> JSONResponse:
        """Health check endpoint."""
        return JSONResponse(content={"status": "healthy"})

    return app


app = create_app()
