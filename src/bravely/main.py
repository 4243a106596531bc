"""
Bravely FastAPI Application Entry Point

Main application initialization with:
- Lifespan management (startup/shutdown)
- CORS configuration
- Error handling middleware and domain exception handlers
- Router registration
- Metrics endpoint

This is the production entry point for the Bravely backend.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from bravely import __version__
from bravely.api.middleware.error_handler import (
    ErrorHandlerMiddleware,
    register_exception_handlers,
)
from bravely.api.v1.router import api_router
from bravely.config import get_settings
from bravely.config.logging_config import configure_logging, get_logger
from bravely.infrastructure.database import get_db_manager
from bravely.infrastructure.metrics import metrics_router, update_system_info
from bravely.infrastructure.monitoring import init_sentry
from bravely.infrastructure.store import StoreBackend

settings = get_settings()
configure_logging(settings)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager.

    The database pool is only opened when PostgreSQL is the
    configured store backend.
    """
    uses_database = settings.store_backend == StoreBackend.POSTGRES

    logger.info(
        "Starting Bravely application",
        env=settings.env,
        version=__version__,
        store_backend=settings.store_backend,
    )

    try:
        if uses_database:
            await get_db_manager().initialize()
        yield

    finally:
        logger.info("Shutting down Bravely application")
        if uses_database:
            await get_db_manager().close()
        logger.info("Bravely application shutdown complete")


def create_application() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        Configured FastAPI application
    """
    init_sentry(
        settings.sentry.dsn.get_secret_value(),
        environment=settings.env,
        traces_sample_rate=settings.sentry.traces_sample_rate,
    )
    update_system_info(settings.env)

    app = FastAPI(
        title="Bravely API",
        description="Exposure session tracking with adaptive goals",
        version=__version__,
        docs_url="/docs" if not settings.is_production() else None,
        redoc_url="/redoc" if not settings.is_production() else None,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(ErrorHandlerMiddleware)
    register_exception_handlers(app)

    app.include_router(
        api_router,
        prefix=f"/api/{settings.api_version}",
    )
    app.include_router(metrics_router)

    @app.get("/", include_in_schema=False)
    async def root() -> dict:
        return {
            "name": "Bravely API",
            "version": __version__,
            "status": "operational",
        }

    return app


app = create_application()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "bravely.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.env == "development",
        log_level=settings.log_level.lower(),
    )
