# ==============================================================================
# MAIN APPLICATION - Catalog API Entry Point
# ==============================================================================
# Application factory: logging, database lifespan, middleware, error
# handlers, versioned routers and health endpoints
# ==============================================================================

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from catalog_api.api.router import api_router
from catalog_api.core.constants import ErrorMessages
from catalog_api.core.exceptions import AppException, DatabaseError
from catalog_api.core.settings import Environment, settings
from catalog_api.database.factory import DatabaseFactory
from catalog_api.middleware.request_logger import RequestLoggerMiddleware
from catalog_api.schemas.base import HealthResponse

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging() -> None:
    """Root logging setup, driven by ``LOG_LEVEL``."""
    logging.basicConfig(level=settings.LOG_LEVEL, format=LOG_FORMAT)


configure_logging()
logger = logging.getLogger(__name__)


# ==============================================================================
# LIFESPAN MANAGEMENT
# ==============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Connect the catalog database on startup and release it on shutdown.

    Outside production a failed connection is logged and the app keeps
    serving; ``/health`` then reports the database as disconnected.
    """
    logger.info(
        f"Starting {settings.APP_NAME} v{settings.APP_VERSION} "
        f"({settings.ENVIRONMENT}, {settings.DATABASE_TYPE})"
    )

    try:
        await DatabaseFactory.initialize()
    except DatabaseError as e:
        logger.error(f"Catalog database unavailable: {e.message}")
        if settings.ENVIRONMENT == Environment.PRODUCTION:
            raise

    yield

    await DatabaseFactory.shutdown()
    logger.info(f"{settings.APP_NAME} stopped")


# ==============================================================================
# APPLICATION FACTORY
# ==============================================================================

def create_app() -> FastAPI:
    """
    Build the catalog application.

    Returns:
        Configured FastAPI instance
    """
    app = FastAPI(
        title=settings.API_TITLE,
        description=settings.API_DESCRIPTION,
        version=settings.APP_VERSION,
        debug=settings.DEBUG,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggerMiddleware)

    register_exception_handlers(app)
    app.include_router(api_router)
    register_health_endpoints(app)

    return app


# ==============================================================================
# EXCEPTION HANDLERS
# ==============================================================================

def register_exception_handlers(app: FastAPI) -> None:
    """Map catalog errors and unexpected failures to JSON bodies."""

    @app.exception_handler(AppException)
    async def app_exception_handler(
        request: Request,
        exc: AppException,
    ) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path}: {exc.error_code} {exc.message}")
        else:
            logger.debug(f"{request.method} {request.url.path}: {exc.error_code} {exc.message}")
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "success": False,
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": str(exc) if settings.DEBUG else ErrorMessages.INTERNAL_ERROR,
                },
            },
        )


# ==============================================================================
# HEALTH ENDPOINTS
# ==============================================================================

def register_health_endpoints(app: FastAPI) -> None:

    @app.get(
        "/health",
        response_model=HealthResponse,
        tags=["Health"],
        summary="Health check",
    )
    async def health_check() -> HealthResponse:
        """Report application and database status."""
        db_healthy = await DatabaseFactory.health_check()
        return HealthResponse(
            status="healthy" if db_healthy else "degraded",
            version=settings.APP_VERSION,
            database="connected" if db_healthy else "disconnected",
        )

    @app.get("/", tags=["Health"], summary="API information")
    async def root() -> dict:
        return {
            "name": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "api": settings.API_V1_PREFIX,
            "docs": "/docs",
            "health": "/health",
        }


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "catalog_api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )
