"""
FastAPI application for the CopyWorx service.

This module builds the application, registers the analysis and CRUD routers,
adds health check endpoints for container orchestration, and maps every
service error onto the ``{error, details}`` response body.
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from postgrest.exceptions import APIError

from ..config.dependencies import Dependencies, create_dependencies
from ..exceptions import CopyWorxError
from ..utils.logging import get_logger
from .routes import analysis_router, db_router

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Server starting up")
    yield
    logger.info("Server shutting down")


async def copyworx_error_handler(request: Request, exc: CopyWorxError) -> JSONResponse:
    return JSONResponse(exc.to_dict(), status_code=exc.status_code)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    first = exc.errors()[0] if exc.errors() else {}
    location = ".".join(str(part) for part in first.get("loc", ()))
    details = f"{location}: {first.get('msg', 'invalid value')}" if location else "Invalid request"
    return JSONResponse({"error": "Bad request", "details": details}, status_code=400)


async def datastore_error_handler(request: Request, exc: APIError) -> JSONResponse:
    logger.error("Datastore error", path=request.url.path, code=exc.code, message=exc.message)
    return JSONResponse(
        {
            "error": "Internal server error",
            "details": exc.message or "An unexpected error occurred",
        },
        status_code=500,
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled error", path=request.url.path, error_type=type(exc).__name__, exc_info=exc)
    return JSONResponse(CopyWorxError().to_dict(), status_code=500)


def create_app(dependencies: Optional[Dependencies] = None) -> FastAPI:
    """
    Initialize and configure the FastAPI application.

    Args:
        dependencies: Settings and client factories. Defaults to the process settings.

    Returns:
        FastAPI: The configured FastAPI application
    """
    app = FastAPI(title="CopyWorx", lifespan=lifespan)
    app.state.dependencies = dependencies or create_dependencies()

    app.add_exception_handler(CopyWorxError, copyworx_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(APIError, datastore_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    app.include_router(analysis_router)
    app.include_router(db_router)

    @app.get("/health")
    async def health():
        """Simple health check endpoint that always returns OK."""
        logger.debug("Health check request received")
        return {"status": "ok"}

    @app.get("/ready")
    async def ready():
        """Readiness check endpoint that returns OK when the server is ready to accept requests."""
        logger.debug("Readiness check request received")
        return {"status": "ready"}

    logger.info("Application initialization complete")
    return app
