"""
Pipeline Compiler Application Entry Point

Creates and configures the FastAPI application: middleware, routers and
JSON exception handlers around the pipeline compiler core.
"""

import logging
import time
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware
from fastapi.responses import RedirectResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from backend.config import Settings, get_settings
from backend.dependencies import get_project_store
from backend.exceptions import PipelineCompilerException
from backend.exceptions.handlers import (
    generic_http_exception_handler,
    method_not_allowed_exception_handler,
    not_found_exception_handler,
    pipeline_exception_handler,
    validation_exception_handler,
)
from backend.health.routes import router as health_router
from backend.middleware import ErrorHandlerMiddleware, LoggingMiddleware
from backend.pipelines.api import router as pipeline_router
from backend.projects.api import router as projects_router
from pipeline_compiler import default_registry

logger = logging.getLogger(__name__)

OPENAPI_TAGS = [
    {"name": "Pipeline", "description": "Node catalog, validation, code generation and notebook export."},
    {"name": "Projects", "description": "Stored pipeline projects."},
    {"name": "health", "description": "Health and readiness probes consumed by monitoring systems."},
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Lifespan context manager for FastAPI application.
    Handles startup and shutdown events.
    """
    settings = get_settings()
    logger.info("Starting %s %s", settings.APP_NAME, settings.APP_VERSION)
    start_time = time.time()

    store = get_project_store()
    logger.info(
        "Project store ready (%s), %d node type(s) registered",
        type(store).__name__,
        len(default_registry),
    )

    logger.info("Application started in %.2f seconds", time.time() - start_time)

    yield

    logger.info("Shutting down %s", settings.APP_NAME)


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    FastAPI application factory.

    Returns:
        FastAPI: Configured FastAPI application instance
    """
    settings = settings or get_settings()

    docs_enabled = settings.docs_enabled
    app = FastAPI(
        title=settings.APP_NAME,
        summary=settings.APP_SUMMARY,
        description=settings.APP_DESCRIPTION,
        version=settings.APP_VERSION,
        docs_url=settings.API_DOCS_URL if docs_enabled else None,
        redoc_url=settings.API_REDOC_URL if docs_enabled else None,
        openapi_url=settings.API_OPENAPI_URL if docs_enabled else None,
        openapi_tags=OPENAPI_TAGS,
        lifespan=lifespan,
    )

    # Add middleware (order matters!)
    _add_middleware(app, settings)

    _include_routers(app, docs_enabled)

    _add_exception_handlers(app)

    return app


def _add_middleware(app: FastAPI, settings: Settings) -> None:
    """Add middleware to the FastAPI application."""

    if settings.ALLOWED_HOSTS:
        app.add_middleware(TrustedHostMiddleware, allowed_hosts=settings.ALLOWED_HOSTS)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    app.add_middleware(LoggingMiddleware)
    # Outermost: sets request.state.request_id before LoggingMiddleware reads it
    app.add_middleware(ErrorHandlerMiddleware)


def _include_routers(app: FastAPI, docs_enabled: bool) -> None:
    """Include all API routers."""
    app.include_router(health_router, tags=["health"])
    app.include_router(pipeline_router)
    app.include_router(projects_router)

    if docs_enabled:
        @app.get("/", include_in_schema=False)
        async def root():
            return RedirectResponse(url=app.docs_url or "/health")


def _add_exception_handlers(app: FastAPI) -> None:
    """Add global JSON exception handlers."""
    app.add_exception_handler(PipelineCompilerException, pipeline_exception_handler)

    app.add_exception_handler(404, not_found_exception_handler)
    app.add_exception_handler(405, method_not_allowed_exception_handler)
    app.add_exception_handler(422, validation_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    app.add_exception_handler(500, generic_http_exception_handler)
    app.add_exception_handler(HTTPException, generic_http_exception_handler)
    app.add_exception_handler(StarletteHTTPException, generic_http_exception_handler)

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle unexpected Python exceptions and convert them to 500 errors."""
        logger.error("Unexpected error: %s", exc, exc_info=True)
        http_exc = HTTPException(status_code=500, detail="Internal server error")
        return await generic_http_exception_handler(request, http_exc)


app = create_app()
