"""
Custom Exception Handlers for API Responses

Provides exception handlers that return JSON responses for API errors.
"""

import logging

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .core import PipelineCompilerException

logger = logging.getLogger(__name__)


async def pipeline_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle service errors raised by the pipeline and project routes."""
    status_code = getattr(exc, "status_code", 500)
    if status_code >= 500:
        logger.error("Pipeline service error: %s", exc)
    else:
        logger.info("Pipeline request rejected (%s): %s", status_code, exc)

    details = getattr(exc, "details", {}) if isinstance(exc, PipelineCompilerException) else {}
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "error": exc.__class__.__name__,
            "message": getattr(exc, "message", str(exc)),
            "details": details,
            "request_id": getattr(request.state, "request_id", None),
        },
    )


async def not_found_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle 404 Not Found errors."""
    return JSONResponse(
        status_code=404,
        content={
            "success": False,
            "error": "Not Found",
            "message": getattr(exc, "detail", "The requested resource was not found"),
            "request_id": getattr(request.state, "request_id", None),
        },
    )


async def validation_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle 422 Validation errors, including request body validation."""
    if isinstance(exc, RequestValidationError):
        message = "Request validation failed"
        details = jsonable_encoder(exc.errors())
    else:
        message = getattr(exc, "detail", "Validation error")
        details = []
    return JSONResponse(
        status_code=422,
        content={
            "success": False,
            "error": "Unprocessable Entity",
            "message": message,
            "details": details,
            "request_id": getattr(request.state, "request_id", None),
        },
    )


async def method_not_allowed_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle 405 Method Not Allowed errors."""
    return JSONResponse(
        status_code=405,
        content={
            "success": False,
            "error": "Method Not Allowed",
            "message": f"Method {request.method} not allowed",
            "status_code": 405,
        },
    )


async def generic_http_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Generic handler for other HTTP exceptions."""
    status_code = getattr(exc, "status_code", 500)

    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "error": f"HTTP {status_code}",
            "message": getattr(exc, "detail", f"HTTP {status_code} error"),
            "status_code": status_code,
        },
    )
