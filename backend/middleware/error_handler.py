"""
Error Handling Middleware

Tags every request with an id and turns uncaught exceptions into a JSON 500.
"""

import logging
import uuid
from typing import Callable

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Middleware to handle uncaught exceptions and standardize error responses.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        # Honour an id supplied by a proxy so logs line up across hops
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id

        try:
            response = await call_next(request)
        except Exception as exc:
            logger.error(
                "Unhandled exception in request %s: %s",
                request_id,
                exc,
                extra={
                    "request_id": request_id,
                    "method": request.method,
                    "url": str(request.url),
                    "client": request.client.host if request.client else "unknown",
                },
                exc_info=True,
            )
            return JSONResponse(
                status_code=500,
                content={
                    "success": False,
                    "message": "Internal server error",
                    "error": "An unexpected error occurred. Please try again later.",
                    "request_id": request_id,
                },
                headers={REQUEST_ID_HEADER: request_id},
            )

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
