"""
Logging Middleware

Provides request/response logging for monitoring and debugging.
"""

import logging
import time
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware to log HTTP requests and responses.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.perf_counter()

        method = request.method
        path = request.url.path
        client_ip = request.client.host if request.client else "unknown"
        request_id = getattr(request.state, "request_id", "unknown")

        logger.debug(
            "Request started: %s %s",
            method,
            path,
            extra={"request_id": request_id, "client_ip": client_ip, "event_type": "request_start"},
        )

        try:
            response = await call_next(request)
        except Exception as exc:
            process_time = time.perf_counter() - start_time
            logger.error(
                "Request failed: %s %s in %.3fs - %s",
                method,
                path,
                process_time,
                exc,
                extra={"request_id": request_id, "client_ip": client_ip, "event_type": "request_error"},
            )
            # Re-raise so the error middleware builds the response
            raise

        process_time = time.perf_counter() - start_time
        logger.info(
            "Request completed: %s %s - %s in %.3fs",
            method,
            path,
            response.status_code,
            process_time,
            extra={
                "request_id": request_id,
                "status_code": response.status_code,
                "process_time": process_time,
                "event_type": "request_complete",
            },
        )
        response.headers["X-Process-Time"] = f"{process_time:.6f}"
        return response
