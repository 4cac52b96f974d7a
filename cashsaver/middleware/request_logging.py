"""Request/response logging middleware."""

import logging
import time
import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from cashsaver.core.logging_config import bind_request_id, clear_request_context

logger = logging.getLogger(__name__)

SLOW_REQUEST_MS = 1000


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs every API request with timing and status information.

    Each request gets an id, echoed back in the ``X-Request-ID`` header.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if request.url.path == "/health":
            return await call_next(request)

        request_id = str(uuid.uuid4())
        request.state.request_id = request_id
        bind_request_id(request_id)
        start_time = time.time()

        try:
            response = await call_next(request)
        finally:
            clear_request_context()
        duration_ms = round((time.time() - start_time) * 1000, 2)

        log_data = {
            "id": request_id,
            "method": request.method,
            "path": request.url.path,
            "status": response.status_code,
            "duration_ms": duration_ms,
        }

        if response.status_code >= 500:
            logger.error(f"Request failed: {log_data}")
        elif response.status_code >= 400:
            logger.warning(f"Client error: {log_data}")
        elif duration_ms > SLOW_REQUEST_MS:
            logger.warning(f"Slow request: {log_data}")
        else:
            logger.info(f"Request: {log_data}")

        response.headers["X-Request-ID"] = request_id
        return response
