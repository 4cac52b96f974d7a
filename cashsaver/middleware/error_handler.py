"""Error handler middleware for uncaught exceptions."""

import logging
from typing import Callable

from fastapi import Request, Response, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from cashsaver.config import settings

logger = logging.getLogger(__name__)


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Middleware for handling uncaught exceptions.

    - Logs the error with request context
    - Returns a safe error body to clients (details only in DEBUG)
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)

        except Exception as exc:
            logger.error(
                f"Unhandled {type(exc).__name__} on {request.method} {request.url.path}: {exc}",
                exc_info=True,
            )

            if settings.DEBUG:
                error_detail = {
                    "error": str(exc),
                    "type": type(exc).__name__,
                    "detail": "An error occurred processing your request",
                }
            else:
                error_detail = {
                    "error": "Internal server error",
                    "detail": "An unexpected error occurred. Please try again later.",
                }

            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=error_detail
            )
