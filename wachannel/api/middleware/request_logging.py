"""
Request and response logging middleware.
"""

import time

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from wachannel.core.config.settings import settings
from wachannel.core.logging.logger import get_logger

SKIP_PATHS = ("/health", "/docs", "/redoc", "/openapi.json", "/favicon.ico")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs every request with its status code and processing time.

    Bodies and headers are never logged: notifications carry customer data and
    the signature header.
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        start_time = time.time()
        response = await call_next(request)
        process_time_ms = round((time.time() - start_time) * 1000, 2)

        if settings.is_development:
            response.headers["X-Process-Time"] = str(process_time_ms)

        if not request.url.path.startswith(SKIP_PATHS):
            self._log_response(request, response.status_code, process_time_ms)
        return response

    def _log_response(self, request: Request, status_code: int, process_time_ms: float) -> None:
        logger = get_logger(__name__)
        message = (
            f"Response {status_code} for {request.method} {request.url.path} "
            f"({process_time_ms}ms)"
        )
        if status_code >= 500:
            logger.error(message)
        elif status_code >= 400:
            logger.warning(message)
        else:
            logger.info(message)
