"""
Global error handling middleware.

Unhandled exceptions on the webhook path answer ``500 {"err": ...}``, the
error shape WhatsApp notifications get everywhere else; other endpoints get a
generic internal error body.
"""

import time
import traceback
from typing import Any

from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from wachannel.core.config.settings import settings
from wachannel.core.logging.logger import get_logger


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Catches unhandled exceptions, logs them and answers a structured 500."""

    def __init__(self, app, webhook_path: str | None = None):
        super().__init__(app)
        self.webhook_path = webhook_path or settings.webhook_path

    async def dispatch(self, request: Request, call_next) -> Response:
        try:
            return await call_next(request)

        except HTTPException as http_exc:
            get_logger(__name__).warning(
                f"HTTP {http_exc.status_code} - {request.method} {request.url.path} - "
                f"Detail: {http_exc.detail}"
            )
            raise

        except Exception as exc:
            return self._handle_unexpected_exception(request, exc)

    def _handle_unexpected_exception(
        self, request: Request, exc: Exception
    ) -> JSONResponse:
        get_logger(__name__).error(
            f"Unhandled exception in {request.method} {request.url.path}: {exc}",
            exc_info=True,
        )

        if request.url.path == self.webhook_path:
            return JSONResponse(status_code=500, content={"err": str(exc)})

        error_response: dict[str, Any] = {
            "detail": "Internal server error",
            "type": "internal_error",
            "timestamp": time.time(),
        }
        if settings.is_development:
            error_response["debug"] = {
                "exception_type": type(exc).__name__,
                "exception_message": str(exc),
                "traceback": traceback.format_exc().split("\n"),
            }
        return JSONResponse(status_code=500, content=error_response)
