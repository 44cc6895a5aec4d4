"""
WhatsApp error handling utilities.

Graph API failures are surfaced as TransportError carrying the HTTP status and
the provider's error body, e.g.::

    {"error": {"message": "...", "type": "OAuthException", "code": 190, "fbtrace_id": "..."}}
"""

from typing import Any

# Graph API error codes
ERROR_CODE_ACCESS_TOKEN_EXPIRED = 190


class TransportError(Exception):
    """Non-2xx response from the Graph API."""

    def __init__(self, status: int, body: Any, url: str | None = None):
        self.status = status
        self.body = body
        self.url = url
        super().__init__(f"Graph API request failed with {status}: {describe_error(body)}")

    @property
    def error(self) -> dict[str, Any]:
        if isinstance(self.body, dict) and isinstance(self.body.get("error"), dict):
            return self.body["error"]
        return {}

    @property
    def code(self) -> int | None:
        return self.error.get("code")


def describe_error(body: Any) -> str:
    """Human-readable summary of a Graph API error body."""
    if isinstance(body, dict) and isinstance(body.get("error"), dict):
        error = body["error"]
        message = error.get("message", "unknown error")
        code = error.get("code")
        return f"{message} (code {code})" if code is not None else message
    return str(body)


def is_authentication_error(error: Exception) -> bool:
    """Check if an exception indicates an authentication failure."""
    if isinstance(error, TransportError):
        return error.status == 401 or error.code == ERROR_CODE_ACCESS_TOKEN_EXPIRED
    error_str = str(error)
    return "401" in error_str or "Unauthorized" in error_str
