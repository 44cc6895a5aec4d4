"""
Webhook request verification.

WhatsApp signs every notification with ``X-Hub-Signature: sha1=<hex>``, the
HMAC-SHA1 of the raw request body keyed with the app secret.
"""

import hashlib
import hmac

SIGNATURE_HEADER = "x-hub-signature"
SIGNATURE_PREFIX = "sha1="
SIGNATURE_MISMATCH = "Couldn't match the request signature."


class WebhookSignatureError(Exception):
    """The request signature is missing or does not match the body."""

    def __init__(self, message: str = SIGNATURE_MISMATCH):
        super().__init__(message)


class WebhookVerificationError(Exception):
    """The GET subscription handshake failed."""


def compute_signature(app_secret: str, body: bytes) -> str:
    """Hex HMAC-SHA1 of body keyed with app_secret."""
    return hmac.new(app_secret.encode("utf-8"), body, hashlib.sha1).hexdigest()


def verify_signature(app_secret: str, body: bytes, signature_header: str | None) -> None:
    """
    Check an ``X-Hub-Signature`` header against the raw body.

    Raises:
        WebhookSignatureError: If the header is missing, malformed or wrong
    """
    if not signature_header:
        raise WebhookSignatureError()

    method, _, signature = signature_header.partition("=")
    if method.lower() != SIGNATURE_PREFIX.rstrip("=") or not signature:
        raise WebhookSignatureError()

    expected = compute_signature(app_secret, body)
    if not hmac.compare_digest(
        expected.encode("utf-8"), signature.lower().encode("utf-8")
    ):
        raise WebhookSignatureError()


def verify_subscription(
    mode: str | None, token: str | None, challenge: str | None, verify_token: str
) -> str:
    """
    Check a subscription handshake and return the challenge to echo back.

    Raises:
        WebhookVerificationError: If mode, token or challenge is missing or wrong
    """
    if not mode or not token:
        raise WebhookVerificationError(
            "Webhook subscription failed: mode or verify token is missing."
        )
    if mode != "subscribe" or not hmac.compare_digest(
        token.encode("utf-8"), verify_token.encode("utf-8")
    ):
        raise WebhookVerificationError(
            "Webhook subscription failed: the verify token does not match."
        )
    if challenge is None:
        raise WebhookVerificationError("Webhook subscription failed: no challenge.")
    return challenge
