from .validators import (
    SIGNATURE_HEADER,
    SIGNATURE_MISMATCH,
    WebhookSignatureError,
    WebhookVerificationError,
    compute_signature,
    verify_signature,
    verify_subscription,
)

__all__ = [
    "SIGNATURE_HEADER",
    "SIGNATURE_MISMATCH",
    "WebhookSignatureError",
    "WebhookVerificationError",
    "compute_signature",
    "verify_signature",
    "verify_subscription",
]
