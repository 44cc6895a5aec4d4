from .base_processor import BaseEventWrapper, InvalidEventError, MissingAttachmentError
from .whatsapp_processor import (
    InboundUnit,
    MessageUnit,
    RawUnit,
    StatusUnit,
    WebhookShapeError,
    WhatsAppEventWrapper,
    WhatsAppWebhookProcessor,
    format_contacts,
)

__all__ = [
    "BaseEventWrapper",
    "InboundUnit",
    "InvalidEventError",
    "MessageUnit",
    "MissingAttachmentError",
    "RawUnit",
    "StatusUnit",
    "WebhookShapeError",
    "WhatsAppEventWrapper",
    "WhatsAppWebhookProcessor",
    "format_contacts",
]
