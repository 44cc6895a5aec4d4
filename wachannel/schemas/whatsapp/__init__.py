"""WhatsApp inbound webhook schemas."""

from .base_models import (
    ContactProfile,
    Conversation,
    MessageContext,
    MessageError,
    Pricing,
    WhatsAppContact,
    WhatsAppMetadata,
)
from .message import MEDIA_TYPES, WhatsAppMessage
from .status_models import MessageStatus, WhatsAppMessageStatus
from .webhook_container import (
    WHATSAPP_OBJECT,
    WebhookChange,
    WebhookEntry,
    WebhookValue,
    WhatsAppWebhook,
)

__all__ = [
    "MEDIA_TYPES",
    "WHATSAPP_OBJECT",
    "ContactProfile",
    "Conversation",
    "MessageContext",
    "MessageError",
    "MessageStatus",
    "Pricing",
    "WebhookChange",
    "WebhookEntry",
    "WebhookValue",
    "WhatsAppContact",
    "WhatsAppMessage",
    "WhatsAppMessageStatus",
    "WhatsAppMetadata",
    "WhatsAppWebhook",
]
