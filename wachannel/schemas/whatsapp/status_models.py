"""
WhatsApp message status schema.

Status updates are delivery receipts for messages sent by the business:
sent, delivered, read, failed, or deleted.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from wachannel.schemas.whatsapp.base_models import (
    Conversation,
    MessageError,
    Pricing,
)


class MessageStatus(str, Enum):
    SENT = "sent"
    DELIVERED = "delivered"
    READ = "read"
    FAILED = "failed"
    DELETED = "deleted"


class WhatsAppMessageStatus(BaseModel):
    """
    WhatsApp message status model.

    ``status`` is kept as a plain string so that values the provider adds
    later still parse; ``message_status`` gives the enum when it is known.
    """

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    id: str = Field(..., description="WhatsApp message ID that this status refers to")
    status: str = Field(..., description="Message delivery status")
    timestamp: str = Field(..., description="Unix timestamp of the status event")
    recipient_id: str = Field("", description="WhatsApp ID of the recipient")
    biz_opaque_callback_data: str | None = None
    conversation: Conversation | None = None
    pricing: Pricing | None = None
    errors: list[MessageError] | None = None

    @field_validator("id")
    @classmethod
    def validate_message_id(cls, v: str) -> str:
        if not v:
            raise ValueError("Status message ID cannot be empty")
        return v

    @property
    def message_status(self) -> MessageStatus | None:
        try:
            return MessageStatus(self.status)
        except ValueError:
            return None

    @property
    def timestamp_int(self) -> int:
        try:
            return int(self.timestamp)
        except ValueError:
            return 0
