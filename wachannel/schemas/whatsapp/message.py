"""
Inbound WhatsApp message model.

A message carries a ``type`` tag and exactly one populated content field named
after that tag. Tags the adapter does not model (``unsupported``, future
types) are accepted without content and classified as unknown downstream.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from wachannel.schemas.whatsapp.base_models import MessageContext, MessageError
from wachannel.schemas.whatsapp.message_types import (
    ButtonContent,
    ContactInfo,
    InteractiveContent,
    LocationContent,
    MediaContent,
    TextContent,
)

MEDIA_TYPES = ("image", "audio", "video", "document", "sticker")

# type tag -> content field; each known tag must have its field populated
CONTENT_FIELDS = (
    "text",
    *MEDIA_TYPES,
    "interactive",
    "button",
    "location",
    "contacts",
    "order",
    "system",
    "reaction",
)


class WhatsAppMessage(BaseModel):
    """One customer-sent message from a webhook ``messages`` array."""

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    id: str = Field(..., description="Unique WhatsApp message ID (wamid)")
    from_: str = Field(..., alias="from", description="Sender WhatsApp ID")
    timestamp: str = Field(..., description="Unix timestamp (seconds) as string")
    type: str = Field(..., description="Message type tag")

    text: TextContent | None = None
    image: MediaContent | None = None
    audio: MediaContent | None = None
    video: MediaContent | None = None
    document: MediaContent | None = None
    sticker: MediaContent | None = None
    interactive: InteractiveContent | None = None
    button: ButtonContent | None = None
    location: LocationContent | None = None
    contacts: list[ContactInfo] | None = None
    order: dict[str, Any] | None = None
    system: dict[str, Any] | None = None
    reaction: dict[str, Any] | None = None

    context: MessageContext | None = None
    errors: list[MessageError] | None = None

    @model_validator(mode="after")
    def validate_single_content(self):
        """Exactly one content field is populated and it matches the type tag."""
        populated = [name for name in CONTENT_FIELDS if getattr(self, name) is not None]
        if self.type in CONTENT_FIELDS:
            if populated != [self.type]:
                raise ValueError(
                    f"Message of type '{self.type}' must carry exactly its "
                    f"'{self.type}' content, found {populated or 'none'}"
                )
        elif populated:
            raise ValueError(
                f"Message of unknown type '{self.type}' carries content {populated}"
            )
        return self

    @property
    def sender(self) -> str:
        return self.from_

    @property
    def is_media(self) -> bool:
        return self.type in MEDIA_TYPES

    @property
    def media(self) -> MediaContent | None:
        """The media reference for media messages, else None."""
        return getattr(self, self.type) if self.is_media else None

    @property
    def timestamp_int(self) -> int:
        try:
            return int(self.timestamp)
        except ValueError:
            return 0
