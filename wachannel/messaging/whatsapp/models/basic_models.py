"""
Basic outbound wire models for WhatsApp messaging.

Every outbound model renders to the JSON body of
``POST /<version>/<phone_number_id>/messages`` minus the addressing fields
(``messaging_product``, ``recipient_type``, ``to``), which the transport client
adds at send time.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class ReplyContext(BaseModel):
    """Quote a previous message."""

    message_id: str


class WireMessageBase(BaseModel):
    """Common base of all outbound WhatsApp messages."""

    model_config = ConfigDict(frozen=True)

    type: str
    context: ReplyContext | None = None

    def to_payload(self) -> dict[str, Any]:
        """Render the message body, dropping unset optional fields."""
        return self.model_dump(mode="json", exclude_none=True)


class TextBody(BaseModel):
    model_config = ConfigDict(frozen=True)

    body: str = Field(..., description="Text content (provider limit 4096)")
    preview_url: bool | None = None


class TextMessage(WireMessageBase):
    type: Literal["text"] = "text"
    text: TextBody


class ReactionBody(BaseModel):
    model_config = ConfigDict(frozen=True)

    message_id: str
    emoji: str = Field(..., description="Emoji, or empty string to remove")


class ReactionMessage(WireMessageBase):
    type: Literal["reaction"] = "reaction"
    reaction: ReactionBody


class SendMessageResult(BaseModel):
    """Result of a send-message call.

    The Graph API answers with ``{"messaging_product", "contacts", "messages": [{"id"}]}``.
    """

    message_id: str
    recipient: str | None = None
    phone_number_id: str | None = None

    @classmethod
    def from_response(
        cls,
        response: dict[str, Any],
        recipient: str | None = None,
        phone_number_id: str | None = None,
    ) -> "SendMessageResult":
        messages = response.get("messages") or [{}]
        message_id = messages[0].get("id")
        if not message_id:
            raise ValueError(f"Send response carries no message id: {response}")
        return cls(
            message_id=message_id,
            recipient=recipient,
            phone_number_id=phone_number_id,
        )
