"""
Outgoing envelope models.

An envelope is the host engine's platform-neutral description of one outbound
message and the format it should be rendered in. Envelopes are immutable; the
message factory reads them once and never writes back.
"""

from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from wachannel.domain.models.attachment import Attachment
from wachannel.schemas.core.types import (
    FileType,
    QuickReplyType,
)


class _EnvelopeModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class PostbackButton(_EnvelopeModel):
    type: Literal["postback"] = "postback"
    title: str
    payload: str


class WebUrlButton(_EnvelopeModel):
    type: Literal["web_url"] = "web_url"
    title: str
    url: str
    messenger_extensions: bool = False
    webview_height_ratio: str | None = None


Button = Annotated[PostbackButton | WebUrlButton, Field(discriminator="type")]


class QuickReply(_EnvelopeModel):
    content_type: QuickReplyType = QuickReplyType.TEXT
    title: str
    payload: str


class ContentElement(_EnvelopeModel):
    """One entry of a list or carousel."""

    id: str
    title: str
    description: str | None = Field(None, alias="subtitle")
    postback: str | None = None
    image_url: str | None = None

    @property
    def canonical_payload(self) -> str:
        """The postback a row selection reports back: explicit postback, else the id."""
        return self.postback or self.id


class ContentPagination(_EnvelopeModel):
    total: int = 0
    skip: int = 0
    limit: int = 0


class ListOptions(_EnvelopeModel):
    display: Literal["list", "carousel"] = "list"
    buttons: list[Button] = Field(default_factory=list)
    fields: dict[str, Any] = Field(default_factory=dict)
    limit: int | None = None


class AttachmentRef(_EnvelopeModel):
    """Reference to an attachment the host has not loaded (id only)."""

    id: str


class OutgoingAttachment(_EnvelopeModel):
    type: FileType | str
    payload: Attachment | AttachmentRef


# ---------------------------------------------------------------------------
# Messages per format
# ---------------------------------------------------------------------------


class TextContent(_EnvelopeModel):
    text: str


class QuickRepliesContent(_EnvelopeModel):
    text: str
    quick_replies: list[QuickReply] = Field(..., alias="quickReplies")


class ButtonsContent(_EnvelopeModel):
    text: str
    buttons: list[Button]


class ListContent(_EnvelopeModel):
    options: ListOptions = Field(default_factory=ListOptions)
    elements: list[ContentElement]
    pagination: ContentPagination | None = None


class AttachmentContent(_EnvelopeModel):
    attachment: OutgoingAttachment
    quick_replies: list[QuickReply] = Field(default_factory=list, alias="quickReplies")


class BlockOptions(_EnvelopeModel):
    """Per-block rendering options passed alongside an envelope."""

    typing: bool | int = False
    content: ListOptions | None = None
    assign_labels: list[str] = Field(default_factory=list, alias="assignTo")


# ---------------------------------------------------------------------------
# Envelopes
# ---------------------------------------------------------------------------


class TextEnvelope(_EnvelopeModel):
    format: Literal["text"] = "text"
    message: TextContent


class QuickRepliesEnvelope(_EnvelopeModel):
    format: Literal["quickReplies"] = "quickReplies"
    message: QuickRepliesContent


class ButtonsEnvelope(_EnvelopeModel):
    format: Literal["buttons"] = "buttons"
    message: ButtonsContent


class ListEnvelope(_EnvelopeModel):
    format: Literal["list"] = "list"
    message: ListContent


class CarouselEnvelope(_EnvelopeModel):
    format: Literal["carousel"] = "carousel"
    message: ListContent


class AttachmentEnvelope(_EnvelopeModel):
    format: Literal["attachment"] = "attachment"
    message: AttachmentContent


OutgoingEnvelope = Annotated[
    TextEnvelope
    | QuickRepliesEnvelope
    | ButtonsEnvelope
    | ListEnvelope
    | CarouselEnvelope
    | AttachmentEnvelope,
    Field(discriminator="format"),
]
