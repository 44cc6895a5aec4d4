"""
Message factory translating host envelopes into WhatsApp wire messages.

The factory is pure: it reads one envelope and returns one wire message
without performing I/O. Anything that needs a collaborator (public URLs for
stored attachments) is reached through the TranslationContext.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import TypeAdapter

from wachannel.domain.models.attachment import Attachment
from wachannel.messaging.whatsapp.models import (
    LIST_ROW_DESCRIPTION_LIMIT,
    Interactive,
    InteractiveAction,
    InteractiveMessage,
    InteractiveText,
    InteractiveType,
    ListRow,
    ListSection,
    MediaMessage,
    MediaObject,
    MediaType,
    ReplyButton,
    ReplyButtonReply,
    TextBody,
    TextMessage,
    WireMessageBase,
)
from wachannel.schemas.core.envelope import (
    AttachmentContent,
    AttachmentRef,
    BlockOptions,
    ButtonsContent,
    ListContent,
    OutgoingEnvelope,
    PostbackButton,
    QuickRepliesContent,
    TextContent,
)
from wachannel.schemas.core.types import FileType, OutgoingMessageFormat

DEFAULT_LIST_LABEL = "View"
LIST_CALL_TO_ACTION = 'Tap "{label}" to browse the available options.'
EMPTY_LIST_TEXT = "There are no options to show right now."
ELLIPSIS = "..."

_envelope_adapter = TypeAdapter(OutgoingEnvelope)

_FILE_TYPE_TO_MEDIA: dict[FileType, MediaType] = {
    FileType.IMAGE: MediaType.IMAGE,
    FileType.VIDEO: MediaType.VIDEO,
    FileType.AUDIO: MediaType.AUDIO,
    FileType.FILE: MediaType.DOCUMENT,
}


class UnsupportedFormatError(ValueError):
    """The envelope format has no translation."""

    def __init__(self, message_format: Any):
        self.format = message_format
        super().__init__(f"Unknown message format: {message_format}")


class UnsupportedAttachmentTypeError(ValueError):
    """The attachment kind cannot be sent as WhatsApp media."""

    def __init__(self, attachment_type: Any):
        self.attachment_type = attachment_type
        super().__init__(f"Unsupported attachment type: {attachment_type}")


UrlResolver = Callable[[Attachment | AttachmentRef], str]


@dataclass(frozen=True)
class TranslationContext:
    """Collaborators and options available while translating one envelope."""

    url_resolver: UrlResolver | None = None
    options: BlockOptions | None = None


def truncate(text: str, limit: int) -> str:
    """Cut text to limit characters, marking the cut with an ellipsis."""
    if len(text) <= limit:
        return text
    return text[: limit - len(ELLIPSIS)] + ELLIPSIS


def to_media_type(file_type: FileType | str) -> MediaType:
    """Map a host file kind to a WhatsApp media kind (file -> document)."""
    try:
        return _FILE_TYPE_TO_MEDIA[FileType(file_type)]
    except (KeyError, ValueError):
        raise UnsupportedAttachmentTypeError(file_type) from None


class WhatsAppMessageFactory:
    """Translates OutgoingEnvelope instances into WhatsApp wire messages."""

    def __init__(self):
        self._formatters: dict[str, Callable[[Any, TranslationContext], WireMessageBase]] = {
            OutgoingMessageFormat.TEXT.value: self.create_text_message,
            OutgoingMessageFormat.QUICK_REPLIES.value: self.create_quick_replies_message,
            OutgoingMessageFormat.BUTTONS.value: self.create_buttons_message,
            OutgoingMessageFormat.LIST.value: self.create_list_message,
            # no carousel on the wire; carousels render as lists
            OutgoingMessageFormat.CAROUSEL.value: self.create_list_message,
            OutgoingMessageFormat.ATTACHMENT.value: self.create_attachment_message,
        }

    def parse_envelope(self, envelope: Any):
        """Validate a raw mapping into an envelope model; models pass through."""
        if isinstance(envelope, Mapping):
            message_format = envelope.get("format")
            if message_format not in self._formatters:
                raise UnsupportedFormatError(message_format)
            return _envelope_adapter.validate_python(envelope)
        return envelope

    def translate(
        self, envelope: Any, context: TranslationContext | None = None
    ) -> WireMessageBase:
        envelope = self.parse_envelope(envelope)
        message_format = getattr(envelope, "format", None)
        formatter = self._formatters.get(
            getattr(message_format, "value", message_format)
        )
        if formatter is None:
            raise UnsupportedFormatError(message_format)
        return formatter(envelope.message, context or TranslationContext())

    # Basic Messages
    def create_text_message(
        self, message: TextContent, context: TranslationContext
    ) -> TextMessage:
        return TextMessage(text=TextBody(body=message.text))

    # Interactive Messages
    def create_quick_replies_message(
        self, message: QuickRepliesContent, context: TranslationContext
    ) -> WireMessageBase:
        replies = [(qr.payload, qr.title) for qr in message.quick_replies]
        return self._reply_buttons(message.text, replies)

    def create_buttons_message(
        self, message: ButtonsContent, context: TranslationContext
    ) -> WireMessageBase:
        # URL buttons have no reply-button equivalent and are dropped
        replies = [
            (button.payload, button.title)
            for button in message.buttons
            if isinstance(button, PostbackButton)
        ]
        return self._reply_buttons(message.text, replies)

    def _reply_buttons(
        self, text: str, replies: list[tuple[str, str]]
    ) -> WireMessageBase:
        if not replies:
            return TextMessage(text=TextBody(body=text))
        return InteractiveMessage(
            interactive=Interactive(
                type=InteractiveType.BUTTON,
                body=InteractiveText(text=text),
                action=InteractiveAction(
                    buttons=[
                        ReplyButton(reply=ReplyButtonReply(id=payload, title=title))
                        for payload, title in replies
                    ]
                ),
            )
        )

    def create_list_message(
        self, message: ListContent, context: TranslationContext
    ) -> WireMessageBase:
        # a list section needs at least one row
        if not message.elements:
            return TextMessage(text=TextBody(body=EMPTY_LIST_TEXT))

        label = self._list_label(message, context)
        rows = [
            ListRow(
                id=element.canonical_payload,
                title=element.title,
                description=(
                    truncate(element.description, LIST_ROW_DESCRIPTION_LIMIT)
                    if element.description
                    else None
                ),
            )
            for element in message.elements
        ]
        return InteractiveMessage(
            interactive=Interactive(
                type=InteractiveType.LIST,
                body=InteractiveText(text=LIST_CALL_TO_ACTION.format(label=label)),
                action=InteractiveAction(
                    button=label, sections=[ListSection(rows=rows)]
                ),
            )
        )

    @staticmethod
    def _list_label(message: ListContent, context: TranslationContext) -> str:
        """First declared button title, from the envelope or the block options."""
        buttons = message.options.buttons
        if not buttons and context.options and context.options.content:
            buttons = context.options.content.buttons
        return buttons[0].title if buttons else DEFAULT_LIST_LABEL

    # Media Messages
    def create_attachment_message(
        self, message: AttachmentContent, context: TranslationContext
    ) -> MediaMessage:
        media_type = to_media_type(message.attachment.type)
        payload = message.attachment.payload
        if context.url_resolver is None:
            raise ValueError("An attachment URL resolver is required")
        link = context.url_resolver(payload)
        name = getattr(payload, "name", None) or None

        if media_type == MediaType.AUDIO:
            media = MediaObject(link=link)
        elif media_type == MediaType.DOCUMENT:
            media = MediaObject(link=link, caption=name, filename=name)
        else:
            media = MediaObject(link=link, caption=name)
        return MediaMessage.build(media_type, media)


_default_factory = WhatsAppMessageFactory()


def translate(envelope: Any, context: TranslationContext | None = None) -> WireMessageBase:
    """Translate one outgoing envelope into a WhatsApp wire message."""
    return _default_factory.translate(envelope, context)
