"""
WhatsApp webhook processing: notification parsing, unit extraction and the
event wrapper that classifies one unit for the host engine.
"""

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any, Literal

from pydantic import ValidationError

from wachannel.core.config.channel_settings import CHANNEL_NAME
from wachannel.domain.models.attachment import Attachment
from wachannel.processors.base_processor import (
    BaseEventWrapper,
    InvalidEventError,
    MissingAttachmentError,
)
from wachannel.schemas.core.incoming import (
    AttachmentIdRef,
    AttachmentPayload,
    Coordinates,
    IncomingAttachment,
    LocationPayload,
    StdIncomingAttachmentMessage,
    StdIncomingLocationMessage,
    StdIncomingMessage,
    StdIncomingPostbackMessage,
    StdIncomingTextMessage,
)
from wachannel.schemas.core.types import FileType, IncomingMessageType, StdEventType
from wachannel.schemas.whatsapp import (
    MEDIA_TYPES,
    MessageStatus,
    WebhookValue,
    WhatsAppContact,
    WhatsAppMessage,
    WhatsAppMessageStatus,
    WhatsAppWebhook,
)
from wachannel.schemas.whatsapp.message_types import ContactInfo, MediaContent

# ================================================================
# Inbound units
# ================================================================


@dataclass(frozen=True)
class MessageUnit:
    """One customer message together with the change value it came in."""

    message: WhatsAppMessage
    value: WebhookValue


@dataclass(frozen=True)
class StatusUnit:
    """One delivery status together with the change value it came in."""

    status: WhatsAppMessageStatus
    value: WebhookValue


InboundUnit = MessageUnit | StatusUnit


@dataclass(frozen=True)
class RawUnit:
    """An unparsed message or status dict, in payload order."""

    kind: Literal["message", "status"]
    data: dict[str, Any]
    value: WebhookValue


class WebhookShapeError(ValueError):
    """The notification container does not have the expected structure."""


class WhatsAppWebhookProcessor:
    """Parses notifications and turns their messages/statuses into units."""

    def parse_webhook_container(self, payload: dict[str, Any]) -> WhatsAppWebhook:
        """
        Parse the top-level WhatsApp webhook structure.

        Messages and statuses stay raw; they are parsed unit by unit.

        Raises:
            WebhookShapeError: If the container structure is invalid
        """
        try:
            return WhatsAppWebhook.model_validate(payload)
        except ValidationError as e:
            raise WebhookShapeError(
                f"Failed to parse WhatsApp webhook structure: {e}"
            ) from e

    def iter_raw_units(self, webhook: WhatsAppWebhook) -> Iterator[RawUnit]:
        """Yield every message then every status of each change, in array order."""
        for entry in webhook.entry:
            for change in entry.changes:
                value = change.value
                for data in value.messages or []:
                    yield RawUnit("message", data, value)
                for data in value.statuses or []:
                    yield RawUnit("status", data, value)

    def create_unit(self, raw: RawUnit) -> InboundUnit:
        """
        Parse one raw unit.

        Raises:
            ValidationError: If the message or status data is invalid
        """
        if raw.kind == "message":
            return MessageUnit(WhatsAppMessage.model_validate(raw.data), raw.value)
        return StatusUnit(WhatsAppMessageStatus.model_validate(raw.data), raw.value)


# ================================================================
# Contacts serialization
# ================================================================


def _typed_line(kind: str | None, value: str) -> str:
    return f"- [{kind}] {value}" if kind else f"- {value}"


def format_contact(contact: ContactInfo) -> str:
    """Render one shared contact card as human-readable text."""
    name = contact.name
    lines = [f"Name: {name.formatted_name}"]
    for label, field in (
        ("First name", name.first_name),
        ("Last name", name.last_name),
        ("Middle name", name.middle_name),
        ("Prefix", name.prefix),
        ("Suffix", name.suffix),
    ):
        if field:
            lines.append(f"{label}: {field}")
    if contact.birthday:
        lines.append(f"Birthday: {contact.birthday}")

    org = contact.org
    if org and (org.company or org.department or org.title):
        lines.append("Organization:")
        for label, field in (
            ("Company", org.company),
            ("Department", org.department),
            ("Title", org.title),
        ):
            if field:
                lines.append(f"  {label}: {field}")

    if contact.emails:
        lines.append("Emails:")
        lines.extend(_typed_line(e.type, e.email) for e in contact.emails)
    if contact.phones:
        lines.append("Phones:")
        lines.extend(_typed_line(p.type, p.phone) for p in contact.phones)
    if contact.addresses:
        lines.append("Addresses:")
        lines.extend(_typed_line(a.type, a.to_line()) for a in contact.addresses)
    if contact.urls:
        lines.append("URLs:")
        lines.extend(_typed_line(u.type, u.url) for u in contact.urls)
    return "\n".join(lines)


def format_contacts(contacts: list[ContactInfo]) -> str:
    """Render shared contact cards, separated by a blank line."""
    return "\n\n".join(format_contact(c) for c in contacts)


# ================================================================
# Event wrapper
# ================================================================

_MESSAGE_TYPES: dict[str, IncomingMessageType] = {
    "text": IncomingMessageType.MESSAGE,
    "contacts": IncomingMessageType.MESSAGE,
    **{media: IncomingMessageType.ATTACHMENT for media in MEDIA_TYPES},
    "button": IncomingMessageType.POSTBACK,
    "interactive": IncomingMessageType.POSTBACK,
    "location": IncomingMessageType.LOCATION,
}

_STATUS_EVENT_TYPES: dict[MessageStatus, StdEventType] = {
    MessageStatus.DELIVERED: StdEventType.DELIVERY,
    MessageStatus.READ: StdEventType.READ,
}


class WhatsAppEventWrapper(BaseEventWrapper):
    """
    Host event wrapper over one WhatsApp message or status.

    Classification happens once in ``__init__``. The only later change is
    ``set_attachment``, which fills the attachment slot of a media message
    after the handler has stored the downloaded file.
    """

    def __init__(self, unit: InboundUnit, channel_name: str = CHANNEL_NAME):
        super().__init__(channel_name)
        self._unit = unit
        self._attachment: Attachment | None = None
        self._event_type, self._message_type = self._classify(unit)

    def _classify(
        self, unit: InboundUnit
    ) -> tuple[StdEventType, IncomingMessageType | None]:
        if isinstance(unit, StatusUnit):
            event_type = _STATUS_EVENT_TYPES.get(
                unit.status.message_status, StdEventType.UNKNOWN
            )
            return event_type, None

        message_type = _MESSAGE_TYPES.get(unit.message.type)
        if message_type is None:
            return StdEventType.UNKNOWN, IncomingMessageType.UNKNOWN
        if message_type == IncomingMessageType.POSTBACK and self._postback() is None:
            return StdEventType.UNKNOWN, IncomingMessageType.UNKNOWN
        return StdEventType.MESSAGE, message_type

    # ------------------------------------------------------------------
    # Unit accessors
    # ------------------------------------------------------------------

    @property
    def unit(self) -> InboundUnit:
        return self._unit

    @property
    def message(self) -> WhatsAppMessage | None:
        return self._unit.message if isinstance(self._unit, MessageUnit) else None

    @property
    def status(self) -> WhatsAppMessageStatus | None:
        return self._unit.status if isinstance(self._unit, StatusUnit) else None

    def get_raw(self) -> dict[str, Any]:
        model = self.message or self.status
        return model.model_dump(by_alias=True, exclude_none=True)

    def get_id(self) -> str:
        return (self.message or self.status).id

    def get_phone_number_id(self) -> str:
        return self._unit.value.metadata.phone_number_id

    def get_contact(self) -> WhatsAppContact | None:
        """Profile of the customer who sent the message, if provided."""
        if self.message is None:
            return None
        return self._unit.value.get_contact(self.message.sender)

    # ------------------------------------------------------------------
    # Classification
    # ------------------------------------------------------------------

    def get_event_type(self) -> StdEventType:
        return self._event_type

    def get_message_type(self) -> IncomingMessageType | None:
        return self._message_type

    def get_sender_foreign_id(self) -> str | None:
        if self.message is None:
            return None
        return self.message.sender

    def get_recipient_foreign_id(self) -> str | None:
        # status recipient ids are not relied upon; see status.recipient_id
        return None

    def get_delivered_messages(self) -> list[str]:
        if self._event_type == StdEventType.DELIVERY:
            return [self.status.id]
        return []

    def get_watermark(self) -> int:
        return (self.message or self.status).timestamp_int

    def get_status_detail(self) -> dict[str, Any]:
        """Conversation, pricing and error detail of a status unit."""
        if self.status is None:
            raise InvalidEventError("Called get_status_detail() on a non-status event")
        return self.status.model_dump(
            include={"conversation", "pricing", "errors", "biz_opaque_callback_data"},
            exclude_none=True,
        )

    # ------------------------------------------------------------------
    # Attachments
    # ------------------------------------------------------------------

    def get_media_reference(self) -> MediaContent | None:
        """Provider media id and mime type of a media message."""
        if self._message_type != IncomingMessageType.ATTACHMENT:
            return None
        return self.message.media

    def set_attachment(self, attachment: Attachment) -> None:
        """Attach the stored file of a media message. Allowed once."""
        if self._message_type != IncomingMessageType.ATTACHMENT:
            raise InvalidEventError("Only media messages carry an attachment")
        if self._attachment is not None:
            raise InvalidEventError(
                f"Attachment of message {self.get_id()} is already resolved"
            )
        self._attachment = attachment

    def get_attachments(self) -> list[Attachment]:
        return [self._attachment] if self._attachment else []

    def _require_attachment(self) -> IncomingAttachment:
        if self._attachment is None:
            raise MissingAttachmentError(self.get_id())
        media = self.message.media
        return IncomingAttachment(
            type=FileType.from_mime_type(self._attachment.type or media.mime_type),
            payload=AttachmentIdRef(id=self._attachment.id),
        )

    # ------------------------------------------------------------------
    # Payload & message
    # ------------------------------------------------------------------

    def _postback(self) -> tuple[str, str] | None:
        """(id, title) from button_reply, then list_reply, then button payload."""
        message = self.message
        interactive = message.interactive
        if interactive is not None:
            if interactive.button_reply is not None:
                return interactive.button_reply.id, interactive.button_reply.title
            if interactive.list_reply is not None:
                return interactive.list_reply.id, interactive.list_reply.title
        if message.button is not None and message.button.payload:
            return message.button.payload, message.button.text
        return None

    def _coordinates(self) -> Coordinates:
        location = self.message.location
        return Coordinates(
            lat=location.latitude if location.latitude is not None else 0,
            lon=location.longitude if location.longitude is not None else 0,
        )

    def _text(self) -> str:
        message = self.message
        if message.type == "contacts":
            return format_contacts(message.contacts)
        return message.text.body

    def get_payload(self) -> LocationPayload | AttachmentPayload | str | None:
        if self._event_type != StdEventType.MESSAGE:
            return None

        if self._message_type == IncomingMessageType.POSTBACK:
            return self._postback()[0]
        if self._message_type == IncomingMessageType.LOCATION:
            return LocationPayload(coordinates=self._coordinates())
        if self._message_type == IncomingMessageType.ATTACHMENT:
            return AttachmentPayload(attachment=self._require_attachment())
        return None

    def get_message(self) -> StdIncomingMessage:
        if self._event_type != StdEventType.MESSAGE:
            raise InvalidEventError("Called get_message() on a non-message event")

        if self._message_type == IncomingMessageType.POSTBACK:
            postback, title = self._postback()
            return StdIncomingPostbackMessage(postback=postback, text=title)
        if self._message_type == IncomingMessageType.LOCATION:
            return StdIncomingLocationMessage(coordinates=self._coordinates())
        if self._message_type == IncomingMessageType.ATTACHMENT:
            attachment = self._require_attachment()
            return StdIncomingAttachmentMessage(
                serialized_text=f"attachment:{attachment.type.value}:{self._attachment.name}",
                attachment=attachment,
            )
        return StdIncomingTextMessage(text=self._text())
