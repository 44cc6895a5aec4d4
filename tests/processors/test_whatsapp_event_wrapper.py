"""
Tests for WhatsAppEventWrapper: classification, payloads and normalized messages.
"""

import pytest

from wachannel.domain.models.attachment import Attachment
from wachannel.processors.base_processor import InvalidEventError, MissingAttachmentError
from wachannel.processors.whatsapp_processor import (
    WhatsAppEventWrapper,
    WhatsAppWebhookProcessor,
)
from wachannel.schemas.core.incoming import (
    LocationPayload,
    StdIncomingAttachmentMessage,
    StdIncomingPostbackMessage,
    StdIncomingTextMessage,
)
from wachannel.schemas.core.types import FileType, IncomingMessageType, StdEventType


@pytest.fixture
def wrap(notification):
    """Build the wrapper of the first unit of a notification."""
    processor = WhatsAppWebhookProcessor()

    def _wrap(**kwargs) -> WhatsAppEventWrapper:
        webhook = processor.parse_webhook_container(notification(**kwargs))
        raw = next(iter(processor.iter_raw_units(webhook)))
        return WhatsAppEventWrapper(processor.create_unit(raw))

    return _wrap


def stored_attachment(mime: str = "image/jpeg") -> Attachment:
    return Attachment(id="att-1", name="media-1.jpg", type=mime, size=10)


class TestTextMessages:
    def test_text(self, wrap, message):
        event = wrap(messages=[message("text", {"body": "hello"})])

        assert event.get_event_type() == StdEventType.MESSAGE
        assert event.get_message_type() == IncomingMessageType.MESSAGE
        assert event.get_payload() is None
        assert event.get_message() == StdIncomingTextMessage(text="hello")

    def test_identity_accessors(self, wrap, message):
        event = wrap(messages=[message("text", {"body": "hi"}, msg_id="wamid.X")])

        assert event.get_id() == "wamid.X"
        assert event.get_sender_foreign_id() == "5511999990000"
        assert event.get_recipient_foreign_id() is None
        assert event.get_phone_number_id() == "106540352242922"
        assert event.get_watermark() == 1700000000
        assert event.get_delivered_messages() == []
        assert event.channel_name == "whatsapp-channel"

    def test_contact_profile(self, wrap, message):
        event = wrap(messages=[message("text", {"body": "hi"})])

        assert event.get_contact().profile.name == "Jane Doe"

    def test_contacts_are_serialized_as_text(self, wrap, message):
        card = {
            "name": {"formatted_name": "John Smith", "first_name": "John"},
            "org": {"company": "Acme", "title": "CTO"},
            "emails": [{"email": "john@acme.com", "type": "WORK"}],
            "phones": [{"phone": "+1 555 0100"}],
        }
        event = wrap(messages=[message("contacts", [card])])

        assert event.get_message_type() == IncomingMessageType.MESSAGE
        assert event.get_message().text == (
            "Name: John Smith\n"
            "First name: John\n"
            "Organization:\n"
            "  Company: Acme\n"
            "  Title: CTO\n"
            "Emails:\n"
            "- [WORK] john@acme.com\n"
            "Phones:\n"
            "- +1 555 0100"
        )

    def test_multiple_contacts_are_separated_by_blank_line(self, wrap, message):
        cards = [{"name": {"formatted_name": "A"}}, {"name": {"formatted_name": "B"}}]
        event = wrap(messages=[message("contacts", cards)])

        assert event.get_message().text == "Name: A\n\nName: B"


class TestPostbacks:
    def test_button_reply(self, wrap, message):
        event = wrap(
            messages=[
                message(
                    "interactive",
                    {"type": "button_reply", "button_reply": {"id": "YES", "title": "Yes"}},
                )
            ]
        )

        assert event.get_message_type() == IncomingMessageType.POSTBACK
        assert event.get_payload() == "YES"
        assert event.get_message() == StdIncomingPostbackMessage(postback="YES", text="Yes")

    def test_list_reply(self, wrap, message):
        event = wrap(
            messages=[
                message(
                    "interactive",
                    {
                        "type": "list_reply",
                        "list_reply": {"id": "ORDER_PIZZA", "title": "Pizza"},
                    },
                )
            ]
        )

        assert event.get_payload() == "ORDER_PIZZA"
        assert event.get_message().text == "Pizza"

    def test_button_reply_wins_over_list_reply(self, wrap, message):
        event = wrap(
            messages=[
                message(
                    "interactive",
                    {
                        "type": "button_reply",
                        "button_reply": {"id": "B", "title": "Button"},
                        "list_reply": {"id": "L", "title": "List"},
                    },
                )
            ]
        )

        assert event.get_payload() == "B"

    def test_template_button(self, wrap, message):
        event = wrap(messages=[message("button", {"payload": "STOP", "text": "Stop"})])

        assert event.get_message_type() == IncomingMessageType.POSTBACK
        assert event.get_message() == StdIncomingPostbackMessage(postback="STOP", text="Stop")

    def test_interactive_without_reply_is_unknown(self, wrap, message):
        event = wrap(messages=[message("interactive", {"type": "nfm_reply"})])

        assert event.get_event_type() == StdEventType.UNKNOWN
        assert event.get_message_type() == IncomingMessageType.UNKNOWN
        with pytest.raises(InvalidEventError):
            event.get_message()


class TestLocation:
    def test_location_payload(self, wrap, message):
        event = wrap(
            messages=[message("location", {"latitude": 48.85, "longitude": 2.35})]
        )

        payload = event.get_payload()
        assert isinstance(payload, LocationPayload)
        assert payload.type == "location"
        assert (payload.coordinates.lat, payload.coordinates.lon) == (48.85, 2.35)
        assert event.get_message().coordinates == payload.coordinates

    def test_missing_coordinates_default_to_zero(self, wrap, message):
        event = wrap(messages=[message("location", {"name": "Somewhere"})])

        coordinates = event.get_payload().coordinates
        assert (coordinates.lat, coordinates.lon) == (0, 0)


class TestAttachments:
    @pytest.mark.parametrize("media_type", ["image", "audio", "video", "document", "sticker"])
    def test_media_types_are_attachments(self, wrap, message, media_type):
        event = wrap(messages=[message(media_type, {"id": "media-1", "mime_type": "image/jpeg"})])

        assert event.get_message_type() == IncomingMessageType.ATTACHMENT
        assert event.get_media_reference().id == "media-1"

    def test_payload_requires_resolved_attachment(self, wrap, message):
        event = wrap(messages=[message("image", {"id": "media-1", "mime_type": "image/jpeg"})])

        with pytest.raises(MissingAttachmentError):
            event.get_payload()

    def test_resolved_attachment(self, wrap, message):
        event = wrap(messages=[message("image", {"id": "media-1", "mime_type": "image/jpeg"})])
        event.set_attachment(stored_attachment())

        payload = event.get_payload()
        assert payload.type == "attachments"
        assert payload.attachment.type == FileType.IMAGE
        assert payload.attachment.payload.id == "att-1"
        assert event.get_attachments() == [stored_attachment()]

        normalized = event.get_message()
        assert isinstance(normalized, StdIncomingAttachmentMessage)
        assert normalized.serialized_text == "attachment:image:media-1.jpg"

    def test_attachment_can_only_be_set_once(self, wrap, message):
        event = wrap(messages=[message("image", {"id": "media-1"})])
        event.set_attachment(stored_attachment())

        with pytest.raises(InvalidEventError):
            event.set_attachment(stored_attachment())

    def test_text_message_rejects_attachment(self, wrap, message):
        event = wrap(messages=[message("text", {"body": "hi"})])

        assert event.get_media_reference() is None
        with pytest.raises(InvalidEventError):
            event.set_attachment(stored_attachment())


class TestStatuses:
    def test_delivered(self, wrap, status):
        event = wrap(statuses=[status("delivered", msg_id="wamid.OUT9")])

        assert event.get_event_type() == StdEventType.DELIVERY
        assert event.get_message_type() is None
        assert event.get_delivered_messages() == ["wamid.OUT9"]
        assert event.get_watermark() == 1700000100
        assert event.get_sender_foreign_id() is None
        assert event.get_payload() is None

    def test_read(self, wrap, status):
        event = wrap(statuses=[status("read")])

        assert event.get_event_type() == StdEventType.READ
        assert event.get_delivered_messages() == []

    @pytest.mark.parametrize("value", ["sent", "failed", "deleted", "something_new"])
    def test_other_statuses_are_unknown(self, wrap, status, value):
        event = wrap(statuses=[status(value)])

        assert event.get_event_type() == StdEventType.UNKNOWN
        with pytest.raises(InvalidEventError):
            event.get_message()

    def test_status_detail(self, wrap, status):
        data = status("failed")
        data["errors"] = [{"code": 131047, "title": "Re-engagement message"}]
        event = wrap(statuses=[data])

        assert event.get_status_detail()["errors"][0]["code"] == 131047


def test_unsupported_message_is_unknown(wrap, message):
    event = wrap(messages=[message("unsupported")])

    assert event.get_event_type() == StdEventType.UNKNOWN
    assert event.get_raw()["type"] == "unsupported"
